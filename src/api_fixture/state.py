"""
Per-scenario memory: saved values, the replacement overlay and the last
HTTP exchange.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import requests

from api_fixture.common.common import json_str
from api_fixture.errors import StepArgumentError


@dataclass
class Exchange:
    """
    The most recent request/response pair.

    :param request: The prepared request as it was sent.
    :param status_code: HTTP status code of the response.
    :param headers: Response headers.
    :param body: Raw response body text.
    """

    request: requests.PreparedRequest
    status_code: int
    headers: Mapping[str, str]
    body: json_str


@dataclass
class Envelope:
    """
    Cross-cutting fields decoded from any JSON response body.
    """

    token: str | None = None

    @classmethod
    def decode(cls, body: json_str, token_field: str = "token") -> Envelope:
        """
        Decode the envelope fields from a response body.

        Bodies that are not JSON objects, and token fields that are not
        non-empty strings, decode to an empty envelope.
        """
        try:
            document = json.loads(body)
        except ValueError:
            return cls()

        if not isinstance(document, dict):
            return cls()

        token = document.get(token_field)
        if isinstance(token, str) and token:
            return cls(token=token)
        return cls()


@dataclass
class ScenarioState:
    """
    Everything a scenario accumulates between steps.

    A fresh instance is created (or :meth:`reset` is called) before every
    scenario, so nothing observed in one scenario is visible to the next.
    """

    static_replacements: Mapping[str, Any] = field(default_factory=dict)
    replacements: dict[str, Any] = field(init=False)
    store: dict[str, Any] = field(default_factory=dict)
    exchange: Exchange | None = None
    auth_token: str | None = None

    def __post_init__(self) -> None:
        self.replacements = dict(self.static_replacements)

    def reset(self) -> None:
        """Forget everything except the static replacement table."""
        self.replacements.clear()
        self.replacements.update(self.static_replacements)
        self.store.clear()
        self.exchange = None
        self.auth_token = None

    def save(self, key: str, value: Any) -> None:
        self.store[key] = value

    def record(self, exchange: Exchange, envelope: Envelope) -> None:
        """
        Remember a completed exchange.

        A token found in the envelope replaces the current bearer token. A
        response without one leaves the current token in place.
        """
        self.exchange = exchange
        if envelope.token:
            self.auth_token = envelope.token

    @property
    def last_exchange(self) -> Exchange:
        """
        :raises StepArgumentError: If no request has been sent in this scenario.
        """
        if self.exchange is None:
            raise StepArgumentError("no request has been sent in this scenario")
        return self.exchange
