"""
Scenario-scoped entry point for the step library.

An :class:`ApiFixture` owns all state for one scenario: the saved values, the
replacement overlay, the last exchange and the bearer token. Runner adapters
create one per scenario (or call :meth:`ApiFixture.reset`) and route every step
to one of its handler methods, as listed in
:data:`~api_fixture.step_patterns.STEP_PATTERNS`.
"""

import logging
import random
from typing import Any

import requests

from api_fixture import assertions
from api_fixture.common.common import json_str
from api_fixture.config import Settings
from api_fixture.errors import ResponseAssertionError, StepArgumentError
from api_fixture.interpolation import Interpolator
from api_fixture.request_builder import RequestBuilder
from api_fixture.state import Envelope, Exchange, ScenarioState

logger = logging.getLogger(__name__)


def _to_int(value: int | str, name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as err:
        raise StepArgumentError(f"{name} must be an integer, got {value!r}") from err


class ApiFixture:
    """
    Handlers for the step vocabulary, bound to one scenario's state.

    Integer step arguments are accepted as text, as captured by step
    patterns, and converted here.
    """

    def __init__(
        self,
        settings: Settings,
        session: requests.Session | None = None,
        *,
        rng: random.Random | None = None,
    ) -> None:
        """
        :param settings: Session settings.
        :param session: HTTP session; a new one is created if not given.
        :param rng: Random source for ``${random_id}``.
        """
        self.settings = settings
        self.state = ScenarioState(static_replacements=settings.replacements)
        self.interpolator = Interpolator(
            self.state.replacements, self.state.store, rng=rng
        )
        self.builder = RequestBuilder(settings, self.interpolator, session)

    def reset(self) -> None:
        """Discard everything the previous scenario accumulated."""
        self.state.reset()

    def close(self) -> None:
        self.builder.session.close()

    def replace_values(self, text: str) -> str:
        return self.interpolator.interpolate(text)

    @property
    def exchange(self) -> Exchange:
        return self.state.last_exchange

    # --------------- requests -----------------

    def do(
        self,
        method: str,
        endpoint: str,
        *,
        body: json_str | None = None,
        params: json_str | None = None,
    ) -> Exchange:
        """
        Build, send and record a request.

        :returns: The recorded exchange.
        """
        prepared = self.builder.build(
            method,
            endpoint,
            body=body,
            params=params,
            auth_token=self.state.auth_token,
        )
        response = self.builder.send(prepared)

        exchange = Exchange(
            request=prepared,
            status_code=response.status_code,
            headers=dict(response.headers),
            body=response.text,
        )
        self.state.record(
            exchange, Envelope.decode(exchange.body, self.settings.token_field)
        )
        return exchange

    def send_request(self, method: str, endpoint: str) -> None:
        self.do(method, endpoint)

    def send_request_with_data(self, method: str, endpoint: str, body: json_str) -> None:
        self.do(method, endpoint, body=body)

    def send_request_with_params(
        self, method: str, endpoint: str, params: json_str
    ) -> None:
        self.do(method, endpoint, params=params)

    # --------------- status and content -----------------

    def the_response_code_should_be(self, status_code: int | str) -> None:
        assertions.assert_status_code(
            self.exchange, _to_int(status_code, "status code")
        )

    def the_response_should_not_be_empty(self) -> None:
        assertions.assert_not_empty(self.exchange)

    def the_response_should_match_json(self, body: json_str) -> None:
        assertions.assert_body_matches(self.exchange, body)

    def the_response_should_contain(self, body: json_str) -> None:
        assertions.assert_body_contains(self.exchange, body)

    def the_response_should_contain_a(self, key: str) -> None:
        assertions.assert_key_present(self.exchange, self.replace_values(key))

    def the_response_should_not_contain_a(self, key: str) -> None:
        assertions.assert_key_absent(self.exchange, key)

    # --------------- json paths -----------------

    def the_response_should_contain_items(self, path: str, items: json_str) -> None:
        assertions.assert_path_contains_items(
            self.exchange, self.replace_values(path), items
        )

    def the_response_should_contain_set_to(self, path: str, value: str) -> None:
        assertions.assert_path_equals(self.exchange, path, self.replace_values(value))

    def the_response_should_contain_a_time_set_to(self, path: str, value: str) -> None:
        assertions.assert_path_temporally_equals(
            self.exchange, path, self.replace_values(value)
        )

    def the_response_should_contain_null(self, path: str) -> None:
        assertions.assert_path_is_null(self.exchange, path)

    def the_response_should_contain_not_null(self, path: str) -> None:
        assertions.assert_path_is_not_null(self.exchange, path)

    def the_response_should_contain_empty(self, path: str) -> None:
        assertions.assert_path_is_empty(self.exchange, path)

    def the_response_should_contain_not_empty(self, path: str) -> None:
        assertions.assert_path_is_not_empty(self.exchange, path)

    def the_response_should_contain_with_length(
        self, path: str, length: int | str
    ) -> None:
        assertions.assert_path_length(self.exchange, path, _to_int(length, "length"))

    # --------------- lists -----------------

    def the_response_should_have_length(self, length: int | str) -> None:
        assertions.assert_length(self.exchange, _to_int(length, "length"))

    def the_response_contains_item_with(self, prop: str, value: str) -> None:
        assertions.assert_item_with_property(
            self.exchange, prop, self.replace_values(value)
        )

    def the_response_contains_item_at_index(
        self, index: int | str, prop: str, value: str
    ) -> None:
        assertions.assert_item_at_index_with_property(
            self.exchange, _to_int(index, "index"), prop, self.replace_values(value)
        )

    # --------------- saved values -----------------

    def save_value_from_response(self, key: str) -> None:
        """Store the value at path ``key`` under the name ``key``."""
        node = assertions.resolve_path(self.exchange, key)
        self.state.save(key, node.value)
        logger.debug("Saved %s = %r", key, node.value)

    def save_value_from_response_list(
        self, index: int | str, key: str, alias: str
    ) -> None:
        """Store the ``index``-th child of the node at path ``key`` as ``alias``."""
        position = _to_int(index, "index")
        node = assertions.resolve_path(self.exchange, key)

        if not 0 <= position < len(node.children):
            raise ResponseAssertionError(
                f"not enough items in response to get item at index {position}, "
                f"found {len(node.children)}"
            )

        value: Any = node.children[position].value
        self.state.save(alias, value)
        logger.debug("Saved %s = %r", alias, value)

    def set_replacement(self, key: str, value: str) -> None:
        self.state.replacements[key] = value
