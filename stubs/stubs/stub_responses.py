"""
Canned :class:`requests.Response` objects and a fake session for unit tests
that exercise the step library without a server.
"""

import json
from typing import Any

import requests
from requests import PreparedRequest, Response
from requests.structures import CaseInsensitiveDict

from api_fixture.common.common import json_str


def create_response(
    status_code: int,
    content: bytes,
    headers: dict[str, str] | None = None,
    reason: str = "",
) -> Response:
    """
    Create a :class:`requests.Response` object for the stub.

    :param status_code: HTTP status code.
    :param content: Response body as bytes.
    :param headers: Response headers dictionary.
    :param reason: HTTP reason phrase (e.g., "OK", "Not Found").
    :return: A :class:`requests.Response` instance.
    """
    response = Response()
    response.status_code = status_code
    response.headers = CaseInsensitiveDict(headers or {})
    response._content = content  # noqa: SLF001
    response.reason = reason
    response.encoding = "utf-8"
    return response


def json_response(status_code: int, body: Any) -> Response:
    """Create a JSON response from a Python value."""
    return create_response(
        status_code=status_code,
        content=json.dumps(body).encode("utf-8"),
        headers={"Content-Type": "application/json"},
    )


def text_response(status_code: int, body: json_str) -> Response:
    """Create a response whose body is exactly ``body``."""
    return create_response(status_code=status_code, content=body.encode("utf-8"))


class StubSession(requests.Session):
    """
    A :class:`requests.Session` which never touches the network.

    Responses queued with :meth:`queue` are returned in order; every prepared
    request that is sent is recorded in :attr:`sent`.
    """

    def __init__(self) -> None:
        super().__init__()
        self.sent: list[PreparedRequest] = []
        self.timeouts: list[Any] = []
        self._responses: list[Response | Exception] = []

    def queue(self, *responses: Response | Exception) -> "StubSession":
        self._responses.extend(responses)
        return self

    def send(self, request: PreparedRequest, **kwargs: Any) -> Response:  # type: ignore[override]
        self.sent.append(request)
        self.timeouts.append(kwargs.get("timeout"))

        if not self._responses:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")

        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response

        response.request = request
        response.url = str(request.url)
        return response
