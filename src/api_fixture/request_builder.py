"""
Module: api_fixture.request_builder

Builds and sends the HTTP requests described by request steps.

The target host is decided by the configured lifecycle:

    local       -> http://localhost:{port}/api/{endpoint}
    prod        -> https://{app_domain}/api/{endpoint}
    <anything>  -> https://{lifecycle}.{app_domain}/api/{endpoint}

Request bodies, query parameters and endpoints are passed through the
scenario's :class:`~api_fixture.interpolation.Interpolator` before use.
"""

import json
import logging

import requests

from api_fixture.common.common import json_str, prettify_json, stringify
from api_fixture.config import LOCAL_LIFECYCLE, PROD_LIFECYCLE, Settings
from api_fixture.errors import RequestConstructionError, TransportError
from api_fixture.interpolation import Interpolator

logger = logging.getLogger(__name__)

ALLOWED_METHODS = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE"})
API_ROOT = "api"


def format_url(settings: Settings, endpoint: str) -> str:
    """
    Resolve an endpoint path to a full URL for the configured lifecycle.

    :param settings: Session settings providing lifecycle, domain and port.
    :param endpoint: Endpoint path below the API root, e.g. ``users/7``.
    :returns: The absolute URL.
    """
    if settings.lifecycle == LOCAL_LIFECYCLE:
        scheme = "http"
        host = f"localhost:{settings.port}"
    elif settings.lifecycle == PROD_LIFECYCLE:
        scheme = "https"
        host = settings.app_domain
    else:
        scheme = "https"
        host = f"{settings.lifecycle}.{settings.app_domain}"

    return f"{scheme}://{host}/{API_ROOT}/{endpoint.lstrip('/')}"


class RequestBuilder:
    """
    Turns request step parameters into prepared requests and sends them.

    Usage:

        builder = RequestBuilder(settings, interpolator)
        prepared = builder.build("POST", "users", body='{"name": "${name}"}')
        response = builder.send(prepared)
    """

    def __init__(
        self,
        settings: Settings,
        interpolator: Interpolator,
        session: requests.Session | None = None,
    ) -> None:
        """
        :param settings: Session settings.
        :param interpolator: Resolves placeholders in bodies, params and endpoints.
        :param session: HTTP session to send requests through; a new one is
            created if not given.
        """
        self.settings = settings
        self.interpolator = interpolator
        self.session = session or requests.Session()

    def _build_headers(
        self, *, has_body: bool, auth_token: str | None
    ) -> dict[str, str]:
        headers = {"Accept": "application/json"}

        if auth_token:
            headers["Authorization"] = f"Bearer {auth_token}"

        if has_body:
            headers["Content-Type"] = "application/json"

        return headers

    def _parse_params(self, params: json_str) -> list[tuple[str, str]]:
        """
        Decode a JSON object of query parameters into key/value pairs.

        :raises RequestConstructionError: If the text is not a JSON object.
        """
        try:
            decoded = json.loads(self.interpolator.interpolate(params))
        except ValueError as err:
            raise RequestConstructionError(f"failed to unmarshal params: {err}") from err

        if not isinstance(decoded, dict):
            raise RequestConstructionError(
                f"params must be a JSON object, got {type(decoded).__name__}"
            )

        return [(key, stringify(value)) for key, value in decoded.items()]

    def build(
        self,
        method: str,
        endpoint: str,
        *,
        body: json_str | None = None,
        params: json_str | None = None,
        auth_token: str | None = None,
    ) -> requests.PreparedRequest:
        """
        Build a prepared request.

        :param method: One of GET, POST, PUT, PATCH or DELETE.
        :param endpoint: Endpoint path below the API root.
        :param body: Raw JSON request body.
        :param params: JSON object of query parameters.
        :param auth_token: Bearer token to send, if any.
        :returns: The prepared request.
        :raises RequestConstructionError: If the method is not supported, the
            params are malformed or the request cannot be prepared.
        """
        method = method.upper()
        if method not in ALLOWED_METHODS:
            raise RequestConstructionError(f"unsupported HTTP method: {method}")

        url = format_url(self.settings, self.interpolator.interpolate(endpoint))

        data = None
        if body is not None:
            data = self.interpolator.interpolate(body)
            logger.info("REQUEST BODY: %s", data)

        request = requests.Request(
            method=method,
            url=url,
            headers=self._build_headers(
                has_body=data is not None, auth_token=auth_token
            ),
            params=self._parse_params(params) if params is not None else None,
            data=data.encode("utf-8") if data is not None else None,
        )

        try:
            return self.session.prepare_request(request)
        except (requests.RequestException, ValueError) as err:
            raise RequestConstructionError(f"failed to create request: {err}") from err

    def send(self, prepared: requests.PreparedRequest) -> requests.Response:
        """
        Send a prepared request.

        :param prepared: Request returned by :meth:`build`.
        :returns: The response, whatever its status code.
        :raises TransportError: If no response was received.
        """
        logger.debug("Sending %s %s", prepared.method, prepared.url)

        try:
            response = self.session.send(prepared, timeout=self.settings.timeout)
        except requests.RequestException as err:
            raise TransportError(
                method=str(prepared.method), url=str(prepared.url), reason=str(err)
            ) from err

        logger.debug("Received %s from %s", response.status_code, prepared.url)
        logger.info("HTTP RESPONSE BODY: %s", prettify_json(response.text))

        return response
