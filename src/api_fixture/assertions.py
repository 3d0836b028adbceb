"""
Assertions over the last HTTP exchange of a scenario.

Every function checks one property of the captured status code and raw body
and raises :class:`~api_fixture.errors.ResponseAssertionError` when it does
not hold. Failure messages embed the prettified response body.

Expected values arrive as step text. Values found in the response are compared
through :func:`~api_fixture.common.common.stringify`, so ``42`` matches ``"42"``.
"""

import json
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from api_fixture.common.common import clean_string, json_str, prettify_json, stringify
from api_fixture.errors import (
    PathNotFoundError,
    ResponseAssertionError,
    StepArgumentError,
    TemporalParseError,
)
from api_fixture.json_path import JsonNode, NodeKind, find_one, parse_document
from api_fixture.state import Exchange


def resolve_path(exchange: Exchange, path: str) -> JsonNode:
    """
    Resolve a dot-separated path in the response body.

    :param exchange: The exchange holding the response body.
    :param path: Path to resolve, e.g. ``data.user.name``.
    :returns: The first matching node.
    :raises PathNotFoundError: If nothing matches.
    :raises ResponseAssertionError: If the body is not JSON.
    """
    try:
        root = parse_document(exchange.body)
    except ValueError as err:
        raise ResponseAssertionError(
            f"response is not valid JSON ({err}): {prettify_json(exchange.body)}"
        ) from err

    node = find_one(root, path)
    if node is None:
        raise PathNotFoundError(path=path, body=prettify_json(exchange.body))
    return node


def _response_items(exchange: Exchange) -> list[Any]:
    try:
        items = json.loads(exchange.body)
    except ValueError as err:
        raise ResponseAssertionError(
            f"failed to unmarshal response into list: {err}"
        ) from err

    if not isinstance(items, list):
        raise ResponseAssertionError(
            f"failed to unmarshal response into list: {prettify_json(exchange.body)}"
        )
    return items


def _is_null(node: JsonNode) -> bool:
    """
    A scalar is null when its value is null; a container is null when none of
    its children holds a non-null value.
    """
    if not node.is_container:
        return node.kind is NodeKind.NULL
    return all(child.kind is NodeKind.NULL for child in node.children)


def _is_empty(node: JsonNode) -> bool:
    if node.is_container:
        return not node.children
    return node.kind is NodeKind.NULL or node.value == ""


def _parse_timestamp(value: str, label: str) -> datetime:
    """
    Parse an ISO 8601 date or timestamp. Values without an offset are read as
    local time.

    :raises TemporalParseError: If the value is not a timestamp.
    """
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError as err:
        raise TemporalParseError(f"failed to parse {label} time: {err}") from err

    if parsed.tzinfo is None:
        parsed = parsed.astimezone()
    return parsed


def _deep_equal(actual: Any, expected: Any) -> bool:
    """Structural equality which, unlike ``==``, does not treat ``True`` as ``1``."""
    if isinstance(actual, bool) or isinstance(expected, bool):
        return type(actual) is type(expected) and actual == expected
    if isinstance(actual, Mapping) and isinstance(expected, Mapping):
        return actual.keys() == expected.keys() and all(
            _deep_equal(actual[key], expected[key]) for key in actual
        )
    if isinstance(actual, list) and isinstance(expected, list):
        return len(actual) == len(expected) and all(
            _deep_equal(a, e) for a, e in zip(actual, expected, strict=True)
        )
    if isinstance(actual, (Mapping, list)) or isinstance(expected, (Mapping, list)):
        return False
    return bool(actual == expected)


def assert_status_code(exchange: Exchange, expected: int) -> None:
    if exchange.status_code != expected:
        raise ResponseAssertionError(
            f"expected status code {expected}, got {exchange.status_code}: "
            f"{prettify_json(exchange.body)}"
        )


def assert_not_empty(exchange: Exchange) -> None:
    if exchange.body == "":
        raise ResponseAssertionError("response is empty")


def assert_body_contains(exchange: Exchange, fragment: json_str) -> None:
    """
    Check the body contains ``fragment``, ignoring whitespace outside string
    literals on both sides.
    """
    actual = clean_string(exchange.body)
    expected = clean_string(fragment)

    if actual == "":
        raise ResponseAssertionError("response is empty")
    if expected not in actual:
        raise ResponseAssertionError(
            f"response does not contain {expected}, got {prettify_json(actual)}"
        )


def assert_body_matches(exchange: Exchange, fragment: json_str) -> None:
    """Check the raw body contains ``fragment`` verbatim."""
    if exchange.body == "":
        raise ResponseAssertionError("response is empty")
    if fragment not in exchange.body:
        raise ResponseAssertionError(
            f"response does not match {fragment}, got {exchange.body}"
        )


def assert_key_present(exchange: Exchange, key: str) -> None:
    actual = clean_string(exchange.body)
    if key not in actual:
        raise ResponseAssertionError(
            f"response does not contain {key}, got {prettify_json(exchange.body)}"
        )


def assert_key_absent(exchange: Exchange, key: str) -> None:
    actual = clean_string(exchange.body)
    if key in actual:
        raise ResponseAssertionError(
            f"response contains {key}, got {prettify_json(exchange.body)}"
        )


def assert_path_equals(exchange: Exchange, path: str, expected: str) -> None:
    node = resolve_path(exchange, path)
    if stringify(node.value) != expected:
        raise ResponseAssertionError(
            f"the json query path {path} does not contain {expected}: "
            f"{prettify_json(exchange.body)}"
        )


def assert_path_temporally_equals(exchange: Exchange, path: str, expected: str) -> None:
    """
    Check the value at ``path`` is the same instant as ``expected``.

    :raises TemporalParseError: If either side is not a timestamp.
    """
    node = resolve_path(exchange, path)

    actual_time = _parse_timestamp(stringify(node.value), "actual")
    expected_time = _parse_timestamp(expected, "expected")

    if actual_time != expected_time:
        raise ResponseAssertionError(
            f"the json query path {path} does not contain {expected}: "
            f"{prettify_json(exchange.body)}"
        )


def assert_path_is_null(exchange: Exchange, path: str) -> None:
    if not _is_null(resolve_path(exchange, path)):
        raise ResponseAssertionError(
            f"the json query path {path} does not contain a null value: "
            f"{prettify_json(exchange.body)}"
        )


def assert_path_is_not_null(exchange: Exchange, path: str) -> None:
    if _is_null(resolve_path(exchange, path)):
        raise ResponseAssertionError(
            f"the json query path {path} contains a null value: "
            f"{prettify_json(exchange.body)}"
        )


def assert_path_is_empty(exchange: Exchange, path: str) -> None:
    if not _is_empty(resolve_path(exchange, path)):
        raise ResponseAssertionError(
            f"the json query path {path} contains items: "
            f"{prettify_json(exchange.body)}"
        )


def assert_path_is_not_empty(exchange: Exchange, path: str) -> None:
    if _is_empty(resolve_path(exchange, path)):
        raise ResponseAssertionError(
            f"the json query path {path} does not contain any items: "
            f"{prettify_json(exchange.body)}"
        )


def assert_length(exchange: Exchange, expected: int) -> None:
    items = _response_items(exchange)
    if len(items) != expected:
        raise ResponseAssertionError(
            f"the response contains {len(items)} items, expected {expected}: "
            f"{prettify_json(exchange.body)}"
        )


def assert_path_length(exchange: Exchange, path: str, expected: int) -> None:
    node = resolve_path(exchange, path)
    if len(node.children) != expected:
        raise ResponseAssertionError(
            f"the json query path {path} does not contain {expected} items "
            f"(found {len(node.children)}): {prettify_json(exchange.body)}"
        )


def assert_item_with_property(exchange: Exchange, prop: str, expected: str) -> None:
    """Check some object in a list response has ``prop`` equal to ``expected``."""
    for item in _response_items(exchange):
        if isinstance(item, Mapping) and stringify(item.get(prop)) == expected:
            return

    raise ResponseAssertionError(
        f"no item found with {prop} set to {expected}: {prettify_json(exchange.body)}"
    )


def assert_item_at_index_with_property(
    exchange: Exchange, index: int, prop: str, expected: str
) -> None:
    items = _response_items(exchange)

    if not 0 <= index < len(items):
        raise ResponseAssertionError(
            f"not enough items in response to get item at index {index}, "
            f"found {len(items)}"
        )

    item = items[index]
    if not isinstance(item, Mapping):
        raise ResponseAssertionError(
            f"item at index {index} is not an object: {stringify(item)}"
        )

    actual = stringify(item.get(prop))
    if actual != expected:
        raise ResponseAssertionError(
            f"item at index {index} does not have {prop} set to {expected}, "
            f"found {actual}"
        )


def assert_path_contains_items(
    exchange: Exchange, path: str, expected_items: json_str
) -> None:
    """
    Check the list at ``path`` contains every element of a JSON array.

    :raises StepArgumentError: If ``expected_items`` is not a JSON array.
    """
    node = resolve_path(exchange, path)

    if node.kind is NodeKind.NULL:
        raise ResponseAssertionError(
            f"item not found in response: {prettify_json(exchange.body)}"
        )

    try:
        expected = json.loads(expected_items)
    except ValueError as err:
        raise StepArgumentError(f"expected items is not a list: {err}") from err
    if not isinstance(expected, list):
        raise StepArgumentError("expected items is not a list")

    if node.kind is not NodeKind.LIST:
        raise ResponseAssertionError(f"response item {path} is not a list")

    for expected_item in expected:
        if not any(_deep_equal(actual, expected_item) for actual in node.value):
            raise ResponseAssertionError(
                f"response item does not contain {stringify(expected_item)}, "
                f"got {stringify(node.value)}"
            )
