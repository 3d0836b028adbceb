"""
pytest-bdd step definitions and fixtures for the step library.

Bind feature files in a test module and import the steps into it::

    from pytest_bdd import scenarios

    from api_fixture.pytest_steps import *  # noqa: F403

    scenarios("features/users.feature")

Override the ``api_settings`` fixture to point the steps at a different
deployment. Each test gets its own :class:`~api_fixture.fixture.ApiFixture`,
so scenarios never share state.
"""

from collections.abc import Generator

import pytest
from pytest_bdd import parsers, step

from api_fixture import step_patterns as patterns
from api_fixture.config import Settings, load_settings
from api_fixture.fixture import ApiFixture


@pytest.fixture
def api_settings() -> Settings:
    return load_settings()


@pytest.fixture
def api(api_settings: Settings) -> Generator[ApiFixture, None, None]:
    fixture = ApiFixture(api_settings)
    yield fixture
    fixture.close()


@step(parsers.re(patterns.SEND_REQUEST))
def send_request(api: ApiFixture, method: str, endpoint: str) -> None:
    api.send_request(method, endpoint)


@step(parsers.re(patterns.SEND_REQUEST_WITH_DATA))
def send_request_with_data(
    api: ApiFixture, method: str, endpoint: str, docstring: str
) -> None:
    api.send_request_with_data(method, endpoint, docstring)


@step(parsers.re(patterns.SEND_REQUEST_WITH_PARAMS))
def send_request_with_params(
    api: ApiFixture, method: str, endpoint: str, docstring: str
) -> None:
    api.send_request_with_params(method, endpoint, docstring)


@step(parsers.re(patterns.RESPONSE_CODE))
def response_code(api: ApiFixture, status_code: str) -> None:
    api.the_response_code_should_be(status_code)


@step(parsers.re(patterns.NOT_EMPTY))
def response_not_empty(api: ApiFixture) -> None:
    api.the_response_should_not_be_empty()


@step(parsers.re(patterns.MATCH_JSON))
def response_matches_json(api: ApiFixture, docstring: str) -> None:
    api.the_response_should_match_json(docstring)


@step(parsers.re(patterns.CONTAIN))
def response_contains(api: ApiFixture, docstring: str) -> None:
    api.the_response_should_contain(docstring)


@step(parsers.re(patterns.CONTAIN_KEY))
def response_contains_key(api: ApiFixture, key: str) -> None:
    api.the_response_should_contain_a(key)


@step(parsers.re(patterns.CONTAIN_KEY_DOCSTRING))
def response_contains_key_from_docstring(api: ApiFixture, docstring: str) -> None:
    api.the_response_should_contain_a(docstring)


@step(parsers.re(patterns.CONTAIN_ITEMS))
def response_contains_items(api: ApiFixture, path: str, docstring: str) -> None:
    api.the_response_should_contain_items(path, docstring)


@step(parsers.re(patterns.NOT_CONTAIN_KEY))
def response_does_not_contain_key(api: ApiFixture, key: str) -> None:
    api.the_response_should_not_contain_a(key)


@step(parsers.re(patterns.SET_TO))
def response_path_set_to(api: ApiFixture, path: str, value: str) -> None:
    api.the_response_should_contain_set_to(path, value)


@step(parsers.re(patterns.TEMPORALLY_EQUAL))
def response_path_temporally_equal(api: ApiFixture, path: str, value: str) -> None:
    api.the_response_should_contain_a_time_set_to(path, value)


@step(parsers.re(patterns.ITEM_AT_INDEX))
def response_item_at_index(
    api: ApiFixture, index: str, prop: str, value: str
) -> None:
    api.the_response_contains_item_at_index(index, prop, value)


@step(parsers.re(patterns.ITEM_WITH))
def response_item_with(api: ApiFixture, prop: str, value: str) -> None:
    api.the_response_contains_item_with(prop, value)


@step(parsers.re(patterns.IS_NULL))
def response_path_is_null(api: ApiFixture, path: str) -> None:
    api.the_response_should_contain_null(path)


@step(parsers.re(patterns.IS_NOT_NULL))
def response_path_is_not_null(api: ApiFixture, path: str) -> None:
    api.the_response_should_contain_not_null(path)


@step(parsers.re(patterns.IS_EMPTY))
def response_path_is_empty(api: ApiFixture, path: str) -> None:
    api.the_response_should_contain_empty(path)


@step(parsers.re(patterns.IS_NOT_EMPTY))
def response_path_is_not_empty(api: ApiFixture, path: str) -> None:
    api.the_response_should_contain_not_empty(path)


@step(parsers.re(patterns.LENGTH))
def response_length(api: ApiFixture, length: str) -> None:
    api.the_response_should_have_length(length)


@step(parsers.re(patterns.PATH_LENGTH))
def response_path_length(api: ApiFixture, path: str, length: str) -> None:
    api.the_response_should_contain_with_length(path, length)


@step(parsers.re(patterns.SAVE))
def save_value(api: ApiFixture, key: str) -> None:
    api.save_value_from_response(key)


@step(parsers.re(patterns.SAVE_LIST_ITEM))
def save_list_item(api: ApiFixture, index: str, key: str, alias: str) -> None:
    api.save_value_from_response_list(index, key, alias)


@step(parsers.re(patterns.SET_REPLACEMENT))
def set_replacement(api: ApiFixture, key: str, value: str) -> None:
    api.set_replacement(key, value)
