"""Integration tests driving :class:`ApiFixture` against the stub API over HTTP."""

from collections.abc import Generator

import pytest

from api_fixture import ApiFixture, Settings
from api_fixture.errors import PathNotFoundError, ResponseAssertionError, TransportError


@pytest.fixture
def api(live_settings: Settings) -> Generator[ApiFixture, None, None]:
    fixture = ApiFixture(live_settings)
    yield fixture
    fixture.close()


class TestStubApiIntegration:
    """End-to-end request and assertion flows."""

    def test_health_check(self, api: ApiFixture) -> None:
        api.send_request("GET", "health")

        api.the_response_code_should_be("200")
        api.the_response_should_not_be_empty()
        api.the_response_should_contain_set_to("status", "healthy")

    def test_unknown_user_returns_404_with_body(self, api: ApiFixture) -> None:
        api.send_request("GET", "users/999")

        with pytest.raises(ResponseAssertionError) as excinfo:
            api.the_response_code_should_be("200")

        assert "expected status code 200, got 404" in str(excinfo.value)
        assert '"error": "user not found"' in str(excinfo.value)

    def test_user_fields(self, api: ApiFixture) -> None:
        api.send_request("GET", "users/1")

        api.the_response_code_should_be("200")
        api.the_response_should_contain_set_to("name", "${admin_name}")
        api.the_response_should_contain_set_to("id", "1")
        api.the_response_should_contain_null("manager")
        api.the_response_should_contain_items("tags", '["staff"]')
        api.the_response_should_contain_a_time_set_to(
            "created_at", "2024-01-15T10:30:00+00:00"
        )

    def test_missing_path_is_reported(self, api: ApiFixture) -> None:
        api.send_request("GET", "users/1")

        with pytest.raises(PathNotFoundError, match="'age' not found in response"):
            api.the_response_should_contain_set_to("age", "30")

    def test_list_and_query_params(self, api: ApiFixture) -> None:
        api.send_request_with_params("GET", "users", '{"name": "Bob"}')

        api.the_response_code_should_be("200")
        api.the_response_should_have_length("1")
        api.the_response_contains_item_at_index("0", "name", "Bob")
        api.the_response_should_contain_set_to("manager.name", "Alice")

    def test_login_token_is_used_for_authorised_requests(self, api: ApiFixture) -> None:
        api.send_request("POST", "users")
        api.the_response_code_should_be("401")

        api.send_request_with_data(
            "POST", "login", '{"username": "tester", "password": "secret"}'
        )
        api.the_response_code_should_be("200")

        api.send_request("GET", "echo")
        api.the_response_should_contain_set_to(
            "authorization", "Bearer stub-token-tester"
        )

    def test_create_save_and_fetch_user(self, api: ApiFixture) -> None:
        api.send_request_with_data("POST", "login", '{"username": "tester"}')

        api.send_request_with_data(
            "POST", "users", '{"name": "user-${random_id}", "tags": ["new"]}'
        )
        api.the_response_code_should_be("201")
        api.save_value_from_response("id")
        api.save_value_from_response("name")

        api.send_request("GET", "users/${id}")
        api.the_response_code_should_be("200")
        api.the_response_should_contain_set_to("name", "${name}")

        api.send_request("DELETE", "users/${id}")
        api.the_response_code_should_be("204")

    def test_echo_returns_interpolated_body(self, api: ApiFixture) -> None:
        api.send_request_with_data("POST", "echo", '{"today": "${today}"}')

        api.the_response_should_contain_set_to("content_type", "application/json")
        api.the_response_should_contain_not_empty("body.today")

    def test_connection_failure_is_a_transport_error(self) -> None:
        # Port 9 (discard) is not expected to have an HTTP server listening.
        api = ApiFixture(Settings(lifecycle="local", port=9, timeout=1))

        with pytest.raises(TransportError, match="failed to make request GET"):
            api.send_request("GET", "health")

        api.close()
