"""Pytest configuration and shared fixtures for tests against the stub API."""

import pytest
from stubs.stub_api import start_stub_api

from api_fixture.config import Settings


@pytest.fixture(scope="module")
def stub_api_port() -> int:
    """Start the stub API for the module and return its port."""
    return start_stub_api()


@pytest.fixture
def live_settings(stub_api_port: int) -> Settings:
    """Settings pointing the step library at the running stub API."""
    return Settings(
        lifecycle="local",
        port=stub_api_port,
        timeout=5,
        replacements={"admin_name": "Alice"},
    )
