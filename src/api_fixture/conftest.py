"""Pytest configuration and shared fixtures for step library unit tests."""

import random
from datetime import date

import pytest
from stubs.stub_responses import StubSession

from api_fixture.config import Settings
from api_fixture.fixture import ApiFixture
from api_fixture.interpolation import Interpolator


@pytest.fixture
def settings() -> Settings:
    return Settings(lifecycle="local", port=8080, replacements={"tenant": "acme"})


@pytest.fixture
def stub_session() -> StubSession:
    return StubSession()


@pytest.fixture
def api(settings: Settings, stub_session: StubSession) -> ApiFixture:
    return ApiFixture(settings, session=stub_session, rng=random.Random(7))


@pytest.fixture
def interpolator() -> Interpolator:
    return Interpolator(
        {"tenant": "acme"},
        {},
        rng=random.Random(7),
        today=lambda: date(2024, 3, 9),
    )
