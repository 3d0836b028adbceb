"""Gherkin step library for exercising JSON HTTP APIs."""

from api_fixture.config import Settings, load_settings
from api_fixture.errors import (
    ConfigurationError,
    FixtureError,
    PathNotFoundError,
    RequestConstructionError,
    ResponseAssertionError,
    StepArgumentError,
    TemporalParseError,
    TransportError,
)
from api_fixture.fixture import ApiFixture

__all__ = [
    "ApiFixture",
    "ConfigurationError",
    "FixtureError",
    "PathNotFoundError",
    "RequestConstructionError",
    "ResponseAssertionError",
    "Settings",
    "StepArgumentError",
    "TemporalParseError",
    "TransportError",
    "load_settings",
]
