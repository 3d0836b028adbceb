"""
Provides the scenario bindings for the users feature file.
"""

import pytest
from pytest_bdd import scenarios

from api_fixture.config import Settings
from api_fixture.pytest_steps import *  # noqa: F403 - Required to import all library steps.

scenarios("../features/users.feature")


@pytest.fixture
def api_settings(live_settings: Settings) -> Settings:
    """Point the library steps at the stub API started for this module."""
    return live_settings
