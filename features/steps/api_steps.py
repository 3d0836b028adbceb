"""Registers the step library's vocabulary with behave."""

import api_fixture.steps  # noqa: F401
