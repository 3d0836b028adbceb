"""Behave environment hooks for the step library.

Re-export these hooks from a project's ``features/environment.py``::

    from api_fixture.environment import after_scenario, before_all, before_scenario

Settings are read once in :func:`before_all`, using ``-D name=value`` user data
as the highest-precedence source. Each scenario then gets its own
:class:`~api_fixture.fixture.ApiFixture` on ``context.api``.
"""

import logging
from typing import Any

from api_fixture.config import load_settings
from api_fixture.fixture import ApiFixture
from api_fixture.logging_setup import configure_logging

logger = logging.getLogger(__name__)


def before_all(context: Any) -> None:
    """Resolve settings and configure logging before any feature runs.

    Args:
        context: Behave context object available to all tests
    """
    settings = load_settings(context.config.userdata)
    configure_logging(settings.debug)

    context.api_settings = settings
    logger.info(
        "Running against lifecycle '%s' (debug=%s)", settings.lifecycle, settings.debug
    )


def before_scenario(context: Any, scenario: Any) -> None:
    """Give the scenario a fresh fixture.

    Args:
        context: Behave context object
        scenario: The scenario about to run
    """
    context.api = ApiFixture(context.api_settings)
    logger.debug("Starting scenario: %s", scenario.name)


def after_scenario(context: Any, scenario: Any) -> None:
    """Release the scenario's HTTP session.

    Args:
        context: Behave context object
        scenario: The scenario that just ran
    """
    api = getattr(context, "api", None)
    if api is not None:
        api.close()
