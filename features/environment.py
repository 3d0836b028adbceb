"""Behave environment setup for running the step library against the stub API.

Run from the repository root with the stubs on the path::

    PYTHONPATH=stubs behave

Pass ``-D port=<port>`` to target an API that is already running instead.
"""

from typing import Any

from stubs.stub_api import start_stub_api

from api_fixture import environment
from api_fixture.environment import after_scenario, before_scenario

__all__ = ["after_scenario", "before_all", "before_scenario"]


def before_all(context: Any) -> None:
    """Start the stub API unless a port was given, then resolve settings.

    Args:
        context: Behave context object available to all tests
    """
    userdata = context.config.userdata
    if "port" not in userdata:
        userdata["port"] = str(start_stub_api())
    userdata.setdefault("lifecycle", "local")

    environment.before_all(context)
