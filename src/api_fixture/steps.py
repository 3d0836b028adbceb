"""
Behave step definitions for the step library.

Import this module from a project's ``features/steps/`` package to register
the whole vocabulary::

    # features/steps/api_steps.py
    import api_fixture.steps  # noqa: F401

The hooks in :mod:`api_fixture.environment` must also be installed so that
every scenario gets a fresh ``context.api``.
"""

from collections.abc import Callable
from typing import Any

from behave import step, use_step_matcher

from api_fixture.errors import StepArgumentError
from api_fixture.step_patterns import STEP_PATTERNS, StepPattern


def _behave_pattern(pattern: str) -> str:
    # behave's "re" matcher anchors expressions itself and rejects ^ and $.
    return pattern.removeprefix("^").removesuffix("$")


def _make_step(entry: StepPattern) -> Callable[..., None]:
    """
    Create a behave step function which routes a step to its handler on
    ``context.api``. Named groups are passed in pattern order, followed by the
    doc string for steps that take one.
    """

    def run_step(context: Any, **groups: str) -> None:
        handler = getattr(context.api, entry.handler)
        args = list(groups.values())

        if entry.docstring:
            if context.text is None:
                raise StepArgumentError(f"step '{entry.pattern}' requires a doc string")
            args.append(context.text)

        handler(*args)

    run_step.__name__ = f"step_{entry.handler}"
    run_step.__doc__ = entry.pattern
    return run_step


use_step_matcher("re")

for _entry in STEP_PATTERNS:
    step(_behave_pattern(_entry.pattern))(_make_step(_entry))

use_step_matcher("parse")
