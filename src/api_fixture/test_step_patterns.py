"""
Unit tests for :mod:`api_fixture.step_patterns`.
"""

import inspect
import re

import pytest

from api_fixture import step_patterns as patterns
from api_fixture.fixture import ApiFixture
from api_fixture.step_patterns import STEP_PATTERNS, StepPattern

SAMPLE_STEPS = {
    patterns.SEND_REQUEST: 'I send "GET" request to "users/${id}"',
    patterns.SEND_REQUEST_WITH_DATA: 'I send "POST" request to "users" with data',
    patterns.SEND_REQUEST_WITH_PARAMS: 'I send "GET" request to "users" with params',
    patterns.RESPONSE_CODE: "the response code should be 201",
    patterns.NOT_EMPTY: "the response should not be empty",
    patterns.MATCH_JSON: "the response should match json",
    patterns.CONTAIN: "the response should contain",
    patterns.CONTAIN_KEY: 'the response should contain a "token"',
    patterns.CONTAIN_KEY_DOCSTRING: "the response should contain a",
    patterns.CONTAIN_ITEMS: 'the response should contain a "tags" that contains items',
    patterns.NOT_CONTAIN_KEY: 'the response should not contain a "password"',
    patterns.SET_TO: 'the response should contain a "data.name" set to "John"',
    patterns.TEMPORALLY_EQUAL: (
        'the response should contain a "created_at" temporally equal to "${today}"'
    ),
    patterns.ITEM_AT_INDEX: (
        'the response should contain an item at index 0 with "id" set to "1"'
    ),
    patterns.ITEM_WITH: 'the response should contain an item with "name" set to "Bob"',
    patterns.IS_NULL: 'the response should contain a "manager" that is null',
    patterns.IS_NOT_NULL: 'the response should contain a "manager" that is not null',
    patterns.IS_EMPTY: 'the response should contain a "tags" that is empty',
    patterns.IS_NOT_EMPTY: 'the response should contain a "tags" that is not empty',
    patterns.LENGTH: "the response should have a length of 2",
    patterns.PATH_LENGTH: 'the response should contain a "data" with length 2',
    patterns.SAVE: 'I save "data.id" from the response',
    patterns.SAVE_LIST_ITEM: 'I save the item at index 1 in "data" as "second"',
    patterns.SET_REPLACEMENT: 'I set the replacement "tenant" to "acme"',
}


def _ids(entry: StepPattern) -> str:
    return entry.handler


def test_every_pattern_has_a_sample() -> None:
    assert {entry.pattern for entry in STEP_PATTERNS} == set(SAMPLE_STEPS)


@pytest.mark.parametrize("entry", STEP_PATTERNS, ids=_ids)
def test_sample_matches_only_its_own_pattern(entry: StepPattern) -> None:
    sample = SAMPLE_STEPS[entry.pattern]

    matching = [
        other.pattern for other in STEP_PATTERNS if re.fullmatch(other.pattern, sample)
    ]

    assert matching == [entry.pattern]


@pytest.mark.parametrize("entry", STEP_PATTERNS, ids=_ids)
def test_groups_are_named_after_handler_parameters(entry: StepPattern) -> None:
    handler = getattr(ApiFixture, entry.handler)
    parameters = list(inspect.signature(handler).parameters)[1:]
    groups = list(re.compile(entry.pattern).groupindex)

    if entry.docstring:
        assert parameters[: len(groups)] == groups
        assert len(parameters) == len(groups) + 1
    else:
        assert parameters == groups


@pytest.mark.parametrize(
    "step",
    [
        'I send "PUT" request to "users"',
        'I send "GET" request to "users" with data',
        "the response code should be ok",
        'the response should contain a "unterminated',
    ],
)
def test_unsupported_steps_match_nothing(step: str) -> None:
    assert not any(re.fullmatch(entry.pattern, step) for entry in STEP_PATTERNS)
