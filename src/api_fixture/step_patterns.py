"""
The step vocabulary: regular expressions for every supported step, each bound
to the :class:`~api_fixture.fixture.ApiFixture` method that handles it.

Groups are named after the handler's parameters so the same expressions work
with behave's ``re`` matcher and pytest-bdd's ``parsers.re``. Steps which take
a doc string receive it as their last handler argument.
"""

from typing import NamedTuple

SEND_REQUEST = r'^I send "(?P<method>GET|POST|DELETE)" request to "(?P<endpoint>[^"]*)"$'
SEND_REQUEST_WITH_DATA = (
    r'^I send "(?P<method>PATCH|POST|PUT)" request to "(?P<endpoint>[^"]*)" with data$'
)
SEND_REQUEST_WITH_PARAMS = (
    r'^I send "(?P<method>GET|POST|PUT|PATCH|DELETE)" request to '
    r'"(?P<endpoint>[^"]*)" with params$'
)

RESPONSE_CODE = r"^the response code should be (?P<status_code>\d+)$"
NOT_EMPTY = r"^the response should not be empty$"

MATCH_JSON = r"^the response should match json$"
CONTAIN = r"^the response should contain$"
CONTAIN_KEY = r'^the response should contain a "(?P<key>[^"]*)"$'
CONTAIN_KEY_DOCSTRING = r"^the response should contain a$"
CONTAIN_ITEMS = r'^the response should contain a "(?P<path>[^"]*)" that contains items$'
NOT_CONTAIN_KEY = r'^the response should not contain a "(?P<key>[^"]*)"$'

SET_TO = r'^the response should contain a "(?P<path>[^"]*)" set to "(?P<value>[^"]*)"$'
TEMPORALLY_EQUAL = (
    r'^the response should contain a "(?P<path>[^"]*)" '
    r'temporally equal to "(?P<value>[^"]*)"$'
)
ITEM_AT_INDEX = (
    r"^the response should contain an item at index (?P<index>\d+) "
    r'with "(?P<prop>[^"]*)" set to "(?P<value>[^"]*)"$'
)
ITEM_WITH = (
    r'^the response should contain an item with "(?P<prop>[^"]*)" '
    r'set to "(?P<value>[^"]*)"$'
)

IS_NULL = r'^the response should contain a "(?P<path>[^"]*)" that is null$'
IS_NOT_NULL = r'^the response should contain a "(?P<path>[^"]*)" that is not null$'
IS_EMPTY = r'^the response should contain a "(?P<path>[^"]*)" that is empty$'
IS_NOT_EMPTY = r'^the response should contain a "(?P<path>[^"]*)" that is not empty$'

LENGTH = r"^the response should have a length of (?P<length>\d+)$"
PATH_LENGTH = r'^the response should contain a "(?P<path>[^"]*)" with length (?P<length>\d+)$'

SAVE = r'^I save "(?P<key>[^"]*)" from the response$'
SAVE_LIST_ITEM = (
    r'^I save the item at index (?P<index>\d+) in "(?P<key>[^"]*)" as "(?P<alias>[^"]*)"$'
)
SET_REPLACEMENT = r'^I set the replacement "(?P<key>[^"]*)" to "(?P<value>[^"]*)"$'


class StepPattern(NamedTuple):
    pattern: str
    handler: str
    docstring: bool = False


STEP_PATTERNS: tuple[StepPattern, ...] = (
    StepPattern(SEND_REQUEST, "send_request"),
    StepPattern(SEND_REQUEST_WITH_DATA, "send_request_with_data", docstring=True),
    StepPattern(SEND_REQUEST_WITH_PARAMS, "send_request_with_params", docstring=True),
    StepPattern(RESPONSE_CODE, "the_response_code_should_be"),
    StepPattern(NOT_EMPTY, "the_response_should_not_be_empty"),
    StepPattern(MATCH_JSON, "the_response_should_match_json", docstring=True),
    StepPattern(CONTAIN, "the_response_should_contain", docstring=True),
    StepPattern(CONTAIN_KEY, "the_response_should_contain_a"),
    StepPattern(CONTAIN_KEY_DOCSTRING, "the_response_should_contain_a", docstring=True),
    StepPattern(CONTAIN_ITEMS, "the_response_should_contain_items", docstring=True),
    StepPattern(NOT_CONTAIN_KEY, "the_response_should_not_contain_a"),
    StepPattern(SET_TO, "the_response_should_contain_set_to"),
    StepPattern(TEMPORALLY_EQUAL, "the_response_should_contain_a_time_set_to"),
    StepPattern(ITEM_AT_INDEX, "the_response_contains_item_at_index"),
    StepPattern(ITEM_WITH, "the_response_contains_item_with"),
    StepPattern(IS_NULL, "the_response_should_contain_null"),
    StepPattern(IS_NOT_NULL, "the_response_should_contain_not_null"),
    StepPattern(IS_EMPTY, "the_response_should_contain_empty"),
    StepPattern(IS_NOT_EMPTY, "the_response_should_contain_not_empty"),
    StepPattern(LENGTH, "the_response_should_have_length"),
    StepPattern(PATH_LENGTH, "the_response_should_contain_with_length"),
    StepPattern(SAVE, "save_value_from_response"),
    StepPattern(SAVE_LIST_ITEM, "save_value_from_response_list"),
    StepPattern(SET_REPLACEMENT, "set_replacement"),
)
