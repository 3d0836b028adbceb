"""
Unit tests for :mod:`api_fixture.json_path`.
"""

import pytest

from api_fixture.json_path import JsonNode, NodeKind, find_one, parse_document

DOCUMENT = """
{
    "data": {
        "user": {"id": 7, "name": "John", "manager": null},
        "items": [{"id": 1}, {"id": 2}]
    },
    "meta": {"id": "meta-id", "active": true}
}
"""


@pytest.fixture
def root() -> JsonNode:
    return parse_document(DOCUMENT)


class TestFromValue:
    @pytest.mark.parametrize(
        ("value", "kind"),
        [
            (None, NodeKind.NULL),
            (True, NodeKind.BOOL),
            (3, NodeKind.NUMBER),
            (2.5, NodeKind.NUMBER),
            ("x", NodeKind.STRING),
            ([1], NodeKind.LIST),
            ({"a": 1}, NodeKind.MAP),
        ],
    )
    def test_kind_is_tagged(self, value: object, kind: NodeKind) -> None:
        assert JsonNode.from_value(value).kind is kind

    def test_list_children_are_named_by_index(self) -> None:
        node = JsonNode.from_value(["a", "b"])

        assert [child.name for child in node.children] == ["0", "1"]
        assert [child.value for child in node.children] == ["a", "b"]

    def test_scalars_have_no_children(self) -> None:
        assert JsonNode.from_value("x").children == ()

    def test_non_json_value_is_rejected(self) -> None:
        with pytest.raises(TypeError):
            JsonNode.from_value(object())


def test_parse_document_rejects_invalid_json() -> None:
    with pytest.raises(ValueError):
        parse_document("{not json")


def test_find_one_follows_full_path(root: JsonNode) -> None:
    node = find_one(root, "data.user.name")

    assert node is not None
    assert node.value == "John"


def test_find_one_matches_first_segment_at_any_depth(root: JsonNode) -> None:
    node = find_one(root, "user.id")

    assert node is not None
    assert node.value == 7


def test_find_one_returns_first_match_in_document_order(root: JsonNode) -> None:
    """``id`` occurs four times; the user's id comes first."""
    node = find_one(root, "id")

    assert node is not None
    assert node.value == 7


def test_find_one_addresses_list_items_by_index(root: JsonNode) -> None:
    node = find_one(root, "items.1.id")

    assert node is not None
    assert node.value == 2


def test_find_one_returns_container_with_children(root: JsonNode) -> None:
    node = find_one(root, "data.items")

    assert node is not None
    assert node.kind is NodeKind.LIST
    assert len(node.children) == 2
    assert node.value == [{"id": 1}, {"id": 2}]


def test_find_one_returns_null_nodes(root: JsonNode) -> None:
    node = find_one(root, "manager")

    assert node is not None
    assert node.kind is NodeKind.NULL


def test_find_one_returns_none_when_nothing_matches(root: JsonNode) -> None:
    assert find_one(root, "data.user.age") is None


def test_find_one_does_not_skip_levels_after_first_segment(root: JsonNode) -> None:
    assert find_one(root, "data.name") is None


def test_find_one_tries_later_candidates_when_earlier_ones_dead_end() -> None:
    root = parse_document('{"a": {"id": 1}, "b": {"a": {"name": "x"}}}')

    node = find_one(root, "a.name")

    assert node is not None
    assert node.value == "x"


def test_find_one_on_top_level_list() -> None:
    root = parse_document('[{"id": 1}, {"id": 2}]')

    node = find_one(root, "1.id")

    assert node is not None
    assert node.value == 2
