"""
Dot-path lookups over a parsed JSON response body.

The body is parsed into a tree of :class:`JsonNode` objects. A path such as
``data.user.name`` matches wherever ``data`` occurs in the document, followed
by a ``user`` child and a ``name`` grandchild. List items are children named
by their index, so ``data.0.id`` addresses the first item of ``data``.

When a path matches more than one node the first match in document order
(depth-first, parents before children) is returned.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from api_fixture.common.common import json_str


class NodeKind(StrEnum):
    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    LIST = "list"
    MAP = "map"


@dataclass(frozen=True)
class JsonNode:
    """
    One value in a JSON document, tagged with its kind.

    :param name: Key of the node within its parent mapping, the item index
        within its parent list, or ``""`` for the document root.
    :param kind: The JSON type of the value.
    :param value: The decoded value (lists and mappings included).
    :param children: Child nodes of lists and mappings; empty for scalars.
    """

    name: str
    kind: NodeKind
    value: Any
    children: tuple[JsonNode, ...] = ()

    @classmethod
    def from_value(cls, value: Any, name: str = "") -> JsonNode:
        match value:
            case None:
                return cls(name, NodeKind.NULL, value)
            case bool():
                return cls(name, NodeKind.BOOL, value)
            case int() | float():
                return cls(name, NodeKind.NUMBER, value)
            case str():
                return cls(name, NodeKind.STRING, value)
            case list():
                children = tuple(
                    cls.from_value(item, str(index)) for index, item in enumerate(value)
                )
                return cls(name, NodeKind.LIST, value, children)
            case dict():
                children = tuple(cls.from_value(item, key) for key, item in value.items())
                return cls(name, NodeKind.MAP, value, children)
            case _:
                raise TypeError(f"not a JSON value: {value!r}")

    @property
    def is_container(self) -> bool:
        return self.kind in (NodeKind.LIST, NodeKind.MAP)

    def child(self, name: str) -> JsonNode | None:
        for child in self.children:
            if child.name == name:
                return child
        return None

    def walk(self) -> Iterator[JsonNode]:
        """Yield this node and all of its descendants in document order."""
        yield self
        for child in self.children:
            yield from child.walk()


def parse_document(body: json_str) -> JsonNode:
    """
    Parse a response body into a node tree.

    :param body: Raw JSON text.
    :returns: The root node.
    :raises ValueError: If the body is not valid JSON.
    """
    return JsonNode.from_value(json.loads(body))


def find_one(root: JsonNode, path: str) -> JsonNode | None:
    """
    Find the first node matching a dot-separated path.

    The first segment may match at any depth below the root; each further
    segment must be a direct child of the previous match.

    :param root: Document to search.
    :param path: Dot-separated path, e.g. ``data.user.name``.
    :returns: The first matching node, or ``None`` if nothing matches.
    """
    first, *rest = path.split(".")

    for candidate in root.walk():
        if candidate.name != first or candidate is root:
            continue

        node: JsonNode | None = candidate
        for segment in rest:
            node = node.child(segment) if node is not None else None
        if node is not None:
            return node

    return None
