"""Node types for the API document tree."""

from __future__ import annotations

import copy
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum


class ListType(Enum):
    """Marker style of a list item."""

    ORDINAL = "ordinal"
    BULLET = "bullet"
    DEFAULT = "default"

    @property
    def marker(self) -> str:
        """Get the marker written in front of the item text."""
        return _MARKERS[self]

    @classmethod
    def from_marker(cls, marker: str) -> ListType:
        """Get the list type for a marker such as '-', '*' or '1.'."""
        for list_type, value in _MARKERS.items():
            if value == marker:
                return list_type
        raise ValueError(f"Unknown list marker: {marker!r}")


_MARKERS = {
    ListType.ORDINAL: "1.",
    ListType.BULLET: "*",
    ListType.DEFAULT: "-",
}


@dataclass
class Node:
    """Base class for every node in a document tree."""

    def clone(self) -> Node:
        """Return a deep copy that shares no state with this node."""
        return copy.deepcopy(self)


@dataclass
class HeaderNode(Node):
    """A header line and everything nested under it."""

    depth: int  # 1 for #, 2 for ##, etc. 0 is the synthetic root
    text: str
    children: list[Node] = field(default_factory=list)


@dataclass
class TextNode(Node):
    """A single logical line of paragraph, blockquote or tag text."""

    text: str


@dataclass
class CodeNode(Node):
    """A fenced code block, kept verbatim."""

    lang: str
    lines: list[str] = field(default_factory=list)


@dataclass
class GeneratorNode(Node):
    """An opaque generated region, including both marker lines."""

    lines: list[str] = field(default_factory=list)


@dataclass
class ListItemNode(Node):
    """A list item with its nested items."""

    text: str
    list_type: ListType = ListType.DEFAULT
    children: list[Node] = field(default_factory=list)


# Nodes that can own children
ParentNode = HeaderNode | ListItemNode


def clone_node(node: Node) -> Node:
    """Deep-copy a node and its whole subtree."""
    return node.clone()


def walk(nodes: Iterable[Node]) -> Iterator[Node]:
    """Yield every node of a forest in document (pre-order) order."""
    for node in nodes:
        yield node
        if isinstance(node, ParentNode):
            yield from walk(node.children)


def find_header(nodes: Iterable[Node], text: str) -> HeaderNode | None:
    """Find the first header whose text matches (case-insensitive)."""
    wanted = text.lower()
    for node in walk(nodes):
        if isinstance(node, HeaderNode) and node.text.lower() == wanted:
            return node
    return None
