"""Parser that builds a node tree from an API reference document."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from .errors import MarkdownStructureError
from .nodes import (
    CodeNode,
    GeneratorNode,
    HeaderNode,
    ListItemNode,
    ListType,
    Node,
    ParentNode,
    TextNode,
    find_header,
    walk,
)
from .normalizer import CODE_FENCE, GENERATOR_MARKER, normalize_lines

logger = logging.getLogger(__name__)

HEADER_PATTERN = re.compile(r"^(#+)")
LIST_ITEM_PATTERN = re.compile(r"^(\s*)(-|1\.|\*) ")
MAX_HEADER_DEPTH = 6
INDENT_WIDTH = 2


@dataclass
class ParserState:
    """Nesting state for a single parse.

    ``headers`` is the stack of open headers, the synthetic root at the
    bottom. ``list_context[d]`` is the node that list items at depth ``d``
    attach to; index 0 is the current header.
    """

    root: HeaderNode = field(default_factory=lambda: HeaderNode(depth=0, text="<root>"))
    headers: list[HeaderNode] = field(default_factory=list)
    list_context: list[ParentNode] | None = None

    def __post_init__(self) -> None:
        if not self.headers:
            self.headers.append(self.root)

    @property
    def current_header(self) -> HeaderNode:
        return self.headers[-1]

    def open_header(self, header: HeaderNode) -> None:
        """Close headers at the same or deeper level, then open this one."""
        while self.current_header.depth >= header.depth:
            self.headers.pop()
        self.current_header.children.append(header)
        self.headers.append(header)
        self.list_context = [header]

    def attach(self, node: TextNode | ListItemNode, depth: int, line_number: int) -> None:
        """Attach a list item or text line at the given indentation depth."""
        if self.list_context is None:
            kind = "List item" if isinstance(node, ListItemNode) else "Text"
            raise MarkdownStructureError(
                f"{kind} {node.text!r} appears before any header", line_number
            )
        if depth >= len(self.list_context):
            raise MarkdownStructureError(
                f"List item {node.text!r} is indented {depth} levels "
                f"but only {len(self.list_context) - 1} are open",
                line_number,
            )

        self.list_context[depth].children.append(node)
        del self.list_context[depth + 1 :]
        if isinstance(node, ListItemNode):
            self.list_context.append(node)


def _consume_block(
    lines: list[str], start: int, marker: str, description: str
) -> tuple[list[str], int]:
    """Collect lines after ``start`` up to the next line starting with ``marker``.

    Returns:
        Tuple of (inner lines, index of the closing line)
    """
    inner: list[str] = []
    i = start + 1
    while i < len(lines):
        if lines[i].startswith(marker):
            return inner, i
        inner.append(lines[i])
        i += 1
    raise MarkdownStructureError(f"Unterminated {description}", start + 1)


def build_tree(lines: list[str]) -> list[Node]:
    """Build a node forest from logical lines.

    Args:
        lines: Logical lines as produced by ``normalize_lines``.

    Returns:
        The top-level nodes of the document.
    """
    state = ParserState()
    i = 0
    while i < len(lines):
        line = lines[i]
        line_number = i + 1

        if line.startswith(CODE_FENCE):
            code_lines, i = _consume_block(lines, i, CODE_FENCE, "code fence")
            state.current_header.children.append(
                CodeNode(lang=line[len(CODE_FENCE) :], lines=code_lines)
            )
            i += 1
            continue

        if line.startswith(GENERATOR_MARKER):
            gen_lines, i = _consume_block(lines, i, GENERATOR_MARKER, "generator block")
            state.current_header.children.append(
                GeneratorNode(lines=[line, *gen_lines, lines[i]])
            )
            i += 1
            continue

        header_match = HEADER_PATTERN.match(line)
        if header_match:
            depth = len(header_match.group(1))
            if depth > MAX_HEADER_DEPTH:
                raise MarkdownStructureError(
                    f"Header depth {depth} exceeds {MAX_HEADER_DEPTH}", line_number
                )
            state.open_header(HeaderNode(depth=depth, text=line[depth + 1 :]))
            i += 1
            continue

        list_match = LIST_ITEM_PATTERN.match(line)
        if list_match:
            indent, marker = list_match.groups()
            # Odd indentation floors to the enclosing level
            depth = len(indent) // INDENT_WIDTH
            item = ListItemNode(
                text=line[list_match.end() :], list_type=ListType.from_marker(marker)
            )
            state.attach(item, depth, line_number)
        else:
            state.attach(TextNode(text=line), 0, line_number)
        i += 1

    return state.root.children


def parse(content: str) -> list[Node]:
    """Parse document text into a node forest."""
    lines = normalize_lines(content)
    nodes = build_tree(lines)
    logger.debug("Parsed %d top-level nodes from %d logical lines", len(nodes), len(lines))
    return nodes


@dataclass
class ParseResult:
    """Result of parsing an API reference document."""

    nodes: list[Node]
    lines: list[str]


class MarkdownParser:
    """Parser for API reference documents that builds a node tree."""

    def __init__(self):
        # Store last parse result for convenience methods
        self._result: ParseResult | None = None

    def parse_file(self, file_path: str | Path) -> ParseResult:
        """Parse a document file and return the parse result."""
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        return self.parse_content(path.read_text(encoding="utf-8"))

    def parse_content(self, content: str) -> ParseResult:
        """Parse document content and return the parse result."""
        lines = normalize_lines(content)
        self._result = ParseResult(nodes=build_tree(lines), lines=lines)
        return self._result

    # Convenience methods that operate on the last parse result

    @property
    def nodes(self) -> list[Node]:
        """Get the top-level nodes from the last parse."""
        return self._result.nodes if self._result else []

    @property
    def lines(self) -> list[str]:
        """Get the logical lines from the last parse."""
        return self._result.lines if self._result else []

    def get_all_nodes(self) -> list[Node]:
        """Get all nodes in document order (flattened tree)."""
        return list(walk(self.nodes))

    def find_header(self, text: str) -> HeaderNode | None:
        """Find a header by its text."""
        return find_header(self.nodes, text)
