"""Render a node forest back to document text."""

from __future__ import annotations

from collections.abc import Iterable

from .errors import MarkdownRenderError
from .nodes import CodeNode, GeneratorNode, HeaderNode, ListItemNode, Node, TextNode
from .normalizer import CODE_FENCE

DEFAULT_MAX_COLUMNS = 120
QUOTE_MARKER = ">"
INDENT = "  "


def wrap_text(text: str, max_columns: int = DEFAULT_MAX_COLUMNS) -> list[str]:
    """Word-wrap a line at spaces so each piece fits in ``max_columns``.

    A token longer than the width is never split; it stays on its own
    over-long line.
    """
    lines: list[str] = []
    while len(text) > max_columns:
        index = text.rfind(" ", 0, max_columns + 1)
        if index == -1:
            index = text.find(" ", max_columns)
            if index == -1:
                break
        lines.append(text[:index])
        text = text[index + 1 :]
    if text:
        lines.append(text)
    return lines


class MarkdownRenderer:
    """Serializes nodes depth-first into a list of output lines."""

    def __init__(self, max_columns: int = DEFAULT_MAX_COLUMNS):
        self.max_columns = max_columns
        self.result: list[str] = []

    def render(self, nodes: Iterable[Node]) -> str:
        self.result = []
        self._render_siblings(nodes)
        return "\n".join(self.result)

    def _separate(self) -> None:
        """Emit a blank line unless the output is empty or already ends with one."""
        if self.result and self.result[-1] != "":
            self.result.append("")

    def _render_siblings(self, nodes: Iterable[Node]) -> None:
        previous: Node | None = None
        for node in nodes:
            self._render_node(node, previous)
            previous = node

    def _render_node(self, node: Node, previous: Node | None) -> None:
        if isinstance(node, HeaderNode):
            self._separate()
            self.result.append(f"{'#' * node.depth} {node.text}")
            self._render_siblings(node.children)
        elif isinstance(node, TextNode):
            if not (_is_quote(node) and _is_quote(previous)):
                self._separate()
            self.result.extend(wrap_text(node.text, self.max_columns))
        elif isinstance(node, CodeNode):
            self._separate()
            self.result.append(CODE_FENCE + node.lang)
            self.result.extend(node.lines)
            self.result.append(CODE_FENCE)
            self._separate()
        elif isinstance(node, GeneratorNode):
            self._separate()
            self.result.extend(node.lines)
            self._separate()
        elif isinstance(node, ListItemNode):
            self._render_list_item(node, "")
        else:
            raise TypeError(f"Cannot render node of type {type(node).__name__}")

    def _render_list_item(self, item: ListItemNode, indent: str) -> None:
        self.result.append(f"{indent}{item.list_type.marker} {item.text}")
        for child in item.children:
            if isinstance(child, ListItemNode):
                self._render_list_item(child, indent + INDENT)
            elif isinstance(child, TextNode):
                # Paragraph text cannot nest under a list item
                raise MarkdownRenderError(
                    f"List item '{item.text}' cannot hold paragraph text '{child.text}'"
                )
            else:
                self._render_node(child, item)


def _is_quote(node: Node | None) -> bool:
    return isinstance(node, TextNode) and node.text.startswith(QUOTE_MARKER)


def render(nodes: Iterable[Node], max_columns: int = DEFAULT_MAX_COLUMNS) -> str:
    """Render a node forest to text, wrapping paragraphs at ``max_columns``."""
    return MarkdownRenderer(max_columns).render(nodes)
