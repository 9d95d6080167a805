"""Parser, template expander and renderer for API reference documents."""

from .arguments import Argument, parse_argument
from .errors import (
    ArgumentParseError,
    DocmdError,
    MarkdownRenderError,
    MarkdownStructureError,
    MarkdownTemplateError,
)
from .nodes import (
    CodeNode,
    GeneratorNode,
    HeaderNode,
    ListItemNode,
    ListType,
    Node,
    TextNode,
    clone_node,
    find_header,
    walk,
)
from .normalizer import normalize_lines
from .parser import MarkdownParser, ParseResult, parse
from .renderer import DEFAULT_MAX_COLUMNS, MarkdownRenderer, render, wrap_text
from .templates import FanOut, Substitute, TemplateExpander, expand_templates, parse_instruction

__all__ = [
    "Argument",
    "parse_argument",
    "DocmdError",
    "MarkdownStructureError",
    "MarkdownTemplateError",
    "MarkdownRenderError",
    "ArgumentParseError",
    "Node",
    "HeaderNode",
    "TextNode",
    "CodeNode",
    "GeneratorNode",
    "ListItemNode",
    "ListType",
    "clone_node",
    "find_header",
    "walk",
    "normalize_lines",
    "MarkdownParser",
    "ParseResult",
    "parse",
    "DEFAULT_MAX_COLUMNS",
    "MarkdownRenderer",
    "render",
    "wrap_text",
    "TemplateExpander",
    "Substitute",
    "FanOut",
    "parse_instruction",
    "expand_templates",
]
