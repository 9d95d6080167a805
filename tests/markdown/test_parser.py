"""Tests for the document tree builder."""

import pytest

from src.markdown.errors import MarkdownStructureError
from src.markdown.nodes import (
    CodeNode,
    GeneratorNode,
    HeaderNode,
    ListItemNode,
    ListType,
    TextNode,
)
from src.markdown.parser import MarkdownParser, build_tree, parse


class TestHeaders:
    """Tests for header nesting."""

    def test_header_text_and_depth(self):
        """Header text excludes the hashes and the following space."""
        nodes = parse("## Foo bar")

        assert nodes == [HeaderNode(depth=2, text="Foo bar")]

    def test_nested_headers(self):
        """Deeper headers nest, shallower headers close the open ones."""
        nodes = parse("# A\n## B\n### C\n# D\n## E")

        assert [n.text for n in nodes] == ["A", "D"]
        a, d = nodes
        assert [n.text for n in a.children] == ["B"]
        assert [n.text for n in a.children[0].children] == ["C"]
        assert a.children[0].children[0].children == []
        assert [n.text for n in d.children] == ["E"]
        assert d.children[0].children == []

    def test_same_depth_closes_sibling(self):
        """A header closes every open header at the same or deeper level."""
        nodes = parse("# A\n## B\n### C\n## D\n# E")

        a, e = nodes
        assert [n.text for n in a.children] == ["B", "D"]
        assert [n.text for n in a.children[0].children] == ["C"]
        assert a.children[1].children == []
        assert e.children == []

    def test_document_without_top_level_header(self):
        """Headers below level 1 can be top-level nodes."""
        nodes = parse("## A\n# B")

        assert [(n.depth, n.text) for n in nodes] == [(2, "A"), (1, "B")]

    def test_header_too_deep(self):
        """More than six hashes is rejected."""
        with pytest.raises(MarkdownStructureError, match="exceeds 6"):
            parse("####### Too deep")


class TestLists:
    """Tests for list item nesting."""

    def test_list_nesting(self):
        """Indented items nest under the previous shallower item."""
        nodes = parse("# H\n- a\n  - b\n- c")

        items = nodes[0].children
        assert [item.text for item in items] == ["a", "c"]
        assert [child.text for child in items[0].children] == ["b"]
        assert items[1].children == []

    def test_list_types(self):
        """The marker decides the list type."""
        nodes = parse("# H\n- dash\n* star\n1. one")

        assert [item.list_type for item in nodes[0].children] == [
            ListType.DEFAULT,
            ListType.BULLET,
            ListType.ORDINAL,
        ]

    def test_odd_indentation_floors(self):
        """Three spaces count as one level."""
        nodes = parse("# H\n- a\n   - b")

        assert nodes[0].children[0].children == [ListItemNode(text="b")]

    def test_empty_item(self):
        """A bare marker followed by a space is an item with empty text."""
        assert parse("# H\n- \n")[0].children == [ListItemNode(text="")]

    def test_empty_item_between_items(self):
        items = parse("# H\n- a\n- \n- b")[0].children

        assert items == [ListItemNode(text="a"), ListItemNode(text=""), ListItemNode(text="b")]

    def test_deeper_level_attaches_to_latest_item(self):
        """Returning to a shallower level drops the deeper context."""
        nodes = parse("# H\n- a\n  - b\n    - x\n- c\n  - d")

        a, c = nodes[0].children
        assert a.children[0].children == [ListItemNode(text="x")]
        assert c.children == [ListItemNode(text="d")]

    def test_header_resets_list_context(self):
        """List structure never crosses header boundaries."""
        nodes = parse("# H\n- a\n# I\n- b")

        assert nodes[0].children == [ListItemNode(text="a")]
        assert nodes[1].children == [ListItemNode(text="b")]

    def test_skipped_level_is_an_error(self):
        """An item indented past the open context is rejected."""
        with pytest.raises(MarkdownStructureError) as exc_info:
            parse("# H\n    - deep")

        assert exc_info.value.line_number == 2

    def test_indented_item_after_header_change(self):
        """An indented item directly under a new header has no parent."""
        with pytest.raises(MarkdownStructureError):
            parse("# H\n- a\n# I\n  - b")

    def test_list_item_before_header(self):
        """List items need an enclosing header."""
        with pytest.raises(MarkdownStructureError, match="before any header") as exc_info:
            parse("- a")

        assert exc_info.value.line_number == 1


class TestText:
    """Tests for plain text lines."""

    def test_text_interleaves_with_lists(self):
        """Paragraphs and lists share the header's children."""
        nodes = parse("# H\npara\n- a\n\nmore")

        assert nodes[0].children == [
            TextNode(text="para"),
            ListItemNode(text="a"),
            TextNode(text="more"),
        ]

    def test_text_closes_list_context(self):
        """An indented item after a paragraph has no parent item."""
        with pytest.raises(MarkdownStructureError):
            parse("# H\n- a\n\npara\n\n  - b")

    def test_text_before_header(self):
        """Paragraphs need an enclosing header."""
        with pytest.raises(MarkdownStructureError, match="Text 'intro'"):
            parse("intro\n# H")


class TestBlocks:
    """Tests for code and generator blocks."""

    def test_code_block(self):
        """Code keeps its language and verbatim lines."""
        nodes = parse("# H\n```js\nconst a = 1;\n\n  b();\n```")

        assert nodes[0].children == [CodeNode(lang="js", lines=["const a = 1;", "", "  b();"])]

    def test_code_attaches_to_header_not_list(self):
        """Code inside a list goes to the header and keeps the list context."""
        nodes = parse("# H\n- a\n```\nx\n```\n  - b")

        a, code = nodes[0].children
        assert isinstance(code, CodeNode)
        assert a.children == [ListItemNode(text="b")]

    def test_code_before_header(self):
        """Code blocks are allowed at the top level."""
        assert parse("```\nx\n```") == [CodeNode(lang="", lines=["x"])]

    def test_unterminated_code(self):
        """A missing closing fence is an error."""
        with pytest.raises(MarkdownStructureError, match="Unterminated code fence"):
            parse("# H\n```js\nx")

    def test_generator_block(self):
        """Generator blocks keep both markers and their content."""
        nodes = parse("# H\n<!-- GEN:toc -->\n- [a](#a)\n\n<!-- GEN:stop -->")

        assert nodes[0].children == [
            GeneratorNode(lines=["<!-- GEN:toc -->", "- [a](#a)", "", "<!-- GEN:stop -->"])
        ]

    def test_unterminated_generator(self):
        """A missing closing marker is an error."""
        with pytest.raises(MarkdownStructureError, match="Unterminated generator block"):
            build_tree(["# H", "<!-- GEN:toc -->", "- a"])


class TestMarkdownParser:
    """Tests for the MarkdownParser class."""

    def test_parse_content(self, api_doc):
        """Parse result holds nodes and logical lines."""
        parser = MarkdownParser()
        result = parser.parse_content(api_doc)

        assert result.nodes == parser.nodes
        assert result.lines == parser.lines
        assert parser.nodes[0].text == "class: Page"

    def test_get_all_nodes(self):
        """All nodes are returned in document order."""
        parser = MarkdownParser()
        parser.parse_content("# H\n- a\n  - b\n## I")

        assert [n.text for n in parser.get_all_nodes()] == ["H", "a", "b", "I"]

    def test_find_header(self, api_doc):
        """Headers are found by text, case-insensitive."""
        parser = MarkdownParser()
        parser.parse_content(api_doc)

        header = parser.find_header("PARAM: Page.goto.url")
        assert header is not None
        assert header.depth == 3
        assert parser.find_header("missing") is None

    def test_empty_parser(self):
        """Accessors are empty before anything is parsed."""
        parser = MarkdownParser()

        assert parser.nodes == []
        assert parser.lines == []
        assert parser.find_header("x") is None

    def test_parse_file(self, tmp_path):
        """Files are read as UTF-8."""
        path = tmp_path / "api.md"
        path.write_text("# Ünïcode\n", encoding="utf-8")

        result = MarkdownParser().parse_file(path)

        assert result.nodes == [HeaderNode(depth=1, text="Ünïcode")]

    def test_parse_missing_file(self, tmp_path):
        """Missing files raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            MarkdownParser().parse_file(tmp_path / "missing.md")
