"""CLI entry point for docmd.

Usage:
    python -m src format api.md                    # Print the normalized document
    python -m src format api.md --params params.md # Expand templates first
    python -m src format api.md --in-place         # Rewrite the file
    python -m src tree api.md                      # Show the parsed node tree
    python -m src arg '`timeout` <number> Time.'   # Parse an argument signature

Or via the installed command:
    docmd format api.md --width 100
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from src._version import get_full_version_string
from src.config import load_config
from src.markdown import (
    CodeNode,
    DocmdError,
    GeneratorNode,
    HeaderNode,
    ListItemNode,
    Node,
    TextNode,
    expand_templates,
    parse,
    parse_argument,
    render,
)

# Load environment variables
load_dotenv()

console = Console()


def configure_logging() -> None:
    """Configure logging from LOG_LEVEL (default WARNING)."""
    level = os.environ.get("LOG_LEVEL", "WARNING").upper()
    if level not in logging.getLevelNamesMapping():
        console.print(f"[yellow]![/] Unknown LOG_LEVEL {escape(level)!r}, using WARNING")
        level = "WARNING"
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def positive_int(value: str) -> int:
    """Argparse type for widths, which must be at least one column."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"width must be positive, got {number}")
    return number


def find_git_root(start_path: Path) -> Path:
    """Find the git repository root from a starting path.

    Args:
        start_path: Directory to start searching from

    Returns:
        Path to the git root, or start_path if not found
    """
    current = start_path.resolve()
    while current != current.parent:
        if (current / ".git").exists():
            return current
        current = current.parent
    return start_path


def _describe(node: Node) -> str:
    """One-line rich label for a node."""
    if isinstance(node, HeaderNode):
        return f"[bold blue]h{node.depth}[/] {escape(node.text)}"
    if isinstance(node, ListItemNode):
        return f"[green]{node.list_type.marker}[/] {escape(node.text)}"
    if isinstance(node, TextNode):
        return f"[dim]text[/] {escape(node.text)}"
    if isinstance(node, CodeNode):
        return f"[yellow]code[/] {escape(node.lang) or '-'} ({len(node.lines)} lines)"
    if isinstance(node, GeneratorNode):
        return f"[magenta]gen[/] {escape(node.lines[0])}"
    return type(node).__name__


def build_tree(nodes: list[Node], tree: Tree) -> Tree:
    """Add nodes and their descendants to a rich tree."""
    for node in nodes:
        branch = tree.add(_describe(node))
        if isinstance(node, HeaderNode | ListItemNode):
            build_tree(node.children, branch)
    return tree


def run_format(
    document: Path,
    *,
    params: Path | None = None,
    width: int | None = None,
    in_place: bool = False,
) -> int:
    """Parse a document, optionally expand templates, and render it.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    if not document.exists():
        console.print(f"[red]Error:[/] Document not found: {document}")
        return 1

    workspace = find_git_root(document.parent)
    config = load_config(workspace)
    params_path = config.get_params_path(workspace, params_path=params)

    nodes = parse(document.read_text(encoding="utf-8"))
    if params_path is not None:
        if not params_path.exists():
            console.print(f"[red]Error:[/] Params document not found: {params_path}")
            return 1
        expand_templates(nodes, parse(params_path.read_text(encoding="utf-8")))

    output = render(nodes, config.get_max_columns(width=width))
    if in_place:
        document.write_text(output + "\n", encoding="utf-8")
        console.print(f"[green]✓[/] Formatted {document}")
    else:
        print(output)
    return 0


def run_tree(document: Path) -> int:
    """Print the node tree of a document."""
    if not document.exists():
        console.print(f"[red]Error:[/] Document not found: {document}")
        return 1

    nodes = parse(document.read_text(encoding="utf-8"))
    console.print(build_tree(nodes, Tree(f"[bold]{escape(document.name)}[/]")))
    return 0


def run_arg(line: str) -> int:
    """Print the parts of an argument signature."""
    argument = parse_argument(line)
    console.print(f"[bold]name:[/] {escape(argument.name)}")
    console.print(f"[bold]type:[/] {escape(argument.type)}")
    console.print(f"[bold]description:[/] {escape(argument.description)}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = argparse.ArgumentParser(
        prog="docmd",
        description="docmd - Parse, expand and format API reference documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Examples:
  docmd format api.md                    Print the normalized document
  docmd format api.md -p params.md       Expand templates from params.md
  docmd format api.md --in-place         Rewrite api.md
  docmd tree api.md                      Show the parsed structure
  docmd arg '`timeout` <number> Time.'   Parse an argument signature

Configuration:
  Create .docmd/config.toml in your repo:
    [render]
    max_columns = 120

    [templates]
    params_file = "docs/params.md"
""",
    )
    parser.add_argument("--version", action="version", version=get_full_version_string())

    subparsers = parser.add_subparsers(dest="command", required=True)

    format_parser = subparsers.add_parser("format", help="Render a document back to text")
    format_parser.add_argument("document", type=Path, help="Path to the document")
    format_parser.add_argument(
        "--params",
        "-p",
        type=Path,
        default=None,
        help="Document holding the templates to expand",
    )
    format_parser.add_argument(
        "--width",
        "-w",
        type=positive_int,
        default=None,
        help="Maximum line width (default from config, or 120)",
    )
    format_parser.add_argument(
        "--in-place",
        "-i",
        action="store_true",
        help="Write the result back to the document",
    )

    tree_parser = subparsers.add_parser("tree", help="Show the parsed node tree")
    tree_parser.add_argument("document", type=Path, help="Path to the document")

    arg_parser = subparsers.add_parser("arg", help="Parse an argument signature line")
    arg_parser.add_argument("line", help="The signature, e.g. '`name` <string> Description'")

    args = parser.parse_args(argv)
    configure_logging()

    try:
        if args.command == "format":
            return run_format(
                args.document.resolve(),
                params=args.params.resolve() if args.params else None,
                width=args.width,
                in_place=args.in_place,
            )
        if args.command == "tree":
            return run_tree(args.document.resolve())
        return run_arg(args.line)
    except DocmdError as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
