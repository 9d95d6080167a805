"""Fold raw document text into logical lines."""

import logging
import re

logger = logging.getLogger(__name__)

CODE_FENCE = "```"
GENERATOR_MARKER = "<!-- GEN"

# Lines that start a new logical line instead of continuing a paragraph
LIST_MARKER_PATTERN = re.compile(r"^(-|\*|1\.)")
BREAK_PREFIXES = (">", "<")


def normalize_lines(content: str) -> list[str]:
    """Split content into logical lines.

    Soft-wrapped paragraph text (and wrapped list item text) is joined into a
    single line. Headers, fences and everything inside code or generator
    blocks pass through verbatim, one line each.

    Args:
        content: Raw document text.

    Returns:
        The logical lines, in document order.
    """
    out_lines: list[str] = []
    tokens: list[str] = []
    in_code = False
    in_generator = False

    def flush() -> None:
        if tokens:
            out_lines.append(" ".join(tokens))
            tokens.clear()

    for line in content.replace("\r\n", "\n").split("\n"):
        if line.startswith(CODE_FENCE) and not in_generator:
            flush()
            in_code = not in_code
            out_lines.append(line)
            continue

        if in_code:
            out_lines.append(line)
            continue

        if line.startswith(GENERATOR_MARKER):
            flush()
            in_generator = not in_generator
            out_lines.append(line)
            continue

        if in_generator or line.startswith("#"):
            flush()
            out_lines.append(line)
            continue

        trimmed = line.strip()
        if not trimmed:
            flush()
            continue

        is_list_item = LIST_MARKER_PATTERN.match(trimmed) is not None
        if is_list_item or trimmed.startswith(BREAK_PREFIXES):
            flush()

        # List items keep their indentation and trailing spaces
        tokens.append(line if is_list_item else trimmed)

    flush()
    logger.debug("Normalized document into %d logical lines", len(out_lines))
    return out_lines
