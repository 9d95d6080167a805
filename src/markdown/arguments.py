"""Parsing of argument signature lines.

Parameters, return values and types are documented with one of::

    `timeout` <number> Maximum time in milliseconds.
    returns: <Promise<void>> Resolves when done.
    type: <Object<string, string>> Extra headers.
"""

import re
from dataclasses import dataclass

from .errors import ArgumentParseError

SIGNATURE_PATTERNS = (
    re.compile(r"^`([^`]+)` (.*)"),
    re.compile(r"^(returns): (.*)"),
    re.compile(r"^(type): (.*)"),
)


@dataclass
class Argument:
    """A parsed argument signature."""

    name: str
    type: str
    description: str


def parse_argument(line: str) -> Argument:
    """Parse a single argument signature line.

    The type expression is matched by bracket depth so nested generics such as
    ``<Array<Promise<void>>>`` are kept whole.

    Args:
        line: The signature line.

    Returns:
        The name, the type between the outer angle brackets and the trailing
        description.

    Raises:
        ArgumentParseError: If no prefix matches, the type does not start with
            ``<`` or its brackets never balance.
    """
    for pattern in SIGNATURE_PATTERNS:
        match = pattern.match(line)
        if match:
            break
    else:
        raise ArgumentParseError("Invalid argument", line)

    name, remainder = match.groups()
    if not remainder.startswith("<"):
        raise ArgumentParseError("Argument type must start with '<'", line)

    depth = 0
    for i, char in enumerate(remainder):
        if char == "<":
            depth += 1
        elif char == ">":
            depth -= 1
        if depth == 0:
            return Argument(name=name, type=remainder[1:i], description=remainder[i + 2 :])

    raise ArgumentParseError("Unbalanced angle brackets in argument type", line)
