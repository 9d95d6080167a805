"""Template expansion for repetitive argument signatures.

Templates are named nodes (usually ``## name`` headers of a params document)
whose children are the payload. A document refers to them in two ways::

    - `options` <Object> = %%-shared-options-%%
    - option-inline- = %%-context-options-list-%%

The first form appends a copy of the template's children to the node. The
second form fans out: the referenced template lists other templates, and one
sibling node is created for each of them, named after the argument it
documents.
"""

from __future__ import annotations

import dataclasses
import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from .arguments import parse_argument
from .errors import ArgumentParseError, MarkdownTemplateError
from .nodes import Node, ParentNode, TextNode

logger = logging.getLogger(__name__)

FAN_OUT_TRIGGER = "-inline- = %%"
SUBSTITUTE_TRIGGER = " = %%"
REFERENCE_PATTERN = re.compile(r"^%%-(.+)-%%$")


@dataclass(frozen=True)
class Substitute:
    """Rename the node to ``name`` and append the template's children."""

    name: str
    ref: str


@dataclass(frozen=True)
class FanOut:
    """Create one ``prefix + argument`` sibling per template listed in ``ref``."""

    prefix: str
    ref: str


Instruction = Substitute | FanOut


def _reference_name(key: str, *, allow_bare: bool = False) -> str:
    match = REFERENCE_PATTERN.match(key)
    if match:
        return match.group(1)
    if allow_bare and key:
        return key
    raise MarkdownTemplateError(f"Bad template reference: {key}", reference=key)


def parse_instruction(text: str) -> Instruction | None:
    """Parse the macro trigger in a node's text, if it has one."""
    if FAN_OUT_TRIGGER in text:
        prefix, _, key = text.partition(FAN_OUT_TRIGGER)
        return FanOut(prefix=prefix, ref=_reference_name("%%" + key))
    if SUBSTITUTE_TRIGGER in text:
        name, _, key = text.partition(SUBSTITUTE_TRIGGER)
        return Substitute(name=name, ref=_reference_name("%%" + key))
    return None


class TemplateExpander:
    """Expands template references in a node forest, in place."""

    def __init__(self, params: Iterable[Node]):
        self.templates: dict[str, ParentNode] = {}
        for node in params:
            if not isinstance(node, ParentNode):
                raise MarkdownTemplateError(
                    f"Template entries must be headers or list items, got {type(node).__name__}"
                )
            self.templates[node.text] = node

    def expand(self, body: list[Node]) -> list[Node]:
        """Expand every trigger in ``body`` and return it."""
        self._expand_siblings(body)
        return body

    def _resolve(self, ref: str) -> ParentNode:
        template = self.templates.get(ref)
        if template is None:
            raise MarkdownTemplateError(f"Bad template: %%-{ref}-%%", reference=ref)
        return template

    def _expand_siblings(self, siblings: list[Node]) -> None:
        triggers: set[int] = set()

        # Siblings appended by a fan-out are visited by this same loop
        i = 0
        while i < len(siblings):
            node = siblings[i]
            if self._apply(node, siblings):
                triggers.add(id(node))
            if isinstance(node, ParentNode):
                self._expand_siblings(node.children)
            i += 1

        if triggers:
            siblings[:] = [node for node in siblings if id(node) not in triggers]

    def _apply(self, node: Node, siblings: list[Node]) -> bool:
        """Run the node's trigger, if any.

        Returns:
            True if the node was a fan-out trigger and must be removed.
        """
        if not isinstance(node, ParentNode | TextNode):
            return False
        instruction = parse_instruction(node.text)
        if instruction is None:
            return False

        if isinstance(node, TextNode):
            raise MarkdownTemplateError(
                f"Template trigger in plain text cannot carry children: {node.text}",
                reference=instruction.ref,
            )

        if isinstance(instruction, FanOut):
            self._fan_out(node, instruction, siblings)
            return True

        template = self._resolve(instruction.ref)
        node.text = instruction.name
        node.children.extend(child.clone() for child in template.children)
        logger.debug("Substituted template %r into %r", instruction.ref, instruction.name)
        return False

    def _fan_out(self, node: ParentNode, instruction: FanOut, siblings: list[Node]) -> None:
        listing = self._resolve(instruction.ref)
        for entry in listing.children:
            if not isinstance(entry, ParentNode | TextNode):
                raise MarkdownTemplateError(
                    f"Template list {instruction.ref!r} contains a {type(entry).__name__}",
                    reference=instruction.ref,
                )
            ref = _reference_name(entry.text, allow_bare=True)
            template = self._resolve(ref)
            if not template.children:
                raise MarkdownTemplateError(f"Template {ref!r} is empty", reference=ref)

            first = template.children[0]
            try:
                argument = parse_argument(getattr(first, "text", ""))
            except ArgumentParseError as e:
                raise MarkdownTemplateError(
                    f"Template {ref!r} does not start with an argument: {e}", reference=ref
                ) from e

            siblings.append(
                dataclasses.replace(
                    node,
                    text=instruction.prefix + argument.name,
                    children=[child.clone() for child in template.children],
                )
            )
        logger.debug(
            "Expanded %r into %d nodes", instruction.ref, len(listing.children)
        )


def expand_templates(body: list[Node], params: Iterable[Node]) -> list[Node]:
    """Expand template references in ``body`` using the ``params`` entries.

    The forest is mutated in place and returned.

    Raises:
        MarkdownTemplateError: If a reference has no matching entry.
    """
    return TemplateExpander(params).expand(body)
