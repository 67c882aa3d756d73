"""Section nodes for the Whisker node tree."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from whisker._types import DEFAULT_DELIMITERS, Delimiters
from whisker.nodes.base import Node


@dataclass(frozen=True, slots=True)
class Section(Node):
    """Section: {{#name}}...{{/name}}

    ``raw_body`` is the unparsed source between the open tag and the spaces
    or tabs before the end tag. It is what a section lambda receives, and
    ``delimiters`` are the ones active when the section was opened, used to
    parse whatever the lambda returns.
    """

    name: str
    raw_body: str
    body: Sequence[Node]
    delimiters: Delimiters = DEFAULT_DELIMITERS


@dataclass(frozen=True, slots=True)
class InvertedSection(Node):
    """Inverted section: {{^name}}...{{/name}}"""

    name: str
    body: Sequence[Node]
