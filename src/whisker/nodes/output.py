"""Output nodes: literal text, interpolation and partial inclusion."""

from __future__ import annotations

from dataclasses import dataclass

from whisker.nodes.base import Node


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Literal text between tags."""

    literal: str


@dataclass(frozen=True, slots=True)
class Variable(Node):
    """Interpolation: {{name}} (escaped), {{{name}}} or {{&name}} (raw)."""

    name: str
    escaped: bool = True


@dataclass(frozen=True, slots=True)
class Partial(Node):
    """Partial inclusion: {{>name}}

    ``indent`` is the whitespace a standalone partial tag was indented by;
    every line the partial renders is prefixed with it.
    """

    name: str
    indent: str = ""
