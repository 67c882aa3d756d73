"""Whisker node tree.

A parsed template is a tuple of nodes (a node sequence)::

    Text(literal)
    Variable(name, escaped)
    Partial(name, indent)
    Section(name, raw_body, body, delimiters)
    InvertedSection(name, body)

"""

from collections.abc import Sequence

from whisker.nodes.base import Node
from whisker.nodes.control_flow import InvertedSection, Section
from whisker.nodes.output import Partial, Text, Variable

NodeSequence = Sequence[Node]

__all__ = [
    "InvertedSection",
    "Node",
    "NodeSequence",
    "Partial",
    "Section",
    "Text",
    "Variable",
]
