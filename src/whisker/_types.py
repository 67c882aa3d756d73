"""Core types shared by the lexer, parser and renderer.

Tags are recognized by their leading sigil. ``TagType`` maps each sigil to a
tag kind; ``TagMatch`` is what the lexer hands back to the parser for every
tag it finds.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TagType(Enum):
    """Kinds of Mustache tags, keyed by their sigil character."""

    VARIABLE = ""
    UNESCAPED = "&"
    TRIPLE = "{"
    COMMENT = "!"
    SECTION = "#"
    INVERTED = "^"
    END = "/"
    PARTIAL = ">"
    DELIMITER = "="

    @property
    def is_variable(self) -> bool:
        """Variable tags are never trimmed as standalone lines."""
        return self in _VARIABLE_TAGS


_VARIABLE_TAGS = frozenset({TagType.VARIABLE, TagType.UNESCAPED, TagType.TRIPLE})


@dataclass(frozen=True, slots=True)
class Delimiters:
    """An open/close delimiter pair, e.g. ``{{`` and ``}}``."""

    open: str = "{{"
    close: str = "}}"

    def __post_init__(self) -> None:
        if not self.open or not self.close:
            raise ValueError("Delimiters must be non-empty strings")
        if any(c.isspace() for c in self.open + self.close):
            raise ValueError(f"Delimiters may not contain whitespace: {self!r}")
        if "=" in self.open or "=" in self.close:
            raise ValueError(f"Delimiters may not contain '=': {self!r}")


DEFAULT_DELIMITERS = Delimiters()


@dataclass(frozen=True, slots=True)
class TagMatch:
    """A single tag occurrence located by the lexer.

    Offsets are absolute positions in the scanned source.

    Attributes:
        sigil: Raw sigil character ("" for a plain variable)
        content: Tag name, or the delimiter pair for ``=`` tags (stripped)
        text_start: Start of the literal text preceding the tag
        indent_start: Start of the space/tab run directly before the tag
        start: Offset of the opening delimiter
        end: Offset just past the closing delimiter
    """

    sigil: str
    content: str
    text_start: int
    indent_start: int
    start: int
    end: int
