"""Tag grammar for Mustache templates.

The lexer does not tokenize the whole source up front: delimiters can be
redefined mid-template, so the parser asks for one tag at a time and rebuilds
the grammar whenever a ``{{=<% %>=}}`` directive is seen.

Recognized forms, in priority order:

1. Set-delimiter: ``OPEN = NEW_OPEN NEW_CLOSE = CLOSE``
2. Triple mustache: ``OPEN { name } CLOSE``
3. Generic tag: ``OPEN sigil? name CLOSE``

Thread-Safety:
A ``TagGrammar`` holds the current delimiters and is mutated by
``set_delimiters()``. Each parse owns its own instance; never share one
between concurrent parses.

"""

from __future__ import annotations

import re

from whisker._types import DEFAULT_DELIMITERS, Delimiters, TagMatch

# Anything that is not part of a name is a candidate sigil.
_SIGIL = r"[^\w\s.]"


def build_pattern(delimiters: Delimiters) -> re.Pattern[str]:
    """Compile the tag pattern for a delimiter pair."""
    o = re.escape(delimiters.open)
    c = re.escape(delimiters.close)
    return re.compile(
        rf"{o}\s*(?:"
        rf"(?P<delim>=)\s*(?P<pair>[^=]+?)\s*={c}"
        rf"|(?P<triple>\{{)\s*(?P<raw>.+?)\s*\}}{c}"
        rf"|(?P<sigil>{_SIGIL}?)\s*(?P<name>.*?)\s*{c}"
        rf")",
        re.DOTALL,
    )


class TagGrammar:
    """Matcher for the next tag in a template, under the current delimiters.

    Example:
        >>> grammar = TagGrammar()
        >>> m = grammar.match("Hi {{#people}}", 0)
        >>> (m.sigil, m.content, m.start)
        ('#', 'people', 3)

    """

    __slots__ = ("_delimiters", "_pattern")

    def __init__(self, delimiters: Delimiters = DEFAULT_DELIMITERS):
        self._delimiters = delimiters
        self._pattern = build_pattern(delimiters)

    @property
    def delimiters(self) -> Delimiters:
        return self._delimiters

    def set_delimiters(self, delimiters: Delimiters) -> None:
        """Rebuild the matcher for a new delimiter pair."""
        self._delimiters = delimiters
        self._pattern = build_pattern(delimiters)

    def match(self, source: str, pos: int) -> TagMatch | None:
        """Find the next tag at or after ``pos``, or None if there is none."""
        m = self._pattern.search(source, pos)
        if m is None:
            return None

        start = m.start()
        indent_start = start
        while indent_start > pos and source[indent_start - 1] in " \t":
            indent_start -= 1
        if m.group("delim"):
            sigil, content = "=", m.group("pair")
        elif m.group("triple"):
            sigil, content = "{", m.group("raw")
        else:
            sigil, content = m.group("sigil"), m.group("name")
            if sigil == "=":
                # Not a complete "=...=" directive.
                content = ""

        return TagMatch(
            sigil=sigil,
            content=content,
            text_start=pos,
            indent_start=indent_start,
            start=start,
            end=m.end(),
        )
