"""Whisker parser: template source → node sequence.

The parser walks the source one tag at a time, asking the lexer for the next
match under the current delimiters. Sections recurse: the nested call scans
until the matching end tag and hands back its node sequence, the raw body
text and the cursor just past the end tag. Nothing is shared between calls
except the immutable source and the lexer's delimiter state; the cursor is
threaded through return values.

Standalone Lines:
A non-variable tag that is the only non-whitespace content on its line is
"standalone": its indentation and the newline after it are dropped, so

    ```
    {{#items}}
      - {{name}}
    {{/items}}
    ```

renders one line per item with no blank lines around them. A standalone
partial keeps its indentation as the ``Partial.indent`` it is rendered with.

Caching:
Every successfully parsed source is stored in the ``TemplateCache``. Section
bodies are stored too, under their raw text, when parsing that text on its
own would give the same nodes. Nothing is cached for a source whose parse
fails.

"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, NamedTuple

from whisker._types import DEFAULT_DELIMITERS, Delimiters, TagMatch, TagType
from whisker.environment.exceptions import (
    ErrorCode,
    MalformedSectionError,
    MalformedTagError,
)
from whisker.lexer import TagGrammar
from whisker.nodes import InvertedSection, Node, NodeSequence, Partial, Section, Text, Variable

if TYPE_CHECKING:
    from whisker.template.cache import TemplateCache

logger = logging.getLogger(__name__)


class ParsedBlock(NamedTuple):
    """Result of parsing up to an end tag (or the end of the source)."""

    nodes: tuple[Node, ...]
    raw: str
    cursor: int


class Parser:
    """Parse one template source into a node sequence.

    A Parser owns its lexer, so delimiter changes made by one template never
    leak into another. Create one per source; they are cheap.

    Example:
            >>> cache = TemplateCache()
            >>> Parser("Hi {{name}}!", cache=cache).parse()
            (Text(literal='Hi '), Variable(name='name', escaped=True), Text(literal='!'))

    """

    __slots__ = ("_cache", "_delimiters", "_grammar", "_name", "_pending", "_source")

    def __init__(
        self,
        source: str,
        *,
        cache: TemplateCache,
        delimiters: Delimiters = DEFAULT_DELIMITERS,
        name: str | None = None,
    ):
        self._source = source
        self._cache = cache
        self._delimiters = delimiters
        self._grammar = TagGrammar(delimiters)
        self._name = name
        self._pending: dict[tuple[str, Delimiters], tuple[Node, ...]] = {}

    def parse(self) -> NodeSequence:
        """Return the node sequence for the source, parsing at most once."""
        cached = self._cache.get(self._source, self._delimiters)
        if cached is not None:
            return cached

        logger.debug(f"Parsing template {self._name or '<template>'} ({len(self._source)} chars)")
        block = self._parse_block(0, None)

        for (raw, delimiters), nodes in self._pending.items():
            self._cache.store(raw, delimiters, nodes)
        self._pending.clear()
        return self._cache.store(self._source, self._delimiters, block.nodes)

    def _parse_block(self, start: int, opener: TagMatch | None) -> ParsedBlock:
        """Parse from ``start`` until ``opener``'s end tag, or the end of input."""
        source = self._source
        grammar = self._grammar
        delimiters = grammar.delimiters
        buf: list[Node] = []
        cursor = start

        while (tag := grammar.match(source, cursor)) is not None:
            tag_type = self._tag_type(tag)
            after_line = None if tag_type.is_variable else self._standalone_end(tag)
            standalone = after_line is not None

            literal = source[tag.text_start : tag.indent_start if standalone else tag.start]
            if literal:
                buf.append(Text(literal))
            cursor = after_line if standalone else tag.end

            if tag_type is TagType.COMMENT:
                continue

            if tag_type.is_variable:
                buf.append(Variable(tag.content, escaped=tag_type is TagType.VARIABLE))

            elif tag_type is TagType.PARTIAL:
                indent = source[tag.indent_start : tag.start] if standalone else ""
                buf.append(Partial(tag.content, indent))

            elif tag_type is TagType.SECTION or tag_type is TagType.INVERTED:
                section_delimiters = grammar.delimiters
                block = self._parse_block(cursor, tag)
                cursor = block.cursor
                if tag_type is TagType.SECTION:
                    buf.append(Section(tag.content, block.raw, block.nodes, section_delimiters))
                else:
                    buf.append(InvertedSection(tag.content, block.nodes))

            elif tag_type is TagType.END:
                self._check_end(tag, opener)
                raw = source[start : tag.indent_start]
                # Text the body nodes were parsed from: the whitespace before a
                # non-standalone end tag is emitted but not part of raw.
                body_text = raw if standalone else source[start : tag.start]
                nodes = tuple(buf)
                if self._is_line_aligned(start, body_text):
                    nodes = self._pending.setdefault((body_text, delimiters), nodes)
                return ParsedBlock(nodes, raw, cursor)

            elif tag_type is TagType.DELIMITER:
                grammar.set_delimiters(self._parse_delimiters(tag))

        if opener is not None:
            raise MalformedSectionError(
                f"Unclosed section '{opener.content}'",
                section=opener.content,
                code=ErrorCode.UNCLOSED_SECTION,
                position=opener.start,
                source=source,
                name=self._name,
            )

        if cursor < len(source):
            buf.append(Text(source[cursor:]))
        return ParsedBlock(tuple(buf), source[start:], len(source))

    def _tag_type(self, tag: TagMatch) -> TagType:
        try:
            return TagType(tag.sigil)
        except ValueError:
            raise MalformedTagError(
                tag.sigil, position=tag.start, source=self._source, name=self._name
            ) from None

    def _standalone_end(self, tag: TagMatch) -> int | None:
        """Offset just past the tag's line if the tag is standalone, else None.

        Standalone means only spaces/tabs precede the tag on its line and only
        a line break (or the end of the source) follows it.
        """
        source = self._source
        if tag.indent_start > 0 and source[tag.indent_start - 1] != "\n":
            return None
        end = tag.end
        if end == len(source):
            return end
        if source.startswith("\n", end):
            return end + 1
        if source.startswith("\r\n", end):
            return end + 2
        return None

    def _is_line_aligned(self, start: int, raw: str) -> bool:
        """Whether ``raw`` parses the same on its own as it did in place."""
        at_line_start = start == 0 or self._source[start - 1] == "\n"
        return at_line_start and (not raw or raw.endswith("\n"))

    def _check_end(self, tag: TagMatch, opener: TagMatch | None) -> None:
        if opener is None:
            raise MalformedSectionError(
                f"End tag '{tag.content}' without an open section",
                section=tag.content,
                code=ErrorCode.UNEXPECTED_END,
                position=tag.start,
                source=self._source,
                name=self._name,
            )
        if tag.content != opener.content:
            raise MalformedSectionError(
                f"End tag '{tag.content}' does not close section '{opener.content}'",
                section=opener.content,
                code=ErrorCode.MISMATCHED_END,
                position=tag.start,
                source=self._source,
                name=self._name,
            )

    def _parse_delimiters(self, tag: TagMatch) -> Delimiters:
        parts = tag.content.split()
        if len(parts) != 2:
            raise MalformedTagError(
                "=",
                position=tag.start,
                source=self._source,
                name=self._name,
                message=f"Malformed set-delimiter tag at offset {tag.start}",
            )
        try:
            return Delimiters(*parts)
        except ValueError as e:
            raise MalformedTagError(
                "=",
                position=tag.start,
                source=self._source,
                name=self._name,
                message=f"Malformed set-delimiter tag at offset {tag.start}: {e}",
            ) from e


def parse(
    source: str,
    cache: TemplateCache,
    delimiters: Delimiters = DEFAULT_DELIMITERS,
    name: str | None = None,
) -> NodeSequence:
    """Parse ``source`` through ``cache``. Convenience wrapper over ``Parser``."""
    return Parser(source, cache=cache, delimiters=delimiters, name=name).parse()
