"""Whisker parser: turns template source into an immutable node sequence."""

from whisker.parser.core import ParsedBlock, Parser, parse

__all__ = ["ParsedBlock", "Parser", "parse"]
