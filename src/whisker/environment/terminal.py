"""Terminal styling for Whisker diagnostics.

Error messages are plain text with optional ANSI styling. Whether to style is
decided once, at import: ``FORCE_COLOR`` turns it on, ``NO_COLOR`` turns it
off (https://no-color.org/), otherwise it follows ``sys.stdout.isatty()``.

Styles are applied by semantic role (error code, location, line number, ...)
so exception formatting never names colors directly.
"""

from __future__ import annotations

import os
import re
import sys
from collections.abc import Mapping
from typing import Any, Literal

StyleName = Literal["bold", "dim", "red", "green", "yellow", "cyan", "bright_red"]

# SGR parameters per style name
_SGR: dict[str, int] = {
    "bold": 1,
    "dim": 2,
    "red": 31,
    "green": 32,
    "yellow": 33,
    "cyan": 36,
    "bright_red": 91,
}

_ROLES: dict[str, tuple[StyleName, ...]] = {
    "code": ("bright_red", "bold"),
    "location": ("cyan",),
    "lineno": ("yellow",),
    "error": ("bright_red",),
    "hint": ("green",),
    "muted": ("dim",),
}

_RESET = "\033[0m"
_SGR_SEQUENCE = re.compile(r"\033\[[0-9;]*m")


def _should_use_colors(
    environ: Mapping[str, str] = os.environ,
    stream: Any = None,
) -> bool:
    if environ.get("FORCE_COLOR"):
        return True
    if environ.get("NO_COLOR"):
        return False
    stream = sys.stdout if stream is None else stream
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


_USE_COLORS = _should_use_colors()


def supports_color() -> bool:
    return _USE_COLORS


def colorize(text: str, *styles: StyleName) -> str:
    """Wrap ``text`` in one SGR sequence for ``styles``.

    Unknown style names are ignored; with styling off (or nothing known to
    apply) the text comes back unchanged.

    Example:
        >>> colorize("Error", "red", "bold")  # with colors on
        '\\x1b[31;1mError\\x1b[0m'
    """
    if not _USE_COLORS:
        return text
    params = ";".join(str(_SGR[s]) for s in styles if s in _SGR)
    if not params:
        return text
    return f"\033[{params}m{text}{_RESET}"


def strip_colors(text: str) -> str:
    """Remove SGR sequences, e.g. to compare messages in tests."""
    return _SGR_SEQUENCE.sub("", text)


def _styled(role: str, text: str) -> str:
    return colorize(text, *_ROLES[role])


def error_code(text: str) -> str:
    return _styled("code", text)


def location(text: str) -> str:
    return _styled("location", text)


def line_number(text: str) -> str:
    return _styled("lineno", text)


def error_line(text: str) -> str:
    return _styled("error", text)


def hint(text: str) -> str:
    return _styled("hint", text)


def dim_text(text: str) -> str:
    return _styled("muted", text)


def format_error_header(code: str | None, message: str) -> str:
    """``W-PAR-001: message``, or just the message without a code."""
    return f"{error_code(code)}: {message}" if code else message


def format_source_line(lineno: int, content: str, is_error: bool = False) -> str:
    """One snippet line: ``>  4 | {{/item}}`` for the error line, ``   3 | ...`` otherwise."""
    gutter = line_number(f"{'>' if is_error else ' '}{lineno:>3}")
    body = error_line(content) if is_error else dim_text(content)
    return f"{gutter} | {body}"
