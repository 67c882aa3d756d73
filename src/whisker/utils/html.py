"""HTML escaping for interpolated values.

Single-pass escaping via ``str.translate()``. Only the four characters that
matter in HTML text and double-quoted attributes are replaced; apostrophes
pass through unchanged.

Escaping is not idempotent: ``&amp;`` escapes to ``&amp;amp;``. The renderer
applies it exactly once per interpolated value.
"""

from __future__ import annotations

_ESCAPE_TABLE = str.maketrans(
    {
        "&": "&amp;",
        '"': "&quot;",
        "<": "&lt;",
        ">": "&gt;",
    }
)


def html_escape(value: str) -> str:
    """Escape ``&``, ``"``, ``<`` and ``>`` in a string.

    Example:
        >>> html_escape('<b>&"</b>')
        '&lt;b&gt;&amp;&quot;&lt;/b&gt;'
    """
    return value.translate(_ESCAPE_TABLE)
