"""Exceptions for Whisker templates.

Exception Hierarchy:
TemplateError (base)
├── TemplateNotFoundError       # Partial/template not found by loader
├── TemplateSyntaxError         # Parse-time error
│   ├── MalformedTagError       # Unknown sigil or bad delimiter directive
│   └── MalformedSectionError   # Unclosed, unopened or mismatched section
└── TemplateRuntimeError        # Render-time error (partial recursion)

Missing names and missing partials are not errors: they render as the empty
string and the empty template respectively.

Example:
    ```
    W-PAR-001: Malformed tag: unknown sigil '%' at offset 6
      --> <template>:1:6
       |
    >  1 | Hello {{%name}}
       |         ^
       |
    ```

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from whisker.environment import terminal


class ErrorCode(Enum):
    """Searchable error codes for Whisker template errors.

    Format: W-{CATEGORY}-{NUMBER}
    Categories: PAR (parser), RUN (runtime), TPL (template loading)
    """

    # Parser errors (W-PAR-xxx)
    MALFORMED_TAG = "W-PAR-001"
    UNCLOSED_SECTION = "W-PAR-002"
    UNEXPECTED_END = "W-PAR-003"
    MISMATCHED_END = "W-PAR-004"

    # Runtime errors (W-RUN-xxx)
    PARTIAL_DEPTH = "W-RUN-001"

    # Template loading errors (W-TPL-xxx)
    TEMPLATE_NOT_FOUND = "W-TPL-001"

    @property
    def category(self) -> str:
        """Error category (e.g., 'parser', 'runtime', 'template')."""
        prefix = self.value.split("-")[1]
        return {
            "PAR": "parser",
            "RUN": "runtime",
            "TPL": "template",
        }.get(prefix, "unknown")


def format_template_stack(stack: list[str] | None) -> str:
    """Format the partial inclusion chain for error messages.

    Example:
        >>> print(format_template_stack(["page", "row"]))
        Template stack:
          • page
          • row
    """
    if not stack:
        return ""
    lines = [terminal.dim_text("Template stack:")]
    lines.extend(f"  • {terminal.location(name)}" for name in stack)
    return "\n".join(lines)


@dataclass(frozen=True, slots=True)
class SourceSnippet:
    """Template source context around an error line.

    Attributes:
        lines: Tuple of (line_number, line_content) pairs around the error.
        error_line: The 1-based line number where the error occurred.
        column: Optional column offset for caret pointer.
    """

    lines: tuple[tuple[int, str], ...]
    error_line: int
    column: int | None = None

    def format(self) -> str:
        """Format snippet in Rust-inspired diagnostic style with colors."""
        parts: list[str] = [terminal.dim_text("   |")]
        for lineno, content in self.lines:
            is_error = lineno == self.error_line
            parts.append(terminal.format_source_line(lineno, content, is_error=is_error))
        if self.column is not None:
            caret = " " * (self.column + 3) + "^"
            parts.append(f"{terminal.dim_text('   |')}{terminal.error_line(caret)}")
        parts.append(terminal.dim_text("   |"))
        return "\n".join(parts)


def locate(source: str, position: int) -> tuple[int, int]:
    """Convert an absolute offset to a (1-based line, 0-based column) pair."""
    lineno = source.count("\n", 0, position) + 1
    column = position - (source.rfind("\n", 0, position) + 1)
    return lineno, column


def build_source_snippet(
    source: str,
    error_line: int,
    *,
    context_lines: int = 2,
    column: int | None = None,
) -> SourceSnippet:
    """Build a SourceSnippet from template source.

    Args:
        source: Full template source text.
        error_line: 1-based line number of the error.
        context_lines: Number of lines to show before/after the error line.
        column: Optional column offset for caret pointer.
    """
    all_lines = source.splitlines()
    start = max(0, error_line - 1 - context_lines)
    end = min(len(all_lines), error_line + context_lines)
    lines = tuple((i + 1, all_lines[i]) for i in range(start, end))
    return SourceSnippet(lines=lines, error_line=error_line, column=column)


class TemplateError(Exception):
    """Base exception for all Whisker template errors.

    Example:
        >>> try:
        ...     env.render(source, data)
        ... except TemplateError as e:
        ...     log.error(e.format_compact())

    Attributes:
        code: Optional ErrorCode for searchable error identification.
    """

    code: ErrorCode | None = None

    def format_compact(self) -> str:
        """Format error as a one-line header prefixed with its error code."""
        header = str(self)
        if self.code and self.code.value not in header:
            header = terminal.format_error_header(self.code.value, header)
        return header


class TemplateNotFoundError(TemplateError):
    """Template or partial not found by any configured loader."""

    code: ErrorCode | None = ErrorCode.TEMPLATE_NOT_FOUND


class TemplateSyntaxError(TemplateError):
    """Parse-time syntax error in template source.

    ``position`` is the absolute offset of the offending tag. When ``source``
    is available, the message includes a snippet with a caret under it.
    """

    code: ErrorCode | None = None

    def __init__(
        self,
        message: str,
        *,
        position: int | None = None,
        source: str | None = None,
        name: str | None = None,
    ):
        self.message = message
        self.position = position
        self.source = source
        self.name = name
        self.lineno: int | None = None
        self.col_offset: int | None = None
        if source is not None and position is not None:
            self.lineno, self.col_offset = locate(source, position)
        super().__init__(self._format_message())

    def _location(self) -> str:
        location = self.name or "<template>"
        if self.lineno:
            location += f":{self.lineno}:{self.col_offset}"
        return location

    def _format_message(self) -> str:
        header = f"{self.message}\n  --> {terminal.location(self._location())}"
        if self.source and self.lineno:
            snippet = build_source_snippet(
                self.source, self.lineno, context_lines=0, column=self.col_offset
            )
            return f"{header}\n{snippet.format()}"
        return header

    def format_compact(self) -> str:
        """Format syntax error as structured terminal diagnostic."""
        code = self.code.value if self.code else None
        parts = [
            terminal.format_error_header(code, self.message),
            f"  --> {terminal.location(self._location())}",
        ]
        return "\n".join(parts)


class MalformedTagError(TemplateSyntaxError):
    """A tag with an unrecognized sigil, or a malformed ``=`` directive."""

    code: ErrorCode | None = ErrorCode.MALFORMED_TAG

    def __init__(
        self,
        sigil: str,
        *,
        position: int,
        source: str | None = None,
        name: str | None = None,
        message: str | None = None,
    ):
        self.sigil = sigil
        super().__init__(
            message or f"Malformed tag: unknown sigil {sigil!r} at offset {position}",
            position=position,
            source=source,
            name=name,
        )


class MalformedSectionError(TemplateSyntaxError):
    """Section tags that do not pair up.

    Raised for an end tag with no open section, an end tag naming a different
    section than the innermost open one, and a section that is never closed.
    """

    def __init__(
        self,
        message: str,
        *,
        section: str,
        code: ErrorCode,
        position: int,
        source: str | None = None,
        name: str | None = None,
    ):
        self.section = section
        self.code = code
        super().__init__(message, position=position, source=source, name=name)


class TemplateRuntimeError(TemplateError):
    """Render-time error with the partial inclusion chain.

    Attributes:
        message: Error description
        template_name: Template (or partial) being rendered
        suggestion: Actionable fix suggestion
        template_stack: Partial names from the outermost inward
    """

    code: ErrorCode | None = ErrorCode.PARTIAL_DEPTH

    def __init__(
        self,
        message: str,
        *,
        template_name: str | None = None,
        suggestion: str | None = None,
        template_stack: list[str] | None = None,
    ):
        self.message = message
        self.template_name = template_name
        self.suggestion = suggestion
        self.template_stack = template_stack or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [f"Runtime Error: {self.message}"]
        if self.template_name:
            parts.append(f"  Location: {terminal.location(self.template_name)}")
        if self.template_stack:
            parts.append(format_template_stack(self.template_stack))
        if self.suggestion:
            parts.append(f"  {terminal.hint('Suggestion:')} {self.suggestion}")
        return "\n".join(parts)
