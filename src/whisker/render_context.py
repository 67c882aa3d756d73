"""Whisker RenderContext — per-render state kept out of the user's data.

Partial inclusion depth and the chain of partials being rendered live in a
ContextVar rather than in the context stack, so user data never sees them
and concurrent renders in other threads or tasks each get their own.

"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field


@dataclass
class RenderContext:
    """Per-render state isolated from user context.

    Attributes:
        template_name: Current template or partial name for error messages
        partial_depth: Current partial nesting depth
        max_partial_depth: Maximum allowed partial nesting depth
        template_stack: Names of the partials enclosing the current one
    """

    template_name: str | None = None

    # Recursive partials are legal (tree rendering), but a partial that
    # includes itself unconditionally never terminates.
    partial_depth: int = 0
    max_partial_depth: int = 100

    template_stack: list[str] = field(default_factory=list)

    def check_partial_depth(self, partial_name: str) -> None:
        """Raise if including ``partial_name`` would exceed the depth limit.

        Raises:
            TemplateRuntimeError: If depth >= max_partial_depth
        """
        if self.partial_depth >= self.max_partial_depth:
            from whisker.environment.exceptions import TemplateRuntimeError

            raise TemplateRuntimeError(
                f"Maximum partial depth exceeded ({self.max_partial_depth}) "
                f"when including '{partial_name}'",
                template_name=self.template_name,
                suggestion="Check for partials that include themselves unconditionally",
                template_stack=self.template_stack,
            )

    def child_context(self, partial_name: str) -> RenderContext:
        """Create the context for rendering a partial one level deeper."""
        new_stack = self.template_stack.copy()
        new_stack.append(self.template_name or "<template>")
        return RenderContext(
            template_name=partial_name,
            partial_depth=self.partial_depth + 1,
            max_partial_depth=self.max_partial_depth,
            template_stack=new_stack,
        )


_render_context: ContextVar[RenderContext | None] = ContextVar(
    "whisker_render_context",
    default=None,
)


def get_render_context() -> RenderContext | None:
    """Get current render context (None if not in render)."""
    return _render_context.get()


@contextmanager
def render_context(
    template_name: str | None = None,
    max_partial_depth: int = 100,
) -> Iterator[RenderContext]:
    """Context manager for render-scoped state.

    Example:
        with render_context(template_name="page") as ctx:
            output = renderer.render(nodes, data, ContextStack())
    """
    ctx = RenderContext(template_name=template_name, max_partial_depth=max_partial_depth)
    token: Token[RenderContext | None] = _render_context.set(ctx)
    try:
        yield ctx
    finally:
        _render_context.reset(token)


def set_render_context(ctx: RenderContext) -> Token[RenderContext | None]:
    """Set a RenderContext and return the reset token.

    Low-level counterpart of ``render_context()`` for nested partial renders
    that restore the previous context manually.
    """
    return _render_context.set(ctx)


def reset_render_context(token: Token[RenderContext | None]) -> None:
    """Reset render context using a token from set_render_context."""
    _render_context.reset(token)
