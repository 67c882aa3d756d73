"""Renderer: node sequence + context stack → output text.

Each node type has a handler, looked up by class name. Handlers return the
text for their node; the renderer joins them.

Partials and lambda results are parsed on demand through the environment's
template cache. Partials and interpolation lambdas parse with the
environment's default delimiters; a section lambda's result parses with the
delimiters that were active where the section was opened.

"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from whisker._types import Delimiters
from whisker.environment.exceptions import TemplateNotFoundError
from whisker.nodes import InvertedSection, NodeSequence, Partial, Section, Text, Variable
from whisker.parser import parse
from whisker.render_context import (
    RenderContext,
    get_render_context,
    reset_render_context,
    set_render_context,
)
from whisker.template.context import ContextStack, ValueKind
from whisker.utils.html import html_escape

if TYPE_CHECKING:
    from whisker.environment.core import Environment
    from whisker.environment.loaders import Loader

logger = logging.getLogger(__name__)


def indent_lines(text: str, indent: str) -> str:
    """Prefix every line of ``text`` with ``indent``, except a trailing empty line.

    Example:
        >>> indent_lines("a\\nb\\n", "  ")
        '  a\\n  b\\n'
    """
    lines = text.split("\n")
    last = lines.pop()
    indented = [indent + line for line in lines]
    indented.append(indent + last if last else last)
    return "\n".join(indented)


class Renderer:
    """Evaluate node sequences against a context stack.

    A Renderer is bound to an environment (cache, default delimiters) and
    the loader partials come from. It keeps no per-render state.

    """

    __slots__ = ("_dispatch", "_env", "_loader")

    def __init__(self, env: Environment, loader: Loader | None):
        self._env = env
        self._loader = loader
        self._dispatch: dict[str, Callable[[Any, ContextStack], str]] = {
            "Text": self._render_text,
            "Variable": self._render_variable,
            "Partial": self._render_partial,
            "Section": self._render_section,
            "InvertedSection": self._render_inverted,
        }

    def render(self, nodes: NodeSequence, data: Any, stack: ContextStack) -> str:
        """Render ``nodes`` with ``data`` pushed onto ``stack`` (unless None)."""
        if data is not None:
            stack = stack.push(data)
        return self._render_nodes(nodes, stack)

    def _render_nodes(self, nodes: NodeSequence, stack: ContextStack) -> str:
        dispatch = self._dispatch
        return "".join(dispatch[type(node).__name__](node, stack) for node in nodes)

    def _render_fragment(self, source: str, stack: ContextStack, delimiters: Delimiters) -> str:
        """Parse and render text returned by a lambda."""
        nodes = parse(source, self._env.cache, delimiters)
        return self._render_nodes(nodes, stack)

    def _render_text(self, node: Text, stack: ContextStack) -> str:
        return node.literal

    def _render_variable(self, node: Variable, stack: ContextStack) -> str:
        value = stack.resolve(node.name)
        if value.kind is ValueKind.LAMBDA:
            text = self._render_fragment(value.value(), stack, self._env.delimiters)
        else:
            text = str(value)
        return html_escape(text) if node.escaped else text

    def _render_partial(self, node: Partial, stack: ContextStack) -> str:
        if self._loader is None:
            logger.debug(f"No partial loader; rendering partial '{node.name}' as empty")
            return ""
        try:
            source, _filename = self._loader.get_source(node.name)
        except TemplateNotFoundError:
            logger.debug(f"Partial '{node.name}' not found; rendering as empty")
            return ""

        ctx = get_render_context() or RenderContext(max_partial_depth=self._env.max_partial_depth)
        ctx.check_partial_depth(node.name)
        token = set_render_context(ctx.child_context(node.name))
        try:
            nodes = parse(source, self._env.cache, self._env.delimiters, name=node.name)
            text = self._render_nodes(nodes, stack)
        finally:
            reset_render_context(token)

        if node.indent:
            text = indent_lines(text, node.indent)
        return text

    def _render_section(self, node: Section, stack: ContextStack) -> str:
        value = stack.resolve(node.name)
        kind = value.kind

        if kind is ValueKind.ABSENT:
            return ""
        if kind is ValueKind.LIST:
            return "".join(self._render_nodes(node.body, stack.push(item)) for item in value.value)
        if kind is ValueKind.LAMBDA:
            return self._render_fragment(value.value(node.raw_body), stack, node.delimiters)
        if not value.value:
            return ""
        if kind is ValueKind.RECORD:
            stack = stack.push(value.value)
        return self._render_nodes(node.body, stack)

    def _render_inverted(self, node: InvertedSection, stack: ContextStack) -> str:
        if stack.resolve(node.name).is_empty:
            return self._render_nodes(node.body, stack)
        return ""

