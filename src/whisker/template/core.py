"""Whisker Template — a parsed template bound to its environment.

Templates are immutable after construction: the node sequence is parsed once
(through the environment's cache) and every ``render()`` builds only local
state, so one Template can be rendered from many threads at once.

"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from whisker.nodes import NodeSequence
from whisker.parser import parse
from whisker.render_context import render_context
from whisker.template.context import ContextStack
from whisker.template.renderer import Renderer

if TYPE_CHECKING:
    from whisker.environment.core import Environment
    from whisker.environment.loaders import Loader


class Template:
    """Parsed template ready for rendering.

    Example:
        >>> t = env.from_string("Hello, {{name}}!")
        >>> t.render(name="World")
        'Hello, World!'
        >>> t.render({"name": "World"})
        'Hello, World!'

    """

    __slots__ = ("_env", "_name", "_nodes", "_source")

    def __init__(self, env: Environment, source: str, name: str | None = None):
        self._env = env
        self._source = source
        self._name = name
        self._nodes = parse(source, env.cache, env.delimiters, name=name)

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def source(self) -> str:
        return self._source

    @property
    def nodes(self) -> NodeSequence:
        return self._nodes

    def render(self, *args: Any, **kwargs: Any) -> str:
        """Render template with given data.

        Args:
            *args: At most one data value (mapping, object, list or scalar)
            **kwargs: Names merged into a mapping scope

        Returns:
            Rendered template as string
        """
        if len(args) > 1:
            raise TypeError(f"render() takes at most 1 positional argument, got {len(args)}")
        data = args[0] if args else None
        if kwargs:
            if data is None:
                data = kwargs
            elif isinstance(data, Mapping):
                data = {**data, **kwargs}
            else:
                raise TypeError("Keyword arguments can only be merged into mapping data")
        return self.render_with(data, self._env.loader)

    def render_with(self, data: Any, loader: Loader | None) -> str:
        """Render with an explicit partial loader in place of the environment's."""
        with render_context(
            template_name=self._name,
            max_partial_depth=self._env.max_partial_depth,
        ):
            return Renderer(self._env, loader).render(self._nodes, data, ContextStack())

    def __repr__(self) -> str:
        return f"<Template {self._name or '(inline)'}>"
