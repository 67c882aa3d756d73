"""Whisker Environment — configuration, partial loading and the template cache.

The Environment is the explicit configuration object of a Whisker setup: the
default delimiters every parse starts from, where partials come from, the
template cache parsed sources are memoized in, and the partial depth limit.

Thread-Safety:
An Environment is safe to share between threads once configured. Each parse
owns its own delimiter state, the cache is write-once per key, and renders
keep their state in locals and a ContextVar.

"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from whisker._types import DEFAULT_DELIMITERS, Delimiters
from whisker.environment.exceptions import TemplateNotFoundError
from whisker.environment.loaders import DictLoader, Loader
from whisker.template import Template, TemplateCache


def _as_loader(partials: Loader | Mapping[str, str] | None) -> Loader | None:
    if partials is None or hasattr(partials, "get_source"):
        return partials
    return DictLoader(partials)


class Environment:
    """Central configuration for parsing and rendering templates.

    Example:
            >>> env = Environment(loader={"user": "<b>{{name}}</b>"})
            >>> env.render("{{#users}}{{>user}}{{/users}}", {"users": [{"name": "Ann"}]})
            '<b>Ann</b>'

    Args:
        loader: Where partials come from; a loader or a plain name → source mapping
        delimiters: Default ``(open, close)`` pair every parse starts with
        cache: Template cache to parse through (a fresh one if omitted)
        max_partial_depth: Nesting limit for partials

    """

    def __init__(
        self,
        loader: Loader | Mapping[str, str] | None = None,
        *,
        delimiters: Delimiters | tuple[str, str] = DEFAULT_DELIMITERS,
        cache: TemplateCache | None = None,
        max_partial_depth: int = 100,
    ):
        if not isinstance(delimiters, Delimiters):
            delimiters = Delimiters(*delimiters)
        if max_partial_depth < 1:
            raise ValueError(f"max_partial_depth must be at least 1, got {max_partial_depth}")
        self._loader = _as_loader(loader)
        self._delimiters = delimiters
        self._cache = cache if cache is not None else TemplateCache()
        self._max_partial_depth = max_partial_depth

    @property
    def loader(self) -> Loader | None:
        return self._loader

    @property
    def delimiters(self) -> Delimiters:
        return self._delimiters

    @property
    def cache(self) -> TemplateCache:
        return self._cache

    @property
    def max_partial_depth(self) -> int:
        return self._max_partial_depth

    def from_string(self, source: str, name: str | None = None) -> Template:
        """Parse a template from source text.

        Raises:
            TemplateSyntaxError: If the source has malformed tags or sections
        """
        return Template(self, source, name)

    def get_template(self, name: str) -> Template:
        """Load and parse a template by name through the loader.

        Raises:
            TemplateNotFoundError: If there is no loader or it lacks ``name``
        """
        if self._loader is None:
            raise TemplateNotFoundError(f"Template '{name}' not found: no loader configured")
        source, _filename = self._loader.get_source(name)
        return Template(self, source, name)

    def render(
        self,
        source: str,
        data: Any = None,
        partials: Loader | Mapping[str, str] | None = None,
    ) -> str:
        """Parse and render ``source`` in one call.

        ``partials``, when given, replaces the environment's loader for this
        render only.
        """
        loader = _as_loader(partials) if partials is not None else self._loader
        return self.from_string(source).render_with(data, loader)

    def __repr__(self) -> str:
        d = self._delimiters
        return f"<Environment delimiters={d.open} {d.close} cached={len(self._cache)}>"
