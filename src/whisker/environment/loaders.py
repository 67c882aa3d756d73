"""Partial loaders for the Whisker environment.

Loaders supply partial source to the renderer. They implement
``get_source(name)`` returning ``(source, filename)`` and raise
``TemplateNotFoundError`` when the name is unknown; the renderer treats that
as an empty partial.

Built-in Loaders:
- ``DictLoader``: Partials from an in-memory mapping (the common case)
- ``FileSystemLoader``: ``{name}.mustache`` files from one or more directories
- ``ChoiceLoader``: Try multiple loaders in order
- ``FunctionLoader``: Wrap a callable as a loader

Custom Loaders:
Implement the Loader protocol:
    ```python
    class DatabaseLoader:
        def get_source(self, name: str) -> tuple[str, str | None]:
            row = db.query("SELECT source FROM partials WHERE name = ?", name)
            if not row:
                raise TemplateNotFoundError(f"Partial '{name}' not found")
            return row.source, f"db://{name}"
    ```

"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Protocol

from whisker.environment.exceptions import TemplateNotFoundError


class Loader(Protocol):
    def get_source(self, name: str) -> tuple[str, str | None]: ...


class DictLoader:
    """Load partials from an in-memory mapping of name → source.

    Example:
            >>> loader = DictLoader({"user": "<b>{{name}}</b>"})
            >>> loader.get_source("user")
            ('<b>{{name}}</b>', None)

    Raises:
        TemplateNotFoundError: If the name is not in the mapping

    """

    __slots__ = ("_mapping",)

    def __init__(self, mapping: Mapping[str, str]):
        self._mapping = mapping

    def get_source(self, name: str) -> tuple[str, None]:
        if name not in self._mapping:
            raise TemplateNotFoundError(f"Partial '{name}' not found")
        return self._mapping[name], None

    def list_templates(self) -> list[str]:
        return sorted(self._mapping.keys())


class FileSystemLoader:
    """Load partials from files named ``{name}{extension}``.

    Directories are searched in order; the first match wins:
        ```python
        loader = FileSystemLoader(["partials/custom/", "partials/default/"])
        ```

    Attributes:
        _paths: List of Path objects to search
        _extension: Suffix appended to partial names (default: ``.mustache``)
        _encoding: File encoding (default: utf-8)

    """

    __slots__ = ("_encoding", "_extension", "_paths")

    def __init__(
        self,
        paths: str | Path | list[str | Path],
        extension: str = ".mustache",
        encoding: str = "utf-8",
    ):
        if isinstance(paths, (str, Path)):
            paths = [paths]
        self._paths = [Path(p) for p in paths]
        self._extension = extension
        self._encoding = encoding

    def get_source(self, name: str) -> tuple[str, str]:
        """Load partial source from the filesystem."""
        for base in self._paths:
            path = base / f"{name}{self._extension}"
            if path.is_file():
                return path.read_text(self._encoding), str(path)

        raise TemplateNotFoundError(
            f"Partial '{name}' not found in: {', '.join(str(p) for p in self._paths)}"
        )

    def list_templates(self) -> list[str]:
        """List partial names (without extension) in all search paths."""
        names = set()
        for base in self._paths:
            if base.is_dir():
                for path in base.rglob(f"*{self._extension}"):
                    relative = path.relative_to(base).as_posix()
                    names.add(relative[: -len(self._extension)])
        return sorted(names)


class ChoiceLoader:
    """Try multiple loaders in order, returning the first match.

    Example:
            >>> custom = DictLoader({"nav": "<nav>Custom</nav>"})
            >>> default = DictLoader({"nav": "<nav>Default</nav>", "footer": "<footer/>"})
            >>> loader = ChoiceLoader([custom, default])
            >>> loader.get_source("footer")
            ('<footer/>', None)

    """

    __slots__ = ("_loaders",)

    def __init__(self, loaders: list[Loader]):
        self._loaders = loaders

    def get_source(self, name: str) -> tuple[str, str | None]:
        """Try each loader in order, return first match."""
        for loader in self._loaders:
            try:
                return loader.get_source(name)
            except TemplateNotFoundError:
                continue
        raise TemplateNotFoundError(
            f"Partial '{name}' not found in any of {len(self._loaders)} loaders"
        )

    def list_templates(self) -> list[str]:
        """Merge template lists from all loaders (deduplicated, sorted)."""
        names: set[str] = set()
        for loader in self._loaders:
            if hasattr(loader, "list_templates"):
                names.update(loader.list_templates())
        return sorted(names)


class FunctionLoader:
    """Wrap a callable as a partial loader.

    The function takes a partial name and returns its source, a
    ``(source, filename)`` tuple, or ``None`` if there is no such partial.

    Example:
            >>> def load(name):
            ...     return "Hello, {{name}}!" if name == "greeting" else None
            >>> env = Environment(loader=FunctionLoader(load))
            >>> env.render("{{>greeting}}", {"name": "World"})
            'Hello, World!'

    """

    __slots__ = ("_load_func",)

    def __init__(
        self,
        load_func: Callable[[str], str | tuple[str, str | None] | None],
    ):
        self._load_func = load_func

    def get_source(self, name: str) -> tuple[str, str | None]:
        """Call the load function and normalize the result."""
        result = self._load_func(name)

        if result is None:
            raise TemplateNotFoundError(f"Partial '{name}' not found")

        if isinstance(result, str):
            return result, "<function>"

        return result
