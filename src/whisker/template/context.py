"""Context stack and name resolution.

A render walks a stack of scopes (mappings, objects or plain values). Names
resolve innermost-first; the stack itself is immutable, so pushing a scope
returns a new stack and sibling sections never see each other's scopes.

Resolved values are classified into a closed set of kinds that the renderer
dispatches on::

    SCALAR   str, numbers, bool, None (as "")
    LIST     sequences other than str/bytes
    RECORD   mappings and other objects; pushed as a scope
    LAMBDA   a callable producing text
    ABSENT   the name was not found anywhere

Callables:
A callable found during lookup is invoked with no arguments and its return
value used in its place. If that value is itself callable, or if the original
callable cannot be called without an argument (a section lambda such as
``lambda text: f"<b>{text}</b>"``), the result is a ``Lambda``.

Memoization:
Calling a ``Lambda`` with no arguments stores the text it returns back into
the owning scope under the looked-up name, so later lookups see plain text.
Only mutable mappings are written to. Calls with arguments (section lambdas)
are never memoized.

Arity:
A ``Lambda`` adapts to the wrapped callable. A section passes its raw body,
which is dropped for a callable that takes no arguments; an interpolation
passes nothing, and a callable that needs the text receives ``""``.

"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Iterator, Mapping, MutableMapping, Sequence
from dataclasses import dataclass
from enum import Enum
from numbers import Number
from typing import Any

_PRIMITIVES = (str, bytes, bytearray, Number, bool)


class ValueKind(Enum):
    SCALAR = "scalar"
    LIST = "list"
    RECORD = "record"
    LAMBDA = "lambda"
    ABSENT = "absent"


class Lambda:
    """Callable wrapper returned for lambda context values.

    Example:
            >>> data = {"now": lambda: lambda: "noon"}
            >>> value = ContextStack((data,)).resolve("now")
            >>> value.value()
            'noon'
            >>> data["now"]
            'noon'

    """

    __slots__ = ("_func", "_key", "_owner")

    def __init__(self, func: Callable[..., Any], owner: Any = None, key: str | None = None):
        self._func = func
        self._owner = owner
        self._key = key

    def __call__(self, *args: Any) -> str:
        if args and not _accepts(self._func, *args):
            args = ()
        elif not args and not _accepts(self._func):
            args = ("",)
        result = self._func(*args)
        text = "" if result is None else str(result)
        if not args:
            self._memoize(text)
        return text

    def _memoize(self, text: str) -> None:
        if self._key is not None and isinstance(self._owner, MutableMapping):
            self._owner[self._key] = text

    def __repr__(self) -> str:
        return f"Lambda({self._func!r})"


@dataclass(frozen=True, slots=True)
class ContextValue:
    """A resolved name, tagged with its kind."""

    kind: ValueKind
    value: Any = ""

    @property
    def is_empty(self) -> bool:
        """Falsey or an empty list: what makes an inverted section render."""
        if self.kind is ValueKind.ABSENT:
            return True
        if self.kind is ValueKind.LAMBDA:
            return False
        return not self.value

    def __str__(self) -> str:
        return str(self.value)


ABSENT = ContextValue(ValueKind.ABSENT, "")


def _is_function(value: Any) -> bool:
    return callable(value) and not isinstance(value, type)


def _accepts(func: Callable[..., Any], *args: Any) -> bool:
    """Whether ``func`` can be called with exactly ``args``."""
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        # Builtins without introspectable signatures
        return True
    try:
        signature.bind(*args)
    except TypeError:
        return False
    return True


def _accepts_no_arguments(func: Callable[..., Any]) -> bool:
    return _accepts(func)


def classify(value: Any) -> ContextValue:
    """Tag a plain (non-callable) value with its kind."""
    if value is None:
        return ContextValue(ValueKind.SCALAR, "")
    if isinstance(value, Lambda):
        return ContextValue(ValueKind.LAMBDA, value)
    if isinstance(value, _PRIMITIVES):
        return ContextValue(ValueKind.SCALAR, value)
    if isinstance(value, Mapping):
        return ContextValue(ValueKind.RECORD, value)
    if isinstance(value, Sequence):
        return ContextValue(ValueKind.LIST, value)
    return ContextValue(ValueKind.RECORD, value)


def coerce(value: Any, owner: Any = None, key: str | None = None) -> ContextValue:
    """Classify a looked-up value, invoking callables as described above."""
    if _is_function(value):
        if not _accepts_no_arguments(value):
            return ContextValue(ValueKind.LAMBDA, Lambda(value, owner, key))
        value = value()
        if _is_function(value):
            return ContextValue(ValueKind.LAMBDA, Lambda(value, owner, key))
    return classify(value)


def _get(scope: Any, key: str) -> tuple[bool, Any]:
    """Look ``key`` up in a single scope: (found, value)."""
    if isinstance(scope, Mapping):
        if key in scope:
            return True, scope[key]
        return False, None
    if scope is None or isinstance(scope, _PRIMITIVES):
        return False, None
    if isinstance(scope, Sequence):
        try:
            return True, scope[int(key)]
        except (ValueError, IndexError):
            return False, None
    if key.startswith("__"):
        return False, None
    if hasattr(scope, key):
        return True, getattr(scope, key)
    return False, None


class ContextStack:
    """Immutable stack of scopes, searched innermost-first.

    Example:
            >>> stack = ContextStack().push({"name": "outer"}).push({"name": "inner"})
            >>> stack.resolve("name").value
            'inner'
            >>> stack.resolve("missing").kind
            <ValueKind.ABSENT: 'absent'>

    """

    __slots__ = ("_scopes",)

    def __init__(self, scopes: tuple[Any, ...] = ()):
        self._scopes = scopes

    def push(self, scope: Any) -> ContextStack:
        """Return a new stack with ``scope`` on top."""
        return ContextStack((*self._scopes, scope))

    @property
    def top(self) -> Any:
        return self._scopes[-1] if self._scopes else None

    def __len__(self) -> int:
        return len(self._scopes)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._scopes)

    def resolve(self, name: str) -> ContextValue:
        """Resolve ``name`` (``.``, ``name`` or dotted ``a.b.c``) to a value.

        Never raises for a missing name; returns ``ABSENT`` instead.
        """
        if name == ".":
            if not self._scopes:
                return ABSENT
            return coerce(self._scopes[-1])

        head, *rest = name.split(".")
        for scope in reversed(self._scopes):
            found, value = _get(scope, head)
            if found:
                owner = scope
                break
        else:
            return ABSENT

        key = head
        for part in rest:
            if _is_function(value) and _accepts_no_arguments(value):
                value = value()
            found, child = _get(value, part)
            if not found:
                return ABSENT
            owner, value, key = value, child, part

        return coerce(value, owner, key)

    def __repr__(self) -> str:
        return f"ContextStack({list(self._scopes)!r})"
