"""Template cache: template text → parsed node sequence.

Keys are the exact template text plus the delimiter pair the text was parsed
under, so the same text always maps to the same node sequence. Each key is
written at most once.

The cache is additive and never evicts. A process that renders an unbounded
number of distinct template texts grows it without bound; give such callers
their own ``TemplateCache`` and ``clear()`` it as needed.

"""

from __future__ import annotations

import threading

from whisker._types import Delimiters
from whisker.nodes import NodeSequence

CacheKey = tuple[str, str, str]


class TemplateCache:
    """Write-once memo of parsed templates with hit/miss statistics.

    Example:
            >>> cache = TemplateCache()
            >>> cache.get("Hi", Delimiters()) is None
            True
            >>> cache.stats
            {'hits': 0, 'misses': 1}

    """

    __slots__ = ("_entries", "_lock", "_stats")

    def __init__(self) -> None:
        self._entries: dict[CacheKey, NodeSequence] = {}
        self._lock = threading.Lock()
        self._stats = {"hits": 0, "misses": 0}

    @staticmethod
    def _key(source: str, delimiters: Delimiters) -> CacheKey:
        return (delimiters.open, delimiters.close, source)

    def get(self, source: str, delimiters: Delimiters) -> NodeSequence | None:
        """Return the cached node sequence for ``source``, or None."""
        nodes = self._entries.get(self._key(source, delimiters))
        with self._lock:
            self._stats["hits" if nodes is not None else "misses"] += 1
        return nodes

    def store(self, source: str, delimiters: Delimiters, nodes: NodeSequence) -> NodeSequence:
        """Cache ``nodes`` under ``source`` unless already present.

        Returns whichever node sequence ends up cached, so concurrent parses
        of the same text converge on one shared result.
        """
        with self._lock:
            return self._entries.setdefault(self._key(source, delimiters), nodes)

    def __contains__(self, item: object) -> bool:
        """``(source, delimiters) in cache`` checks one key exactly.

        A bare ``source`` string matches text cached under any delimiters
        (a scan over all entries).
        """
        if isinstance(item, tuple):
            source, delimiters = item
            return self._key(source, delimiters) in self._entries
        return any(key[2] == item for key in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def stats(self) -> dict[str, int]:
        """Copy of the hit/miss counters."""
        return dict(self._stats)

    def clear(self) -> None:
        """Drop all entries and reset statistics."""
        with self._lock:
            self._entries.clear()
            self._stats = {"hits": 0, "misses": 0}
