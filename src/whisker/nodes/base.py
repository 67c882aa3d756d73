"""Base node class for the Whisker node tree."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all nodes.

    Nodes are immutable once built, so a parsed node tree can be cached and
    shared between renders (and threads) freely.

    """
