"""pyskiplist: a probabilistic ordered set built on a skip list.

This package exposes the raw :class:`SkipList` (search/insert/delete/
rebalance over an arena of nodes) and :class:`SkipListSet`, a
``collections.abc.MutableSet`` adapter layered on top of it.
"""

from __future__ import annotations

__all__ = [
    "SkipList",
    "SkipListSet",
    "SkipListError",
    "UnsupportedOperationError",
    "ConcurrentModificationError",
]

from .errors import ConcurrentModificationError, SkipListError, UnsupportedOperationError
from .skiplist import SkipList
from .sortedset import SkipListSet
