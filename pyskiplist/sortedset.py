"""``MutableSet`` adapter over :class:`~pyskiplist.skiplist.SkipList`.

Everything here is expressed through the list's primitives (search,
insert, delete, iterate and rebalance). Set algebra such as ``|=`` or
``&`` comes from the :class:`collections.abc.MutableSet` mixins.
"""
from __future__ import annotations

from collections.abc import Container, Iterable, Iterator, MutableSet, Set
from random import Random
from typing import Any, Generic, Optional, TypeVar

from .errors import UnsupportedOperationError
from .skiplist import SkipList

__all__ = ["SkipListSet"]

T = TypeVar("T")

_HASH_MASK = (1 << 64) - 1
_HASH_SIGN = 1 << 63


class SkipListSet(MutableSet, Generic[T]):
    """Sorted set of unique elements kept in a skip list.

    Example:
        >>> s = SkipListSet([5, 1, 3])
        >>> s.add(3)
        False
        >>> list(s)
        [1, 3, 5]
        >>> s.first(), s.last()
        (1, 5)
    """

    def __init__(self, items: Optional[Iterable[T]] = None, *, rng: Optional[Random] = None):
        self._list: SkipList[T] = SkipList(rng=rng)
        if items is not None:
            self.add_all(items)

    # ------------------------------------------------------------------
    # Set protocol
    # ------------------------------------------------------------------
    def __contains__(self, value: object) -> bool:
        return self._list.search(value)  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[T]:
        return iter(self._list)

    def __len__(self) -> int:
        return len(self._list)

    def add(self, value: T) -> bool:  # type: ignore[override]
        """Insert *value*; ``False`` if it was already present."""
        return self._list.insert(value)

    def remove(self, value: T) -> bool:  # type: ignore[override]
        """Delete *value*; ``False`` if it was absent."""
        return self._list.delete(value)

    def discard(self, value: T) -> None:
        self._list.delete(value)

    def clear(self) -> None:
        self._list.clear()

    def is_empty(self) -> bool:
        return not self._list

    def contains(self, value: T) -> bool:
        return self._list.search(value)

    # ------------------------------------------------------------------
    # Sorted-set API
    # ------------------------------------------------------------------
    def first(self) -> Optional[T]:
        return self._list.first()

    def last(self) -> Optional[T]:
        return self._list.last()

    def rebalance(self) -> None:
        self._list.rebalance()

    def node_heights(self) -> list[int]:
        """Heights of the underlying nodes in element order."""
        return self._list.node_heights()

    def comparator(self) -> None:
        """Always ``None``: elements are ordered by their own ``<``."""
        return None

    def sub_set(self, from_element: T, to_element: T) -> SkipListSet[T]:
        raise UnsupportedOperationError("sub_set views are not supported")

    def head_set(self, to_element: T) -> SkipListSet[T]:
        raise UnsupportedOperationError("head_set views are not supported")

    def tail_set(self, from_element: T) -> SkipListSet[T]:
        raise UnsupportedOperationError("tail_set views are not supported")

    # ------------------------------------------------------------------
    # Bulk operations
    # ------------------------------------------------------------------
    def add_all(self, items: Iterable[T]) -> bool:
        """Insert every item; ``True`` if at least one was new."""
        changed = False
        for item in items:
            if self._list.insert(item):
                changed = True
        return changed

    def remove_all(self, items: Iterable[T]) -> bool:
        """Delete every item; ``True`` if at least one was present."""
        changed = False
        for item in items:
            if self._list.delete(item):
                changed = True
        return changed

    def retain_all(self, items: Iterable[T]) -> bool:
        """Keep only elements also in *items*; ``True`` if any were dropped."""
        keep = items if isinstance(items, Container) else list(items)
        doomed = [value for value in self._list if value not in keep]
        for value in doomed:
            self._list.delete(value)
        return bool(doomed)

    def contains_all(self, items: Iterable[T]) -> bool:
        return all(self._list.search(item) for item in items)

    def to_list(self) -> list[T]:
        return list(self._list)

    # ------------------------------------------------------------------
    # Equality & hashing
    # ------------------------------------------------------------------
    def __eq__(self, other: Any) -> bool:
        if other is self:
            return True
        if not isinstance(other, Set):
            return NotImplemented
        if len(self) != len(other):
            return False
        return all(self._list.search(item) for item in other)

    def hash_code(self) -> int:
        """Sum of element hashes, wrapped to a signed 64-bit integer."""
        total = 0
        for value in self._list:
            total = (total + hash(value)) & _HASH_MASK
        return total - (1 << 64) if total & _HASH_SIGN else total

    def __hash__(self) -> int:
        # Must agree with frozenset, which compares equal via __eq__
        return self._hash()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_list()!r})"
