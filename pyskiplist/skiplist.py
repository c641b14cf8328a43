"""Skip list holding a strictly increasing sequence of unique elements.

Nodes live in an arena owned by the list and are addressed by integer
slots; a forward link is either the slot of the next node on that level
or ``None``. Slot 0 is the head sentinel: it carries no payload and its
height is the current number of levels.

Complexities (average case):
    • search    – O(log n)
    • insert    – O(log n)
    • delete    – O(log n)
    • rebalance – O(n log n)
    • last      – O(n) (walks the base level)

Heights are drawn with the classic 50 % branching factor: P(height >= k)
is 2^-(k-1). Insertion places no upper bound on the draw; only
:meth:`SkipList.rebalance` caps heights.

The list is single-threaded. Mutating it while an iterator is open makes
that iterator raise :class:`~pyskiplist.errors.ConcurrentModificationError`
on its next step.
"""
from __future__ import annotations

import logging
from collections.abc import Iterator
from random import Random
from typing import Generic, Optional, TypeVar

from .errors import ConcurrentModificationError

__all__ = ["SkipList"]

logger = logging.getLogger(__name__)

T = TypeVar("T")

_P = 0.5  # fair coin
_MIN_REBALANCE_HEIGHT = 4
_HEAD = 0  # arena slot reserved for the sentinel


class _Node(Generic[T]):
    __slots__ = ("payload", "forward")

    def __init__(self, payload: Optional[T], height: int):
        self.payload = payload
        self.forward: list[Optional[int]] = [None] * height

    @property
    def height(self) -> int:
        return len(self.forward)

    def resize(self, height: int) -> None:
        """Truncate or pad the link array to *height* levels."""
        del self.forward[height:]
        self.forward.extend([None] * (height - len(self.forward)))

    def __repr__(self) -> str:  # pragma: no cover
        return f"Node<{self.payload!r}:{self.height}>"


class SkipList(Generic[T]):
    """Ordered set of unique elements compared with ``<`` and ``==``.

    Parameters
    ----------
    rng: random.Random | None
        Source of coin flips for height draws. Defaults to an unseeded
        :class:`random.Random`; pass a seeded one for reproducible layouts.
    """

    def __init__(self, rng: Optional[Random] = None):
        self._rng = rng if rng is not None else Random()
        self._nodes: list[_Node[T]] = [_Node(None, 1)]
        self._free: list[int] = []
        self._size = 0
        self._mods = 0  # bumped on every level-0 change

    # ------------------------------------------------------------------
    # Query API
    # ------------------------------------------------------------------
    def search(self, target: T) -> bool:
        """Return whether *target* is present."""
        nodes = self._nodes
        x = _HEAD
        for i in reversed(range(self.height)):
            while (nxt := nodes[x].forward[i]) is not None and nodes[nxt].payload < target:  # type: ignore[operator]
                x = nxt
            if nxt is not None and nodes[nxt].payload == target:
                return True
        return False

    __contains__ = search

    def first(self) -> Optional[T]:
        """Smallest element, or ``None`` when empty."""
        slot = self._nodes[_HEAD].forward[0]
        return None if slot is None else self._nodes[slot].payload

    def last(self) -> Optional[T]:
        """Largest element, or ``None`` when empty."""
        nodes = self._nodes
        x = _HEAD
        while (nxt := nodes[x].forward[0]) is not None:
            x = nxt
        # The head's payload is None, which doubles as the empty marker.
        return nodes[x].payload

    def __len__(self) -> int:
        return self._size

    @property
    def height(self) -> int:
        """Number of levels currently held by the head sentinel."""
        return self._nodes[_HEAD].height

    # ------------------------------------------------------------------
    # Mutation API
    # ------------------------------------------------------------------
    def insert(self, value: T) -> bool:
        """Add *value*; return ``False`` if it was already present."""
        update = self._predecessors(value)
        nodes = self._nodes
        nxt = nodes[update[0]].forward[0]
        if nxt is not None and nodes[nxt].payload == value:
            return False
        height = self._random_height()
        head = nodes[_HEAD]
        if height > head.height:
            logger.debug("growing head from %d to %d levels", head.height, height)
            update.extend([_HEAD] * (height - head.height))
            head.resize(height)
        slot = self._alloc(value, height)
        node = nodes[slot]
        for i in range(height):
            prev = nodes[update[i]]
            node.forward[i] = prev.forward[i]
            prev.forward[i] = slot
        self._size += 1
        self._mods += 1
        return True

    def delete(self, value: T) -> bool:
        """Remove *value*; return ``False`` if it was not present."""
        update = self._predecessors(value)
        nodes = self._nodes
        slot = nodes[update[0]].forward[0]
        if slot is None or nodes[slot].payload != value:
            return False
        node = nodes[slot]
        for i in range(node.height):
            prev = nodes[update[i]]
            if prev.forward[i] == slot:
                prev.forward[i] = node.forward[i]
        self._release(slot)
        self._size -= 1
        self._mods += 1
        if not self._size:
            # drop the emptied shells along with the last element
            self._nodes = [nodes[_HEAD]]
            self._free = []
        self._shrink_head()
        return True

    def clear(self) -> None:
        """Drop every element and reset the head to a single level."""
        logger.debug("clearing %d elements", self._size)
        self._nodes = [_Node(None, 1)]
        self._free = []
        self._size = 0
        self._mods += 1

    def rebalance(self) -> None:
        """Redraw every node's height and rebuild the levels above 0.

        The new maximum height is ``max(4, ceil(log2(size)) + 1)``. Each
        node draws a fresh height in ``[1, max]``. Survivors are renumbered
        into a compacted arena so freed slots are dropped; the base-level
        order, and so iteration order and any open iterator, is preserved.
        """
        if not self._size:
            return
        # (size - 1).bit_length() == ceil(log2(size)) for size >= 1
        target = max(_MIN_REBALANCE_HEIGHT, (self._size - 1).bit_length() + 1)
        head = self._nodes[_HEAD]
        live = [self._nodes[slot] for slot in self._slots()]
        self._nodes = nodes = [head, *live]
        self._free = []
        head.resize(target)
        head.forward[0] = 1
        for slot, node in enumerate(live, start=1):
            node.resize(self._random_height(cap=target))
            node.forward[0] = slot + 1 if slot < len(live) else None
        for level in range(1, target):
            prev = head
            for slot in range(1, len(nodes)):
                node = nodes[slot]
                if node.height > level:
                    prev.forward[level] = slot
                    prev = node
            prev.forward[level] = None
        logger.debug("rebalanced %d nodes across %d levels", self._size, target)

    # ------------------------------------------------------------------
    # Iteration helpers (ordered)
    # ------------------------------------------------------------------
    def __iter__(self) -> Iterator[T]:
        mods = self._mods
        slot = self._nodes[_HEAD].forward[0]
        while slot is not None:
            # re-read the arena: rebalance may renumber slots mid-iteration
            node = self._nodes[slot]
            yield node.payload  # type: ignore[misc]
            if self._mods != mods:
                raise ConcurrentModificationError("skip list changed during iteration")
            slot = node.forward[0]

    def level(self, i: int) -> Iterator[T]:
        """Yield the elements linked into level *i*, in order."""
        if not 0 <= i < self.height:
            raise IndexError(f"level {i} out of range for height {self.height}")
        nodes = self._nodes
        slot = nodes[_HEAD].forward[i]
        while slot is not None:
            yield nodes[slot].payload  # type: ignore[misc]
            slot = nodes[slot].forward[i]

    def node_heights(self) -> list[int]:
        """Heights of the nodes in ascending element order."""
        return [self._nodes[slot].height for slot in self._slots()]

    def __repr__(self) -> str:
        return f"SkipList({list(self)!r})"

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _predecessors(self, value: T) -> list[int]:
        """Update set: the last slot before *value* on every level, top-down."""
        nodes = self._nodes
        update = [_HEAD] * self.height
        x = _HEAD
        for i in reversed(range(self.height)):
            while (nxt := nodes[x].forward[i]) is not None and nodes[nxt].payload < value:  # type: ignore[operator]
                x = nxt
            update[i] = x
        return update

    def _random_height(self, cap: Optional[int] = None) -> int:
        height = 1
        while (cap is None or height < cap) and self._rng.random() < _P:
            height += 1
        return height

    def _slots(self) -> Iterator[int]:
        nodes = self._nodes
        slot = nodes[_HEAD].forward[0]
        while slot is not None:
            yield slot
            slot = nodes[slot].forward[0]

    def _alloc(self, payload: T, height: int) -> int:
        node: _Node[T] = _Node(payload, height)
        if self._free:
            slot = self._free.pop()
            self._nodes[slot] = node
        else:
            slot = len(self._nodes)
            self._nodes.append(node)
        return slot

    def _release(self, slot: int) -> None:
        node = self._nodes[slot]
        node.payload = None
        node.forward.clear()
        self._free.append(slot)

    def _shrink_head(self) -> None:
        head = self._nodes[_HEAD]
        before = head.height
        while head.height > 1 and head.forward[-1] is None:
            head.forward.pop()
        if head.height != before:
            logger.debug("shrinking head from %d to %d levels", before, head.height)
