"""Exceptions raised by pyskiplist.

Misses are never errors: a duplicate insert or a delete/search for an
absent element is reported through a ``False`` return. Comparison faults
between incomparable elements surface as the ``TypeError`` raised by the
elements themselves.
"""

__all__ = [
    "SkipListError",
    "UnsupportedOperationError",
    "ConcurrentModificationError",
]


class SkipListError(Exception):
    """Base class for all pyskiplist errors."""


class UnsupportedOperationError(SkipListError, NotImplementedError):
    """The requested capability is deliberately not implemented."""


class ConcurrentModificationError(SkipListError, RuntimeError):
    """The structure changed while an iteration over it was open."""
