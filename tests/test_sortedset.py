"""Tests for the SkipListSet MutableSet adapter."""
from collections.abc import MutableSet
from random import Random

import pytest

from pyskiplist import SkipListSet, UnsupportedOperationError


class Heavy:
    """Orderable value whose hash is deliberately huge."""

    def __init__(self, n):
        self.n = n

    def __lt__(self, other):
        return self.n < other.n

    def __eq__(self, other):
        return isinstance(other, Heavy) and self.n == other.n

    def __hash__(self):
        return 1 << 62


@pytest.fixture
def odds():
    """Set holding 1, 3, 5, 7, 9."""
    return SkipListSet([9, 1, 7, 3, 5], rng=Random(3))


def test_is_mutable_set(odds):
    """Test the collections.abc registration."""
    assert isinstance(odds, MutableSet)


def test_scenario_in_order():
    """Test first/last/iteration after out-of-order adds."""
    s = SkipListSet()
    for value in (1, 3, 5, 7, 2, 4, 6):
        s.add(value)
    assert s.first() == 1
    assert s.last() == 7
    assert list(s) == [1, 2, 3, 4, 5, 6, 7]
    assert len(s) == 7


def test_empty_set():
    """Test the empty markers and misses on an empty set."""
    s = SkipListSet()
    assert s.is_empty()
    assert not s
    assert s.first() is None
    assert s.last() is None
    assert s.remove(5) is False


def test_add_and_remove_return_flags(odds):
    """Test that add/remove report whether anything changed."""
    assert odds.add(4) is True
    assert odds.add(4) is False
    assert odds.remove(4) is True
    assert odds.remove(4) is False
    odds.discard(100)
    odds.discard(9)
    assert odds.to_list() == [1, 3, 5, 7]


def test_contains(odds):
    """Test membership checks."""
    assert 3 in odds
    assert 4 not in odds
    assert odds.contains(9)
    assert not odds.contains(0)


def test_range_views_unsupported(odds):
    """Test that sub-range views fail loudly."""
    with pytest.raises(UnsupportedOperationError):
        odds.sub_set(1, 5)
    with pytest.raises(UnsupportedOperationError):
        odds.head_set(5)
    with pytest.raises(NotImplementedError):
        odds.tail_set(5)


def test_comparator_is_natural(odds):
    """Test that no custom comparator is exposed."""
    assert odds.comparator() is None


def test_bulk_operations(odds):
    """Test add_all/remove_all/contains_all change flags."""
    assert odds.add_all([1, 3]) is False
    assert odds.add_all([2, 3]) is True
    assert odds.contains_all([1, 2, 3])
    assert not odds.contains_all([1, 4])
    assert odds.remove_all([100, 200]) is False
    assert odds.remove_all([2, 100]) is True
    assert odds.to_list() == [1, 3, 5, 7, 9]


def test_retain_all(odds):
    """Test retain_all with containers and one-shot iterables."""
    assert odds.retain_all([1, 3, 5, 7, 9, 11]) is False
    assert odds.retain_all(v for v in (3, 9)) is True
    assert odds.to_list() == [3, 9]


def test_equality():
    """Test order-independent equality against any Set."""
    a = SkipListSet([3, 1, 2])
    b = SkipListSet([2, 3, 1])
    assert a == b
    assert a == {1, 2, 3}
    assert a == frozenset({1, 2, 3})
    assert a != SkipListSet([1, 2])
    assert a != {1, 2, 4}
    assert a != [1, 2, 3]


def test_hash_matches_frozenset():
    """Test that sets equal to a frozenset also hash like it."""
    s = SkipListSet([3, 1, 2])
    f = frozenset({1, 2, 3})
    assert s == f
    assert hash(s) == hash(f)
    assert {f: "x"}.get(s) == "x"
    assert s in {f}
    assert hash(SkipListSet()) == hash(frozenset())


def test_hash_is_order_independent():
    """Test that equal sets hash equally regardless of insert order."""
    a = SkipListSet(range(50), rng=Random(1))
    b = SkipListSet(reversed(range(50)), rng=Random(2))
    assert hash(a) == hash(b)
    assert SkipListSet([1, 2, 3, 4, 5, 6, 7]).hash_code() == 28
    assert SkipListSet().hash_code() == 0


def test_hash_wraps_around():
    """Test that the hash sum wraps to a signed 64-bit value."""
    s = SkipListSet([Heavy(1), Heavy(2)])
    assert s.hash_code() == -(1 << 63)


def test_set_algebra(odds):
    """Test the operators inherited from MutableSet."""
    union = odds | {2}
    assert isinstance(union, SkipListSet)
    assert union.to_list() == [1, 2, 3, 5, 7, 9]
    assert (odds & {1, 9, 10}).to_list() == [1, 9]
    assert (odds - {1, 3}).to_list() == [5, 7, 9]
    odds |= {0}
    odds -= {9}
    assert odds.to_list() == [0, 1, 3, 5, 7]
    assert {1, 3} <= odds
    assert odds.isdisjoint({2, 4})


def test_pop_takes_smallest(odds):
    """Test that pop removes the first element."""
    assert odds.pop() == 1
    assert odds.first() == 3
    empty = SkipListSet()
    with pytest.raises(KeyError):
        empty.pop()


def test_clear_and_rebalance(odds):
    """Test clear and rebalance through the adapter."""
    odds.rebalance()
    assert odds.to_list() == [1, 3, 5, 7, 9]
    odds.clear()
    assert odds.is_empty()
    assert odds.to_list() == []


def test_unhashable_elements():
    """Test that comparable but unhashable elements are accepted."""
    s = SkipListSet([[2], [1], [2]])
    assert s.to_list() == [[1], [2]]
    assert s.retain_all([[2]]) is True
    assert s.to_list() == [[2]]


def test_type_mismatch_propagates(odds):
    """Test that incomparable additions raise TypeError."""
    with pytest.raises(TypeError):
        odds.add("x")
    assert len(odds) == 5


def test_repr(odds):
    """Test the debugging representation."""
    assert repr(odds) == "SkipListSet([1, 3, 5, 7, 9])"
