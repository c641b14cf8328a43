"""Shared fixtures for the pyskiplist test-suite."""
import logging
from random import Random

import pytest

from pyskiplist import SkipList
from pyskiplist.config import LOGGER_NAME


class ScriptedRandom:
    """Stand-in for :class:`random.Random` that replays fixed draws.

    Once the script runs out every draw ends the coin-flip run.
    """

    def __init__(self, draws):
        self._draws = iter(draws)

    def random(self):
        return next(self._draws, 0.9)


def flips_for(*heights):
    """Draw sequence producing the given uncapped insertion heights."""
    draws = []
    for height in heights:
        draws.extend([0.0] * (height - 1))
        draws.append(0.9)
    return draws


def _check_well_formed(sl):
    base = list(sl.level(0))
    heights = sl.node_heights()
    assert len(base) == len(sl) == len(heights)
    assert all(a < b for a, b in zip(base, base[1:]))
    assert list(sl) == base
    assert sl.height >= 1
    assert all(1 <= h <= sl.height for h in heights)
    # every node of height h is linked, in order, into levels 0..h-1 only
    for i in range(1, sl.height):
        assert list(sl.level(i)) == [v for v, h in zip(base, heights) if h > i]


@pytest.fixture
def well_formed():
    """Callable asserting every structural invariant of a SkipList."""
    return _check_well_formed


@pytest.fixture
def scripted():
    """Build a SkipList whose insertion heights are fixed in advance."""
    def make(*heights):
        return SkipList(rng=ScriptedRandom(flips_for(*heights)))
    return make


@pytest.fixture(params=[7, 42, 1234])
def seeded(request):
    """SkipList driven by a seeded generator (one instance per seed)."""
    return SkipList(rng=Random(request.param))


@pytest.fixture
def clean_logger():
    """Restore the package logger after a test reconfigures it."""
    logger = logging.getLogger(LOGGER_NAME)
    yield logger
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
