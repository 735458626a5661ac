"""Shared test fixtures for cycle-finder tests."""

import itertools
from dataclasses import dataclass

import pytest


# ─────────────────────────────────────────────────────────────────────
# MOCK DATA
# ─────────────────────────────────────────────────────────────────────

SAMPLE_DISH = """\
O....#....
O.OO#....#
.....##...
OO.#O....O
.O.....O#.
O.#..O.#.#
..O..#O..O
.......O..
#....###..
#OO..#....
"""

SAMPLE_DISH_AFTER_ONE_SPIN = """\
.....#....
....#...O#
...OO##...
.OO#......
.....OOO#.
.O#...O#.#
....O#....
......OOOO
#...O###..
#..OO#....
"""


@dataclass
class Person:
    """Mutable, unhashable state used to exercise custom equality."""

    name: str
    visits: int = 0


# ─────────────────────────────────────────────────────────────────────
# FIXTURES
# ─────────────────────────────────────────────────────────────────────

@pytest.fixture
def sample_dish_text():
    """Return the sample reflector dish grid."""
    return SAMPLE_DISH


@pytest.fixture
def sample_dish_after_one_spin():
    """Return the sample dish after one spin cycle."""
    return SAMPLE_DISH_AFTER_ONE_SPIN


@pytest.fixture
def counting_sequence():
    """Infinite generator wrapper that records how many values were pulled."""

    class CountingSequence:
        def __init__(self, values):
            self._values = values
            self.pulled = 0

        def __iter__(self):
            for value in self._values:
                self.pulled += 1
                yield value

    return CountingSequence


@pytest.fixture
def periodic():
    """Build an infinite sequence: prefix followed by a repeating period."""

    def build(prefix, period):
        return itertools.chain(prefix, itertools.cycle(period))

    return build
