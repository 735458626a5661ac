"""
Parabolic reflector dish simulation.

A grid of round rocks (``O``), cube rocks (``#``) and empty space (``.``).
Tilting rolls every round rock as far as it can go in one direction;
a spin tilts north, west, south then east. After enough spins the
arrangement repeats, so the load after a billion spins is read back from
a detected cycle instead of being simulated.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

from cycle_finder.cycle_detection import find_cycle, find_value_at
from cycle_finder.parsers import to_lines

logger = logging.getLogger(__name__)

ROUND_ROCK = "O"
CUBE_ROCK = "#"
EMPTY = "."
VALID_CELLS = frozenset(ROUND_ROCK + CUBE_ROCK + EMPTY)


class Direction(str, Enum):
    NORTH = "north"
    WEST = "west"
    SOUTH = "south"
    EAST = "east"


SPIN_ORDER = (Direction.NORTH, Direction.WEST, Direction.SOUTH, Direction.EAST)


def _roll_line(line: str, toward_start: bool) -> str:
    """Roll round rocks along one line until each hits a cube rock or the edge."""
    segments = []
    for segment in line.split(CUBE_ROCK):
        rocks = segment.count(ROUND_ROCK)
        gaps = len(segment) - rocks
        if toward_start:
            segments.append(ROUND_ROCK * rocks + EMPTY * gaps)
        else:
            segments.append(EMPTY * gaps + ROUND_ROCK * rocks)
    return CUBE_ROCK.join(segments)


def _transpose(rows: tuple[str, ...]) -> tuple[str, ...]:
    return tuple("".join(column) for column in zip(*rows))


@dataclass(frozen=True)
class ReflectorDish:
    """Immutable, hashable snapshot of the dish."""

    rows: tuple[str, ...]

    @classmethod
    def parse(cls, data: str) -> "ReflectorDish":
        """Build a dish from puzzle text, ignoring blank lines."""
        lines = to_lines(data, skip_empty=True)
        if not lines:
            raise ValueError("dish input contains no rows")

        width = len(lines[0])
        for row_number, line in enumerate(lines, start=1):
            if len(line) != width:
                raise ValueError(
                    f"row {row_number} has {len(line)} columns, expected {width}"
                )
            unknown = set(line) - VALID_CELLS
            if unknown:
                raise ValueError(
                    f"row {row_number} contains unknown cells: {''.join(sorted(unknown))}"
                )
        return cls(tuple(lines))

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    def tilt(self, direction: Direction) -> "ReflectorDish":
        """New dish with every round rock rolled toward ``direction``."""
        direction = Direction(direction)
        if direction in (Direction.WEST, Direction.EAST):
            toward_start = direction is Direction.WEST
            return ReflectorDish(tuple(_roll_line(row, toward_start) for row in self.rows))

        toward_start = direction is Direction.NORTH
        columns = _transpose(self.rows)
        rolled = tuple(_roll_line(column, toward_start) for column in columns)
        return ReflectorDish(_transpose(rolled))

    def spin(self) -> "ReflectorDish":
        """One spin cycle: tilt north, west, south, east."""
        dish = self
        for direction in SPIN_ORDER:
            dish = dish.tilt(direction)
        return dish

    def total_load(self) -> int:
        """Load on the north support beams: each round rock weighs its distance from the south edge."""
        load = 0
        for row_index, row in enumerate(self.rows):
            load += row.count(ROUND_ROCK) * (self.row_count - row_index)
        return load

    def spin_states(self) -> Iterator["ReflectorDish"]:
        """Yield the dish after 0, 1, 2, ... spins (index 0 is this dish)."""
        dish = self
        while True:
            yield dish
            dish = dish.spin()

    def render(self) -> str:
        return "\n".join(self.rows)


def load_after_north_tilt(dish: ReflectorDish) -> int:
    return dish.tilt(Direction.NORTH).total_load()


def load_after_spins(
    dish: ReflectorDish, spins: int, max_iterations: Optional[int] = None
) -> int:
    """
    North beam load after ``spins`` spin cycles.

    Spins until the arrangement repeats, then reads the state at index
    ``spins`` back from the cycle.
    """
    if spins < 0:
        raise ValueError(f"spins must be >= 0, got {spins}")

    analysis = find_cycle(dish.spin_states(), max_iterations=max_iterations)
    logger.debug(
        "Dish repeats after %d spins (cycle length %d)",
        analysis.cycle_start_index,
        analysis.cycle_length,
    )
    return find_value_at(analysis, spins).total_load()
