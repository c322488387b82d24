"""Circular, non-transitive dominance between breeds.

Breeds are arranged at regular intervals around a circle in id order. A
breed dominates those reachable by a shorter path counter-clockwise than
clockwise; with an even breed count, diametrically opposed breeds tie.
"""

from __future__ import annotations

from enum import Enum

from rps_arena.domain.random_source import RandomSource


def compare(challenger: int, defender: int, num_breeds: int) -> int:
    """Return > 0 if the challenger wins, < 0 if the defender wins, 0 on a tie."""
    if challenger == defender:
        return 0
    distance_clockwise = (defender - challenger + num_breeds) % num_breeds
    return 2 * distance_clockwise - num_breeds


def beats(a: int, b: int, num_breeds: int) -> bool:
    """True iff breed ``a`` defeats breed ``b``."""
    return compare(a, b, num_breeds) > 0


def wrap(value: int, size: int) -> int:
    """Map an index onto ``[0, size)`` with toroidal wraparound."""
    return value % size


class Direction(Enum):
    """Cardinal neighbour offsets as ``(row_offset, column_offset)``."""

    NORTH = (-1, 0)
    EAST = (0, 1)
    SOUTH = (1, 0)
    WEST = (0, -1)

    @property
    def row_offset(self) -> int:
        return self.value[0]

    @property
    def column_offset(self) -> int:
        return self.value[1]

    @classmethod
    def random(cls, rng: RandomSource) -> Direction:
        """Pick one direction uniformly, consuming a single draw."""
        return _DIRECTIONS[rng.randrange(len(_DIRECTIONS))]


_DIRECTIONS: tuple[Direction, ...] = tuple(Direction)
