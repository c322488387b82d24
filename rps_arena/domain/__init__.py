"""Domain layer: arena grid, dominance rule, random sources, and errors."""

from rps_arena.domain.arena import CELL_DTYPE, Arena
from rps_arena.domain.dominance import Direction, beats, compare, wrap
from rps_arena.domain.errors import ArenaError, CapacityError, ConfigurationError
from rps_arena.domain.random_source import (
    NumpyRandomSource,
    RandomSource,
    default_random_source,
)

__all__ = [
    "Arena",
    "ArenaError",
    "CELL_DTYPE",
    "CapacityError",
    "ConfigurationError",
    "Direction",
    "NumpyRandomSource",
    "RandomSource",
    "beats",
    "compare",
    "default_random_source",
    "wrap",
]
