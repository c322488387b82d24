"""Toroidal arena hosting a non-transitive competitive ecosystem.

With 3 breeds the ecosystem is an evolutionary game of Rock-Paper-Scissors;
any larger breed count generalises it through the circular dominance rule in
``rps_arena.domain.dominance``.

The arena is a stochastic CA: each ``advance()`` picks a random challenger
cell and one of its four toroidal neighbours as the defender. Unless they
tie, the loser's cell is overwritten with the winner's breed. Population
counts and the surviving-breed count are maintained incrementally and always
equal a literal recount of the grid.

Instances are not thread-safe. Callers sharing one arena across threads must
serialise ``advance()`` and ``snapshot()`` themselves (see
``rps_arena.simulation.runner``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from rps_arena.config.constants import MIN_INITIAL_BREEDS
from rps_arena.domain.dominance import Direction, compare, wrap
from rps_arena.domain.errors import CapacityError
from rps_arena.domain.random_source import RandomSource, default_random_source

if TYPE_CHECKING:
    from rps_arena.config.types import ArenaConfig

CELL_DTYPE = np.int32
"""Storage type of grid cells."""


class Arena:
    """Square toroidal grid of breeds with a one-competition-per-step update."""

    def __init__(self, config: ArenaConfig, rng: RandomSource | None = None) -> None:
        self._num_breeds = config.num_breeds
        self._arena_size = config.arena_size
        self._rng = rng if rng is not None else default_random_source()
        self._grid = np.zeros((self._arena_size, self._arena_size), dtype=CELL_DTYPE)
        self._populations = [0] * self._num_breeds
        self._surviving_breeds = 0
        self._generation = 0
        self.last_init_attempts = 0

    @classmethod
    def create(
        cls,
        num_breeds: int | None = None,
        arena_size: int | None = None,
        rng: RandomSource | None = None,
    ) -> Arena:
        """Validate parameters and return an uninitialized arena.

        Omitted parameters fall back to the ``ArenaConfig`` defaults.
        """
        from rps_arena.config.types import ArenaConfig

        kwargs: dict[str, int] = {}
        if num_breeds is not None:
            kwargs["num_breeds"] = num_breeds
        if arena_size is not None:
            kwargs["arena_size"] = arena_size
        return cls(ArenaConfig(**kwargs), rng=rng)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self) -> None:
        """Fill every cell with a uniformly random breed and reset the generation.

        Fills containing fewer than 3 distinct breeds are rejected and redrawn
        in full, so even a 2 x 2 arena never starts degenerate.
        """
        size = self._arena_size
        num_breeds = self._num_breeds
        randrange = self._rng.randrange
        attempts = 0
        while True:
            attempts += 1
            populations = [0] * num_breeds
            surviving = 0
            rows: list[list[int]] = []
            for _ in range(size):
                row = []
                for _ in range(size):
                    breed = randrange(num_breeds)
                    if populations[breed] == 0:
                        surviving += 1
                    populations[breed] += 1
                    row.append(breed)
                rows.append(row)
            if surviving >= MIN_INITIAL_BREEDS:
                break
        self._grid[:, :] = rows
        self._populations = populations
        self._surviving_breeds = surviving
        self._generation = 0
        self.last_init_attempts = attempts

    def advance(self) -> None:
        """Run a single competition, unless only one breed (or none) survives."""
        if self._surviving_breeds <= 1:
            return
        size = self._arena_size
        grid = self._grid
        challenger_row = self._rng.randrange(size)
        challenger_col = self._rng.randrange(size)
        direction = Direction.random(self._rng)
        defender_row = wrap(challenger_row + direction.row_offset, size)
        defender_col = wrap(challenger_col + direction.column_offset, size)
        challenger = grid.item(challenger_row, challenger_col)
        defender = grid.item(defender_row, defender_col)

        comparison = compare(challenger, defender, self._num_breeds)
        if comparison > 0:
            winner, loser = challenger, defender
            grid[defender_row, defender_col] = winner
        elif comparison < 0:
            winner, loser = defender, challenger
            grid[challenger_row, challenger_col] = winner
        else:
            return
        self._populations[winner] += 1
        self._populations[loser] -= 1
        if self._populations[loser] == 0:
            self._surviving_breeds -= 1
        self._generation += 1

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def snapshot(self, dest: np.ndarray) -> None:
        """Copy the grid into the top-left corner of a caller-supplied 2-D buffer.

        Raises:
            CapacityError: if ``dest`` is not 2-D or is smaller than the grid in
                either dimension. ``dest`` is left untouched in that case.
        """
        size = self._arena_size
        shape = getattr(dest, "shape", None)
        if shape is None or len(shape) != 2 or shape[0] < size or shape[1] < size:
            raise CapacityError(
                f"snapshot destination must be at least {size}x{size}, got shape {shape}"
            )
        dest[:size, :size] = self._grid

    def copy_grid(self) -> np.ndarray:
        """Return an independent copy of the grid."""
        return self._grid.copy()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def num_breeds(self) -> int:
        """Configured breed count; see ``surviving_breeds`` for non-extinct ones."""
        return self._num_breeds

    @property
    def arena_size(self) -> int:
        return self._arena_size

    @property
    def surviving_breeds(self) -> int:
        return self._surviving_breeds

    @property
    def generation(self) -> int:
        """Decisive competitions since the last ``initialize()``."""
        return self._generation

    @property
    def is_absorbed(self) -> bool:
        """True when every breed but one is extinct."""
        return self._surviving_breeds == 1

    @property
    def populations(self) -> tuple[int, ...]:
        return tuple(self._populations)

    def __repr__(self) -> str:
        return (
            f"Arena(num_breeds={self._num_breeds}, arena_size={self._arena_size}, "
            f"generation={self._generation}, surviving_breeds={self._surviving_breeds})"
        )
