"""Configuration dataclasses and result records for arena simulations.

All frozen dataclasses that parameterise single arenas, runs to absorption,
seeded batches, and the background runner live here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from numbers import Integral
from pathlib import Path
from typing import TYPE_CHECKING

from rps_arena.config.constants import (
    DEFAULT_ARENA_SIZE,
    DEFAULT_MAX_STEPS,
    DEFAULT_NUM_BREEDS,
    MIN_ARENA_SIZE,
    MIN_NUM_BREEDS,
    RUNNER_ARENA_SIZE,
    RUNNER_ITERATIONS_PER_BATCH,
    RUNNER_NUM_BREEDS,
    RUNNER_SLEEP_INTERVAL,
)
from rps_arena.domain.errors import ConfigurationError

if TYPE_CHECKING:
    from rps_arena.domain.arena import Arena
    from rps_arena.domain.random_source import RandomSource

__all__ = [
    "ArenaConfig",
    "BatchConfig",
    "RunConfig",
    "RunResult",
    "RunnerConfig",
]


def _is_int(value: object) -> bool:
    return isinstance(value, Integral) and not isinstance(value, bool)


# ---------------------------------------------------------------------------
# Result container
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RunResult:
    """Outcome of one seeded run toward absorption."""

    run_id: str
    seed: int
    num_breeds: int
    arena_size: int
    absorbed: bool
    steps: int
    generation: int
    surviving_breeds: int
    winner: int | None


# ---------------------------------------------------------------------------
# Config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ArenaConfig:
    """Validated construction parameters for an Arena."""

    num_breeds: int = DEFAULT_NUM_BREEDS
    arena_size: int = DEFAULT_ARENA_SIZE

    def __post_init__(self) -> None:
        if not _is_int(self.num_breeds) or self.num_breeds < MIN_NUM_BREEDS:
            raise ConfigurationError(f"num_breeds must be an integer >= {MIN_NUM_BREEDS}")
        if not _is_int(self.arena_size) or self.arena_size < MIN_ARENA_SIZE:
            raise ConfigurationError(f"arena_size must be an integer >= {MIN_ARENA_SIZE}")
        # Normalise numpy integers to plain ints.
        object.__setattr__(self, "num_breeds", int(self.num_breeds))
        object.__setattr__(self, "arena_size", int(self.arena_size))

    def build(self, rng: RandomSource | None = None) -> Arena:
        """Construct an uninitialized Arena from this configuration."""
        from rps_arena.domain.arena import Arena

        return Arena(self, rng=rng)


@dataclass(frozen=True)
class RunConfig:
    """Stopping and sampling controls for a run toward absorption."""

    max_steps: int = DEFAULT_MAX_STEPS
    sample_interval: int | None = None  # None -> one sweep (arena_size ** 2)

    def __post_init__(self) -> None:
        if self.max_steps < 1:
            raise ValueError("max_steps must be >= 1")
        if self.sample_interval is not None and self.sample_interval < 1:
            raise ValueError("sample_interval must be >= 1")

    def resolved_sample_interval(self, arena_size: int) -> int:
        """Return the sampling interval, defaulting to one sweep of the grid."""
        if self.sample_interval is not None:
            return self.sample_interval
        return arena_size * arena_size


@dataclass(frozen=True)
class BatchConfig:
    """Seeded batch of independent runs sharing one arena configuration."""

    arena: ArenaConfig = field(default_factory=ArenaConfig)
    run: RunConfig = field(default_factory=RunConfig)
    n_runs: int = 10
    base_seed: int = 0
    out_dir: Path = Path("data")

    def __post_init__(self) -> None:
        if self.n_runs < 1:
            raise ValueError("n_runs must be >= 1")

    @property
    def work_units(self) -> int:
        """Upper bound on advance calls across the whole batch."""
        return self.n_runs * self.run.max_steps


@dataclass(frozen=True)
class RunnerConfig:
    """Pacing and starting arena for a background runner."""

    num_breeds: int = RUNNER_NUM_BREEDS
    arena_size: int = RUNNER_ARENA_SIZE
    iterations_per_batch: int = RUNNER_ITERATIONS_PER_BATCH
    sleep_interval: float = RUNNER_SLEEP_INTERVAL

    def __post_init__(self) -> None:
        # Validates breed count and size with the arena's own rules.
        self.arena_config()
        if self.iterations_per_batch < 1:
            raise ValueError("iterations_per_batch must be >= 1")
        if self.sleep_interval < 0.0:
            raise ValueError("sleep_interval must be >= 0.0")

    def arena_config(self) -> ArenaConfig:
        return ArenaConfig(num_breeds=self.num_breeds, arena_size=self.arena_size)
