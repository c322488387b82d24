"""Configuration layer: constants and typed config dataclasses."""

from rps_arena.config.constants import (
    DEFAULT_ARENA_SIZE,
    DEFAULT_MAX_STEPS,
    DEFAULT_NUM_BREEDS,
    FLUSH_THRESHOLD,
    MAX_BATCH_WORK_UNITS,
    MIN_ARENA_SIZE,
    MIN_INITIAL_BREEDS,
    MIN_NUM_BREEDS,
)
from rps_arena.config.types import (
    ArenaConfig,
    BatchConfig,
    RunConfig,
    RunnerConfig,
    RunResult,
)

__all__ = [
    "ArenaConfig",
    "BatchConfig",
    "DEFAULT_ARENA_SIZE",
    "DEFAULT_MAX_STEPS",
    "DEFAULT_NUM_BREEDS",
    "FLUSH_THRESHOLD",
    "MAX_BATCH_WORK_UNITS",
    "MIN_ARENA_SIZE",
    "MIN_INITIAL_BREEDS",
    "MIN_NUM_BREEDS",
    "RunConfig",
    "RunResult",
    "RunnerConfig",
]
