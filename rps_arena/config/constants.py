"""Centralized defaults and safety caps for arena simulations.

Consuming modules should import from this module rather than defining
their own inline literals.
"""

from __future__ import annotations

MIN_NUM_BREEDS = 3
"""Smallest breed count that still forms a non-transitive cycle."""

MIN_ARENA_SIZE = 2
"""Smallest legal arena height and width."""

MIN_INITIAL_BREEDS = 3
"""Distinct breeds an initial fill must contain to be accepted."""

DEFAULT_NUM_BREEDS = 3
"""Breed count used when none is configured."""

DEFAULT_ARENA_SIZE = 50
"""Arena height and width used when none is configured."""

RUNNER_NUM_BREEDS = 5
"""Breed count of the arena a background runner starts with."""

RUNNER_ARENA_SIZE = 50
"""Arena size of the arena a background runner starts with."""

RUNNER_ITERATIONS_PER_BATCH = RUNNER_ARENA_SIZE * RUNNER_ARENA_SIZE // 20
"""Advance calls a runner performs between published snapshots."""

RUNNER_SLEEP_INTERVAL = 0.001
"""Seconds a runner sleeps between batches."""

DEFAULT_MAX_STEPS = 5_000_000
"""Advance calls allowed per run before it is cut off unabsorbed."""

FLUSH_THRESHOLD = 8_192
"""Flush history rows to Parquet once this in-memory row count is reached."""

MAX_BATCH_WORK_UNITS = 1_000_000_000
"""Safety cap on total advance calls across all runs of a batch."""
