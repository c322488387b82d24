"""Parquet schema definitions for arena run artifacts.

Every module that writes or reads run logs works against these column
contracts.
"""

from __future__ import annotations

import pyarrow as pa

# ---------------------------------------------------------------------------
# Schema version constants
# ---------------------------------------------------------------------------

RUN_SUMMARY_SCHEMA_VERSION = 1

# ---------------------------------------------------------------------------
# Run schemas
# ---------------------------------------------------------------------------

POPULATION_HISTORY_SCHEMA = pa.schema(
    [
        ("run_id", pa.string()),
        ("step", pa.int64()),
        ("generation", pa.int64()),
        ("surviving_breeds", pa.int64()),
        ("population_entropy", pa.float64()),
        ("dominant_breed", pa.int64()),
        ("same_breed_adjacency_fraction", pa.float64()),
        ("populations", pa.list_(pa.int64())),
    ]
)

RUN_SUMMARY_SCHEMA = pa.schema(
    [
        ("schema_version", pa.int64()),
        ("run_id", pa.string()),
        ("seed", pa.int64()),
        ("num_breeds", pa.int64()),
        ("arena_size", pa.int64()),
        ("absorbed", pa.bool_()),
        ("steps", pa.int64()),
        ("generation", pa.int64()),
        ("surviving_breeds", pa.int64()),
        ("winner", pa.int64()),
    ]
)

HISTORY_COLUMNS = [field.name for field in POPULATION_HISTORY_SCHEMA]
"""Column order of population history rows."""
