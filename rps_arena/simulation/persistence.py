"""Parquet persistence helpers for population history streams."""

from __future__ import annotations

from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq

from rps_arena.io.schemas import POPULATION_HISTORY_SCHEMA


def flush_history_columns(
    history_columns: dict[str, list[object]],
    history_log_path: Path,
    history_writer: pq.ParquetWriter | None,
) -> pq.ParquetWriter | None:
    """Write accumulated history rows to Parquet and clear in-memory buffers."""
    if not history_columns["run_id"]:
        return history_writer
    table = pa.Table.from_pydict(history_columns, schema=POPULATION_HISTORY_SCHEMA)
    if history_writer is None:
        history_writer = pq.ParquetWriter(history_log_path, POPULATION_HISTORY_SCHEMA)
    history_writer.write_table(table)
    for values in history_columns.values():
        values.clear()
    return history_writer
