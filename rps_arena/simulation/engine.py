"""Core simulation engine: seeded runs to absorption and batch persistence."""

from __future__ import annotations

import json
import logging
from collections import Counter
from dataclasses import asdict
from pathlib import Path
from random import Random

import pyarrow as pa
import pyarrow.parquet as pq

from rps_arena.config.constants import FLUSH_THRESHOLD, MAX_BATCH_WORK_UNITS
from rps_arena.config.types import ArenaConfig, BatchConfig, RunConfig, RunResult
from rps_arena.domain.arena import Arena
from rps_arena.io.schemas import (
    HISTORY_COLUMNS,
    RUN_SUMMARY_SCHEMA,
    RUN_SUMMARY_SCHEMA_VERSION,
)
from rps_arena.metrics.populations import (
    dominant_breed,
    population_entropy,
    same_breed_adjacency_fraction,
)
from rps_arena.simulation.persistence import flush_history_columns

logger = logging.getLogger(__name__)

HistoryRow = dict[str, object]


def deterministic_run_id(arena_config: ArenaConfig, seed: int) -> str:
    """Build a run ID that is stable across runs for identical inputs."""
    return f"n{arena_config.num_breeds}_s{arena_config.arena_size}_seed{seed}"


def _history_row(run_id: str, step: int, arena: Arena) -> HistoryRow:
    populations = arena.populations
    return {
        "run_id": run_id,
        "step": step,
        "generation": arena.generation,
        "surviving_breeds": arena.surviving_breeds,
        "population_entropy": population_entropy(populations),
        "dominant_breed": dominant_breed(populations),
        "same_breed_adjacency_fraction": same_breed_adjacency_fraction(arena.copy_grid()),
        "populations": list(populations),
    }


def run_to_absorption(
    arena_config: ArenaConfig,
    run_config: RunConfig | None = None,
    seed: int = 0,
    run_id: str | None = None,
) -> tuple[RunResult, list[HistoryRow]]:
    """Advance a freshly initialized arena until it is absorbed or the step cap is hit.

    History rows are sampled at step 0, every ``sample_interval`` advance
    calls, and at the final step.
    """
    run_config = run_config or RunConfig()
    run_id = run_id or deterministic_run_id(arena_config, seed)
    arena = arena_config.build(rng=Random(seed))
    arena.initialize()
    logger.debug(
        "run %s initialized after %d fill attempt(s) with %d breeds",
        run_id,
        arena.last_init_attempts,
        arena.surviving_breeds,
    )

    interval = run_config.resolved_sample_interval(arena_config.arena_size)
    history = [_history_row(run_id, 0, arena)]
    steps = 0
    while steps < run_config.max_steps and not arena.is_absorbed:
        arena.advance()
        steps += 1
        if steps % interval == 0:
            history.append(_history_row(run_id, steps, arena))
    if steps % interval != 0:
        history.append(_history_row(run_id, steps, arena))

    absorbed = arena.is_absorbed
    result = RunResult(
        run_id=run_id,
        seed=seed,
        num_breeds=arena.num_breeds,
        arena_size=arena.arena_size,
        absorbed=absorbed,
        steps=steps,
        generation=arena.generation,
        surviving_breeds=arena.surviving_breeds,
        winner=dominant_breed(arena.populations) if absorbed else None,
    )
    if absorbed:
        logger.info(
            "run %s absorbed by breed %s at generation %d (%d steps)",
            run_id,
            result.winner,
            result.generation,
            steps,
        )
    else:
        logger.warning(
            "run %s hit max_steps=%d with %d breeds surviving",
            run_id,
            run_config.max_steps,
            result.surviving_breeds,
        )
    return result, history


def summarize_batch(results: list[RunResult]) -> dict[str, object]:
    """Aggregate absorption counts, winners, and mean absorption generation."""
    absorbed = [r for r in results if r.absorbed]
    winners = Counter(r.winner for r in absorbed)
    mean_generation = (
        sum(r.generation for r in absorbed) / len(absorbed) if absorbed else None
    )
    return {
        "total_runs": len(results),
        "absorbed": len(absorbed),
        "unabsorbed": len(results) - len(absorbed),
        "winner_counts": {str(breed): count for breed, count in sorted(winners.items())},
        "mean_absorption_generation": mean_generation,
    }


def run_batch(config: BatchConfig) -> list[RunResult]:
    """Run seeded simulations and persist Parquet/JSON outputs under ``out_dir/logs``."""
    if config.work_units > MAX_BATCH_WORK_UNITS:
        raise ValueError("batch workload exceeds safety threshold; reduce n_runs/max_steps")

    logs_dir = Path(config.out_dir) / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    history_log_path = logs_dir / "population_history.parquet"

    history_writer: pq.ParquetWriter | None = None
    history_columns: dict[str, list[object]] = {name: [] for name in HISTORY_COLUMNS}
    results: list[RunResult] = []

    try:
        for i in range(config.n_runs):
            seed = config.base_seed + i
            result, history = run_to_absorption(config.arena, config.run, seed=seed)
            results.append(result)
            for row in history:
                for name in HISTORY_COLUMNS:
                    history_columns[name].append(row[name])
            if len(history_columns["run_id"]) >= FLUSH_THRESHOLD:
                history_writer = flush_history_columns(
                    history_columns, history_log_path, history_writer
                )
        history_writer = flush_history_columns(history_columns, history_log_path, history_writer)
    finally:
        if history_writer is not None:
            history_writer.close()

    summary_rows = [
        {"schema_version": RUN_SUMMARY_SCHEMA_VERSION, **asdict(result)} for result in results
    ]
    pq.write_table(
        pa.Table.from_pylist(summary_rows, schema=RUN_SUMMARY_SCHEMA),
        logs_dir / "run_summary.parquet",
    )
    (logs_dir / "batch_summary.json").write_text(
        json.dumps(summarize_batch(results), ensure_ascii=False, indent=2)
    )
    logger.info("batch of %d runs written to %s", len(results), logs_dir)
    return results
