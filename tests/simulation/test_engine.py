"""Tests for rps_arena.simulation.engine."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pyarrow.parquet as pq
import pytest

from rps_arena.config.constants import MAX_BATCH_WORK_UNITS
from rps_arena.config.types import ArenaConfig, BatchConfig, RunConfig
from rps_arena.io.schemas import POPULATION_HISTORY_SCHEMA, RUN_SUMMARY_SCHEMA
from rps_arena.simulation import engine
from rps_arena.simulation.engine import (
    deterministic_run_id,
    run_batch,
    run_to_absorption,
    summarize_batch,
)

SMALL = ArenaConfig(num_breeds=3, arena_size=4)


class TestRunToAbsorption:
    def test_small_arena_absorbs(self) -> None:
        result, history = run_to_absorption(SMALL, RunConfig(max_steps=1_000_000), seed=3)
        assert result.absorbed
        assert result.surviving_breeds == 1
        assert result.winner is not None
        assert history[-1]["populations"][result.winner] == 16
        assert result.generation <= result.steps

    def test_history_bounds_and_invariants(self) -> None:
        result, history = run_to_absorption(SMALL, RunConfig(sample_interval=5), seed=1)
        assert history[0]["step"] == 0
        assert history[0]["generation"] == 0
        assert history[0]["surviving_breeds"] >= 3
        assert history[-1]["step"] == result.steps
        steps = [row["step"] for row in history]
        assert steps == sorted(set(steps))
        for row in history:
            assert sum(row["populations"]) == 16
            assert set(row) == set(POPULATION_HISTORY_SCHEMA.names)

    def test_generation_is_monotonic(self) -> None:
        _, history = run_to_absorption(SMALL, RunConfig(sample_interval=1), seed=2)
        generations = [row["generation"] for row in history]
        assert generations == sorted(generations)

    def test_deterministic_for_seed(self) -> None:
        first = run_to_absorption(SMALL, RunConfig(), seed=9)
        second = run_to_absorption(SMALL, RunConfig(), seed=9)
        assert first == second

    def test_step_cap_leaves_run_unabsorbed(self, caplog: pytest.LogCaptureFixture) -> None:
        config = ArenaConfig(num_breeds=5, arena_size=20)
        with caplog.at_level(logging.WARNING, logger="rps_arena.simulation.engine"):
            result, history = run_to_absorption(config, RunConfig(max_steps=10), seed=0)
        assert not result.absorbed
        assert result.steps == 10
        assert result.winner is None
        assert [row["step"] for row in history] == [0, 10]
        assert "hit max_steps=10" in caplog.text

    def test_run_id(self) -> None:
        result, _ = run_to_absorption(SMALL, RunConfig(max_steps=1), seed=4)
        assert result.run_id == deterministic_run_id(SMALL, 4) == "n3_s4_seed4"
        named, _ = run_to_absorption(SMALL, RunConfig(max_steps=1), seed=4, run_id="custom")
        assert named.run_id == "custom"


class TestRunBatch:
    def _config(self, out_dir: Path, **kwargs: object) -> BatchConfig:
        return BatchConfig(
            arena=SMALL,
            run=RunConfig(max_steps=200_000, sample_interval=8),
            n_runs=3,
            base_seed=10,
            out_dir=out_dir,
            **kwargs,  # type: ignore[arg-type]
        )

    def test_writes_parquet_and_json(self, tmp_path: Path) -> None:
        results = run_batch(self._config(tmp_path))
        assert [r.seed for r in results] == [10, 11, 12]

        logs_dir = tmp_path / "logs"
        history = pq.read_table(logs_dir / "population_history.parquet")
        summary = pq.read_table(logs_dir / "run_summary.parquet")
        assert history.schema.names == POPULATION_HISTORY_SCHEMA.names
        assert summary.schema.names == RUN_SUMMARY_SCHEMA.names
        assert summary.num_rows == 3
        assert set(history.column("run_id").to_pylist()) == {r.run_id for r in results}
        assert summary.column("run_id").to_pylist() == [r.run_id for r in results]

        batch_summary = json.loads((logs_dir / "batch_summary.json").read_text())
        assert batch_summary["total_runs"] == 3
        assert batch_summary["absorbed"] + batch_summary["unabsorbed"] == 3

    def test_history_population_sums(self, tmp_path: Path) -> None:
        run_batch(self._config(tmp_path))
        history = pq.read_table(tmp_path / "logs" / "population_history.parquet")
        for populations in history.column("populations").to_pylist():
            assert sum(populations) == 16

    def test_history_flushes_mid_batch(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(engine, "FLUSH_THRESHOLD", 3)
        config = BatchConfig(
            arena=SMALL,
            run=RunConfig(max_steps=200_000, sample_interval=8),
            n_runs=4,
            base_seed=0,
            out_dir=tmp_path,
        )
        run_batch(config)
        expected_rows = sum(
            len(run_to_absorption(SMALL, config.run, seed=seed)[1]) for seed in range(4)
        )
        parquet_file = pq.ParquetFile(tmp_path / "logs" / "population_history.parquet")
        assert parquet_file.metadata.num_row_groups > 1
        assert parquet_file.metadata.num_rows == expected_rows

    def test_rejects_oversized_workload(self, tmp_path: Path) -> None:
        config = BatchConfig(
            arena=SMALL,
            run=RunConfig(max_steps=MAX_BATCH_WORK_UNITS),
            n_runs=2,
            out_dir=tmp_path,
        )
        with pytest.raises(ValueError, match="safety threshold"):
            run_batch(config)
        assert not (tmp_path / "logs").exists()


class TestSummarizeBatch:
    def test_counts_winners(self) -> None:
        results = [
            run_to_absorption(SMALL, RunConfig(), seed=seed)[0] for seed in range(4)
        ]
        summary = summarize_batch(results)
        assert summary["total_runs"] == 4
        assert summary["absorbed"] == 4
        assert sum(summary["winner_counts"].values()) == 4  # type: ignore[union-attr]
        assert summary["mean_absorption_generation"] == pytest.approx(
            sum(r.generation for r in results) / 4
        )

    def test_empty(self) -> None:
        summary = summarize_batch([])
        assert summary["absorbed"] == 0
        assert summary["mean_absorption_generation"] is None
