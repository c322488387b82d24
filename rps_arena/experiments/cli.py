"""CLI entrypoint for seeded arena batches.

This module owns CLI argument parsing and config resolution. Domain logic
lives in ``rps_arena.domain`` and the batch engine in
``rps_arena.simulation.engine``.
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from rps_arena.config.constants import (
    DEFAULT_ARENA_SIZE,
    DEFAULT_MAX_STEPS,
    DEFAULT_NUM_BREEDS,
)
from rps_arena.config.types import ArenaConfig, BatchConfig, RunConfig
from rps_arena.simulation.engine import run_batch, summarize_batch

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# ---------------------------------------------------------------------------
# Coercion helpers
# ---------------------------------------------------------------------------


def _coerce_int(raw: object, key: str) -> int:
    """Coerce raw value to int; rejects booleans and non-integer floats."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be an integer value")
    if isinstance(raw, float):
        if raw != int(raw):
            raise ValueError(f"{key} must be an integer value, got {raw!r}")
        return int(raw)
    if isinstance(raw, (int, str)):
        try:
            return int(raw)
        except ValueError as exc:
            raise ValueError(f"{key} must be an integer value, got {raw!r}") from exc
    raise ValueError(f"{key} must be an integer value")


def _coerce_str(raw: object, key: str) -> str:
    """Coerce raw value to str; rejects booleans."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be a string-coercible value")
    if isinstance(raw, (str, Path, int, float)):
        return str(raw)
    raise ValueError(f"{key} must be a string-coercible value")


def _get_val(cli_val: object, key: str, file_cfg: dict[str, object], default: object) -> object:
    """CLI > file > default resolution."""
    if cli_val is not None:
        return cli_val
    return file_cfg.get(key, default)


def _get_int(cli_val: int | None, key: str, file_cfg: dict[str, object], default: int) -> int:
    """CLI > file > default resolution for integer values."""
    return _coerce_int(_get_val(cli_val, key, file_cfg, default), key)


def _get_optional_int(
    cli_val: int | None, key: str, file_cfg: dict[str, object]
) -> int | None:
    """CLI > file resolution for integer values that may be left unset."""
    raw = _get_val(cli_val, key, file_cfg, None)
    return None if raw is None else _coerce_int(raw, key)


def _get_str(cli_val: str | None, key: str, file_cfg: dict[str, object], default: str) -> str:
    """CLI > file > default resolution for string values."""
    return _coerce_str(_get_val(cli_val, key, file_cfg, default), key)


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        description="Run seeded Rock-Paper-Scissors arenas until absorption"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI args override file values)",
    )
    parser.add_argument("--num-breeds", type=int, default=None)
    parser.add_argument("--arena-size", type=int, default=None)
    parser.add_argument("--n-runs", type=int, default=None)
    parser.add_argument("--seed", type=int, default=None, help="seed of the first run")
    parser.add_argument("--max-steps", type=int, default=None)
    parser.add_argument(
        "--sample-interval",
        type=int,
        default=None,
        help="advance calls between history rows (default: one sweep, size**2)",
    )
    parser.add_argument("--out-dir", type=Path, default=None)
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, default=None)
    return parser


# ---------------------------------------------------------------------------
# Main CLI
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for batch execution.

    Supports ``--config path/to/config.json`` for reproducibility. CLI
    arguments override config-file values; config-file values override
    built-in defaults.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    file_cfg: dict[str, object] = {}
    if args.config is not None:
        try:
            file_cfg = json.loads(Path(args.config).read_text())
        except FileNotFoundError:
            parser.error(f"Config file not found: {args.config}")
        except json.JSONDecodeError as exc:
            parser.error(f"Config file is not valid JSON: {args.config}: {exc}")
        if not isinstance(file_cfg, dict):
            parser.error(f"Config file must contain a JSON object: {args.config}")

    try:
        log_level = _get_str(args.log_level, "log_level", file_cfg, "WARNING").upper()
        if log_level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        batch_config = BatchConfig(
            arena=ArenaConfig(
                num_breeds=_get_int(args.num_breeds, "num_breeds", file_cfg, DEFAULT_NUM_BREEDS),
                arena_size=_get_int(args.arena_size, "arena_size", file_cfg, DEFAULT_ARENA_SIZE),
            ),
            run=RunConfig(
                max_steps=_get_int(args.max_steps, "max_steps", file_cfg, DEFAULT_MAX_STEPS),
                sample_interval=_get_optional_int(
                    args.sample_interval, "sample_interval", file_cfg
                ),
            ),
            n_runs=_get_int(args.n_runs, "n_runs", file_cfg, 10),
            base_seed=_get_int(args.seed, "seed", file_cfg, 0),
            out_dir=Path(_get_str(args.out_dir, "out_dir", file_cfg, "data")),
        )
    except ValueError as exc:
        parser.error(str(exc))

    logging.basicConfig(
        level=getattr(logging, log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info(
        "running %d arena(s): num_breeds=%d arena_size=%d",
        batch_config.n_runs,
        batch_config.arena.num_breeds,
        batch_config.arena.arena_size,
    )

    results = run_batch(batch_config)
    summary = {
        "num_breeds": batch_config.arena.num_breeds,
        "arena_size": batch_config.arena.arena_size,
        "out_dir": str(batch_config.out_dir),
        **summarize_batch(results),
    }
    print(json.dumps(summary, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
