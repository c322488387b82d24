"""Simulation layer: runs to absorption, batch persistence, background runner."""

from rps_arena.simulation.engine import run_batch, run_to_absorption, summarize_batch
from rps_arena.simulation.persistence import flush_history_columns
from rps_arena.simulation.runner import ArenaRunner, ArenaSnapshot

__all__ = [
    "ArenaRunner",
    "ArenaSnapshot",
    "flush_history_columns",
    "run_batch",
    "run_to_absorption",
    "summarize_batch",
]
