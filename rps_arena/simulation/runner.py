"""Background driver that advances one arena on a worker thread.

The worker owns all mutation of its arena. Readers on other threads only
ever see ``ArenaSnapshot`` copies published after each batch of advances,
so a snapshot may lag the live arena by one batch but is never torn.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

import numpy as np

from rps_arena.config.types import ArenaConfig, RunnerConfig
from rps_arena.domain.arena import Arena
from rps_arena.domain.random_source import RandomSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class ArenaSnapshot:
    """Immutable view of an arena at one point in time."""

    grid: np.ndarray
    generation: int
    surviving_breeds: int
    populations: tuple[int, ...]
    absorbed: bool
    running: bool

    @classmethod
    def capture(cls, arena: Arena, running: bool) -> ArenaSnapshot:
        grid = arena.copy_grid()
        grid.flags.writeable = False
        return cls(
            grid=grid,
            generation=arena.generation,
            surviving_breeds=arena.surviving_breeds,
            populations=arena.populations,
            absorbed=arena.is_absorbed,
            running=running,
        )


class ArenaRunner:
    """Run an arena in batches on a daemon thread and publish snapshots."""

    def __init__(
        self, config: RunnerConfig | None = None, rng: RandomSource | None = None
    ) -> None:
        self._config = config or RunnerConfig()
        self._rng = rng
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._worker: threading.Thread | None = None
        self._arena = self._new_arena(self._config.arena_config())
        self._latest = ArenaSnapshot.capture(self._arena, running=False)

    def _new_arena(self, arena_config: ArenaConfig) -> Arena:
        arena = arena_config.build(rng=self._rng)
        arena.initialize()
        return arena

    @property
    def is_running(self) -> bool:
        worker = self._worker
        return worker is not None and worker.is_alive()

    def latest(self) -> ArenaSnapshot:
        """Return the most recently published snapshot."""
        return self._latest

    def start(self) -> None:
        """Start or resume advancing the current arena."""
        self.stop()
        self._stop_event.clear()
        self._worker = threading.Thread(target=self._run, name="arena-runner", daemon=True)
        self._worker.start()
        logger.debug("runner started at generation %d", self._latest.generation)

    def stop(self, timeout: float | None = None) -> None:
        """Pause the worker and wait for it to exit."""
        worker = self._worker
        if worker is None:
            return
        self._stop_event.set()
        if worker is not threading.current_thread():
            worker.join(timeout)
        self._worker = None
        self._publish(running=False)

    def reset(self, num_breeds: int | None = None, arena_size: int | None = None) -> None:
        """Re-initialize the arena, replacing it when a breed count or size is given."""
        self.stop()
        with self._lock:
            if num_breeds is None and arena_size is None:
                self._arena.initialize()
            else:
                arena_config = ArenaConfig(
                    num_breeds=num_breeds if num_breeds is not None else self._arena.num_breeds,
                    arena_size=arena_size if arena_size is not None else self._arena.arena_size,
                )
                self._arena = self._new_arena(arena_config)
        self._publish(running=False)

    def join(self, timeout: float | None = None) -> None:
        """Wait for the worker to finish on its own, e.g. after absorption."""
        worker = self._worker
        if worker is not None:
            worker.join(timeout)

    def _publish(self, running: bool) -> None:
        with self._lock:
            self._latest = ArenaSnapshot.capture(self._arena, running=running)

    def _run(self) -> None:
        iterations = self._config.iterations_per_batch
        while not self._stop_event.is_set():
            with self._lock:
                arena = self._arena
                for _ in range(iterations):
                    arena.advance()
                absorbed = arena.is_absorbed
                self._latest = ArenaSnapshot.capture(arena, running=not absorbed)
            if absorbed:
                logger.info("arena absorbed at generation %d", self._latest.generation)
                break
            self._stop_event.wait(self._config.sleep_interval)
