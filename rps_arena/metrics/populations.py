"""Population and spatial metrics over arena grids and breed counts."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np


def grid_populations(grid: np.ndarray, num_breeds: int) -> np.ndarray:
    """Recount breeds cell by cell; index ``i`` holds the population of breed ``i``."""
    return np.bincount(np.asarray(grid).ravel(), minlength=num_breeds)


def population_entropy(populations: Sequence[int]) -> float:
    """Compute Shannon entropy (base 2) of the breed distribution."""
    counts = np.asarray(populations, dtype=np.float64)
    total = counts.sum()
    if total <= 0.0:
        return 0.0
    p = counts[counts > 0] / total
    return float(-(p * np.log2(p)).sum())


def dominant_breed(populations: Sequence[int]) -> int | None:
    """Return the most populous breed id (lowest id on ties), or None if all are empty."""
    counts = np.asarray(populations)
    if counts.size == 0 or not counts.any():
        return None
    return int(np.argmax(counts))


def same_breed_adjacency_fraction(grid: np.ndarray) -> float:
    """Fraction of toroidal 4-neighbour pairs whose cells hold the same breed.

    Each unordered pair is counted once by comparing every cell with its
    right and lower neighbours. Returns a value in [0, 1].
    """
    cells = np.asarray(grid)
    same_right = cells == np.roll(cells, -1, axis=1)
    same_down = cells == np.roll(cells, -1, axis=0)
    total = same_right.size + same_down.size
    return float((same_right.sum() + same_down.sum()) / total)
