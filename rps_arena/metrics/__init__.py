"""Metrics over arena populations and grids."""

from rps_arena.metrics.populations import (
    dominant_breed,
    grid_populations,
    population_entropy,
    same_breed_adjacency_fraction,
)

__all__ = [
    "dominant_breed",
    "grid_populations",
    "population_entropy",
    "same_breed_adjacency_fraction",
]
