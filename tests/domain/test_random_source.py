"""Tests for rps_arena.domain.random_source."""

from __future__ import annotations

from random import Random

import numpy as np

from rps_arena.domain.arena import Arena
from rps_arena.domain.random_source import (
    NumpyRandomSource,
    RandomSource,
    default_random_source,
)


def test_stdlib_random_conforms() -> None:
    assert isinstance(Random(0), RandomSource)


def test_default_source_conforms() -> None:
    source = default_random_source()
    assert isinstance(source, RandomSource)
    assert 0 <= source.randrange(10) < 10


def test_numpy_source_in_range_and_int() -> None:
    source = NumpyRandomSource.from_seed(1)
    assert isinstance(source, RandomSource)
    draws = [source.randrange(6) for _ in range(500)]
    assert all(type(d) is int for d in draws)
    assert set(draws) == set(range(6))


def test_numpy_source_is_deterministic_per_seed() -> None:
    a = NumpyRandomSource(np.random.default_rng(42))
    b = NumpyRandomSource.from_seed(42)
    assert [a.randrange(100) for _ in range(20)] == [b.randrange(100) for _ in range(20)]


def test_numpy_source_drives_arena() -> None:
    arena = Arena.create(num_breeds=4, arena_size=6, rng=NumpyRandomSource.from_seed(5))
    arena.initialize()
    for _ in range(200):
        arena.advance()
    assert sum(arena.populations) == 36
