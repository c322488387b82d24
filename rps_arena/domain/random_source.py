"""Uniform integer sources the arena draws from.

The arena only ever asks for a uniform integer in ``[0, stop)``, so any
object with a compatible ``randrange`` can drive it. ``random.Random``
conforms as-is; numpy generators are wrapped by ``NumpyRandomSource``.
"""

from __future__ import annotations

from random import Random
from typing import Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class RandomSource(Protocol):
    """A source of uniform integers in a bounded range."""

    def randrange(self, stop: int, /) -> int: ...


class NumpyRandomSource:
    """Adapt a ``numpy.random.Generator`` to the ``RandomSource`` protocol."""

    def __init__(self, generator: np.random.Generator | None = None) -> None:
        self._generator = generator if generator is not None else np.random.default_rng()

    @classmethod
    def from_seed(cls, seed: int | None) -> NumpyRandomSource:
        return cls(np.random.default_rng(seed))

    def randrange(self, stop: int, /) -> int:
        return int(self._generator.integers(stop))


def default_random_source() -> RandomSource:
    """Return a fresh system-seeded source."""
    return Random()
