"""Stochastic Rock-Paper-Scissors ecosystems on a toroidal grid."""

from rps_arena.config.types import ArenaConfig
from rps_arena.domain.arena import Arena
from rps_arena.domain.errors import CapacityError, ConfigurationError

__version__ = "0.1.0"

__all__ = [
    "Arena",
    "ArenaConfig",
    "CapacityError",
    "ConfigurationError",
    "__version__",
]
