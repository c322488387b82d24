"""Exception types raised by the arena engine."""

from __future__ import annotations


class ArenaError(Exception):
    """Base class for arena engine errors."""


class ConfigurationError(ArenaError, ValueError):
    """Raised when an arena is configured with an invalid breed count or size."""


class CapacityError(ArenaError, ValueError):
    """Raised when a snapshot destination is smaller than the arena grid."""
