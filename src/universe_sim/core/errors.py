"""Exception types raised by the universe simulation."""
from __future__ import annotations


class UniverseError(Exception):
    """Base class for simulation errors."""


class UnknownPlanetError(UniverseError, KeyError):
    """Raised when a planet id does not name a planet in the store."""

    def __init__(self, planet_id: int) -> None:
        super().__init__(planet_id)
        self.planet_id = planet_id

    def __str__(self) -> str:
        return f"unknown planet id {self.planet_id}"


class InvariantViolation(UniverseError):
    """Raised by :meth:`EntityStore.check_invariants` when the state is broken."""


class ConfigError(UniverseError, ValueError):
    """Raised when a configuration object holds unusable values."""


__all__ = ["ConfigError", "InvariantViolation", "UniverseError", "UnknownPlanetError"]
