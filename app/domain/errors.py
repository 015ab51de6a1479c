"""
Typed errors raised by the recommendation engine.

Each error says whether the caller may simply retry, or whether a person
has to step in (for example by typing coordinates in by hand).
"""


class EngineError(Exception):
    """Base class for all engine errors."""

    retryable: bool = False
    requires_manual_entry: bool = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class LocationUnavailable(EngineError):
    """Every location source (cache, GPS, IP) failed."""

    requires_manual_entry = True


class ZoneUnresolved(EngineError):
    """A coordinate could not be mapped to a region or agro-ecological zone."""


class WeatherUnavailable(EngineError):
    """Live weather could not be fetched; scoring continues without it."""

    retryable = True


class InvalidCoordinates(EngineError, ValueError):
    """Latitude or longitude is outside the valid range."""

    requires_manual_entry = True


class SpeciesNotFound(EngineError):
    """The requested tree species is not in the catalog."""
