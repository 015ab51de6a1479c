"""
Infrastructure layer: device GPS providers.

The device's GPS is an external collaborator. Over HTTP the device reports
either its fix or the error it got, and the server replays that report
through the same provider interface the acquirer uses.
"""
from enum import Enum
from typing import Optional, Protocol

from pydantic import BaseModel, Field


class GpsErrorKind(str, Enum):
    PERMISSION_DENIED = "permission_denied"
    UNAVAILABLE = "unavailable"
    TIMEOUT = "timeout"
    UNSUPPORTED = "unsupported"


class GpsError(Exception):
    """The device could not produce a GPS fix."""

    MESSAGES = {
        GpsErrorKind.PERMISSION_DENIED: "Location permission denied",
        GpsErrorKind.UNAVAILABLE: "Location information is unavailable",
        GpsErrorKind.TIMEOUT: "Location request timed out",
        GpsErrorKind.UNSUPPORTED: "Geolocation is not supported by this device",
    }

    def __init__(self, kind: GpsErrorKind, message: Optional[str] = None):
        super().__init__(message or self.MESSAGES[kind])
        self.kind = kind


class GpsFix(BaseModel):
    """A position reported by the device."""
    latitude: float
    longitude: float
    accuracy_m: float = Field(ge=0)
    altitude_m: Optional[float] = None


class PositionProvider(Protocol):
    """Source of device GPS positions."""

    async def get_current_position(
        self,
        timeout: float,
        high_accuracy: bool = True,
        maximum_age: float = 0,
    ) -> GpsFix: ...


class ReportedPositionProvider:
    """Replays a fix (or error) the device reported with its request."""

    def __init__(
        self,
        fix: Optional[GpsFix] = None,
        error: Optional[GpsErrorKind] = None,
    ):
        self.fix = fix
        self.error = error

    async def get_current_position(
        self,
        timeout: float,
        high_accuracy: bool = True,
        maximum_age: float = 0,
    ) -> GpsFix:
        if self.fix is not None:
            return self.fix
        raise GpsError(self.error or GpsErrorKind.UNAVAILABLE)
