"""
Application service: resolve a user's location through a fallback chain.

Order is strict and the first success wins: session cache, device GPS,
IP geolocation. When every source fails the caller has to ask the user
to enter a location by hand.
"""
from typing import Optional, Protocol
import asyncio
import logging

from app.config import settings
from app.domain.errors import InvalidCoordinates, LocationUnavailable
from app.domain.models import LocationSample, LocationSource
from app.infrastructure.external_api_client import ExternalAPIError, IPLocation
from app.infrastructure.location_cache import LocationCache
from app.infrastructure.position_provider import GpsError, PositionProvider
from app.utils.geo_projection import validate_coordinates

logger = logging.getLogger(__name__)

# Accuracy thresholds (meters) for display ratings
EXCELLENT_ACCURACY_M = 20
GOOD_ACCURACY_M = 100
FAIR_ACCURACY_M = 1000


def accuracy_rating(accuracy_m: float, source: LocationSource) -> str:
    """
    Classify a location's accuracy for display.

    IP-derived locations are never rated better than "fair".

    Args:
        accuracy_m: Horizontal accuracy in meters
        source: Where the location came from

    Returns:
        One of "excellent", "good", "fair", "poor"
    """
    if source == LocationSource.IP:
        return "fair" if accuracy_m <= settings.ip_location_accuracy_m else "poor"
    if accuracy_m <= EXCELLENT_ACCURACY_M:
        return "excellent"
    if accuracy_m <= GOOD_ACCURACY_M:
        return "good"
    if accuracy_m <= FAIR_ACCURACY_M:
        return "fair"
    return "poor"


class IPLocator(Protocol):
    """Anything that can place an IP address."""

    async def locate(self, ip: str) -> IPLocation: ...


class LocationAcquirer:
    """
    Resolves the current location for a session.

    Every successful GPS or IP resolution overwrites the session's cache
    entry. No retries are attempted; a fresh call re-enters the chain at
    the cache.
    """

    def __init__(
        self,
        cache: LocationCache,
        gps_provider: Optional[PositionProvider] = None,
        ip_locator: Optional[IPLocator] = None,
        gps_timeout: Optional[float] = None,
        ip_accuracy_m: Optional[float] = None,
    ):
        """
        Initialize the acquirer with its location sources.

        Args:
            cache: Per-session location cache
            gps_provider: Device GPS provider; skipped when None
            ip_locator: IP geolocation client; skipped when None
            gps_timeout: Seconds to wait for a GPS fix
            ip_accuracy_m: Accuracy reported for IP-derived locations
        """
        self.cache = cache
        self.gps_provider = gps_provider
        self.ip_locator = ip_locator
        self.gps_timeout = settings.gps_timeout_seconds if gps_timeout is None else gps_timeout
        self.ip_accuracy_m = (
            settings.ip_location_accuracy_m if ip_accuracy_m is None else ip_accuracy_m
        )

    async def acquire_location(
        self,
        session_id: str,
        client_ip: Optional[str] = None,
        gps_provider: Optional[PositionProvider] = None,
    ) -> LocationSample:
        """
        Return the session's location from the first source that answers.

        Args:
            session_id: Cache partition key
            client_ip: Caller's IP address for the IP fallback
            gps_provider: Provider for this call, overriding the default one

        Returns:
            LocationSample whose source says which step succeeded

        Raises:
            LocationUnavailable: If cache, GPS and IP all fail
        """
        cached = self.cache.get(session_id)
        if cached is not None:
            logger.info(f"Using cached location for session {session_id}")
            return cached.sample.model_copy(update={"source": LocationSource.CACHED})

        sample = await self._from_gps(gps_provider or self.gps_provider)
        if sample is None:
            sample = await self._from_ip(client_ip)

        if sample is None:
            logger.warning(f"No location source succeeded for session {session_id}")
            raise LocationUnavailable(
                "Unable to determine location automatically. Please select your location manually."
            )

        self.cache.put(session_id, sample)
        logger.info(f"Acquired {sample.source.value} location for session {session_id}")
        return sample

    async def _from_gps(self, provider: Optional[PositionProvider]) -> Optional[LocationSample]:
        if provider is None:
            return None
        try:
            fix = await asyncio.wait_for(
                provider.get_current_position(
                    timeout=self.gps_timeout,
                    high_accuracy=True,
                    maximum_age=0,
                ),
                timeout=self.gps_timeout,
            )
            validate_coordinates(fix.latitude, fix.longitude)
        except asyncio.TimeoutError:
            logger.info(f"GPS timed out after {self.gps_timeout}s, falling back to IP")
            return None
        except GpsError as e:
            logger.info(f"GPS failed ({e.kind.value}), falling back to IP")
            return None
        except InvalidCoordinates as e:
            logger.warning(f"GPS returned invalid coordinates: {e.message}")
            return None

        return LocationSample(
            latitude=fix.latitude,
            longitude=fix.longitude,
            accuracy_m=fix.accuracy_m,
            altitude_m=fix.altitude_m,
            source=LocationSource.GPS,
        )

    async def _from_ip(self, client_ip: Optional[str]) -> Optional[LocationSample]:
        if self.ip_locator is None or not client_ip:
            return None
        try:
            located = await self.ip_locator.locate(client_ip)
            validate_coordinates(located.lat, located.lon)
        except ExternalAPIError as e:
            logger.info(f"IP geolocation failed: {e.message}")
            return None
        except InvalidCoordinates as e:
            logger.warning(f"IP geolocation returned invalid coordinates: {e.message}")
            return None

        return LocationSample(
            latitude=located.lat,
            longitude=located.lon,
            accuracy_m=self.ip_accuracy_m,
            source=LocationSource.IP,
        )
