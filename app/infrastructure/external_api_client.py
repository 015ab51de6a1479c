"""
Infrastructure layer: External API clients with retry logic.

Clients for the weather, IP geolocation and reverse geocoding collaborators
share one base class that retries server errors with exponential backoff.
"""
from typing import Dict, Any, Optional
import logging

from pydantic import BaseModel, Field, ValidationError
import httpx
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from app.config import settings
from app.domain.errors import WeatherUnavailable, ZoneUnresolved
from app.domain.models import WeatherSnapshot
from app.infrastructure.api_constants import (
    APIConstants,
    IPGeolocationEndpoints,
    ReverseGeocodingEndpoints,
    WeatherAPIEndpoints,
)

logger = logging.getLogger(__name__)


# Pydantic models for API responses
class OpenWeatherMain(BaseModel):
    temp: float
    humidity: float


class OpenWeatherClouds(BaseModel):
    all: float = 0.0


class OpenWeatherResponse(BaseModel):
    """Subset of the OpenWeatherMap current weather response."""
    main: OpenWeatherMain
    clouds: OpenWeatherClouds = Field(default_factory=OpenWeatherClouds)
    name: Optional[str] = None


class IPLocation(BaseModel):
    """Coarse position for an IP address."""
    lat: float
    lon: float


class ReverseGeocodeResult(BaseModel):
    """Administrative names for a coordinate."""
    region: str
    subregion: Optional[str] = None


class ExternalAPIError(Exception):
    """Custom exception for external API errors."""

    def __init__(self, message: str, status_code: int = 502, retryable: bool = False):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.retryable = retryable


def estimate_annual_rainfall(humidity_pct: float, cloud_cover_pct: float) -> float:
    """
    Rough annual rainfall estimate from current humidity and cloud cover.

    Args:
        humidity_pct: Relative humidity, 0-100
        cloud_cover_pct: Cloud cover, 0-100

    Returns:
        Estimated annual rainfall in mm
    """
    return float(round(
        APIConstants.RAINFALL_BASE_MM
        + humidity_pct / 100 * APIConstants.RAINFALL_HUMIDITY_MM
        + cloud_cover_pct / 100 * APIConstants.RAINFALL_CLOUD_MM
    ))


class ExternalAPIClient:
    """
    Base client for an external HTTP collaborator.
    Implements retry logic with exponential backoff.
    """

    def __init__(self, base_url: str, headers: Optional[Dict[str, str]] = None):
        """Initialize the API client with configuration."""
        self.base_url = base_url
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"accept": APIConstants.CONTENT_TYPE_JSON, **(headers or {})},
            timeout=settings.http_timeout_seconds,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    @retry(
        stop=stop_after_attempt(settings.max_retry_attempts),
        wait=wait_exponential(
            multiplier=settings.retry_backoff_multiplier,
            min=settings.retry_min_wait,
            max=settings.retry_max_wait,
        ),
        retry=retry_if_exception_type((httpx.HTTPStatusError, httpx.RequestError)),
        reraise=True,
    )
    async def _send(self, method: str, endpoint: str, **kwargs) -> Dict[str, Any]:
        response = await self.client.request(method, endpoint, **kwargs)
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            # Retry on server errors (5xx)
            if e.response.status_code >= 500:
                raise
            # Don't retry on client errors (4xx)
            raise ExternalAPIError(
                f"API request failed: {e.response.status_code} - {e.response.text}",
                status_code=e.response.status_code,
            )
        try:
            return response.json()
        except ValueError as e:
            raise ExternalAPIError(f"API returned a non-JSON body: {e}")

    async def _make_request(
        self,
        method: str,
        endpoint: str,
        **kwargs
    ) -> Dict[str, Any]:
        """
        Make an HTTP request with retry logic.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint path
            **kwargs: Additional arguments for the request

        Returns:
            Response data as dictionary

        Raises:
            ExternalAPIError: If the request fails after retries
        """
        try:
            return await self._send(method, endpoint, **kwargs)
        except httpx.HTTPStatusError as e:
            logger.warning(f"{self.base_url}{endpoint} failed after retries: {e.response.status_code}")
            raise ExternalAPIError(
                f"API request failed: {e.response.status_code} - {e.response.text}",
                status_code=e.response.status_code,
                retryable=True,
            )
        except httpx.RequestError as e:
            logger.warning(f"{self.base_url}{endpoint} unreachable: {e}")
            raise ExternalAPIError(f"API request error: {str(e)}", retryable=True)


class WeatherClient(ExternalAPIClient):
    """Client for current weather (OpenWeatherMap)."""

    def __init__(self, base_url: Optional[str] = None, api_key: Optional[str] = None):
        super().__init__(base_url or settings.weather_api_base_url)
        self.api_key = settings.weather_api_key if api_key is None else api_key

    async def get_weather(self, latitude: float, longitude: float) -> WeatherSnapshot:
        """
        Fetch current weather for a coordinate.

        Args:
            latitude: Latitude in degrees
            longitude: Longitude in degrees

        Returns:
            WeatherSnapshot with an estimated annual rainfall

        Raises:
            WeatherUnavailable: If no API key is configured or the request fails
        """
        if not self.api_key:
            raise WeatherUnavailable("Weather API key not configured")

        try:
            data = await self._make_request(
                "GET",
                WeatherAPIEndpoints.CURRENT_WEATHER,
                params={
                    "lat": latitude,
                    "lon": longitude,
                    "appid": self.api_key,
                    "units": WeatherAPIEndpoints.UNITS,
                },
            )
        except ExternalAPIError as e:
            raise WeatherUnavailable(f"Weather lookup failed: {e.message}") from e

        try:
            response = OpenWeatherResponse.model_validate(data)
        except ValidationError as e:
            raise WeatherUnavailable(f"Malformed weather response: {e.error_count()} errors") from e
        return WeatherSnapshot(
            temperature_c=response.main.temp,
            humidity_pct=response.main.humidity,
            annual_rainfall_mm=estimate_annual_rainfall(
                response.main.humidity, response.clouds.all
            ),
        )


class IPGeolocationClient(ExternalAPIClient):
    """Client for best-effort IP geolocation (ip-api.com)."""

    def __init__(self, base_url: Optional[str] = None):
        super().__init__(base_url or settings.ip_geolocation_base_url)

    async def locate(self, ip: str) -> IPLocation:
        """
        Look up the approximate position of an IP address.

        Args:
            ip: Client IP address

        Returns:
            IPLocation with latitude and longitude

        Raises:
            ExternalAPIError: If the lookup fails or the IP cannot be located
        """
        data = await self._make_request(
            "GET",
            IPGeolocationEndpoints.lookup(ip),
            params={"fields": IPGeolocationEndpoints.FIELDS},
        )
        if not isinstance(data, dict) or data.get("status") != "success":
            message = data.get("message", "unknown error") if isinstance(data, dict) else "unexpected body"
            raise ExternalAPIError(
                f"IP geolocation failed for {ip}: {message}",
                status_code=404,
            )
        try:
            return IPLocation.model_validate(data)
        except ValidationError as e:
            raise ExternalAPIError(f"Malformed IP geolocation response for {ip}") from e


class ReverseGeocodingClient(ExternalAPIClient):
    """Client for reverse geocoding (Nominatim)."""

    def __init__(self, base_url: Optional[str] = None):
        super().__init__(
            base_url or settings.reverse_geocoding_base_url,
            headers={"User-Agent": settings.reverse_geocoding_user_agent},
        )

    async def resolve(self, latitude: float, longitude: float) -> ReverseGeocodeResult:
        """
        Resolve a coordinate to administrative names.

        Args:
            latitude: Latitude in degrees
            longitude: Longitude in degrees

        Returns:
            ReverseGeocodeResult with region (county or state) and subregion

        Raises:
            ExternalAPIError: If the request fails
            ZoneUnresolved: If the response names no county or state
        """
        data = await self._make_request(
            "GET",
            ReverseGeocodingEndpoints.REVERSE,
            params={
                "lat": latitude,
                "lon": longitude,
                "format": ReverseGeocodingEndpoints.FORMAT,
            },
        )
        address = (data.get("address") if isinstance(data, dict) else None) or {}
        region = address.get("county") or address.get("state")
        if not region:
            raise ZoneUnresolved(f"No county or state for ({latitude}, {longitude})")
        return ReverseGeocodeResult(
            region=region,
            subregion=address.get("suburb") or address.get("town"),
        )


# Singleton instances
_weather_client: Optional[WeatherClient] = None
_ip_client: Optional[IPGeolocationClient] = None
_geocoding_client: Optional[ReverseGeocodingClient] = None


def get_weather_client() -> WeatherClient:
    """
    Get or create the singleton weather client.

    Returns:
        WeatherClient instance
    """
    global _weather_client
    if _weather_client is None:
        _weather_client = WeatherClient()
    return _weather_client


def get_ip_geolocation_client() -> IPGeolocationClient:
    """
    Get or create the singleton IP geolocation client.

    Returns:
        IPGeolocationClient instance
    """
    global _ip_client
    if _ip_client is None:
        _ip_client = IPGeolocationClient()
    return _ip_client


def get_reverse_geocoding_client() -> ReverseGeocodingClient:
    """
    Get or create the singleton reverse geocoding client.

    Returns:
        ReverseGeocodingClient instance
    """
    global _geocoding_client
    if _geocoding_client is None:
        _geocoding_client = ReverseGeocodingClient()
    return _geocoding_client


async def close_api_clients() -> None:
    """Close every client created so far."""
    global _weather_client, _ip_client, _geocoding_client
    for client in (_weather_client, _ip_client, _geocoding_client):
        if client is not None:
            await client.close()
    _weather_client = _ip_client = _geocoding_client = None
