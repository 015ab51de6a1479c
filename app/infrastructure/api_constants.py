"""
API endpoint constants and configuration.

This module contains all external API endpoint paths and related constants.
Centralizing these values makes it easy to swap out endpoints or update API versions.
"""


# OpenWeatherMap endpoints
class WeatherAPIEndpoints:
    """OpenWeatherMap endpoint paths."""

    CURRENT_WEATHER = "/data/2.5/weather"
    UNITS = "metric"


# ip-api.com endpoints
class IPGeolocationEndpoints:
    """IP geolocation endpoint paths."""

    LOOKUP = "/json/{ip}"
    FIELDS = "status,message,lat,lon"

    @classmethod
    def lookup(cls, ip: str) -> str:
        """
        Get the lookup endpoint for an IP address.

        Args:
            ip: IPv4 or IPv6 address

        Returns:
            Formatted endpoint path
        """
        return cls.LOOKUP.format(ip=ip)


# Nominatim endpoints
class ReverseGeocodingEndpoints:
    """Reverse geocoding endpoint paths."""

    REVERSE = "/reverse"
    FORMAT = "json"


# API Configuration Constants
class APIConstants:
    """General API configuration constants."""

    # HTTP Headers
    CONTENT_TYPE_JSON = "application/json"

    # Timeouts (in seconds)
    DEFAULT_TIMEOUT = 30.0

    # Annual rainfall estimate (mm) from current humidity and cloud cover
    RAINFALL_BASE_MM = 500
    RAINFALL_HUMIDITY_MM = 800
    RAINFALL_CLOUD_MM = 400
