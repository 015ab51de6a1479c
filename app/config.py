"""
Application configuration using Pydantic settings.
"""
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Weather collaborator (OpenWeatherMap)
    weather_api_base_url: str = Field(
        default="https://api.openweathermap.org",
        description="Base URL for the weather API"
    )
    weather_api_key: str = Field(
        default="",
        description="API key for the weather API (weather is skipped when empty)"
    )

    # IP geolocation collaborator
    ip_geolocation_base_url: str = Field(
        default="http://ip-api.com",
        description="Base URL for the IP geolocation API"
    )

    # Reverse geocoding collaborator (Nominatim)
    reverse_geocoding_base_url: str = Field(
        default="https://nominatim.openstreetmap.org",
        description="Base URL for the reverse geocoding API"
    )
    reverse_geocoding_user_agent: str = Field(
        default="tree-match-engine/1.0",
        description="User agent sent to the reverse geocoding API"
    )

    # Retry Configuration
    max_retry_attempts: int = Field(
        default=3,
        description="Maximum number of retry attempts for API calls"
    )
    retry_backoff_multiplier: int = Field(
        default=1,
        description="Multiplier for exponential backoff"
    )
    retry_min_wait: int = Field(
        default=4,
        description="Minimum wait time in seconds between retries"
    )
    retry_max_wait: int = Field(
        default=10,
        description="Maximum wait time in seconds between retries"
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        description="Timeout for outbound HTTP requests"
    )

    # Location acquisition
    gps_timeout_seconds: float = Field(
        default=10.0,
        description="Upper bound on waiting for a device GPS fix"
    )
    ip_location_accuracy_m: float = Field(
        default=5000.0,
        description="Accuracy reported for IP-derived locations"
    )
    location_cache_ttl_hours: int = Field(
        default=24,
        description="Hours a resolved location stays valid in the cache"
    )
    location_cache_max_entries: int = Field(
        default=10000,
        description="Maximum number of cached session locations"
    )

    # Zone resolution
    nearest_county_max_distance_km: float = Field(
        default=75.0,
        description="Maximum distance to a county centroid for nearest-county fallback"
    )

    # Recommendations
    min_compatibility_score: int = Field(
        default=50,
        ge=0,
        le=100,
        description="Default minimum compatibility score for ranked results"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    # CORS Configuration
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins (use specific origins in production)"
    )

    # Rate Limiting
    rate_limit_requests: int = Field(
        default=100,
        description="Maximum requests per minute per client"
    )

    # Application Settings
    app_name: str = Field(
        default="Tree Match Engine",
        description="Application name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )
    debug: bool = Field(
        default=False,
        description="Debug mode"
    )

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
