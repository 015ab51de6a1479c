"""
Dependency injection for FastAPI.

The location cache and behavior ledger hold state across requests, so
their factories hand out one shared instance. Tests replace any of these
through app.dependency_overrides.
"""
from typing import Annotated, Optional
from fastapi import Depends

from app.infrastructure.behavior_store import InMemoryBehaviorStore
from app.infrastructure.external_api_client import (
    IPGeolocationClient,
    ReverseGeocodingClient,
    WeatherClient,
    get_ip_geolocation_client,
    get_reverse_geocoding_client,
    get_weather_client,
)
from app.infrastructure.location_cache import LocationCache, build_location_cache
from app.infrastructure.species_catalog import SpeciesCatalog, get_species_catalog
from app.services.application.location_acquirer import LocationAcquirer
from app.services.application.recommendation_service import RecommendationService
from app.services.application.zone_resolver import ZoneResolver
from app.services.domain.behavior_ledger import BehaviorLedger
from app.utils.spatial_helpers import CentroidIndex


_location_cache: Optional[LocationCache] = None
_behavior_ledger: Optional[BehaviorLedger] = None
_centroid_index: Optional[CentroidIndex] = None


def get_location_cache() -> LocationCache:
    """
    Dependency factory for the shared LocationCache.

    Returns:
        LocationCache instance
    """
    global _location_cache
    if _location_cache is None:
        _location_cache = build_location_cache()
    return _location_cache


def get_behavior_ledger() -> BehaviorLedger:
    """
    Dependency factory for the shared BehaviorLedger.

    Returns:
        BehaviorLedger backed by an in-memory store
    """
    global _behavior_ledger
    if _behavior_ledger is None:
        _behavior_ledger = BehaviorLedger(InMemoryBehaviorStore())
    return _behavior_ledger


def get_centroid_index() -> CentroidIndex:
    global _centroid_index
    if _centroid_index is None:
        _centroid_index = CentroidIndex()
    return _centroid_index


def get_zone_resolver(
    geocoder: Annotated[ReverseGeocodingClient, Depends(get_reverse_geocoding_client)],
    centroid_index: Annotated[CentroidIndex, Depends(get_centroid_index)],
) -> ZoneResolver:
    """
    Dependency factory for ZoneResolver.

    Args:
        geocoder: Reverse geocoding client (injected)
        centroid_index: County centroid index (injected)

    Returns:
        ZoneResolver instance
    """
    return ZoneResolver(geocoder=geocoder, centroid_index=centroid_index)


def get_location_acquirer(
    cache: Annotated[LocationCache, Depends(get_location_cache)],
    ip_client: Annotated[IPGeolocationClient, Depends(get_ip_geolocation_client)],
) -> LocationAcquirer:
    """
    Dependency factory for LocationAcquirer.

    The device GPS report arrives with each request, so no default GPS
    provider is configured here.

    Args:
        cache: Location cache (injected)
        ip_client: IP geolocation client (injected)

    Returns:
        LocationAcquirer instance
    """
    return LocationAcquirer(cache=cache, ip_locator=ip_client)


def get_recommendation_service(
    catalog: Annotated[SpeciesCatalog, Depends(get_species_catalog)],
    ledger: Annotated[BehaviorLedger, Depends(get_behavior_ledger)],
    acquirer: Annotated[LocationAcquirer, Depends(get_location_acquirer)],
    resolver: Annotated[ZoneResolver, Depends(get_zone_resolver)],
    weather_client: Annotated[WeatherClient, Depends(get_weather_client)],
) -> RecommendationService:
    """
    Dependency factory for RecommendationService.

    Args:
        catalog: Species catalog (injected)
        ledger: Behavior ledger (injected)
        acquirer: Location acquirer (injected)
        resolver: Zone resolver (injected)
        weather_client: Weather client (injected)

    Returns:
        RecommendationService instance
    """
    return RecommendationService(
        catalog=catalog,
        ledger=ledger,
        acquirer=acquirer,
        resolver=resolver,
        weather_client=weather_client,
    )


# Type aliases for cleaner route signatures
RecommendationServiceDep = Annotated[RecommendationService, Depends(get_recommendation_service)]
