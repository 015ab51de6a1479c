"""
Application service: map a coordinate to a county and agro-ecological zone.
"""
from typing import Optional
import logging

from app.config import settings
from app.domain.errors import ZoneUnresolved
from app.domain.models import ZoneResolution, ZoneResolutionMethod
from app.infrastructure.external_api_client import (
    ExternalAPIError,
    ReverseGeocodingClient,
)
from app.utils.geo_projection import validate_coordinates
from app.utils.spatial_helpers import (
    CentroidIndex,
    county_from_bounds,
    normalize_county_name,
    representative_zone,
    within_country,
    zone_from_elevation,
)

logger = logging.getLogger(__name__)


class ZoneResolver:
    """
    Resolves coordinates to a region and agro-ecological zone.

    Region lookup tries, in order:
    1. The reverse geocoder (if one is configured)
    2. County bounding boxes
    3. The nearest county centroid within a maximum distance

    Partial results are normal: a point outside the country resolves to
    nulls rather than raising.
    """

    def __init__(
        self,
        geocoder: Optional[ReverseGeocodingClient] = None,
        max_distance_km: Optional[float] = None,
        centroid_index: Optional[CentroidIndex] = None,
    ):
        """
        Initialize the resolver with its collaborators.

        Args:
            geocoder: Reverse geocoding client; skipped when None
            max_distance_km: Cut-off for the nearest-centroid fallback
            centroid_index: Pre-built county centroid index
        """
        self.geocoder = geocoder
        self.max_distance_km = (
            settings.nearest_county_max_distance_km
            if max_distance_km is None else max_distance_km
        )
        self.centroid_index = centroid_index or CentroidIndex()

    async def resolve_zone(
        self,
        latitude: float,
        longitude: float,
        altitude: Optional[float] = None,
    ) -> ZoneResolution:
        """
        Resolve a coordinate to a county and agro-ecological zone.

        Args:
            latitude: Latitude in degrees
            longitude: Longitude in degrees
            altitude: Altitude in meters, when known

        Returns:
            ZoneResolution; region and agro_zone are None when unresolved

        Raises:
            InvalidCoordinates: If the coordinate is out of range
        """
        validate_coordinates(latitude, longitude)

        region, subregion, method = await self._resolve_region(latitude, longitude)

        agro_zone = None
        if altitude is not None and (region is not None or within_country(latitude, longitude)):
            agro_zone = zone_from_elevation(longitude, altitude)
        elif region is not None:
            agro_zone = representative_zone(region)

        resolution = ZoneResolution(
            region=region,
            subregion=subregion,
            agro_zone=agro_zone,
            method=method,
        )
        logger.info(
            f"Resolved ({latitude}, {longitude}) to region={region}, "
            f"zone={agro_zone} via {method.value}"
        )
        return resolution

    def resolve_region(self, region_name: str) -> ZoneResolution:
        """
        Resolve a manually chosen county to its representative zone.

        Args:
            region_name: County name as typed or picked by the user

        Returns:
            ZoneResolution with method "manual", or nulls if the name is unknown
        """
        region = normalize_county_name(region_name)
        if region is None:
            logger.warning(f"Unknown region '{region_name}'")
            return ZoneResolution(method=ZoneResolutionMethod.NONE)
        return ZoneResolution(
            region=region,
            agro_zone=representative_zone(region),
            method=ZoneResolutionMethod.MANUAL,
        )

    async def _resolve_region(self, latitude: float, longitude: float):
        if self.geocoder is not None:
            try:
                result = await self.geocoder.resolve(latitude, longitude)
                region = normalize_county_name(result.region)
                if region is not None:
                    return region, result.subregion, ZoneResolutionMethod.GEOCODER
                logger.info(f"Geocoder returned unknown region '{result.region}', using boundaries")
            except (ExternalAPIError, ZoneUnresolved) as e:
                logger.warning(f"Reverse geocoding failed, using boundaries: {e}")

        region = county_from_bounds(latitude, longitude)
        if region is not None:
            return region, None, ZoneResolutionMethod.BOUNDARY

        if within_country(latitude, longitude):
            nearest = self.centroid_index.nearest(latitude, longitude, self.max_distance_km)
            if nearest is not None:
                region, distance_km = nearest
                logger.debug(f"Nearest county {region} at {distance_km:.1f}km")
                return region, None, ZoneResolutionMethod.NEAREST

        return None, None, ZoneResolutionMethod.NONE
