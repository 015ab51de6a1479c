"""
Spatial lookup helpers for placing a coordinate in a county and agro-zone.

Provides utilities for:
- County name normalization
- Bounding-box containment (shapely)
- Nearest county centroid via a KD-Tree over projected centroids
- Elevation-band agro-zone classification
"""
from typing import Dict, List, Optional, Tuple
import numpy as np
from scipy.spatial import KDTree
from shapely.geometry import Point, box
import logging

from app.data.kenya_species import COUNTIES, COUNTY_BOUNDS, COUNTRY_BOUNDS
from app.utils.geo_projection import get_utm_crs, project_to_meters

logger = logging.getLogger(__name__)

# Elevation bands (meters) for agro-zone families, highest first
ELEVATION_BANDS = [
    (2400, "UH1"),
    (1800, "LH1"),
    (1500, "UM1"),
    (900, "LM1"),
]
COASTAL_LONGITUDE = 39.5
COASTAL_MAX_ALTITUDE_M = 500
COASTAL_ZONE = "CL1"
LOWLAND_ZONE = "IL1"

_COUNTY_SUFFIXES = (" county", " district")
_COUNTY_LOOKUP: Dict[str, str] = {name.lower(): name for name in COUNTIES}


def normalize_county_name(name: Optional[str]) -> Optional[str]:
    """
    Map a free-form county name onto a catalog county.

    "Nyeri County", "nyeri" and " NYERI " all resolve to "Nyeri".

    Args:
        name: County or state name as returned by a geocoder or typed by a user

    Returns:
        Canonical county name, or None if it is not a known county
    """
    if not name:
        return None
    key = name.strip().lower()
    for suffix in _COUNTY_SUFFIXES:
        if key.endswith(suffix):
            key = key[: -len(suffix)].strip()
    return _COUNTY_LOOKUP.get(key)


def _bounds_to_box(bounds: Tuple[float, float, float, float]):
    min_lat, max_lat, min_lng, max_lng = bounds
    # shapely works in (x, y) = (lng, lat)
    return box(min_lng, min_lat, max_lng, max_lat)


_COUNTRY_BOX = _bounds_to_box(COUNTRY_BOUNDS)
_COUNTY_BOXES = [(name, _bounds_to_box(bounds)) for name, bounds in COUNTY_BOUNDS]


def within_country(latitude: float, longitude: float) -> bool:
    """Check whether a coordinate falls inside the catalog's national extent."""
    return _COUNTRY_BOX.covers(Point(longitude, latitude))


def county_from_bounds(latitude: float, longitude: float) -> Optional[str]:
    """
    Find the first county whose bounding box contains the coordinate.

    Args:
        latitude: Latitude in degrees
        longitude: Longitude in degrees

    Returns:
        County name, or None if no box contains the point
    """
    point = Point(longitude, latitude)
    for name, county_box in _COUNTY_BOXES:
        if county_box.covers(point):
            return name
    return None


def build_kdtree(coordinates: List[Tuple[float, float]]) -> KDTree:
    """
    Build a KD-Tree for efficient spatial queries.

    Args:
        coordinates: List of (x, y) coordinate tuples

    Returns:
        KDTree instance
    """
    points = np.array(coordinates)
    return KDTree(points)


class CentroidIndex:
    """
    Nearest-county lookup over projected county centroids.

    All centroids and query points share one UTM CRS, picked from the
    center of the national extent, so distances come out in meters.
    """

    def __init__(self, counties: Optional[Dict[str, Tuple[float, float, str]]] = None):
        counties = COUNTIES if counties is None else counties
        self.names: List[str] = list(counties)
        min_lat, max_lat, min_lng, max_lng = COUNTRY_BOUNDS
        self.utm_crs = get_utm_crs((min_lng + max_lng) / 2, (min_lat + max_lat) / 2)
        centroids = [(lat, lng) for lat, lng, _ in counties.values()]
        projected, _ = project_to_meters(centroids, self.utm_crs)
        self.kdtree = build_kdtree(projected)

    def nearest(
        self,
        latitude: float,
        longitude: float,
        max_distance_km: float,
    ) -> Optional[Tuple[str, float]]:
        """
        Find the county whose centroid is closest to the coordinate.

        Args:
            latitude: Latitude in degrees
            longitude: Longitude in degrees
            max_distance_km: Centroids further away than this are ignored

        Returns:
            Tuple of (county name, distance in km), or None if nothing is in range
        """
        [(x, y)], _ = project_to_meters([(latitude, longitude)], self.utm_crs)
        distance, index = self.kdtree.query((x, y), k=1)
        distance_km = float(distance) / 1000
        if distance_km > max_distance_km:
            logger.debug(
                f"Nearest centroid to ({latitude}, {longitude}) is "
                f"{distance_km:.1f}km away, beyond {max_distance_km}km"
            )
            return None
        return self.names[int(index)], distance_km


def zone_from_elevation(longitude: float, altitude_m: float) -> str:
    """
    Classify an agro-zone family from altitude.

    Coastal lowland applies east of 39.5°E below 500m; otherwise the first
    elevation band the altitude exceeds wins, falling through to inland lowland.

    Args:
        longitude: Longitude in degrees
        altitude_m: Altitude in meters

    Returns:
        Agro-ecological zone code
    """
    if longitude > COASTAL_LONGITUDE and altitude_m < COASTAL_MAX_ALTITUDE_M:
        return COASTAL_ZONE
    for floor_m, zone in ELEVATION_BANDS:
        if altitude_m > floor_m:
            return zone
    return LOWLAND_ZONE


def representative_zone(county: str) -> Optional[str]:
    """Return the representative agro-zone recorded for a county."""
    entry = COUNTIES.get(county)
    return entry[2] if entry else None
