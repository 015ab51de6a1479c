"""
Geospatial projection utilities for coordinate transformations.
"""
from typing import Tuple, List, Optional
from pyproj import Transformer

from app.domain.errors import InvalidCoordinates


def validate_coordinates(latitude: float, longitude: float) -> Tuple[float, float]:
    """
    Reject coordinates outside the valid latitude/longitude range.

    Args:
        latitude: Latitude in degrees
        longitude: Longitude in degrees

    Returns:
        The (latitude, longitude) pair unchanged

    Raises:
        InvalidCoordinates: If latitude is outside ±90 or longitude outside ±180
    """
    if latitude is None or longitude is None:
        raise InvalidCoordinates("Latitude and longitude are required")
    if not -90 <= latitude <= 90:
        raise InvalidCoordinates(f"Latitude must be between -90 and 90, got {latitude}")
    if not -180 <= longitude <= 180:
        raise InvalidCoordinates(f"Longitude must be between -180 and 180, got {longitude}")
    return latitude, longitude


def get_utm_zone(longitude: float) -> int:
    """
    Calculate the UTM zone number from longitude.

    Args:
        longitude: Longitude in degrees

    Returns:
        UTM zone number (1-60)
    """
    return min(int((longitude + 180) / 6) + 1, 60)


def get_utm_crs(longitude: float, latitude: float) -> str:
    """
    Get the appropriate UTM CRS (Coordinate Reference System) for a location.

    Args:
        longitude: Longitude in degrees
        latitude: Latitude in degrees

    Returns:
        EPSG code for the UTM zone
    """
    zone = get_utm_zone(longitude)
    # Northern hemisphere: EPSG:326XX, Southern hemisphere: EPSG:327XX
    hemisphere = "6" if latitude >= 0 else "7"
    return f"EPSG:32{hemisphere}{zone:02d}"


def get_transformer(utm_crs: str) -> Transformer:
    """Transformer from WGS84 (lat/lon) to the given UTM CRS."""
    return Transformer.from_crs(
        "EPSG:4326",  # WGS84 (lat/lon)
        utm_crs,      # UTM zone
        always_xy=True  # Ensure (lon, lat) -> (x, y) order
    )


def project_to_meters(
    coordinates: List[Tuple[float, float]],
    utm_crs: Optional[str] = None,
) -> Tuple[List[Tuple[float, float]], str]:
    """
    Project lat/lon coordinates to a planar coordinate system (UTM) in meters.

    Args:
        coordinates: List of (latitude, longitude) tuples in degrees
        utm_crs: CRS to project into; derived from the first coordinate when omitted

    Returns:
        Tuple of:
            - List of (x, y) coordinates in meters
            - The UTM CRS used, so later points can be projected consistently
    """
    if not coordinates:
        raise ValueError("Coordinates list cannot be empty")

    if utm_crs is None:
        # Use the first coordinate to determine the UTM zone
        lat, lon = coordinates[0]
        utm_crs = get_utm_crs(lon, lat)

    transformer = get_transformer(utm_crs)

    projected = []
    for lat, lon in coordinates:
        x, y = transformer.transform(lon, lat)
        projected.append((x, y))

    return projected, utm_crs
