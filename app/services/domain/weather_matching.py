"""
Domain service: matching live weather against a species' ideal ranges.

Temperature and rainfall ranges come from the species' agro-ecological zone
categories (the two-letter prefix of a zone code). Humidity ranges come from
the species' preferred soils. Each check returns a credit in [0, 1].
"""
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from app.domain.models import TreeSpecies, WeatherSnapshot


FULL_CREDIT = 1.0
PARTIAL_CREDIT = 0.5
NO_CREDIT = 0.0

# Temperature ranges (°C) per zone category
ZONE_TEMPERATURE_RANGES: Dict[str, tuple[float, float]] = {
    "UH": (8, 18),    # Upper Highland
    "LH": (12, 22),   # Lower Highland
    "UM": (15, 25),   # Upper Midland
    "LM": (18, 28),   # Lower Midland
    "IL": (20, 32),   # Inland Lowland
    "CL": (24, 32),   # Coastal Lowland
}

# Annual rainfall ranges (mm) per zone category
ZONE_RAINFALL_RANGES: Dict[str, tuple[float, float]] = {
    "UH": (1200, 2400),
    "LH": (1000, 1800),
    "UM": (900, 1400),
    "LM": (600, 1200),
    "IL": (300, 800),
    "CL": (800, 1500),
}

# Relative humidity ranges (%) that each soil type tends to occur under
SOIL_HUMIDITY_RANGES: Dict[str, tuple[float, float]] = {
    "clay": (60, 90),
    "silty": (55, 85),
    "loamy": (50, 80),
    "peaty": (70, 95),
    "sandy": (30, 60),
    "chalky": (35, 65),
}

TEMPERATURE_TOLERANCE_C = 5.0
HUMIDITY_TOLERANCE_PCT = 10.0
RAINFALL_TOLERANCE_RATIO = 0.3


@dataclass(frozen=True)
class WeatherMatch:
    """Credits for the three weather sub-checks."""
    temperature: float
    humidity: float
    rainfall: float

    @property
    def average(self) -> float:
        return (self.temperature + self.humidity + self.rainfall) / 3


def zone_category(zone: str) -> str:
    return zone[:2].upper()


def _absolute_credit(value: float, low: float, high: float, tolerance: float) -> float:
    if low <= value <= high:
        return FULL_CREDIT
    if low - tolerance <= value <= high + tolerance:
        return PARTIAL_CREDIT
    return NO_CREDIT


def _relative_credit(value: float, low: float, high: float, ratio: float) -> float:
    if low <= value <= high:
        return FULL_CREDIT
    if low * (1 - ratio) <= value <= high * (1 + ratio):
        return PARTIAL_CREDIT
    return NO_CREDIT


def _best_credit(credits: Iterable[float]) -> Optional[float]:
    credits = list(credits)
    return max(credits) if credits else None


def temperature_credit(tree: TreeSpecies, temperature_c: float) -> float:
    """Best temperature credit over the tree's zone categories."""
    ranges = [
        ZONE_TEMPERATURE_RANGES[cat]
        for cat in {zone_category(z) for z in tree.suitable_zones}
        if cat in ZONE_TEMPERATURE_RANGES
    ]
    credit = _best_credit(
        _absolute_credit(temperature_c, low, high, TEMPERATURE_TOLERANCE_C)
        for low, high in ranges
    )
    return PARTIAL_CREDIT if credit is None else credit


def rainfall_credit(tree: TreeSpecies, annual_rainfall_mm: float) -> float:
    """Best rainfall credit over the tree's zone categories."""
    ranges = [
        ZONE_RAINFALL_RANGES[cat]
        for cat in {zone_category(z) for z in tree.suitable_zones}
        if cat in ZONE_RAINFALL_RANGES
    ]
    credit = _best_credit(
        _relative_credit(annual_rainfall_mm, low, high, RAINFALL_TOLERANCE_RATIO)
        for low, high in ranges
    )
    return PARTIAL_CREDIT if credit is None else credit


def humidity_credit(tree: TreeSpecies, humidity_pct: float) -> float:
    """Best humidity credit over the tree's preferred soils."""
    ranges = [
        SOIL_HUMIDITY_RANGES[soil.lower()]
        for soil in tree.preferred_soils
        if soil.lower() in SOIL_HUMIDITY_RANGES
    ]
    credit = _best_credit(
        _absolute_credit(humidity_pct, low, high, HUMIDITY_TOLERANCE_PCT)
        for low, high in ranges
    )
    # No soil preference means nothing to compare against
    return PARTIAL_CREDIT if credit is None else credit


def match_weather(tree: TreeSpecies, weather: WeatherSnapshot) -> WeatherMatch:
    """
    Run all three weather sub-checks for a tree.

    Args:
        tree: Species to check
        weather: Current weather at the user's location

    Returns:
        WeatherMatch with one credit per sub-check
    """
    return WeatherMatch(
        temperature=temperature_credit(tree, weather.temperature_c),
        humidity=humidity_credit(tree, weather.humidity_pct),
        rainfall=rainfall_credit(tree, weather.annual_rainfall_mm),
    )
