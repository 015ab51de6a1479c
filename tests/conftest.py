"""
Shared pytest fixtures for all tests.

This module provides common fixtures including:
- Sample tree species and profiles
- Sample weather
- Location cache with a controllable clock
- Behavior ledger
- Mock collaborators
- FastAPI test client
"""
import pytest
from datetime import date, datetime, timedelta, timezone
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient

from app.main import app
from app.domain.models import (
    DisplayNames,
    LocationSample,
    LocationSource,
    TreeSpecies,
    UserProfile,
    WeatherSnapshot,
)
from app.infrastructure.behavior_store import InMemoryBehaviorStore
from app.infrastructure.external_api_client import (
    IPGeolocationClient,
    ReverseGeocodingClient,
    WeatherClient,
)
from app.infrastructure.location_cache import LocationCache, TTLKeyValueStore
from app.infrastructure.species_catalog import SpeciesCatalog
from app.services.domain.behavior_ledger import BehaviorLedger
from app.services.domain.seasonal_advisor import SeasonalAdvisor


# ============================================================
# Sample Data Fixtures
# ============================================================

@pytest.fixture
def grevillea() -> TreeSpecies:
    """Highland timber tree matching the Nyeri/UH1 scenario."""
    return TreeSpecies(
        id="grevillea",
        names=DisplayNames(english="Grevillea", swahili="Grevelia", scientific="Grevillea robusta"),
        suitable_regions={"Nyeri", "Kiambu", "Murang'a"},
        suitable_zones={"UH1", "UH2", "UM1"},
        preferred_soils={"loamy", "clay"},
        suitable_climates={"tropical", "temperate"},
        uses={"timber", "shade", "conservation"},
        price=150,
        growth_rate="fast",
    )


@pytest.fixture
def mango() -> TreeSpecies:
    """Coastal fruit tree."""
    return TreeSpecies(
        id="mango",
        names=DisplayNames(english="Mango", swahili="Muembe"),
        suitable_regions={"Mombasa", "Kilifi"},
        suitable_zones={"CL1", "CL2", "LM1"},
        preferred_soils={"loamy", "sandy"},
        suitable_climates={"tropical"},
        uses={"fruit", "shade"},
        price=200,
    )


@pytest.fixture
def nyeri_profile() -> UserProfile:
    """Profile in Nyeri, upper highland, growing timber."""
    return UserProfile(
        region="Nyeri",
        agro_zone="UH1",
        conservation_goals={"timber"},
    )


@pytest.fixture
def nyeri_location() -> LocationSample:
    return LocationSample(
        latitude=-0.42,
        longitude=36.95,
        accuracy_m=15,
        source=LocationSource.GPS,
    )


@pytest.fixture
def highland_weather() -> WeatherSnapshot:
    """Cool, humid highland weather."""
    return WeatherSnapshot(temperature_c=18, humidity_pct=70, annual_rainfall_mm=1400)


@pytest.fixture
def april_advisor() -> SeasonalAdvisor:
    """Seasonal advisor pinned inside the long rains."""
    return SeasonalAdvisor(clock=lambda: date(2024, 4, 15))


@pytest.fixture
def catalog() -> SpeciesCatalog:
    return SpeciesCatalog()


# ============================================================
# Stateful Collaborator Fixtures
# ============================================================

class FakeClock:
    """Settable clock for cache expiry tests."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 4, 15, 8, 0, tzinfo=timezone.utc))


@pytest.fixture
def location_cache(clock) -> LocationCache:
    """Location cache with a 24h TTL driven by the fake clock."""
    store = TTLKeyValueStore(maxsize=100, ttl_seconds=10 * 24 * 3600)
    return LocationCache(store=store, ttl=timedelta(hours=24), clock=clock)


@pytest.fixture
def ledger() -> BehaviorLedger:
    return BehaviorLedger(InMemoryBehaviorStore())


# ============================================================
# Mock API Client Fixtures
# ============================================================

@pytest.fixture
def mock_weather_client(highland_weather):
    """Weather client that always returns highland weather."""
    mock_client = AsyncMock(spec=WeatherClient)
    mock_client.get_weather.return_value = highland_weather
    return mock_client


@pytest.fixture
def mock_ip_client():
    mock_client = AsyncMock(spec=IPGeolocationClient)
    return mock_client


@pytest.fixture
def mock_geocoder():
    mock_client = AsyncMock(spec=ReverseGeocodingClient)
    return mock_client


# ============================================================
# FastAPI Test Client Fixtures
# ============================================================

@pytest.fixture
def test_client() -> TestClient:
    """Create a synchronous test client for FastAPI."""
    return TestClient(app)
