"""
Unit tests for the recommendation service orchestration.

Tests cover:
- Session weather reuse only for the cached coordinates
- Weather omitted when the collaborator is unavailable
- County name canonicalization before scoring
- Configured default minimum score
"""
import pytest

from app.config import settings
from app.domain.errors import WeatherUnavailable
from app.domain.models import LocationSample, LocationSource, UserProfile, WeatherSnapshot
from app.infrastructure.external_api_client import ExternalAPIError
from app.services.application.location_acquirer import LocationAcquirer
from app.services.application.recommendation_service import RecommendationService
from app.services.application.zone_resolver import ZoneResolver


MOMBASA = LocationSample(latitude=-4.0, longitude=39.66, accuracy_m=10, source=LocationSource.MANUAL)


@pytest.fixture
def heatwave() -> WeatherSnapshot:
    return WeatherSnapshot(temperature_c=40, humidity_pct=10, annual_rainfall_mm=100)


@pytest.fixture
def service(catalog, ledger, location_cache, mock_geocoder, mock_weather_client, april_advisor):
    mock_geocoder.resolve.side_effect = ExternalAPIError("unreachable", retryable=True)
    return RecommendationService(
        catalog=catalog,
        ledger=ledger,
        acquirer=LocationAcquirer(location_cache),
        resolver=ZoneResolver(geocoder=mock_geocoder),
        weather_client=mock_weather_client,
        advisor=april_advisor,
    )


# ============================================================
# Session Weather Tests
# ============================================================

class TestSessionWeather:
    """Tests for reusing weather stored with a session's location."""

    @pytest.mark.asyncio
    async def test_other_location_fetches_fresh_weather(
        self, service, location_cache, nyeri_location, heatwave, highland_weather, mock_weather_client
    ):
        """Weather cached for Nyeri must not be used to score Mombasa."""
        location_cache.put("s1", nyeri_location, weather=heatwave)

        report = await service.recommend(UserProfile(location=MOMBASA), session_id="s1")

        assert report.weather == highland_weather
        mock_weather_client.get_weather.assert_awaited_once_with(-4.0, 39.66)
        assert location_cache.get("s1").weather == heatwave

    @pytest.mark.asyncio
    async def test_same_location_reuses_cached_weather(
        self, service, location_cache, nyeri_location, heatwave, mock_weather_client
    ):
        location_cache.put("s1", nyeri_location, weather=heatwave)

        report = await service.recommend(UserProfile(location=nyeri_location), session_id="s1")

        assert report.weather == heatwave
        mock_weather_client.get_weather.assert_not_called()

    @pytest.mark.asyncio
    async def test_fetched_weather_attached_to_matching_session(
        self, service, location_cache, nyeri_location, highland_weather
    ):
        location_cache.put("s1", nyeri_location)

        await service.recommend(UserProfile(location=nyeri_location), session_id="s1")

        assert location_cache.get("s1").weather == highland_weather

    @pytest.mark.asyncio
    async def test_assessment_ignores_weather_from_other_location(
        self, service, location_cache, nyeri_location, heatwave, mock_weather_client
    ):
        location_cache.put("s1", nyeri_location, weather=heatwave)

        await service.tree_assessment("mango", UserProfile(location=MOMBASA), session_id="s1")

        mock_weather_client.get_weather.assert_awaited_once_with(-4.0, 39.66)


# ============================================================
# Weather Failure Tests
# ============================================================

class TestWeatherUnavailable:
    """Tests for ranking without live weather."""

    @pytest.mark.asyncio
    async def test_weather_omitted_and_ranking_continues(
        self, service, nyeri_location, mock_weather_client
    ):
        mock_weather_client.get_weather.side_effect = WeatherUnavailable("down")
        profile = UserProfile(
            region="Nyeri",
            agro_zone="UH1",
            conservation_goals={"timber"},
            location=nyeri_location,
        )

        report = await service.recommend(profile)

        assert report.weather is None
        assert report.recommendations
        assert report.recommendations[0].tree.id == "grevillea"

    @pytest.mark.asyncio
    async def test_assessment_without_weather(self, service, nyeri_location, mock_weather_client):
        mock_weather_client.get_weather.side_effect = WeatherUnavailable("down")
        profile = UserProfile(region="Nyeri", agro_zone="UH1", location=nyeri_location)

        assessment = await service.tree_assessment("grevillea", profile)

        assert assessment.score > 0


# ============================================================
# Region Canonicalization Tests
# ============================================================

class TestStatedRegion:
    """Tests for free-form county names in a profile."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("zone", ["UH1", None])
    async def test_county_suffix_scores_like_canonical_name(self, service, zone):
        canonical = await service.tree_assessment(
            "grevillea", UserProfile(region="Nyeri", agro_zone=zone, conservation_goals={"timber"})
        )
        suffixed = await service.tree_assessment(
            "grevillea", UserProfile(region="Nyeri County", agro_zone=zone, conservation_goals={"timber"})
        )

        assert suffixed.score == canonical.score == 100

    @pytest.mark.asyncio
    async def test_report_carries_canonical_county(self, service):
        report = await service.recommend(UserProfile(region="  nyeri county "))

        assert report.profile.region == "Nyeri"
        assert report.profile.agro_zone == "UH1"

    @pytest.mark.asyncio
    async def test_unknown_region_kept_as_stated(self, service):
        report = await service.recommend(UserProfile(region="Atlantis", agro_zone="UH1"))

        assert report.profile.region == "Atlantis"


# ============================================================
# Minimum Score Tests
# ============================================================

class TestMinimumScore:
    """Tests for the minimum score threshold."""

    @pytest.mark.asyncio
    async def test_default_from_settings(self, service, monkeypatch):
        monkeypatch.setattr(settings, "min_compatibility_score", 70)

        report = await service.recommend(UserProfile(region="Nyeri", agro_zone="UH1"))

        assert report.min_score == 70
        assert all(entry.score >= 70 for entry in report.recommendations)

    @pytest.mark.asyncio
    async def test_explicit_threshold_wins(self, service, monkeypatch):
        monkeypatch.setattr(settings, "min_compatibility_score", 70)

        report = await service.recommend(UserProfile(region="Nyeri", agro_zone="UH1"), min_score=20)

        assert report.min_score == 20


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
