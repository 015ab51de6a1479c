"""
Unit tests for the location fallback chain.

Tests cover:
- Cache hits short-circuiting GPS and IP
- GPS success, failure and timeout
- IP fallback
- Total failure requiring manual entry
- Accuracy ratings
"""
import asyncio
import pytest
from datetime import timedelta
from unittest.mock import AsyncMock

from app.domain.errors import LocationUnavailable
from app.domain.models import LocationSource
from app.infrastructure.external_api_client import ExternalAPIError, IPLocation
from app.infrastructure.position_provider import (
    GpsError,
    GpsErrorKind,
    GpsFix,
    ReportedPositionProvider,
)
from app.services.application.location_acquirer import LocationAcquirer, accuracy_rating


NYERI_FIX = GpsFix(latitude=-0.42, longitude=36.95, accuracy_m=12, altitude_m=1800)


class SlowPositionProvider:
    """GPS provider that never answers in time."""

    async def get_current_position(self, timeout, high_accuracy=True, maximum_age=0):
        await asyncio.sleep(5)
        return NYERI_FIX


@pytest.fixture
def gps_ok():
    provider = AsyncMock()
    provider.get_current_position.return_value = NYERI_FIX
    return provider


@pytest.fixture
def gps_denied():
    provider = AsyncMock()
    provider.get_current_position.side_effect = GpsError(GpsErrorKind.PERMISSION_DENIED)
    return provider


@pytest.fixture
def ip_ok(mock_ip_client):
    mock_ip_client.locate.return_value = IPLocation(lat=-1.29, lon=36.82)
    return mock_ip_client


@pytest.fixture
def ip_down(mock_ip_client):
    mock_ip_client.locate.side_effect = ExternalAPIError("unreachable", retryable=True)
    return mock_ip_client


# ============================================================
# Cache Tests
# ============================================================

class TestCacheStep:
    """Tests for the cache step of the chain."""

    @pytest.mark.asyncio
    async def test_fresh_cache_skips_gps_and_ip(self, location_cache, nyeri_location, gps_ok, ip_ok):
        """A valid cache entry means no provider is invoked."""
        location_cache.put("session-1", nyeri_location)
        acquirer = LocationAcquirer(location_cache, gps_provider=gps_ok, ip_locator=ip_ok)

        sample = await acquirer.acquire_location("session-1", client_ip="1.2.3.4")

        assert sample.source == LocationSource.CACHED
        assert sample.latitude == nyeri_location.latitude
        gps_ok.get_current_position.assert_not_called()
        ip_ok.locate.assert_not_called()

    @pytest.mark.asyncio
    async def test_expired_cache_falls_through_to_gps(self, location_cache, clock, nyeri_location, gps_ok):
        location_cache.put("session-1", nyeri_location)
        clock.advance(timedelta(hours=25))
        acquirer = LocationAcquirer(location_cache, gps_provider=gps_ok)

        sample = await acquirer.acquire_location("session-1")

        assert sample.source == LocationSource.GPS
        gps_ok.get_current_position.assert_awaited_once()


# ============================================================
# GPS Tests
# ============================================================

class TestGpsStep:
    """Tests for the GPS step of the chain."""

    @pytest.mark.asyncio
    async def test_gps_success_is_cached(self, location_cache, gps_ok):
        acquirer = LocationAcquirer(location_cache, gps_provider=gps_ok)

        sample = await acquirer.acquire_location("session-1")

        assert sample.source == LocationSource.GPS
        assert sample.accuracy_m == 12
        assert sample.altitude_m == 1800
        assert location_cache.get("session-1").sample == sample

    @pytest.mark.asyncio
    async def test_gps_requested_fresh_and_accurate(self, location_cache, gps_ok):
        acquirer = LocationAcquirer(location_cache, gps_provider=gps_ok, gps_timeout=10)

        await acquirer.acquire_location("session-1")

        gps_ok.get_current_position.assert_awaited_once_with(
            timeout=10, high_accuracy=True, maximum_age=0
        )

    @pytest.mark.asyncio
    async def test_per_call_provider_overrides_default(self, location_cache, gps_denied):
        acquirer = LocationAcquirer(location_cache, gps_provider=gps_denied)

        sample = await acquirer.acquire_location(
            "session-1", gps_provider=ReportedPositionProvider(fix=NYERI_FIX)
        )

        assert sample.source == LocationSource.GPS
        gps_denied.get_current_position.assert_not_called()

    @pytest.mark.asyncio
    async def test_gps_denied_falls_back_to_ip(self, location_cache, gps_denied, ip_ok):
        acquirer = LocationAcquirer(location_cache, gps_provider=gps_denied, ip_locator=ip_ok)

        sample = await acquirer.acquire_location("session-1", client_ip="1.2.3.4")

        assert sample.source == LocationSource.IP
        assert sample.accuracy_m == 5000
        ip_ok.locate.assert_awaited_once_with("1.2.3.4")
        assert location_cache.get("session-1").sample.source == LocationSource.IP

    @pytest.mark.asyncio
    async def test_gps_timeout_falls_back_to_ip(self, location_cache, ip_ok):
        acquirer = LocationAcquirer(
            location_cache,
            gps_provider=SlowPositionProvider(),
            ip_locator=ip_ok,
            gps_timeout=0.05,
        )

        sample = await acquirer.acquire_location("session-1", client_ip="1.2.3.4")

        assert sample.source == LocationSource.IP

    @pytest.mark.asyncio
    async def test_out_of_range_gps_fix_counts_as_failure(self, location_cache, ip_ok):
        bad_fix = GpsFix(latitude=123.0, longitude=36.95, accuracy_m=5)
        acquirer = LocationAcquirer(
            location_cache,
            gps_provider=ReportedPositionProvider(fix=bad_fix),
            ip_locator=ip_ok,
        )

        sample = await acquirer.acquire_location("session-1", client_ip="1.2.3.4")

        assert sample.source == LocationSource.IP


# ============================================================
# Failure Tests
# ============================================================

class TestTotalFailure:
    """Tests for when every source fails."""

    @pytest.mark.asyncio
    async def test_all_sources_fail(self, location_cache, gps_denied, ip_down):
        acquirer = LocationAcquirer(location_cache, gps_provider=gps_denied, ip_locator=ip_down)

        with pytest.raises(LocationUnavailable) as exc_info:
            await acquirer.acquire_location("session-1", client_ip="1.2.3.4")

        assert exc_info.value.requires_manual_entry is True
        assert location_cache.get("session-1") is None

    @pytest.mark.asyncio
    async def test_no_sources_configured(self, location_cache):
        acquirer = LocationAcquirer(location_cache)

        with pytest.raises(LocationUnavailable):
            await acquirer.acquire_location("session-1")

    @pytest.mark.asyncio
    async def test_ip_skipped_without_client_ip(self, location_cache, gps_denied, ip_ok):
        acquirer = LocationAcquirer(location_cache, gps_provider=gps_denied, ip_locator=ip_ok)

        with pytest.raises(LocationUnavailable):
            await acquirer.acquire_location("session-1")

        ip_ok.locate.assert_not_called()

    @pytest.mark.asyncio
    async def test_failure_is_not_remembered(self, location_cache, gps_denied, ip_down, gps_ok):
        """A fresh call should re-enter the chain from the start."""
        acquirer = LocationAcquirer(location_cache, gps_provider=gps_denied, ip_locator=ip_down)
        with pytest.raises(LocationUnavailable):
            await acquirer.acquire_location("session-1", client_ip="1.2.3.4")

        sample = await acquirer.acquire_location("session-1", gps_provider=gps_ok)

        assert sample.source == LocationSource.GPS


# ============================================================
# Accuracy Rating Tests
# ============================================================

class TestAccuracyRating:
    """Tests for display accuracy ratings."""

    @pytest.mark.parametrize("accuracy,source,rating", [
        (5, LocationSource.GPS, "excellent"),
        (20, LocationSource.GPS, "excellent"),
        (50, LocationSource.GPS, "good"),
        (500, LocationSource.CACHED, "fair"),
        (5000, LocationSource.GPS, "poor"),
        (5000, LocationSource.IP, "fair"),
        (20000, LocationSource.IP, "poor"),
        (0, LocationSource.MANUAL, "excellent"),
    ])
    def test_ratings(self, accuracy, source, rating):
        assert accuracy_rating(accuracy, source) == rating


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
