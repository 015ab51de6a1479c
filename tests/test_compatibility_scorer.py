"""
Unit tests for compatibility scoring.

Tests cover:
- Weight budget
- Region, zone and goal credit
- Weather bonus
- Score bounds and match labels
"""
import pytest

from app.domain.models import UserProfile, WeatherSnapshot
from app.services.domain.compatibility_scorer import (
    CompatibilityScorer,
    DEFAULT_WEIGHTS,
    ScoringWeights,
    match_label,
)
from app.services.domain.weather_matching import (
    FULL_CREDIT,
    NO_CREDIT,
    PARTIAL_CREDIT,
    humidity_credit,
    match_weather,
    temperature_credit,
)


# ============================================================
# Weight Budget Tests
# ============================================================

class TestScoringWeights:
    """Tests for the point budget."""

    def test_default_weights_sum_to_100(self):
        """Region, zone and goal weights should use the whole budget."""
        assert DEFAULT_WEIGHTS.total == 100

    def test_unbalanced_weights_rejected(self):
        """A scorer should refuse weights that don't sum to 100."""
        with pytest.raises(ValueError, match="sum to 100"):
            CompatibilityScorer(ScoringWeights(region=50))


# ============================================================
# Component Scoring Tests
# ============================================================

class TestComponentScoring:
    """Tests for the individual score components."""

    def test_empty_profile_scores_zero(self, grevillea):
        """No stated information should earn no points."""
        scorer = CompatibilityScorer()

        assert scorer.score(grevillea, UserProfile()) == 0

    def test_full_match_scores_100(self, grevillea, nyeri_profile):
        """Region, zone and every goal matching should give 100."""
        scorer = CompatibilityScorer()

        assert scorer.score(grevillea, nyeri_profile) == 100

    def test_nyeri_highland_timber_scenario(self, catalog, nyeri_profile):
        """Grevillea in Nyeri/UH1 for timber should be a near-perfect match."""
        scorer = CompatibilityScorer()
        tree = catalog.get("grevillea")

        assert scorer.score(tree, nyeri_profile) >= 90

    def test_unlisted_region_gets_partial_credit(self, grevillea):
        """A stated but unlisted region should earn the partial region credit."""
        scorer = CompatibilityScorer()
        profile = UserProfile(region="Kajiado")

        assert scorer.region_points(grevillea, profile) == 20

    def test_zone_category_partial_credit(self, grevillea):
        """A zone in the same category should earn partial zone credit."""
        scorer = CompatibilityScorer()
        profile = UserProfile(agro_zone="UH3")

        assert scorer.zone_points(grevillea, profile) == 20

    def test_zone_fallback_credit(self, grevillea):
        """A stated zone with no category match should earn the fallback credit."""
        scorer = CompatibilityScorer()
        profile = UserProfile(agro_zone="CL4")

        assert scorer.zone_points(grevillea, profile) == 10

    def test_zone_match_is_case_insensitive(self, grevillea):
        scorer = CompatibilityScorer()

        assert scorer.zone_points(grevillea, UserProfile(agro_zone="uh1")) == 35

    def test_goal_points_are_floored(self, grevillea):
        """Half of the goals matching should give floor(12.5) = 12."""
        scorer = CompatibilityScorer()
        profile = UserProfile(conservation_goals={"timber", "fruit"})

        assert scorer.goal_points(grevillea, profile) == 12

    def test_combined_partial_profile(self, grevillea):
        """Components should add up independently."""
        scorer = CompatibilityScorer()
        profile = UserProfile(
            region="Kajiado",
            agro_zone="UH1",
            conservation_goals={"timber"},
        )

        assert scorer.score(grevillea, profile) == 80


# ============================================================
# Weather Bonus Tests
# ============================================================

class TestWeatherBonus:
    """Tests for the live-weather bonus."""

    def test_no_bonus_without_location(self, grevillea, highland_weather):
        """Weather should be ignored when the profile has no location."""
        scorer = CompatibilityScorer()
        profile = UserProfile(region="Kajiado", agro_zone="UH1", conservation_goals={"timber"})

        assert scorer.weather_bonus(grevillea, profile, highland_weather) == 0
        assert scorer.score(grevillea, profile, highland_weather) == 80

    def test_full_bonus_for_ideal_weather(self, grevillea, nyeri_location, highland_weather):
        """Weather inside every ideal range should add the full 5 points."""
        scorer = CompatibilityScorer()
        profile = UserProfile(
            region="Kajiado",
            agro_zone="UH1",
            conservation_goals={"timber"},
            location=nyeri_location,
        )

        assert scorer.weather_bonus(grevillea, profile, highland_weather) == 5
        assert scorer.score(grevillea, profile, highland_weather) == 85

    def test_score_capped_at_100(self, grevillea, nyeri_location, highland_weather):
        """A perfect base score plus bonus should still be 100."""
        scorer = CompatibilityScorer()
        profile = UserProfile(
            region="Nyeri",
            agro_zone="UH1",
            conservation_goals={"timber"},
            location=nyeri_location,
        )

        assert scorer.score(grevillea, profile, highland_weather) == 100

    def test_hostile_weather_earns_no_bonus(self, grevillea, nyeri_location):
        """Weather far outside every range should add nothing."""
        scorer = CompatibilityScorer()
        profile = UserProfile(location=nyeri_location)
        weather = WeatherSnapshot(temperature_c=40, humidity_pct=5, annual_rainfall_mm=100)

        assert scorer.weather_bonus(grevillea, profile, weather) == 0

    def test_temperature_tolerance_gives_partial_credit(self, grevillea):
        """Within 5°C of the range should earn partial credit."""
        assert temperature_credit(grevillea, 18) == FULL_CREDIT
        assert temperature_credit(grevillea, 28) == PARTIAL_CREDIT
        assert temperature_credit(grevillea, 31) == NO_CREDIT

    def test_tree_without_soils_gets_partial_humidity(self, grevillea):
        """No preferred soils means humidity can't be judged either way."""
        tree = grevillea.model_copy(update={"preferred_soils": set()})

        assert humidity_credit(tree, 99) == PARTIAL_CREDIT

    def test_match_weather_average(self, mango):
        """Coastal weather should fully match a coastal tree."""
        weather = WeatherSnapshot(temperature_c=28, humidity_pct=55, annual_rainfall_mm=1000)

        assert match_weather(mango, weather).average == pytest.approx(1.0)


# ============================================================
# Bounds and Label Tests
# ============================================================

class TestBoundsAndLabels:
    """Tests for score bounds and labels."""

    @pytest.mark.parametrize("profile", [
        UserProfile(),
        UserProfile(region="Nyeri"),
        UserProfile(agro_zone="IL6", conservation_goals={"fodder", "fruit"}),
        UserProfile(region="Mombasa", agro_zone="CL2", conservation_goals={"fruit", "shade"}),
    ])
    def test_score_always_in_range(self, catalog, profile, highland_weather):
        """Every catalog tree should score within 0-100."""
        scorer = CompatibilityScorer()

        for tree in catalog.all():
            assert 0 <= scorer.score(tree, profile, highland_weather) <= 100

    @pytest.mark.parametrize("score,label", [
        (100, "Perfect Match"),
        (90, "Perfect Match"),
        (89, "Excellent Match"),
        (80, "Excellent Match"),
        (70, "Great Match"),
        (60, "Good Match"),
        (50, "Fair Match"),
        (49, "Poor Match"),
    ])
    def test_match_labels(self, score, label):
        assert match_label(score) == label

    def test_evaluate_wraps_score(self, grevillea, nyeri_profile):
        result = CompatibilityScorer().evaluate(grevillea, nyeri_profile)

        assert result.score == 100


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
