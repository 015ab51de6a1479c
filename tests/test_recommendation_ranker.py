"""
Unit tests for recommendation ranking.

Tests cover:
- Threshold filtering
- Descending order with stable ties
- Behavior bias
"""
import pytest

from app.domain.models import UserProfile
from app.services.domain.recommendation_ranker import (
    RecommendationRanker,
    bias_points,
)


# ============================================================
# Ranking Tests
# ============================================================

class TestRanking:
    """Tests for filtering and ordering."""

    def test_results_sorted_and_above_threshold(self, catalog, nyeri_profile):
        """Every result should clear the threshold, highest first."""
        ranked = RecommendationRanker().rank(catalog.all(), nyeri_profile)

        scores = [r.score for r in ranked]
        assert scores == sorted(scores, reverse=True)
        assert all(score >= 50 for score in scores)
        assert ranked[0].tree.id == "grevillea"
        assert ranked[0].label == "Perfect Match"

    def test_custom_threshold(self, catalog, nyeri_profile):
        ranked = RecommendationRanker().rank(catalog.all(), nyeri_profile, min_score=90)

        assert ranked
        assert all(r.score >= 90 for r in ranked)

    def test_empty_profile_returns_nothing(self, catalog):
        """An empty profile scores 0 everywhere, so nothing passes."""
        assert RecommendationRanker().rank(catalog.all(), UserProfile()) == []

    def test_ties_keep_input_order(self, grevillea):
        """Equal scores should stay in catalog order."""
        twin = grevillea.model_copy(update={"id": "grevillea-twin"})
        profile = UserProfile(region="Nyeri", agro_zone="UH1")

        ranked = RecommendationRanker().rank([grevillea, twin], profile)

        assert [r.tree.id for r in ranked] == ["grevillea", "grevillea-twin"]

    def test_zero_threshold_keeps_everything(self, catalog):
        ranked = RecommendationRanker().rank(catalog.all(), UserProfile(), min_score=0)

        assert len(ranked) == len(catalog)


# ============================================================
# Bias Tests
# ============================================================

class TestBias:
    """Tests for behavior-based score bias."""

    @pytest.mark.parametrize("likelihood,points", [
        (0.0, -5),
        (0.5, 0),
        (1.0, 5),
    ])
    def test_bias_points(self, likelihood, points):
        assert bias_points(likelihood) == points

    def test_neutral_bias_leaves_ranking_unchanged(self, catalog, nyeri_profile):
        ranker = RecommendationRanker()
        neutral = {tree.id: 0.5 for tree in catalog.all()}

        plain = ranker.rank(catalog.all(), nyeri_profile)
        biased = ranker.rank(catalog.all(), nyeri_profile, bias=neutral)

        assert [(r.tree.id, r.score) for r in biased] == [(r.tree.id, r.score) for r in plain]

    def test_bias_applied_before_threshold(self, grevillea):
        """A liked tree just under the threshold should be lifted over it."""
        profile = UserProfile(
            region="Kajiado",
            agro_zone="UH3",
            conservation_goals={"timber", "fruit", "fodder", "medicine"},
        )
        ranker = RecommendationRanker()

        assert ranker.rank([grevillea], profile) == []

        ranked = ranker.rank([grevillea], profile, bias={"grevillea": 1.0})
        assert len(ranked) == 1
        assert ranked[0].score == 51

    def test_bias_never_exceeds_100(self, grevillea, nyeri_profile):
        ranked = RecommendationRanker().rank([grevillea], nyeri_profile, bias={"grevillea": 1.0})

        assert ranked[0].score == 100


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
