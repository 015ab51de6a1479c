"""
Domain service: ranking the species catalog for a profile.
"""
from typing import Iterable, List, Mapping, Optional
import logging

from app.domain.models import (
    RankedRecommendation,
    TreeSpecies,
    UserProfile,
    WeatherSnapshot,
)
from app.services.domain.compatibility_scorer import (
    CompatibilityScorer,
    MAX_SCORE,
    match_label,
)

logger = logging.getLogger(__name__)

DEFAULT_MIN_SCORE = 50
NEUTRAL_LIKELIHOOD = 0.5
MAX_BIAS_POINTS = 5


def bias_points(likelihood: float) -> int:
    """Score shift for a behavior likelihood; zero at the neutral 0.5."""
    return round((likelihood - NEUTRAL_LIKELIHOOD) * 2 * MAX_BIAS_POINTS)


class RecommendationRanker:
    """
    Filters and orders trees by compatibility.

    Stateless: every call rescores from scratch, so a changed profile or new
    weather is reflected immediately.
    """

    def __init__(self, scorer: Optional[CompatibilityScorer] = None):
        self.scorer = scorer or CompatibilityScorer()

    def rank(
        self,
        trees: Iterable[TreeSpecies],
        profile: UserProfile,
        weather: Optional[WeatherSnapshot] = None,
        min_score: int = DEFAULT_MIN_SCORE,
        bias: Optional[Mapping[str, float]] = None,
    ) -> List[RankedRecommendation]:
        """
        Score, threshold and sort trees for a profile.

        Args:
            trees: Candidate species, in catalog order
            profile: User profile
            weather: Optional live weather
            min_score: Entries scoring below this are dropped
            bias: Optional tree id -> likelihood (0-1) from past behavior

        Returns:
            Recommendations sorted by descending score; ties keep input order
        """
        bias = bias or {}
        scored: List[RankedRecommendation] = []
        trees = list(trees)

        for tree in trees:
            score = self.scorer.score(tree, profile, weather)
            if tree.id in bias:
                score = max(0, min(MAX_SCORE, score + bias_points(bias[tree.id])))
            if score < min_score:
                continue
            scored.append(RankedRecommendation(tree=tree, score=score, label=match_label(score)))

        # sorted() is stable, so equal scores stay in catalog order
        ranked = sorted(scored, key=lambda r: r.score, reverse=True)
        logger.info(f"Ranked {len(ranked)}/{len(trees)} trees at min_score={min_score}")
        return ranked
