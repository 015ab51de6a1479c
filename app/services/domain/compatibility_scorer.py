"""
Domain service: compatibility scoring of tree species against a user profile.

The score is a fixed 100-point budget split across three signals:
- Administrative region (county) match
- Agro-ecological zone match, with partial credit for the same zone category
- Conservation goal coverage

An optional weather bonus is added on top when live weather and a resolved
location are both available. The final score is capped at 100.
"""
from dataclasses import dataclass
from typing import Optional
import logging
import math

from app.domain.models import (
    CompatibilityResult,
    TreeSpecies,
    UserProfile,
    WeatherSnapshot,
)
from app.services.domain.weather_matching import match_weather, zone_category

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoringWeights:
    """Point budget for compatibility scoring."""

    region: int = 40
    """Full credit when the profile's region is a suitable region"""

    region_partial: int = 20
    """Credit when a region is stated but not listed for the tree"""

    zone: int = 35
    """Full credit on exact agro-ecological zone membership"""

    zone_category_partial: int = 20
    """Credit when only the zone category (first two characters) matches"""

    zone_fallback: int = 10
    """Credit when a zone is stated but nothing matches"""

    goals: int = 25
    """Scaled by the share of stated goals the tree's uses cover"""

    weather_bonus_max: int = 5
    """Maximum bonus from live weather, added on top of the base score"""

    @property
    def total(self) -> int:
        return self.region + self.zone + self.goals


DEFAULT_WEIGHTS = ScoringWeights()

MAX_SCORE = 100


def match_label(score: int) -> str:
    """Human-readable label for a compatibility score."""
    if score >= 90:
        return "Perfect Match"
    if score >= 80:
        return "Excellent Match"
    if score >= 70:
        return "Great Match"
    if score >= 60:
        return "Good Match"
    if score >= 50:
        return "Fair Match"
    return "Poor Match"


class CompatibilityScorer:
    """
    Scores how well a tree species suits a user's profile and environment.

    Scoring never fails on missing profile fields; absent information earns
    zero for that component and the rest of the score still applies.
    """

    def __init__(self, weights: Optional[ScoringWeights] = None):
        self.weights = weights or DEFAULT_WEIGHTS
        if self.weights.total != MAX_SCORE:
            raise ValueError(
                f"Scoring weights must sum to {MAX_SCORE}, got {self.weights.total}"
            )

    def region_points(self, tree: TreeSpecies, profile: UserProfile) -> int:
        if not profile.region:
            return 0
        if profile.region in tree.suitable_regions:
            return self.weights.region
        return self.weights.region_partial

    def zone_points(self, tree: TreeSpecies, profile: UserProfile) -> int:
        if not profile.agro_zone:
            return 0
        zone = profile.agro_zone.upper()
        if zone in tree.suitable_zones:
            return self.weights.zone
        category = zone_category(zone)
        if any(zone_category(z) == category for z in tree.suitable_zones):
            return self.weights.zone_category_partial
        return self.weights.zone_fallback

    def goal_points(self, tree: TreeSpecies, profile: UserProfile) -> int:
        if not profile.conservation_goals:
            return 0
        matched = len(profile.conservation_goals & tree.uses)
        return math.floor(matched / len(profile.conservation_goals) * self.weights.goals)

    def weather_bonus(
        self,
        tree: TreeSpecies,
        profile: UserProfile,
        weather: Optional[WeatherSnapshot],
    ) -> int:
        """Bonus points from live weather; zero without weather or a location."""
        if weather is None or profile.location is None:
            return 0
        match = match_weather(tree, weather)
        return round(match.average * self.weights.weather_bonus_max)

    def base_score(self, tree: TreeSpecies, profile: UserProfile) -> int:
        """Score before any weather bonus, 0-100."""
        return (
            self.region_points(tree, profile)
            + self.zone_points(tree, profile)
            + self.goal_points(tree, profile)
        )

    def score(
        self,
        tree: TreeSpecies,
        profile: UserProfile,
        weather: Optional[WeatherSnapshot] = None,
    ) -> int:
        """
        Compute the compatibility score of a tree for a profile.

        Args:
            tree: Candidate species
            profile: User's stated profile
            weather: Optional live weather at the user's location

        Returns:
            Integer score between 0 and 100
        """
        base = self.base_score(tree, profile)
        bonus = self.weather_bonus(tree, profile, weather)
        score = max(0, min(MAX_SCORE, base + bonus))

        logger.debug(
            f"{tree.names.english}: {score} (base={base}, bonus={bonus}, "
            f"region={profile.region}, zone={profile.agro_zone})"
        )
        return score

    def evaluate(
        self,
        tree: TreeSpecies,
        profile: UserProfile,
        weather: Optional[WeatherSnapshot] = None,
    ) -> CompatibilityResult:
        return CompatibilityResult(score=self.score(tree, profile, weather))
