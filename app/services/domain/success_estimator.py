"""
Domain service: planting success probability.

Blends four independently computed factors (location, zone, season,
weather) into one probability and lists the factors that put the planting
at risk.
"""
from dataclasses import dataclass
from typing import List, Optional
import logging

import numpy as np

from app.domain.models import (
    SeasonRating,
    SuccessFactors,
    SuccessProbability,
    SuccessRating,
    TreeSpecies,
    UserProfile,
    WeatherSnapshot,
)
from app.services.domain.compatibility_scorer import CompatibilityScorer
from app.services.domain.seasonal_advisor import SeasonalAdvisor
from app.services.domain.weather_matching import match_weather

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SuccessWeights:
    """Percentage weight of each factor in the blended probability."""
    location: int = 35
    zone: int = 30
    season: int = 20
    weather: int = 15

    @property
    def total(self) -> int:
        return self.location + self.zone + self.season + self.weather


DEFAULT_SUCCESS_WEIGHTS = SuccessWeights()

SEASON_FACTORS = {
    SeasonRating.OPTIMAL: 100,
    SeasonRating.ACCEPTABLE: 70,
    SeasonRating.POOR: 30,
}

NEUTRAL_WEATHER_FACTOR = 70
LOW_FACTOR_THRESHOLD = 60

# Inclusive lower bounds, checked top-down
RATING_TIERS = (
    (85, SuccessRating.VERY_HIGH),
    (70, SuccessRating.HIGH),
    (50, SuccessRating.MODERATE),
)


def rating_for(probability: int) -> SuccessRating:
    """Map a probability (0-100) to its rating tier."""
    for lower_bound, rating in RATING_TIERS:
        if probability >= lower_bound:
            return rating
    return SuccessRating.LOW


def blend_factors(factors: SuccessFactors, weights: SuccessWeights) -> int:
    """Weighted average of the factors, rounded to an integer percentage."""
    values = np.array([factors.location, factors.zone, factors.season, factors.weather], dtype=float)
    shares = np.array([weights.location, weights.zone, weights.season, weights.weather], dtype=float)
    return int(np.floor(np.dot(values, shares) / weights.total + 0.5))


class SuccessEstimator:
    """
    Estimates the probability that a planting will establish.

    Location and zone factors reuse the compatibility scorer's region and
    zone credit (normalised to 0-100, without the weather bonus); the season
    factor reuses the seasonal advisor's rating.
    """

    def __init__(
        self,
        scorer: Optional[CompatibilityScorer] = None,
        advisor: Optional[SeasonalAdvisor] = None,
        weights: Optional[SuccessWeights] = None,
    ):
        self.scorer = scorer or CompatibilityScorer()
        self.advisor = advisor or SeasonalAdvisor()
        self.weights = weights or DEFAULT_SUCCESS_WEIGHTS
        if self.weights.total != 100:
            raise ValueError(f"Success weights must sum to 100, got {self.weights.total}")

    def estimate_success(
        self,
        tree: TreeSpecies,
        profile: UserProfile,
        weather: Optional[WeatherSnapshot] = None,
    ) -> SuccessProbability:
        """
        Estimate planting success for a tree and profile.

        Args:
            tree: Species being planted
            profile: User profile
            weather: Optional live weather

        Returns:
            SuccessProbability with factor breakdown and risk factors
        """
        risks: List[str] = []
        weights = self.scorer.weights
        name = tree.names.english

        location = round(self.scorer.region_points(tree, profile) * 100 / weights.region)
        if location < LOW_FACTOR_THRESHOLD:
            regions = ", ".join(sorted(tree.suitable_regions)[:3])
            risks.append(f"{name} is best suited for: {regions}")

        zone = round(self.scorer.zone_points(tree, profile) * 100 / weights.zone)
        if zone < LOW_FACTOR_THRESHOLD:
            risks.append(f"Optimal agro-zones: {', '.join(sorted(tree.suitable_zones))}")

        seasonal = self.advisor.recommend_season(tree, profile)
        season = SEASON_FACTORS[seasonal.current_season_rating]
        if season < LOW_FACTOR_THRESHOLD:
            risks.append(f"Best planting: {', '.join(seasonal.optimal_months)}")

        if weather is not None and profile.location is not None:
            weather_factor = round(match_weather(tree, weather).average * 100)
            if weather_factor < LOW_FACTOR_THRESHOLD:
                risks.append("Current weather conditions are less than ideal for this species")
        else:
            weather_factor = NEUTRAL_WEATHER_FACTOR

        factors = SuccessFactors(
            location=location,
            zone=zone,
            season=season,
            weather=weather_factor,
        )
        probability = blend_factors(factors, self.weights)

        logger.debug(f"Success for {tree.id}: {probability}% ({factors})")

        return SuccessProbability(
            probability=probability,
            rating=rating_for(probability),
            factors=factors,
            risk_factors=risks,
        )
