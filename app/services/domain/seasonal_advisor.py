"""
Domain service: seasonal planting advice.

Two planting windows are recognised per location. Near the equator these
follow the long and short rains; in temperate latitudes they follow spring
and autumn, with the months flipped between hemispheres.
"""
from dataclasses import dataclass
from datetime import date
from typing import Callable, List, Optional, Tuple
import calendar
import logging

from app.domain.models import (
    SeasonalRecommendation,
    SeasonRating,
    TreeSpecies,
    UserProfile,
)

logger = logging.getLogger(__name__)

TROPICS_LATITUDE = 23.5
ACCEPTABLE_LEAD_MONTHS = 2


@dataclass(frozen=True)
class PlantingWindow:
    """A named run of calendar months (1-12) suitable for planting."""
    name: str
    months: Tuple[int, ...]

    @property
    def month_range(self) -> str:
        first = calendar.month_name[self.months[0]]
        last = calendar.month_name[self.months[-1]]
        return first if first == last else f"{first} to {last}"


TROPICAL_WINDOWS = (
    PlantingWindow("long rains", (3, 4, 5)),
    PlantingWindow("short rains", (10, 11)),
)
NORTHERN_TEMPERATE_WINDOWS = (
    PlantingWindow("spring", (3, 4, 5)),
    PlantingWindow("autumn", (9, 10, 11)),
)
SOUTHERN_TEMPERATE_WINDOWS = (
    PlantingWindow("autumn", (3, 4, 5)),
    PlantingWindow("spring", (9, 10, 11)),
)


def windows_for_latitude(latitude: Optional[float]) -> Tuple[PlantingWindow, ...]:
    """Pick the planting windows for a latitude (tropical when unknown)."""
    if latitude is None or abs(latitude) <= TROPICS_LATITUDE:
        return TROPICAL_WINDOWS
    if latitude > 0:
        return NORTHERN_TEMPERATE_WINDOWS
    return SOUTHERN_TEMPERATE_WINDOWS


def months_until(current: int, target: int) -> int:
    """Months from current to the next occurrence of target, 1-12."""
    delta = (target - current) % 12
    return delta or 12


class SeasonalAdvisor:
    """Rates the current month for planting and finds the next window."""

    def __init__(self, clock: Optional[Callable[[], date]] = None):
        self._clock = clock or date.today

    def recommend_season(
        self,
        tree: TreeSpecies,
        profile: UserProfile,
    ) -> SeasonalRecommendation:
        """
        Build a seasonal planting recommendation.

        Args:
            tree: Species being planted
            profile: User profile; its location picks the planting windows

        Returns:
            SeasonalRecommendation for today's date
        """
        today = self._clock()
        latitude = profile.location.latitude if profile.location else None
        windows = windows_for_latitude(latitude)

        optimal_months: List[int] = sorted(m for w in windows for m in w.months)
        current_window = next((w for w in windows if today.month in w.months), None)

        next_month = min(optimal_months, key=lambda m: months_until(today.month, m))
        wait = months_until(today.month, next_month)
        next_year = today.year + (1 if next_month <= today.month else 0)
        next_optimal_date = date(next_year, next_month, 1)
        upcoming = next(w for w in windows if next_month in w.months)

        name = tree.names.english
        if tree.names.swahili:
            name = f"{tree.names.swahili} ({tree.names.english})"

        if current_window is not None:
            rating = SeasonRating.OPTIMAL
            advice = (
                f"Perfect time! {name} thrives when planted during the "
                f"{current_window.name} ({current_window.month_range})."
            )
        elif wait <= ACCEPTABLE_LEAD_MONTHS:
            rating = SeasonRating.ACCEPTABLE
            advice = (
                f"Wait {wait} month{'s' if wait > 1 else ''} for the "
                f"{upcoming.name} ({upcoming.month_range}). Prepare your site now."
            )
        else:
            rating = SeasonRating.POOR
            advice = (
                f"Wait for the {upcoming.name} ({upcoming.month_range}). Use this "
                f"time for site preparation and soil testing."
            )

        logger.debug(f"Season for {tree.id} in month {today.month}: {rating.value}")

        return SeasonalRecommendation(
            can_plant_now=current_window is not None,
            optimal_months=[calendar.month_name[m] for m in optimal_months],
            current_season_rating=rating,
            next_optimal_date=next_optimal_date,
            advice=advice,
        )
