"""
Application service: Orchestration layer for tree recommendations.
"""
from typing import Dict, Iterable, List, Optional
import logging

from app.config import settings
from app.domain.errors import LocationUnavailable, WeatherUnavailable
from app.domain.models import (
    BehaviorEvent,
    LedgerInsights,
    LocationSample,
    RankedRecommendation,
    RecommendationReport,
    TreeAssessment,
    TreeSpecies,
    UserProfile,
    WeatherSnapshot,
    ZoneResolution,
)
from app.infrastructure.external_api_client import WeatherClient
from app.infrastructure.location_cache import LocationCache
from app.infrastructure.position_provider import PositionProvider
from app.infrastructure.species_catalog import SpeciesCatalog
from app.services.application.location_acquirer import LocationAcquirer
from app.services.application.zone_resolver import ZoneResolver
from app.services.domain.behavior_ledger import BehaviorLedger
from app.services.domain.compatibility_scorer import match_label
from app.services.domain.recommendation_ranker import RecommendationRanker
from app.services.domain.seasonal_advisor import SeasonalAdvisor
from app.services.domain.success_estimator import SuccessEstimator
from app.utils.spatial_helpers import normalize_county_name

logger = logging.getLogger(__name__)


class RecommendationService:
    """
    Application service for recommendation-related operations.

    Orchestrates location, zone and weather lookups, then hands the enriched
    profile to the domain services. No scoring happens here, only
    coordination between infrastructure and domain layers.
    """

    def __init__(
        self,
        catalog: SpeciesCatalog,
        ledger: BehaviorLedger,
        acquirer: LocationAcquirer,
        resolver: ZoneResolver,
        weather_client: Optional[WeatherClient] = None,
        ranker: Optional[RecommendationRanker] = None,
        advisor: Optional[SeasonalAdvisor] = None,
        estimator: Optional[SuccessEstimator] = None,
    ):
        """
        Initialize the service with dependencies.

        Args:
            catalog: Species reference data
            ledger: Behavior ledger used for personalization
            acquirer: Location fallback chain
            resolver: Coordinate to region/zone resolver
            weather_client: Weather collaborator; weather is skipped when None
            ranker: Recommendation ranker
            advisor: Seasonal advisor
            estimator: Success estimator, sharing the ranker's scorer by default
        """
        self.catalog = catalog
        self.ledger = ledger
        self.acquirer = acquirer
        self.resolver = resolver
        self.weather_client = weather_client
        self.ranker = ranker or RecommendationRanker()
        self.advisor = advisor or SeasonalAdvisor()
        self.estimator = estimator or SuccessEstimator(
            scorer=self.ranker.scorer, advisor=self.advisor
        )

    @property
    def cache(self) -> LocationCache:
        return self.acquirer.cache

    async def recommend(
        self,
        profile: UserProfile,
        session_id: Optional[str] = None,
        client_ip: Optional[str] = None,
        gps_provider: Optional[PositionProvider] = None,
        user_id: Optional[str] = None,
        min_score: Optional[int] = None,
    ) -> RecommendationReport:
        """
        Build a ranked, fully assessed recommendation report.

        This method orchestrates:
        1. Acquiring a location when the profile has none and a session is given
        2. Filling missing region/zone from the location or the chosen region
        3. Fetching weather (omitted when unavailable)
        4. Computing behavior bias when a user id is given
        5. Ranking the catalog
        6. Attaching seasonal and success assessments to each result

        Args:
            profile: What the user told us
            session_id: Location cache partition; enables location acquisition
            client_ip: Caller's IP address for the IP fallback
            gps_provider: Device GPS report for this request
            user_id: Enables personalization from the behavior ledger
            min_score: Threshold override; defaults to the configured minimum score

        Returns:
            RecommendationReport

        Raises:
            LocationUnavailable: If a location was needed and every source failed
            InvalidCoordinates: If the profile location is out of range
        """
        min_score = settings.min_compatibility_score if min_score is None else min_score

        if profile.location is None and session_id is not None:
            profile = await self._with_acquired_location(
                profile, session_id, client_ip, gps_provider
            )

        profile, zone = await self._with_zone(profile)
        weather = await self._weather_for(profile, session_id)

        personalization: Dict[str, float] = {}
        if user_id is not None:
            personalization = self.ledger.likelihoods(
                user_id, (tree.id for tree in self.catalog.all())
            )

        ranked = self.ranker.rank(
            self.catalog.all(),
            profile,
            weather=weather,
            min_score=min_score,
            bias=personalization,
        )
        assessments = [self._assess(entry, profile, weather) for entry in ranked]

        logger.info(
            f"Recommended {len(assessments)} trees for region={profile.region}, "
            f"zone={profile.agro_zone}, weather={'yes' if weather else 'no'}"
        )

        return RecommendationReport(
            profile=profile,
            zone=zone,
            weather=weather,
            min_score=min_score,
            recommendations=assessments,
            personalization=personalization,
        )

    async def tree_assessment(
        self,
        tree_id: str,
        profile: UserProfile,
        session_id: Optional[str] = None,
    ) -> TreeAssessment:
        """
        Score, season and success estimate for one tree.

        Args:
            tree_id: Catalog id of the tree
            profile: What the user told us
            session_id: Location cache partition used for cached weather

        Returns:
            TreeAssessment

        Raises:
            SpeciesNotFound: If the tree id is unknown
        """
        tree = self.catalog.get(tree_id)
        profile, _ = await self._with_zone(profile)
        weather = await self._weather_for(profile, session_id)
        score = self.ranker.scorer.score(tree, profile, weather)
        entry = RankedRecommendation(tree=tree, score=score, label=match_label(score))
        return self._assess(entry, profile, weather)

    async def acquire_location(
        self,
        session_id: str,
        client_ip: Optional[str] = None,
        gps_provider: Optional[PositionProvider] = None,
    ) -> LocationSample:
        return await self.acquirer.acquire_location(session_id, client_ip, gps_provider)

    async def resolve_zone(
        self,
        latitude: float,
        longitude: float,
        altitude: Optional[float] = None,
    ) -> ZoneResolution:
        return await self.resolver.resolve_zone(latitude, longitude, altitude)

    def resolve_region(self, region_name: str) -> ZoneResolution:
        return self.resolver.resolve_region(region_name)

    def list_trees(self) -> List[TreeSpecies]:
        return self.catalog.all()

    def record_behavior(self, event: BehaviorEvent) -> None:
        """Record a behavior event after checking the tree exists."""
        self.catalog.get(event.tree_id)
        self.ledger.record(event)

    def set_goals(self, user_id: str, goals: Iterable[str]) -> None:
        self.ledger.set_goals(user_id, goals)

    def likelihood(self, user_id: str, tree_id: str) -> float:
        self.catalog.get(tree_id)
        return self.ledger.similar_user_likelihood(user_id, tree_id)

    def survival_rate(
        self,
        tree_id: str,
        region: Optional[str] = None,
        agro_zone: Optional[str] = None,
    ) -> float:
        self.catalog.get(tree_id)
        return self.ledger.survival_rate(tree_id, region, agro_zone)

    def insights(self) -> LedgerInsights:
        return self.ledger.insights()

    def _assess(
        self,
        entry: RankedRecommendation,
        profile: UserProfile,
        weather: Optional[WeatherSnapshot],
    ) -> TreeAssessment:
        return TreeAssessment(
            tree=entry.tree,
            score=entry.score,
            label=entry.label,
            season=self.advisor.recommend_season(entry.tree, profile),
            success=self.estimator.estimate_success(entry.tree, profile, weather),
        )

    async def _with_acquired_location(
        self,
        profile: UserProfile,
        session_id: str,
        client_ip: Optional[str],
        gps_provider: Optional[PositionProvider],
    ) -> UserProfile:
        try:
            location = await self.acquirer.acquire_location(session_id, client_ip, gps_provider)
        except LocationUnavailable:
            # Without a location or a stated region there is nothing to score against
            if profile.region is None and profile.agro_zone is None:
                raise
            logger.warning("Location unavailable, continuing with the stated region")
            return profile
        return profile.model_copy(update={"location": location})

    async def _with_zone(self, profile: UserProfile):
        """Canonicalize the stated county, then fill missing region/zone; stated values win."""
        if profile.region is not None:
            canonical = normalize_county_name(profile.region)
            if canonical is not None and canonical != profile.region:
                profile = profile.model_copy(update={"region": canonical})

        if profile.region is not None and profile.agro_zone is not None:
            return profile, None

        if profile.location is not None:
            zone = await self.resolver.resolve_zone(
                profile.location.latitude,
                profile.location.longitude,
                profile.location.altitude_m,
            )
        elif profile.region is not None:
            zone = self.resolver.resolve_region(profile.region)
        else:
            return profile, None

        updated = profile.model_copy(update={
            "region": profile.region or zone.region,
            "agro_zone": profile.agro_zone or zone.agro_zone,
        })
        return updated, zone

    async def _weather_for(
        self,
        profile: UserProfile,
        session_id: Optional[str],
    ) -> Optional[WeatherSnapshot]:
        if profile.location is None or self.weather_client is None:
            return None

        cached = self.cache.get(session_id) if session_id is not None else None
        # Cached weather only describes the coordinates it was fetched for
        same_place = cached is not None and _same_position(cached.sample, profile.location)
        if same_place and cached.weather is not None:
            return cached.weather

        try:
            weather = await self.weather_client.get_weather(
                profile.location.latitude, profile.location.longitude
            )
        except WeatherUnavailable as e:
            logger.warning(f"Weather omitted: {e.message}")
            return None

        if same_place:
            self.cache.attach_weather(session_id, weather)
        return weather


def _same_position(a: LocationSample, b: LocationSample) -> bool:
    return a.latitude == b.latitude and a.longitude == b.longitude
