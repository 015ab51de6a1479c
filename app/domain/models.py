"""
Domain models for locations, tree species, user profiles and assessments.

These models represent the core domain entities and should be independent
of any infrastructure concerns (API clients, databases, etc.).
"""
from datetime import date, datetime, timezone
from enum import Enum
from typing import Dict, List, Optional, Set
from pydantic import BaseModel, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class LocationSource(str, Enum):
    """Where a location sample came from."""
    GPS = "gps"
    IP = "ip"
    MANUAL = "manual"
    CACHED = "cached"


class LocationSample(BaseModel):
    """A single resolved geographic position."""
    latitude: float = Field(ge=-90, le=90, description="Latitude in degrees")
    longitude: float = Field(ge=-180, le=180, description="Longitude in degrees")
    accuracy_m: float = Field(ge=0, description="Horizontal accuracy in meters")
    source: LocationSource
    captured_at: datetime = Field(default_factory=utc_now)
    altitude_m: Optional[float] = Field(
        default=None,
        description="Altitude in meters when the device reported one"
    )

    class Config:
        frozen = True


class WeatherSnapshot(BaseModel):
    """Current weather plus an annual rainfall estimate for a location."""
    temperature_c: float
    humidity_pct: float = Field(ge=0, le=100)
    annual_rainfall_mm: float = Field(ge=0)


class CachedLocation(BaseModel):
    """A location sample stored in the location cache."""
    sample: LocationSample
    weather: Optional[WeatherSnapshot] = None
    captured_at: datetime = Field(default_factory=utc_now)


class DisplayNames(BaseModel):
    """Human-readable names for a species."""
    english: str
    swahili: Optional[str] = None
    scientific: Optional[str] = None


class TreeSpecies(BaseModel):
    """Reference data for a tree species in the catalog."""
    id: str
    names: DisplayNames
    suitable_regions: Set[str] = Field(default_factory=set)
    suitable_zones: Set[str] = Field(default_factory=set)
    preferred_soils: Set[str] = Field(default_factory=set)
    suitable_climates: Set[str] = Field(default_factory=set)
    uses: Set[str] = Field(default_factory=set)
    price: float = Field(ge=0, description="Unit price in KES")
    growth_rate: str = "moderate"
    min_land_size_ha: float = Field(default=0.0, ge=0)
    description: str = ""

    class Config:
        frozen = True


class UserProfile(BaseModel):
    """What the user told us about their land and goals."""
    region: Optional[str] = None
    agro_zone: Optional[str] = None
    soil_type: Optional[str] = None
    climate_zone: Optional[str] = None
    land_size_ha: Optional[float] = Field(default=None, ge=0)
    conservation_goals: Set[str] = Field(default_factory=set)
    location: Optional[LocationSample] = None


class ZoneResolutionMethod(str, Enum):
    """How a zone resolution was reached."""
    MANUAL = "manual"
    GEOCODER = "geocoder"
    BOUNDARY = "boundary"
    NEAREST = "nearest"
    NONE = "none"


class ZoneResolution(BaseModel):
    """Administrative region and agro-ecological zone for a location."""
    region: Optional[str] = None
    subregion: Optional[str] = None
    agro_zone: Optional[str] = None
    method: ZoneResolutionMethod = ZoneResolutionMethod.NONE

    @property
    def is_complete(self) -> bool:
        return self.region is not None and self.agro_zone is not None


class CompatibilityResult(BaseModel):
    """Compatibility of one tree with one profile."""
    score: int = Field(ge=0, le=100)


class SeasonRating(str, Enum):
    OPTIMAL = "optimal"
    ACCEPTABLE = "acceptable"
    POOR = "poor"


class SeasonalRecommendation(BaseModel):
    """Whether now is a good time to plant, and when the next window opens."""
    can_plant_now: bool
    optimal_months: List[str]
    current_season_rating: SeasonRating
    next_optimal_date: date
    advice: str


class SuccessRating(str, Enum):
    VERY_HIGH = "very-high"
    HIGH = "high"
    MODERATE = "moderate"
    LOW = "low"


class SuccessFactors(BaseModel):
    """Per-factor inputs to a success probability, each 0-100."""
    location: int = Field(ge=0, le=100)
    zone: int = Field(ge=0, le=100)
    season: int = Field(ge=0, le=100)
    weather: int = Field(ge=0, le=100)


class SuccessProbability(BaseModel):
    """Estimated chance that a planting establishes."""
    probability: int = Field(ge=0, le=100)
    rating: SuccessRating
    factors: SuccessFactors
    risk_factors: List[str] = Field(default_factory=list)


class RankedRecommendation(BaseModel):
    """A tree that passed the compatibility threshold."""
    tree: TreeSpecies
    score: int = Field(ge=0, le=100)
    label: str


class BehaviorAction(str, Enum):
    LIKED = "liked"
    DISLIKED = "disliked"
    PLANTED_OUTCOME = "planted-outcome"


class BehaviorEvent(BaseModel):
    """One user interaction with a tree."""
    user_id: str
    tree_id: str
    action: BehaviorAction
    timestamp: datetime = Field(default_factory=utc_now)
    region: Optional[str] = None
    agro_zone: Optional[str] = None
    survived: Optional[bool] = Field(
        default=None,
        description="Only meaningful for planted-outcome events"
    )

    class Config:
        frozen = True


class TreeSurvival(BaseModel):
    tree_id: str
    survival_rate: float


class LedgerInsights(BaseModel):
    """Aggregate view over all recorded behavior."""
    total_users: int
    total_interactions: int
    average_survival_rate: float
    top_performing_trees: List[TreeSurvival]


class TreeAssessment(BaseModel):
    """Score, season and success estimate for a single tree."""
    tree: TreeSpecies
    score: int = Field(ge=0, le=100)
    label: str
    season: SeasonalRecommendation
    success: SuccessProbability


class RecommendationReport(BaseModel):
    """Everything the engine worked out for one recommendation request."""
    profile: UserProfile
    zone: Optional[ZoneResolution] = None
    weather: Optional[WeatherSnapshot] = None
    min_score: int
    recommendations: List[TreeAssessment]
    personalization: Dict[str, float] = Field(default_factory=dict)
