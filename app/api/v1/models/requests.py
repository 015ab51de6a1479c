"""
API request models using Pydantic.
"""
from typing import List, Optional
from pydantic import BaseModel, Field, model_validator

from app.domain.models import (
    BehaviorAction,
    BehaviorEvent,
    LocationSample,
    LocationSource,
    UserProfile,
)
from app.infrastructure.position_provider import (
    GpsErrorKind,
    GpsFix,
    ReportedPositionProvider,
)


class DeviceGpsReport(BaseModel):
    """What the device's GPS produced: a fix, or the error it hit."""
    fix: Optional[GpsFix] = Field(
        default=None,
        description="Position reported by the device"
    )
    error: Optional[GpsErrorKind] = Field(
        default=None,
        description="Why the device could not produce a fix"
    )

    def to_provider(self) -> ReportedPositionProvider:
        return ReportedPositionProvider(fix=self.fix, error=self.error)


class ProfileRequest(BaseModel):
    """User profile, optionally with a manually entered location."""
    region: Optional[str] = Field(default=None, examples=["Nyeri"])
    agro_zone: Optional[str] = Field(default=None, examples=["UH1"])
    soil_type: Optional[str] = Field(default=None, examples=["loamy"])
    climate_zone: Optional[str] = Field(default=None, examples=["temperate"])
    land_size_ha: Optional[float] = Field(default=None, ge=0)
    conservation_goals: List[str] = Field(default_factory=list, examples=[["timber"]])
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    altitude_m: Optional[float] = None

    @model_validator(mode="after")
    def check_coordinates_pair(self):
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must be given together")
        return self

    def to_profile(self) -> UserProfile:
        location = None
        if self.latitude is not None and self.longitude is not None:
            location = LocationSample(
                latitude=self.latitude,
                longitude=self.longitude,
                accuracy_m=0,
                altitude_m=self.altitude_m,
                source=LocationSource.MANUAL,
            )
        return UserProfile(
            region=self.region,
            agro_zone=self.agro_zone,
            soil_type=self.soil_type,
            climate_zone=self.climate_zone,
            land_size_ha=self.land_size_ha,
            conservation_goals=set(self.conservation_goals),
            location=location,
        )


class RecommendationRequest(BaseModel):
    """Request body for the recommendations endpoint."""
    profile: ProfileRequest = Field(default_factory=ProfileRequest)
    session_id: Optional[str] = Field(
        default=None,
        description="Enables automatic location acquisition and caching"
    )
    user_id: Optional[str] = Field(
        default=None,
        description="Enables personalization from past behavior"
    )
    min_score: Optional[int] = Field(default=None, ge=0, le=100)
    gps: Optional[DeviceGpsReport] = None

    class Config:
        json_schema_extra = {
            "example": {
                "profile": {
                    "region": "Nyeri",
                    "agro_zone": "UH1",
                    "conservation_goals": ["timber"],
                },
                "min_score": 50,
            }
        }


class AssessmentRequest(BaseModel):
    """Request body for a single-tree assessment."""
    profile: ProfileRequest = Field(default_factory=ProfileRequest)
    session_id: Optional[str] = None


class LocationAcquireRequest(BaseModel):
    """Request body for location acquisition."""
    session_id: str = Field(min_length=1)
    gps: Optional[DeviceGpsReport] = None


class ZoneResolveRequest(BaseModel):
    """Coordinates to resolve, or a manually chosen region."""
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    altitude_m: Optional[float] = None
    region: Optional[str] = None

    @model_validator(mode="after")
    def check_target(self):
        has_coordinates = self.latitude is not None and self.longitude is not None
        if not has_coordinates and not self.region:
            raise ValueError("Provide latitude and longitude, or a region")
        return self


class BehaviorEventRequest(BaseModel):
    """A like, dislike or planting outcome."""
    user_id: str = Field(min_length=1)
    tree_id: str = Field(min_length=1)
    action: BehaviorAction
    region: Optional[str] = None
    agro_zone: Optional[str] = None
    survived: Optional[bool] = None

    @model_validator(mode="after")
    def check_outcome(self):
        if self.action == BehaviorAction.PLANTED_OUTCOME and self.survived is None:
            raise ValueError("planted-outcome events need 'survived'")
        return self

    def to_event(self) -> BehaviorEvent:
        return BehaviorEvent(**self.model_dump())


class GoalsRequest(BaseModel):
    goals: List[str] = Field(default_factory=list, examples=[["timber", "conservation"]])
