"""
API response models using Pydantic.
"""
from typing import List, Optional
from pydantic import BaseModel, Field

from app.domain.models import (
    LocationSample,
    TreeSpecies,
    ZoneResolution,
    ZoneResolutionMethod,
)


class TreeListResponse(BaseModel):
    """Response model for the catalog listing."""
    count: int = Field(description="Number of species in the catalog")
    trees: List[TreeSpecies]


class ReferenceRegionsResponse(BaseModel):
    """Response model for the recognised counties and agro-ecological zones."""
    counties: List[str] = Field(examples=[["Baringo", "Bomet"]])
    agro_zones: List[str] = Field(examples=[["UH1", "LH1"]])


class LocationResponse(BaseModel):
    """Response model for location acquisition."""
    location: LocationSample
    accuracy_rating: str = Field(
        description="excellent, good, fair or poor",
        examples=["good"]
    )


class ZoneResponse(BaseModel):
    """Response model for zone resolution."""
    region: Optional[str] = Field(default=None, examples=["Nyeri"])
    subregion: Optional[str] = None
    agro_zone: Optional[str] = Field(default=None, examples=["UH1"])
    method: ZoneResolutionMethod
    is_complete: bool = Field(
        description="True when both region and agro-zone were resolved"
    )

    @classmethod
    def from_resolution(cls, resolution: ZoneResolution) -> "ZoneResponse":
        return cls(
            region=resolution.region,
            subregion=resolution.subregion,
            agro_zone=resolution.agro_zone,
            method=resolution.method,
            is_complete=resolution.is_complete,
        )

    class Config:
        json_schema_extra = {
            "example": {
                "region": "Nyeri",
                "subregion": None,
                "agro_zone": "UH1",
                "method": "boundary",
                "is_complete": True,
            }
        }


class EventRecordedResponse(BaseModel):
    status: str = "recorded"
    user_id: str
    tree_id: str


class GoalsResponse(BaseModel):
    user_id: str
    goals: List[str]


class LikelihoodResponse(BaseModel):
    """How likely a user is to like a tree, and how well it has survived."""
    user_id: str
    tree_id: str
    likelihood: float = Field(ge=0, le=1)
    survival_rate: float = Field(ge=0, le=1)
