"""
API router for the species catalog and single-tree assessments.
"""
from fastapi import APIRouter, Path
from typing import Annotated

from app.api.dependencies import RecommendationServiceDep
from app.api.v1.models.requests import AssessmentRequest
from app.api.v1.models.responses import ReferenceRegionsResponse, TreeListResponse
from app.domain.models import TreeAssessment


router = APIRouter(
    prefix="/trees",
    tags=["trees"],
)


@router.get(
    "",
    response_model=TreeListResponse,
    summary="List tree species",
)
async def list_trees(service: RecommendationServiceDep) -> TreeListResponse:
    """Return every species in catalog order."""
    trees = service.list_trees()
    return TreeListResponse(count=len(trees), trees=trees)


@router.get(
    "/regions",
    response_model=ReferenceRegionsResponse,
    summary="List recognised counties and agro-zones",
)
async def list_regions(service: RecommendationServiceDep) -> ReferenceRegionsResponse:
    """Values accepted for a profile's region and agro-zone."""
    return ReferenceRegionsResponse(
        counties=service.catalog.counties,
        agro_zones=service.catalog.agro_zones,
    )


@router.post(
    "/{tree_id}/assessment",
    response_model=TreeAssessment,
    summary="Assess one tree for a profile",
    description="""
    Score a single tree against a profile and attach its seasonal
    recommendation and planting success estimate.

    Missing region/zone are filled from the profile's coordinates, or from
    the region when only the region is given.
    """,
    responses={
        404: {"description": "Tree species not found"},
    }
)
async def assess_tree(
    tree_id: Annotated[str, Path(description="Catalog id of the tree", examples=["grevillea"])],
    body: AssessmentRequest,
    service: RecommendationServiceDep,
) -> TreeAssessment:
    return await service.tree_assessment(
        tree_id,
        body.profile.to_profile(),
        session_id=body.session_id,
    )
