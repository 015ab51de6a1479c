"""
API router for zone resolution.
"""
from fastapi import APIRouter

from app.api.dependencies import RecommendationServiceDep
from app.api.v1.models.requests import ZoneResolveRequest
from app.api.v1.models.responses import ZoneResponse


router = APIRouter(
    prefix="/zones",
    tags=["zones"],
)


@router.post(
    "/resolve",
    response_model=ZoneResponse,
    summary="Resolve a county and agro-ecological zone",
    description="""
    Map coordinates (or a manually chosen county) to a county and
    agro-ecological zone. Coordinates take precedence over the region.

    Unresolvable points return nulls with `is_complete: false` rather than
    an error.
    """,
)
async def resolve_zone(
    body: ZoneResolveRequest,
    service: RecommendationServiceDep,
) -> ZoneResponse:
    if body.latitude is not None and body.longitude is not None:
        resolution = await service.resolve_zone(body.latitude, body.longitude, body.altitude_m)
    else:
        resolution = service.resolve_region(body.region)
    return ZoneResponse.from_resolution(resolution)
