"""
API router for location acquisition.
"""
from fastapi import APIRouter, Request
from slowapi.util import get_remote_address

from app.api.dependencies import RecommendationServiceDep
from app.api.v1.models.requests import LocationAcquireRequest
from app.api.v1.models.responses import LocationResponse
from app.services.application.location_acquirer import accuracy_rating


router = APIRouter(
    prefix="/location",
    tags=["location"],
)


@router.post(
    "/acquire",
    response_model=LocationResponse,
    summary="Acquire the session's location",
    description="""
    Resolve a location through the fallback chain: the session's cached
    location (24h), then the GPS report sent with the request, then IP
    geolocation of the caller.

    When every source fails the response is 422 with
    `requires_manual_entry: true`; the client should ask the user to pick
    a location.
    """,
    responses={
        422: {"description": "No location source succeeded"},
    }
)
async def acquire_location(
    request: Request,
    body: LocationAcquireRequest,
    service: RecommendationServiceDep,
) -> LocationResponse:
    location = await service.acquire_location(
        body.session_id,
        client_ip=get_remote_address(request),
        gps_provider=body.gps.to_provider() if body.gps else None,
    )
    return LocationResponse(
        location=location,
        accuracy_rating=accuracy_rating(location.accuracy_m, location.source),
    )
