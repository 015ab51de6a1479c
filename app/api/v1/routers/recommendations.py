"""
API router for ranked tree recommendations.
"""
from fastapi import APIRouter, Request
from slowapi.util import get_remote_address

from app.api.dependencies import RecommendationServiceDep
from app.api.v1.models.requests import RecommendationRequest
from app.domain.models import RecommendationReport
from app.middleware.rate_limit import RECOMMENDATION_RATE_LIMIT, limiter


router = APIRouter(
    prefix="/recommendations",
    tags=["recommendations"],
)


@router.post(
    "",
    response_model=RecommendationReport,
    summary="Get ranked tree recommendations",
    description="""
    Rank the species catalog for a user's profile.

    This endpoint:
    1. Acquires the user's location when a session id is given and the
       profile carries no coordinates (cache, then device GPS, then IP)
    2. Fills a missing region/agro-zone from the location
    3. Fetches live weather (omitted when unavailable)
    4. Biases scores by similar users' likes when a user id is given
    5. Drops trees below the minimum score and sorts the rest
    6. Attaches seasonal advice and a planting success estimate to each tree

    Scoring uses region (40), agro-zone (35) and conservation goals (25),
    plus up to 5 bonus points for a good weather match.
    """,
    responses={
        200: {
            "description": "Ranked recommendations",
        },
        422: {
            "description": "Invalid request, or no location could be determined "
                           "(requires_manual_entry is true)",
        },
        429: {
            "description": "Rate limit exceeded",
        },
    }
)
@limiter.limit(RECOMMENDATION_RATE_LIMIT)
async def recommend(
    request: Request,
    body: RecommendationRequest,
    service: RecommendationServiceDep,
) -> RecommendationReport:
    """
    Build a recommendation report.

    Args:
        request: Incoming request (used for rate limiting and the client IP)
        body: Profile and options
        service: Recommendation service (injected dependency)

    Returns:
        RecommendationReport
    """
    return await service.recommend(
        body.profile.to_profile(),
        session_id=body.session_id,
        client_ip=get_remote_address(request),
        gps_provider=body.gps.to_provider() if body.gps else None,
        user_id=body.user_id,
        min_score=body.min_score,
    )
