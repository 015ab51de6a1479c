"""
API router for user behavior: likes, dislikes, outcomes and goals.
"""
from fastapi import APIRouter, Path, Query, status
from typing import Annotated, Optional

from app.api.dependencies import RecommendationServiceDep
from app.api.v1.models.requests import BehaviorEventRequest, GoalsRequest
from app.api.v1.models.responses import (
    EventRecordedResponse,
    GoalsResponse,
    LikelihoodResponse,
)
from app.domain.models import LedgerInsights


router = APIRouter(
    prefix="/behavior",
    tags=["behavior"],
)


@router.post(
    "/events",
    response_model=EventRecordedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record a behavior event",
    responses={
        404: {"description": "Tree species not found"},
    }
)
async def record_event(
    body: BehaviorEventRequest,
    service: RecommendationServiceDep,
) -> EventRecordedResponse:
    service.record_behavior(body.to_event())
    return EventRecordedResponse(user_id=body.user_id, tree_id=body.tree_id)


@router.put(
    "/users/{user_id}/goals",
    response_model=GoalsResponse,
    summary="Store a user's conservation goals",
)
async def set_goals(
    user_id: Annotated[str, Path(description="User identifier")],
    body: GoalsRequest,
    service: RecommendationServiceDep,
) -> GoalsResponse:
    service.set_goals(user_id, body.goals)
    return GoalsResponse(user_id=user_id, goals=sorted(set(body.goals)))


@router.get(
    "/users/{user_id}/trees/{tree_id}/likelihood",
    response_model=LikelihoodResponse,
    summary="Likelihood a user likes a tree",
    description="""
    Share of users with similar goals (Jaccard similarity above 0.6) who
    liked the tree, plus the tree's recorded survival rate. Both fall back
    to neutral defaults (0.5 and 0.7) when there is no data.
    """,
    responses={
        404: {"description": "Tree species not found"},
    }
)
async def likelihood(
    user_id: Annotated[str, Path(description="User identifier")],
    tree_id: Annotated[str, Path(description="Catalog id of the tree")],
    service: RecommendationServiceDep,
    region: Annotated[Optional[str], Query(description="Only count outcomes in this region")] = None,
    agro_zone: Annotated[Optional[str], Query(description="Only count outcomes in this zone")] = None,
) -> LikelihoodResponse:
    return LikelihoodResponse(
        user_id=user_id,
        tree_id=tree_id,
        likelihood=service.likelihood(user_id, tree_id),
        survival_rate=service.survival_rate(tree_id, region, agro_zone),
    )


@router.get(
    "/insights",
    response_model=LedgerInsights,
    summary="Aggregate behavior insights",
)
async def insights(service: RecommendationServiceDep) -> LedgerInsights:
    return service.insights()
