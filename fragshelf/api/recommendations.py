"""Quick-picker recommendation route."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fragshelf.api.auth import CurrentUser
from fragshelf.api.fragrances import get_collection_service
from fragshelf.api.schemas import (
    FragranceOut,
    RecommendationItem,
    RecommendationOut,
    RecommendationRequest,
)
from fragshelf.config.settings import get_settings
from fragshelf.db import models
from fragshelf.db.session import get_session
from fragshelf.recommender import policy_from_settings
from fragshelf.services.collection import CollectionService
from fragshelf.services.recommendation import RecommendationService

router = APIRouter(tags=["recommendations"])


def get_recommendation_service(
    collection: CollectionService = Depends(get_collection_service),
) -> RecommendationService:
    return RecommendationService(collection, policy_from_settings(get_settings()))


@router.post("/recommendations", response_model=RecommendationOut)
async def recommend(
    request: RecommendationRequest,
    user: models.User = CurrentUser,
    session: AsyncSession = Depends(get_session),
    service: RecommendationService = Depends(get_recommendation_service),
) -> RecommendationOut:
    """Rank the collection for a season/occasion or zone/shoe-category context."""

    context = request.to_context()
    limit = request.limit or get_settings().presented_results
    picks = await service.recommend(session, owner_id=user.id, context=context, limit=limit)
    return RecommendationOut(
        mode=context.mode,
        context=context.describe(),
        results=[
            RecommendationItem(
                rank=pick.position + 1,
                match_score=round(pick.result.match_score, 2),
                sub_scores={key: round(value, 2) for key, value in pick.result.sub_scores.items()},
                explanation=pick.explanation,
                fragrance=FragranceOut.from_model(pick.record),
            )
            for pick in picks
        ],
    )
