"""Recommendation pipeline that feeds a collection snapshot to the ranking engine."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from fragshelf.db import models
from fragshelf.metrics.prometheus_exporter import (
    recommendation_empty_total,
    recommendation_requests_total,
)
from fragshelf.recommender import RankedResult, RankingContext, RankingPolicy, explain, rank
from fragshelf.services.collection import CollectionService, to_profile

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Recommendation:
    """A ranked pick ready for presentation."""

    position: int
    record: models.Fragrance
    result: RankedResult
    explanation: str


class RecommendationService:
    """Loads the owner's collection, ranks it and attaches explanations."""

    def __init__(
        self,
        collection: CollectionService,
        policy: RankingPolicy,
        rng: random.Random | None = None,
    ) -> None:
        self._collection = collection
        self._policy = policy
        self._rng = rng or random.Random()

    async def recommend(
        self,
        session: AsyncSession,
        *,
        owner_id: int,
        context: RankingContext,
        limit: int | None = None,
    ) -> list[Recommendation]:
        """
        Rank the owner's collection for ``context``.

        ``limit`` trims the ranked list for presentation; it never exceeds the
        policy's ``top_n``. An empty list means nothing cleared the threshold.
        """

        records = await self._collection.list_for_owner(session, owner_id=owner_id)
        by_id = {str(record.id): record for record in records}

        recommendation_requests_total.labels(mode=context.mode.value).inc()
        ranked = rank((to_profile(record) for record in records), context, self._policy)
        if limit is not None:
            ranked = ranked[:limit]

        if not ranked:
            recommendation_empty_total.labels(mode=context.mode.value).inc()
            logger.info("No matches for owner %d in %s", owner_id, context.describe())
            return []

        return [
            Recommendation(
                position=position,
                record=by_id[result.id],
                result=result,
                explanation=explain(result, position, context, self._rng),
            )
            for position, result in enumerate(ranked)
        ]
