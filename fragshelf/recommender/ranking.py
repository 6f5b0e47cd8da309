"""Fragrance ranking: score, filter, sort, truncate and preference reorder."""

from __future__ import annotations

import logging
from typing import Iterable

from fragshelf.recommender.climate_scorer import score_climate
from fragshelf.recommender.feedback import apply_preference_reorder
from fragshelf.recommender.occasion_scorer import score_occasion, shoe_distribution
from fragshelf.recommender.policy import DEFAULT_POLICY, RankingPolicy
from fragshelf.recommender.types import (
    FragranceProfile,
    RankedResult,
    RankingContext,
    RankingMode,
)

logger = logging.getLogger(__name__)


def intelligent_match(
    season_score: float,
    occasion_score: float,
    policy: RankingPolicy = DEFAULT_POLICY,
) -> float:
    """Weighted blend of season and occasion suitability (0..100)."""

    return policy.season_weight * season_score + policy.occasion_weight * occasion_score


class FragranceScorer:
    """Scores a single fragrance against a ranking context."""

    def __init__(self, policy: RankingPolicy = DEFAULT_POLICY) -> None:
        self._policy = policy

    def score(
        self,
        fragrance: FragranceProfile,
        context: RankingContext,
    ) -> RankedResult | None:
        """Return the scored result, or ``None`` when the climate gate rejects it."""

        if context.mode is RankingMode.INTELLIGENT:
            season_score = score_climate(fragrance, context.season, self._policy)
            occasion_score = score_occasion(fragrance, context.season, context.occasion)
            return RankedResult(
                fragrance=fragrance,
                match_score=intelligent_match(season_score, occasion_score, self._policy),
                sub_scores={"season": season_score, "occasion": occasion_score},
            )

        climate = score_climate(fragrance, context.zone, self._policy)
        if climate < self._policy.climate_gate:
            return None
        distribution = shoe_distribution(fragrance, context.shoe_category, self._policy)
        sub_scores = {"climate": climate, **distribution.as_dict(), "selected": distribution.selected}
        return RankedResult(
            fragrance=fragrance,
            match_score=distribution.selected,
            sub_scores=sub_scores,
        )


def rank(
    fragrances: Iterable[FragranceProfile],
    context: RankingContext,
    policy: RankingPolicy = DEFAULT_POLICY,
    *,
    min_threshold: float | None = None,
    top_n: int | None = None,
) -> list[RankedResult]:
    """
    Rank a collection snapshot for the given context.

    Fragrances scoring below ``min_threshold`` are dropped, the rest are sorted
    by match score (stable for ties), cut to ``top_n`` and passed through the
    like/dislike reorder. An empty or fully filtered collection yields ``[]``.
    """

    threshold = policy.min_threshold if min_threshold is None else min_threshold
    limit = policy.top_n if top_n is None else top_n
    scorer = FragranceScorer(policy)

    scored = [scorer.score(fragrance, context) for fragrance in fragrances]
    candidates = [
        result for result in scored if result is not None and result.match_score >= threshold
    ]
    ordered = sorted(candidates, key=lambda result: result.match_score, reverse=True)[:limit]

    logger.debug(
        "Ranked %s: %d scored, %d above %.1f, %d kept",
        context.describe(),
        len(scored),
        len(candidates),
        threshold,
        len(ordered),
    )
    return apply_preference_reorder(ordered)
