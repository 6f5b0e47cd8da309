"""Human-readable reasons attached to ranked picks."""

from __future__ import annotations

import random

from fragshelf.recommender.types import RankedResult, RankingContext, RankingMode

WEARABILITY_CUTOFF = 70.0

LIKED_CLOSINGS: tuple[str, ...] = (
    "already one of your favourites",
    "a proven personal favourite",
    "you already love this one",
    "a safe bet from your liked list",
)
NEUTRAL_CLOSINGS: tuple[str, ...] = (
    "give it a wear and see how it feels",
    "a good moment to rediscover it",
    "worth a spritz today",
    "could become a new favourite",
)
DISLIKED_CLOSING = "might deserve a second chance despite previous thoughts"


def _opener(rank: int, headline_score: float) -> str:
    if rank == 0:
        if headline_score >= 90:
            return "Absolutely built for this"
        if headline_score >= 70:
            return "Your top match here"
        return "Best available option"
    if rank == 1:
        return "Strong alternative"
    return "Worth considering"


def _season_clause(result: RankedResult, season: str) -> str:
    score = result.sub_scores.get("season", 0.0)
    seasons = result.fragrance.seasons
    top_season = max(seasons, key=seasons.get) if seasons else season
    if score >= 80:
        return f"thrives in {season} ({score:.0f}%)"
    if score >= 60:
        if top_season != season:
            return f"designed for {top_season} ({seasons[top_season]:.0f}%) but adapts well to {season}"
        return f"solid {season} performer at {score:.0f}%"
    if score >= 40:
        return f"works in {season} ({score:.0f}%) though not its strongest season"
    return f"versatile enough for {season} ({score:.0f}%)"


def _score_clauses(result: RankedResult, context: RankingContext) -> list[str]:
    if context.mode is RankingMode.INTELLIGENT:
        occasion = context.occasion.value
        return [
            _season_clause(result, context.season.value),
            f"{result.sub_scores.get('occasion', 0.0):.0f}% {occasion} suitability",
        ]
    category = context.shoe_category.value
    return [
        f"{result.match_score:.0f}% {category} fit",
        f"{result.sub_scores.get('climate', 0.0):.0f}% climate match for {context.zone.value}",
    ]


def _wearability_clause(result: RankedResult) -> str | None:
    wearability = result.fragrance.wearability
    if not wearability:
        return None
    if wearability.get("special_occasion", 0.0) >= WEARABILITY_CUTOFF:
        return "best saved for special occasions"
    if wearability.get("daily_wear", 0.0) >= WEARABILITY_CUTOFF:
        return "easy to wear every day"
    return None


def _closing(result: RankedResult, rng: random.Random) -> str:
    if result.liked is True:
        return rng.choice(LIKED_CLOSINGS)
    if result.liked is False:
        return DISLIKED_CLOSING
    return rng.choice(NEUTRAL_CLOSINGS)


def explain(
    result: RankedResult,
    rank: int,
    context: RankingContext,
    rng: random.Random | None = None,
) -> str:
    """Build a one-sentence rationale for the pick at position ``rank`` (0-based)."""

    rng = rng or random.Random()
    headline = result.sub_scores.get("season", result.match_score)
    segments = [_opener(rank, headline), *_score_clauses(result, context)]

    wearability = _wearability_clause(result)
    if wearability:
        segments.append(wearability)
    segments.append(_closing(result, rng))

    return ", ".join(segments) + "."
