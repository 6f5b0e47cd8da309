"""Occasion suitability and the derived shoe-category distribution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from fragshelf.recommender.policy import DEFAULT_POLICY, RankingPolicy
from fragshelf.recommender.types import (
    FragranceProfile,
    Occasion,
    Season,
    ShoeCategory,
    coerce_enum,
)


@dataclass(frozen=True, slots=True)
class ShoeDistribution:
    """Normalised shoe-category weights, summing to 100 unless all are zero."""

    athletic: float
    work_boots: float
    casual_sneakers: float
    dress_shoes: float
    selected: float = 0.0

    def value(self, category: ShoeCategory) -> float:
        return self.as_dict()[category.value]

    def as_dict(self) -> dict[str, float]:
        return {
            ShoeCategory.ATHLETIC.value: self.athletic,
            ShoeCategory.WORK_BOOTS.value: self.work_boots,
            ShoeCategory.CASUAL_SNEAKERS.value: self.casual_sneakers,
            ShoeCategory.DRESS_SHOES.value: self.dress_shoes,
        }


def score_occasion(fragrance: FragranceProfile, season: Any, occasion: Any) -> float:
    """Occasion score for a season, preferring the per-season breakdown when present."""

    season = coerce_enum(Season, season)
    occasion = coerce_enum(Occasion, occasion)
    matrix = fragrance.season_occasions
    if matrix and season.value in matrix:
        return matrix[season.value].get(occasion.value, 0.0)
    return fragrance.occasion(occasion.value)


def raw_shoe_weights(
    fragrance: FragranceProfile,
    policy: RankingPolicy = DEFAULT_POLICY,
) -> dict[ShoeCategory, float]:
    daily = fragrance.occasion(Occasion.DAILY.value)
    business = fragrance.occasion(Occasion.BUSINESS.value)
    business_part = policy.business_share * business
    return {
        ShoeCategory.ATHLETIC: fragrance.occasion(Occasion.SPORT.value),
        ShoeCategory.WORK_BOOTS: daily + business_part,
        ShoeCategory.CASUAL_SNEAKERS: (
            fragrance.occasion(Occasion.LEISURE.value) + policy.daily_share * daily + business_part
        ),
        ShoeCategory.DRESS_SHOES: (
            fragrance.occasion(Occasion.EVENING.value)
            + fragrance.occasion(Occasion.NIGHT_OUT.value)
            + business_part
        ),
    }


def shoe_distribution(
    fragrance: FragranceProfile,
    selected: Any = None,
    policy: RankingPolicy = DEFAULT_POLICY,
) -> ShoeDistribution:
    """Derive the four-way shoe distribution from the flat occasion breakdown."""

    raw = raw_shoe_weights(fragrance, policy)
    total = sum(raw.values())
    if total > 0:
        normalised = {category: 100.0 * weight / total for category, weight in raw.items()}
    else:
        normalised = {category: 0.0 for category in raw}

    chosen = 0.0
    if selected is not None:
        chosen = normalised[coerce_enum(ShoeCategory, selected)]

    return ShoeDistribution(
        athletic=normalised[ShoeCategory.ATHLETIC],
        work_boots=normalised[ShoeCategory.WORK_BOOTS],
        casual_sneakers=normalised[ShoeCategory.CASUAL_SNEAKERS],
        dress_shoes=normalised[ShoeCategory.DRESS_SHOES],
        selected=chosen,
    )
