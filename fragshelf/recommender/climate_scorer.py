"""
Climate suitability scoring.

Two context universes share one entry point:

- season keys (``spring`` .. ``winter``) return the stored seasonal vote directly;
- temperature zones (``highHeat``, ``transitionalMild``, ``deepCold``) blend the
  seasonal vote with the share of scent families that suit that climate.

Scores are on a 0..100 scale when the stored groups sum to 100, but nothing
here requires that; inputs are treated as raw weights.
"""

from __future__ import annotations

from typing import Any

from fragshelf.recommender.policy import DEFAULT_POLICY, RankingPolicy
from fragshelf.recommender.types import (
    FragranceProfile,
    InvalidContextError,
    Season,
    TemperatureZone,
)

_SEASON_VALUES = {member.value for member in Season}
_ZONE_VALUES = {member.value for member in TemperatureZone}


def zone_season_score(fragrance: FragranceProfile, zone: TemperatureZone) -> float:
    """Seasonal half of a zone score."""

    if zone is TemperatureZone.HIGH_HEAT:
        return fragrance.season(Season.SUMMER.value)
    if zone is TemperatureZone.DEEP_COLD:
        return fragrance.season(Season.WINTER.value)
    return (fragrance.season(Season.SPRING.value) + fragrance.season(Season.AUTUMN.value)) / 2


def zone_type_score(
    fragrance: FragranceProfile,
    zone: TemperatureZone,
    policy: RankingPolicy = DEFAULT_POLICY,
) -> float:
    """Share (0..100) of the climate-relevant families that belong to ``zone``."""

    group_sums = {
        group: sum(fragrance.family(name) for name in families)
        for group, families in policy.zone_families.items()
    }
    total = sum(group_sums.values())
    if total <= 0:
        return 0.0
    return 100.0 * group_sums.get(zone, 0.0) / total


def score_climate(
    fragrance: FragranceProfile,
    context_key: Season | TemperatureZone | str,
    policy: RankingPolicy = DEFAULT_POLICY,
) -> float:
    """Return the suitability of ``fragrance`` for a season or a temperature zone."""

    key = _resolve_key(context_key)
    if isinstance(key, Season):
        return fragrance.season(key.value)
    return (zone_season_score(fragrance, key) + zone_type_score(fragrance, key, policy)) / 2


def _resolve_key(context_key: Any) -> Season | TemperatureZone:
    if isinstance(context_key, (Season, TemperatureZone)):
        return context_key
    if not isinstance(context_key, str):
        raise InvalidContextError(f"{context_key!r} is neither a season nor a temperature zone")
    if context_key in _SEASON_VALUES:
        return Season(context_key)
    if context_key in _ZONE_VALUES:
        return TemperatureZone(context_key)
    raise InvalidContextError(f"{context_key!r} is neither a season nor a temperature zone")
