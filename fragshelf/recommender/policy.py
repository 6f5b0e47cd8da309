"""Tunable weights, thresholds and the scent-family climate partition."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Mapping

from fragshelf.config.settings import Settings
from fragshelf.recommender.types import TemperatureZone

# Families outside every group (Chypre, Animalic) carry no climate signal.
ZONE_FAMILIES: dict[TemperatureZone, tuple[str, ...]] = {
    TemperatureZone.HIGH_HEAT: ("Fresh", "Citrus", "Aquatic", "Fruity", "Green"),
    TemperatureZone.TRANSITIONAL_MILD: (
        "Woody",
        "Floral",
        "Synthetic",
        "Powdery",
        "Earthy",
        "Fougere",
    ),
    TemperatureZone.DEEP_COLD: (
        "Spicy",
        "Sweet",
        "Resinous",
        "Gourmand",
        "Leathery",
        "Smoky",
        "Oriental",
        "Creamy",
    ),
}


@dataclass(frozen=True, slots=True)
class RankingPolicy:
    """Every constant the ranking pipeline depends on, in one place."""

    season_weight: float = 0.4
    occasion_weight: float = 0.6
    business_share: float = 0.5
    daily_share: float = 0.5
    climate_gate: float = 20.0
    min_threshold: float = 15.0
    top_n: int = 10
    zone_families: Mapping[TemperatureZone, tuple[str, ...]] = field(
        default_factory=lambda: dict(ZONE_FAMILIES),
    )

    def with_overrides(self, **changes: float | int) -> "RankingPolicy":
        """Return a copy with the given fields replaced."""

        return replace(self, **changes)


DEFAULT_POLICY = RankingPolicy()


def policy_from_settings(settings: Settings) -> RankingPolicy:
    """Apply the environment-configurable knobs on top of the defaults."""

    return DEFAULT_POLICY.with_overrides(
        min_threshold=settings.rank_min_threshold,
        top_n=settings.rank_top_n,
        climate_gate=settings.rank_climate_gate,
    )
