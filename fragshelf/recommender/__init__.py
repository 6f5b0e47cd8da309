"""Pure scoring and ranking engine for fragrance recommendations."""

from .climate_scorer import score_climate
from .explanation import explain
from .feedback import apply_preference_reorder
from .occasion_scorer import ShoeDistribution, score_occasion, shoe_distribution
from .policy import DEFAULT_POLICY, RankingPolicy, policy_from_settings
from .ranking import FragranceScorer, intelligent_match, rank
from .types import (
    SCENT_FAMILIES,
    FragranceProfile,
    InvalidContextError,
    Occasion,
    RankedResult,
    RankingContext,
    RankingMode,
    Season,
    ShoeCategory,
    TemperatureZone,
)

__all__ = [
    "DEFAULT_POLICY",
    "SCENT_FAMILIES",
    "FragranceProfile",
    "FragranceScorer",
    "InvalidContextError",
    "Occasion",
    "RankedResult",
    "RankingContext",
    "RankingMode",
    "RankingPolicy",
    "Season",
    "ShoeCategory",
    "ShoeDistribution",
    "TemperatureZone",
    "apply_preference_reorder",
    "explain",
    "intelligent_match",
    "policy_from_settings",
    "rank",
    "score_climate",
    "score_occasion",
    "shoe_distribution",
]
