"""Application services sitting between the HTTP layer and the database."""

from .accounts import (
    AccountService,
    InvalidCredentialsError,
    UsernameTakenError,
    WeakPasswordError,
)
from .collection import CollectionService, FragranceNotFoundError, to_profile
from .recommendation import Recommendation, RecommendationService

__all__ = [
    "AccountService",
    "CollectionService",
    "FragranceNotFoundError",
    "InvalidCredentialsError",
    "Recommendation",
    "RecommendationService",
    "UsernameTakenError",
    "WeakPasswordError",
    "to_profile",
]
