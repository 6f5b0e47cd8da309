"""Request and response models for the HTTP API."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from fragshelf.db import models
from fragshelf.recommender import (
    InvalidContextError,
    Occasion,
    RankingContext,
    RankingMode,
    Season,
    ShoeCategory,
    TemperatureZone,
)
from fragshelf.recommender.types import canonical_family

WearCategory = Literal["dateNight", "nightOut", "leisure", "work"]
Month = Literal["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SeasonScores(BaseModel):
    spring: float = Field(default=0, ge=0)
    summer: float = Field(default=0, ge=0)
    autumn: float = Field(default=0, ge=0)
    winter: float = Field(default=0, ge=0)


class OccasionScores(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    daily: float = Field(default=0, ge=0)
    business: float = Field(default=0, ge=0)
    leisure: float = Field(default=0, ge=0)
    sport: float = Field(default=0, ge=0)
    evening: float = Field(default=0, ge=0)
    night_out: float = Field(default=0, ge=0, alias="night out")


class WearabilityScores(BaseModel):
    special_occasion: float = Field(default=50, ge=0)
    daily_wear: float = Field(default=50, ge=0)


def _canonical_types(value: dict[str, float], *, strict: bool) -> dict[str, float]:
    types: dict[str, float] = {}
    for key, score in value.items():
        family = canonical_family(key)
        if family is None:
            if strict:
                raise ValueError(f"unknown scent family {key!r}")
            continue
        if score < 0:
            raise ValueError(f"{family} must not be negative")
        types[family] = types.get(family, 0.0) + score
    return types


class FragranceIn(CamelModel):
    """Editable fragrance fields as submitted by the add/edit form."""

    brand: str = Field(min_length=1, max_length=255)
    name: str = Field(min_length=1, max_length=255)
    image_url: str = "/images/placeholder.jpg"
    seasons: SeasonScores = Field(default_factory=SeasonScores)
    occasions: OccasionScores = Field(default_factory=OccasionScores)
    types: dict[str, float] = Field(default_factory=dict)
    season_occasions: dict[Season, OccasionScores] | None = None
    wearability: WearabilityScores | None = None
    occasion_months: dict[WearCategory, list[Month]] | None = None
    liked: bool | None = None
    rating: float | None = Field(default=None, ge=0, le=10)
    review: str | None = None
    hidden: bool = False
    formality: str | None = Field(default=None, max_length=64)
    midday_touch_up: bool | None = None

    @field_validator("types")
    @classmethod
    def _validate_types(cls, value: dict[str, float]) -> dict[str, float]:
        return _canonical_types(value, strict=True)

    def to_columns(self) -> dict[str, Any]:
        """Flatten into the column layout of :class:`models.Fragrance`."""

        season_occasions = None
        if self.season_occasions is not None:
            season_occasions = {
                season.value: breakdown.model_dump(by_alias=True)
                for season, breakdown in self.season_occasions.items()
            }
        return {
            "brand": self.brand,
            "name": self.name,
            "image_url": self.image_url,
            "seasons": self.seasons.model_dump(),
            "occasions": self.occasions.model_dump(by_alias=True),
            "types": dict(self.types),
            "season_occasions": season_occasions,
            "wearability": self.wearability.model_dump() if self.wearability else None,
            "occasion_months": self.occasion_months,
            "liked": self.liked,
            "rating": self.rating,
            "review": self.review,
            "hidden": self.hidden,
            "formality": self.formality,
            "midday_touch_up": self.midday_touch_up,
        }


class FragranceOut(FragranceIn):
    id: str

    @field_validator("types")
    @classmethod
    def _validate_types(cls, value: dict[str, float]) -> dict[str, float]:
        return _canonical_types(value, strict=False)

    @classmethod
    def from_model(cls, record: models.Fragrance) -> "FragranceOut":
        return cls.model_validate(
            {
                "id": str(record.id),
                "brand": record.brand,
                "name": record.name,
                "image_url": record.image_url or "/images/placeholder.jpg",
                "seasons": record.seasons or {},
                "occasions": record.occasions or {},
                "types": record.types or {},
                "season_occasions": record.season_occasions,
                "wearability": record.wearability,
                "occasion_months": record.occasion_months,
                "liked": record.liked,
                "rating": record.rating,
                "review": record.review,
                "hidden": bool(record.hidden),
                "formality": record.formality,
                "midday_touch_up": record.midday_touch_up,
            },
        )


class FragrancePatch(CamelModel):
    """Partial preference update; only the fields sent are applied."""

    liked: bool | None = None
    rating: float | None = Field(default=None, ge=0, le=10)
    review: str | None = None
    hidden: bool = False

    def changes(self) -> dict[str, Any]:
        return self.model_dump(include=self.model_fields_set)


class FragranceQuery(CamelModel):
    seasons: dict[Season, float] = Field(default_factory=dict)
    occasions: dict[Occasion, float] = Field(default_factory=dict)
    family: str | None = None
    safest_first: bool = False

    @field_validator("family")
    @classmethod
    def _validate_family(cls, value: str | None) -> str | None:
        if value is None:
            return None
        family = canonical_family(value)
        if family is None:
            raise ValueError(f"unknown scent family {value!r}")
        return family


class FragranceQueryOut(CamelModel):
    fragrances: list[FragranceOut]
    available_types: list[str]


class AnalyticsEntryOut(BaseModel):
    name: str
    value: int


class AnalyticsOut(BaseModel):
    count: int
    seasons: list[AnalyticsEntryOut]
    occasions: list[AnalyticsEntryOut]
    types: list[AnalyticsEntryOut]


class RecommendationRequest(CamelModel):
    mode: RankingMode = RankingMode.INTELLIGENT
    season: Season | None = None
    occasion: Occasion | None = None
    zone: TemperatureZone | None = None
    shoe_category: ShoeCategory | None = None
    limit: int | None = Field(default=None, ge=1)

    def to_context(self) -> RankingContext:
        if self.mode is RankingMode.INTELLIGENT:
            if self.season is None or self.occasion is None:
                raise InvalidContextError("intelligent mode requires season and occasion")
            return RankingContext.intelligent(self.season, self.occasion)
        if self.zone is None or self.shoe_category is None:
            raise InvalidContextError("classic mode requires zone and shoeCategory")
        return RankingContext.classic(self.zone, self.shoe_category)


class RecommendationItem(CamelModel):
    rank: int
    match_score: float
    sub_scores: dict[str, float]
    explanation: str
    fragrance: FragranceOut


class RecommendationOut(CamelModel):
    mode: RankingMode
    context: str
    results: list[RecommendationItem]


class Credentials(BaseModel):
    username: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1)


class UserOut(BaseModel):
    id: str
    username: str

    @classmethod
    def from_model(cls, user: models.User) -> "UserOut":
        return cls(id=str(user.id), username=user.username)


class AuthResponse(BaseModel):
    user: UserOut
    token: str


class VerifyResponse(BaseModel):
    user: UserOut
