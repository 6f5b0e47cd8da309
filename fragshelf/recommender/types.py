"""Value types shared by the scoring and ranking engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, TypeVar


class InvalidContextError(ValueError):
    """Raised when a ranking context key is outside the known enumerations."""


class Season(str, Enum):
    """Calendar seasons a fragrance is rated for."""

    SPRING = "spring"
    SUMMER = "summer"
    AUTUMN = "autumn"
    WINTER = "winter"


class TemperatureZone(str, Enum):
    """Climate bands used by the classic picker."""

    HIGH_HEAT = "highHeat"
    TRANSITIONAL_MILD = "transitionalMild"
    DEEP_COLD = "deepCold"


class Occasion(str, Enum):
    """Usage categories tracked per fragrance."""

    DAILY = "daily"
    BUSINESS = "business"
    LEISURE = "leisure"
    SPORT = "sport"
    EVENING = "evening"
    NIGHT_OUT = "night out"


class ShoeCategory(str, Enum):
    """Occasion groupings derived from the flat occasion breakdown."""

    ATHLETIC = "Athletic"
    WORK_BOOTS = "WorkBoots"
    CASUAL_SNEAKERS = "CasualSneakers"
    DRESS_SHOES = "DressShoes"


class RankingMode(str, Enum):
    """Scoring formula selector."""

    INTELLIGENT = "intelligent"
    CLASSIC = "classic"


SCENT_FAMILIES: tuple[str, ...] = (
    "Woody",
    "Fresh",
    "Citrus",
    "Spicy",
    "Oriental",
    "Floral",
    "Fruity",
    "Aquatic",
    "Gourmand",
    "Green",
    "Powdery",
    "Leathery",
    "Smoky",
    "Resinous",
    "Sweet",
    "Earthy",
    "Creamy",
    "Fougere",
    "Chypre",
    "Animalic",
    "Synthetic",
)

_FAMILY_BY_LOWER = {family.lower(): family for family in SCENT_FAMILIES}

E = TypeVar("E", bound=Enum)


def coerce_enum(enum_cls: type[E], value: Any) -> E:
    """Return ``value`` as a member of ``enum_cls`` or raise ``InvalidContextError``."""

    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError as exc:
        allowed = ", ".join(member.value for member in enum_cls)
        raise InvalidContextError(
            f"{value!r} is not a valid {enum_cls.__name__}; expected one of: {allowed}",
        ) from exc


def canonical_family(name: str) -> str | None:
    """Map a scent-family key in any letter case to its canonical spelling."""

    return _FAMILY_BY_LOWER.get(str(name).strip().lower())


def _as_number(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if number > 0 else 0.0


def _number_map(raw: Any, keys: tuple[str, ...]) -> dict[str, float]:
    source = raw if isinstance(raw, Mapping) else {}
    return {key: _as_number(source.get(key)) for key in keys}


def _family_map(raw: Any) -> dict[str, float]:
    scores = {family: 0.0 for family in SCENT_FAMILIES}
    if not isinstance(raw, Mapping):
        return scores
    for key, value in raw.items():
        family = canonical_family(key)
        if family is not None:
            scores[family] += _as_number(value)
    return scores


SEASON_KEYS = tuple(member.value for member in Season)
OCCASION_KEYS = tuple(member.value for member in Occasion)


@dataclass(frozen=True, slots=True)
class FragranceProfile:
    """Read-only snapshot of a fragrance record as consumed by the scorers."""

    id: str
    brand: str = ""
    name: str = ""
    image_url: str = ""
    seasons: Mapping[str, float] = field(default_factory=dict)
    occasions: Mapping[str, float] = field(default_factory=dict)
    types: Mapping[str, float] = field(default_factory=dict)
    season_occasions: Mapping[str, Mapping[str, float]] | None = None
    liked: bool | None = None
    wearability: Mapping[str, float] | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "FragranceProfile":
        """Build a snapshot from a loosely-typed record, defaulting gaps to zero."""

        raw_matrix = data.get("season_occasions", data.get("seasonOccasions"))
        season_occasions: dict[str, dict[str, float]] | None = None
        if isinstance(raw_matrix, Mapping):
            season_occasions = {
                str(season): _number_map(breakdown, OCCASION_KEYS)
                for season, breakdown in raw_matrix.items()
                if isinstance(breakdown, Mapping)
            }

        raw_wearability = data.get("wearability")
        wearability = None
        if isinstance(raw_wearability, Mapping):
            wearability = _number_map(raw_wearability, ("special_occasion", "daily_wear"))

        liked = data.get("liked")
        return cls(
            id=str(data.get("id", "")),
            brand=str(data.get("brand") or ""),
            name=str(data.get("name") or ""),
            image_url=str(data.get("image_url", data.get("imageUrl")) or ""),
            seasons=_number_map(data.get("seasons"), SEASON_KEYS),
            occasions=_number_map(data.get("occasions"), OCCASION_KEYS),
            types=_family_map(data.get("types")),
            season_occasions=season_occasions,
            liked=liked if isinstance(liked, bool) else None,
            wearability=wearability,
        )

    def season(self, key: str) -> float:
        """Seasonal vote for ``key``, zero when absent."""

        return self.seasons.get(key, 0.0)

    def occasion(self, key: str) -> float:
        """Occasion vote for ``key``, zero when absent."""

        return self.occasions.get(key, 0.0)

    def family(self, name: str) -> float:
        """Share of the canonical scent family ``name``."""

        return self.types.get(name, 0.0)


@dataclass(frozen=True, slots=True)
class RankingContext:
    """User-selected context: a season and occasion, or a zone and shoe category."""

    mode: RankingMode
    season: Season | None = None
    occasion: Occasion | None = None
    zone: TemperatureZone | None = None
    shoe_category: ShoeCategory | None = None

    @classmethod
    def intelligent(cls, season: Any, occasion: Any) -> "RankingContext":
        return cls(
            mode=RankingMode.INTELLIGENT,
            season=coerce_enum(Season, season),
            occasion=coerce_enum(Occasion, occasion),
        )

    @classmethod
    def classic(cls, zone: Any, shoe_category: Any) -> "RankingContext":
        return cls(
            mode=RankingMode.CLASSIC,
            zone=coerce_enum(TemperatureZone, zone),
            shoe_category=coerce_enum(ShoeCategory, shoe_category),
        )

    def __post_init__(self) -> None:
        object.__setattr__(self, "mode", coerce_enum(RankingMode, self.mode))
        if self.mode is RankingMode.INTELLIGENT:
            if self.season is None or self.occasion is None:
                raise InvalidContextError("intelligent mode requires a season and an occasion")
        elif self.zone is None or self.shoe_category is None:
            raise InvalidContextError("classic mode requires a zone and a shoe category")

    def describe(self) -> str:
        """Short label such as ``winter / evening``."""

        if self.mode is RankingMode.INTELLIGENT:
            return f"{self.season.value} / {self.occasion.value}"
        return f"{self.zone.value} / {self.shoe_category.value}"


@dataclass(slots=True)
class RankedResult:
    """A fragrance that passed the threshold, with the scores used to rank it."""

    fragrance: FragranceProfile
    match_score: float
    sub_scores: dict[str, float] = field(default_factory=dict)

    @property
    def id(self) -> str:
        return self.fragrance.id

    @property
    def liked(self) -> bool | None:
        return self.fragrance.liked
