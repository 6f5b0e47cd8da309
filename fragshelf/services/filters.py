"""Collection browsing rules: threshold filters, family filter and sort orders."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Mapping, Sequence

from fragshelf.db import models

MONTHS: tuple[str, ...] = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
WEAR_CATEGORIES: tuple[str, ...] = ("dateNight", "nightOut", "leisure", "work")

FULL_RISK_FAMILIES = ("Animalic", "Smoky", "Leathery", "Resinous", "Earthy", "Chypre", "Oriental")
HALF_RISK_FAMILIES = ("Spicy", "Sweet", "Floral", "Powdery", "Creamy", "Gourmand")


def _value(group: Mapping | None, key: str) -> float:
    if not group:
        return 0.0
    return float(group.get(key) or 0)


@dataclass(slots=True)
class ThresholdRule:
    """Requires ``record.<group>[key]`` to be at least ``minimum``."""

    group: str
    key: str
    minimum: float

    @property
    def name(self) -> str:
        return f"{self.group}.{self.key}>={self.minimum:g}"

    def is_satisfied(self, record: models.Fragrance) -> bool:
        return _value(getattr(record, self.group), self.key) >= self.minimum


class RulesEngine:
    """Evaluates a collection of threshold rules."""

    def __init__(self, rules: Iterable[ThresholdRule]) -> None:
        self._rules = list(rules)

    @classmethod
    def from_thresholds(
        cls,
        seasons: Mapping[str, float] | None = None,
        occasions: Mapping[str, float] | None = None,
    ) -> "RulesEngine":
        """Build rules from slider values; a threshold of zero is inactive."""

        rules = [
            ThresholdRule("seasons", key, minimum)
            for key, minimum in (seasons or {}).items()
            if minimum > 0
        ]
        rules.extend(
            ThresholdRule("occasions", key, minimum)
            for key, minimum in (occasions or {}).items()
            if minimum > 0
        )
        return cls(rules)

    def evaluate(self, record: models.Fragrance) -> list[str]:
        """Return names of rules the record fails."""

        failed: list[str] = []
        for rule in self._rules:
            if not rule.is_satisfied(record):
                failed.append(rule.name)
        return failed

    def select(self, records: Iterable[models.Fragrance]) -> list[models.Fragrance]:
        return [record for record in records if not self.evaluate(record)]


def available_types(records: Iterable[models.Fragrance]) -> list[str]:
    """Scent families present in ``records``, most popular first."""

    totals: dict[str, float] = {}
    for record in records:
        for family, value in (record.types or {}).items():
            if value and value > 0:
                totals[family] = totals.get(family, 0.0) + value
    return [family for family, _ in sorted(totals.items(), key=lambda item: item[1], reverse=True)]


def risk_score(record: models.Fragrance) -> float:
    """How daring a fragrance is: evening use plus heavy families. Lower is safer."""

    occasion_risk = _value(record.occasions, "evening") + _value(record.occasions, "night out")
    full = sum(_value(record.types, family) for family in FULL_RISK_FAMILIES)
    half = sum(_value(record.types, family) for family in HALF_RISK_FAMILIES)
    return (occasion_risk + full + 0.5 * half) / 2


def query_collection(
    records: Sequence[models.Fragrance],
    *,
    seasons: Mapping[str, float] | None = None,
    occasions: Mapping[str, float] | None = None,
    family: str | None = None,
    safest_first: bool = False,
) -> tuple[list[models.Fragrance], list[str]]:
    """
    Apply the browsing filters and return ``(fragrances, available_types)``.

    ``available_types`` is computed before the family filter so the caller can
    offer every family still reachable under the season/occasion thresholds.
    Hidden fragrances always sort last.
    """

    result = RulesEngine.from_thresholds(seasons, occasions).select(records)
    families = available_types(result)

    if family:
        result = [record for record in result if _value(record.types, family) > 0]
        result.sort(key=lambda record: _value(record.types, family), reverse=True)
    if safest_first:
        result.sort(key=risk_score)
    result.sort(key=lambda record: 1 if record.hidden else 0)
    return result, families


def what_to_wear(
    records: Iterable[models.Fragrance],
    category: str,
    month: str | None = None,
) -> list[models.Fragrance]:
    """Fragrances tagged for ``category`` during ``month`` (default: this month)."""

    if category not in WEAR_CATEGORIES:
        raise ValueError(f"unknown wear category {category!r}")
    month = month or MONTHS[date.today().month - 1]
    if month not in MONTHS:
        raise ValueError(f"unknown month {month!r}")
    return [
        record
        for record in records
        if month in ((record.occasion_months or {}).get(category) or [])
    ]
