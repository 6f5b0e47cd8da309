"""Collection-wide averages used by the analytics charts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, Mapping, Sequence

from fragshelf.db import models


@dataclass(slots=True)
class AnalyticsEntry:
    name: str
    value: int


@dataclass(slots=True)
class CollectionAnalytics:
    """Average season, occasion and type breakdowns across a collection."""

    count: int
    seasons: list[AnalyticsEntry] = field(default_factory=list)
    occasions: list[AnalyticsEntry] = field(default_factory=list)
    types: list[AnalyticsEntry] = field(default_factory=list)


def _title_words(key: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in key.split(" "))


def _averages(
    groups: Iterable[Mapping | None],
    count: int,
    label: Callable[[str], str],
) -> list[AnalyticsEntry]:
    totals: dict[str, float] = {}
    for group in groups:
        for key, value in (group or {}).items():
            totals[key] = totals.get(key, 0.0) + float(value or 0)

    entries = [
        AnalyticsEntry(name=label(key), value=round(total / count))
        for key, total in totals.items()
    ]
    entries = [entry for entry in entries if entry.value > 0]
    entries.sort(key=lambda entry: entry.value, reverse=True)
    return entries


def summarise_collection(records: Sequence[models.Fragrance]) -> CollectionAnalytics:
    """Average every breakdown over ``records``; zero averages are dropped."""

    count = len(records) or 1
    return CollectionAnalytics(
        count=len(records),
        seasons=_averages((record.seasons for record in records), count, _title_words),
        occasions=_averages((record.occasions for record in records), count, _title_words),
        types=_averages((record.types for record in records), count, str),
    )
