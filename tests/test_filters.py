from datetime import date

import pytest

from fragshelf.db import models
from fragshelf.services.filters import (
    MONTHS,
    RulesEngine,
    ThresholdRule,
    available_types,
    query_collection,
    risk_score,
    what_to_wear,
)


def _fragrance(name: str, **fields) -> models.Fragrance:
    values = {
        "brand": "House",
        "name": name,
        "seasons": {},
        "occasions": {},
        "types": {},
        "hidden": False,
        **fields,
    }
    return models.Fragrance(**values)


@pytest.fixture
def records() -> list[models.Fragrance]:
    return [
        _fragrance(
            "Citrus Day",
            seasons={"summer": 80, "winter": 5},
            occasions={"daily": 70, "evening": 5},
            types={"Citrus": 60, "Fresh": 40},
            occasion_months={"work": ["Jun", "Jul"], "leisure": ["Jul"]},
        ),
        _fragrance(
            "Amber Night",
            seasons={"summer": 10, "winter": 70},
            occasions={"daily": 10, "evening": 60, "night out": 30},
            types={"Oriental": 50, "Sweet": 30, "Woody": 20},
            occasion_months={"dateNight": ["Dec", "Jan"]},
        ),
        _fragrance(
            "Hidden Cedar",
            seasons={"summer": 60, "winter": 40},
            occasions={"daily": 50},
            types={"Woody": 90},
            hidden=True,
        ),
    ]


def test_threshold_rule_reports_failures(records) -> None:
    engine = RulesEngine([ThresholdRule("seasons", "summer", 50)])

    assert engine.evaluate(records[0]) == []
    assert engine.evaluate(records[1]) == ["seasons.summer>=50"]


def test_zero_thresholds_are_inactive(records) -> None:
    engine = RulesEngine.from_thresholds({"summer": 0}, {"evening": 0})

    assert engine.select(records) == records


def test_season_and_occasion_thresholds_combine(records) -> None:
    engine = RulesEngine.from_thresholds({"summer": 50}, {"daily": 60})

    assert [record.name for record in engine.select(records)] == ["Citrus Day"]


def test_available_types_are_ordered_by_popularity(records) -> None:
    assert available_types(records) == ["Woody", "Citrus", "Oriental", "Fresh", "Sweet"]


def test_risk_score_weighs_evening_use_and_heavy_families(records) -> None:
    # (evening 60 + night out 30 + Oriental 50 + half of Sweet 30) / 2
    assert risk_score(records[1]) == pytest.approx(77.5)
    assert risk_score(records[0]) == pytest.approx(2.5)


def test_query_keeps_hidden_last(records) -> None:
    result, families = query_collection(records, safest_first=True)

    assert [record.name for record in result] == ["Citrus Day", "Amber Night", "Hidden Cedar"]
    assert "Woody" in families


def test_family_filter_sorts_by_family_share(records) -> None:
    result, families = query_collection(records, family="Woody")

    assert [record.name for record in result] == ["Amber Night", "Hidden Cedar"]
    assert families == ["Woody", "Citrus", "Oriental", "Fresh", "Sweet"]


def test_available_types_respect_thresholds_not_family(records) -> None:
    result, families = query_collection(records, seasons={"winter": 50}, family="Citrus")

    assert result == []
    assert families == ["Oriental", "Sweet", "Woody"]


def test_what_to_wear_matches_month_tags(records) -> None:
    assert [record.name for record in what_to_wear(records, "work", "Jun")] == ["Citrus Day"]
    assert [record.name for record in what_to_wear(records, "dateNight", "Jan")] == ["Amber Night"]
    assert what_to_wear(records, "nightOut", "Jan") == []


def test_what_to_wear_defaults_to_current_month(records) -> None:
    current = MONTHS[date.today().month - 1]
    expected = [
        record.name
        for record in records
        if current in ((record.occasion_months or {}).get("leisure") or [])
    ]

    assert [record.name for record in what_to_wear(records, "leisure")] == expected


def test_what_to_wear_rejects_unknown_values(records) -> None:
    with pytest.raises(ValueError):
        what_to_wear(records, "gym", "Jan")
    with pytest.raises(ValueError):
        what_to_wear(records, "work", "January")
