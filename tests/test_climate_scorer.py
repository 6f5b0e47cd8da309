"""Tests for season and temperature-zone climate scoring."""

import pytest

from fragshelf.recommender import InvalidContextError, Season, TemperatureZone, score_climate
from fragshelf.recommender.climate_scorer import zone_type_score
from fragshelf.recommender.policy import ZONE_FAMILIES

SUMMER_HEAVY = {"spring": 10, "summer": 80, "autumn": 5, "winter": 5}


def test_season_key_returns_stored_value(make_profile) -> None:
    fragrance = make_profile(seasons=SUMMER_HEAVY)

    assert score_climate(fragrance, "summer") == 80
    assert score_climate(fragrance, Season.WINTER) == 5


def test_zone_without_type_data_halves_season_part(make_profile) -> None:
    fragrance = make_profile(seasons=SUMMER_HEAVY)

    assert score_climate(fragrance, "highHeat") == pytest.approx(40)
    assert score_climate(fragrance, TemperatureZone.TRANSITIONAL_MILD) == pytest.approx(3.75)
    assert score_climate(fragrance, "deepCold") == pytest.approx(2.5)


def test_zone_blends_season_and_family_share(make_profile) -> None:
    fragrance = make_profile(
        seasons={"spring": 20, "summer": 60, "autumn": 10, "winter": 10},
        types={"Fresh": 50, "Woody": 30, "Spicy": 20},
    )

    assert zone_type_score(fragrance, TemperatureZone.HIGH_HEAT) == pytest.approx(50)
    assert score_climate(fragrance, "highHeat") == pytest.approx(55)
    assert score_climate(fragrance, "transitionalMild") == pytest.approx((15 + 30) / 2)
    assert score_climate(fragrance, "deepCold") == pytest.approx((10 + 20) / 2)


def test_families_outside_partition_carry_no_signal(make_profile) -> None:
    fragrance = make_profile(seasons={"summer": 30}, types={"Chypre": 60, "Animalic": 40})

    assert zone_type_score(fragrance, TemperatureZone.HIGH_HEAT) == 0
    assert score_climate(fragrance, "highHeat") == pytest.approx(15)


def test_lowercase_family_keys_are_recognised(make_profile) -> None:
    fragrance = make_profile(types={"fresh": 100})

    assert score_climate(fragrance, "highHeat") == pytest.approx(50)


def test_partition_covers_nineteen_families() -> None:
    families = [name for group in ZONE_FAMILIES.values() for name in group]

    assert len(families) == len(set(families)) == 19
    assert "Chypre" not in families
    assert "Animalic" not in families


def test_all_zero_fragrance_scores_zero_everywhere(make_profile) -> None:
    fragrance = make_profile()

    for key in ("spring", "summer", "autumn", "winter", "highHeat", "transitionalMild", "deepCold"):
        assert score_climate(fragrance, key) == 0


@pytest.mark.parametrize("key", ["monsoon", "Summer", "", None, 3])
def test_unknown_context_key_is_rejected(make_profile, key) -> None:
    with pytest.raises(InvalidContextError):
        score_climate(make_profile(), key)


def test_invalid_context_error_is_a_value_error() -> None:
    assert issubclass(InvalidContextError, ValueError)
