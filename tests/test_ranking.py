"""Tests for the ranking pipeline and the like/dislike reorder pass."""

from __future__ import annotations

import pytest

from fragshelf.recommender import (
    DEFAULT_POLICY,
    InvalidContextError,
    RankedResult,
    RankingContext,
    RankingMode,
    apply_preference_reorder,
    intelligent_match,
    rank,
)

SUMMER_DAILY = RankingContext.intelligent("summer", "daily")


def _scored(make_profile, fragrance_id: str, score: float, liked: bool | None = None):
    """A fragrance whose intelligent summer/daily match equals ``score``."""

    return make_profile(
        fragrance_id,
        seasons={"summer": score},
        occasions={"daily": score},
        liked=liked,
    )


def _ids(results: list[RankedResult]) -> list[str]:
    return [result.id for result in results]


def test_liked_item_moves_above_higher_score(make_profile) -> None:
    fragrances = [_scored(make_profile, "liked", 40, liked=True), _scored(make_profile, "neutral", 60)]

    results = rank(fragrances, SUMMER_DAILY, top_n=2)

    assert _ids(results) == ["liked", "neutral"]
    assert [result.match_score for result in results] == pytest.approx([40, 60])


def test_intelligent_match_weights_season_and_occasion(make_profile) -> None:
    fragrance = make_profile(seasons={"summer": 50}, occasions={"daily": 100})

    [result] = rank([fragrance], SUMMER_DAILY)

    assert result.match_score == pytest.approx(0.4 * 50 + 0.6 * 100)
    assert result.sub_scores == {"season": 50, "occasion": 100}


@pytest.mark.parametrize("season, occasion", [(0, 0), (20, 30), (55, 10), (100, 100)])
def test_intelligent_match_is_monotonic(season, occasion) -> None:
    base = intelligent_match(season, occasion)

    assert intelligent_match(season + 5, occasion) >= base
    assert intelligent_match(season, occasion + 5) >= base


def test_season_occasion_matrix_drives_intelligent_mode(make_profile) -> None:
    fragrance = make_profile(
        seasons={"winter": 50},
        occasions={"evening": 0},
        season_occasions={"winter": {"evening": 50}},
    )

    [result] = rank([fragrance], RankingContext.intelligent("winter", "evening"))

    assert result.match_score == pytest.approx(50)


def test_empty_collection_gives_empty_ranking() -> None:
    assert rank([], SUMMER_DAILY) == []


def test_all_zero_fragrance_is_excluded(make_profile) -> None:
    assert rank([make_profile()], SUMMER_DAILY) == []
    assert rank([make_profile()], RankingContext.classic("deepCold", "DressShoes")) == []


def test_threshold_is_inclusive(make_profile) -> None:
    fragrances = [_scored(make_profile, "edge", 15), _scored(make_profile, "below", 14.9)]

    assert _ids(rank(fragrances, SUMMER_DAILY)) == ["edge"]


def test_ties_keep_input_order(make_profile) -> None:
    fragrances = [_scored(make_profile, name, 50) for name in ("a", "b", "c")]

    assert _ids(rank(fragrances, SUMMER_DAILY)) == ["a", "b", "c"]


def test_results_are_sorted_and_truncated(make_profile) -> None:
    fragrances = [_scored(make_profile, f"f{score}", score) for score in range(20, 80, 5)]

    results = rank(fragrances, SUMMER_DAILY)

    assert len(results) == DEFAULT_POLICY.top_n == 10
    scores = [result.match_score for result in results]
    assert scores == sorted(scores, reverse=True)
    assert results[0].id == "f75"


def test_rank_does_not_mutate_input(make_profile) -> None:
    fragrances = [_scored(make_profile, "low", 20, liked=True), _scored(make_profile, "high", 90)]
    snapshot = list(fragrances)

    rank(fragrances, SUMMER_DAILY)

    assert fragrances == snapshot


def test_classic_mode_uses_shoe_share_behind_climate_gate(make_profile) -> None:
    sporty = make_profile(
        "sporty",
        seasons={"summer": 40},
        types={"Fresh": 100},
        occasions={"sport": 100},
    )
    too_warm = make_profile(
        "too_warm",
        seasons={"summer": 0},
        types={"Woody": 100},
        occasions={"sport": 100},
    )

    results = rank([too_warm, sporty], RankingContext.classic("highHeat", "Athletic"))

    assert _ids(results) == ["sporty"]
    assert results[0].match_score == pytest.approx(100)
    assert results[0].sub_scores["climate"] == pytest.approx(70)
    assert results[0].sub_scores["selected"] == pytest.approx(100)


def test_climate_gate_is_configurable(make_profile) -> None:
    fragrance = make_profile(seasons={"winter": 30}, occasions={"evening": 100})
    context = RankingContext.classic("deepCold", "DressShoes")

    assert rank([fragrance], context) == []
    relaxed = DEFAULT_POLICY.with_overrides(climate_gate=10)
    assert _ids(rank([fragrance], context, relaxed)) == ["frag"]


def test_liked_at_top_and_disliked_at_bottom_stay_put(make_profile) -> None:
    fragrances = [
        _scored(make_profile, "top", 90, liked=True),
        _scored(make_profile, "middle", 60),
        _scored(make_profile, "bottom", 30, liked=False),
    ]

    assert _ids(rank(fragrances, SUMMER_DAILY)) == ["top", "middle", "bottom"]


def test_disliked_item_moves_down_only_once(make_profile) -> None:
    fragrances = [
        _scored(make_profile, "disliked", 90, liked=False),
        _scored(make_profile, "second", 60),
        _scored(make_profile, "third", 30),
    ]

    assert _ids(rank(fragrances, SUMMER_DAILY)) == ["second", "disliked", "third"]


def test_adjacent_liked_items_each_move_one_slot(make_profile) -> None:
    fragrances = [
        _scored(make_profile, "plain", 90),
        _scored(make_profile, "liked_a", 60, liked=True),
        _scored(make_profile, "liked_b", 30, liked=True),
    ]

    assert _ids(rank(fragrances, SUMMER_DAILY)) == ["liked_a", "liked_b", "plain"]


def test_reorder_returns_new_list(make_profile) -> None:
    results = [
        RankedResult(fragrance=make_profile("a"), match_score=50),
        RankedResult(fragrance=make_profile("b", liked=True), match_score=40),
    ]

    reordered = apply_preference_reorder(results)

    assert _ids(reordered) == ["b", "a"]
    assert _ids(results) == ["a", "b"]


def test_context_validation() -> None:
    assert RankingContext.intelligent("autumn", "night out").mode is RankingMode.INTELLIGENT

    with pytest.raises(InvalidContextError):
        RankingContext.intelligent("autumn", "brunch")
    with pytest.raises(InvalidContextError):
        RankingContext.classic("summer", "Athletic")
    with pytest.raises(InvalidContextError):
        RankingContext(mode="classic", zone=None)
    with pytest.raises(InvalidContextError):
        RankingContext(mode="psychic")
