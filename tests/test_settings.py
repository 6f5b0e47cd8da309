import pytest

from fragshelf.config.settings import Settings, get_settings
from fragshelf.recommender import policy_from_settings


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults(monkeypatch) -> None:
    for name in ("RANK_MIN_THRESHOLD", "RANK_TOP_N", "RANK_CLIMATE_GATE", "PRESENTED_RESULTS", "CORS_ORIGINS"):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()

    assert settings.rank_min_threshold == 15
    assert settings.rank_top_n == 10
    assert settings.rank_climate_gate == 20
    assert settings.presented_results == 3
    assert settings.cors_origins == ("*",)


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("RANK_MIN_THRESHOLD", "25")
    monkeypatch.setenv("RANK_TOP_N", "5")
    monkeypatch.setenv("CORS_ORIGINS", "http://localhost:3000, https://shelf.example ,")

    settings = get_settings()

    assert settings.rank_min_threshold == 25.0
    assert settings.rank_top_n == 5
    assert settings.cors_origins == ("http://localhost:3000", "https://shelf.example")
    assert get_settings() is settings


def test_policy_takes_ranking_knobs_from_settings() -> None:
    policy = policy_from_settings(Settings(rank_min_threshold=30, rank_top_n=4, rank_climate_gate=10))

    assert policy.min_threshold == 30
    assert policy.top_n == 4
    assert policy.climate_gate == 10
    assert policy.season_weight == 0.4
