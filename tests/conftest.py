"""Shared fixtures: profile factory, temporary database and API client."""

from __future__ import annotations

from pathlib import Path
from typing import Any, AsyncIterator, Callable, Iterator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession

from fragshelf.config.settings import get_settings
from fragshelf.db import models
from fragshelf.db.session import get_engine, get_session_factory, init_db, reset_engine_cache
from fragshelf.recommender import FragranceProfile
from fragshelf.services import AccountService


@pytest.fixture
def make_profile() -> Callable[..., FragranceProfile]:
    def _make(fragrance_id: str = "frag", **fields: Any) -> FragranceProfile:
        return FragranceProfile.from_mapping({"id": fragrance_id, **fields})

    return _make


@pytest.fixture
def database_url(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[str]:
    url = f"sqlite+aiosqlite:///{tmp_path / 'fragshelf.db'}"
    monkeypatch.setenv("DATABASE_URL", url)
    get_settings.cache_clear()
    reset_engine_cache()
    yield url
    get_settings.cache_clear()
    reset_engine_cache()


@pytest_asyncio.fixture
async def session(database_url: str) -> AsyncIterator[AsyncSession]:
    await init_db()
    async with get_session_factory()() as db_session:
        yield db_session
    await get_engine().dispose()


@pytest_asyncio.fixture
async def owner(session: AsyncSession) -> models.User:
    return await AccountService().signup(session, username="collector", password="secret123")


@pytest.fixture
def client(database_url: str) -> Iterator[TestClient]:
    from fragshelf.api.main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(client: TestClient) -> dict[str, str]:
    response = client.post("/auth/signup", json={"username": "collector", "password": "secret123"})
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.json()['token']}"}
