"""Database engine and session management."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import AsyncIterator

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from fragshelf.config.settings import get_settings

logger = logging.getLogger(__name__)


@lru_cache
def get_engine() -> AsyncEngine:
    """Create the async engine for the configured database URL."""

    database_url = get_settings().database_url
    engine_options: dict = {"echo": False}
    if database_url.startswith("sqlite"):
        database = make_url(database_url).database
        if database and database != ":memory:":
            Path(database).parent.mkdir(parents=True, exist_ok=True)
        # aiosqlite connections belong to the event loop that opened them.
        engine_options["poolclass"] = NullPool
    return create_async_engine(database_url, **engine_options)


@lru_cache
def get_session_factory() -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(get_engine(), expire_on_commit=False, class_=AsyncSession)


async def get_session() -> AsyncIterator[AsyncSession]:
    """Yield a managed asynchronous SQLAlchemy session."""

    async with get_session_factory()() as session:
        yield session


async def init_db(engine: AsyncEngine | None = None) -> None:
    """Create missing tables and apply pending schema migrations."""

    from fragshelf.db import migrations, models  # noqa: WPS433

    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(models.Base.metadata.create_all)
        applied = await conn.run_sync(migrations.apply_pending)
    if applied:
        logger.info("Database schema at version %d", applied[-1])


def reset_engine_cache() -> None:
    """Forget the cached engine and session factory (settings changed)."""

    get_session_factory.cache_clear()
    get_engine.cache_clear()
