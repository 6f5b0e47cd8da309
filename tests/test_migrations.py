import pytest
from sqlalchemy import inspect, select, text

from fragshelf.db import migrations
from fragshelf.db.models import SchemaVersion
from fragshelf.db.session import get_engine, init_db

LEGACY_SCHEMA = (
    """
    CREATE TABLE users (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        username VARCHAR(255) NOT NULL UNIQUE,
        password_hash VARCHAR(128) NOT NULL,
        created_at DATETIME,
        updated_at DATETIME
    )
    """,
    """
    CREATE TABLE fragrances (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        owner_id INTEGER NOT NULL REFERENCES users(id),
        brand VARCHAR(255) NOT NULL,
        name VARCHAR(255) NOT NULL,
        image_url TEXT,
        seasons JSON NOT NULL,
        occasions JSON NOT NULL,
        types JSON NOT NULL,
        created_at DATETIME,
        updated_at DATETIME
    )
    """,
    "INSERT INTO users (username, password_hash) VALUES ('legacy', 'x$y')",
    """
    INSERT INTO fragrances (owner_id, brand, name, seasons, occasions, types)
    VALUES (1, 'Old', 'Bottle', '{}', '{}', '{}')
    """,
)


async def _columns(engine) -> set[str]:
    async with engine.connect() as conn:
        found = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_columns("fragrances"))
    return {column["name"] for column in found}


async def _versions(engine) -> list[int]:
    async with engine.connect() as conn:
        result = await conn.execute(select(SchemaVersion.version).order_by(SchemaVersion.version))
        return list(result.scalars().all())


@pytest.mark.asyncio
async def test_fresh_database_records_every_version(database_url) -> None:
    engine = get_engine()
    await init_db(engine)

    assert await _versions(engine) == [migration.version for migration in migrations.MIGRATIONS]
    await engine.dispose()


@pytest.mark.asyncio
async def test_legacy_table_gains_missing_columns(database_url) -> None:
    engine = get_engine()
    async with engine.begin() as conn:
        for statement in LEGACY_SCHEMA:
            await conn.execute(text(statement))

    await init_db(engine)

    columns = await _columns(engine)
    assert {migration.column for migration in migrations.MIGRATIONS} <= columns
    assert await _versions(engine) == list(range(1, 10))

    async with engine.connect() as conn:
        hidden = (await conn.execute(text("SELECT hidden, liked FROM fragrances"))).one()
    assert tuple(hidden) == (0, None)
    await engine.dispose()


@pytest.mark.asyncio
async def test_init_db_is_idempotent(database_url) -> None:
    engine = get_engine()
    await init_db(engine)

    async with engine.begin() as conn:
        applied = await conn.run_sync(migrations.apply_pending)

    assert applied == []
    await engine.dispose()
