"""
Versioned schema migrations.

``init_db`` runs :func:`apply_pending` once at startup, after ``create_all``.
Fresh databases already have every column, so the migrations only record
their version there; databases created by older releases get the missing
columns added.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import Connection, inspect, insert, select, text

from fragshelf.db.models import SchemaVersion

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ColumnMigration:
    """Adds ``column`` to ``table`` unless it already exists."""

    version: int
    description: str
    table: str
    column: str
    ddl_type: str

    def apply(self, connection: Connection, existing: set[str]) -> bool:
        if self.column in existing:
            return False
        connection.execute(
            text(f"ALTER TABLE {self.table} ADD COLUMN {self.column} {self.ddl_type}"),
        )
        existing.add(self.column)
        return True


MIGRATIONS: tuple[ColumnMigration, ...] = (
    ColumnMigration(1, "add liked flag", "fragrances", "liked", "BOOLEAN"),
    ColumnMigration(2, "add review text", "fragrances", "review", "TEXT"),
    ColumnMigration(3, "add season/occasion matrix", "fragrances", "season_occasions", "JSON"),
    ColumnMigration(4, "add personal rating", "fragrances", "rating", "FLOAT"),
    ColumnMigration(5, "add hidden flag", "fragrances", "hidden", "BOOLEAN NOT NULL DEFAULT 0"),
    ColumnMigration(6, "add wearability split", "fragrances", "wearability", "JSON"),
    ColumnMigration(7, "add occasion months", "fragrances", "occasion_months", "JSON"),
    ColumnMigration(8, "add formality label", "fragrances", "formality", "VARCHAR(64)"),
    ColumnMigration(9, "add midday touch-up flag", "fragrances", "midday_touch_up", "BOOLEAN"),
)


def current_version(connection: Connection) -> int:
    versions = connection.execute(select(SchemaVersion.version)).scalars().all()
    return max(versions, default=0)


def apply_pending(connection: Connection) -> list[int]:
    """Apply migrations newer than the recorded version; return the versions applied."""

    applied: list[int] = []
    version = current_version(connection)
    columns: dict[str, set[str]] = {}
    inspector = inspect(connection)

    for migration in MIGRATIONS:
        if migration.version <= version:
            continue
        if migration.table not in columns:
            columns[migration.table] = {
                column["name"] for column in inspector.get_columns(migration.table)
            }
        if migration.apply(connection, columns[migration.table]):
            logger.info("Migration %d: %s", migration.version, migration.description)
        connection.execute(
            insert(SchemaVersion).values(
                version=migration.version,
                description=migration.description,
            ),
        )
        applied.append(migration.version)

    return applied
