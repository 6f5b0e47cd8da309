"""SQLAlchemy models describing the core domain tables."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


# Largest value a SQLite INTEGER primary key can hold.
MAX_ROW_ID = 2**63 - 1


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for ORM models."""

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        onupdate=_utcnow,
    )


class User(Base):
    """Collection owner."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(128), nullable=False)

    fragrances: Mapped[list["Fragrance"]] = relationship(
        back_populates="owner",
        cascade="all, delete-orphan",
    )


class Fragrance(Base):
    """A bottle in the user's collection with its community-voted breakdowns."""

    __tablename__ = "fragrances"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    owner_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True, nullable=False)
    brand: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    image_url: Mapped[str | None] = mapped_column(Text)

    seasons: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict, nullable=False)
    occasions: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict, nullable=False)
    types: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict, nullable=False)
    season_occasions: Mapped[dict[str, Any] | None] = mapped_column(JSON)
    wearability: Mapped[dict[str, Any] | None] = mapped_column(JSON)
    occasion_months: Mapped[dict[str, Any] | None] = mapped_column(JSON)

    liked: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    rating: Mapped[float | None] = mapped_column(Float, nullable=True)
    review: Mapped[str | None] = mapped_column(Text)
    hidden: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    formality: Mapped[str | None] = mapped_column(String(64))
    midday_touch_up: Mapped[bool | None] = mapped_column(Boolean, nullable=True)

    owner: Mapped[User] = relationship(back_populates="fragrances")


class SchemaVersion(Base):
    """Migrations that have been applied to this database."""

    __tablename__ = "schema_versions"

    version: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    description: Mapped[str] = mapped_column(String(255), nullable=False)
