"""Business logic for managing a user's fragrance collection."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fragshelf.db import models
from fragshelf.metrics.prometheus_exporter import fragrance_mutations_total
from fragshelf.recommender import FragranceProfile

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "brand",
    "name",
    "image_url",
    "seasons",
    "occasions",
    "types",
    "season_occasions",
    "wearability",
    "occasion_months",
    "liked",
    "rating",
    "review",
    "hidden",
    "formality",
    "midday_touch_up",
)
PREFERENCE_FIELDS = ("liked", "rating", "review", "hidden")


class FragranceNotFoundError(LookupError):
    """Raised when a fragrance id does not exist in the owner's collection."""


def to_profile(record: models.Fragrance) -> FragranceProfile:
    """Snapshot a stored fragrance for the ranking engine."""

    return FragranceProfile.from_mapping(
        {
            "id": record.id,
            "brand": record.brand,
            "name": record.name,
            "image_url": record.image_url,
            "seasons": record.seasons,
            "occasions": record.occasions,
            "types": record.types,
            "season_occasions": record.season_occasions,
            "liked": record.liked,
            "wearability": record.wearability,
        },
    )


class CollectionService:
    """Facade over fragrance persistence, always scoped to one owner."""

    async def list_for_owner(
        self,
        session: AsyncSession,
        *,
        owner_id: int,
    ) -> list[models.Fragrance]:
        """Return the owner's fragrances in insertion order."""

        stmt = (
            select(models.Fragrance)
            .where(models.Fragrance.owner_id == owner_id)
            .order_by(models.Fragrance.id)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_id(
        self,
        session: AsyncSession,
        *,
        owner_id: int,
        fragrance_id: int | str,
    ) -> models.Fragrance:
        """Return one of the owner's fragrances or raise ``FragranceNotFoundError``."""

        try:
            key = int(fragrance_id)
        except (TypeError, ValueError) as exc:
            raise FragranceNotFoundError(f"Fragrance {fragrance_id!r} not found") from exc
        if not 0 < key <= models.MAX_ROW_ID:
            raise FragranceNotFoundError(f"Fragrance {fragrance_id!r} not found")

        stmt = select(models.Fragrance).where(
            models.Fragrance.id == key,
            models.Fragrance.owner_id == owner_id,
        )
        result = await session.execute(stmt)
        fragrance = result.scalar_one_or_none()
        if fragrance is None:
            raise FragranceNotFoundError(f"Fragrance {fragrance_id!r} not found")
        return fragrance

    async def create(
        self,
        session: AsyncSession,
        *,
        owner_id: int,
        data: Mapping[str, Any],
    ) -> models.Fragrance:
        """Store a new fragrance for ``owner_id``."""

        fragrance = models.Fragrance(owner_id=owner_id, **_editable(data))
        session.add(fragrance)
        await session.commit()
        await session.refresh(fragrance)
        fragrance_mutations_total.labels(operation="create").inc()
        logger.info("Owner %d added fragrance %d (%s %s)", owner_id, fragrance.id, fragrance.brand, fragrance.name)
        return fragrance

    async def replace(
        self,
        session: AsyncSession,
        *,
        owner_id: int,
        fragrance_id: int | str,
        data: Mapping[str, Any],
    ) -> models.Fragrance:
        """Overwrite every editable field of an existing fragrance."""

        fragrance = await self.get_by_id(session, owner_id=owner_id, fragrance_id=fragrance_id)
        for key, value in _editable(data).items():
            setattr(fragrance, key, value)
        await session.commit()
        await session.refresh(fragrance)
        fragrance_mutations_total.labels(operation="update").inc()
        return fragrance

    async def update_preferences(
        self,
        session: AsyncSession,
        *,
        owner_id: int,
        fragrance_id: int | str,
        changes: Mapping[str, Any],
    ) -> models.Fragrance:
        """Apply a partial update of like state, rating, review or hidden flag."""

        unknown = set(changes) - set(PREFERENCE_FIELDS)
        if unknown:
            raise ValueError(f"Not a preference field: {', '.join(sorted(unknown))}")

        fragrance = await self.get_by_id(session, owner_id=owner_id, fragrance_id=fragrance_id)
        for key, value in changes.items():
            setattr(fragrance, key, value)
        await session.commit()
        await session.refresh(fragrance)
        fragrance_mutations_total.labels(operation="preferences").inc()
        return fragrance

    async def delete(
        self,
        session: AsyncSession,
        *,
        owner_id: int,
        fragrance_id: int | str,
    ) -> None:
        """Remove a fragrance from the owner's collection."""

        fragrance = await self.get_by_id(session, owner_id=owner_id, fragrance_id=fragrance_id)
        await session.delete(fragrance)
        await session.commit()
        fragrance_mutations_total.labels(operation="delete").inc()
        logger.info("Owner %d deleted fragrance %s", owner_id, fragrance_id)


def _editable(data: Mapping[str, Any]) -> dict[str, Any]:
    return {key: data[key] for key in EDITABLE_FIELDS if key in data}
