"""Sample collection used to populate a fresh demo account."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from fragshelf.db import models
from fragshelf.services.collection import CollectionService

DEMO_FRAGRANCES: tuple[dict, ...] = (
    {
        "brand": "Tom Ford",
        "name": "Oud Wood",
        "image_url": "/images/oudwood.jpg",
        "seasons": {"spring": 10, "summer": 0, "autumn": 45, "winter": 45},
        "occasions": {"daily": 10, "business": 30, "leisure": 20, "sport": 0, "evening": 30, "night out": 10},
        "types": {"Woody": 60, "Resinous": 20, "Spicy": 20},
        "wearability": {"special_occasion": 70, "daily_wear": 30},
    },
    {
        "brand": "Dior",
        "name": "Sauvage",
        "image_url": "/images/sauvage.jpg",
        "seasons": {"spring": 25, "summer": 30, "autumn": 25, "winter": 20},
        "occasions": {"daily": 40, "business": 20, "leisure": 20, "sport": 10, "evening": 10, "night out": 0},
        "types": {"Fresh": 40, "Citrus": 30, "Spicy": 20, "Woody": 10},
        "wearability": {"special_occasion": 20, "daily_wear": 80},
    },
    {
        "brand": "Chanel",
        "name": "Bleu de Chanel",
        "image_url": "/images/bleu.jpg",
        "seasons": {"spring": 30, "summer": 20, "autumn": 30, "winter": 20},
        "occasions": {"daily": 20, "business": 35, "leisure": 15, "sport": 5, "evening": 20, "night out": 5},
        "types": {"Woody": 35, "Citrus": 25, "Fresh": 20, "Spicy": 15, "Synthetic": 5},
    },
    {
        "brand": "Yves Saint Laurent",
        "name": "La Nuit de L'Homme",
        "image_url": "/images/lanuit.jpg",
        "seasons": {"spring": 15, "summer": 5, "autumn": 35, "winter": 45},
        "occasions": {"daily": 5, "business": 10, "leisure": 10, "sport": 0, "evening": 40, "night out": 35},
        "types": {"Spicy": 35, "Oriental": 30, "Woody": 20, "Sweet": 10, "Powdery": 5},
        "occasion_months": {"dateNight": ["Oct", "Nov", "Dec", "Jan", "Feb"], "nightOut": ["Dec", "Jan"]},
    },
)


async def seed_collection(
    session: AsyncSession,
    collection: CollectionService,
    *,
    owner: models.User,
) -> list[models.Fragrance]:
    """Add the demo fragrances to ``owner``'s collection if it is empty."""

    existing = await collection.list_for_owner(session, owner_id=owner.id)
    if existing:
        return existing
    return [
        await collection.create(session, owner_id=owner.id, data=fragrance)
        for fragrance in DEMO_FRAGRANCES
    ]
