"""Collection CRUD, browsing filters and analytics routes."""

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from fragshelf.api.auth import CurrentUser
from fragshelf.api.schemas import (
    AnalyticsEntryOut,
    AnalyticsOut,
    FragranceIn,
    FragranceOut,
    FragrancePatch,
    FragranceQuery,
    FragranceQueryOut,
    Month,
    WearCategory,
)
from fragshelf.db import models
from fragshelf.db.session import get_session
from fragshelf.services.analytics import summarise_collection
from fragshelf.services.collection import CollectionService, FragranceNotFoundError
from fragshelf.services.filters import query_collection, what_to_wear

router = APIRouter(tags=["fragrances"])


def get_collection_service() -> CollectionService:
    return CollectionService()


def _not_found(exc: FragranceNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


@router.get("/fragrances", response_model=list[FragranceOut])
async def list_fragrances(
    user: models.User = CurrentUser,
    session: AsyncSession = Depends(get_session),
    collection: CollectionService = Depends(get_collection_service),
) -> list[FragranceOut]:
    records = await collection.list_for_owner(session, owner_id=user.id)
    return [FragranceOut.from_model(record) for record in records]


@router.post("/fragrances", response_model=FragranceOut, status_code=status.HTTP_201_CREATED)
async def create_fragrance(
    payload: FragranceIn,
    user: models.User = CurrentUser,
    session: AsyncSession = Depends(get_session),
    collection: CollectionService = Depends(get_collection_service),
) -> FragranceOut:
    record = await collection.create(session, owner_id=user.id, data=payload.to_columns())
    return FragranceOut.from_model(record)


@router.post("/fragrances/query", response_model=FragranceQueryOut)
async def query_fragrances(
    query: FragranceQuery,
    user: models.User = CurrentUser,
    session: AsyncSession = Depends(get_session),
    collection: CollectionService = Depends(get_collection_service),
) -> FragranceQueryOut:
    records = await collection.list_for_owner(session, owner_id=user.id)
    selected, families = query_collection(
        records,
        seasons={season.value: minimum for season, minimum in query.seasons.items()},
        occasions={occasion.value: minimum for occasion, minimum in query.occasions.items()},
        family=query.family,
        safest_first=query.safest_first,
    )
    return FragranceQueryOut(
        fragrances=[FragranceOut.from_model(record) for record in selected],
        available_types=families,
    )


@router.get("/fragrances/what-to-wear", response_model=list[FragranceOut])
async def fragrances_to_wear(
    category: WearCategory = Query(...),
    month: Month | None = Query(default=None),
    user: models.User = CurrentUser,
    session: AsyncSession = Depends(get_session),
    collection: CollectionService = Depends(get_collection_service),
) -> list[FragranceOut]:
    records = await collection.list_for_owner(session, owner_id=user.id)
    return [FragranceOut.from_model(record) for record in what_to_wear(records, category, month)]


@router.get("/fragrances/{fragrance_id}", response_model=FragranceOut)
async def get_fragrance(
    fragrance_id: str,
    user: models.User = CurrentUser,
    session: AsyncSession = Depends(get_session),
    collection: CollectionService = Depends(get_collection_service),
) -> FragranceOut:
    try:
        record = await collection.get_by_id(session, owner_id=user.id, fragrance_id=fragrance_id)
    except FragranceNotFoundError as exc:
        raise _not_found(exc) from exc
    return FragranceOut.from_model(record)


@router.put("/fragrances/{fragrance_id}", response_model=FragranceOut)
async def replace_fragrance(
    fragrance_id: str,
    payload: FragranceIn,
    user: models.User = CurrentUser,
    session: AsyncSession = Depends(get_session),
    collection: CollectionService = Depends(get_collection_service),
) -> FragranceOut:
    try:
        record = await collection.replace(
            session,
            owner_id=user.id,
            fragrance_id=fragrance_id,
            data=payload.to_columns(),
        )
    except FragranceNotFoundError as exc:
        raise _not_found(exc) from exc
    return FragranceOut.from_model(record)


@router.patch("/fragrances/{fragrance_id}", response_model=FragranceOut)
async def update_preferences(
    fragrance_id: str,
    payload: FragrancePatch,
    user: models.User = CurrentUser,
    session: AsyncSession = Depends(get_session),
    collection: CollectionService = Depends(get_collection_service),
) -> FragranceOut:
    try:
        record = await collection.update_preferences(
            session,
            owner_id=user.id,
            fragrance_id=fragrance_id,
            changes=payload.changes(),
        )
    except FragranceNotFoundError as exc:
        raise _not_found(exc) from exc
    return FragranceOut.from_model(record)


@router.delete("/fragrances/{fragrance_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_fragrance(
    fragrance_id: str,
    user: models.User = CurrentUser,
    session: AsyncSession = Depends(get_session),
    collection: CollectionService = Depends(get_collection_service),
) -> Response:
    try:
        await collection.delete(session, owner_id=user.id, fragrance_id=fragrance_id)
    except FragranceNotFoundError as exc:
        raise _not_found(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/analytics", response_model=AnalyticsOut)
async def collection_analytics(
    user: models.User = CurrentUser,
    session: AsyncSession = Depends(get_session),
    collection: CollectionService = Depends(get_collection_service),
) -> AnalyticsOut:
    records = await collection.list_for_owner(session, owner_id=user.id)
    summary = summarise_collection(records)

    def entries(items: list) -> list[AnalyticsEntryOut]:
        return [AnalyticsEntryOut(name=item.name, value=item.value) for item in items]

    return AnalyticsOut(
        count=summary.count,
        seasons=entries(summary.seasons),
        occasions=entries(summary.occasions),
        types=entries(summary.types),
    )
