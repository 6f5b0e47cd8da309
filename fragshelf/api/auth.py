"""Authentication helpers and route dependencies."""

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from fragshelf.db import models
from fragshelf.db.session import get_session
from fragshelf.services.accounts import AccountService, InvalidCredentialsError

BEARER_PREFIX = "Bearer "


async def require_user(
    authorization: str | None = Header(default=None),
    session: AsyncSession = Depends(get_session),
) -> models.User:
    """
    Resolve the bearer token to the collection owner.

    The token scheme is intentionally simple: it identifies the user but is
    not signed, so it must only be used behind a trusted front end.
    """

    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )

    try:
        return await AccountService().resolve_token(session, authorization[len(BEARER_PREFIX):])
    except InvalidCredentialsError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
        ) from exc


CurrentUser = Depends(require_user)
