"""Sign-up, login and session verification routes."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from fragshelf.api.auth import CurrentUser
from fragshelf.api.schemas import AuthResponse, Credentials, UserOut, VerifyResponse
from fragshelf.db import models
from fragshelf.db.session import get_session
from fragshelf.services.accounts import (
    AccountService,
    InvalidCredentialsError,
    UsernameTakenError,
    WeakPasswordError,
    issue_token,
)

router = APIRouter(prefix="/auth", tags=["auth"])


def _auth_response(user: models.User) -> AuthResponse:
    return AuthResponse(user=UserOut.from_model(user), token=issue_token(user.id))


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    credentials: Credentials,
    session: AsyncSession = Depends(get_session),
) -> AuthResponse:
    try:
        user = await AccountService().signup(
            session,
            username=credentials.username,
            password=credentials.password,
        )
    except WeakPasswordError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except UsernameTakenError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return _auth_response(user)


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: Credentials,
    session: AsyncSession = Depends(get_session),
) -> AuthResponse:
    try:
        user = await AccountService().login(
            session,
            username=credentials.username,
            password=credentials.password,
        )
    except InvalidCredentialsError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc
    return _auth_response(user)


@router.get("/verify", response_model=VerifyResponse)
async def verify(user: models.User = CurrentUser) -> VerifyResponse:
    return VerifyResponse(user=UserOut.from_model(user))
