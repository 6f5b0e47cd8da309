"""User accounts and the bearer token scheme."""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import logging
import os
import time

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fragshelf.db import models

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
_HASH_ITERATIONS = 100_000


class UsernameTakenError(ValueError):
    """Raised when signing up with a username that already exists."""


class WeakPasswordError(ValueError):
    """Raised when a password is shorter than the minimum length."""


class InvalidCredentialsError(PermissionError):
    """Raised when a login or token cannot be matched to a user."""


def hash_password(password: str, salt: bytes | None = None) -> str:
    salt = salt or os.urandom(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, _HASH_ITERATIONS)
    return f"{salt.hex()}${digest.hex()}"


def verify_password(password: str, stored: str) -> bool:
    salt_hex, _, digest_hex = stored.partition("$")
    try:
        salt = bytes.fromhex(salt_hex)
    except ValueError:
        return False
    expected = hash_password(password, salt).partition("$")[2]
    return hmac.compare_digest(expected, digest_hex)


def issue_token(user_id: int) -> str:
    """Opaque session token: base64 of ``"<user id>:<issued at ms>"``."""

    raw = f"{user_id}:{int(time.time() * 1000)}"
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


def read_token(token: str) -> int | None:
    """Return the user id carried by ``token`` or ``None`` if it is malformed."""

    try:
        decoded = base64.b64decode(token.encode("ascii"), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeError, ValueError):
        return None
    user_id, _, _ = decoded.partition(":")
    if not (user_id.isascii() and user_id.isdecimal()):
        return None
    value = int(user_id)
    return value if value <= models.MAX_ROW_ID else None


class AccountService:
    """Sign-up, login and token verification."""

    async def signup(self, session: AsyncSession, *, username: str, password: str) -> models.User:
        if len(password) < MIN_PASSWORD_LENGTH:
            raise WeakPasswordError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
            )
        if await self._find(session, username) is not None:
            raise UsernameTakenError("Username already exists")

        user = models.User(username=username, password_hash=hash_password(password))
        session.add(user)
        await session.commit()
        await session.refresh(user)
        logger.info("Created user %s (id=%d)", username, user.id)
        return user

    async def login(self, session: AsyncSession, *, username: str, password: str) -> models.User:
        user = await self._find(session, username)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Failed login for %s", username)
            raise InvalidCredentialsError("Invalid username or password")
        return user

    async def resolve_token(self, session: AsyncSession, token: str) -> models.User:
        user_id = read_token(token)
        if user_id is None:
            raise InvalidCredentialsError("Invalid token")
        user = await session.get(models.User, user_id)
        if user is None:
            raise InvalidCredentialsError("User not found")
        return user

    async def _find(self, session: AsyncSession, username: str) -> models.User | None:
        stmt = select(models.User).where(models.User.username == username)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()
