"""Password hashing (bcrypt) and bearer tokens (PyJWT)."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt

from campusride.config import settings


class InvalidToken(Exception):
    """Token is missing, malformed, expired or signed with another key."""


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))


def create_access_token(
    user_id: int, expires_in: Optional[timedelta] = None
) -> str:
    if expires_in is None:
        expires_in = timedelta(minutes=settings.access_token_expire_minutes)
    now = datetime.now(timezone.utc)
    payload = {"sub": str(user_id), "iat": now, "exp": now + expires_in}
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> int:
    """Return the user id carried by *token*."""
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
    except jwt.ExpiredSignatureError:
        raise InvalidToken("Token expired") from None
    except jwt.InvalidTokenError:
        raise InvalidToken("Invalid token") from None

    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise InvalidToken("Invalid token subject") from None
