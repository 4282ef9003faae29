# auth.py

"""JWT authentication helpers and authorization dependencies."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from pydantic import BaseModel

from config import get_settings

from .errors import UnauthorizedError

logger = logging.getLogger(__name__)

ph = PasswordHasher()

# A missing or malformed header yields ``None`` rather than an error so that
# public routes can still see who is calling.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token", auto_error=False)


class Token(BaseModel):
    """JWT access token returned after authentication."""

    token: str


class TokenUser(BaseModel):
    """Claims extracted from a verified token."""

    username: str
    is_admin: bool = False


def hash_password(password: str) -> str:
    """Return an argon2 hash of ``password``."""

    return ph.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plaintext password against a stored hash."""

    try:
        return ph.verify(hashed_password, plain_password)
    except VerifyMismatchError:
        return False
    except InvalidHashError:
        logger.warning("stored password hash is not a valid argon2 hash")
        return False
    except VerificationError as exc:  # pragma: no cover - unexpected
        logger.error("argon2 verification error: %s", exc)
        raise


def create_access_token(
    username: str, is_admin: bool = False, expires_delta: Optional[timedelta] = None
) -> str:
    """Create a signed JWT for ``username``."""

    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    payload = {"sub": username, "is_admin": is_admin, "exp": expire}
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> TokenUser:
    """Verify ``token`` and return its claims.

    Raises :class:`jwt.PyJWTError` for bad signatures or expired tokens and
    :class:`UnauthorizedError` when the subject claim is missing.
    """

    settings = get_settings()
    payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    username = payload.get("sub")
    if not username:
        raise UnauthorizedError("Token has no subject")
    return TokenUser(username=username, is_admin=payload.get("is_admin") is True)


def get_current_user(token: Optional[str] = Depends(oauth2_scheme)) -> Optional[TokenUser]:
    """Resolve the caller from a bearer token; invalid tokens are ignored."""

    if not token:
        return None
    try:
        return decode_token(token)
    except (jwt.PyJWTError, UnauthorizedError) as exc:
        logger.info("ignoring invalid token: %s", exc)
        return None


def ensure_logged_in(
    user: Optional[TokenUser] = Depends(get_current_user),
) -> TokenUser:
    """Require any authenticated user."""

    if user is None:
        raise UnauthorizedError()
    return user


def ensure_admin(user: TokenUser = Depends(ensure_logged_in)) -> TokenUser:
    """Require an authenticated admin."""

    if not user.is_admin:
        raise UnauthorizedError()
    return user


def ensure_correct_user_or_admin(
    username: str, user: TokenUser = Depends(ensure_logged_in)
) -> TokenUser:
    """Require the user named in the path, or an admin."""

    if user.username != username and not user.is_admin:
        raise UnauthorizedError("Must be the same user or an admin")
    return user
