"""Token issuing routes."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from .auth import Token, create_access_token
from .db import get_session
from .repos_sqlalchemy import users
from .schemas import UserAuth, UserRegister
from .utils.responses import ok

router = APIRouter(prefix="/auth", tags=["Auth"])
logger = logging.getLogger("jobly.auth")


@router.post("/token", summary="Login with username and password")
def login(credentials: UserAuth, session: Session = Depends(get_session)) -> dict:
    """Exchange a username and password for a JWT."""

    user = users.authenticate(session, credentials.username, credentials.password)
    token = create_access_token(user["username"], user["isAdmin"])
    logger.info("login username=%s", user["username"])
    return ok(Token(token=token).model_dump())


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(payload: UserRegister, session: Session = Depends(get_session)) -> dict:
    """Create a regular (non-admin) user and return a JWT for them."""

    user = users.register(session, {**payload.model_dump(), "isAdmin": False})
    token = create_access_token(user["username"], user["isAdmin"])
    logger.info("register username=%s", user["username"])
    return ok(Token(token=token).model_dump())
