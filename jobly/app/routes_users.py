"""User account routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from .auth import create_access_token, ensure_admin, ensure_correct_user_or_admin
from .db import get_session
from .repos_sqlalchemy import users
from .schemas import UserNew, UserUpdate, changes
from .utils.responses import ok

router = APIRouter(prefix="/users", tags=["Users"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(ensure_admin)],
)
def create_user(payload: UserNew, session: Session = Depends(get_session)) -> dict:
    """Add a user, possibly an admin, and return a token for them.

    This is for admins creating accounts; self sign-up goes through
    ``POST /auth/register``. Authorization required: admin.
    """

    user = users.register(session, payload.model_dump())
    token = create_access_token(user["username"], user["isAdmin"])
    return ok({"user": user, "token": token})


@router.get("", dependencies=[Depends(ensure_admin)])
def list_users(session: Session = Depends(get_session)) -> dict:
    return ok({"users": users.find_all(session)})


@router.get("/{username}", dependencies=[Depends(ensure_correct_user_or_admin)])
def get_user(username: str, session: Session = Depends(get_session)) -> dict:
    return ok({"user": users.get(session, username)})


@router.patch("/{username}", dependencies=[Depends(ensure_correct_user_or_admin)])
def update_user(
    username: str, payload: UserUpdate, session: Session = Depends(get_session)
) -> dict:
    """Patch name, email or password of a user."""

    return ok({"user": users.update(session, username, changes(payload))})


@router.delete("/{username}", dependencies=[Depends(ensure_correct_user_or_admin)])
def delete_user(username: str, session: Session = Depends(get_session)) -> dict:
    users.remove(session, username)
    return ok({"deleted": username})
