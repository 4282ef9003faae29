from __future__ import annotations

"""SQLAlchemy implementation of the user repository."""

import logging
from typing import Any, Mapping

from sqlalchemy.orm import Session

from ..auth import hash_password, verify_password
from ..db import run_query
from ..errors import BadRequestError, NotFoundError, UnauthorizedError
from ..repos.users_repo import UserRepo
from ..utils.sql import sql_for_partial_update

logger = logging.getLogger("jobly.repos")

USER_COLUMNS = {
    "firstName": "first_name",
    "lastName": "last_name",
}

_USER_FIELDS = (
    'username, first_name AS "firstName", last_name AS "lastName", '
    'email, is_admin AS "isAdmin"'
)


def user_row(row: Mapping[str, Any]) -> dict:
    """Return ``row`` without the password hash and with a real bool flag."""
    user = {k: v for k, v in row.items() if k != "password"}
    user["isAdmin"] = bool(user.get("isAdmin"))
    return user


class UserRepoSQL(UserRepo):
    """Concrete UserRepo issuing SQL text through :func:`run_query`."""

    def authenticate(self, session: Session, username: str, password: str) -> dict:
        """Return the user for valid credentials, else raise ``UnauthorizedError``."""
        rows = run_query(
            session,
            f"SELECT {_USER_FIELDS}, password FROM users WHERE username = $1",
            [username],
        )
        if rows and verify_password(password, rows[0]["password"]):
            return user_row(rows[0])
        logger.info("failed login username=%s", username)
        raise UnauthorizedError("Invalid username/password")

    def register(self, session: Session, data: Mapping[str, Any]) -> dict:
        """Create a user; duplicate usernames are a request error."""
        duplicate = run_query(
            session,
            "SELECT username FROM users WHERE username = $1",
            [data["username"]],
        )
        if duplicate:
            raise BadRequestError(f"Duplicate username: {data['username']}")

        rows = run_query(
            session,
            f"""INSERT INTO users (username, password, first_name, last_name, email, is_admin)
            VALUES ($1, $2, $3, $4, $5, $6)
            RETURNING {_USER_FIELDS}""",
            [
                data["username"],
                hash_password(data["password"]),
                data["firstName"],
                data["lastName"],
                data["email"],
                bool(data.get("isAdmin", False)),
            ],
        )
        session.commit()
        logger.info("user registered username=%s", data["username"])
        return user_row(rows[0])

    def find_all(self, session: Session) -> list[dict]:
        rows = run_query(
            session, f"SELECT {_USER_FIELDS} FROM users ORDER BY username"
        )
        return [user_row(r) for r in rows]

    def get(self, session: Session, username: str) -> dict:
        rows = run_query(
            session, f"SELECT {_USER_FIELDS} FROM users WHERE username = $1", [username]
        )
        if not rows:
            raise NotFoundError(f"No user: {username}")
        return user_row(rows[0])

    def update(self, session: Session, username: str, data: Mapping[str, Any]) -> dict:
        """Partially update a user, hashing a new password when one is given."""
        if "password" in data:
            data = {**data, "password": hash_password(data["password"])}
        set_cols, values = sql_for_partial_update(data, USER_COLUMNS)
        username_idx = f"${len(values) + 1}"
        rows = run_query(
            session,
            f"""UPDATE users
            SET {set_cols}
            WHERE username = {username_idx}
            RETURNING {_USER_FIELDS}""",
            [*values, username],
        )
        if not rows:
            session.rollback()
            raise NotFoundError(f"No user: {username}")
        session.commit()
        return user_row(rows[0])

    def remove(self, session: Session, username: str) -> None:
        rows = run_query(
            session,
            "DELETE FROM users WHERE username = $1 RETURNING username",
            [username],
        )
        if not rows:
            session.rollback()
            raise NotFoundError(f"No user: {username}")
        session.commit()
        logger.info("user removed username=%s", username)


__all__ = ["USER_COLUMNS", "UserRepoSQL", "user_row"]
