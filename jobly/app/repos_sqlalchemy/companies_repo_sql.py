"""SQLAlchemy implementation of the company repository."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..db import run_query
from ..errors import BadRangeError, BadRequestError, NotFoundError
from ..repos.companies_repo import CompanyRepo
from ..utils.sql import COMPANY_FILTERS, sql_for_partial_update, sql_for_where
from .jobs_repo_sql import job_row

logger = logging.getLogger("jobly.repos")

# API field -> column, for fields whose names differ
COMPANY_COLUMNS = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}

_COMPANY_FIELDS = (
    "handle, name, description, "
    'num_employees AS "numEmployees", logo_url AS "logoUrl"'
)


def check_employee_range(filters: Mapping[str, Any]) -> None:
    """Raise :class:`BadRangeError` when ``minEmployees > maxEmployees``."""
    low = filters.get("minEmployees")
    high = filters.get("maxEmployees")
    if low is not None and high is not None and low > high:
        raise BadRangeError(
            "minEmployees cannot be greater than maxEmployees"
        )


class CompanyRepoSQL(CompanyRepo):
    """Concrete CompanyRepo issuing SQL text through :func:`run_query`."""

    def create(self, session: Session, data: Mapping[str, Any]) -> dict:
        """Insert a company; duplicate handles are a request error."""
        duplicate = run_query(
            session, "SELECT handle FROM companies WHERE handle = $1", [data["handle"]]
        )
        if duplicate:
            raise BadRequestError(f"Duplicate company: {data['handle']}")

        try:
            rows = run_query(
                session,
                f"""INSERT INTO companies (handle, name, description, num_employees, logo_url)
                VALUES ($1, $2, $3, $4, $5)
                RETURNING {_COMPANY_FIELDS}""",
                [
                    data["handle"],
                    data["name"],
                    data["description"],
                    data.get("numEmployees"),
                    data.get("logoUrl"),
                ],
            )
        except IntegrityError:
            session.rollback()
            raise BadRequestError(f"Duplicate company name: {data['name']}")
        session.commit()
        logger.info("company created handle=%s", data["handle"])
        return dict(rows[0])

    def find_all(
        self, session: Session, filters: Mapping[str, Any] | None = None
    ) -> list[dict]:
        """Return companies ordered by name, narrowed by ``filters``.

        Recognised filters are ``minEmployees``, ``maxEmployees`` and
        ``nameLike`` (case-insensitive substring of the name).
        """
        filters = filters or {}
        check_employee_range(filters)
        where_clause, values = sql_for_where(filters, COMPANY_FILTERS)
        rows = run_query(
            session,
            f"""SELECT {_COMPANY_FIELDS}
            FROM companies
            {where_clause}
            ORDER BY name""",
            values,
        )
        return [dict(r) for r in rows]

    def get(self, session: Session, handle: str) -> dict:
        """Return the company with its jobs, or raise :class:`NotFoundError`."""
        rows = run_query(
            session,
            f"SELECT {_COMPANY_FIELDS} FROM companies WHERE handle = $1",
            [handle],
        )
        if not rows:
            raise NotFoundError(f"No company: {handle}")
        company = dict(rows[0])

        job_rows = run_query(
            session,
            """SELECT id, title, salary, equity
            FROM jobs
            WHERE company_handle = $1
            ORDER BY id""",
            [handle],
        )
        company["jobs"] = [job_row(j) for j in job_rows]
        return company

    def update(self, session: Session, handle: str, data: Mapping[str, Any]) -> dict:
        """Partially update a company; only the supplied fields change."""
        set_cols, values = sql_for_partial_update(data, COMPANY_COLUMNS)
        handle_idx = f"${len(values) + 1}"
        try:
            rows = run_query(
                session,
                f"""UPDATE companies
                SET {set_cols}
                WHERE handle = {handle_idx}
                RETURNING {_COMPANY_FIELDS}""",
                [*values, handle],
            )
        except IntegrityError:
            session.rollback()
            # name is the only unique column a patch can touch
            raise BadRequestError(f"Duplicate company name: {data.get('name')}")
        if not rows:
            session.rollback()
            raise NotFoundError(f"No company: {handle}")
        session.commit()
        return dict(rows[0])

    def remove(self, session: Session, handle: str) -> None:
        rows = run_query(
            session,
            "DELETE FROM companies WHERE handle = $1 RETURNING handle",
            [handle],
        )
        if not rows:
            session.rollback()
            raise NotFoundError(f"No company: {handle}")
        session.commit()
        logger.info("company removed handle=%s", handle)


__all__ = ["COMPANY_COLUMNS", "CompanyRepoSQL", "check_employee_range"]
