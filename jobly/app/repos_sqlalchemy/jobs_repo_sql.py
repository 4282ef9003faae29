from __future__ import annotations

"""SQLAlchemy implementation of the job repository."""

import logging
from typing import Any, Mapping

from sqlalchemy.orm import Session

from ..db import run_query
from ..errors import BadRequestError, NotFoundError
from ..repos.jobs_repo import JobRepo
from ..utils.sql import JOB_FILTERS, sql_for_partial_update, sql_for_where

logger = logging.getLogger("jobly.repos")

# title, salary and equity already match their column names
JOB_COLUMNS: dict[str, str] = {}

_JOB_FIELDS = 'id, title, salary, equity, company_handle AS "companyHandle"'


def job_row(row: Mapping[str, Any]) -> dict:
    """Return ``row`` as a dict with ``equity`` as a float.

    PostgreSQL hands NUMERIC back as :class:`~decimal.Decimal`, which is not
    JSON serialisable.
    """
    job = dict(row)
    if job.get("equity") is not None:
        job["equity"] = float(job["equity"])
    return job


class JobRepoSQL(JobRepo):
    """Concrete JobRepo issuing SQL text through :func:`run_query`."""

    def create(self, session: Session, data: Mapping[str, Any]) -> dict:
        """Insert a job for an existing company."""
        company = run_query(
            session,
            "SELECT handle FROM companies WHERE handle = $1",
            [data["companyHandle"]],
        )
        if not company:
            raise BadRequestError(f"No company: {data['companyHandle']}")

        rows = run_query(
            session,
            f"""INSERT INTO jobs (title, salary, equity, company_handle)
            VALUES ($1, $2, $3, $4)
            RETURNING {_JOB_FIELDS}""",
            [
                data["title"],
                data.get("salary"),
                data.get("equity"),
                data["companyHandle"],
            ],
        )
        session.commit()
        job = job_row(rows[0])
        logger.info("job created id=%s company=%s", job["id"], job["companyHandle"])
        return job

    def find_all(
        self, session: Session, filters: Mapping[str, Any] | None = None
    ) -> list[dict]:
        """Return jobs ordered by company and title, narrowed by ``filters``.

        Recognised filters are ``title`` (case-insensitive substring),
        ``minSalary`` and ``hasEquity`` (only ``True`` narrows the results).
        """
        where_clause, values = sql_for_where(filters or {}, JOB_FILTERS)
        rows = run_query(
            session,
            f"""SELECT {_JOB_FIELDS}
            FROM jobs
            {where_clause}
            ORDER BY company_handle, title""",
            values,
        )
        return [job_row(r) for r in rows]

    def get(self, session: Session, job_id: int) -> dict:
        rows = run_query(
            session, f"SELECT {_JOB_FIELDS} FROM jobs WHERE id = $1", [job_id]
        )
        if not rows:
            raise NotFoundError(f"No job: {job_id}")
        return job_row(rows[0])

    def update(self, session: Session, job_id: int, data: Mapping[str, Any]) -> dict:
        """Partially update a job; the owning company cannot change."""
        set_cols, values = sql_for_partial_update(data, JOB_COLUMNS)
        id_idx = f"${len(values) + 1}"
        rows = run_query(
            session,
            f"""UPDATE jobs
            SET {set_cols}
            WHERE id = {id_idx}
            RETURNING {_JOB_FIELDS}""",
            [*values, job_id],
        )
        if not rows:
            session.rollback()
            raise NotFoundError(f"No job: {job_id}")
        session.commit()
        return job_row(rows[0])

    def remove(self, session: Session, job_id: int) -> None:
        rows = run_query(
            session, "DELETE FROM jobs WHERE id = $1 RETURNING id", [job_id]
        )
        if not rows:
            session.rollback()
            raise NotFoundError(f"No job: {job_id}")
        session.commit()
        logger.info("job removed id=%s", job_id)


__all__ = ["JOB_COLUMNS", "JobRepoSQL", "job_row"]
