"""Job routes: public reads, admin-only writes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from .auth import ensure_admin
from .db import get_session
from .repos_sqlalchemy import jobs
from .schemas import JobFilter, JobNew, JobUpdate, changes, parse_filters
from .utils.responses import ok

router = APIRouter(prefix="/jobs", tags=["Jobs"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(ensure_admin)],
)
def create_job(payload: JobNew, session: Session = Depends(get_session)) -> dict:
    """Create a job for an existing company. Authorization required: admin."""

    return ok({"job": jobs.create(session, payload.model_dump())})


@router.get("")
def list_jobs(request: Request, session: Session = Depends(get_session)) -> dict:
    """List jobs filtered by ``title``, ``minSalary`` and ``hasEquity``."""

    filters = parse_filters(JobFilter, request.query_params)
    return ok({"jobs": jobs.find_all(session, filters)})


@router.get("/{job_id}")
def get_job(job_id: int, session: Session = Depends(get_session)) -> dict:
    return ok({"job": jobs.get(session, job_id)})


@router.patch("/{job_id}", dependencies=[Depends(ensure_admin)])
def update_job(
    job_id: int, payload: JobUpdate, session: Session = Depends(get_session)
) -> dict:
    """Patch title, salary or equity of a job. Authorization required: admin."""

    return ok({"job": jobs.update(session, job_id, changes(payload))})


@router.delete("/{job_id}", dependencies=[Depends(ensure_admin)])
def delete_job(job_id: int, session: Session = Depends(get_session)) -> dict:
    jobs.remove(session, job_id)
    return ok({"deleted": job_id})
