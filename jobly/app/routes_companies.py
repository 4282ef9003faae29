"""Company routes: public reads, admin-only writes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from .auth import ensure_admin
from .db import get_session
from .repos_sqlalchemy import companies
from .schemas import CompanyFilter, CompanyNew, CompanyUpdate, changes, parse_filters
from .utils.responses import ok

router = APIRouter(prefix="/companies", tags=["Companies"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(ensure_admin)],
)
def create_company(payload: CompanyNew, session: Session = Depends(get_session)) -> dict:
    """Create a company. Authorization required: admin."""

    company = companies.create(session, payload.model_dump())
    return ok({"company": company})


@router.get("")
def list_companies(request: Request, session: Session = Depends(get_session)) -> dict:
    """List companies, optionally filtered.

    Accepts ``minEmployees``, ``maxEmployees`` and ``nameLike`` in the query
    string; any other key is rejected with 400.
    """

    filters = parse_filters(CompanyFilter, request.query_params)
    return ok({"companies": companies.find_all(session, filters)})


@router.get("/{handle}")
def get_company(handle: str, session: Session = Depends(get_session)) -> dict:
    """Return one company together with its jobs."""

    return ok({"company": companies.get(session, handle)})


@router.patch("/{handle}", dependencies=[Depends(ensure_admin)])
def update_company(
    handle: str, payload: CompanyUpdate, session: Session = Depends(get_session)
) -> dict:
    """Patch the supplied fields of a company. Authorization required: admin."""

    company = companies.update(session, handle, changes(payload))
    return ok({"company": company})


@router.delete("/{handle}", dependencies=[Depends(ensure_admin)])
def delete_company(handle: str, session: Session = Depends(get_session)) -> dict:
    companies.remove(session, handle)
    return ok({"deleted": handle})
