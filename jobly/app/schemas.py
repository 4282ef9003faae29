# schemas.py

"""Pydantic models for API payloads and query strings.

Body models are strict: ``"1"`` is not accepted where a number is expected.
Query models are lax because every query-string value arrives as text.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import BadRequestError

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

ModelT = TypeVar("ModelT", bound=BaseModel)


class StrictBody(BaseModel):
    """Base for request bodies: no unknown fields, no type coercion."""

    model_config = ConfigDict(extra="forbid", strict=True)


class QueryFilters(BaseModel):
    """Base for query-string filters: unknown keys rejected, values coerced."""

    model_config = ConfigDict(extra="forbid")


class CompanyNew(StrictBody):
    handle: str = Field(..., min_length=1, max_length=25)
    name: str = Field(..., min_length=1)
    description: str
    numEmployees: Optional[int] = Field(None, ge=0)
    logoUrl: Optional[str] = Field(None, max_length=2048)


class CompanyUpdate(StrictBody):
    """Fields of a company that may be patched; ``handle`` is immutable."""

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    numEmployees: Optional[int] = Field(None, ge=0)
    logoUrl: Optional[str] = Field(None, max_length=2048)


class CompanyFilter(QueryFilters):
    minEmployees: Optional[int] = Field(None, ge=0)
    maxEmployees: Optional[int] = Field(None, ge=0)
    nameLike: Optional[str] = Field(None, min_length=1)


class JobNew(StrictBody):
    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[float] = Field(None, ge=0, le=1)
    companyHandle: str = Field(..., min_length=1, max_length=25)


class JobUpdate(StrictBody):
    """Fields of a job that may be patched; the company cannot change."""

    title: Optional[str] = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[float] = Field(None, ge=0, le=1)


class JobFilter(QueryFilters):
    title: Optional[str] = Field(None, min_length=1)
    minSalary: Optional[int] = Field(None, ge=0)
    hasEquity: Optional[bool] = None


class UserAuth(StrictBody):
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=1)


class UserRegister(StrictBody):
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=5, max_length=20)
    firstName: str = Field(..., min_length=1, max_length=30)
    lastName: str = Field(..., min_length=1, max_length=30)
    email: str = Field(..., min_length=6, max_length=60, pattern=EMAIL_PATTERN)


class UserNew(UserRegister):
    """Admin-created user; may be granted admin rights."""

    isAdmin: bool = False


class UserUpdate(StrictBody):
    password: Optional[str] = Field(None, min_length=5, max_length=20)
    firstName: Optional[str] = Field(None, min_length=1, max_length=30)
    lastName: Optional[str] = Field(None, min_length=1, max_length=30)
    email: Optional[str] = Field(
        None, min_length=6, max_length=60, pattern=EMAIL_PATTERN
    )


def validation_messages(exc) -> list[str]:
    """Flatten pydantic or FastAPI validation errors into ``"field: message"`` strings."""
    return [
        f"{'.'.join(str(p) for p in e['loc']) or 'body'}: {e['msg']}"
        for e in exc.errors()
    ]


def parse_filters(model: Type[ModelT], params: Mapping[str, Any]) -> dict[str, Any]:
    """Validate query ``params`` with ``model`` and return typed filters.

    The returned mapping keeps the order in which keys were supplied, which
    decides the placeholder order of the generated ``WHERE`` clause.
    """
    raw = dict(params)
    try:
        parsed = model.model_validate(raw)
    except ValidationError as exc:
        raise BadRequestError("; ".join(validation_messages(exc))) from exc
    return {key: getattr(parsed, key) for key in raw}


def changes(payload: BaseModel) -> dict[str, Any]:
    """Return the fields a PATCH body actually sets."""
    return payload.model_dump(exclude_unset=True, exclude_none=True)
