"""Application errors mapped onto HTTP status codes.

Every error carries the status code the API should answer with; the
exception handler registered in :mod:`jobly.app.main` turns them into the
standard error envelope.
"""

from __future__ import annotations


class JoblyError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = 500
    message = "Internal Server Error"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class BadRequestError(JoblyError):
    status_code = 400
    message = "Bad Request"


class NoDataError(BadRequestError):
    """A partial update was requested without any fields."""

    message = "No data"


class UnrecognizedFilterKeyError(BadRequestError):
    """A filter key outside the recognised set was supplied."""

    message = "Wrong key for filter"


class BadRangeError(BadRequestError):
    """A lower bound filter exceeds its upper bound."""

    message = "minEmployees cannot be greater than maxEmployees"


class UnauthorizedError(JoblyError):
    status_code = 401
    message = "Unauthorized"


class NotFoundError(JoblyError):
    status_code = 404
    message = "Not Found"


__all__ = [
    "JoblyError",
    "BadRequestError",
    "NoDataError",
    "UnrecognizedFilterKeyError",
    "BadRangeError",
    "UnauthorizedError",
    "NotFoundError",
]
