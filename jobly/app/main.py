# main.py

"""FastAPI application serving companies, jobs and users."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config.validate import validate_on_boot
from .errors import JoblyError
from .middlewares import LoggingMiddleware, RequestIdMiddleware
from .obs import capture_exception, init_sentry
from .obs.logging import configure_logging
from .routes_auth import router as auth_router
from .routes_companies import router as companies_router
from .routes_jobs import router as jobs_router
from .routes_users import router as users_router
from .schemas import validation_messages
from .utils.responses import err, ok

settings = validate_on_boot()

configure_logging(getattr(logging, settings.log_level.upper(), logging.INFO))
logger = logging.getLogger("jobly")
init_sentry(settings.error_dsn, env=settings.app_env.value)

app = FastAPI(
    title="Jobly API",
    version="1.0.0",
    servers=[{"url": "/"}],
    openapi_url="/openapi.json",
)
app.add_middleware(LoggingMiddleware)
app.add_middleware(RequestIdMiddleware)

app.include_router(auth_router)
app.include_router(companies_router)
app.include_router(jobs_router)
app.include_router(users_router)


@app.exception_handler(JoblyError)
async def jobly_error_handler(request: Request, exc: JoblyError):
    logger.warning(
        exc.message,
        extra={"status": exc.status_code, "route": request.url.path},
    )
    return JSONResponse(err(exc.status_code, exc.message), status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    messages = validation_messages(exc)
    logger.info(
        "request validation failed",
        extra={"status": 400, "route": request.url.path},
    )
    return JSONResponse(err(400, messages), status_code=400)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    logger.warning(
        exc.detail,
        extra={"status": exc.status_code, "route": request.url.path},
    )
    return JSONResponse(err(exc.status_code, exc.detail), status_code=exc.status_code)


@app.exception_handler(Exception)
async def general_error_handler(request: Request, exc: Exception):
    logger.exception(
        "unhandled_error",
        extra={"status": 500, "route": request.url.path},
    )
    capture_exception(exc)
    return JSONResponse(err(500, "Internal Server Error"), status_code=500)


@app.get("/health", tags=["Ops"])
async def health() -> dict:
    """Liveness probe."""

    return ok({"status": "ok"})
