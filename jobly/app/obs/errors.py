"""Error reporting helpers."""

from __future__ import annotations

import logging
from typing import Optional

import sentry_sdk

from ..middlewares.request_id import request_id_ctx

logger = logging.getLogger("jobly.obs")


def init_sentry(dsn: Optional[str] = None, env: Optional[str] = None) -> None:
    """Initialize Sentry when ``ERROR_DSN`` is configured."""
    if not dsn:
        logger.info("ERROR_DSN not set; error sink disabled")
        return
    # request bodies carry passwords; never ship them
    sentry_sdk.init(dsn=dsn, environment=env, send_default_pii=False)


def capture_exception(exc: Exception) -> None:
    """Report ``exc`` to Sentry tagged with the request id, else log it."""
    if not sentry_sdk.get_client().is_active():
        logger.exception("Unhandled exception", exc_info=exc)
        return
    with sentry_sdk.new_scope() as scope:
        scope.set_tag("request_id", request_id_ctx.get(None))
        sentry_sdk.capture_exception(exc)
