import logging
import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

REQUEST_ID_HEADER = "X-Request-ID"
# Client supplied ids are echoed back into logs and headers
_VALID_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

# Context variable used by log filter to inject request id
request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)
logger = logging.getLogger("jobly")


def resolve_request_id(request: Request) -> str:
    """Return the caller's request id when well formed, else a fresh uuid."""
    incoming = request.headers.get(REQUEST_ID_HEADER)
    if incoming and _VALID_ID.match(incoming):
        return incoming
    return str(uuid.uuid4())


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Ensure every request carries a request id."""

    async def dispatch(self, request: Request, call_next):
        req_id = resolve_request_id(request)
        token = request_id_ctx.set(req_id)
        request.state.request_id = req_id
        try:
            response = await call_next(request)
        finally:
            request_id_ctx.reset(token)
        response.headers[REQUEST_ID_HEADER] = req_id
        return response
