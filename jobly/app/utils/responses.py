from typing import Any, Dict

from ..middlewares.request_id import request_id_ctx


def ok(data: Any) -> Dict[str, Any]:
    """Return a success envelope."""
    return {"ok": True, "data": data}


def err(
    code: int | str,
    message: Any,
    details: Dict[str, Any] | None = None,
) -> Dict[str, Any]:
    """Return an error envelope carrying the current request id."""
    error: Dict[str, Any] = {"code": code, "message": message}
    if details:
        error["details"] = details

    return {"ok": False, "request_id": request_id_ctx.get(None), "error": error}
