import json
import logging
import re
from datetime import datetime, timezone
from typing import Any

from ..middlewares.request_id import request_id_ctx

EMAIL_RE = re.compile(r"[\w.+-]+@[\w-]+\.[\w.-]+", re.I)
PASSWORD_RE = re.compile(r"(?i)(password[\"']?\s*[:=]\s*[\"']?)([^\"',\s}]+)")
BEARER_RE = re.compile(r"(?i)(bearer\s+)[\w-]+\.[\w-]+\.[\w-]+")

# Attributes copied from ``extra=`` into the JSON line when set
EXTRA_FIELDS = ("user", "route", "status", "latency_ms")


def _redact_pii(text: str) -> str:
    """Mask emails, password values and bearer tokens."""
    text = EMAIL_RE.sub("***", text)
    text = PASSWORD_RE.sub(lambda m: m.group(1) + "***", text)
    text = BEARER_RE.sub(lambda m: m.group(1) + "***", text)
    return text


class RequestIdFilter(logging.Filter):
    """Attach request id from context to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.req_id = request_id_ctx.get(None)
        return True


class JsonFormatter(logging.Formatter):
    """Render a record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "req_id": getattr(record, "req_id", None),
            "msg": _redact_pii(record.getMessage()),
        }
        for field in EXTRA_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                data[field] = value
        if record.exc_info:
            data["exc"] = self.formatException(record.exc_info)
        return json.dumps(data, default=str)


def configure_logging(level: int = logging.INFO) -> None:
    """Send every log record to stderr as JSON."""

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    handler.addFilter(RequestIdFilter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
