import json
import logging

from jobly.app.middlewares.request_id import request_id_ctx
from jobly.app.obs.logging import JsonFormatter, RequestIdFilter, _redact_pii


def _record(msg: str, *args) -> logging.LogRecord:
    return logging.LogRecord("jobly", logging.INFO, __file__, 1, msg, args, None)


def test_redacts_emails_and_passwords():
    text = _redact_pii('login user1@user.com {"password": "hunter2"}')
    assert "user1@user.com" not in text
    assert "hunter2" not in text


def test_formatter_emits_json_with_request_id():
    token = request_id_ctx.set("req-42")
    try:
        record = _record("hello %s", "world")
        RequestIdFilter().filter(record)
        data = json.loads(JsonFormatter().format(record))
    finally:
        request_id_ctx.reset(token)
    assert data["msg"] == "hello world"
    assert data["req_id"] == "req-42"
    assert data["level"] == "INFO"


def test_formatter_includes_extra_fields():
    record = _record("done")
    record.status = 404
    record.route = "/companies/x"
    data = json.loads(JsonFormatter().format(record))
    assert data["status"] == 404
    assert data["route"] == "/companies/x"


def test_bearer_tokens_masked():
    text = _redact_pii("Authorization: Bearer aaa.bbb.ccc")
    assert text == "Authorization: Bearer ***"


def test_unset_extras_omitted():
    data = json.loads(JsonFormatter().format(_record("plain")))
    assert "status" not in data
    assert data["logger"] == "jobly"
