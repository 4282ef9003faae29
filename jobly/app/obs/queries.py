from __future__ import annotations

import hashlib
import logging
import random
import time

from sqlalchemy import event
from sqlalchemy.engine import Engine

SAMPLE_RATE = 0.01

logger = logging.getLogger("obs")


def add_query_logger(engine: Engine, name: str, slow_ms: int = 200) -> None:
    """Attach timing-based logging to ``engine``.

    Queries slower than ``slow_ms`` are logged as warnings; a small sample of
    the rest is logged at info level. Parameters are only ever logged as a
    hash.
    """

    def before_cursor_execute(
        conn, cursor, statement, parameters, context, executemany
    ):  # type: ignore[no-untyped-def]
        context._query_start_time = time.perf_counter()

    def after_cursor_execute(
        conn, cursor, statement, parameters, context, executemany
    ):  # type: ignore[no-untyped-def]
        total_ms = (time.perf_counter() - context._query_start_time) * 1000
        sql = " ".join(statement.split())
        if len(sql) > 200:
            sql = sql[:197] + "..."
        params_hash = hashlib.sha256(repr(parameters).encode()).hexdigest()[:8]
        if total_ms > slow_ms:
            logger.warning(
                "slow query %dms db=%s sql=%s params=%s",
                int(total_ms),
                name,
                sql,
                params_hash,
            )
        elif random.random() < SAMPLE_RATE:
            logger.info(
                "query %dms db=%s sql=%s params=%s",
                int(total_ms),
                name,
                sql,
                params_hash,
            )

    event.listen(engine, "before_cursor_execute", before_cursor_execute)
    event.listen(engine, "after_cursor_execute", after_cursor_execute)
