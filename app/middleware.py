"""
Request diagnostics for the blog API.

Each /blog request runs a small, predictable number of statements
(one SELECT for a list or lookup, one INSERT plus a refresh SELECT for a
create, one UPDATE or DELETE for a write). ``X-Query-Count`` makes that
visible per response so an accidental extra round trip in a repository
shows up without turning on SQL echo.
"""
import logging
import time
from contextvars import ContextVar

from sqlalchemy import event
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)

# Statements issued by the request currently being served.
query_count_var: ContextVar[int] = ContextVar("query_count", default=0)


def install_query_counter(engine) -> None:
    """
    Count every statement *engine* sends to the database in
    ``query_count_var``.

    ``init_engine`` calls this for each engine it creates, including the
    SQLite engine the test suite installs, so the header is populated
    wherever the repositories run. SQLAlchemy's async sessions propagate
    the request's context into the greenlet that executes the cursor,
    which is why a plain ContextVar is enough here.
    """

    @event.listens_for(engine.sync_engine, "before_cursor_execute")
    def _count_query(conn, cursor, statement, parameters, context, executemany):
        query_count_var.set(query_count_var.get() + 1)


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


class TimingMiddleware:
    """
    Pure ASGI middleware for the blog API's access log and diagnostic
    headers.

    For every HTTP request it resets the statement counter, then on the
    response start adds:

    - ``X-Response-Time-Ms``: time until the response headers were sent.
    - ``X-Query-Count``: statements executed for the request so far.

    Once the app returns (or raises) it logs
    ``METHOD /path -> status (ms, queries)`` on ``app.middleware``. The
    status defaults to 500 when the app fails before starting a response.

    It is written against raw ASGI instead of ``BaseHTTPMiddleware``
    because the latter runs the endpoint in a child task, where counter
    updates would not reach this middleware.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        query_count_var.set(0)
        start = time.perf_counter()
        status_code = 500

        async def send_with_diagnostics(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                message["headers"] = [
                    *message.get("headers", []),
                    (b"x-response-time-ms", str(_elapsed_ms(start)).encode()),
                    (b"x-query-count", str(query_count_var.get()).encode()),
                ]
            await send(message)

        try:
            await self.app(scope, receive, send_with_diagnostics)
        finally:
            logger.info(
                "%s %s -> %d (%.2f ms, %d queries)",
                scope["method"],
                scope["path"],
                status_code,
                _elapsed_ms(start),
                query_count_var.get(),
            )
