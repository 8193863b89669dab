"""
QuickNotes — Request Logging Middleware
=========================================

What:  One access-log line for every HTTP request.
How:   Measures time around call_next and logs method, path, status,
       duration, and client address to the `quicknotes.access` logger.

    GET /api/notes 200 4.2ms from 127.0.0.1
    PUT /api/notes/3f1c... 404 2.9ms from 127.0.0.1

A request whose handler raised past the exception handlers is logged as
500 before the error propagates. Request bodies are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("quicknotes.access")

# Health checks hit these every few seconds
QUIET_PATHS = frozenset({"/health"})


def level_for_status(status: int) -> int:
    """5xx → ERROR, 4xx → WARNING, everything else → INFO."""
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log for everything outside QUIET_PATHS."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            _log_access(request, 500, started)
            raise

        _log_access(request, response.status_code, started)
        return response


def _log_access(request: Request, status: int, started: float) -> None:
    duration_ms = round((time.perf_counter() - started) * 1000, 2)
    client_ip = request.client.host if request.client else "unknown"
    fields = {
        "method": request.method,
        "path": request.url.path,
        "status": status,
        "duration_ms": duration_ms,
        "client_ip": client_ip,
    }
    logger.log(
        level_for_status(status),
        "%(method)s %(path)s %(status)d %(duration_ms).1fms from %(client_ip)s",
        fields,
        extra=fields,
    )
