"""
LabRecords Backend — Request Logging Middleware
================================================

What:  One access-log line per API request with status and duration.

Line format:
    GET /api/analisis?estado=completado 200 4.2ms [a1b2c3d4] from 10.0.0.7

The query string is kept because it carries the list filters (`estado`,
`laboratorio`). Request bodies are never logged: user e-mails, ages and lab
observations are personal data.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import request_id_var

logger = logging.getLogger("labrecords.access")

# Probes and API docs
_QUIET_PATHS = frozenset({"/health", "/docs", "/redoc", "/openapi.json"})


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in _QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        target = request.url.path
        if request.url.query:
            target = f"{target}?{request.url.query}"
        rid = request_id_var.get()

        logger.log(
            level_for_status(response.status_code),
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            target,
            response.status_code,
            elapsed_ms,
            rid,
            request.client.host if request.client else "unknown",
            extra={"request_id": rid, "status": response.status_code},
        )
        return response
