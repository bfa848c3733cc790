"""
LabRecords Backend — Request ID Middleware
===========================================

What:  Assigns each request a correlation ID and echoes it in `X-Request-ID`.
Why:   Every log line from one request (access log, service logs, error
       handlers) can be tied together, and a client can quote the ID.
How:   A client-supplied X-Request-ID is reused when it is a short token of
       letters, digits, `-` or `_`; anything else (including values that
       could forge log lines) is replaced by a fresh 8-char UUID prefix.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

_SAFE_ID = re.compile(r"[A-Za-z0-9_-]{1,64}")

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def resolve_request_id(supplied: Optional[str]) -> str:
    """The caller's ID when it is safe to log, otherwise a new one."""
    if supplied and _SAFE_ID.fullmatch(supplied):
        return supplied
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
