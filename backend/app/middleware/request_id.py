"""
PlotRegistry Backend — Request ID Middleware
============================================

What:  Tags each request with an ID, echoed in the X-Request-ID response
       header and in every error body.
How:   A client-supplied X-Request-ID is reused (cut to MAX_REQUEST_ID_LENGTH);
       otherwise a short random hex ID is generated. The ID lives in a
       ContextVar so loggers and exception handlers can read it.
When:  Outermost middleware.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

MAX_REQUEST_ID_LENGTH = 64

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def resolve_request_id(header_value: str | None) -> str:
    supplied = (header_value or "").strip()
    if supplied:
        return supplied[:MAX_REQUEST_ID_LENGTH]
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get("X-Request-ID"))
        request_id_var.set(rid)

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
