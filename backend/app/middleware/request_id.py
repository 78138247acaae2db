"""
ContactBook Backend — Request ID Middleware
=============================================

What:  Assigns a correlation ID to each incoming request and echoes it back.
Why:   Every log line and every error body for one request share the same ID,
       so a client-reported failure can be found in the server logs.
How:   Reads X-Request-ID from the client or generates a short UUID, stores it
       in a ContextVar and request.state, and sets it on the response header.
When:  Outermost custom middleware (runs before logging and route handlers).
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    # 8 chars is enough to correlate within a log window and stays readable
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that assigns a unique ID to each request for tracing.

    Client-provided IDs are honored so a frontend can correlate its own
    events with backend log entries.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or new_request_id()

        # Not reset afterwards: the catch-all 500 handler runs in
        # ServerErrorMiddleware, outside this dispatch, and still needs the ID
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
