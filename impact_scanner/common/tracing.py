"""Request tracing for the HTTP API.

Inbound requests may carry a trace id header (``x-cdp-request-id`` on the CDP
platform, ``x-request-id`` elsewhere). The middleware stores it in a context
variable for the duration of the request so log records can be correlated,
and echoes it back on the response.
"""

import contextvars
from logging import getLogger

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = getLogger(__name__)

# Checked in order; the first header present wins
TRACE_HEADERS = ("x-cdp-request-id", "x-request-id")
RESPONSE_TRACE_HEADER = "x-request-id"

ctx_trace_id: contextvars.ContextVar[str] = contextvars.ContextVar("trace_id", default="")
ctx_request: contextvars.ContextVar[dict | None] = contextvars.ContextVar("request", default=None)
ctx_response: contextvars.ContextVar[dict | None] = contextvars.ContextVar(
    "response", default=None
)


def extract_trace_id(request: Request) -> str:
    for header in TRACE_HEADERS:
        value = request.headers.get(header)
        if value:
            return value
    return ""


class TraceIdMiddleware(BaseHTTPMiddleware):
    """Propagates the inbound trace id to logs and to the response."""

    async def dispatch(self, request: Request, call_next):
        trace_id = extract_trace_id(request)
        ctx_trace_id.set(trace_id)
        ctx_request.set({"url": str(request.url), "method": request.method})

        response = await call_next(request)
        ctx_response.set({"status_code": response.status_code})
        if trace_id:
            response.headers[RESPONSE_TRACE_HEADER] = trace_id
        return response
