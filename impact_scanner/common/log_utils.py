"""Log record enrichment for ECS structured logging.

Records are tagged with the inbound request (trace id, URL, method, status)
and, while an estimation runs, with the impact backend and usage duration it
was asked for. The fields use ECS names so ``ecs_logging.StdlibFormatter``
nests them: ``trace.id``, ``url.full``, ``http.*`` and ``labels.*``.
"""

import contextvars
import logging
from collections.abc import Iterator
from contextlib import contextmanager

from impact_scanner.common.tracing import ctx_request, ctx_response, ctx_trace_id

ctx_estimation: contextvars.ContextVar[dict | None] = contextvars.ContextVar(
    "estimation", default=None
)


@contextmanager
def estimation_context(backend: str, usage_duration_hours: float) -> Iterator[None]:
    """Label every record logged inside the block with the estimation parameters."""
    token = ctx_estimation.set(
        {"backend": backend, "usage_duration_hours": str(usage_duration_hours)}
    )
    try:
        yield
    finally:
        ctx_estimation.reset(token)


def _http_fields() -> dict:
    http = {}
    request = ctx_request.get()
    response = ctx_response.get()
    if request:
        http["request"] = {"method": request.get("method")}
    if response:
        http["response"] = response
    return http


class ExtraFieldsFilter(logging.Filter):
    """Copies request and estimation context onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        trace_id = ctx_trace_id.get()
        if trace_id:
            record.trace = {"id": trace_id}

        request = ctx_request.get()
        if request:
            record.url = {"full": request.get("url")}

        http = _http_fields()
        if http:
            record.http = http

        labels = ctx_estimation.get()
        if labels:
            record.labels = labels

        return True


class EndpointFilter(logging.Filter):
    """Drops access log lines for one path, e.g. ``/health`` polled by ECS.

    Args:
        path: Endpoint path whose access logs are dropped
    """

    def __init__(self, path: str, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._path = path

    def filter(self, record: logging.LogRecord) -> bool:
        return f" {self._path} " not in record.getMessage()
