"""httpx event hooks for request tracking, tracing, and logging."""

import logging
import re
import time
import uuid
from typing import Dict, List, Optional

import httpx
from opentelemetry import trace

from .config import Settings

logger = logging.getLogger(__name__)

_STARTED_AT = "travel_client.started_at"


class RequestIDHook:
    """
    Request hook that adds a unique request ID to each outgoing request.

    An ID already present on the request is kept so callers can correlate
    a retry with its original attempt.
    """

    def __init__(self, header_name: str = "X-Request-ID"):
        self.header_name = header_name

    async def __call__(self, request: httpx.Request) -> None:
        if self.header_name not in request.headers:
            request.headers[self.header_name] = str(uuid.uuid4())


class TraceContextHook:
    """
    Request hook that propagates W3C Trace Context headers.

    Uses the active OpenTelemetry span when one is recording, otherwise
    starts a fresh trace id for the request.

    https://www.w3.org/TR/trace-context/
    """

    traceparent_pattern = re.compile(
        r"^([0-9a-f]{2})-([0-9a-f]{32})-([0-9a-f]{16})-([0-9a-f]{2})$"
    )

    def _current_ids(self) -> Optional[Dict[str, str]]:
        span = trace.get_current_span()
        ctx = span.get_span_context() if span else None
        if not ctx or not ctx.is_valid:
            return None
        return {
            "trace_id": format(ctx.trace_id, "032x"),
            "span_id": format(ctx.span_id, "016x"),
            "flags": format(int(ctx.trace_flags), "02x"),
        }

    async def __call__(self, request: httpx.Request) -> None:
        existing = request.headers.get("traceparent")
        if existing and self.traceparent_pattern.match(existing):
            return

        ids = self._current_ids() or {
            "trace_id": uuid.uuid4().hex,
            "span_id": uuid.uuid4().hex[:16],
            "flags": "01",
        }
        request.headers["traceparent"] = f"00-{ids['trace_id']}-{ids['span_id']}-{ids['flags']}"


class LoggingHook:
    """
    Request and response hooks that log API traffic.

    Logs request and response information including timing, status codes,
    and correlation IDs for debugging and monitoring.
    """

    def __init__(self, log_request_body: bool = False, skip_paths: Optional[List[str]] = None):
        self.log_request_body = log_request_body
        self.skip_paths = skip_paths or []

    def _should_log(self, path: str) -> bool:
        """Check if request should be logged."""
        return not any(path.endswith(skip) for skip in self.skip_paths)

    async def on_request(self, request: httpx.Request) -> None:
        request.extensions[_STARTED_AT] = time.perf_counter()
        if not self._should_log(request.url.path):
            return

        log_data = {
            "event": "request_started",
            "request_id": request.headers.get("X-Request-ID", "unknown"),
            "method": request.method,
            "url": str(request.url),
            "path": request.url.path,
        }
        if self.log_request_body and request.method in ["POST", "PUT", "PATCH"] and request.content:
            log_data["request_body"] = request.content.decode("utf-8", errors="replace")[:1000]

        logger.debug("API request started", extra=log_data)

    async def on_response(self, response: httpx.Response) -> None:
        request = response.request
        if not self._should_log(request.url.path):
            return

        started_at = request.extensions.get(_STARTED_AT)
        duration_ms = round((time.perf_counter() - started_at) * 1000, 2) if started_at else None

        log_data = {
            "event": "request_completed",
            "request_id": request.headers.get("X-Request-ID", "unknown"),
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
        }

        # Log at appropriate level based on status code
        if response.status_code >= 500:
            logger.error("API request completed with server error", extra=log_data)
        elif response.status_code >= 400:
            logger.warning("API request completed with client error", extra=log_data)
        else:
            logger.info("API request completed successfully", extra=log_data)


def build_event_hooks(config: Settings, enable_logging: bool = True) -> Dict[str, list]:
    """
    Build the httpx event hook configuration.

    Args:
        config: Client settings
        enable_logging: Whether to log request/response traffic

    Returns:
        Mapping suitable for ``httpx.AsyncClient(event_hooks=...)``
    """
    request_hooks = [RequestIDHook(), TraceContextHook()]
    response_hooks = []

    if enable_logging:
        # Only log request bodies in development
        logging_hook = LoggingHook(log_request_body=config.debug and not config.is_production)
        request_hooks.append(logging_hook.on_request)
        response_hooks.append(logging_hook.on_response)

    return {"request": request_hooks, "response": response_hooks}
