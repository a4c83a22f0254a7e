"""Observability setup for OpenTelemetry, metrics, and structured logging."""

import logging
from typing import Optional

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest
import structlog

from .config import Settings, settings as default_settings

# Prometheus metrics
REGISTRY = CollectorRegistry()

# Request metrics
API_REQUEST_COUNT = Counter(
    'api_requests_total',
    'Total API requests issued by the client',
    ['method', 'endpoint', 'status_code'],
    registry=REGISTRY
)

API_REQUEST_DURATION = Histogram(
    'api_request_duration_seconds',
    'API request duration in seconds',
    ['method', 'endpoint'],
    registry=REGISTRY
)

# Store metrics
CACHE_HITS = Counter(
    'store_cache_hits_total',
    'List reads served from the local store',
    ['store', 'category'],
    registry=REGISTRY
)

CACHE_MISSES = Counter(
    'store_cache_misses_total',
    'List reads that went to the network',
    ['store', 'category'],
    registry=REGISTRY
)

STALE_RESPONSES = Counter(
    'store_stale_responses_total',
    'Responses discarded because a newer request superseded them',
    ['store', 'category'],
    registry=REGISTRY
)

NOTIFICATIONS = Counter(
    'notifications_total',
    'User-facing notifications emitted',
    ['level'],
    registry=REGISTRY
)


def setup_structured_logging(config: Optional[Settings] = None):
    """Configure structured logging with structlog."""
    config = config or default_settings

    def add_service_name(logger, method_name, event_dict):
        """Add the service name to log events."""
        event_dict.setdefault('service', config.service_name)
        return event_dict

    def add_trace_context(logger, method_name, event_dict):
        """Add trace context to log events."""
        span = trace.get_current_span()
        if span and span.is_recording():
            ctx = span.get_span_context()
            event_dict['trace_id'] = format(ctx.trace_id, '032x')
            event_dict['span_id'] = format(ctx.span_id, '016x')
        return event_dict

    # Configure structlog
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            add_service_name,
            add_trace_context,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.ConsoleRenderer() if config.debug else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, config.log_level)
        ),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def setup_tracing(config: Optional[Settings] = None):
    """Setup OpenTelemetry tracing."""
    config = config or default_settings

    # Only install a provider once; the global provider cannot be replaced
    if not isinstance(trace.get_tracer_provider(), TracerProvider):
        resource = Resource.create({
            "service.name": config.service_name,
            "service.version": "1.0.0",
            "environment": config.environment,
        })
        trace.set_tracer_provider(TracerProvider(resource=resource))

    return trace.get_tracer(__name__)


class MetricsCollector:
    """Collector for client-side metrics."""

    @staticmethod
    def record_request(method: str, endpoint: str, status_code: int, duration: float):
        """Record one completed API request."""
        API_REQUEST_COUNT.labels(method=method, endpoint=endpoint, status_code=str(status_code)).inc()
        API_REQUEST_DURATION.labels(method=method, endpoint=endpoint).observe(duration)

    @staticmethod
    def record_cache_hit(store: str, category: str):
        """Record a list read served from the store."""
        CACHE_HITS.labels(store=store, category=category).inc()

    @staticmethod
    def record_cache_miss(store: str, category: str):
        """Record a list read that needed the network."""
        CACHE_MISSES.labels(store=store, category=category).inc()

    @staticmethod
    def record_stale_response(store: str, category: str):
        """Record a superseded response."""
        STALE_RESPONSES.labels(store=store, category=category).inc()

    @staticmethod
    def record_notification(level: str):
        """Record a user-facing notification."""
        NOTIFICATIONS.labels(level=level).inc()


def get_prometheus_metrics() -> bytes:
    """Get Prometheus metrics in text exposition format."""
    return generate_latest(REGISTRY)


# Global metrics collector instance
metrics_collector = MetricsCollector()


class StructuredLogger:
    """Structured logger with business context."""

    def __init__(self, name_or_logger):
        if isinstance(name_or_logger, str):
            self.logger = structlog.get_logger(name_or_logger)
        else:
            self.logger = name_or_logger

    def info(self, message: str, **kwargs):
        """Log info message with context."""
        self.logger.info(message, **kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message with context."""
        self.logger.warning(message, **kwargs)

    def error(self, message: str, **kwargs):
        """Log error message with context."""
        self.logger.error(message, **kwargs)

    def debug(self, message: str, **kwargs):
        """Log debug message with context."""
        self.logger.debug(message, **kwargs)

    def with_context(self, **kwargs):
        """Add context to logger."""
        return StructuredLogger(self.logger.bind(**kwargs))


def get_logger(name: str) -> StructuredLogger:
    """Get a structured logger instance."""
    return StructuredLogger(name)
