"""Observability setup for s3-tools.

Logs go to stderr so command output on stdout (``s3-tools ls``) stays
machine readable. Every S3 round trip runs inside one ``s3.command`` span.
"""

import logging
import sys
from contextlib import contextmanager
from typing import Any, Iterator

import structlog
from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

from .config import settings

COMMAND_SPAN = "s3.command"


def setup_tracing() -> None:
    """Set up OpenTelemetry tracing."""
    if not settings.otel_enabled:
        return

    resource = Resource.create({"service.name": settings.otel_service_name})
    provider = TracerProvider(resource=resource)

    processor = BatchSpanProcessor(ConsoleSpanExporter())
    provider.add_span_processor(processor)

    trace.set_tracer_provider(provider)


def select_renderer(log_format: str) -> Any:
    """Return the final structlog processor for ``json`` or ``console`` output."""
    if log_format.lower() == "console":
        return structlog.dev.ConsoleRenderer(colors=False)
    return structlog.processors.JSONRenderer()


def setup_logging() -> None:
    """Set up structured logging with structlog."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, settings.log_level.upper()),
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            select_renderer(settings.log_format),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    """Get a logger instance."""
    return structlog.get_logger(name)


def get_tracer(name: str) -> trace.Tracer:
    """Get a tracer; a no-op tracer unless tracing is enabled."""
    return trace.get_tracer(name)


@contextmanager
def command_span(tracer: trace.Tracer, method: str, path: str) -> Iterator[Any]:
    """Open the span for one S3 command.

    The HTTP method and bucket/key path are set as attributes and bound to
    the structlog context, so log events inside the span carry them.
    """
    with tracer.start_as_current_span(COMMAND_SPAN) as span:
        span.set_attribute("http.method", method)
        span.set_attribute("s3.path", path)
        with structlog.contextvars.bound_contextvars(method=method, path=path):
            yield span


# Initialize on import
setup_logging()
setup_tracing()
