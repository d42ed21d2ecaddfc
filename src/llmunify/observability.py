"""Structured logging and tracing setup for processes embedding llmunify.

Library modules only call ``structlog.get_logger`` and
``opentelemetry.trace.get_tracer``; entry points (the CLI, scripts) decide how
that output is rendered and exported by calling the functions below once at
start-up.
"""

import structlog
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from llmunify.config import Settings


def configure_logging(level: str = "INFO", fmt: str = "console") -> None:
    """Configure structlog processors and the minimum level.

    Args:
        level: Standard level name (``DEBUG``, ``INFO``, ...).  Unknown names
            fall back to ``INFO``.
        fmt: ``"json"`` for one JSON object per line, anything else for the
            human-friendly console renderer.
    """
    renderer = (
        structlog.processors.JSONRenderer()
        if fmt.lower() == "json"
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            structlog.stdlib.NAME_TO_LEVEL.get(level.lower(), 20)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_tracing(settings: Settings) -> TracerProvider | None:
    """Export spans over OTLP/HTTP when an endpoint is configured.

    Returns the installed provider, or ``None`` when tracing stays on the
    API's no-op default.
    """
    if not settings.otel_exporter_otlp_endpoint:
        return None

    resource = Resource.create({"service.name": settings.otel_service_name})
    tracer_provider = TracerProvider(resource=resource)
    exporter = OTLPSpanExporter(
        endpoint=f"{settings.otel_exporter_otlp_endpoint.rstrip('/')}/v1/traces",
    )
    tracer_provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(tracer_provider)
    return tracer_provider
