"""
Logging and OpenTelemetry tracing for the webhook service.

Spans are always recorded locally; they are shipped to Axiom over OTLP/HTTP
only when ``axiom_token`` and ``axiom_dataset`` are configured.
"""

from typing import Any, Dict, Optional
import functools
import inspect
import logging
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.resources import Resource, SERVICE_NAME, SERVICE_VERSION
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from common.core.config import settings

AXIOM_TRACES_ENDPOINT = "https://api.axiom.co/v1/traces"

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    force=True,
)

_initialized = False
_tracer: Optional[trace.Tracer] = None


def _initialize_telemetry():
    """Set up the tracer provider. Safe to call repeatedly."""
    global _initialized, _tracer

    if _initialized:
        return

    provider = TracerProvider(
        resource=Resource(
            attributes={
                SERVICE_NAME: settings.otel_service_name,
                SERVICE_VERSION: settings.otel_service_version,
            }
        )
    )

    export_to_axiom = bool(settings.axiom_token and settings.axiom_dataset)
    if export_to_axiom:
        provider.add_span_processor(
            BatchSpanProcessor(
                OTLPSpanExporter(
                    endpoint=AXIOM_TRACES_ENDPOINT,
                    headers={
                        "Authorization": f"Bearer {settings.axiom_token}",
                        "X-Axiom-Dataset": settings.axiom_dataset,
                    },
                )
            )
        )

    trace.set_tracer_provider(provider)
    _tracer = trace.get_tracer(settings.otel_service_name)
    _initialized = True

    logging.getLogger(__name__).info(
        "Telemetry initialized", extra={"axiom_export": export_to_axiom}
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance. Ensures telemetry is initialized.
    Use this instead of logging.getLogger() directly.
    """
    _initialize_telemetry()
    return logging.getLogger(name)


def _span_name(func, args) -> str:
    # Methods get their class name prefixed
    if args and hasattr(args[0], func.__name__):
        return f"{args[0].__class__.__name__}.{func.__name__}"
    return func.__name__


def trace_span(func):
    """Wrap a sync or async callable in a span named after it."""

    @functools.wraps(func)
    def sync_wrapper(*args, **kwargs):
        _initialize_telemetry()
        with _tracer.start_as_current_span(_span_name(func, args)):
            return func(*args, **kwargs)

    @functools.wraps(func)
    async def async_wrapper(*args, **kwargs):
        _initialize_telemetry()
        with _tracer.start_as_current_span(_span_name(func, args)):
            return await func(*args, **kwargs)

    if inspect.iscoroutinefunction(func):
        return async_wrapper
    return sync_wrapper


def tag_current_span(attributes: Dict[str, Any]) -> None:
    """Attach attributes to the active span. None values are skipped."""
    span = trace.get_current_span()
    if not span.is_recording():
        return
    for key, value in attributes.items():
        if value is not None:
            span.set_attribute(key, value)


def log_span_event(message: str, attributes: Optional[Dict[str, object]] = None):
    """
    Log a message as an event in the current span.
    This will make the log appear in the trace view in Axiom.
    """
    current_span = trace.get_current_span()
    if current_span.is_recording():
        current_span.add_event(message, attributes=attributes or {})

    get_logger(__name__).info(message, extra=attributes)
