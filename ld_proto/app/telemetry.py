"""OpenTelemetry configuration and utilities."""

import inspect
import logging
import socket
from functools import wraps
from typing import Any, Optional
from urllib.parse import urlparse

import grpc
from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.grpc import server_interceptor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased
from opentelemetry.semconv.resource import ResourceAttributes
from opentelemetry.trace.status import Status, StatusCode

from ld_proto.app.config import settings

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

# Global tracking for telemetry resources
_tracer_provider: Optional[TracerProvider] = None
_span_processors: list[BatchSpanProcessor] = []
_is_setup_complete = False


def _enrich_span_with_request_details(span: trace.Span, scope: dict[str, Any]) -> None:
    """Add gateway request attributes to server spans."""
    if not span or not span.is_recording():
        return
    span.set_attribute("app.service_version", settings.SERVICE_VERSION)
    span.set_attribute("app.model_version", settings.MODEL_VERSION)


def _is_collector_available(host: str, port: int, timeout: float = 0.5) -> bool:
    """Check if the OpenTelemetry collector is available."""
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return True
    except OSError:
        return False


def _console_processor() -> BatchSpanProcessor:
    return BatchSpanProcessor(ConsoleSpanExporter())


def _build_span_processor() -> BatchSpanProcessor:
    endpoint = settings.OTEL_EXPORTER_OTLP_ENDPOINT.strip()
    if not endpoint:
        logger.info("OTLP endpoint not configured. Using console exporter.")
        return _console_processor()

    parsed = urlparse(endpoint if "://" in endpoint else f"http://{endpoint}")
    collector_host = parsed.hostname or "localhost"
    collector_port = parsed.port or 4317

    if not _is_collector_available(collector_host, collector_port):
        logger.warning(
            "OTLP collector not available at %s:%d. Using console exporter.",
            collector_host,
            collector_port,
        )
        return _console_processor()

    logger.info("OTLP collector is available at %s:%d", collector_host, collector_port)
    exporter = OTLPSpanExporter(
        endpoint=endpoint,
        insecure=not settings.OTLP_SECURE,
        timeout=3,
    )
    return BatchSpanProcessor(
        exporter,
        max_export_batch_size=512,
        schedule_delay_millis=5000,
        max_queue_size=2048,
    )


def setup_telemetry(app: FastAPI | None = None) -> None:
    """Set up OpenTelemetry tracing.

    Creates the tracer provider once per process. When a FastAPI gateway is
    given it is instrumented as well; gRPC servers pick up tracing through
    grpc_server_interceptors().

    Args:
        app: Optional HTTP gateway application to instrument.
    """
    global _tracer_provider, _is_setup_complete

    if not settings.OTEL_ENABLED:
        logger.info("OpenTelemetry instrumentation is disabled")
        return

    if not _is_setup_complete:
        existing_provider = trace.get_tracer_provider()
        if hasattr(existing_provider, "add_span_processor"):
            logger.warning(
                "TracerProvider already exists, skipping telemetry setup to avoid conflicts"
            )
            return

        try:
            resource = Resource.create(
                {
                    ResourceAttributes.SERVICE_NAME: settings.OTEL_SERVICE_NAME,
                    ResourceAttributes.SERVICE_VERSION: settings.SERVICE_VERSION,
                }
            )
            _tracer_provider = TracerProvider(
                resource=resource,
                sampler=ParentBased(root=TraceIdRatioBased(settings.OTEL_TRACES_SAMPLER_ARG)),
            )
            trace.set_tracer_provider(_tracer_provider)

            try:
                processor = _build_span_processor()
            except Exception as e:
                logger.warning(
                    "Failed to configure OTLP exporter: %s. Using console exporter.", e
                )
                processor = _console_processor()
            _tracer_provider.add_span_processor(processor)
            _span_processors.append(processor)

            _is_setup_complete = True
            logger.info("OpenTelemetry tracing configured successfully")
        except Exception as e:
            logger.error("Failed to configure OpenTelemetry: %s", str(e))
            logger.exception(e)
            return

    if app is not None:
        logger.info("Instrumenting FastAPI application with OpenTelemetry")
        FastAPIInstrumentor.instrument_app(
            app,
            excluded_urls=settings.OTEL_PYTHON_FASTAPI_EXCLUDED_URLS,
            server_request_hook=_enrich_span_with_request_details,
        )


def grpc_server_interceptors() -> list[grpc.ServerInterceptor]:
    """Return the tracing interceptors to install on a gRPC server."""
    if not settings.OTEL_ENABLED or not _is_setup_complete:
        return []
    return [server_interceptor(tracer_provider=_tracer_provider)]


def shutdown_telemetry() -> None:
    """Properly shutdown OpenTelemetry components to prevent resource leaks."""
    global _tracer_provider, _is_setup_complete

    if not _is_setup_complete:
        return

    logger.info("Shutting down OpenTelemetry components...")
    for processor in _span_processors:
        try:
            processor.shutdown()
        except Exception as e:
            logger.warning("Error shutting down span processor: %s", e)

    _span_processors.clear()
    _tracer_provider = None
    _is_setup_complete = False
    logger.info("OpenTelemetry shutdown completed")


def trace_method(name=None):
    """Decorator adding an OpenTelemetry span around a sync or async callable."""
    def decorator(func):
        span_name = name or func.__name__

        def _start_span():
            return trace.get_tracer(__name__).start_as_current_span(
                span_name, record_exception=False
            )

        def _annotate(span, args, kwargs):
            span.set_attributes(
                {
                    "function.name": func.__name__,
                    "function.args_count": len(args),
                    "function.kwargs_keys": str(list(kwargs.keys())),
                }
            )

        if inspect.iscoroutinefunction(func):
            @wraps(func)
            async def async_wrapper(*args, **kwargs):
                if not settings.OTEL_ENABLED:
                    return await func(*args, **kwargs)
                with _start_span() as span:
                    _annotate(span, args, kwargs)
                    try:
                        result = await func(*args, **kwargs)
                    except Exception as e:
                        span.set_status(Status(StatusCode.ERROR, str(e)))
                        span.record_exception(e)
                        raise
                    span.set_status(Status(StatusCode.OK))
                    return result

            return async_wrapper

        @wraps(func)
        def wrapper(*args, **kwargs):
            if not settings.OTEL_ENABLED:
                return func(*args, **kwargs)
            with _start_span() as span:
                _annotate(span, args, kwargs)
                try:
                    result = func(*args, **kwargs)
                except Exception as e:
                    span.set_status(Status(StatusCode.ERROR, str(e)))
                    span.record_exception(e)
                    raise
                span.set_status(Status(StatusCode.OK))
                return result

        return wrapper
    return decorator
