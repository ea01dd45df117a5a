"""Prometheus metrics for the gRPC server and the HTTP gateway."""

import logging
import time
from typing import Callable

import grpc
from fastapi import FastAPI
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    REGISTRY,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)
from starlette.responses import Response

from ld_proto.app.config import settings

logger = logging.getLogger(__name__)

# gRPC metrics
RPC_HANDLED = Counter(
    "grpc_server_handled_total",
    "Total count of RPCs completed on the server",
    ["grpc_method", "grpc_code"],
)
RPC_LATENCY = Histogram(
    "grpc_server_handling_seconds",
    "RPC handling latency in seconds",
    ["grpc_method"],
)
RPC_ACTIVE = Gauge(
    "grpc_server_active_requests",
    "Number of RPCs currently being handled",
    ["grpc_method"],
)

# HTTP gateway metrics
REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total count of HTTP requests",
    ["method", "endpoint", "status_code"],
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint"],
)
ERROR_COUNT = Counter(
    "http_errors_total",
    "Total count of HTTP errors",
    ["method", "endpoint", "status_code"],
)

LANGUAGES_DETECTED = Counter(
    "ld_languages_detected_total",
    "Total count of detections by primary language",
    ["language_code"],
)


class PrometheusServerInterceptor(grpc.ServerInterceptor):
    """Server interceptor recording count, latency and in-flight unary RPCs."""

    def intercept_service(self, continuation, handler_call_details):
        handler = continuation(handler_call_details)
        if handler is None or handler.unary_unary is None:
            return handler

        method = handler_call_details.method
        behavior = handler.unary_unary

        def observed(request, context):
            RPC_ACTIVE.labels(grpc_method=method).inc()
            start = time.perf_counter()
            code = grpc.StatusCode.OK
            try:
                response = behavior(request, context)
                code = context.code() or grpc.StatusCode.OK
                return response
            except Exception:
                code = context.code() or grpc.StatusCode.UNKNOWN
                raise
            finally:
                RPC_LATENCY.labels(grpc_method=method).observe(time.perf_counter() - start)
                RPC_HANDLED.labels(grpc_method=method, grpc_code=code.name).inc()
                RPC_ACTIVE.labels(grpc_method=method).dec()

        return grpc.unary_unary_rpc_method_handler(
            observed,
            request_deserializer=handler.request_deserializer,
            response_serializer=handler.response_serializer,
        )


class PrometheusMiddleware:
    """Middleware for collecting Prometheus metrics on HTTP requests."""

    def __init__(self, app: FastAPI):
        self.app = app
        logger.info("Prometheus middleware initialized")

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            return await self.app(scope, receive, send)

        path = scope["path"]
        method = scope["method"]

        if path not in settings.monitored_paths:
            logger.debug("Skipping metrics collection for non-monitored path: %s", path)
            return await self.app(scope, receive, send)

        async def send_wrapper(message):
            if message["type"] == "http.response.start":
                status_code = message["status"]
                REQUEST_COUNT.labels(
                    method=method, endpoint=path, status_code=status_code
                ).inc()
                if status_code >= 400:
                    ERROR_COUNT.labels(
                        method=method, endpoint=path, status_code=status_code
                    ).inc()
            await send(message)

        start = time.perf_counter()
        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as e:
            ERROR_COUNT.labels(method=method, endpoint=path, status_code=500).inc()
            logger.exception("Error in request: %s", str(e))
            raise
        finally:
            REQUEST_LATENCY.labels(method=method, endpoint=path).observe(
                time.perf_counter() - start
            )


def track_detected_language(language_code: str) -> None:
    """Increment the counter for a detected primary language.

    Args:
        language_code: The language code returned to the caller
    """
    LANGUAGES_DETECTED.labels(language_code=language_code).inc()


def metrics_endpoint() -> Callable:
    """Create metrics endpoint handler.

    Returns:
        Callable: FastAPI endpoint handler function
    """
    async def metrics(request):
        return Response(
            content=generate_latest(REGISTRY),
            media_type=CONTENT_TYPE_LATEST
        )
    return metrics


def setup_prometheus(app: FastAPI) -> None:
    """Set up Prometheus metrics for FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_middleware(PrometheusMiddleware)
    app.add_route(f"/api/{settings.API_VERSION}/metrics", metrics_endpoint())
    logger.info(
        "Prometheus metrics setup complete. Monitoring paths: %s",
        ", ".join(settings.monitored_paths),
    )
