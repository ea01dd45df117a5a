"""Tests for Prometheus metrics functionality."""

import asyncio
from typing import Any, MutableMapping
from unittest.mock import Mock

import grpc
import pytest
from fastapi import FastAPI
from prometheus_client import CONTENT_TYPE_LATEST, REGISTRY

from ld_proto.app.prometheus import (
    PrometheusMiddleware,
    PrometheusServerInterceptor,
    metrics_endpoint,
    setup_prometheus,
    track_detected_language,
)
from ld_proto.client import LanguageDetectionClient

METHOD = "/ld_proto.LanguageDetectionService/DetectLanguage"


def _sample(name: str, labels: dict[str, str]) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


def _handler(behavior) -> grpc.RpcMethodHandler:
    return grpc.unary_unary_rpc_method_handler(behavior)


def test_track_detected_language() -> None:
    before = _sample("ld_languages_detected_total", {"language_code": "xx"})
    track_detected_language("xx")
    track_detected_language("xx")
    assert _sample("ld_languages_detected_total", {"language_code": "xx"}) == before + 2


def test_interceptor_records_successful_call() -> None:
    labels = {"grpc_method": "/test/Ok", "grpc_code": "OK"}
    before = _sample("grpc_server_handled_total", labels)
    details = Mock(method="/test/Ok")
    context = Mock(spec=grpc.ServicerContext)
    context.code.return_value = None

    handler = PrometheusServerInterceptor().intercept_service(
        lambda _: _handler(lambda request, ctx: "response"), details
    )

    assert handler.unary_unary("request", context) == "response"
    assert _sample("grpc_server_handled_total", labels) == before + 1
    assert _sample("grpc_server_active_requests", {"grpc_method": "/test/Ok"}) == 0


def test_interceptor_records_failed_call() -> None:
    labels = {"grpc_method": "/test/Fail", "grpc_code": "INTERNAL"}
    before = _sample("grpc_server_handled_total", labels)
    context = Mock(spec=grpc.ServicerContext)
    context.code.return_value = grpc.StatusCode.INTERNAL

    def failing(request, ctx):
        raise RuntimeError("boom")

    handler = PrometheusServerInterceptor().intercept_service(
        lambda _: _handler(failing), Mock(method="/test/Fail")
    )

    with pytest.raises(RuntimeError, match="boom"):
        handler.unary_unary("request", context)
    assert _sample("grpc_server_handled_total", labels) == before + 1


def test_interceptor_passes_through_unknown_methods() -> None:
    assert PrometheusServerInterceptor().intercept_service(lambda _: None, Mock()) is None


def test_rpc_metrics_recorded_by_running_server(grpc_client: LanguageDetectionClient) -> None:
    labels = {"grpc_method": METHOD, "grpc_code": "OK"}
    before = _sample("grpc_server_handled_total", labels)

    grpc_client.detect("the end")
    grpc_client.detect("")

    assert _sample("grpc_server_handled_total", labels) == before + 2
    assert _sample("grpc_server_handling_seconds_count", {"grpc_method": METHOD}) >= 2


def test_http_middleware_skips_non_monitored_paths() -> None:
    calls = []

    async def app(scope, receive, send):
        calls.append(scope["path"])

    middleware = PrometheusMiddleware(app)
    labels = {"method": "GET", "endpoint": "/api/v1/health", "status_code": "200"}
    before = _sample("http_requests_total", labels)

    asyncio.run(middleware({"type": "http", "path": "/api/v1/health", "method": "GET"}, None, None))

    assert calls == ["/api/v1/health"]
    assert _sample("http_requests_total", labels) == before


def test_http_middleware_exception_handling() -> None:
    async def mock_receive() -> MutableMapping[str, Any]:
        return {"type": "http.request", "body": b""}

    async def mock_send(message: MutableMapping[str, Any]) -> None:
        pass

    async def failing_app(scope, receive, send) -> None:
        raise ValueError("Test exception")

    middleware = PrometheusMiddleware(failing_app)
    labels = {"method": "POST", "endpoint": "/api/v1/detect", "status_code": "500"}
    before = _sample("http_errors_total", labels)
    scope = {"type": "http", "path": "/api/v1/detect", "method": "POST"}

    with pytest.raises(ValueError, match="Test exception"):
        asyncio.run(middleware(scope, mock_receive, mock_send))
    assert _sample("http_errors_total", labels) == before + 1


def test_metrics_endpoint_function() -> None:
    endpoint_func = metrics_endpoint()
    assert callable(endpoint_func)

    response = asyncio.run(endpoint_func(Mock()))
    assert response.media_type == CONTENT_TYPE_LATEST


def test_setup_prometheus_with_app() -> None:
    app = FastAPI()
    initial_middleware_count = len(app.user_middleware)

    setup_prometheus(app)

    assert len(app.user_middleware) == initial_middleware_count + 1
    metrics_routes = [r for r in app.routes if getattr(r, "path", "") == "/api/v1/metrics"]
    assert len(metrics_routes) == 1
