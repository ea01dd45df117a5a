"""Test configuration and fixtures."""

from typing import Generator, Iterator

import grpc
import pytest
from fastapi.testclient import TestClient

from ld_proto.app.config import Settings
from ld_proto.app.main import create_app
from ld_proto.app.server import create_server
from ld_proto.app.services.config_loader import load_language_profiles
from ld_proto.app.services.detector import WordListDetector
from ld_proto.client import LanguageDetectionClient


@pytest.fixture(autouse=True)
def disable_telemetry(monkeypatch: pytest.MonkeyPatch) -> None:
    """Disable OpenTelemetry for all tests.

    This prevents test runs from generating telemetry data and
    attempting to connect to external services.

    Args:
        monkeypatch: pytest's monkeypatch fixture for modifying values.
    """
    monkeypatch.setenv("OTEL_ENABLED", "false")
    monkeypatch.setenv("OTEL_EXPORTER_OTLP_ENDPOINT", "")
    monkeypatch.setenv("OTEL_TRACES_EXPORTER", "none")

    from ld_proto.app import telemetry
    from ld_proto.app.config import settings

    monkeypatch.setattr(settings, "OTEL_ENABLED", False)

    # Reset telemetry global state to prevent cross-test contamination
    telemetry._tracer_provider = None
    telemetry._span_processors.clear()
    telemetry._is_setup_complete = False


@pytest.fixture
def server_settings() -> Settings:
    """Settings binding the gRPC server to an ephemeral local port."""
    return Settings(
        LISTEN_ADDRESS="localhost:0",
        MAX_WORKERS=4,
        SERVICE_VERSION="9.9.9",
        MODEL_VERSION="test-model",
        PROVIDER="tests",
    )


@pytest.fixture(scope="session")
def detector() -> WordListDetector:
    """Detector built from the packaged language profiles."""
    return WordListDetector(load_language_profiles(), fallback_language="en")


@pytest.fixture
def grpc_port(server_settings: Settings, detector: WordListDetector) -> Iterator[int]:
    """Start an in-process gRPC server and yield its port."""
    server, port = create_server(server_settings, detector)
    server.start()
    yield port
    server.stop(None)


@pytest.fixture
def grpc_client(grpc_port: int) -> Iterator[LanguageDetectionClient]:
    """Client connected to the in-process gRPC server."""
    with LanguageDetectionClient(f"localhost:{grpc_port}", timeout=5.0) as client:
        yield client


@pytest.fixture
def grpc_channel(grpc_port: int) -> Iterator[grpc.Channel]:
    """Raw channel to the in-process gRPC server."""
    with grpc.insecure_channel(f"localhost:{grpc_port}") as channel:
        yield channel


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Create a test client for the HTTP gateway with lifespan setup.

    Yields:
        TestClient: A configured test client for making requests.
    """
    with TestClient(create_app()) as test_client:
        yield test_client
