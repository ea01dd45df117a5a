"""Application configuration management."""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, field_validator, model_validator
from pydantic_settings import BaseSettings

from ld_proto.app.models.detection import UNKNOWN_LANGUAGE

DEFAULT_PROFILES_PATH = Path(__file__).parent.parent / "config" / "languages.yaml"


class ServiceInfo(BaseModel):
    """Version and provider strings reported in every detection response."""

    service_version: str
    model_version: str
    provider: str


class Settings(BaseSettings):
    """Application settings managed via Pydantic BaseSettings.

    Attributes:
        API_VERSION: The version of the HTTP gateway API.
        OTEL_ENABLED: Whether OpenTelemetry instrumentation is enabled.
        OTEL_SERVICE_NAME: The service name for OpenTelemetry.
        OTEL_EXPORTER_OTLP_ENDPOINT: The OTLP endpoint for OpenTelemetry.
        OTEL_EXPORTER_OTLP_PROTOCOL: The protocol for OTLP export (grpc/http).
        OTEL_TRACES_SAMPLER_ARG: The sampling rate for traces.
        OTEL_PYTHON_FASTAPI_EXCLUDED_URLS: URLs to exclude from tracing.
        OTLP_SECURE: Whether to use a secure connection for OTLP.
        LOG_LEVEL: The logging level for the application.
        LISTEN_ADDRESS: Address the gRPC server binds, e.g. "[::]:50051".
        MAX_WORKERS: Size of the gRPC server thread pool.
        MAX_MESSAGE_LENGTH: Largest request or response accepted by gRPC, in bytes.
        SHUTDOWN_GRACE_PERIOD: Seconds in-flight RPCs get to finish on shutdown.
        SERVICE_VERSION: Service version reported in processing metadata.
        MODEL_VERSION: Detector version reported in processing metadata.
        PROVIDER: Provider name reported in processing metadata.
        LANGUAGE_PROFILES_PATH: YAML file with the stop-word profiles.
        FALLBACK_LANGUAGE: Language reported when text has words but none match.
        HTTP_ENABLED: Whether to run the HTTP gateway next to the gRPC server.
        SERVER_HOST: The host address for the HTTP gateway.
        SERVER_PORT: The port number for the HTTP gateway.
        PROMETHEUS_MONITORED_PATHS: Gateway path suffixes that record HTTP metrics.
        DETECTOR_TARGET: Address clients use to reach the detection service.
        CLIENT_TIMEOUT: Default client deadline in seconds.
    """

    # API Version
    API_VERSION: str = "v1"

    # OpenTelemetry Configuration
    OTEL_ENABLED: bool = True
    OTEL_SERVICE_NAME: str = "ld-proto"
    OTEL_EXPORTER_OTLP_ENDPOINT: str = "http://localhost:4317"
    OTEL_EXPORTER_OTLP_PROTOCOL: str = "grpc"
    OTEL_TRACES_SAMPLER_ARG: float = 1.0
    OTEL_PYTHON_FASTAPI_EXCLUDED_URLS: str = "health,metrics"
    OTLP_SECURE: bool = False

    # Logging Configuration
    LOG_LEVEL: str = "INFO"

    # gRPC Server Configuration
    LISTEN_ADDRESS: str = "[::]:50051"
    MAX_WORKERS: int = 10
    MAX_MESSAGE_LENGTH: int = 4 * 1024 * 1024
    SHUTDOWN_GRACE_PERIOD: float = 5.0

    # Service Identity
    SERVICE_VERSION: str = "1.0.0"
    MODEL_VERSION: str = "simple-word-based-v1.0"
    PROVIDER: str = "ld_proto_example"

    # Detector Configuration
    LANGUAGE_PROFILES_PATH: str | None = None
    FALLBACK_LANGUAGE: str = "en"

    # HTTP Gateway Configuration
    HTTP_ENABLED: bool = True
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 8000
    PROMETHEUS_MONITORED_PATHS: str = "detect,detect/batch"

    # Client Configuration
    DETECTOR_TARGET: str = "localhost:50051"
    CLIENT_TIMEOUT: float = 5.0

    @model_validator(mode="before")
    @classmethod
    def _strip_inline_comments(cls, data: Any) -> Any:
        if isinstance(data, dict):
            cleaned_data = {}
            for key, value in data.items():
                if isinstance(value, str):
                    cleaned_data[key] = value.split("#")[0].strip()
                else:
                    cleaned_data[key] = value
            return cleaned_data
        return data

    @field_validator("FALLBACK_LANGUAGE")
    @classmethod
    def _validate_fallback_language(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("FALLBACK_LANGUAGE must not be empty")
        if value == UNKNOWN_LANGUAGE:
            raise ValueError(
                f"FALLBACK_LANGUAGE must not be the reserved code '{UNKNOWN_LANGUAGE}'"
            )
        return value

    @property
    def service_info(self) -> ServiceInfo:
        """Version and provider strings for processing metadata."""
        return ServiceInfo(
            service_version=self.SERVICE_VERSION,
            model_version=self.MODEL_VERSION,
            provider=self.PROVIDER,
        )

    @property
    def profiles_path(self) -> Path:
        """Resolve the language profile file, falling back to the packaged one."""
        if self.LANGUAGE_PROFILES_PATH:
            return Path(self.LANGUAGE_PROFILES_PATH)
        return DEFAULT_PROFILES_PATH

    @property
    def grpc_options(self) -> list[tuple[str, int]]:
        """Channel arguments applied to the gRPC server.

        Port sharing is disabled so a listen address already in use is a
        bind error instead of two servers splitting the traffic.
        """
        return [
            ("grpc.so_reuseport", 0),
            ("grpc.max_receive_message_length", self.MAX_MESSAGE_LENGTH),
            ("grpc.max_send_message_length", self.MAX_MESSAGE_LENGTH),
        ]

    @property
    def monitored_paths(self) -> list[str]:
        """Full gateway paths that record Prometheus HTTP metrics."""
        return [
            f"/api/{self.API_VERSION}/{suffix.strip()}"
            for suffix in self.PROMETHEUS_MONITORED_PATHS.split(",")
            if suffix.strip()
        ]

    @property
    def log_level(self) -> int:
        """Convert the string log level from settings to a logging constant.

        Returns:
            The integer value of the logging level (e.g., logging.INFO,
            logging.DEBUG). Defaults to logging.INFO if the configured
            LOG_LEVEL is invalid.
        """
        return getattr(logging, self.LOG_LEVEL.upper(), logging.INFO)

    class Config:
        """Pydantic configuration class for Settings.

        Attributes:
            env_file (str): The name of the environment file to load (e.g., ".env").
            case_sensitive (bool): Whether environment variable names are case-sensitive.
        """

        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Create and cache a Settings instance.

    Returns:
        A cached instance of the Settings class.
    """
    return Settings()


settings = get_settings()
