"""gRPC server assembly for the language detection service."""

import logging
from concurrent import futures

import grpc
from grpc_health.v1 import health, health_pb2, health_pb2_grpc

from ld_proto.app.api.servicer import LanguageDetectionServicer
from ld_proto.app.config import Settings, settings as default_settings
from ld_proto.app.prometheus import PrometheusServerInterceptor
from ld_proto.app.services.detector import WordListDetector, get_detector
from ld_proto.app.telemetry import grpc_server_interceptors
from ld_proto.pb import language_detection_pb2, language_detection_pb2_grpc

logger = logging.getLogger(__name__)


def create_server(
    settings: Settings | None = None,
    detector: WordListDetector | None = None,
) -> tuple[grpc.Server, int]:
    """Create the gRPC server and bind its listening address.

    The server is returned unstarted.

    Args:
        settings: Settings to use. Defaults to the process settings.
        detector: Detector to serve. Defaults to the cached detector for the
            profiles and fallback language in ``settings``.

    Returns:
        The server and the port it is bound to.

    Raises:
        RuntimeError: If the listening address cannot be bound.
    """
    settings = settings or default_settings
    detector = detector or get_detector(settings.profiles_path, settings.FALLBACK_LANGUAGE)

    server = grpc.server(
        futures.ThreadPoolExecutor(max_workers=settings.MAX_WORKERS),
        interceptors=[*grpc_server_interceptors(), PrometheusServerInterceptor()],
        options=settings.grpc_options,
    )
    language_detection_pb2_grpc.add_raw_LanguageDetectionServiceServicer_to_server(
        LanguageDetectionServicer(detector, settings.service_info), server
    )

    health_servicer = health.HealthServicer()
    health_pb2_grpc.add_HealthServicer_to_server(health_servicer, server)
    health_servicer.set("", health_pb2.HealthCheckResponse.SERVING)
    health_servicer.set(
        language_detection_pb2.SERVICE_NAME, health_pb2.HealthCheckResponse.SERVING
    )

    # Older grpcio versions signal a failed bind by returning port 0.
    port = server.add_insecure_port(settings.LISTEN_ADDRESS)
    if port == 0:
        raise RuntimeError(f"Failed to bind to address {settings.LISTEN_ADDRESS}")

    logger.info("Language detection server bound to %s (port %d)", settings.LISTEN_ADDRESS, port)
    return server, port


def start_server(settings: Settings | None = None) -> grpc.Server:
    """Create and start the gRPC server, exiting the process if it cannot bind."""
    settings = settings or default_settings
    try:
        server, _ = create_server(settings)
    except RuntimeError as e:
        logger.error("Failed to listen on %s: %s", settings.LISTEN_ADDRESS, e)
        raise SystemExit(1) from e

    server.start()
    logger.info("Language Detection Server starting on %s", settings.LISTEN_ADDRESS)
    return server
