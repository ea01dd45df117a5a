#!/usr/bin/env python
"""Entry point for running the language detection service."""

import logging

import uvicorn

from ld_proto.app import telemetry
from ld_proto.app.config import settings
from ld_proto.app.main import create_app
from ld_proto.app.server import start_server

logger = logging.getLogger(__name__)


def main() -> None:
    """Run the gRPC server, with the HTTP gateway in the foreground when enabled."""
    logging.basicConfig(level=settings.log_level)
    telemetry.setup_telemetry()

    server = start_server(settings)
    try:
        if settings.HTTP_ENABLED:
            uvicorn.run(
                create_app(),
                host=settings.SERVER_HOST,
                port=settings.SERVER_PORT,
                log_level=settings.LOG_LEVEL.lower(),
            )
        else:
            server.wait_for_termination()
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    finally:
        logger.info("Stopping gRPC server")
        server.stop(settings.SHUTDOWN_GRACE_PERIOD).wait()
        telemetry.shutdown_telemetry()


if __name__ == "__main__":
    main()
