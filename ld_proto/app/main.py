"""HTTP gateway application for the language detection service."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from ld_proto.app import telemetry
from ld_proto.app.api.routes import router
from ld_proto.app.config import settings
from ld_proto.app.prometheus import setup_prometheus
from ld_proto.app.services.detector import get_detector

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifespan events."""
    await startup_event(app)
    yield
    await shutdown_event(app)


async def startup_event(app: FastAPI) -> None:
    """Perform startup activities."""
    logger.info("Gateway startup")

    app.state.service_info = settings.service_info
    try:
        logger.info("Initializing detector...")
        app.state.detector = get_detector()
        logger.info("Detector initialization complete")
    except Exception as e:
        logger.error("Failed to initialize detector: %s", str(e))
        raise

    logger.info("Gateway startup complete")


async def shutdown_event(app: FastAPI) -> None:
    """Perform shutdown activities."""
    logger.info("Gateway shutdown")


def create_app() -> FastAPI:
    """Create and configure the FastAPI gateway application.

    Returns:
        FastAPI: The configured FastAPI application instance.
    """
    app = FastAPI(
        title=f"Language Detection API {settings.API_VERSION}",
        version=settings.SERVICE_VERSION,
        docs_url=f"/api/{settings.API_VERSION}/docs",
        redoc_url=f"/api/{settings.API_VERSION}/redoc",
        openapi_url=f"/api/{settings.API_VERSION}/openapi.json",
        lifespan=lifespan,
    )

    app.include_router(router, prefix=f"/api/{settings.API_VERSION}")
    setup_prometheus(app)
    telemetry.setup_telemetry(app)

    return app
