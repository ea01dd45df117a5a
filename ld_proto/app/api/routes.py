"""Routes module for the HTTP gateway."""

import logging
import time
from typing import Dict

from fastapi import APIRouter, HTTPException, Request, status

from ld_proto.app.config import ServiceInfo
from ld_proto.app.models import (
    BatchDetectRequest,
    BatchDetectResponse,
    DetectRequest,
    DetectResponse,
    ProcessingMetadata,
)
from ld_proto.app.services.detector import WordListDetector, detect_with_metrics
from ld_proto.app.telemetry import trace_method

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get(
    "/",
    summary="Root endpoint",
    response_description="API status",
    status_code=status.HTTP_200_OK,
    tags=["Monitoring"],
)
@trace_method("root")
async def root() -> Dict[str, str]:
    """Root API endpoint.

    Returns:
        A simple status message confirming the API is running.
    """
    return {"status": "ok"}


@router.post(
    "/detect",
    response_model=DetectResponse,
    summary="Detect the language of a document",
    response_description="Predicted language with alternatives",
    status_code=status.HTTP_200_OK,
    tags=["Detection"],
)
@trace_method("detect_language")
async def detect_language(request: DetectRequest, req: Request) -> DetectResponse:
    """Detects the language of a document.

    This is the JSON counterpart of the DetectLanguage RPC and returns the
    same fields.

    Args:
        request: The request body with the text, an optional document_id
            and optional metadata (ignored by the detector).
        req: FastAPI request object to access application state,
            specifically the detector instance.

    Returns:
        DetectResponse: The predicted language, its confidence, the other
        matching languages and processing metadata. Text without words
        yields the "unknown" language with confidence 0.0.

    Raises:
        HTTPException:
            - 503 (Service Unavailable): If the detector is not available.
            - 500 (Internal Server Error): For unexpected errors during detection.
    """
    detector = _get_detector_from_request(req)
    try:
        return _detect_single(detector, request, req.app.state.service_info)
    except Exception as e:
        logger.exception("Unexpected error during detection")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error occurred",
        ) from e


@router.post(
    "/detect/batch",
    response_model=BatchDetectResponse,
    summary="Detect the language of multiple documents",
    response_description="Detection results in request order",
    status_code=status.HTTP_200_OK,
    tags=["Detection"],
)
@trace_method("detect_batch")
async def detect_batch(request: BatchDetectRequest, req: Request) -> BatchDetectResponse:
    """Detect the language of every document in the request."""
    detector = _get_detector_from_request(req)
    try:
        results = [
            _detect_single(detector, document, req.app.state.service_info)
            for document in request.documents
        ]
    except Exception as e:
        logger.exception("Unexpected error during batch detection")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error occurred",
        ) from e

    logger.info("Processed %d documents in batch", len(results))
    return BatchDetectResponse(results=results)


def _get_detector_from_request(req: Request) -> WordListDetector:
    detector = getattr(req.app.state, "detector", None)
    if not detector:
        logger.error("Detector service not available")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Detector service not available",
        )
    return detector


def _detect_single(
    detector: WordListDetector, request: DetectRequest, service_info: ServiceInfo
) -> DetectResponse:
    start = time.perf_counter()
    detection = detect_with_metrics(detector, request.text)
    processing_time_ms = int((time.perf_counter() - start) * 1000)

    return DetectResponse(
        language_code=detection.language_code,
        confidence=detection.confidence,
        alternatives=detection.alternatives,
        document_id=request.document_id,
        metadata=ProcessingMetadata(
            processing_time_ms=processing_time_ms,
            **service_info.model_dump(),
        ),
    )


@router.get(
    "/health",
    summary="Health check endpoint",
    response_description="Service health status",
    status_code=status.HTTP_200_OK,
    tags=["Monitoring"],
)
@trace_method("health_check")
async def health_check() -> Dict[str, str]:
    """Health check endpoint.

    Returns:
        A simple status message confirming the service is healthy.
    """
    return {"status": "healthy"}
