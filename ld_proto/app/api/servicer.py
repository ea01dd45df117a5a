"""gRPC servicer for the language detection service."""

import logging
import time

import grpc
from google.protobuf.message import DecodeError

from ld_proto.app.config import ServiceInfo
from ld_proto.app.models import Detection
from ld_proto.app.services.detector import WordListDetector, detect_with_metrics
from ld_proto.app.telemetry import trace_method
from ld_proto.pb import language_detection_pb2 as pb2
from ld_proto.pb import language_detection_pb2_grpc as pb2_grpc

logger = logging.getLogger(__name__)


def to_proto_response(
    detection: Detection,
    document_id: str,
    processing_time_ms: int,
    service_info: ServiceInfo,
) -> pb2.DetectLanguageResponse:
    """Build the wire response for a detection result."""
    return pb2.DetectLanguageResponse(
        language_code=detection.language_code,
        confidence=detection.confidence,
        alternatives=[
            pb2.LanguageAlternative(
                language_code=alternative.language_code,
                confidence=alternative.confidence,
            )
            for alternative in detection.alternatives
        ],
        document_id=document_id,
        metadata=pb2.ProcessingMetadata(
            processing_time_ms=processing_time_ms,
            service_version=service_info.service_version,
            model_version=service_info.model_version,
            provider=service_info.provider,
        ),
    )


class LanguageDetectionServicer(pb2_grpc.LanguageDetectionServiceServicer):
    """Serves DetectLanguage calls from a word-list detector.

    The servicer holds no per-call state, so a single instance handles all
    calls concurrently on the server's thread pool.
    """

    def __init__(self, detector: WordListDetector, service_info: ServiceInfo) -> None:
        self.detector = detector
        self.service_info = service_info

    @staticmethod
    def _decode_request(payload: bytes, context) -> pb2.DetectLanguageRequest:
        try:
            return pb2.DetectLanguageRequest.FromString(payload)
        except DecodeError as e:
            logger.warning("Rejecting malformed request: %s", e)
            context.abort(grpc.StatusCode.INVALID_ARGUMENT, "Malformed request")

    @trace_method("detect_language")
    def DetectLanguage(self, request, context):
        if isinstance(request, bytes):
            request = self._decode_request(request, context)

        start = time.perf_counter()
        try:
            detection = detect_with_metrics(self.detector, request.text)
        except Exception:
            logger.exception("Unexpected error during detection of %r", request.document_id)
            context.abort(grpc.StatusCode.INTERNAL, "Internal server error occurred")

        processing_time_ms = int((time.perf_counter() - start) * 1000)
        logger.debug(
            "Detected %s (%.2f) for document %r in %dms",
            detection.language_code,
            detection.confidence,
            request.document_id,
            processing_time_ms,
        )
        return to_proto_response(
            detection, request.document_id, processing_time_ms, self.service_info
        )
