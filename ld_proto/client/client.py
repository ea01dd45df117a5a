"""gRPC client for the language detection service."""

import logging
from typing import Mapping, Optional

import grpc

from ld_proto.app.config import settings
from ld_proto.pb import language_detection_pb2, language_detection_pb2_grpc

logger = logging.getLogger(__name__)


class LanguageDetectionClient:
    """Synchronous client holding one channel for its whole lifetime.

    Transport failures are raised as ``grpc.RpcError``; the client never
    retries.

    Attributes:
        target: Address of the detection service.
        timeout: Default deadline in seconds applied to every call.
    """

    def __init__(
        self,
        target: Optional[str] = None,
        timeout: Optional[float] = None,
        channel: Optional[grpc.Channel] = None,
    ) -> None:
        self.target = target or settings.DETECTOR_TARGET
        self.timeout = settings.CLIENT_TIMEOUT if timeout is None else timeout
        self.channel = channel or grpc.insecure_channel(self.target)
        self.stub = language_detection_pb2_grpc.LanguageDetectionServiceStub(self.channel)

    def detect(
        self,
        text: str,
        document_id: str = "",
        metadata: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> language_detection_pb2.DetectLanguageResponse:
        """Detect the language of a text.

        Args:
            text: The document content.
            document_id: Identifier echoed back in the response.
            metadata: Free-form request metadata.
            timeout: Deadline in seconds, overriding the client default.

        Returns:
            The DetectLanguageResponse message.

        Raises:
            grpc.RpcError: If the call did not complete, including
                DEADLINE_EXCEEDED when the deadline expires.
        """
        request = language_detection_pb2.DetectLanguageRequest(
            text=text,
            document_id=document_id,
            metadata=dict(metadata or {}),
        )
        return self.stub.DetectLanguage(
            request, timeout=self.timeout if timeout is None else timeout
        )

    def close(self) -> None:
        self.channel.close()

    def __enter__(self) -> "LanguageDetectionClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
