"""Integration adapter mapping detection results onto application documents.

Shows how a downstream service embeds the language detection client: it
turns its own documents into requests, converts responses into local models
and processes batches one document at a time without letting a failed call
stop the rest of the batch.
"""

import logging
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Iterable, Optional

import grpc
from pydantic import BaseModel, Field

from ld_proto.client.client import LanguageDetectionClient

logger = logging.getLogger(__name__)

SERVICE_NAME = "third_party_service"
SERVICE_VERSION = "1.0.0"


class Document(BaseModel):
    id: str = Field(..., description="Application document identifier")
    content: str = Field(..., description="Document text")


class LanguageAlternative(BaseModel):
    language: str
    confidence: float


class DocumentInfo(BaseModel):
    """A document annotated with its detected language."""

    id: str
    content: str
    language: str
    confidence: float
    processed_at: datetime
    alternatives: list[LanguageAlternative] = Field(default_factory=list)
    processing_time: Optional[timedelta] = None
    service_version: str = ""
    model_version: str = ""
    provider: str = ""


class DocumentResult(BaseModel):
    """Outcome of processing one document of a batch.

    Exactly one of ``info`` and ``error`` is set.
    """

    document_id: str
    info: Optional[DocumentInfo] = None
    error: Optional[str] = None
    status_code: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.info is not None


class BatchStatus(str, Enum):
    COMPLETE = "complete"
    PARTIAL = "partial"
    FAILED = "failed"


class BatchResult(BaseModel):
    """Per-document outcomes of a batch, in input order."""

    results: list[DocumentResult] = Field(default_factory=list)

    @property
    def succeeded(self) -> list[DocumentInfo]:
        return [result.info for result in self.results if result.info is not None]

    @property
    def failed(self) -> list[DocumentResult]:
        return [result for result in self.results if not result.ok]

    @property
    def status(self) -> BatchStatus:
        failures = len(self.failed)
        if failures == 0:
            return BatchStatus.COMPLETE
        if failures == len(self.results):
            return BatchStatus.FAILED
        return BatchStatus.PARTIAL


def _describe_error(error: grpc.RpcError) -> tuple[Optional[str], str]:
    if isinstance(error, grpc.Call):
        return error.code().name, error.details() or ""
    return None, str(error)


class DocumentService:
    """Detects the language of application documents through the service."""

    def __init__(self, client: LanguageDetectionClient) -> None:
        self.client = client

    def process_document(
        self, content: str, document_id: str, timeout: Optional[float] = None
    ) -> DocumentInfo:
        """Detect the language of one document.

        Args:
            content: The document text.
            document_id: The document identifier sent as document_id.
            timeout: Optional deadline in seconds for the call.

        Returns:
            DocumentInfo with the detected language and, when the service
            reports it, the processing metadata.

        Raises:
            grpc.RpcError: If the detection call fails.
        """
        response = self.client.detect(
            content,
            document_id=document_id,
            metadata={
                "service": SERVICE_NAME,
                "version": SERVICE_VERSION,
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "content_len": str(len(content)),
            },
            timeout=timeout,
        )

        info = DocumentInfo(
            id=document_id,
            content=content,
            language=response.language_code,
            confidence=response.confidence,
            processed_at=datetime.now(timezone.utc),
            alternatives=[
                LanguageAlternative(language=alt.language_code, confidence=alt.confidence)
                for alt in response.alternatives
            ],
        )
        if response.HasField("metadata"):
            info.processing_time = timedelta(milliseconds=response.metadata.processing_time_ms)
            info.service_version = response.metadata.service_version
            info.model_version = response.metadata.model_version
            info.provider = response.metadata.provider
        return info

    def batch_process_documents(
        self, documents: Iterable[Document], timeout: Optional[float] = None
    ) -> BatchResult:
        """Process documents one after another.

        A failed call is logged and recorded for its document; processing
        continues with the next document.

        Args:
            documents: The documents to process.
            timeout: Optional per-call deadline in seconds.

        Returns:
            BatchResult with one DocumentResult per input document.
        """
        results = []
        for document in documents:
            try:
                info = self.process_document(document.content, document.id, timeout=timeout)
            except grpc.RpcError as e:
                status_code, details = _describe_error(e)
                logger.warning(
                    "Failed to process document %s: %s %s", document.id, status_code, details
                )
                results.append(
                    DocumentResult(document_id=document.id, error=details, status_code=status_code)
                )
                continue
            results.append(DocumentResult(document_id=document.id, info=info))

        batch = BatchResult(results=results)
        logger.info(
            "Processed batch of %d documents: %d succeeded, status %s",
            len(batch.results),
            len(batch.succeeded),
            batch.status.value,
        )
        return batch
