"""Example of embedding the detection client in another service."""

import logging
import sys

import grpc

from ld_proto.app.config import settings
from ld_proto.client import BatchResult, Document, DocumentService, LanguageDetectionClient

logger = logging.getLogger(__name__)

SAMPLE_DOCUMENT = ("doc-001", "Hello, this is a test document in English.")
SAMPLE_BATCH = [
    Document(id="doc-002", content="Hola, este es un documento en español."),
    Document(id="doc-003", content="Bonjour, ceci est un document en français."),
    Document(id="doc-004", content="Hallo, dies ist ein Dokument auf Deutsch."),
    Document(id="doc-005", content="Ciao, questo è un documento in italiano."),
]


def run(service: DocumentService) -> BatchResult:
    """Process the sample document and the sample batch.

    Raises:
        grpc.RpcError: If the single document cannot be processed.
    """
    doc_id, content = SAMPLE_DOCUMENT
    info = service.process_document(content, doc_id, timeout=10.0)
    logger.info("Processed Document:")
    logger.info("  ID: %s", info.id)
    logger.info("  Language: %s (%.2f confidence)", info.language, info.confidence)
    logger.info("  Processing Time: %s", info.processing_time)
    logger.info("  Service Version: %s", info.service_version)
    if info.alternatives:
        logger.info("  Alternatives:")
        for i, alt in enumerate(info.alternatives[:3], start=1):
            logger.info("    %d. %s (%.2f)", i, alt.language, alt.confidence)

    logger.info("Processing batch of documents...")
    batch = service.batch_process_documents(SAMPLE_BATCH, timeout=10.0)
    for result in batch.results:
        if result.info is not None:
            logger.info(
                "  %s: %s (%.2f)", result.document_id, result.info.language, result.info.confidence
            )
        else:
            logger.info("  %s: failed (%s)", result.document_id, result.status_code)
    logger.info("Batch status: %s", batch.status.value)
    return batch


def main() -> None:
    logging.basicConfig(level=settings.log_level)
    with LanguageDetectionClient(settings.DETECTOR_TARGET) as client:
        try:
            run(DocumentService(client))
        except grpc.RpcError as e:
            logger.error("Failed to process document: %s", e)
            sys.exit(1)


if __name__ == "__main__":
    main()
