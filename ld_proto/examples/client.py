"""Example client sending one greeting per supported language."""

import logging
from datetime import datetime, timezone

import grpc

from ld_proto.app.config import settings
from ld_proto.client import LanguageDetectionClient

logger = logging.getLogger(__name__)

GREETINGS = [
    ("Hello, world!", "en"),
    ("Hola, mundo!", "es"),
    ("Bonjour le monde!", "fr"),
    ("Hallo Welt!", "de"),
    ("Ciao mondo!", "it"),
]
MAX_ALTERNATIVES_SHOWN = 3


def run(client: LanguageDetectionClient) -> int:
    """Send every greeting and log the results.

    Returns:
        The number of calls that failed.
    """
    failures = 0
    for text, expected in GREETINGS:
        now = datetime.now(timezone.utc)
        try:
            response = client.detect(
                text,
                document_id=f"example-doc-{now:%Y%m%d-%H%M%S}",
                metadata={"source": "example_client", "timestamp": now.isoformat()},
            )
        except grpc.RpcError as e:
            logger.error("Language detection failed for '%s': %s", text, e)
            failures += 1
            continue

        logger.info("Text: '%s' (expected %s)", text, expected)
        logger.info(
            "Detected language: %s (confidence: %.2f)",
            response.language_code,
            response.confidence,
        )
        logger.info("Document ID: %s", response.document_id)
        if response.HasField("metadata"):
            logger.info("Processing time: %dms", response.metadata.processing_time_ms)
            logger.info("Service version: %s", response.metadata.service_version)
        if response.alternatives:
            logger.info("Alternatives:")
            for i, alt in enumerate(response.alternatives[:MAX_ALTERNATIVES_SHOWN], start=1):
                logger.info("  %d. %s (%.2f)", i, alt.language_code, alt.confidence)
        logger.info("---")
    return failures


def main() -> None:
    logging.basicConfig(level=settings.log_level)
    with LanguageDetectionClient(settings.DETECTOR_TARGET, timeout=5.0) as client:
        run(client)


if __name__ == "__main__":
    main()
