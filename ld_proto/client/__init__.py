"""Client and integration adapter for the language detection service."""

from .client import LanguageDetectionClient
from .documents import (
    BatchResult,
    BatchStatus,
    Document,
    DocumentInfo,
    DocumentResult,
    DocumentService,
    LanguageAlternative,
)

__all__ = [
    "BatchResult",
    "BatchStatus",
    "Document",
    "DocumentInfo",
    "DocumentResult",
    "DocumentService",
    "LanguageAlternative",
    "LanguageDetectionClient",
]
