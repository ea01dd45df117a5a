"""Initialize the models package."""

from .batch_detect_request import BatchDetectRequest
from .batch_detect_response import BatchDetectResponse
from .detect_request import DetectRequest
from .detect_response import DetectResponse, ProcessingMetadata
from .detection import UNKNOWN_LANGUAGE, Detection, LanguageAlternative
from .language_profile import LanguageProfile

__all__ = [
    "BatchDetectRequest",
    "BatchDetectResponse",
    "DetectRequest",
    "DetectResponse",
    "Detection",
    "LanguageAlternative",
    "LanguageProfile",
    "ProcessingMetadata",
    "UNKNOWN_LANGUAGE",
]
