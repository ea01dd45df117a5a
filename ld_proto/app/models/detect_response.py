"""Response model for language detection."""

from pydantic import BaseModel, Field

from .detection import LanguageAlternative


class ProcessingMetadata(BaseModel):
    processing_time_ms: int = Field(..., ge=0, description="Wall-clock detection time")
    service_version: str = Field(default="", description="Version of the service")
    model_version: str = Field(default="", description="Version of the detector")
    provider: str = Field(default="", description="Detector provider")


class DetectResponse(BaseModel):
    language_code: str = Field(..., description="Predicted language code or 'unknown'")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Confidence score")
    alternatives: list[LanguageAlternative] = Field(
        default_factory=list, description="Other candidate languages"
    )
    document_id: str = Field(default="", description="Echo of the request document_id")
    metadata: ProcessingMetadata | None = Field(
        default=None, description="Processing metadata"
    )
