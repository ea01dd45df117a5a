"""Models for the outcome of a single language detection."""

from pydantic import BaseModel, Field

UNKNOWN_LANGUAGE = "unknown"


class LanguageAlternative(BaseModel):
    language_code: str = Field(..., min_length=1, description="Candidate language code")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Confidence score")


class Detection(BaseModel):
    language_code: str = Field(..., min_length=1, description="Predicted language code")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Confidence score")
    alternatives: list[LanguageAlternative] = Field(
        default_factory=list, description="Other candidate languages, best first"
    )
