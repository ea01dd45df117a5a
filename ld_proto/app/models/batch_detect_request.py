"""Model for detecting the language of multiple documents in a single request."""

from pydantic import BaseModel, Field

from .detect_request import DetectRequest


class BatchDetectRequest(BaseModel):
    documents: list[DetectRequest] = Field(..., description="Documents to classify")
