"""Response model for batch language detection."""

from pydantic import BaseModel, Field

from .detect_response import DetectResponse


class BatchDetectResponse(BaseModel):
    results: list[DetectResponse] = Field(
        ..., description="Detection results for each document, in request order"
    )
