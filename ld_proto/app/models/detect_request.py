"""Request model for detecting the language of a document."""

from pydantic import BaseModel, Field


class DetectRequest(BaseModel):
    text: str = Field(..., description="The document content to classify")
    document_id: str = Field(default="", description="Identifier echoed back in the response")
    metadata: dict[str, str] = Field(
        default_factory=dict, description="Caller metadata, not interpreted by the service"
    )
