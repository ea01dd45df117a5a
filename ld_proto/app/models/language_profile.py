"""Model describing the stop-word profile of one language."""

from pydantic import BaseModel, Field, field_validator


class LanguageProfile(BaseModel):
    code: str = Field(..., min_length=1, description="Language code reported by the detector")
    name: str = Field(default="", description="Human readable language name")
    stop_words: list[str] = Field(..., description="Lower-case stop-words for the language")

    @field_validator("stop_words")
    @classmethod
    def _normalize_stop_words(cls, value: list[str]) -> list[str]:
        # Keep first occurrence so repeated entries cannot inflate a score.
        return list(dict.fromkeys(word.strip().lower() for word in value if word.strip()))
