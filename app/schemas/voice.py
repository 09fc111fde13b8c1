from __future__ import annotations

from pydantic import BaseModel, Field


class TranscriptAlternativePayload(BaseModel):
    text: str
    confidence: float


class TranscriptionResponse(BaseModel):
    text: str = Field(..., description="Best transcript for the uploaded audio.")
    confidence: float = Field(default=0.0, description="Provider confidence for the transcript.")
    language: str = Field(..., description="Locale the audio was recognised in.")
    alternatives: list[TranscriptAlternativePayload] = Field(default_factory=list)
    estimated_processing_seconds: float = Field(
        default=0.0, description="Rough server-side processing estimate for an upload of this size."
    )


class SpeechLanguagesResponse(BaseModel):
    languages: list[str]
