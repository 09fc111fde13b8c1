from __future__ import annotations

from pydantic import BaseModel, Field


class StoryTranslationRequest(BaseModel):
    text: str = Field(..., description="Story text to translate.")
    source_language: str = Field(
        default="en",
        description="Language code of the story text, or 'auto' to let the provider detect it.",
    )
    target_languages: list[str] = Field(
        ...,
        min_length=1,
        description="Language codes to translate into, in the caller's preferred order.",
    )


class TranslationPayload(BaseModel):
    language: str = Field(..., description="Target language code.")
    language_name: str = Field(..., description="Display name of the target language.")
    translated_text: str = Field(..., description="Translated story text.")
    confidence: float = Field(..., ge=0.1, le=1.0, description="Heuristic quality score.")
    detected_source_language: str | None = Field(
        default=None,
        description="Source language reported by the provider, when available.",
    )


class StoryTranslationResponse(BaseModel):
    translations: list[TranslationPayload] = Field(
        default_factory=list,
        description="Successful translations; failed languages are listed in errors.",
    )
    errors: list[str] = Field(
        default_factory=list,
        description="Per-language failures formatted as '<code>: <detail>'.",
    )


class TextTranslationRequest(BaseModel):
    text: str = Field(..., min_length=1, description="Text to translate.")
    target_language: str = Field(..., description="Language code to translate into.")
    source_language: str | None = Field(
        default=None,
        description="Language code of the text. Omit or pass 'auto' for detection.",
    )


class TextPayload(BaseModel):
    text: str = Field(..., description="Text to inspect.")


class LanguageDetectionResponse(BaseModel):
    language: str = Field(..., description="Detected language code ('en' when unknown).")


class ValidationResponse(BaseModel):
    valid: bool
    errors: list[str] = Field(default_factory=list)


class LanguagePayload(BaseModel):
    code: str
    name: str


class LanguageListResponse(BaseModel):
    languages: list[LanguagePayload] = Field(default_factory=list)


class QuotaResponse(BaseModel):
    used: int = Field(..., description="Characters sent to the provider by this process.")
    limit: int
    remaining: int


class SuggestionRequest(BaseModel):
    text: str = Field(..., description="Story text in the source language.")
    target_language: str = Field(..., description="Language the story will be published in.")


class SuggestionResponse(BaseModel):
    suggestions: list[str] = Field(default_factory=list)
