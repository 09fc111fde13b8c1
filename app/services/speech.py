from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Final

from app.integrations.google_speech import GoogleSpeechTranscriber, SpeechRecognitionError
from app.services.languages import SPEECH_LOCALES, speech_locale

logger = logging.getLogger(__name__)

MIN_AUDIO_BYTES: Final[int] = 1000
MAX_AUDIO_BYTES: Final[int] = 100 * 1024 * 1024
MAX_ALTERNATIVE_LANGUAGES: Final[int] = 3


@dataclass(slots=True)
class TranscriptAlternative:
    text: str
    confidence: float


@dataclass(slots=True)
class SpeechTranscript:
    text: str
    confidence: float
    language: str
    alternatives: list[TranscriptAlternative] = field(default_factory=list)


def validate_audio_format(audio: bytes) -> bool:
    """Accept payloads large enough to hold speech and below the upload ceiling."""
    if not audio:
        return False
    return MIN_AUDIO_BYTES <= len(audio) <= MAX_AUDIO_BYTES


def estimate_processing_time(size_in_bytes: int) -> float:
    """Rough processing estimate in seconds, assuming ~2 MB per minute of audio."""
    size_in_mb = size_in_bytes / (1024 * 1024)
    duration_minutes = size_in_mb / 2
    processing_seconds = duration_minutes * 0.15 * 60
    return max(5.0, min(300.0, processing_seconds))


def alternative_languages(primary: str) -> list[str]:
    return [
        locale for locale in SPEECH_LOCALES.values() if locale != primary
    ][:MAX_ALTERNATIVE_LANGUAGES]


class SpeechToTextService:
    """Coordinate server-side transcription of recorded craft stories."""

    def __init__(self, transcriber: GoogleSpeechTranscriber | None) -> None:
        self._transcriber = transcriber

    @property
    def is_configured(self) -> bool:
        return self._transcriber is not None

    def supported_languages(self) -> list[str]:
        return list(SPEECH_LOCALES)

    async def transcribe_audio(
        self,
        audio: bytes,
        *,
        content_type: str,
        language: str = "en",
    ) -> SpeechTranscript:
        if not audio:
            raise ValueError("Audio payload is empty.")
        if not validate_audio_format(audio):
            raise ValueError("Invalid audio format or file too large.")
        if not self._transcriber:
            raise RuntimeError("Server speech recognition is not configured.")

        locale = speech_locale(language)
        logger.info("Starting speech-to-text conversion for language: %s", locale)
        try:
            result = await self._transcriber.transcribe(
                audio,
                content_type or "audio/webm",
                language=locale,
                alternative_languages=alternative_languages(locale),
            )
        except SpeechRecognitionError as exc:
            raise ValueError(f"Speech recognition failed: {exc}") from exc

        logger.info("Speech-to-text conversion successful. Confidence: %s", result.confidence)
        return SpeechTranscript(
            text=result.text,
            confidence=result.confidence,
            language=locale,
            alternatives=[
                TranscriptAlternative(text=alt.text, confidence=alt.confidence)
                for alt in result.alternatives
            ],
        )
