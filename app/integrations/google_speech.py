from __future__ import annotations

import base64
import logging
from dataclasses import dataclass, field
from typing import Any, Callable

import httpx

from app.core.config import AppSettings


logger = logging.getLogger(__name__)

# Encoding presets keyed by the Google Speech encoding enum.
AUDIO_ENCODING_CONFIG: dict[str, dict[str, int | str]] = {
    "WEBM_OPUS": {"encoding": "WEBM_OPUS", "sampleRateHertz": 48000, "audioChannelCount": 1},
    "LINEAR16": {"encoding": "LINEAR16", "sampleRateHertz": 16000, "audioChannelCount": 1},
    "MP3": {"encoding": "MP3", "sampleRateHertz": 44100, "audioChannelCount": 1},
}

_CONTENT_TYPE_ENCODINGS: dict[str, str] = {
    "audio/webm": "WEBM_OPUS",
    "audio/ogg": "WEBM_OPUS",
    "audio/wav": "LINEAR16",
    "audio/x-wav": "LINEAR16",
    "audio/wave": "LINEAR16",
    "audio/mpeg": "MP3",
    "audio/mp3": "MP3",
}


class SpeechRecognitionError(RuntimeError):
    """Raised when Google Speech-to-Text transcription fails."""


@dataclass(slots=True)
class RecognitionAlternative:
    text: str
    confidence: float


@dataclass(slots=True)
class RecognitionResult:
    text: str
    confidence: float
    alternatives: list[RecognitionAlternative] = field(default_factory=list)


def encoding_for_content_type(content_type: str | None) -> dict[str, int | str]:
    """Return the encoding preset for an uploaded audio content type."""
    base_type = (content_type or "audio/webm").split(";")[0].strip().lower()
    return AUDIO_ENCODING_CONFIG[_CONTENT_TYPE_ENCODINGS.get(base_type, "WEBM_OPUS")]


class GoogleSpeechTranscriber:
    """Thin wrapper around the Google Speech-to-Text v1 REST API for short-form audio."""

    def __init__(
        self,
        api_key: str,
        *,
        endpoint: str = "https://speech.googleapis.com/v1/speech:recognize",
        client_factory: Callable[[], httpx.AsyncClient] | None = None,
    ) -> None:
        if not api_key:
            raise ValueError("Google Speech credentials are not configured.")

        self._api_key = api_key
        self._endpoint = endpoint.rstrip("/")
        self._client_factory = client_factory or (
            lambda: httpx.AsyncClient(timeout=httpx.Timeout(30.0))
        )

    @classmethod
    def from_settings(cls, settings: AppSettings) -> GoogleSpeechTranscriber:
        key = settings.speech_api_key
        if not key:
            raise ValueError("Google Speech credentials are not configured.")
        return cls(key.get_secret_value(), endpoint=settings.google_speech_endpoint)

    async def transcribe(
        self,
        audio: bytes,
        content_type: str,
        *,
        language: str = "en-US",
        alternative_languages: list[str] | None = None,
        enable_automatic_punctuation: bool = True,
        enable_word_time_offsets: bool = False,
    ) -> RecognitionResult:
        """Send audio bytes to Google Speech and return the best transcript."""
        if not audio:
            raise ValueError("Audio payload is empty.")

        config: dict[str, Any] = dict(encoding_for_content_type(content_type))
        config.update(
            {
                "languageCode": language or "en-US",
                "alternativeLanguageCodes": alternative_languages or [],
                "enableAutomaticPunctuation": enable_automatic_punctuation,
                "enableWordTimeOffsets": enable_word_time_offsets,
                "maxAlternatives": 4,
                "model": "default",
                "useEnhanced": True,
            }
        )
        body = {
            "config": config,
            "audio": {"content": base64.b64encode(audio).decode("ascii")},
        }

        try:
            async with self._client_factory() as client:
                response = await client.post(
                    self._endpoint,
                    params={"key": self._api_key},
                    json=body,
                )
        except httpx.TransportError as exc:
            raise SpeechRecognitionError(f"Google Speech is unreachable: {exc}") from exc

        if response.status_code in (401, 403):
            raise SpeechRecognitionError("Google Speech authentication failed.")
        if response.status_code == 429:
            raise SpeechRecognitionError("Google Speech request throttled.")
        if response.status_code >= 500:
            raise SpeechRecognitionError("Google Speech service is unavailable. Try again later.")
        if response.status_code != 200:
            logger.warning("Google Speech request failed with status %s", response.status_code)
            raise SpeechRecognitionError(
                f"Google Speech request failed with status {response.status_code}."
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise SpeechRecognitionError("Google Speech returned a malformed response.") from exc

        results = (payload.get("results") or []) if isinstance(payload, dict) else []
        if not results:
            raise SpeechRecognitionError("No speech detected in the audio.")

        alternatives = results[0].get("alternatives") or []
        if not alternatives:
            raise SpeechRecognitionError("No transcription alternatives found.")

        best = alternatives[0]
        return RecognitionResult(
            text=(best.get("transcript") or "").strip(),
            confidence=float(best.get("confidence") or 0.0),
            alternatives=[
                RecognitionAlternative(
                    text=(alt.get("transcript") or "").strip(),
                    confidence=float(alt.get("confidence") or 0.0),
                )
                for alt in alternatives[1:4]
            ],
        )
