from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Protocol

import httpx

from app.core.config import AppSettings


logger = logging.getLogger(__name__)


class ProviderErrorKind(str, Enum):
    """Closed set of failure categories reported by translation providers."""

    UNAUTHORIZED = "unauthorized"
    QUOTA_EXCEEDED = "quota_exceeded"
    INVALID_REQUEST = "invalid_request"
    TRANSPORT = "transport"
    UNKNOWN = "unknown"


class TranslationProviderError(RuntimeError):
    """Raised when the translation provider rejects or fails a request."""

    def __init__(
        self,
        message: str,
        *,
        kind: ProviderErrorKind = ProviderErrorKind.UNKNOWN,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code


@dataclass(slots=True)
class ProviderTranslation:
    """Translated text plus the source language the provider inferred."""

    translated_text: str
    detected_source_language: str | None = None


@dataclass(slots=True)
class LanguageDetection:
    language: str
    confidence: float | None = None


class Translator(Protocol):
    """Capability consumed by the translation service."""

    async def translate(
        self,
        text: str,
        target_language: str,
        source_language: str | None = None,
    ) -> ProviderTranslation: ...

    async def detect_language(self, text: str) -> LanguageDetection: ...

    async def list_languages(self, display_language: str = "en") -> list[dict[str, str]]: ...


def classify_status(status_code: int) -> ProviderErrorKind:
    """Map an HTTP status returned by the provider onto an error kind."""
    if status_code == 401:
        return ProviderErrorKind.UNAUTHORIZED
    if status_code in (403, 429):
        return ProviderErrorKind.QUOTA_EXCEEDED
    if status_code == 400:
        return ProviderErrorKind.INVALID_REQUEST
    return ProviderErrorKind.UNKNOWN


class GoogleTranslateClient:
    """Thin wrapper around the Google Cloud Translation v2 REST API."""

    def __init__(
        self,
        api_key: str,
        *,
        endpoint: str = "https://translation.googleapis.com/language/translate/v2",
        timeout: float = 30.0,
        client_factory: Callable[[], httpx.AsyncClient] | None = None,
    ) -> None:
        if not api_key:
            raise ValueError("Google Translate API key is not configured.")

        self._api_key = api_key
        self._endpoint = endpoint.rstrip("/")
        self._client_factory = client_factory or (
            lambda: httpx.AsyncClient(timeout=httpx.Timeout(timeout))
        )

    @classmethod
    def from_settings(
        cls,
        settings: AppSettings,
        *,
        client_factory: Callable[[], httpx.AsyncClient] | None = None,
    ) -> GoogleTranslateClient:
        if not settings.google_translate_api_key:
            raise ValueError("Google Translate API key is not configured.")
        return cls(
            settings.google_translate_api_key.get_secret_value(),
            endpoint=settings.google_translate_endpoint,
            timeout=settings.translation_call_timeout,
            client_factory=client_factory,
        )

    async def translate(
        self,
        text: str,
        target_language: str,
        source_language: str | None = None,
    ) -> ProviderTranslation:
        """Translate plain text into the target language."""
        payload: dict[str, Any] = {
            "q": text,
            "target": target_language,
            "format": "text",
        }
        if source_language and source_language != "auto":
            payload["source"] = source_language

        data = await self._post("", payload)
        translations = data.get("translations") or []
        if not translations:
            raise TranslationProviderError(
                "Translation response did not contain any translations.",
                kind=ProviderErrorKind.UNKNOWN,
            )

        first = translations[0]
        return ProviderTranslation(
            translated_text=str(first.get("translatedText", "")),
            detected_source_language=first.get("detectedSourceLanguage"),
        )

    async def detect_language(self, text: str) -> LanguageDetection:
        data = await self._post("/detect", {"q": text})
        detections = data.get("detections") or []
        candidate = detections[0] if detections else None
        if isinstance(candidate, list):
            candidate = candidate[0] if candidate else None
        if not candidate or not candidate.get("language"):
            raise TranslationProviderError(
                "Could not detect language.",
                kind=ProviderErrorKind.UNKNOWN,
            )
        return LanguageDetection(
            language=str(candidate["language"]),
            confidence=candidate.get("confidence"),
        )

    async def list_languages(self, display_language: str = "en") -> list[dict[str, str]]:
        data = await self._post("/languages", {"target": display_language})
        languages = data.get("languages") or []
        return [
            {"code": str(item.get("language")), "name": str(item.get("name") or item.get("language"))}
            for item in languages
            if item.get("language")
        ]

    async def _post(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        url = f"{self._endpoint}{path}"
        try:
            async with self._client_factory() as client:
                response = await client.post(
                    url,
                    params={"key": self._api_key},
                    json=payload,
                )
        except httpx.TimeoutException as exc:
            raise TranslationProviderError(
                "Google Translate request timed out.",
                kind=ProviderErrorKind.TRANSPORT,
            ) from exc
        except httpx.TransportError as exc:
            raise TranslationProviderError(
                f"Google Translate is unreachable: {exc}",
                kind=ProviderErrorKind.TRANSPORT,
            ) from exc

        if response.status_code != 200:
            message = _extract_error_message(response)
            logger.warning(
                "Google Translate request failed (path=%s status=%s)",
                path or "/",
                response.status_code,
            )
            raise TranslationProviderError(
                message or f"Google Translate request failed with status {response.status_code}.",
                kind=classify_status(response.status_code),
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise TranslationProviderError(
                "Google Translate returned a malformed response.",
                kind=ProviderErrorKind.UNKNOWN,
                status_code=response.status_code,
            ) from exc

        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(data, dict):
            raise TranslationProviderError(
                "Google Translate response is missing the data envelope.",
                kind=ProviderErrorKind.UNKNOWN,
                status_code=response.status_code,
            )
        return data


def _extract_error_message(response: httpx.Response) -> str | None:
    try:
        payload: dict[str, Any] = response.json()
    except ValueError:
        return None
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict):
            detail = error.get("message") or error.get("status")
            return str(detail) if detail else None
        if error:
            return str(error)
    return None
