from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Sequence

from app.integrations.google_translate import (
    ProviderErrorKind,
    TranslationProviderError,
    Translator,
)
from app.services.adaptation import cultural_suggestions
from app.services.confidence import estimate_confidence
from app.services.languages import LANGUAGE_NAMES, language_name
from app.services.pacing import BatchPacer, FixedDelayPacer
from app.services.text_validation import TextValidator, ValidationResult

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 5
DEFAULT_DETECTED_LANGUAGE = "en"


@dataclass(slots=True)
class TranslationRequest:
    text: str
    target_languages: list[str]
    source_language: str = "auto"


@dataclass(slots=True)
class TranslationOutcome:
    language: str
    language_name: str
    translated_text: str
    confidence: float
    detected_source_language: str | None = None


@dataclass(slots=True)
class BatchTranslationResult:
    """Successful outcomes plus ``"{language}: {detail}"`` messages for failures."""

    outcomes: list[TranslationOutcome] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


@dataclass(slots=True)
class LanguageInfo:
    code: str
    name: str


@dataclass(slots=True)
class QuotaUsage:
    used: int
    limit: int
    remaining: int


class TranslationError(RuntimeError):
    """A single-language translation failed."""

    def __init__(
        self,
        message: str,
        *,
        language: str | None = None,
        kind: ProviderErrorKind = ProviderErrorKind.UNKNOWN,
    ) -> None:
        super().__init__(message)
        self.language = language
        self.kind = kind


class AuthenticationError(TranslationError):
    pass


class QuotaExceededError(TranslationError):
    pass


class MalformedRequestError(TranslationError):
    pass


class TextValidationError(ValueError):
    def __init__(self, errors: Sequence[str]) -> None:
        super().__init__(", ".join(errors))
        self.errors = list(errors)


class TranslationService:
    """Translate story text into many languages through a pluggable provider."""

    def __init__(
        self,
        translator: Translator | None,
        *,
        validator: TextValidator | None = None,
        pacer: BatchPacer | None = None,
        batch_size: int = DEFAULT_BATCH_SIZE,
        call_timeout: float | None = 30.0,
        character_quota: int = 10000,
    ) -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1.")
        self._translator = translator
        self._validator = validator or TextValidator()
        self._pacer = pacer or FixedDelayPacer(0.1)
        self._batch_size = batch_size
        self._call_timeout = call_timeout
        self._character_quota = character_quota
        self._characters_used = 0

    @property
    def is_configured(self) -> bool:
        return self._translator is not None

    def validate_text_for_translation(self, text: str) -> ValidationResult:
        return self._validator.validate(text)

    async def translate_text(
        self,
        text: str,
        target_language: str,
        source_language: str | None = None,
    ) -> TranslationOutcome:
        """Translate ``text`` into one language, raising a classified ``TranslationError``."""
        translator = self._require_translator()
        logger.debug("Translating text to %s", target_language)

        try:
            result = await self._call_with_timeout(
                translator.translate(text, target_language, _explicit_source(source_language))
            )
        except TranslationProviderError as exc:
            logger.warning("Translation to %s failed (%s): %s", target_language, exc.kind.value, exc)
            raise _classify(exc, target_language) from exc
        except asyncio.TimeoutError as exc:
            logger.warning("Translation to %s timed out", target_language)
            raise TranslationError(
                f"Translation to {target_language} timed out after {self._call_timeout} seconds",
                language=target_language,
                kind=ProviderErrorKind.TRANSPORT,
            ) from exc
        except Exception as exc:
            logger.warning("Translation to %s failed: %s", target_language, exc)
            raise TranslationError(
                f"Translation to {target_language} failed: {str(exc) or 'Unknown error'}",
                language=target_language,
            ) from exc

        self._characters_used += len(text)

        return TranslationOutcome(
            language=target_language,
            language_name=language_name(target_language),
            translated_text=result.translated_text,
            confidence=estimate_confidence(text, result.translated_text),
            detected_source_language=result.detected_source_language or source_language,
        )

    async def batch_translate(self, request: TranslationRequest) -> BatchTranslationResult:
        """Translate into every requested language, at most ``batch_size`` at a time.

        Groups run strictly one after another. The pacer admits each group and
        is awaited between them. A failing language is reported in ``errors``
        and never aborts the other calls. Outcomes follow group order, then
        request order inside a group.
        """
        if not request.target_languages:
            raise ValueError("At least one target language is required.")
        self._require_translator()

        groups = self._partition(request.target_languages)
        logger.info(
            "Starting batch translation to %d languages in %d groups",
            len(request.target_languages),
            len(groups),
        )

        result = BatchTranslationResult()
        for index, group in enumerate(groups):
            await self._pacer.admit()
            settled = await asyncio.gather(
                *(self._settle(request.text, language, request.source_language) for language in group)
            )
            for language, outcome in zip(group, settled):
                if isinstance(outcome, TranslationError):
                    result.errors.append(f"{language}: {outcome}")
                else:
                    result.outcomes.append(outcome)

            if index < len(groups) - 1:
                await self._pacer.wait()

        if result.errors:
            logger.warning("Some translations failed: %s", ", ".join(result.errors))
        logger.info(
            "Batch translation completed. %d/%d successful",
            len(result.outcomes),
            len(request.target_languages),
        )
        return result

    async def translate_story(self, request: TranslationRequest) -> BatchTranslationResult:
        """Validate the story text, then run the batch translation."""
        validation = self.validate_text_for_translation(request.text)
        if not validation.valid:
            raise TextValidationError(validation.errors)
        return await self.batch_translate(request)

    async def detect_language(self, text: str) -> str:
        """Return the provider's guess for ``text``; ``"en"`` whenever detection fails."""
        if not self._translator or not text or not text.strip():
            return DEFAULT_DETECTED_LANGUAGE
        try:
            detection = await self._call_with_timeout(self._translator.detect_language(text))
        except Exception as exc:
            logger.warning("Language detection failed; defaulting to %s: %s", DEFAULT_DETECTED_LANGUAGE, exc)
            return DEFAULT_DETECTED_LANGUAGE

        if not detection.language:
            return DEFAULT_DETECTED_LANGUAGE
        logger.info("Detected language: %s (confidence: %s)", detection.language, detection.confidence)
        return detection.language

    async def get_supported_languages(self) -> list[LanguageInfo]:
        if self._translator:
            try:
                languages = await self._call_with_timeout(self._translator.list_languages())
            except Exception as exc:
                logger.warning("Failed to get supported languages; using built-in list: %s", exc)
            else:
                if languages:
                    return [LanguageInfo(code=item["code"], name=item["name"]) for item in languages]
        return [LanguageInfo(code=code, name=name) for code, name in LANGUAGE_NAMES.items()]

    async def test_connection(self) -> bool:
        if not self._translator:
            return False
        try:
            await self._call_with_timeout(self._translator.translate("Hello", "es", None))
        except Exception as exc:
            logger.warning("Translation provider connection test failed: %s", exc)
            return False
        return True

    async def get_translation_quota(self) -> QuotaUsage:
        used = self._characters_used
        return QuotaUsage(
            used=used,
            limit=self._character_quota,
            remaining=max(0, self._character_quota - used),
        )

    def cultural_suggestions(self, text: str, target_language: str) -> list[str]:
        return cultural_suggestions(text, target_language)

    async def _settle(
        self,
        text: str,
        language: str,
        source_language: str | None,
    ) -> TranslationOutcome | TranslationError:
        try:
            return await self.translate_text(text, language, source_language)
        except TranslationError as exc:
            return exc

    def _partition(self, languages: Sequence[str]) -> list[list[str]]:
        size = self._batch_size
        return [list(languages[start:start + size]) for start in range(0, len(languages), size)]

    async def _call_with_timeout(self, awaitable):
        if self._call_timeout is None:
            return await awaitable
        return await asyncio.wait_for(awaitable, timeout=self._call_timeout)

    def _require_translator(self) -> Translator:
        if self._translator is None:
            raise RuntimeError("Translation provider is not configured.")
        return self._translator


def _explicit_source(source_language: str | None) -> str | None:
    if not source_language or source_language == "auto":
        return None
    return source_language


def _classify(exc: TranslationProviderError, language: str) -> TranslationError:
    if exc.kind is ProviderErrorKind.QUOTA_EXCEEDED:
        return QuotaExceededError(
            "Translation API access denied. Please ensure the Cloud Translation API is "
            "enabled for your Google Cloud project, that your credentials are allowed to "
            "use it, and that billing and quota are available.",
            language=language,
            kind=exc.kind,
        )
    if exc.kind is ProviderErrorKind.UNAUTHORIZED:
        return AuthenticationError(
            "Authentication failed. Please check your Google Cloud credentials.",
            language=language,
            kind=exc.kind,
        )
    if exc.kind is ProviderErrorKind.INVALID_REQUEST:
        return MalformedRequestError(
            "Invalid request. Please check the text and language codes.",
            language=language,
            kind=exc.kind,
        )
    return TranslationError(
        f"Translation to {language} failed: {exc}",
        language=language,
        kind=exc.kind,
    )

