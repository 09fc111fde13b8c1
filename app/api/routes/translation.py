from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.deps import get_translation_service
from app.schemas.translation import (
    LanguageDetectionResponse,
    LanguageListResponse,
    LanguagePayload,
    QuotaResponse,
    StoryTranslationRequest,
    StoryTranslationResponse,
    SuggestionRequest,
    SuggestionResponse,
    TextPayload,
    TextTranslationRequest,
    TranslationPayload,
    ValidationResponse,
)
from app.services.translation import (
    AuthenticationError,
    MalformedRequestError,
    QuotaExceededError,
    TextValidationError,
    TranslationError,
    TranslationOutcome,
    TranslationRequest,
    TranslationService,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _require_configured(translator: TranslationService) -> None:
    if not translator.is_configured:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Translation provider is not configured.",
        )


def _to_payload(outcome: TranslationOutcome) -> TranslationPayload:
    return TranslationPayload(
        language=outcome.language,
        language_name=outcome.language_name,
        translated_text=outcome.translated_text,
        confidence=outcome.confidence,
        detected_source_language=outcome.detected_source_language,
    )


@router.post(
    "/story",
    response_model=StoryTranslationResponse,
    status_code=status.HTTP_200_OK,
    summary="Translate a craft story into several languages.",
)
async def translate_story(
    payload: StoryTranslationRequest,
    translator: TranslationService = Depends(get_translation_service),
) -> StoryTranslationResponse:
    """Return every successful translation along with per-language failures."""
    _require_configured(translator)
    request = TranslationRequest(
        text=payload.text,
        source_language=payload.source_language or "en",
        target_languages=payload.target_languages,
    )
    try:
        result = await translator.translate_story(request)
    except TextValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc

    return StoryTranslationResponse(
        translations=[_to_payload(outcome) for outcome in result.outcomes],
        errors=result.errors,
    )


@router.post(
    "/text",
    response_model=TranslationPayload,
    status_code=status.HTTP_200_OK,
    summary="Translate text into a single language.",
)
async def translate_text(
    payload: TextTranslationRequest,
    translator: TranslationService = Depends(get_translation_service),
) -> TranslationPayload:
    _require_configured(translator)
    try:
        outcome = await translator.translate_text(
            payload.text,
            payload.target_language,
            payload.source_language,
        )
    except MalformedRequestError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except AuthenticationError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc
    except QuotaExceededError as exc:
        raise HTTPException(status_code=status.HTTP_429_TOO_MANY_REQUESTS, detail=str(exc)) from exc
    except TranslationError as exc:
        logger.error("Single translation failed: %s", exc)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    return _to_payload(outcome)


@router.post(
    "/detect",
    response_model=LanguageDetectionResponse,
    summary="Detect the language of a text.",
)
async def detect_language(
    payload: TextPayload,
    translator: TranslationService = Depends(get_translation_service),
) -> LanguageDetectionResponse:
    language = await translator.detect_language(payload.text)
    return LanguageDetectionResponse(language=language)


@router.post(
    "/validate",
    response_model=ValidationResponse,
    summary="Check whether a text can be sent for translation.",
)
async def validate_text(
    payload: TextPayload,
    translator: TranslationService = Depends(get_translation_service),
) -> ValidationResponse:
    result = translator.validate_text_for_translation(payload.text)
    return ValidationResponse(valid=result.valid, errors=result.errors)


@router.get(
    "/languages",
    response_model=LanguageListResponse,
    summary="List languages available for translation.",
)
async def list_languages(
    translator: TranslationService = Depends(get_translation_service),
) -> LanguageListResponse:
    languages = await translator.get_supported_languages()
    return LanguageListResponse(
        languages=[LanguagePayload(code=item.code, name=item.name) for item in languages]
    )


@router.get(
    "/quota",
    response_model=QuotaResponse,
    summary="Report translation characters used by this process.",
)
async def translation_quota(
    translator: TranslationService = Depends(get_translation_service),
) -> QuotaResponse:
    usage = await translator.get_translation_quota()
    return QuotaResponse(used=usage.used, limit=usage.limit, remaining=usage.remaining)


@router.post(
    "/suggestions",
    response_model=SuggestionResponse,
    summary="Suggest cultural adaptations for a target language.",
)
async def cultural_suggestions(
    payload: SuggestionRequest,
    translator: TranslationService = Depends(get_translation_service),
) -> SuggestionResponse:
    return SuggestionResponse(
        suggestions=translator.cultural_suggestions(payload.text, payload.target_language)
    )
