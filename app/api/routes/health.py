from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from app.api.deps import get_speech_service, get_translation_service
from app.services.speech import SpeechToTextService
from app.services.translation import TranslationService

router = APIRouter()


@router.get("/healthz")
async def healthcheck() -> dict[str, str]:
    """Lightweight health endpoint for liveness probes."""
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get("/healthz/providers")
async def provider_health(
    translator: TranslationService = Depends(get_translation_service),
    speech: SpeechToTextService = Depends(get_speech_service),
) -> dict[str, dict[str, bool | str | None]]:
    """Report whether the speech and translation providers are usable."""
    translation_error: str | None = None
    if not translator.is_configured:
        translation_error = "Translation provider is not configured."
    elif not await translator.test_connection():
        translation_error = "Translation provider did not respond to a test request."

    return {
        "speech_to_text": {
            "available": speech.is_configured,
            "error": None if speech.is_configured else "Server speech recognition is not configured.",
        },
        "translation": {
            "available": translation_error is None,
            "error": translation_error,
        },
    }
