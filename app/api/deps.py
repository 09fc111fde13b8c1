from app.core.config import get_settings
from app.integrations.google_speech import GoogleSpeechTranscriber
from app.integrations.google_translate import GoogleTranslateClient
from app.services.pacing import build_pacer
from app.services.speech import SpeechToTextService
from app.services.translation import TranslationService

_translation_service: TranslationService | None = None
_speech_service: SpeechToTextService | None = None


async def get_translation_service() -> TranslationService:
    """Provide singleton TranslationService instance."""
    global _translation_service
    if _translation_service is None:
        settings = get_settings()
        try:
            translator = GoogleTranslateClient.from_settings(settings)
        except ValueError:
            translator = None
        _translation_service = TranslationService(
            translator,
            pacer=build_pacer(settings),
            batch_size=settings.translation_batch_size,
            call_timeout=settings.translation_call_timeout,
            character_quota=settings.translation_character_quota,
        )
    return _translation_service


async def get_speech_service() -> SpeechToTextService:
    """Provide the SpeechToTextService singleton."""
    global _speech_service
    if _speech_service is None:
        settings = get_settings()
        try:
            transcriber = GoogleSpeechTranscriber.from_settings(settings)
        except ValueError:
            transcriber = None
        _speech_service = SpeechToTextService(transcriber)
    return _speech_service
