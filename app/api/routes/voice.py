from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status

from app.api.deps import get_speech_service
from app.schemas.voice import (
    SpeechLanguagesResponse,
    TranscriptAlternativePayload,
    TranscriptionResponse,
)
from app.services.speech import SpeechToTextService, estimate_processing_time

router = APIRouter()


@router.post(
    "/transcribe",
    response_model=TranscriptionResponse,
    summary="Transcribe a recorded story using the configured speech provider.",
    status_code=status.HTTP_200_OK,
)
async def transcribe_audio(
    audio: UploadFile = File(...),
    language: str = Form("en"),
    service: SpeechToTextService = Depends(get_speech_service),
) -> TranscriptionResponse:
    if not service.is_configured:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Server speech recognition is not configured.",
        )

    payload = await audio.read()
    if not payload:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Uploaded audio payload is empty.",
        )

    try:
        transcript = await service.transcribe_audio(
            payload,
            content_type=audio.content_type or "audio/webm",
            language=language,
        )
    except RuntimeError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(exc),
        ) from exc
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc

    if not transcript.text:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Speech recognition completed without a transcript.",
        )

    return TranscriptionResponse(
        text=transcript.text,
        confidence=transcript.confidence,
        language=transcript.language,
        alternatives=[
            TranscriptAlternativePayload(text=alt.text, confidence=alt.confidence)
            for alt in transcript.alternatives
        ],
        estimated_processing_seconds=estimate_processing_time(len(payload)),
    )


@router.get(
    "/languages",
    response_model=SpeechLanguagesResponse,
    summary="List language codes accepted by the transcription endpoint.",
)
async def list_speech_languages(
    service: SpeechToTextService = Depends(get_speech_service),
) -> SpeechLanguagesResponse:
    return SpeechLanguagesResponse(languages=service.supported_languages())
