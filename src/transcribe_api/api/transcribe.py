"""Transcription endpoint."""

import time
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import JSONResponse

from ..config.settings import Settings
from ..dependencies import get_settings, get_transcriber
from ..errors import ValidationError, classify_error
from ..integrations.openai_transcriber import OpenAITranscriber
from ..models.audio import DEFAULT_CONTENT_TYPE, AudioPayload, ErrorResponse, TranscriptResponse
from ..utils.logging import get_logger
from ..utils.retry import retry_operation
from .metrics import record_retry, transcription_count, transcription_duration

router = APIRouter()
logger = get_logger(__name__)


async def read_audio_payload(audio: Optional[UploadFile]) -> AudioPayload:
    """Read the uploaded clip into memory.

    Args:
        audio: The `audio` form field, or None if the client left it out

    Returns:
        Payload with the declared content type, or the default if none was sent

    Raises:
        ValidationError: If no audio field was provided
    """
    if audio is None:
        raise ValidationError()

    content = await audio.read()
    return AudioPayload(
        content=content,
        content_type=audio.content_type or DEFAULT_CONTENT_TYPE,
    )


def error_response(exc: Exception) -> JSONResponse:
    """Log a failure and turn it into the JSON error envelope."""
    error = classify_error(exc)

    log_extra = {"status_code": error.status_code, "error_type": type(error).__name__}
    if error.status_code < 500 and error.cause is None:
        logger.warning(f"Rejected transcription request: {error.message}", extra=log_extra)
    else:
        logger.error(f"Error in transcribe API: {exc}", exc_info=exc, extra=log_extra)

    transcription_count.labels(outcome=type(error).__name__).inc()
    return JSONResponse(
        status_code=error.status_code,
        content=ErrorResponse(error=error.message).model_dump()
    )


@router.post(
    "/transcribe",
    response_model=TranscriptResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def transcribe(
    audio: Optional[UploadFile] = File(None, description="Audio clip to transcribe"),
    transcriber: OpenAITranscriber = Depends(get_transcriber),
    settings: Settings = Depends(get_settings),
):
    """Transcribe one uploaded audio clip.

    The clip is sent to the transcription service, retrying transient
    connection failures. Failures are mapped to 400/401/500/503 with an
    `{"error": ...}` body.
    """
    start_time = time.time()

    try:
        payload = await read_audio_payload(audio)

        logger.info(
            "Transcribing audio",
            extra={"content_type": payload.content_type, "size_bytes": payload.size_bytes}
        )

        text = await retry_operation(
            lambda: transcriber.transcribe(payload),
            retries=settings.retry.max_retries,
            delay=settings.retry.delay,
            on_retry=record_retry,
        )
    except Exception as e:
        return error_response(e)

    processing_time = time.time() - start_time
    transcription_duration.observe(processing_time)
    transcription_count.labels(outcome="success").inc()
    logger.info(
        "Transcription complete",
        extra={"processing_time": processing_time, "model": transcriber.model}
    )

    return TranscriptResponse(transcript=text)
