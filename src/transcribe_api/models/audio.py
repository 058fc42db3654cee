"""Request and response models for transcription."""

from dataclasses import dataclass

from pydantic import BaseModel, Field

DEFAULT_CONTENT_TYPE = "audio/webm"
UPLOAD_FILENAME = "audio.webm"


@dataclass(frozen=True)
class AudioPayload:
    """One uploaded clip, held in memory for the duration of a request."""

    content: bytes
    content_type: str = DEFAULT_CONTENT_TYPE
    filename: str = UPLOAD_FILENAME

    @property
    def size_bytes(self) -> int:
        return len(self.content)


class TranscriptResponse(BaseModel):
    """Successful transcription response."""
    transcript: str = Field(..., description="Transcribed text")


class ErrorResponse(BaseModel):
    """Error response envelope."""
    error: str = Field(..., description="Human-readable error message")
