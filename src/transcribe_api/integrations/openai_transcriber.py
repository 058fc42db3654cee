"""OpenAI Whisper client used to turn uploaded audio into text."""

from typing import Optional

from openai import AsyncOpenAI

from ..config.settings import OpenAIConfig
from ..models.audio import AudioPayload
from ..utils.logging import get_logger

logger = get_logger(__name__)

# Sent when no key is configured; the service answers "Incorrect API key"
MISSING_API_KEY = "missing-api-key"


class OpenAITranscriber:
    """Transcription collaborator backed by the OpenAI audio API.

    One instance is created at application startup and shared by every
    request; it holds no per-request state.
    """

    def __init__(self, config: OpenAIConfig, client: Optional[AsyncOpenAI] = None):
        """Initialize the transcriber.

        Args:
            config: OpenAI settings (key, model, timeout)
            client: Pre-built client, mainly for tests
        """
        self.config = config
        self.model = config.model
        if client is None:
            if not config.has_credentials:
                logger.warning("OPENAI_API_KEY is not set; transcription requests will be rejected upstream")
            api_key = config.api_key.get_secret_value() if config.has_credentials else MISSING_API_KEY
            client = AsyncOpenAI(
                api_key=api_key,
                base_url=config.base_url,
                timeout=config.timeout,
                max_retries=config.max_retries,
            )
        self._client = client

    @property
    def configured(self) -> bool:
        return self.config.has_credentials

    async def transcribe(self, payload: AudioPayload) -> str:
        """Send one clip to the transcription service.

        Args:
            payload: Audio content and its declared type

        Returns:
            Transcript text exactly as returned by the service
        """
        response = await self._client.audio.transcriptions.create(
            file=(payload.filename, payload.content, payload.content_type),
            model=self.model,
        )
        return response.text

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.close()
