"""Tests for the OpenAI transcription client."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from transcribe_api.config.settings import OpenAIConfig
from transcribe_api.integrations.openai_transcriber import MISSING_API_KEY, OpenAITranscriber
from transcribe_api.models.audio import AudioPayload


@pytest.fixture
def mock_client():
    client = MagicMock()
    response = MagicMock()
    response.text = "  hello world  "
    client.audio.transcriptions.create = AsyncMock(return_value=response)
    client.close = AsyncMock()
    return client


class TestOpenAITranscriber:
    """Test OpenAITranscriber."""

    @pytest.mark.asyncio
    async def test_transcribe_sends_file_and_model(self, mock_client):
        transcriber = OpenAITranscriber(OpenAIConfig(api_key="sk-test"), client=mock_client)
        payload = AudioPayload(content=b"audio-bytes", content_type="audio/ogg")

        await transcriber.transcribe(payload)

        mock_client.audio.transcriptions.create.assert_awaited_once_with(
            file=("audio.webm", b"audio-bytes", "audio/ogg"),
            model="whisper-1",
        )

    @pytest.mark.asyncio
    async def test_text_returned_verbatim(self, mock_client):
        transcriber = OpenAITranscriber(OpenAIConfig(api_key="sk-test"), client=mock_client)

        text = await transcriber.transcribe(AudioPayload(content=b"a"))

        assert text == "  hello world  "

    @pytest.mark.asyncio
    async def test_custom_model(self, mock_client):
        config = OpenAIConfig(api_key="sk-test", model="gpt-4o-transcribe")
        transcriber = OpenAITranscriber(config, client=mock_client)

        await transcriber.transcribe(AudioPayload(content=b"a"))

        assert mock_client.audio.transcriptions.create.await_args.kwargs["model"] == "gpt-4o-transcribe"

    @pytest.mark.asyncio
    async def test_errors_propagate(self, mock_client):
        mock_client.audio.transcriptions.create.side_effect = RuntimeError("Connection error.")
        transcriber = OpenAITranscriber(OpenAIConfig(api_key="sk-test"), client=mock_client)

        with pytest.raises(RuntimeError, match="Connection error"):
            await transcriber.transcribe(AudioPayload(content=b"a"))

    @pytest.mark.asyncio
    async def test_close(self, mock_client):
        transcriber = OpenAITranscriber(OpenAIConfig(api_key="sk-test"), client=mock_client)

        await transcriber.close()

        mock_client.close.assert_awaited_once()

    def test_builds_client_from_config(self):
        config = OpenAIConfig(api_key="sk-test", timeout=30.0, max_retries=0)

        with patch("transcribe_api.integrations.openai_transcriber.AsyncOpenAI") as mock_cls:
            transcriber = OpenAITranscriber(config)

        mock_cls.assert_called_once_with(
            api_key="sk-test", base_url=None, timeout=30.0, max_retries=0
        )
        assert transcriber.configured is True

    def test_missing_key_is_not_fatal(self, monkeypatch):
        """Test that a missing key only warns; the upstream call reports it."""
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        monkeypatch.delenv("TRANSCRIBE_OPENAI_API_KEY", raising=False)
        config = OpenAIConfig(_env_file=None)

        with patch("transcribe_api.integrations.openai_transcriber.logger") as mock_logger:
            transcriber = OpenAITranscriber(config)

        assert transcriber.configured is False
        assert transcriber._client.api_key == MISSING_API_KEY
        mock_logger.warning.assert_called_once()
