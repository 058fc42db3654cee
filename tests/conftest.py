"""Shared pytest fixtures for Transcribe API tests."""

from unittest.mock import AsyncMock, Mock

import pytest
from fastapi.testclient import TestClient

from transcribe_api.config.settings import APIConfig, OpenAIConfig, RetryConfig, Settings
from transcribe_api.dependencies import get_transcriber
from transcribe_api.main import create_app


@pytest.fixture
def test_settings():
    """Return settings with a dummy key and no retry delay."""
    return Settings(
        environment="test",
        log_format="text",
        api=APIConfig(host="127.0.0.1", port=8000),
        openai=OpenAIConfig(api_key="sk-test", model="whisper-1"),
        retry=RetryConfig(max_retries=3, delay=0),
    )


@pytest.fixture
def mock_transcriber():
    """Return a stand-in transcriber whose transcribe() succeeds."""
    transcriber = Mock()
    transcriber.model = "whisper-1"
    transcriber.configured = True
    transcriber.transcribe = AsyncMock(return_value="hello world")
    transcriber.close = AsyncMock()
    return transcriber


@pytest.fixture
def app(test_settings, mock_transcriber):
    """Return an app whose transcriber is the mock."""
    app = create_app(settings=test_settings)
    app.dependency_overrides[get_transcriber] = lambda: mock_transcriber
    return app


@pytest.fixture
def test_client(app):
    """Return FastAPI test client (lifespan not started)."""
    return TestClient(app)


@pytest.fixture
def audio_upload():
    """Return a multipart `files` mapping carrying a small webm clip."""
    return {"audio": ("clip.webm", b"\x1aE\xdf\xa3fake-webm-bytes", "audio/webm")}
