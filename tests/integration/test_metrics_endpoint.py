"""Integration tests for the metrics endpoint."""


def test_metrics_exposed(test_client):
    response = test_client.get("/metrics")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")


def test_transcription_metrics_recorded(test_client, mock_transcriber, audio_upload):
    mock_transcriber.transcribe.side_effect = [RuntimeError("timeout"), "hello world"]
    test_client.post("/api/transcribe", files=audio_upload)

    body = test_client.get("/metrics").text

    assert 'transcribe_api_transcriptions_total{outcome="success"}' in body
    assert "transcribe_api_transcription_retries_total" in body
    assert 'endpoint="/api/transcribe"' in body


def test_request_labelled_with_full_path(test_client, audio_upload):
    """Test that routes under a router prefix keep the prefix in their label."""
    test_client.post("/api/transcribe", files=audio_upload)

    body = test_client.get("/metrics").text

    assert 'endpoint="/api/transcribe"' in body
    assert 'endpoint="/transcribe"' not in body
