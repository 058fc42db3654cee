"""Prometheus metrics endpoint."""

import time

from fastapi import APIRouter, Request, Response
from prometheus_client import (
    Counter, Histogram, Gauge,
    generate_latest, CONTENT_TYPE_LATEST,
    CollectorRegistry
)

from ..utils.logging import get_logger

logger = get_logger(__name__)

# Create a custom registry to avoid conflicts
registry = CollectorRegistry()

request_count = Counter(
    'transcribe_api_requests_total',
    'Total number of HTTP requests',
    ['method', 'endpoint', 'status'],
    registry=registry
)

request_duration = Histogram(
    'transcribe_api_request_duration_seconds',
    'Request duration in seconds',
    ['method', 'endpoint'],
    registry=registry
)

active_requests = Gauge(
    'transcribe_api_active_requests',
    'Number of active requests',
    registry=registry
)

transcription_count = Counter(
    'transcribe_api_transcriptions_total',
    'Transcription attempts by outcome',
    ['outcome'],
    registry=registry
)

transcription_retries = Counter(
    'transcribe_api_transcription_retries_total',
    'Retries of the transcription call after transient failures',
    registry=registry
)

transcription_duration = Histogram(
    'transcribe_api_transcription_duration_seconds',
    'Time spent transcribing one upload, retries included',
    registry=registry
)

router = APIRouter()


@router.get(
    "/metrics",
    response_class=Response,
    summary="Prometheus metrics",
    description="Expose metrics in Prometheus format"
)
async def metrics():
    """Return metrics in Prometheus format."""
    return Response(
        content=generate_latest(registry),
        media_type=CONTENT_TYPE_LATEST
    )


def record_retry(attempts_left: int, error: BaseException) -> None:
    """Retry hook counting every delayed retry."""
    transcription_retries.inc()


class MetricsMiddleware:
    """Middleware to collect request metrics."""

    async def __call__(self, request: Request, call_next):
        """Process request and collect metrics."""
        active_requests.inc()
        start_time = time.time()

        try:
            response = await call_next(request)

            endpoint = request.url.path
            request_duration.labels(
                method=request.method,
                endpoint=endpoint
            ).observe(time.time() - start_time)

            request_count.labels(
                method=request.method,
                endpoint=endpoint,
                status=response.status_code
            ).inc()

            return response

        finally:
            active_requests.dec()
