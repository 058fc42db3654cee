"""FastAPI dependency providers.

Shared instances are built once in the application lifespan and kept on
`app.state`; these providers hand them to route handlers via Depends(),
which also lets tests swap them through `app.dependency_overrides`.
"""

from fastapi import HTTPException, Request, status

from .config.settings import Settings
from .integrations.openai_transcriber import OpenAITranscriber


def get_settings(request: Request) -> Settings:
    """Get the settings the application was created with."""
    return request.app.state.settings


def get_transcriber(request: Request) -> OpenAITranscriber:
    """Get the transcriber created at startup.

    Raises:
        HTTPException: 503 if the application has not finished starting
    """
    transcriber = getattr(request.app.state, "transcriber", None)
    if transcriber is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Transcriber not initialised",
        )
    return transcriber
