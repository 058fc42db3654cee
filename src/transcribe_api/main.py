"""Main application entry point for the Transcribe API service."""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .api import health, metrics, transcribe
from .api.metrics import MetricsMiddleware
from .config.loader import load_config
from .config.settings import Settings
from .integrations.openai_transcriber import OpenAITranscriber
from .utils.logging import setup_logging, get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager.

    Owns the transcription client: built at startup, closed at shutdown.
    """
    settings: Settings = app.state.settings
    logger.info(f"Starting {settings.app_name}", extra={"model": settings.openai.model})

    transcriber = OpenAITranscriber(settings.openai)
    app.state.transcriber = transcriber
    logger.info("Application startup complete")

    try:
        yield
    finally:
        logger.info(f"Shutting down {settings.app_name}")
        app.state.transcriber = None
        await transcriber.close()


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework HTTP errors in the `{"error": ...}` envelope."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None)
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Reject malformed form input with a 400 instead of FastAPI's 422."""
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    logger.warning(
        f"Invalid request to {request.url.path}: {message}",
        extra={"status_code": status.HTTP_400_BAD_REQUEST, "error_type": "ValidationError"}
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": f"Invalid request: {message}"}
    )


def create_app(config_path: Optional[Path] = None, settings: Optional[Settings] = None) -> FastAPI:
    """Create FastAPI application instance.

    Args:
        config_path: Optional path to configuration file
        settings: Pre-built settings; skips loading from file and environment

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        settings = load_config(config_path)

    setup_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        docs_url="/docs" if settings.environment != "production" else None,
        redoc_url="/redoc" if settings.environment != "production" else None,
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.transcriber = None

    app.middleware("http")(MetricsMiddleware())
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_methods=["POST"],
            allow_headers=["*"],
        )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(health.router, tags=["health"])
    app.include_router(metrics.router, tags=["monitoring"])
    app.include_router(transcribe.router, prefix="/api", tags=["transcribe"])

    return app


def main():
    """Main entry point for running the application."""
    settings = load_config()
    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.api.host,
        port=settings.api.port,
        log_config=None  # We handle logging ourselves
    )


if __name__ == "__main__":
    main()
