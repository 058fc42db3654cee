"""Error taxonomy for transcription requests.

The collaborator only reports failures as human-readable messages, so
failures are sorted by substring match on the message. Classification runs
once, at the route boundary; the retry wrapper only asks `is_transient`.
"""

from typing import Optional

import openai

TRANSIENT_SIGNATURES = ("ECONNRESET", "Connection error", "network", "timeout")
CONNECTION_SIGNATURES = ("ECONNRESET", "Connection error")
AUTH_SIGNATURE = "Incorrect API key"
FORMAT_SIGNATURE = "audio file format"

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"


class TranscribeAPIError(Exception):
    """Base exception carrying the HTTP status and client-facing message."""

    status_code = 500
    default_message = GENERIC_ERROR_MESSAGE

    def __init__(self, message: Optional[str] = None, cause: Optional[BaseException] = None) -> None:
        self.message = message or self.default_message
        self.cause = cause
        super().__init__(self.message)


class ValidationError(TranscribeAPIError):
    """Missing or malformed request input."""

    status_code = 400
    default_message = "No audio file provided"


class AuthError(TranscribeAPIError):
    """Credential rejected by the transcription service."""

    status_code = 401
    default_message = "Invalid API configuration"


class FormatError(TranscribeAPIError):
    """Audio encoding rejected by the transcription service."""

    status_code = 400
    default_message = "Invalid audio format"


class TransientNetworkError(TranscribeAPIError):
    """Connection failure that outlived the retry budget."""

    status_code = 503
    default_message = "Connection error. Please try again."


class UnknownError(TranscribeAPIError):
    """Anything the taxonomy does not recognise."""

    status_code = 500


def is_transient(exc: BaseException) -> bool:
    """Return True if a failure is worth retrying."""
    message = str(exc)
    if any(signature in message for signature in TRANSIENT_SIGNATURES):
        return True
    return isinstance(exc, openai.APIConnectionError)


def classify_error(exc: BaseException) -> TranscribeAPIError:
    """Map any failure to the response it should produce.

    Substring rules are checked in order before the structured OpenAI
    exception types, so the message always wins.
    """
    if isinstance(exc, TranscribeAPIError):
        return exc

    message = str(exc)

    if AUTH_SIGNATURE in message:
        return AuthError(cause=exc)
    if FORMAT_SIGNATURE in message:
        return FormatError(cause=exc)
    if any(signature in message for signature in CONNECTION_SIGNATURES):
        return TransientNetworkError(cause=exc)

    if isinstance(exc, openai.AuthenticationError):
        return AuthError(cause=exc)
    if isinstance(exc, openai.APIConnectionError):
        return TransientNetworkError(cause=exc)

    return UnknownError(message or None, cause=exc)
