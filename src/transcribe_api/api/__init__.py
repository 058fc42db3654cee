"""
API module for the Transcribe API.

This module contains the REST endpoints: transcription, health probes
and Prometheus metrics.
"""

from . import health, metrics, transcribe

__all__ = ["health", "metrics", "transcribe"]
