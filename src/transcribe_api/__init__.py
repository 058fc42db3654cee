"""Transcribe API: upload an audio clip, get back its transcript."""

__version__ = "0.1.0"
