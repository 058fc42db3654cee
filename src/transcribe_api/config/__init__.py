"""Configuration loading for the Transcribe API service."""
