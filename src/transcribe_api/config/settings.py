"""Configuration settings for the Transcribe API service."""

from typing import List, Optional

from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class APIConfig(BaseSettings):
    """HTTP server configuration settings."""

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    cors_origins: List[str] = Field(default_factory=list)

    model_config = SettingsConfigDict(env_prefix="TRANSCRIBE_API_", extra="ignore")


class OpenAIConfig(BaseSettings):
    """Transcription collaborator (OpenAI) settings."""

    api_key: Optional[SecretStr] = Field(
        default=None,
        validation_alias=AliasChoices("OPENAI_API_KEY", "TRANSCRIBE_OPENAI_API_KEY"),
    )
    model: str = Field(default="whisper-1")
    base_url: Optional[str] = Field(default=None)
    timeout: float = Field(default=60.0)
    max_retries: int = Field(default=2)

    model_config = SettingsConfigDict(
        env_prefix="TRANSCRIBE_OPENAI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def has_credentials(self) -> bool:
        return self.api_key is not None and bool(self.api_key.get_secret_value())


class RetryConfig(BaseSettings):
    """Retry policy for transient collaborator failures."""

    max_retries: int = Field(default=3, ge=0)
    delay: float = Field(default=1.0, ge=0)

    model_config = SettingsConfigDict(env_prefix="TRANSCRIBE_RETRY_", extra="ignore")


class Settings(BaseSettings):
    """Main application settings."""

    app_name: str = Field(default="Transcribe API")
    environment: str = Field(default="production")
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")

    api: APIConfig = Field(default_factory=APIConfig)
    openai: OpenAIConfig = Field(default_factory=OpenAIConfig)
    retry: RetryConfig = Field(default_factory=RetryConfig)

    model_config = SettingsConfigDict(
        env_prefix="TRANSCRIBE_API_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ("json", "text"):
            raise ValueError(f"log_format must be 'json' or 'text', got {v!r}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        return v.upper()
