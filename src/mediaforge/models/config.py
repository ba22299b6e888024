"""Process-wide settings model."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


LOG_LEVELS = ("debug", "info", "warn", "error")


class Settings(BaseModel):
    """Credentials, provider selection and temp-file policy."""

    groq_api_key: str = ""
    replicate_api_token: str = ""
    transcription_provider: str = "groq"  # groq | replicate
    temp_dir: str = "/tmp/mediaforge"
    max_file_size_mb: int = Field(default=500, ge=1)
    cleanup_after_hours: int = Field(default=2, ge=0)
    log_level: str = "info"  # debug | info | warn | error
    chunk_safety_margin_mb: float = Field(default=1.0, ge=0.0)
    request_timeout_seconds: float = Field(default=600.0, gt=0.0)

    @field_validator("transcription_provider", "log_level")
    @classmethod
    def _lowercase(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        if value not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of: {', '.join(LOG_LEVELS)}")
        return value

    @property
    def has_groq(self) -> bool:
        return bool(self.groq_api_key)

    @property
    def has_replicate(self) -> bool:
        return bool(self.replicate_api_token)
