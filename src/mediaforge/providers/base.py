"""Base protocol for transcription backends."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Protocol, runtime_checkable

from mediaforge.models.transcript import TranscriptResult


class Provider(str, Enum):
    """Supported transcription providers."""

    GROQ = "groq"
    REPLICATE = "replicate"

    def __str__(self) -> str:
        return self.value


@runtime_checkable
class TranscriptionBackend(Protocol):
    """Protocol for transcription backends.

    ``max_file_size_mb`` is the per-request upload limit, or ``None`` when the
    backend accepts any size and must not be chunked. ``accepts_video`` says
    whether a video container can be uploaded as-is.

    ``check_ready`` raises a ProviderError when the backend cannot be called
    at all (missing credentials), before any media work is done.
    """

    name: str
    max_file_size_mb: float | None
    accepts_video: bool

    def check_ready(self) -> None: ...

    def transcribe(
        self,
        audio_path: Path | str,
        language: str | None = None,
        word_timestamps: bool = False,
    ) -> TranscriptResult: ...
