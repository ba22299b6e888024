"""Provider selection and fallback."""

from __future__ import annotations

import time
from collections.abc import Callable
from pathlib import Path

from mediaforge.errors import InvalidInput, ProviderError
from mediaforge.models.config import Settings
from mediaforge.models.transcript import TranscriptResult
from mediaforge.providers.base import Provider, TranscriptionBackend
from mediaforge.providers.groq import GroqBackend
from mediaforge.providers.replicate import ReplicateBackend
from mediaforge.transcription.chunking import (
    DEFAULT_SAFETY_MARGIN_MB,
    FFmpegSplitter,
    MediaSplitter,
    transcribe_whole,
)
from mediaforge.utils.ffmpeg import to_transcription_audio
from mediaforge.utils.files import is_video_file, temp_path
from mediaforge.utils.progress import log_step, log_warning


class TranscriptionRouter:
    """Runs the primary backend and falls back to the secondary when allowed.

    The primary goes through chunking and rate-limit retry. The secondary, if
    configured, is called once on the source file and its errors propagate
    as they are.
    """

    def __init__(
        self,
        primary: TranscriptionBackend,
        secondary: TranscriptionBackend | None = None,
        *,
        splitter: MediaSplitter,
        temp_dir: Path | str = "/tmp/mediaforge",
        safety_margin_mb: float = DEFAULT_SAFETY_MARGIN_MB,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.primary = primary
        self.secondary = secondary
        self.splitter = splitter
        self.temp_dir = Path(temp_dir)
        self.safety_margin_mb = safety_margin_mb
        self.sleep = sleep

    def transcribe(
        self,
        file_path: Path | str,
        language: str | None = None,
        word_timestamps: bool = False,
    ) -> TranscriptResult:
        try:
            return self._transcribe_primary(file_path, language, word_timestamps)
        except ProviderError as e:
            if not e.fallback_eligible or self.secondary is None:
                raise
            log_warning(
                f"{self.primary.name} failed ({e.code.value}), "
                f"falling back to {self.secondary.name}"
            )
            return self.secondary.transcribe(file_path, language, word_timestamps)

    def _transcribe_primary(
        self,
        file_path: Path | str,
        language: str | None,
        word_timestamps: bool,
    ) -> TranscriptResult:
        # Before any media I/O
        self.primary.check_ready()
        source = Path(file_path)
        if not is_video_file(source) or self.primary.accepts_video:
            return self._run_chunked(source, language, word_timestamps)

        log_step("Audio", f"Extracting audio from {source.name} for transcription")
        audio_path = to_transcription_audio(
            source, temp_path(self.temp_dir, "audio_extract", ".wav"),
        )
        try:
            return self._run_chunked(audio_path, language, word_timestamps)
        finally:
            self.splitter.discard(audio_path)

    def _run_chunked(
        self,
        audio_path: Path,
        language: str | None,
        word_timestamps: bool,
    ) -> TranscriptResult:
        return transcribe_whole(
            audio_path,
            self.primary,
            language,
            word_timestamps,
            splitter=self.splitter,
            safety_margin_mb=self.safety_margin_mb,
            sleep=self.sleep,
        )


def build_router(settings: Settings) -> TranscriptionRouter:
    """Select backends from settings.

    ``groq`` is primary with Replicate as fallback when a token is set;
    ``replicate`` runs alone.
    """
    try:
        provider = Provider(settings.transcription_provider)
    except ValueError:
        supported = ", ".join(p.value for p in Provider)
        raise InvalidInput(
            f"Unsupported transcription provider: {settings.transcription_provider}",
            suggestion=f"Set TRANSCRIPTION_PROVIDER to one of: {supported}",
        ) from None

    timeout = settings.request_timeout_seconds
    if provider is Provider.GROQ:
        primary: TranscriptionBackend = GroqBackend(settings.groq_api_key, timeout=timeout)
        secondary = ReplicateBackend(settings.replicate_api_token) if settings.has_replicate else None
        if not settings.has_groq:
            fallback = "Replicate" if secondary else "no fallback"
            log_warning(f"GROQ_API_KEY is not set, Groq requests will fail ({fallback})")
    else:
        primary = ReplicateBackend(settings.replicate_api_token)
        secondary = None

    return TranscriptionRouter(
        primary,
        secondary,
        splitter=FFmpegSplitter(settings.temp_dir),
        temp_dir=settings.temp_dir,
        safety_margin_mb=settings.chunk_safety_margin_mb,
    )
