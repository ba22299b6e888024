"""Groq Whisper transcription backend (primary)."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import groq

from mediaforge.errors import (
    MediaForgeError,
    OperationTimeout,
    ProviderError,
    ProviderRateLimited,
)
from mediaforge.models.transcript import (
    TranscriptResult,
    TranscriptSegment,
    Word,
    join_segment_text,
)
from mediaforge.utils.progress import log_debug

GROQ_MAX_FILE_SIZE_MB = 25.0
GROQ_MODEL = "whisper-large-v3-turbo"


def _as_dict(response: Any) -> dict:
    if isinstance(response, dict):
        return response
    if hasattr(response, "model_dump"):
        return response.model_dump()
    return dict(vars(response))


def parse_verbose_json(
    data: dict,
    *,
    language: str | None = None,
    word_timestamps: bool = False,
) -> TranscriptResult:
    """Convert a ``verbose_json`` transcription payload to a TranscriptResult.

    Words are attached to the segment whose bounds contain them. The reported
    duration is raised to the last segment end if the API under-reports it.
    """
    raw_words = (data.get("words") or []) if word_timestamps else []

    segments: list[TranscriptSegment] = []
    for i, seg in enumerate(data.get("segments") or []):
        start = float(seg["start"])
        end = float(seg["end"])
        words = None
        if word_timestamps:
            words = [
                Word(word=str(w["word"]).strip(), start=float(w["start"]), end=float(w["end"]))
                for w in raw_words
                if float(w["start"]) >= start and float(w["end"]) <= end
            ]
        segments.append(TranscriptSegment(
            id=i,
            start=start,
            end=end,
            text=(seg.get("text") or "").strip(),
            words=words,
        ))

    duration = float(data.get("duration") or 0.0)
    if segments:
        duration = max(duration, segments[-1].end)

    text = join_segment_text(segments) if segments else (data.get("text") or "").strip()

    return TranscriptResult(
        language=data.get("language") or language or "unknown",
        duration=duration,
        text=text,
        segments=segments,
    )


class GroqBackend:
    """Transcription via Groq's hosted Whisper (fast, 25 MB per request)."""

    name = "groq"
    max_file_size_mb: float | None = GROQ_MAX_FILE_SIZE_MB
    accepts_video = False

    def __init__(
        self,
        api_key: str,
        *,
        model: str = GROQ_MODEL,
        timeout: float = 600.0,
        client: Any | None = None,
    ):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            if not self.api_key:
                raise ProviderError(
                    "GROQ_API_KEY is not configured.",
                    suggestion="Set the GROQ_API_KEY environment variable. "
                    "Get a free key at console.groq.com",
                    fallback_eligible=True,
                )
            # Retries are handled by call_with_retry, not the SDK
            self._client = groq.Groq(api_key=self.api_key, timeout=self.timeout, max_retries=0)
        return self._client

    def check_ready(self) -> None:
        """Raise ProviderError if the API key is missing."""
        self._get_client()

    def transcribe(
        self,
        audio_path: Path | str,
        language: str | None = None,
        word_timestamps: bool = False,
    ) -> TranscriptResult:
        client = self._get_client()
        params: dict[str, Any] = {
            "model": self.model,
            "response_format": "verbose_json",
            "timestamp_granularities": ["word", "segment"] if word_timestamps else ["segment"],
        }
        if language:
            params["language"] = language

        log_debug(f"Calling Groq Whisper API ({Path(audio_path).name})")
        try:
            # A stream is consumed by the upload, so it is reopened per call
            with open(audio_path, "rb") as f:
                response = client.audio.transcriptions.create(
                    file=(Path(audio_path).name, f),
                    **params,
                )
        except MediaForgeError:
            raise
        except Exception as e:
            raise self._translate_error(e) from e

        try:
            return parse_verbose_json(
                _as_dict(response),
                language=language,
                word_timestamps=word_timestamps,
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ProviderError(
                f"Groq returned a malformed transcription: {e}",
                fallback_eligible=True,
            ) from e

    @staticmethod
    def _translate_error(exc: Exception) -> MediaForgeError:
        if isinstance(exc, groq.APITimeoutError):
            return OperationTimeout(
                f"Groq request timed out: {exc}",
                suggestion="Retry, or split the file into shorter pieces.",
            )
        status = getattr(exc, "status_code", None)
        if isinstance(exc, groq.RateLimitError) or status == 429:
            return ProviderRateLimited(f"Groq transcription failed: {exc}")
        return ProviderError(f"Groq transcription failed: {exc}", fallback_eligible=True)
