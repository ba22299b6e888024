"""Replicate-hosted Whisper transcription backend (fallback)."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import replicate

from mediaforge.errors import MediaForgeError, ProviderError, ProviderRateLimited
from mediaforge.models.transcript import TranscriptResult, TranscriptSegment, join_segment_text
from mediaforge.utils.progress import log_step

REPLICATE_MODEL = (
    "openai/whisper:4d50797290df275329f202e48c76360b3f22b08d28c65c7c18e397ea714571d"
)
WHISPER_VARIANT = "large-v3"


def parse_output(output: dict, *, language: str | None = None) -> TranscriptResult:
    """Convert the Whisper model output to a TranscriptResult.

    The model reports no total duration, so the last segment end is used.
    """
    segments = [
        TranscriptSegment(
            id=i,
            start=float(seg["start"]),
            end=float(seg["end"]),
            text=(seg.get("text") or "").strip(),
        )
        for i, seg in enumerate(output.get("segments") or [])
    ]
    text = join_segment_text(segments) if segments else (output.get("transcription") or "").strip()
    return TranscriptResult(
        language=output.get("detected_language") or language or "unknown",
        duration=segments[-1].end if segments else 0.0,
        text=text,
        segments=segments,
    )


class ReplicateBackend:
    """Transcription via Replicate's Whisper large-v3.

    Slower than Groq but with no practical upload limit, so it is used
    directly (no chunking, no retry) as a last resort.
    """

    name = "replicate"
    max_file_size_mb: float | None = None
    accepts_video = True

    def __init__(self, api_token: str, *, client: Any | None = None):
        self.api_token = api_token
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            if not self.api_token:
                raise ProviderError(
                    "REPLICATE_API_TOKEN is not configured.",
                    suggestion="Set the REPLICATE_API_TOKEN environment variable.",
                )
            self._client = replicate.Client(api_token=self.api_token)
        return self._client

    def check_ready(self) -> None:
        self._get_client()

    def transcribe(
        self,
        audio_path: Path | str,
        language: str | None = None,
        word_timestamps: bool = False,
    ) -> TranscriptResult:
        client = self._get_client()
        log_step("Replicate", f"Transcribing {Path(audio_path).name} with Whisper {WHISPER_VARIANT}")

        model_input: dict[str, Any] = {
            "model": WHISPER_VARIANT,
            "translate": False,
            "transcription": "plain text",
        }
        if language:
            model_input["language"] = language

        try:
            with open(audio_path, "rb") as f:
                output = client.run(REPLICATE_MODEL, input={**model_input, "audio": f})
        except MediaForgeError:
            raise
        except Exception as e:
            if getattr(e, "status", None) == 429:
                raise ProviderRateLimited(f"Replicate transcription failed: {e}") from e
            raise ProviderError(f"Replicate transcription failed: {e}") from e

        if not isinstance(output, dict):
            raise ProviderError(
                f"Replicate returned an unexpected payload: {type(output).__name__}"
            )
        try:
            return parse_output(output, language=language)
        except (KeyError, TypeError, ValueError) as e:
            raise ProviderError(f"Replicate returned a malformed transcription: {e}") from e
