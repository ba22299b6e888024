"""Pydantic data models for MediaForge."""

from mediaforge.models.config import Settings
from mediaforge.models.tools import (
    ExtractAudioInput,
    GenerateSubtitlesInput,
    MediaInfoInput,
    SubtitleStyle,
    TranscribeInput,
)
from mediaforge.models.transcript import TranscriptResult, TranscriptSegment, Word

__all__ = [
    "Settings",
    "TranscriptResult",
    "TranscriptSegment",
    "Word",
    "TranscribeInput",
    "GenerateSubtitlesInput",
    "ExtractAudioInput",
    "MediaInfoInput",
    "SubtitleStyle",
]
