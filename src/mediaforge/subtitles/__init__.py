"""Subtitle rendering."""

from mediaforge.subtitles.formatter import (
    SubtitleDialect,
    format_timestamp,
    to_srt,
    to_subtitle_text,
    to_vtt,
    wrap_text,
)

__all__ = [
    "SubtitleDialect",
    "format_timestamp",
    "to_srt",
    "to_subtitle_text",
    "to_vtt",
    "wrap_text",
]
