"""Input models for the public tools."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ToolInput(BaseModel):
    """Common behaviour: reject unknown fields, trim strings."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    file_path: str = Field(min_length=1, description="Absolute path to the media file")


class TranscribeInput(ToolInput):
    language: str = Field(
        default="auto",
        description="ISO 639-1 language code (e.g. 'en', 'es'). Auto-detects if 'auto'.",
    )
    output_format: Literal["text", "srt", "vtt", "json", "verbose_json"] = "json"
    word_timestamps: bool = False

    @property
    def language_hint(self) -> str | None:
        return None if self.language in ("", "auto") else self.language


class SubtitleStyle(BaseModel):
    """Styling for burned-in subtitles."""

    model_config = ConfigDict(extra="forbid")

    font_size: int = Field(default=24, ge=8, le=96)
    font_color: str = "white"
    background_color: str = "black@0.5"
    position: Literal["bottom", "top"] = "bottom"
    font_name: str = "Arial"


class GenerateSubtitlesInput(ToolInput):
    output_format: Literal["srt", "vtt", "both"] = "srt"
    burn_in: bool = False
    language: str = "auto"
    style: SubtitleStyle = Field(default_factory=SubtitleStyle)
    max_chars_per_line: int = Field(default=42, ge=20, le=80)

    @property
    def language_hint(self) -> str | None:
        return None if self.language in ("", "auto") else self.language


class ExtractAudioInput(ToolInput):
    output_format: Literal["mp3", "wav", "aac", "flac", "ogg"] = "mp3"
    bitrate: str = Field(default="192k", pattern=r"^\d+k$")
    start_time: str | None = Field(default=None, description="HH:MM:SS or seconds")
    end_time: str | None = Field(default=None, description="HH:MM:SS or seconds")
    channels: Literal["mono", "stereo"] = "stereo"

    @field_validator("start_time", "end_time")
    @classmethod
    def _time_format(cls, value: str | None) -> str | None:
        if value is None:
            return value
        parts = value.split(":")
        if len(parts) > 3 or not all(p.replace(".", "", 1).isdigit() for p in parts):
            raise ValueError("must be HH:MM:SS or a number of seconds")
        return value


class MediaInfoInput(ToolInput):
    pass
