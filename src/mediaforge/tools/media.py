"""FFmpeg-only tools for audio extraction and media metadata."""

from __future__ import annotations

from pathlib import Path

from mediaforge.errors import ErrorCode
from mediaforge.models.tools import ExtractAudioInput, MediaInfoInput
from mediaforge.tools.base import ToolContext, success, tool_handler
from mediaforge.utils.ffmpeg import extract_audio_track
from mediaforge.utils.ffprobe import probe_media
from mediaforge.utils.files import (
    file_size_mb,
    temp_path,
    validate_file_exists,
    validate_file_size,
    validate_media_format,
    validate_video_format,
)
from mediaforge.utils.progress import log_step

EXTRACT_AUDIO_DESCRIPTION = (
    "Extract audio track from a video file. Supports output as mp3, wav, aac, "
    "flac, or ogg. Can also extract a specific time range."
)
MEDIA_INFO_DESCRIPTION = (
    "Get detailed metadata and technical information about an audio or video "
    "file. Returns duration, codecs, resolution, bitrate, and more."
)


@tool_handler(ExtractAudioInput, ErrorCode.FFMPEG_ERROR)
def extract_audio(params: ExtractAudioInput, ctx: ToolContext) -> dict:
    path = Path(params.file_path)
    validate_file_exists(path)
    validate_file_size(path, ctx.settings.max_file_size_mb)
    validate_video_format(path)

    log_step(
        "Extract",
        f"{path.name} -> {params.output_format} @ {params.bitrate}",
    )
    output = extract_audio_track(
        path,
        temp_path(ctx.settings.temp_dir, "audio", f".{params.output_format}"),
        fmt=params.output_format,
        bitrate=params.bitrate,
        channels=1 if params.channels == "mono" else 2,
        start_time=params.start_time,
        end_time=params.end_time,
    )
    info = probe_media(output)

    return success(
        output_file=str(output),
        format=params.output_format,
        duration_seconds=info.duration_seconds,
        file_size_mb=round(file_size_mb(output), 2),
        sample_rate=info.audio.sample_rate if info.audio and info.audio.sample_rate else 44100,
        channels=params.channels,
    )


@tool_handler(MediaInfoInput, ErrorCode.FFMPEG_ERROR)
def media_info(params: MediaInfoInput, ctx: ToolContext) -> dict:
    path = Path(params.file_path)
    validate_file_exists(path)
    validate_media_format(path)

    log_step("Info", path.name)
    return success(**probe_media(path).to_dict())
