"""Subtitle tool: SRT/VTT files, optionally burned into the video."""

from __future__ import annotations

from pathlib import Path

from mediaforge.errors import ErrorCode
from mediaforge.models.tools import GenerateSubtitlesInput
from mediaforge.subtitles.formatter import SubtitleDialect, to_subtitle_text
from mediaforge.tools.base import ToolContext, success, tool_handler
from mediaforge.utils.ffmpeg import burn_subtitles
from mediaforge.utils.files import (
    temp_path,
    validate_file_exists,
    validate_file_size,
    validate_video_format,
)
from mediaforge.utils.io import write_text
from mediaforge.utils.progress import log_step, log_success

DESCRIPTION = (
    "Generate subtitles for a video file. Can output SRT/VTT files or burn "
    "subtitles directly into the video. Supports styling options for burned-in "
    "subtitles."
)


@tool_handler(GenerateSubtitlesInput, ErrorCode.PROVIDER_ERROR)
def generate_subtitles(params: GenerateSubtitlesInput, ctx: ToolContext) -> dict:
    router = ctx.router
    path = Path(params.file_path)
    validate_file_exists(path)
    validate_file_size(path, ctx.settings.max_file_size_mb)
    validate_video_format(path)

    log_step(
        "Subtitles",
        f"{path.name} (format={params.output_format}, burn_in={params.burn_in})",
    )
    result = router.transcribe(path, params.language_hint)

    response = success(
        total_segments=len(result.segments),
        duration_seconds=result.duration,
        language_detected=result.language,
    )
    temp_dir = ctx.settings.temp_dir

    if params.output_format in ("srt", "both"):
        srt_path = temp_path(temp_dir, "subtitles", ".srt")
        write_text(
            srt_path,
            to_subtitle_text(result.segments, params.max_chars_per_line, SubtitleDialect.SRT),
        )
        response["subtitle_file"] = str(srt_path)

        if params.burn_in:
            log_step("Subtitles", "Burning subtitles into video")
            burned = burn_subtitles(
                path, srt_path, temp_path(temp_dir, "subtitled", ".mp4"), params.style,
            )
            response["burned_video"] = str(burned)

    if params.output_format in ("vtt", "both"):
        vtt_path = temp_path(temp_dir, "subtitles", ".vtt")
        write_text(
            vtt_path,
            to_subtitle_text(result.segments, params.max_chars_per_line, SubtitleDialect.VTT),
        )
        response["subtitle_file_vtt"] = str(vtt_path)
        response.setdefault("subtitle_file", str(vtt_path))

    log_success(f"Generated {len(result.segments)} subtitle cues for {path.name}")
    return response
