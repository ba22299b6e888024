"""Transcription tool: audio or video to timestamped text."""

from __future__ import annotations

import time
from pathlib import Path

from mediaforge.errors import ErrorCode
from mediaforge.models.tools import TranscribeInput
from mediaforge.subtitles.formatter import SubtitleDialect, to_subtitle_text
from mediaforge.tools.base import ToolContext, success, tool_handler
from mediaforge.utils.files import (
    temp_path,
    validate_file_exists,
    validate_file_size,
    validate_media_format,
)
from mediaforge.utils.io import write_text, write_json
from mediaforge.utils.progress import log_step, show_summary

DESCRIPTION = (
    "Transcribe audio or video file to text with timestamps. Supports mp3, mp4, "
    "wav, m4a, webm, ogg, flac formats. Returns full transcript with word-level "
    "or segment-level timestamps."
)


@tool_handler(TranscribeInput, ErrorCode.PROVIDER_ERROR)
def transcribe_media(params: TranscribeInput, ctx: ToolContext) -> dict:
    router = ctx.router
    path = Path(params.file_path)
    validate_file_exists(path)
    validate_file_size(path, ctx.settings.max_file_size_mb)
    validate_media_format(path)

    log_step(
        "Transcribe",
        f"{path.name} (format={params.output_format}, lang={params.language})",
    )
    start_time = time.time()
    result = router.transcribe(path, params.language_hint, params.word_timestamps)

    output_file: Path | None = None
    if params.output_format in ("srt", "vtt"):
        dialect = SubtitleDialect(params.output_format)
        output_file = temp_path(ctx.settings.temp_dir, "transcript", dialect.extension)
        write_text(output_file, to_subtitle_text(result.segments, dialect=dialect))
    elif params.output_format in ("json", "verbose_json"):
        output_file = temp_path(ctx.settings.temp_dir, "transcript", ".json")
        write_json(output_file, result.to_payload())

    response = success(
        language_detected=result.language,
        duration_seconds=result.duration,
        transcript=result.text,
    )
    if params.output_format != "text":
        response["segments"] = result.to_payload()["segments"]
    if output_file:
        response["output_file"] = str(output_file)

    show_summary("Transcription complete", time.time() - start_time, {
        "File": path.name,
        "Language": result.language,
        "Duration": f"{result.duration:.1f}s",
        "Segments": len(result.segments),
    })
    return response
