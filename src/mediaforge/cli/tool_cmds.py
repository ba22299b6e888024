"""One CLI command per tool."""

from __future__ import annotations

import click

from mediaforge.cli.common import run_tool
from mediaforge.tools import extract_audio, generate_subtitles, media_info, transcribe_media


def _drop_unset(**kwargs) -> dict:
    return {k: v for k, v in kwargs.items() if v is not None}


@click.command()
@click.argument("file_path", type=click.Path())
@click.option("--language", "-l", default=None, help="ISO 639-1 code, or 'auto'")
@click.option(
    "--format", "-f", "output_format",
    default=None,
    type=click.Choice(["text", "srt", "vtt", "json", "verbose_json"]),
    help="Output format (default: json)",
)
@click.option("--word-timestamps", is_flag=True, help="Include word-level timing")
@click.pass_context
def transcribe_cmd(
    ctx: click.Context,
    file_path: str,
    language: str | None,
    output_format: str | None,
    word_timestamps: bool,
) -> None:
    """Transcribe an audio or video file."""
    run_tool(ctx, transcribe_media, _drop_unset(
        file_path=file_path,
        language=language,
        output_format=output_format,
        word_timestamps=word_timestamps,
    ))


@click.command()
@click.argument("file_path", type=click.Path())
@click.option(
    "--format", "-f", "output_format",
    default=None,
    type=click.Choice(["srt", "vtt", "both"]),
    help="Subtitle format (default: srt)",
)
@click.option("--burn-in", is_flag=True, help="Render subtitles into the video")
@click.option("--language", "-l", default=None, help="ISO 639-1 code, or 'auto'")
@click.option("--max-chars", "max_chars_per_line", default=None, type=int, help="Characters per line (20-80)")
@click.option("--font-size", default=None, type=int)
@click.option("--font-color", default=None)
@click.option("--background-color", default=None)
@click.option("--position", default=None, type=click.Choice(["bottom", "top"]))
@click.option("--font-name", default=None)
@click.pass_context
def subtitles_cmd(
    ctx: click.Context,
    file_path: str,
    output_format: str | None,
    burn_in: bool,
    language: str | None,
    max_chars_per_line: int | None,
    font_size: int | None,
    font_color: str | None,
    background_color: str | None,
    position: str | None,
    font_name: str | None,
) -> None:
    """Generate SRT/VTT subtitles for a video."""
    style = _drop_unset(
        font_size=font_size,
        font_color=font_color,
        background_color=background_color,
        position=position,
        font_name=font_name,
    )
    run_tool(ctx, generate_subtitles, _drop_unset(
        file_path=file_path,
        output_format=output_format,
        burn_in=burn_in,
        language=language,
        max_chars_per_line=max_chars_per_line,
        style=style or None,
    ))


@click.command()
@click.argument("file_path", type=click.Path())
@click.option(
    "--format", "-f", "output_format",
    default=None,
    type=click.Choice(["mp3", "wav", "aac", "flac", "ogg"]),
    help="Audio format (default: mp3)",
)
@click.option("--bitrate", "-b", default=None, help="e.g. 128k, 192k, 320k")
@click.option("--start", "start_time", default=None, help="HH:MM:SS or seconds")
@click.option("--end", "end_time", default=None, help="HH:MM:SS or seconds")
@click.option("--channels", default=None, type=click.Choice(["mono", "stereo"]))
@click.pass_context
def extract_audio_cmd(
    ctx: click.Context,
    file_path: str,
    output_format: str | None,
    bitrate: str | None,
    start_time: str | None,
    end_time: str | None,
    channels: str | None,
) -> None:
    """Extract the audio track of a video."""
    run_tool(ctx, extract_audio, _drop_unset(
        file_path=file_path,
        output_format=output_format,
        bitrate=bitrate,
        start_time=start_time,
        end_time=end_time,
        channels=channels,
    ))


@click.command()
@click.argument("file_path", type=click.Path())
@click.pass_context
def info_cmd(ctx: click.Context, file_path: str) -> None:
    """Show media metadata."""
    run_tool(ctx, media_info, {"file_path": file_path})
