"""FFmpeg command builder and runner."""

from __future__ import annotations

import subprocess
from pathlib import Path

from mediaforge.errors import MediaProcessingError
from mediaforge.models.tools import SubtitleStyle
from mediaforge.utils.progress import log_debug

# Format the transcription backends expect: 16 kHz mono 16-bit PCM
TRANSCRIPTION_SAMPLE_RATE = 16000
TRANSCRIPTION_CODEC = "pcm_s16le"

AUDIO_CODECS = {
    "mp3": "libmp3lame",
    "wav": "pcm_s16le",
    "aac": "aac",
    "flac": "flac",
    "ogg": "libvorbis",
}

ASS_COLORS = {
    "white": "&H00FFFFFF",
    "black": "&H00000000",
    "red": "&H000000FF",
    "yellow": "&H0000FFFF",
    "green": "&H0000FF00",
    "blue": "&H00FF0000",
}


def last_line(text: str) -> str:
    """Last non-empty line of tool output, for concise error messages."""
    for line in reversed(text.splitlines()):
        if line.strip():
            return line.strip()
    return ""


class FFmpegError(MediaProcessingError):
    """Raised when an FFmpeg command fails."""

    def __init__(self, cmd: list[str], returncode: int, stderr: str):
        self.cmd = cmd
        self.returncode = returncode
        self.stderr = stderr
        detail = last_line(stderr) or f"exit code {returncode}"
        super().__init__(f"FFmpeg failed: {detail}")


def run_ffmpeg(args: list[str], *, check: bool = True) -> subprocess.CompletedProcess:
    """Run an FFmpeg command with standard options."""
    cmd = ["ffmpeg", "-y", "-hide_banner", "-loglevel", "error"] + args
    log_debug(" ".join(cmd))
    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except FileNotFoundError:
        raise MediaProcessingError(
            "FFmpeg is not installed or not in PATH.",
            suggestion="Install it with your package manager, e.g. `apt install ffmpeg`.",
        ) from None
    if check and result.returncode != 0:
        raise FFmpegError(cmd, result.returncode, result.stderr)
    return result


def to_transcription_audio(input_path: Path | str, output_path: Path | str) -> Path:
    """Demux and downmix any media file to 16 kHz mono PCM WAV."""
    run_ffmpeg([
        "-i", str(input_path),
        "-vn",
        "-c:a", TRANSCRIPTION_CODEC,
        "-ar", str(TRANSCRIPTION_SAMPLE_RATE),
        "-ac", "1",
        str(output_path),
    ])
    return Path(output_path)


def cut_audio(
    input_path: Path | str,
    output_path: Path | str,
    start: float,
    duration: float,
) -> Path:
    """Cut ``[start, start+duration)`` to 16 kHz mono PCM WAV.

    FFmpeg stops at end-of-stream, so a range running past the end is clamped.
    """
    run_ffmpeg([
        "-ss", f"{start:.3f}",
        "-i", str(input_path),
        "-t", f"{duration:.3f}",
        "-vn",
        "-c:a", TRANSCRIPTION_CODEC,
        "-ar", str(TRANSCRIPTION_SAMPLE_RATE),
        "-ac", "1",
        str(output_path),
    ])
    return Path(output_path)


def extract_audio_track(
    input_path: Path | str,
    output_path: Path | str,
    *,
    fmt: str = "mp3",
    bitrate: str = "192k",
    channels: int = 2,
    start_time: str | None = None,
    end_time: str | None = None,
) -> Path:
    """Extract the audio track of a video in the given format."""
    args = ["-i", str(input_path)]
    if start_time:
        args.extend(["-ss", start_time])
    if end_time:
        args.extend(["-to", end_time])
    args.extend([
        "-vn",
        "-c:a", AUDIO_CODECS.get(fmt, "libmp3lame"),
        "-ac", str(channels),
    ])
    # Bitrate is meaningless for lossless codecs
    if fmt not in ("wav", "flac"):
        args.extend(["-b:a", bitrate])
    args.append(str(output_path))
    run_ffmpeg(args)
    return Path(output_path)


def color_to_ass(color: str) -> str:
    """Map a color name (optionally with ``@alpha``) to an ASS color code."""
    name, _, alpha = color.lower().partition("@")
    code = ASS_COLORS.get(name, ASS_COLORS["white"])
    if alpha:
        try:
            transparency = round((1.0 - float(alpha)) * 255)
        except ValueError:
            return code
        transparency = min(max(transparency, 0), 255)
        code = f"&H{transparency:02X}{code[4:]}"
    return code


def _escape_filter_path(path: Path | str) -> str:
    return str(path).replace("\\", "/").replace(":", "\\:").replace("'", "'\\''")


def burn_subtitles(
    video_path: Path | str,
    srt_path: Path | str,
    output_path: Path | str,
    style: SubtitleStyle,
) -> Path:
    """Render an SRT file into the video frames."""
    top = style.position == "top"
    force_style = ",".join([
        f"FontSize={style.font_size}",
        f"FontName={style.font_name}",
        f"PrimaryColour={color_to_ass(style.font_color)}",
        f"BackColour={color_to_ass(style.background_color)}",
        f"MarginV={40 if top else 20}",
        f"Alignment={6 if top else 2}",
    ])
    run_ffmpeg([
        "-i", str(video_path),
        "-vf", f"subtitles='{_escape_filter_path(srt_path)}':force_style='{force_style}'",
        "-c:a", "copy",
        str(output_path),
    ])
    return Path(output_path)
