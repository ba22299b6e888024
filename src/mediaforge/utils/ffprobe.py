"""FFprobe wrapper for media file metadata extraction."""

from __future__ import annotations

import json
import subprocess
from dataclasses import asdict, dataclass, field
from pathlib import Path

from mediaforge.errors import MediaFileNotFound, MediaProcessingError
from mediaforge.utils.ffmpeg import last_line
from mediaforge.utils.files import file_size_mb


@dataclass
class StreamInfo:
    """One video or audio stream."""

    codec: str
    resolution: str | None = None
    fps: int | None = None
    bitrate_kbps: int | None = None
    sample_rate: int | None = None
    channels: int | None = None


@dataclass
class MediaInfo:
    """Media file metadata extracted via FFprobe."""

    file_name: str
    file_size_mb: float
    duration_seconds: float
    duration_formatted: str
    format: str
    video: StreamInfo | None = None
    audio: StreamInfo | None = None
    subtitle_tracks: list[str] = field(default_factory=list)

    @property
    def has_subtitles(self) -> bool:
        return bool(self.subtitle_tracks)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["has_subtitles"] = self.has_subtitles
        for key in ("video", "audio"):
            if data[key] is not None:
                data[key] = {k: v for k, v in data[key].items() if v is not None}
            else:
                del data[key]
        return data


def run_ffprobe(args: list[str]) -> dict:
    """Run FFprobe with JSON output and return the parsed document."""
    cmd = ["ffprobe", "-v", "error", "-print_format", "json"] + args
    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except FileNotFoundError:
        raise MediaProcessingError(
            "ffprobe is not installed or not in PATH.",
            suggestion="Install FFmpeg, which ships ffprobe.",
        ) from None
    if result.returncode != 0:
        detail = last_line(result.stderr) or f"exit code {result.returncode}"
        raise MediaProcessingError(f"ffprobe failed: {detail}")
    try:
        return json.loads(result.stdout or "{}")
    except json.JSONDecodeError as e:
        raise MediaProcessingError(f"ffprobe returned invalid JSON: {e}") from e


def format_duration(seconds: float) -> str:
    total = int(seconds)
    return f"{total // 3600:02d}:{(total % 3600) // 60:02d}:{total % 60:02d}"


def _to_int(value) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _kbps(value) -> int | None:
    bits = _to_int(value)
    return round(bits / 1000) if bits else None


def _fps(rate: str | None) -> int | None:
    if not rate or "/" not in rate:
        return None
    num, _, den = rate.partition("/")
    num_i, den_i = _to_int(num), _to_int(den)
    if not num_i or not den_i:
        return None
    return round(num_i / den_i)


def probe_duration(path: Path | str) -> float:
    """Container duration in seconds."""
    data = run_ffprobe(["-show_format", str(path)])
    try:
        return float(data.get("format", {}).get("duration", 0))
    except (TypeError, ValueError):
        return 0.0


def probe_media(path: Path | str) -> MediaInfo:
    """Probe a media file with FFprobe and return metadata."""
    path = Path(path)
    if not path.exists():
        raise MediaFileNotFound(f"File not found: {path}")

    data = run_ffprobe(["-show_format", "-show_streams", str(path)])
    fmt = data.get("format", {})
    try:
        duration = float(fmt.get("duration", 0))
    except (TypeError, ValueError):
        duration = 0.0

    video = audio = None
    subtitle_tracks: list[str] = []

    for stream in data.get("streams", []):
        kind = stream.get("codec_type")
        if kind == "video" and video is None:
            width, height = stream.get("width"), stream.get("height")
            video = StreamInfo(
                codec=stream.get("codec_name", ""),
                resolution=f"{width}x{height}" if width and height else None,
                fps=_fps(stream.get("r_frame_rate")),
                bitrate_kbps=_kbps(stream.get("bit_rate")),
            )
        elif kind == "audio" and audio is None:
            audio = StreamInfo(
                codec=stream.get("codec_name", ""),
                sample_rate=_to_int(stream.get("sample_rate")),
                channels=_to_int(stream.get("channels")),
                bitrate_kbps=_kbps(stream.get("bit_rate")),
            )
        elif kind == "subtitle":
            tags = stream.get("tags") or {}
            subtitle_tracks.append(tags.get("language") or stream.get("codec_name", "unknown"))

    ext = path.suffix.lstrip(".").lower()

    return MediaInfo(
        file_name=path.name,
        file_size_mb=round(file_size_mb(path), 2),
        duration_seconds=round(duration, 2),
        duration_formatted=format_duration(duration),
        format=ext or fmt.get("format_name", "").split(",")[0],
        video=video,
        audio=audio,
        subtitle_tracks=subtitle_tracks,
    )
