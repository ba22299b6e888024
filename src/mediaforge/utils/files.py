"""Temp-file naming, input validation and age-based cleanup."""

from __future__ import annotations

import time
import uuid
from pathlib import Path

from mediaforge.errors import FileTooLarge, MediaFileNotFound, UnsupportedFormat
from mediaforge.utils.progress import log_debug, log_warning

SUPPORTED_VIDEO = (".mp4", ".mkv", ".mov", ".avi", ".webm", ".flv", ".wmv", ".m4v")
SUPPORTED_AUDIO = (".mp3", ".wav", ".m4a", ".ogg", ".flac", ".aac", ".wma", ".webm")
SUPPORTED_MEDIA = tuple(dict.fromkeys(SUPPORTED_VIDEO + SUPPORTED_AUDIO))

_BYTES_PER_MB = 1024 * 1024


def temp_path(temp_dir: Path | str, prefix: str, ext: str) -> Path:
    """Return a fresh path ``<temp_dir>/<prefix>_<id><ext>``."""
    temp_dir = Path(temp_dir)
    temp_dir.mkdir(parents=True, exist_ok=True)
    return temp_dir / f"{prefix}_{uuid.uuid4().hex[:8]}{ext}"


def file_size_mb(path: Path | str) -> float:
    """Size of ``path`` in MiB."""
    return Path(path).stat().st_size / _BYTES_PER_MB


def is_video_file(path: Path | str) -> bool:
    """True if the extension is a supported video container."""
    return Path(path).suffix.lower() in SUPPORTED_VIDEO


def validate_file_exists(path: Path | str) -> None:
    """Raise MediaFileNotFound unless ``path`` is a regular file."""
    if not Path(path).is_file():
        raise MediaFileNotFound(f"File not found: {path}")


def validate_file_size(path: Path | str, max_size_mb: float) -> None:
    """Raise FileTooLarge if ``path`` exceeds ``max_size_mb``."""
    size = file_size_mb(path)
    if size > max_size_mb:
        raise FileTooLarge(
            f"File is {size:.1f}MB, max is {max_size_mb}MB",
            suggestion="Trim the file first, e.g. with extract_audio and a time range.",
        )


def validate_media_format(path: Path | str) -> None:
    """Raise UnsupportedFormat for extensions outside SUPPORTED_MEDIA."""
    ext = Path(path).suffix.lower()
    if ext not in SUPPORTED_MEDIA:
        raise UnsupportedFormat(
            f"Unsupported format: {ext or '(none)'}",
            suggestion=f"Supported formats: {', '.join(SUPPORTED_MEDIA)}",
        )


def validate_video_format(path: Path | str) -> None:
    """Raise UnsupportedFormat unless the extension is a video container."""
    ext = Path(path).suffix.lower()
    if ext not in SUPPORTED_VIDEO:
        raise UnsupportedFormat(
            f"Expected a video file, got: {ext or '(none)'}",
            suggestion=f"Supported video formats: {', '.join(SUPPORTED_VIDEO)}",
        )


def cleanup_old_files(temp_dir: Path | str, max_age_hours: float) -> int:
    """Delete files in ``temp_dir`` older than ``max_age_hours``.

    Returns the number of files removed.
    """
    temp_dir = Path(temp_dir)
    if not temp_dir.is_dir():
        return 0

    cutoff = time.time() - max_age_hours * 3600
    removed = 0
    for path in temp_dir.iterdir():
        if not path.is_file():
            continue
        try:
            if path.stat().st_mtime < cutoff:
                path.unlink()
                removed += 1
                log_debug(f"Cleaned up old file: {path.name}")
        except OSError as e:
            log_warning(f"Could not remove {path.name}: {e}")
    return removed
