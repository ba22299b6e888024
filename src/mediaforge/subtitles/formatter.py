"""SRT and WebVTT rendering of transcript segments."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

from mediaforge.models.transcript import TranscriptSegment

DEFAULT_MAX_CHARS_PER_LINE = 42
MAX_LINES_PER_CUE = 2


class SubtitleDialect(str, Enum):
    """Subtitle encodings; they differ only in header and ms separator."""

    SRT = "srt"
    VTT = "vtt"

    @property
    def header(self) -> str | None:
        return "WEBVTT" if self is SubtitleDialect.VTT else None

    @property
    def ms_separator(self) -> str:
        return "." if self is SubtitleDialect.VTT else ","

    @property
    def extension(self) -> str:
        return f".{self.value}"


def format_timestamp(seconds: float, dialect: SubtitleDialect = SubtitleDialect.SRT) -> str:
    """Format seconds as ``HH:MM:SS,mmm`` (SRT) or ``HH:MM:SS.mmm`` (VTT)."""
    total_ms = max(0, int(round(seconds * 1000)))
    total_s, millis = divmod(total_ms, 1000)
    hours, rem = divmod(total_s, 3600)
    minutes, secs = divmod(rem, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}{dialect.ms_separator}{millis:03d}"


def _break_long_word(word: str, max_chars: int) -> list[str]:
    return [word[i:i + max_chars] for i in range(0, len(word), max_chars)]


def wrap_text(
    text: str,
    max_chars: int = DEFAULT_MAX_CHARS_PER_LINE,
    max_lines: int = MAX_LINES_PER_CUE,
) -> list[str]:
    """Greedily pack words into at most ``max_lines`` lines of ``max_chars``.

    Words that do not fit in ``max_lines`` are dropped.
    """
    words: list[str] = []
    for word in text.split():
        words.extend(_break_long_word(word, max_chars) if len(word) > max_chars else [word])

    lines: list[str] = []
    current = ""
    for word in words:
        if not current:
            current = word
        elif len(current) + len(word) + 1 <= max_chars:
            current = f"{current} {word}"
        else:
            lines.append(current)
            if len(lines) == max_lines:
                return lines
            current = word
    if current:
        lines.append(current)
    return lines[:max_lines]


def to_subtitle_text(
    segments: Sequence[TranscriptSegment],
    max_chars_per_line: int = DEFAULT_MAX_CHARS_PER_LINE,
    dialect: SubtitleDialect = SubtitleDialect.SRT,
) -> str:
    """Render segments as numbered cues, ending with one trailing newline."""
    blocks: list[str] = []
    if dialect.header:
        blocks.append(dialect.header)

    for number, seg in enumerate(segments, start=1):
        timing = f"{format_timestamp(seg.start, dialect)} --> {format_timestamp(seg.end, dialect)}"
        lines = wrap_text(seg.text, max_chars_per_line)
        blocks.append("\n".join([str(number), timing, *lines]))

    if not blocks:
        return ""
    return "\n\n".join(blocks) + "\n"


def to_srt(
    segments: Sequence[TranscriptSegment],
    max_chars_per_line: int = DEFAULT_MAX_CHARS_PER_LINE,
) -> str:
    """Render segments as SubRip cues."""
    return to_subtitle_text(segments, max_chars_per_line, SubtitleDialect.SRT)


def to_vtt(
    segments: Sequence[TranscriptSegment],
    max_chars_per_line: int = DEFAULT_MAX_CHARS_PER_LINE,
) -> str:
    """Render segments as a WebVTT document."""
    return to_subtitle_text(segments, max_chars_per_line, SubtitleDialect.VTT)
