"""Size-driven chunking and reassembly of transcripts.

Backends with a per-request upload limit cannot take long recordings in one
piece. Oversized audio is cut into equal-duration chunks, each chunk is
transcribed through the rate-limit retry, and the per-chunk transcripts are
folded into one global transcript in chunk order:

1. Language comes from the first chunk (the recording is assumed monolingual)
2. Texts are joined with single spaces
3. Segment ids are re-based on the running segment count
4. Timestamps are shifted by the summed *reported* duration of prior chunks,
   not by the nominal cut points, since backends may report a chunk length
   slightly different from the requested one
5. The total duration is the sum of reported chunk durations

Any chunk failure aborts the whole call; no partial transcript is returned.
"""

from __future__ import annotations

import math
import time
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import Protocol

from mediaforge.errors import InvalidInput, MediaProcessingError
from mediaforge.models.transcript import TranscriptResult, TranscriptSegment
from mediaforge.providers.base import TranscriptionBackend
from mediaforge.utils.ffmpeg import cut_audio, to_transcription_audio
from mediaforge.utils.ffprobe import probe_duration
from mediaforge.utils.files import file_size_mb, temp_path
from mediaforge.utils.progress import log_step
from mediaforge.utils.retry import call_with_retry

DEFAULT_SAFETY_MARGIN_MB = 1.0


@dataclass(frozen=True)
class ChunkPlan:
    """The slice ``[start, start + duration)`` of the source audio."""

    index: int
    start: float
    duration: float

    @property
    def end(self) -> float:
        return self.start + self.duration


class MediaSplitter(Protocol):
    """Probes and cuts audio for the chunking engine.

    ``to_wav`` produces the same 16 kHz mono PCM encoding the chunks are cut
    in, so a compressed source can be sized the way its chunks will be.
    """

    def probe_duration(self, path: Path | str) -> float: ...
    def to_wav(self, path: Path | str) -> Path: ...
    def cut(self, path: Path | str, chunk: ChunkPlan) -> Path: ...
    def discard(self, path: Path) -> None: ...


class FFmpegSplitter:
    """MediaSplitter backed by FFprobe/FFmpeg, writing chunks to ``temp_dir``."""

    def __init__(self, temp_dir: Path | str):
        self.temp_dir = Path(temp_dir)

    def probe_duration(self, path: Path | str) -> float:
        return probe_duration(path)

    def to_wav(self, path: Path | str) -> Path:
        output = temp_path(self.temp_dir, "pcm", ".wav")
        return to_transcription_audio(path, output)

    def cut(self, path: Path | str, chunk: ChunkPlan) -> Path:
        output = temp_path(self.temp_dir, f"chunk_{chunk.index}", ".wav")
        return cut_audio(path, output, chunk.start, chunk.duration)

    def discard(self, path: Path) -> None:
        Path(path).unlink(missing_ok=True)


def plan_chunks(
    size_mb: float,
    total_duration: float,
    limit_mb: float,
    safety_margin_mb: float = DEFAULT_SAFETY_MARGIN_MB,
) -> list[ChunkPlan]:
    """Split ``[0, total_duration)`` into contiguous equal-duration chunks.

    The chunk count is ``ceil(size / (limit - margin))``; the margin absorbs
    the re-encoding overhead of the cut files.
    """
    target_mb = limit_mb - safety_margin_mb
    if target_mb <= 0:
        raise InvalidInput(
            f"Chunk safety margin ({safety_margin_mb}MB) must be smaller than "
            f"the backend limit ({limit_mb}MB)"
        )
    if total_duration <= 0:
        raise MediaProcessingError(
            "Could not determine audio duration for chunking",
            suggestion="Check that the file is a valid, non-empty media file.",
        )

    num_chunks = max(1, math.ceil(size_mb / target_mb))
    chunk_duration = total_duration / num_chunks
    return [
        ChunkPlan(index=i, start=i * chunk_duration, duration=chunk_duration)
        for i in range(num_chunks)
    ]


def merge_results(results: Iterable[TranscriptResult]) -> TranscriptResult:
    """Fold per-chunk transcripts, in order, into one global transcript."""
    language: str | None = None
    texts: list[str] = []
    segments: list[TranscriptSegment] = []
    offset = 0.0

    for result in results:
        if language is None:
            language = result.language
        if result.text:
            texts.append(result.text)
        for seg in result.segments:
            segments.append(seg.shifted(offset, new_id=len(segments)))
        offset += result.duration

    return TranscriptResult(
        language=language or "unknown",
        duration=offset,
        text=" ".join(texts),
        segments=segments,
    )


def _transcribe_chunks(
    audio_path: Path | str,
    chunks: list[ChunkPlan],
    backend: TranscriptionBackend,
    language: str | None,
    word_timestamps: bool,
    splitter: MediaSplitter,
    sleep: Callable[[float], None],
) -> Iterator[TranscriptResult]:
    for chunk in chunks:
        log_step(
            "Chunk",
            f"{chunk.index + 1}/{len(chunks)} "
            f"[{chunk.start:.1f}s → {chunk.end:.1f}s]",
        )
        chunk_path = splitter.cut(audio_path, chunk)
        yield call_with_retry(
            partial(backend.transcribe, chunk_path, language, word_timestamps),
            sleep=sleep,
        )
        # Resumed only once the consumer has folded the result
        splitter.discard(chunk_path)


def transcribe_whole(
    audio_path: Path | str,
    backend: TranscriptionBackend,
    language: str | None = None,
    word_timestamps: bool = False,
    *,
    splitter: MediaSplitter,
    safety_margin_mb: float = DEFAULT_SAFETY_MARGIN_MB,
    sleep: Callable[[float], None] = time.sleep,
) -> TranscriptResult:
    """Transcribe ``audio_path`` with ``backend``, chunking if it is too large.

    Oversized non-WAV input is converted to PCM WAV and sized again before
    any chunk is planned.
    """
    limit = backend.max_file_size_mb
    size = file_size_mb(audio_path)

    if limit is None or size <= limit:
        return call_with_retry(
            partial(backend.transcribe, audio_path, language, word_timestamps),
            sleep=sleep,
        )

    if Path(audio_path).suffix.lower() != ".wav":
        log_step("Audio", f"Converting {Path(audio_path).name} to WAV before chunking")
        pcm_path = splitter.to_wav(audio_path)
        try:
            return transcribe_whole(
                pcm_path, backend, language, word_timestamps,
                splitter=splitter, safety_margin_mb=safety_margin_mb, sleep=sleep,
            )
        finally:
            splitter.discard(pcm_path)

    duration = splitter.probe_duration(audio_path)
    chunks = plan_chunks(size, duration, limit, safety_margin_mb)
    log_step(
        "Chunk",
        f"{Path(audio_path).name} is {size:.1f}MB (limit {limit:.0f}MB), "
        f"splitting into {len(chunks)} chunks of {chunks[0].duration:.1f}s",
    )

    return merge_results(
        _transcribe_chunks(
            audio_path, chunks, backend, language, word_timestamps, splitter, sleep,
        )
    )
