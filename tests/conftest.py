"""Shared fakes for backends, splitters and results."""

from __future__ import annotations

from pathlib import Path

import pytest

from mediaforge.models.config import Settings
from mediaforge.models.transcript import TranscriptResult, TranscriptSegment, Word
from mediaforge.transcription.chunking import ChunkPlan
from mediaforge.utils import progress

MB = 1024 * 1024


def make_result(
    spans: list[tuple[float, float, str]],
    *,
    duration: float | None = None,
    language: str = "en",
    words: bool = False,
) -> TranscriptResult:
    """Build a TranscriptResult from (start, end, text) tuples."""
    segments = []
    for i, (start, end, text) in enumerate(spans):
        seg_words = None
        if words:
            seg_words = [Word(word=text.split()[0] if text else "", start=start, end=end)]
        segments.append(TranscriptSegment(id=i, start=start, end=end, text=text, words=seg_words))
    if duration is None:
        duration = spans[-1][1] if spans else 0.0
    return TranscriptResult(
        language=language,
        duration=duration,
        text=" ".join(t for _, _, t in spans if t),
        segments=segments,
    )


def make_file(path: Path, size_mb: float) -> Path:
    """Create a sparse file of the given size."""
    with open(path, "wb") as f:
        f.truncate(int(size_mb * MB))
    return path


class FakeBackend:
    """Backend returning (or raising) queued outcomes in order."""

    def __init__(
        self,
        outcomes: list,
        *,
        name: str = "fake",
        max_file_size_mb: float | None = 25.0,
        accepts_video: bool = False,
        ready_error: Exception | None = None,
    ):
        self.outcomes = list(outcomes)
        self.ready_error = ready_error
        self.name = name
        self.max_file_size_mb = max_file_size_mb
        self.accepts_video = accepts_video
        self.calls: list[tuple[Path, str | None, bool]] = []

    def check_ready(self):
        if self.ready_error is not None:
            raise self.ready_error

    def transcribe(self, audio_path, language=None, word_timestamps=False):
        self.calls.append((Path(audio_path), language, word_timestamps))
        if not self.outcomes:
            raise AssertionError("FakeBackend called more times than expected")
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class FakeSplitter:
    """Splitter with a fixed duration that writes empty chunk files."""

    def __init__(self, tmp_dir: Path, duration: float = 600.0, wav_size_mb: float | None = None):
        self.tmp_dir = tmp_dir
        self.duration = duration
        self.wav_size_mb = wav_size_mb
        self.converted: list[Path] = []
        self.probed: list[Path] = []
        self.cuts: list[ChunkPlan] = []
        self.discarded: list[Path] = []

    def probe_duration(self, path):
        self.probed.append(Path(path))
        return self.duration

    def to_wav(self, path) -> Path:
        """Write a stand-in WAV, the source size unless ``wav_size_mb`` is set."""
        self.converted.append(Path(path))
        size = self.wav_size_mb if self.wav_size_mb is not None else Path(path).stat().st_size / MB
        return make_file(self.tmp_dir / f"{Path(path).stem}_pcm.wav", size)

    def cut(self, path, chunk: ChunkPlan) -> Path:
        self.cuts.append(chunk)
        out = self.tmp_dir / f"chunk_{chunk.index}.wav"
        out.write_bytes(b"")
        return out

    def discard(self, path: Path) -> None:
        self.discarded.append(Path(path))


class SleepRecorder:
    def __init__(self):
        self.delays: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def sleep() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def splitter(tmp_path) -> FakeSplitter:
    chunk_dir = tmp_path / "chunks"
    chunk_dir.mkdir()
    return FakeSplitter(chunk_dir)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(temp_dir=str(tmp_path / "tmp"))


@pytest.fixture(autouse=True)
def _reset_log_level(monkeypatch):
    monkeypatch.setattr(progress, "_threshold", progress._THRESHOLDS["info"])
