"""Transcript data models."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Word(BaseModel):
    """A single transcribed word with timing."""

    model_config = ConfigDict(frozen=True)

    word: str
    start: float
    end: float


class TranscriptSegment(BaseModel):
    """A timestamped span of transcript text."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=0)
    start: float
    end: float
    text: str
    words: tuple[Word, ...] | None = None

    @model_validator(mode="after")
    def _check_bounds(self) -> TranscriptSegment:
        if self.end < self.start:
            raise ValueError(f"segment {self.id} ends before it starts ({self.start} > {self.end})")
        return self

    def shifted(self, offset: float, new_id: int) -> TranscriptSegment:
        """Return a copy moved ``offset`` seconds later and renumbered."""
        words = None
        if self.words is not None:
            words = tuple(
                w.model_copy(update={"start": w.start + offset, "end": w.end + offset})
                for w in self.words
            )
        return self.model_copy(update={
            "id": new_id,
            "start": self.start + offset,
            "end": self.end + offset,
            "words": words,
        })


class TranscriptResult(BaseModel):
    """Complete transcript for one orchestration call.

    Segments and words are tuples, so a result cannot be edited in place.
    """

    model_config = ConfigDict(frozen=True)

    language: str = "unknown"
    duration: float = 0.0
    text: str = ""
    segments: tuple[TranscriptSegment, ...] = ()

    @model_validator(mode="after")
    def _check_duration(self) -> TranscriptResult:
        if self.segments and self.duration < self.segments[-1].end:
            raise ValueError(
                f"duration {self.duration} is shorter than the last segment end "
                f"{self.segments[-1].end}"
            )
        return self

    def to_payload(self) -> dict:
        """Serializable form, omitting word lists that were not requested."""
        return self.model_dump(mode="json", exclude_none=True)


def join_segment_text(segments: Iterable[TranscriptSegment]) -> str:
    """Concatenate non-empty segment texts with single spaces."""
    return " ".join(seg.text for seg in segments if seg.text)
