"""Transcription orchestration: routing, chunking and reassembly."""

from mediaforge.transcription.chunking import (
    ChunkPlan,
    FFmpegSplitter,
    merge_results,
    plan_chunks,
    transcribe_whole,
)
from mediaforge.transcription.router import TranscriptionRouter, build_router

__all__ = [
    "ChunkPlan",
    "FFmpegSplitter",
    "TranscriptionRouter",
    "build_router",
    "merge_results",
    "plan_chunks",
    "transcribe_whole",
]
