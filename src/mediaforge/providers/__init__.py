"""Transcription backends.

- ``TranscriptionBackend`` protocol and ``Provider`` enum
- ``GroqBackend`` (primary, size-limited, word timestamps)
- ``ReplicateBackend`` (fallback, no size limit)
"""

from mediaforge.providers.base import Provider, TranscriptionBackend
from mediaforge.providers.groq import GroqBackend
from mediaforge.providers.replicate import ReplicateBackend

__all__ = [
    "GroqBackend",
    "Provider",
    "ReplicateBackend",
    "TranscriptionBackend",
]
