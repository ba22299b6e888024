"""MediaForge: media transcription and subtitle generation tools."""

__version__ = "1.0.0"
