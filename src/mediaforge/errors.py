"""Error taxonomy shared by every MediaForge component."""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Stable error codes reported to tool callers."""

    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    UNSUPPORTED_FORMAT = "UNSUPPORTED_FORMAT"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    PROVIDER_ERROR = "PROVIDER_ERROR"
    PROVIDER_RATE_LIMITED = "PROVIDER_RATE_LIMITED"
    FFMPEG_ERROR = "FFMPEG_ERROR"
    INVALID_PARAMS = "INVALID_PARAMS"
    TIMEOUT = "TIMEOUT"

    def __str__(self) -> str:
        return self.value


class MediaForgeError(Exception):
    """Base class for failures that resolve to a structured tool error."""

    code: ErrorCode = ErrorCode.PROVIDER_ERROR

    def __init__(self, message: str, *, suggestion: str | None = None):
        self.message = message
        self.suggestion = suggestion
        super().__init__(message)

    def to_dict(self) -> dict:
        data = {"error_code": self.code.value, "message": self.message}
        if self.suggestion:
            data["suggestion"] = self.suggestion
        return data


class ProviderError(MediaForgeError):
    """A transcription backend failed.

    ``fallback_eligible`` marks failures after which the router may try the
    secondary backend (API errors, missing credentials, malformed responses).
    """

    code = ErrorCode.PROVIDER_ERROR

    def __init__(
        self,
        message: str,
        *,
        suggestion: str | None = None,
        fallback_eligible: bool = False,
    ):
        super().__init__(message, suggestion=suggestion)
        self.fallback_eligible = fallback_eligible


class ProviderRateLimited(ProviderError):
    """The backend throttled the request (HTTP 429)."""

    code = ErrorCode.PROVIDER_RATE_LIMITED

    def __init__(self, message: str, *, suggestion: str | None = None):
        super().__init__(message, suggestion=suggestion, fallback_eligible=True)


class MediaProcessingError(MediaForgeError):
    """FFmpeg or FFprobe failed."""

    code = ErrorCode.FFMPEG_ERROR


class InvalidInput(MediaForgeError):
    """Malformed or missing parameters, detected before any I/O."""

    code = ErrorCode.INVALID_PARAMS


class MediaFileNotFound(MediaForgeError):
    code = ErrorCode.FILE_NOT_FOUND


class UnsupportedFormat(MediaForgeError):
    code = ErrorCode.UNSUPPORTED_FORMAT


class FileTooLarge(MediaForgeError):
    code = ErrorCode.FILE_TOO_LARGE


class OperationTimeout(MediaForgeError):
    code = ErrorCode.TIMEOUT
