"""Tool plumbing: shared context, argument validation and result envelopes."""

from __future__ import annotations

import functools
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel, ValidationError

from mediaforge.config import load_settings
from mediaforge.errors import ErrorCode, MediaForgeError
from mediaforge.models.config import Settings
from mediaforge.transcription.router import TranscriptionRouter, build_router
from mediaforge.utils.progress import log_error, set_log_level


class ToolContext:
    """Settings plus the lazily built transcription router."""

    def __init__(self, settings: Settings, router: TranscriptionRouter | None = None):
        self.settings = settings
        self._router = router

    @classmethod
    def from_env(cls, config_path: str | None = None) -> ToolContext:
        settings = load_settings(config_path)
        set_log_level(settings.log_level)
        return cls(settings)

    @property
    def router(self) -> TranscriptionRouter:
        if self._router is None:
            self._router = build_router(self.settings)
        return self._router


def success(**payload: Any) -> dict:
    return {"status": "success", **payload}


def failure(code: ErrorCode, message: str, suggestion: str | None = None) -> dict:
    envelope = {"status": "error", "error_code": code.value, "message": message}
    if suggestion:
        envelope["suggestion"] = suggestion
    return envelope


def error_envelope(exc: MediaForgeError) -> dict:
    return {"status": "error", **exc.to_dict()}


def _describe_validation_error(exc: ValidationError) -> str:
    problems = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"]) or "arguments"
        problems.append(f"'{field}': {err['msg']}")
    return "; ".join(problems)


def tool_handler(
    input_model: type[BaseModel],
    default_code: ErrorCode,
) -> Callable[[Callable[[Any, ToolContext], dict]], Callable[..., dict]]:
    """Turn ``fn(params, ctx) -> dict`` into ``tool(args, ctx=None) -> envelope``.

    The wrapped tool never raises: validation failures, MediaForge errors and
    unexpected exceptions all come back as error envelopes.
    """

    def decorator(fn: Callable[[Any, ToolContext], dict]) -> Callable[..., dict]:
        @functools.wraps(fn)
        def wrapper(
            args: Mapping[str, Any] | None = None,
            ctx: ToolContext | None = None,
        ) -> dict:
            try:
                params = input_model.model_validate(dict(args or {}))
                return fn(params, ctx or ToolContext.from_env())
            except ValidationError as e:
                message = _describe_validation_error(e)
                log_error(f"{fn.__name__}: invalid parameters: {message}")
                return failure(ErrorCode.INVALID_PARAMS, message)
            except MediaForgeError as e:
                log_error(f"{fn.__name__}: {e.message}")
                return error_envelope(e)
            except Exception as e:
                log_error(f"{fn.__name__}: unexpected {type(e).__name__}: {e}")
                return failure(default_code, str(e) or type(e).__name__)

        wrapper.input_model = input_model
        return wrapper

    return decorator
