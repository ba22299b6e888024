"""Public tools and their registry.

Every tool takes a dict of arguments and returns a JSON-serializable
envelope: ``{"status": "success", ...}`` or ``{"status": "error",
"error_code": ..., "message": ..., "suggestion": ...}``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from mediaforge.errors import ErrorCode
from mediaforge.tools import media, subtitles, transcribe
from mediaforge.tools.base import ToolContext, failure
from mediaforge.tools.media import extract_audio, media_info
from mediaforge.tools.subtitles import generate_subtitles
from mediaforge.tools.transcribe import transcribe_media


@dataclass(frozen=True)
class ToolSpec:
    """A tool registered under its public name."""

    name: str
    description: str
    handler: Callable[..., dict]

    @property
    def input_schema(self) -> dict:
        """JSON schema of the handler's input model."""
        return self.handler.input_model.model_json_schema()


TOOLS: dict[str, ToolSpec] = {
    spec.name: spec
    for spec in (
        ToolSpec("transcribe_media", transcribe.DESCRIPTION, transcribe_media),
        ToolSpec("generate_subtitles", subtitles.DESCRIPTION, generate_subtitles),
        ToolSpec("extract_audio", media.EXTRACT_AUDIO_DESCRIPTION, extract_audio),
        ToolSpec("media_info", media.MEDIA_INFO_DESCRIPTION, media_info),
    )
}


def list_tools() -> list[dict]:
    """Describe every registered tool along with its JSON input schema."""
    return [
        {"name": spec.name, "description": spec.description, "input_schema": spec.input_schema}
        for spec in TOOLS.values()
    ]


def call_tool(
    name: str,
    args: Mapping[str, Any] | None = None,
    ctx: ToolContext | None = None,
) -> dict:
    """Dispatch a tool call by name."""
    spec = TOOLS.get(name)
    if spec is None:
        return failure(
            ErrorCode.INVALID_PARAMS,
            f"Unknown tool: {name}",
            f"Available tools: {', '.join(TOOLS)}",
        )
    return spec.handler(args, ctx)


__all__ = [
    "TOOLS",
    "ToolContext",
    "ToolSpec",
    "call_tool",
    "extract_audio",
    "generate_subtitles",
    "list_tools",
    "media_info",
    "transcribe_media",
]
