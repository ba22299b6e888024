"""Helpers shared by CLI commands."""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from typing import Any

import click

from mediaforge.config import load_settings
from mediaforge.errors import MediaForgeError
from mediaforge.tools.base import ToolContext, error_envelope
from mediaforge.utils.progress import log_error, set_log_level


def tool_context(ctx: click.Context) -> ToolContext:
    """Build the ToolContext for a command from the group options."""
    options = ctx.find_root().obj or {}
    settings = load_settings(options.get("config_path"))
    if options.get("log_level"):
        settings = settings.model_copy(update={"log_level": options["log_level"]})
    set_log_level(settings.log_level)
    return ToolContext(settings)


def emit(envelope: dict) -> None:
    """Print an envelope as JSON on stdout; exit 1 if it is an error."""
    click.echo(json.dumps(envelope, indent=2, ensure_ascii=False))
    if envelope.get("status") == "error":
        raise SystemExit(1)


def run_tool(
    ctx: click.Context,
    handler: Callable[..., dict],
    args: Mapping[str, Any],
) -> None:
    try:
        tool_ctx = tool_context(ctx)
    except MediaForgeError as e:
        log_error(e.message)
        emit(error_envelope(e))
        return
    emit(handler(dict(args), tool_ctx))
