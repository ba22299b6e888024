"""Root CLI group for MediaForge."""

from __future__ import annotations

import click

from mediaforge import __version__
from mediaforge.models.config import LOG_LEVELS


@click.group()
@click.version_option(version=__version__, prog_name="mediaforge")
@click.option(
    "--config", "-c",
    "config_path",
    default=None,
    type=click.Path(dir_okay=False),
    help="YAML settings file (environment variables take precedence)",
)
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(LOG_LEVELS),
    help="Override MEDIAFORGE_LOG_LEVEL",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, log_level: str | None) -> None:
    """MediaForge: transcription and subtitle tools."""
    ctx.obj = {"config_path": config_path, "log_level": log_level}


# Import and register subcommands
from mediaforge.cli.call_cmd import call_cmd, tools_cmd  # noqa: E402
from mediaforge.cli.cleanup_cmd import cleanup_cmd  # noqa: E402
from mediaforge.cli.tool_cmds import (  # noqa: E402
    extract_audio_cmd,
    info_cmd,
    subtitles_cmd,
    transcribe_cmd,
)

cli.add_command(transcribe_cmd, "transcribe")
cli.add_command(subtitles_cmd, "subtitles")
cli.add_command(extract_audio_cmd, "extract-audio")
cli.add_command(info_cmd, "info")
cli.add_command(tools_cmd, "tools")
cli.add_command(call_cmd, "call")
cli.add_command(cleanup_cmd, "cleanup")
