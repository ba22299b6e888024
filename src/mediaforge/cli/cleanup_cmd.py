"""mediaforge cleanup: remove stale temp files."""

from __future__ import annotations

import click

from mediaforge.cli.common import emit, tool_context
from mediaforge.errors import MediaForgeError
from mediaforge.tools.base import error_envelope, success
from mediaforge.utils.files import cleanup_old_files
from mediaforge.utils.progress import log_success


@click.command()
@click.option(
    "--max-age-hours",
    default=None,
    type=float,
    help="Age threshold (default: MEDIAFORGE_CLEANUP_AFTER_HOURS)",
)
@click.pass_context
def cleanup_cmd(ctx: click.Context, max_age_hours: float | None) -> None:
    """Delete temp files older than the cleanup threshold."""
    try:
        settings = tool_context(ctx).settings
    except MediaForgeError as e:
        emit(error_envelope(e))
        return

    hours = settings.cleanup_after_hours if max_age_hours is None else max_age_hours
    removed = cleanup_old_files(settings.temp_dir, hours)
    log_success(f"Removed {removed} file(s) older than {hours}h from {settings.temp_dir}")
    emit(success(removed=removed, temp_dir=settings.temp_dir))
