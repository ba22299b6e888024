"""mediaforge tools / call: list and invoke tools by name."""

from __future__ import annotations

import json

import click
from rich.console import Console
from rich.table import Table

from mediaforge.cli.common import emit, run_tool
from mediaforge.errors import ErrorCode
from mediaforge.tools import TOOLS, call_tool, list_tools
from mediaforge.tools.base import failure

console = Console()


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Print tool schemas as JSON")
def tools_cmd(as_json: bool) -> None:
    """List the available tools."""
    if as_json:
        click.echo(json.dumps(list_tools(), indent=2))
        return

    table = Table(title="MediaForge Tools", show_lines=True)
    table.add_column("Tool", style="bold cyan")
    table.add_column("Description")
    for spec in TOOLS.values():
        table.add_row(spec.name, spec.description)
    console.print(table)


@click.command()
@click.argument("name")
@click.option(
    "--args", "-a", "raw_args",
    default="{}",
    help="Tool arguments as a JSON object",
)
@click.pass_context
def call_cmd(ctx: click.Context, name: str, raw_args: str) -> None:
    """Invoke a tool by name with JSON arguments."""
    try:
        args = json.loads(raw_args)
    except json.JSONDecodeError as e:
        emit(failure(ErrorCode.INVALID_PARAMS, f"--args is not valid JSON: {e}"))
        return
    if not isinstance(args, dict):
        emit(failure(ErrorCode.INVALID_PARAMS, "--args must be a JSON object"))
        return

    run_tool(ctx, lambda tool_args, tool_ctx: call_tool(name, tool_args, tool_ctx), args)
