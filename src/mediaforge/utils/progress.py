"""Console logging using Rich.

Everything goes to stderr so stdout stays reserved for tool output.
"""

from __future__ import annotations

from datetime import datetime

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

console = Console(stderr=True)

_THRESHOLDS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
_threshold = _THRESHOLDS["info"]


def set_log_level(level: str) -> None:
    """Suppress messages below ``level`` (debug | info | warn | error)."""
    global _threshold
    try:
        _threshold = _THRESHOLDS[level.lower()]
    except KeyError:
        raise ValueError(f"Unknown log level: {level}") from None


def is_enabled(level: str) -> bool:
    """True if messages at ``level`` are currently shown."""
    return _THRESHOLDS[level] >= _threshold


def log(message: str, *, level: str = "info", style: str = "") -> None:
    """Print a timestamped line if ``level`` passes the threshold."""
    if not is_enabled(level):
        return
    ts = datetime.now().strftime("%H:%M:%S")
    console.print(f"[dim]\\[{ts}][/dim] {message}", style=style, highlight=False)


def log_step(step: str, message: str) -> None:
    """Log a processing step."""
    log(f"[bold cyan]{step}[/bold cyan] {message}")


def log_debug(message: str) -> None:
    """Log a dimmed debug message."""
    log(f"[dim]{message}[/dim]", level="debug")


def log_success(message: str) -> None:
    """Log a success message."""
    log(f"[green]✓[/green] {message}")


def log_warning(message: str) -> None:
    """Log a warning."""
    log(f"[yellow]⚠[/yellow] {message}", level="warn")


def log_error(message: str) -> None:
    """Log an error."""
    log(f"[red]✗[/red] {message}", level="error")


def show_summary(title: str, elapsed_seconds: float, details: dict) -> None:
    """Key/value panel shown after a long-running tool finishes."""
    if not is_enabled("info"):
        return
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold")
    table.add_column()
    for key, value in details.items():
        table.add_row(key, str(value))
    table.add_row("Elapsed", f"{elapsed_seconds:.1f}s")
    console.print(Panel(table, title=f"[bold]{title}[/bold]", border_style="green"))
