"""Rich helpers for consistent CLI diagnostics."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

# -- Color scheme --
ACCENT = "bright_yellow"
HEADING = "bold cyan"
ERROR = "bold red"
DIM = "dim"


def get_console(*, stderr: bool = False) -> Console:
    """Return a Rich console writing to stdout (or stderr)."""
    return Console(stderr=stderr, highlight=False)


def error_line(message: str, *, console: Console | None = None) -> None:
    """Print a one-line ``Error: ...`` diagnostic."""
    if console is None:
        console = get_console(stderr=True)
    console.print(f"[{ERROR}]Error:[/{ERROR}] {escape(message)}", soft_wrap=True)


def hint_panel(title: str, body: str, *, console: Console | None = None) -> None:
    """Display a follow-up hint below an error."""
    if console is None:
        console = get_console(stderr=True)
    panel = Panel(escape(body), title=f"[{HEADING}]{title}[/{HEADING}]", border_style=ACCENT, expand=False)
    console.print(panel)
