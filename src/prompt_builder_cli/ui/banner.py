"""Version banner for the prompt-builder CLI."""

from __future__ import annotations

from rich.console import Console

from prompt_builder._version import __version__
from prompt_builder_cli.ui.panels import DIM, HEADING


def show_version(console: Console | None = None) -> None:
    """Print ``prompt-builder <version>``."""
    if console is None:
        console = Console(highlight=False)
    console.print(f"[{HEADING}]prompt-builder[/{HEADING}] [{DIM}]{__version__}[/{DIM}]")
