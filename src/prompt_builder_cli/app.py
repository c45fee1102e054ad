"""Main Typer application for the prompt-builder CLI."""

from __future__ import annotations

import logging
import signal
import sys
from pathlib import Path
from typing import TextIO

import typer

from prompt_builder.clipboard import clipboard_from_command, detect_clipboard_command
from prompt_builder.conversation import ConversationEngine
from prompt_builder.exceptions import ConfigNotFoundError, PromptBuilderError
from prompt_builder.transport import ChatClient, get_framing
from prompt_builder_cli.config import EXAMPLE_CONFIG, ConfigManager
from prompt_builder_cli.ui.panels import error_line, hint_panel

logger = logging.getLogger(__name__)

EXIT_INTERRUPTED = 130

app = typer.Typer(
    name="prompt-builder",
    help="Transform ideas into structured prompts through a guided conversation.",
    add_completion=False,
    rich_markup_mode="rich",
)


def is_interactive() -> bool:
    """True when both stdin and stdout are attached to a terminal."""
    return sys.stdin.isatty() and sys.stdout.isatty()


def run_conversation(
    idea: str,
    *,
    config_path: Path | None = None,
    model: str | None = None,
    quiet: bool = False,
    interactive: bool = False,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> str:
    """Load configuration and hold one conversation about *idea*."""
    resolved = ConfigManager(config_path).load(model_override=model)
    settings = resolved.settings
    clipboard = clipboard_from_command(detect_clipboard_command(settings.clipboard_cmd))

    with ChatClient(
        settings.host,
        settings.model,
        framing=get_framing(settings.protocol),
        api_key=settings.api_key,
    ) as client:
        engine = ConversationEngine(
            client,
            system_prompt=resolved.system_prompt,
            interactive=interactive,
            quiet=quiet,
            stdin=stdin,
            stdout=stdout,
            stderr=stderr,
            clipboard=clipboard,
        )
        return engine.run(idea)


def _version_callback(value: bool) -> None:
    if value:
        from prompt_builder_cli.ui.banner import show_version

        show_version()
        raise typer.Exit


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        level=logging.DEBUG if verbose else logging.WARNING,
        stream=sys.stderr,
    )


def _on_terminate(signum: int, frame: object) -> None:
    raise KeyboardInterrupt


@app.command()
def main(
    idea: str | None = typer.Argument(  # noqa: B008
        None,
        help="The idea to turn into a prompt.",
        show_default=False,
    ),
    model: str | None = typer.Option(  # noqa: B008
        None,
        "--model",
        "-m",
        help="Override model from config.",
    ),
    config: Path | None = typer.Option(  # noqa: B008
        None,
        "--config",
        "-c",
        help="Use alternate config file.",
    ),
    quiet: bool = typer.Option(  # noqa: B008
        False,
        "--quiet",
        "-q",
        help="Suppress conversation output; print only the final prompt.",
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False,
        "--verbose",
        help="Log debug information to stderr.",
    ),
    version: bool = typer.Option(  # noqa: B008
        False,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Transform IDEA into a structured prompt."""
    _configure_logging(verbose)

    if not idea:
        error_line("missing required argument: <idea>")
        raise typer.Exit(code=1)

    signal.signal(signal.SIGTERM, _on_terminate)
    try:
        run_conversation(
            idea,
            config_path=config,
            model=model,
            quiet=quiet,
            interactive=is_interactive(),
        )
    except KeyboardInterrupt:
        sys.stderr.write("\n")
        raise typer.Exit(code=EXIT_INTERRUPTED) from None
    except PromptBuilderError as exc:
        logger.debug("Run failed", exc_info=True)
        error_line(str(exc))
        if isinstance(exc, ConfigNotFoundError):
            hint_panel(
                "Create it with",
                f"mkdir -p {Path(exc.path).parent}\n"
                f"cat > {exc.path} << 'EOF'\n{EXAMPLE_CONFIG}EOF",
            )
        raise typer.Exit(code=exc.exit_code) from None
    except (OSError, UnicodeError) as exc:
        logger.debug("Output failed", exc_info=True)
        error_line(f"output failed: {exc}")
        raise typer.Exit(code=1) from None
