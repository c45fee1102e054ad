"""Clipboard sinks backed by a platform copy command."""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
from typing import Protocol, runtime_checkable

from prompt_builder.exceptions import ClipboardError

logger = logging.getLogger(__name__)

# Probed in order; the first one found on PATH wins.
CLIPBOARD_CANDIDATES = [
    "wl-copy",
    "xclip -selection clipboard",
    "xsel --clipboard --input",
    "pbcopy",
]


@runtime_checkable
class ClipboardSink(Protocol):
    def write(self, text: str) -> None: ...


def detect_clipboard_command(override: str = "") -> str:
    """Return the clipboard command to use, or ``""`` if none is available."""
    if override:
        return override
    for candidate in CLIPBOARD_CANDIDATES:
        if shutil.which(shlex.split(candidate)[0]):
            logger.debug("Detected clipboard command: %s", candidate)
            return candidate
    return ""


class ShellClipboard:
    """Pipes text into a copy command such as ``pbcopy``."""

    def __init__(self, command: str) -> None:
        self.command = command
        self._argv = shlex.split(command)

    def write(self, text: str) -> None:
        try:
            subprocess.run(
                self._argv,
                input=text,
                text=True,
                check=True,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except (OSError, subprocess.CalledProcessError) as exc:
            raise ClipboardError(f"{self.command}: {exc}") from exc


def clipboard_from_command(command: str) -> ShellClipboard | None:
    """Build a sink for *command*; ``None`` when no command is configured."""
    if not command.strip():
        return None
    return ShellClipboard(command)
