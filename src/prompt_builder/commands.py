"""Slash commands accepted between turns of an interactive conversation.

Commands never reach the backend. They either end the conversation
(``/bye``, ``/quit``, ``/exit``, a successful ``/copy``) or hand control
back to the input prompt.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, TextIO

from prompt_builder.detect import extract_last_code_block
from prompt_builder.exceptions import ClipboardError, CommandError

if TYPE_CHECKING:
    from prompt_builder.clipboard import ClipboardSink

logger = logging.getLogger(__name__)

COMMAND_PREFIX = "/"

HELP_TEXT = """\
Commands:
  /copy   Copy last code block to clipboard and exit
  /bye    Exit conversation
  /quit   Exit conversation
  /exit   Exit conversation
  /help   Show this help"""

FAREWELL_TEXT = "Goodbye"
COPIED_TEXT = "✓ Copied to clipboard"


class Command(StrEnum):
    COPY = "copy"
    BYE = "bye"
    QUIT = "quit"
    EXIT = "exit"
    HELP = "help"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ParsedCommand:
    command: Command
    name: str


def is_command(text: str) -> bool:
    """True if *text* (after trimming) is a slash command."""
    return text.strip().startswith(COMMAND_PREFIX)


def parse_command(text: str) -> ParsedCommand:
    """Parse ``/Name`` into a :class:`ParsedCommand` (case-insensitive)."""
    name = text.strip().removeprefix(COMMAND_PREFIX).strip().lower()
    try:
        command = Command(name)
    except ValueError:
        command = Command.UNKNOWN
    return ParsedCommand(command, name)


class CommandDispatcher:
    """Runs slash commands against the most recent assistant reply."""

    def __init__(self, *, out: TextIO, clipboard: ClipboardSink | None = None) -> None:
        self._out = out
        self._clipboard = clipboard

    def dispatch(self, text: str, last_reply: str | None) -> bool:
        """Execute the command in *text*.

        Returns ``True`` when the conversation should end. Raises
        :class:`CommandError` for failures the user should see.
        """
        parsed = parse_command(text)
        logger.debug("Dispatching command /%s", parsed.name)

        match parsed.command:
            case Command.BYE | Command.QUIT | Command.EXIT:
                self._println(FAREWELL_TEXT)
                return True
            case Command.COPY:
                self._copy(last_reply)
                return True
            case Command.HELP:
                self._println(HELP_TEXT)
                return False
            case Command.UNKNOWN:
                raise CommandError(
                    f"unknown command: /{parsed.name}. Type /help for available commands."
                )

    def _copy(self, last_reply: str | None) -> None:
        if not last_reply:
            raise CommandError("no response to copy from")
        block = extract_last_code_block(last_reply)
        if not block:
            raise CommandError("no code block to copy")
        if self._clipboard is None:
            raise CommandError("clipboard not available")
        try:
            self._clipboard.write(block)
        except ClipboardError as exc:
            logger.info("Clipboard write failed: %s", exc)
            raise CommandError("clipboard not available") from exc
        self._println(COPIED_TEXT)

    def _println(self, text: str) -> None:
        self._out.write(text + "\n")
        self._out.flush()
