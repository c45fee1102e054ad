"""Turn-based conversation with a streaming chat backend.

One conversation per process. Each turn streams a reply to the output
sink while a :class:`ProgressIndicator` covers the wait for the first
token; interactive sessions then read the next line of input, which may
be a slash command handled by :class:`CommandDispatcher` instead of
another backend request.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Sequence
from typing import Protocol, TextIO

from prompt_builder.clipboard import ClipboardSink
from prompt_builder.commands import CommandDispatcher, is_command
from prompt_builder.detect import extract_last_code_block, is_complete
from prompt_builder.exceptions import (
    ClarificationRequiredError,
    CommandError,
    InputClosedError,
)
from prompt_builder.indicator import ProgressIndicator
from prompt_builder.transport.models import Message
from prompt_builder.types import Role, TokenCallback

logger = logging.getLogger(__name__)

NO_QUESTIONS_PREFIX = (
    "Generate your best prompt without asking clarifying questions. User's idea: "
)
INPUT_PROMPT = "> "


class ChatBackend(Protocol):
    """Anything that can stream one reply for a message history."""

    def chat_stream(self, messages: Sequence[Message], on_token: TokenCallback) -> str: ...


class Conversation:
    """Ordered message history, always starting with the system prompt."""

    def __init__(self, system_prompt: str) -> None:
        self._messages: list[Message] = [Message(role=Role.SYSTEM, content=system_prompt)]

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    @property
    def last_reply(self) -> str | None:
        """Content of the most recent assistant message, if any."""
        for message in reversed(self._messages):
            if message.role is Role.ASSISTANT:
                return message.content
        return None

    def add_user_message(self, content: str) -> None:
        self._messages.append(Message(role=Role.USER, content=content))

    def add_assistant_message(self, content: str) -> None:
        self._messages.append(Message(role=Role.ASSISTANT, content=content))

    def __len__(self) -> int:
        return len(self._messages)


class ConversationEngine:
    """Drives request / stream / input cycles until the conversation ends.

    Parameters
    ----------
    backend:
        Streaming chat backend, typically a :class:`ChatClient`.
    system_prompt:
        Text of the system message that opens the conversation.
    interactive:
        Whether a terminal is attached. Non-interactive runs get exactly one
        turn and fail if the backend asks a question instead of answering.
    quiet:
        Suppress streamed output and the indicator; non-interactive runs
        then print only the extracted code block.
    """

    def __init__(
        self,
        backend: ChatBackend,
        *,
        system_prompt: str,
        interactive: bool,
        quiet: bool = False,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
        clipboard: ClipboardSink | None = None,
        indicator_factory: Callable[..., ProgressIndicator] = ProgressIndicator,
    ) -> None:
        self._backend = backend
        self.interactive = interactive
        self.quiet = quiet
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        self._stderr = stderr or sys.stderr
        self._indicator_factory = indicator_factory
        self._dispatcher = CommandDispatcher(out=self._stdout, clipboard=clipboard)
        self.conversation = Conversation(system_prompt)

    # -- Public API -----------------------------------------------------------

    def run(self, idea: str) -> str:
        """Hold the conversation for *idea* and return the final reply."""
        if not self.interactive:
            idea = NO_QUESTIONS_PREFIX + idea
        self.conversation.add_user_message(idea)

        while True:
            reply = self._stream_turn()
            if not self.interactive:
                return self._finish(reply)
            if self._await_input():
                return reply

    # -- Turn handling --------------------------------------------------------

    def _stream_turn(self) -> str:
        show = not self.quiet
        indicator = self._indicator_factory(
            interactive=self.interactive and show, stream=self._stdout,
        )

        def on_token(token: str) -> None:
            indicator.stop()
            if show:
                self._stdout.write(token)
                self._stdout.flush()

        indicator.start()
        try:
            reply = self._backend.chat_stream(self.conversation.messages, on_token)
        finally:
            indicator.stop()

        if show:
            self._stdout.write("\n")
            self._stdout.flush()
        self.conversation.add_assistant_message(reply)
        logger.debug("Turn %d finished (complete=%s)", len(self.conversation) // 2, is_complete(reply))
        return reply

    def _finish(self, reply: str) -> str:
        if not is_complete(reply):
            raise ClarificationRequiredError()
        if self.quiet:
            self._stdout.write(extract_last_code_block(reply) + "\n")
            self._stdout.flush()
        return reply

    def _await_input(self) -> bool:
        """Read input until a message is queued (False) or the user leaves (True)."""
        while True:
            self._stdout.write(INPUT_PROMPT)
            self._stdout.flush()
            line = self._stdin.readline()
            if not line:
                raise InputClosedError()
            text = line.strip()
            if not text:
                continue
            if is_command(text):
                try:
                    if self._dispatcher.dispatch(text, self.conversation.last_reply):
                        return True
                except CommandError as exc:
                    self._stderr.write(f"{exc}\n")
                    self._stderr.flush()
                continue
            self.conversation.add_user_message(text)
            return False
