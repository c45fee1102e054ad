"""Exception hierarchy for prompt-builder.

Every error carries the process ``exit_code`` the CLI maps it to.
"""

from __future__ import annotations


class PromptBuilderError(Exception):
    """Base for all prompt-builder errors."""

    exit_code: int = 1


# -- Configuration -----------------------------------------------------------


class ConfigError(PromptBuilderError):
    """The configuration file is missing, unreadable, or invalid."""


class ConfigNotFoundError(ConfigError):
    def __init__(self, path: str) -> None:
        super().__init__(f"config file not found: {path}")
        self.path = path


class SystemPromptNotFoundError(ConfigError):
    def __init__(self, path: str) -> None:
        super().__init__(f"system prompt not found: {path}")
        self.path = path


class MissingModelError(ConfigError):
    exit_code = 3

    def __init__(self) -> None:
        super().__init__("no model specified; set 'model' in config or use --model")


# -- Transport ---------------------------------------------------------------


class TransportError(PromptBuilderError):
    """The streaming request to the backend failed."""

    exit_code = 2


class BackendConnectionError(TransportError):
    """The request could not be sent at all."""


class BackendStatusError(TransportError):
    """The backend answered with a non-2xx status."""

    def __init__(self, status_code: int, reason: str, body: str) -> None:
        detail = f"{status_code} {reason}".strip()
        super().__init__(f"LLM request failed: {detail} - {body}")
        self.status_code = status_code
        self.body = body


class FrameParseError(TransportError):
    """A streamed frame could not be decoded."""

    def __init__(self, payload: str, reason: str) -> None:
        super().__init__(f"failed to parse streaming chunk: {reason}")
        self.payload = payload


class StreamReadError(TransportError):
    """The response body broke off while it was being read."""


# -- Conversation ------------------------------------------------------------


class ConversationError(PromptBuilderError):
    """The conversation loop cannot continue."""


class ClarificationRequiredError(ConversationError):
    def __init__(self) -> None:
        super().__init__("LLM requested clarification but stdin is not a TTY")


class InputClosedError(ConversationError):
    def __init__(self) -> None:
        super().__init__("failed to read input: end of input")


# -- Commands ----------------------------------------------------------------


class CommandError(PromptBuilderError):
    """A slash command failed; reported to the user, never fatal."""


class ClipboardError(PromptBuilderError):
    """The clipboard sink rejected the write."""
