"""prompt-builder -- turn a short idea into a fully-specified prompt.

Holds a multi-turn conversation with a chat-completions backend, streaming
the reply to the terminal as it arrives.

Quick start::

    from prompt_builder import ChatClient, ConversationEngine

    with ChatClient("http://localhost:11434", "llama3.2") as client:
        engine = ConversationEngine(client, system_prompt=prompt, interactive=True)
        engine.run("a haiku generator")
"""

from prompt_builder._version import __version__
from prompt_builder.config import PromptBuilderSettings
from prompt_builder.conversation import Conversation, ConversationEngine
from prompt_builder.detect import extract_last_code_block, is_complete
from prompt_builder.exceptions import (
    BackendConnectionError,
    BackendStatusError,
    ClarificationRequiredError,
    ClipboardError,
    CommandError,
    ConfigError,
    ConfigNotFoundError,
    ConversationError,
    FrameParseError,
    InputClosedError,
    MissingModelError,
    PromptBuilderError,
    StreamReadError,
    SystemPromptNotFoundError,
    TransportError,
)
from prompt_builder.indicator import IndicatorState, ProgressIndicator
from prompt_builder.transport import ChatClient, Message
from prompt_builder.types import Role, WireProtocol

__all__ = [
    "__version__",
    "BackendConnectionError",
    "BackendStatusError",
    "ChatClient",
    "ClarificationRequiredError",
    "ClipboardError",
    "CommandError",
    "ConfigError",
    "ConfigNotFoundError",
    "Conversation",
    "ConversationEngine",
    "ConversationError",
    "FrameParseError",
    "IndicatorState",
    "InputClosedError",
    "Message",
    "MissingModelError",
    "ProgressIndicator",
    "PromptBuilderError",
    "PromptBuilderSettings",
    "Role",
    "StreamReadError",
    "SystemPromptNotFoundError",
    "TransportError",
    "WireProtocol",
    "extract_last_code_block",
    "is_complete",
]
