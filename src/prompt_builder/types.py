from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum


class Role(StrEnum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class WireProtocol(StrEnum):
    """Wire framing spoken by the chat backend."""

    OPENAI = "openai"
    OLLAMA = "ollama"


TokenCallback = Callable[[str], None]
