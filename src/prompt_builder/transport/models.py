"""Wire models for the streaming chat-completions protocol."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from prompt_builder.types import Role

# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class Message(BaseModel):
    """One entry of the conversation history. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str


class ChatRequest(BaseModel):
    """Body posted to the chat endpoint. Always carries the full history."""

    model: str
    messages: list[Message]
    stream: bool = True


# ---------------------------------------------------------------------------
# Response models (SSE / OpenAI-compatible)
# ---------------------------------------------------------------------------


class Delta(BaseModel):
    content: str | None = None


class StreamChoice(BaseModel):
    delta: Delta | None = None
    finish_reason: str | None = None


class ChatStreamChunk(BaseModel):
    """Payload of one ``data:`` frame."""

    choices: list[StreamChoice] | None = None


# ---------------------------------------------------------------------------
# Response models (newline-delimited JSON / Ollama)
# ---------------------------------------------------------------------------


class NDJSONMessage(BaseModel):
    role: str | None = None
    content: str | None = ""


class NDJSONChunk(BaseModel):
    """One line of a newline-delimited JSON stream."""

    message: NDJSONMessage | None = None
    done: bool = False


# ---------------------------------------------------------------------------
# Decoded event
# ---------------------------------------------------------------------------


class StreamChunk(BaseModel):
    """A decoded protocol event, independent of the wire framing.

    ``done`` marks the end of the stream; the chunk's ``content`` (if any)
    is still delivered.
    """

    content: str = ""
    finish_reason: str | None = None
    done: bool = False
