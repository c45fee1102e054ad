"""Streaming chat transport."""

from prompt_builder.transport.client import ChatClient
from prompt_builder.transport.framing import Framing, NDJSONFraming, SSEFraming, get_framing
from prompt_builder.transport.models import ChatRequest, ChatStreamChunk, Message, StreamChunk

__all__ = [
    "ChatClient",
    "ChatRequest",
    "ChatStreamChunk",
    "Framing",
    "Message",
    "NDJSONFraming",
    "SSEFraming",
    "StreamChunk",
    "get_framing",
]
