"""Response framings understood by :class:`ChatClient`.

A framing turns one line of the streaming response body into a
:class:`StreamChunk`, or ``None`` when the line carries nothing (blank
delimiters, comments, keepalives, chunks without choices).
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from pydantic import ValidationError

from prompt_builder.exceptions import FrameParseError
from prompt_builder.transport.models import ChatStreamChunk, NDJSONChunk, StreamChunk
from prompt_builder.types import WireProtocol

logger = logging.getLogger(__name__)

SSE_DATA_PREFIX = "data: "
SSE_DONE_SENTINEL = "[DONE]"


@runtime_checkable
class Framing(Protocol):
    """Strategy for decoding one streamed line."""

    path: str

    def parse_line(self, line: str) -> StreamChunk | None: ...


def _first_error(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    return errors[0].get("msg", str(exc))


class SSEFraming:
    """Server-sent events, as spoken by OpenAI-compatible servers.

    ::

        data: {"choices":[{"delta":{"content":"Hi"},"finish_reason":null}]}

        data: [DONE]
    """

    path = "/v1/chat/completions"

    def parse_line(self, line: str) -> StreamChunk | None:
        if not line:
            return None
        if not line.startswith(SSE_DATA_PREFIX):
            logger.debug("Ignoring non-data line: %r", line)
            return None
        payload = line[len(SSE_DATA_PREFIX):]
        if payload == SSE_DONE_SENTINEL:
            return StreamChunk(done=True)
        try:
            chunk = ChatStreamChunk.model_validate_json(payload)
        except ValidationError as exc:
            raise FrameParseError(payload, _first_error(exc)) from exc
        if not chunk.choices:
            return None
        choice = chunk.choices[0]
        delta = choice.delta
        return StreamChunk(
            content=(delta.content if delta else None) or "",
            finish_reason=choice.finish_reason,
        )


class NDJSONFraming:
    """Newline-delimited JSON with a ``done`` flag, as spoken by Ollama."""

    path = "/api/chat"

    def parse_line(self, line: str) -> StreamChunk | None:
        if not line.strip():
            return None
        try:
            chunk = NDJSONChunk.model_validate_json(line)
        except ValidationError as exc:
            raise FrameParseError(line, _first_error(exc)) from exc
        return StreamChunk(
            content=(chunk.message.content if chunk.message else None) or "",
            finish_reason="stop" if chunk.done else None,
            done=chunk.done,
        )


_FRAMINGS: dict[WireProtocol, type[SSEFraming] | type[NDJSONFraming]] = {
    WireProtocol.OPENAI: SSEFraming,
    WireProtocol.OLLAMA: NDJSONFraming,
}


def get_framing(protocol: WireProtocol | str) -> Framing:
    """Return the framing for *protocol* (``"openai"`` or ``"ollama"``)."""
    return _FRAMINGS[WireProtocol(protocol)]()
