"""ChatClient -- streaming HTTP client for a chat-completions backend."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from contextlib import closing
from typing import Any

import httpx

from prompt_builder.exceptions import (
    BackendConnectionError,
    BackendStatusError,
    StreamReadError,
)
from prompt_builder.transport.framing import Framing, SSEFraming
from prompt_builder.transport.models import ChatRequest, Message
from prompt_builder.types import TokenCallback

logger = logging.getLogger(__name__)

_BODY_SNIPPET_LIMIT = 500


class ChatClient:
    """Streams one chat completion per call.

    The read is blocking and has no timeout: a stalled backend stalls the
    caller until the process is interrupted.

    Usage::

        with ChatClient("http://localhost:11434", "llama3.2") as client:
            reply = client.chat_stream(messages, print)
    """

    def __init__(
        self,
        host: str,
        model: str,
        *,
        framing: Framing | None = None,
        api_key: str = "",
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.host = host.rstrip("/")
        self.model = model
        self.framing = framing or SSEFraming()
        headers: dict[str, str] = {}
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        self._client = httpx.Client(timeout=None, headers=headers, transport=transport)

    @property
    def url(self) -> str:
        return f"{self.host}{self.framing.path}"

    # -- Streaming ------------------------------------------------------------

    def iter_deltas(self, messages: Sequence[Message]) -> Iterator[str]:
        """Yield the non-empty content deltas of one streamed reply, in order.

        The response is closed as soon as the consumer stops iterating, so
        breaking out (or raising) mid-stream abandons the rest of the reply.
        """
        body = ChatRequest(model=self.model, messages=list(messages))
        request = self._client.build_request("POST", self.url, json=body.model_dump(mode="json"))
        logger.debug("POST %s (model=%s, %d messages)", self.url, self.model, len(body.messages))

        try:
            response = self._client.send(request, stream=True)
        except httpx.TransportError as exc:
            raise BackendConnectionError(f"failed to connect to LLM server: {exc}") from exc

        try:
            if not response.is_success:
                raise BackendStatusError(
                    response.status_code,
                    response.reason_phrase,
                    self._body_snippet(response),
                )
            for line in self._iter_lines(response):
                chunk = self.framing.parse_line(line)
                if chunk is None:
                    continue
                if chunk.content:
                    yield chunk.content
                if chunk.done:
                    logger.debug("Stream finished (finish_reason=%s)", chunk.finish_reason)
                    break
        finally:
            response.close()

    def chat_stream(self, messages: Sequence[Message], on_token: TokenCallback) -> str:
        """Stream one reply, calling *on_token* for every non-empty delta.

        Returns the concatenation of all deltas. An exception raised by
        *on_token* aborts the stream and propagates unchanged; no partial
        text is returned.
        """
        parts: list[str] = []
        with closing(self.iter_deltas(messages)) as deltas:
            for delta in deltas:
                on_token(delta)
                parts.append(delta)
        return "".join(parts)

    # -- Helpers --------------------------------------------------------------

    @staticmethod
    def _iter_lines(response: httpx.Response) -> Iterator[str]:
        try:
            yield from response.iter_lines()
        except httpx.TransportError as exc:
            raise StreamReadError(f"error reading stream: {exc}") from exc

    @staticmethod
    def _body_snippet(response: httpx.Response) -> str:
        try:
            response.read()
        except httpx.TransportError:
            logger.debug("Could not read error body", exc_info=True)
            return ""
        return response.text[:_BODY_SNIPPET_LIMIT]

    # -- Lifecycle ------------------------------------------------------------

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def __enter__(self) -> ChatClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
