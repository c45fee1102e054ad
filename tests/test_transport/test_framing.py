"""Tests for the SSE and NDJSON response framings."""

from __future__ import annotations

import pytest

from prompt_builder.exceptions import FrameParseError
from prompt_builder.transport.framing import NDJSONFraming, SSEFraming, get_framing
from prompt_builder.types import WireProtocol


class TestSSEFraming:
    def setup_method(self):
        self.framing = SSEFraming()

    def test_content_delta(self):
        chunk = self.framing.parse_line(
            'data: {"choices":[{"delta":{"content":"Hello"},"finish_reason":null}]}'
        )
        assert chunk is not None
        assert chunk.content == "Hello"
        assert chunk.finish_reason is None
        assert chunk.done is False

    def test_empty_delta_with_finish_reason(self):
        chunk = self.framing.parse_line('data: {"choices":[{"delta":{},"finish_reason":"stop"}]}')
        assert chunk is not None
        assert chunk.content == ""
        assert chunk.finish_reason == "stop"
        assert chunk.done is False

    def test_null_content_is_empty(self):
        chunk = self.framing.parse_line('data: {"choices":[{"delta":{"content":null}}]}')
        assert chunk is not None
        assert chunk.content == ""

    def test_only_first_choice_is_used(self):
        chunk = self.framing.parse_line(
            'data: {"choices":[{"delta":{"content":"a"}},{"delta":{"content":"b"}}]}'
        )
        assert chunk is not None
        assert chunk.content == "a"

    def test_no_choices_is_skipped(self):
        assert self.framing.parse_line('data: {"choices":[]}') is None

    def test_null_choices_is_skipped(self):
        assert self.framing.parse_line('data: {"choices":null}') is None

    def test_null_delta_is_empty(self):
        chunk = self.framing.parse_line('data: {"choices":[{"delta":null,"finish_reason":"stop"}]}')
        assert chunk is not None
        assert chunk.content == ""
        assert chunk.finish_reason == "stop"
        assert chunk.done is False

    def test_done_sentinel(self):
        chunk = self.framing.parse_line("data: [DONE]")
        assert chunk is not None
        assert chunk.done is True
        assert chunk.content == ""

    def test_blank_line_is_skipped(self):
        assert self.framing.parse_line("") is None

    @pytest.mark.parametrize("line", [": keepalive", "event: message", "id: 7", "data:{}"])
    def test_lines_without_data_prefix_are_ignored(self, line):
        assert self.framing.parse_line(line) is None

    def test_malformed_json_raises(self):
        with pytest.raises(FrameParseError, match="failed to parse streaming chunk"):
            self.framing.parse_line("data: {not json")

    def test_wrong_shape_raises(self):
        with pytest.raises(FrameParseError):
            self.framing.parse_line('data: {"choices": "nope"}')

    def test_endpoint_path(self):
        assert self.framing.path == "/v1/chat/completions"


class TestNDJSONFraming:
    def setup_method(self):
        self.framing = NDJSONFraming()

    def test_content_line(self):
        chunk = self.framing.parse_line(
            '{"message":{"role":"assistant","content":"Hi"},"done":false}'
        )
        assert chunk is not None
        assert chunk.content == "Hi"
        assert chunk.done is False

    def test_done_line_keeps_content(self):
        chunk = self.framing.parse_line('{"message":{"role":"assistant","content":"!"},"done":true}')
        assert chunk is not None
        assert chunk.content == "!"
        assert chunk.done is True
        assert chunk.finish_reason == "stop"

    def test_blank_line_is_skipped(self):
        assert self.framing.parse_line("   ") is None

    def test_null_message_is_empty(self):
        chunk = self.framing.parse_line('{"message":null,"done":true}')
        assert chunk is not None
        assert chunk.content == ""
        assert chunk.done is True

    def test_malformed_json_raises(self):
        with pytest.raises(FrameParseError):
            self.framing.parse_line("{oops")

    def test_endpoint_path(self):
        assert self.framing.path == "/api/chat"


class TestGetFraming:
    def test_openai(self):
        assert isinstance(get_framing("openai"), SSEFraming)

    def test_ollama(self):
        assert isinstance(get_framing(WireProtocol.OLLAMA), NDJSONFraming)

    def test_unknown_protocol(self):
        with pytest.raises(ValueError):
            get_framing("grpc")
