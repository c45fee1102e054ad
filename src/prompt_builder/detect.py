"""Reply inspection: completion detection and code block extraction."""

from __future__ import annotations

FENCE = "```"


def is_complete(text: str) -> bool:
    """True if *text* holds a fenced code block and does not end with a question."""
    return FENCE in text and not text.strip().endswith("?")


def extract_last_code_block(text: str) -> str:
    """Return the body of the last fenced code block in *text*.

    The language tag on the opening fence line is skipped. Trailing newlines
    inside the block are kept. Returns ``""`` when fewer than two fence
    markers are present.
    """
    close_at = text.rfind(FENCE)
    if close_at == -1:
        return ""
    open_at = text.rfind(FENCE, 0, close_at)
    if open_at == -1:
        return ""

    start = open_at + len(FENCE)
    newline = text.find("\n", start, close_at)
    if newline != -1:
        start = newline + 1
    return text[start:close_at]
