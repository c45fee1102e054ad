"""Animated "thinking" status line shown while waiting for the first token.

The indicator draws on its own daemon thread, overwriting the current
terminal line with a spinner frame and a message roughly every 100 ms.
Once stopped it erases the line so the streamed reply starts clean.
"""

from __future__ import annotations

import itertools
import logging
import sys
import threading
from enum import StrEnum
from typing import TextIO

logger = logging.getLogger(__name__)

SPINNER_FRAMES = ["⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏"]

DEFAULT_MESSAGE = "Thinking..."
DEFAULT_INTERVAL = 0.1


class IndicatorState(StrEnum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


class ProgressIndicator:
    """Spinner that runs until the first token arrives.

    Lifecycle is ``IDLE -> RUNNING -> STOPPED``. :meth:`start` only animates
    when *interactive* is true. :meth:`stop` may be called from any thread,
    any number of times, before or after :meth:`start`; only the first call
    has an effect and the status line is erased exactly once.
    """

    def __init__(
        self,
        message: str = DEFAULT_MESSAGE,
        *,
        interactive: bool = True,
        stream: TextIO | None = None,
        interval: float = DEFAULT_INTERVAL,
    ) -> None:
        self.message = message
        self.interactive = interactive
        self._stream = stream
        self._interval = interval
        self._state = IndicatorState.IDLE
        self._lock = threading.Lock()
        self._cancel = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def state(self) -> IndicatorState:
        return self._state

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    # -- Lifecycle ------------------------------------------------------------

    def start(self) -> None:
        """Begin animating. No-op when not interactive or already started."""
        if not self.interactive:
            return
        with self._lock:
            if self._state is not IndicatorState.IDLE:
                return
            self._state = IndicatorState.RUNNING
            self._thread = threading.Thread(
                target=self._run, name="progress-indicator", daemon=True,
            )
            self._thread.start()

    def stop(self) -> None:
        """Stop animating and erase the status line. Idempotent."""
        with self._lock:
            if self._state is IndicatorState.STOPPED:
                return
            was_running = self._state is IndicatorState.RUNNING
            self._state = IndicatorState.STOPPED
            self._cancel.set()
            thread = self._thread
        if was_running and thread is not None and thread is not threading.current_thread():
            # Bounded so a wedged terminal write cannot hang the caller.
            thread.join(timeout=self._interval * 10)

    def __enter__(self) -> ProgressIndicator:
        self.start()
        return self

    def __exit__(self, *args: object) -> None:
        self.stop()

    # -- Animation ------------------------------------------------------------

    def _run(self) -> None:
        frames = itertools.cycle(SPINNER_FRAMES)
        while not self._cancel.wait(self._interval):
            self._write(f"\r{next(frames)} {self.message}")
        self._clear_line()

    def _clear_line(self) -> None:
        width = len(self.message) + 3  # frame + space + message
        self._write("\r" + " " * width + "\r")

    def _write(self, text: str) -> None:
        try:
            self.stream.write(text)
            self.stream.flush()
        except (OSError, ValueError):
            logger.debug("Progress indicator write failed", exc_info=True)
            self._cancel.set()
