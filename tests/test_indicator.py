"""Tests for the ProgressIndicator.

The animation thread writes into a StringIO so no terminal is needed.
"""

from __future__ import annotations

import io
import threading
import time

from prompt_builder.indicator import (
    DEFAULT_MESSAGE,
    SPINNER_FRAMES,
    IndicatorState,
    ProgressIndicator,
)

CLEAR = "\r" + " " * (len(DEFAULT_MESSAGE) + 3) + "\r"


def _indicator(stream: io.StringIO, *, interactive: bool = True) -> ProgressIndicator:
    return ProgressIndicator(interactive=interactive, stream=stream, interval=0.01)


class TestLifecycle:
    def test_initial_state(self) -> None:
        indicator = ProgressIndicator(stream=io.StringIO())
        assert indicator.state is IndicatorState.IDLE
        assert indicator.message == DEFAULT_MESSAGE

    def test_start_stop(self) -> None:
        stream = io.StringIO()
        indicator = _indicator(stream)
        indicator.start()
        assert indicator.state is IndicatorState.RUNNING
        time.sleep(0.05)
        indicator.stop()

        assert indicator.state is IndicatorState.STOPPED
        output = stream.getvalue()
        assert DEFAULT_MESSAGE in output
        assert any(frame in output for frame in SPINNER_FRAMES)
        assert output.endswith(CLEAR)

    def test_start_twice_is_noop(self) -> None:
        indicator = _indicator(io.StringIO())
        indicator.start()
        first_thread = indicator._thread
        indicator.start()
        assert indicator._thread is first_thread
        indicator.stop()

    def test_context_manager(self) -> None:
        stream = io.StringIO()
        with _indicator(stream) as indicator:
            assert indicator.state is IndicatorState.RUNNING
        assert indicator.state is IndicatorState.STOPPED
        assert stream.getvalue().count(CLEAR) == 1


class TestNonInteractive:
    def test_start_is_noop(self) -> None:
        stream = io.StringIO()
        indicator = _indicator(stream, interactive=False)
        indicator.start()
        time.sleep(0.03)
        assert indicator.state is IndicatorState.IDLE
        indicator.stop()
        assert stream.getvalue() == ""


class TestStopSafety:
    def test_stop_without_start(self) -> None:
        stream = io.StringIO()
        indicator = _indicator(stream)
        indicator.stop()
        assert indicator.state is IndicatorState.STOPPED
        assert stream.getvalue() == ""

    def test_start_after_stop_is_noop(self) -> None:
        stream = io.StringIO()
        indicator = _indicator(stream)
        indicator.stop()
        indicator.start()
        time.sleep(0.03)
        assert indicator.state is IndicatorState.STOPPED
        assert stream.getvalue() == ""

    def test_stop_multiple_times(self) -> None:
        stream = io.StringIO()
        indicator = _indicator(stream)
        indicator.start()
        for _ in range(5):
            indicator.stop()
        assert stream.getvalue().count(CLEAR) == 1

    def test_concurrent_stop_clears_once(self) -> None:
        stream = io.StringIO()
        indicator = _indicator(stream)
        indicator.start()
        time.sleep(0.03)

        barrier = threading.Barrier(8)

        def stopper() -> None:
            barrier.wait()
            indicator.stop()

        threads = [threading.Thread(target=stopper) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=2)

        assert all(not t.is_alive() for t in threads)
        assert indicator.state is IndicatorState.STOPPED
        assert stream.getvalue().count(CLEAR) == 1

    def test_stop_does_not_block(self) -> None:
        indicator = ProgressIndicator(stream=io.StringIO(), interval=0.1)
        indicator.start()
        began = time.monotonic()
        indicator.stop()
        assert time.monotonic() - began < 1.0
