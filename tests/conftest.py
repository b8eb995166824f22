"""Shared test fixtures and doubles.

Keeps the application logger inside tmp_path and provides a fake clock and
a scripted signal channel so countdowns run instantly and deterministically.
"""

from __future__ import annotations

import logging
from io import StringIO
from unittest.mock import MagicMock, patch

import pytest
from rich.console import Console

from pomodoro_cli.models.focus.ui import TimerDisplay


# ---------------------------------------------------------------------------
# Logger isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_logger(tmp_path):
    """Send log records to a temporary directory and reset the singleton."""
    import pomodoro_cli.utils.logger as logger_mod

    def _reset():
        logger_mod._logger = None
        app_logger = logging.getLogger("pomodoro_cli")
        for handler in list(app_logger.handlers):
            handler.close()
            app_logger.removeHandler(handler)

    _reset()
    with patch(
        "pomodoro_cli.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")
    ):
        yield
    _reset()


# ---------------------------------------------------------------------------
# Time and signal doubles
# ---------------------------------------------------------------------------


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ScriptedChannel:
    """Signal source that simulates waiting by advancing a FakeClock.

    *events* is a list of ``(at_time, signal)``; a signal is delivered by the
    first receive() whose wait window reaches its time.
    """

    def __init__(self, clock: FakeClock, events=None):
        self.clock = clock
        self.events = sorted(events or [], key=lambda event: event[0])
        self.waits: list[float | None] = []

    def receive(self, timeout=None):
        self.waits.append(timeout)
        window_end = self.clock.now + (timeout or 0)
        if self.events and self.events[0][0] <= window_end:
            at, signal = self.events.pop(0)
            self.clock.now = max(self.clock.now, at)
            return signal
        self.clock.now = window_end
        return None


class RecordingDisplay(TimerDisplay):
    """TimerDisplay writing to a buffer and recording every rendered frame."""

    def __init__(self):
        self.buffer = StringIO()
        super().__init__(Console(file=self.buffer, force_terminal=False, width=100))
        self.frames: list[tuple[int, bool]] = []
        self.lines: list[str] = []

    def render_line(self, label, state, paused_for=0):
        self.frames.append((state.remaining_seconds, state.paused))
        return super().render_line(label, state, paused_for)

    def write_line_inplace(self, text):
        self.lines.append(text.plain if hasattr(text, "plain") else str(text))
        super().write_line_inplace(text)

    @property
    def output(self) -> str:
        return self.buffer.getvalue()


@pytest.fixture()
def fake_clock():
    return FakeClock()


@pytest.fixture()
def recording_display():
    return RecordingDisplay()


@pytest.fixture()
def mock_notifier():
    """A notifier double whose post() hands out handle 42."""
    notifier = MagicMock()
    notifier.post.return_value = 42
    return notifier


@pytest.fixture()
def make_channel(fake_clock):
    """Factory: ``make_channel([(at, signal), ...])`` bound to fake_clock."""

    def _make(events=None):
        return ScriptedChannel(fake_clock, events)

    return _make
