"""Countdown engine: runs one phase against the wall clock."""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any, Protocol

from pomodoro_cli.utils.logger import get_logger

from .exceptions import ClockError
from .state import ControlSignal, Phase, PhaseOutcome, TimerState, format_clock
from .ui import TimerDisplay

TICK_INTERVAL = 1.0
PAUSE_REFRESH = 0.25
PERSISTENT_TIMEOUT_MS = 0


class SignalSource(Protocol):
    def receive(self, timeout: float | None = None) -> ControlSignal | None: ...


class NotificationSink(Protocol):
    def post(self, summary: str, body: str, timeout_ms: int = ...) -> Any: ...

    def update(self, handle: Any, summary: str, body: str) -> None: ...


class CountdownEngine:
    """
    Run a single phase: tick once per interval, redraw the countdown line,
    and refresh the live desktop notification.

    All waiting happens in ``signals.receive(timeout)``, so a control signal
    is handled as soon as it arrives and ticks stay aligned to the clock.
    """

    def __init__(
        self,
        display: TimerDisplay,
        notifier: NotificationSink,
        clock: Callable[[], float] = time.monotonic,
        tick_interval: float = TICK_INTERVAL,
        pause_refresh: float = PAUSE_REFRESH,
    ):
        if tick_interval <= 0 or pause_refresh <= 0:
            raise ValueError("tick_interval and pause_refresh must be positive")
        self.display = display
        self.notifier = notifier
        self.clock = clock
        self.tick_interval = tick_interval
        self.pause_refresh = pause_refresh
        self.last_state: TimerState | None = None
        self._logger = get_logger("engine")

    def _now(self) -> float:
        try:
            return self.clock()
        except OSError as e:
            raise ClockError(f"Cannot read system clock: {e}") from e

    def run(self, phase: Phase, signals: SignalSource) -> PhaseOutcome:
        """Run *phase* to completion or until the user quits."""
        return self.run_phase(phase.duration_seconds, phase.label, signals)

    def run_phase(
        self, duration_seconds: int, label: str, signals: SignalSource
    ) -> PhaseOutcome:
        """
        Count down *duration_seconds* ticks.

        Returns COMPLETED once the remaining time reaches zero, or CANCELLED
        as soon as a QUIT signal is received.
        """
        if duration_seconds <= 0:
            raise ValueError("duration_seconds must be positive")
        if not label:
            raise ValueError("label must not be empty")

        state = TimerState(remaining_seconds=duration_seconds)
        self.last_state = state
        self._logger.info("phase started: %s (%ds)", label, duration_seconds)

        last_body = self._notification_body(state)
        handle = self.notifier.post(label, last_body, PERSISTENT_TIMEOUT_MS)
        paused_since: float | None = None

        with self.display.live():
            last_body = self._render(label, state, handle, 0, last_body)
            deadline = self._now() + self.tick_interval

            while not state.finished:
                if state.paused:
                    wait = self.pause_refresh
                else:
                    wait = max(0.0, deadline - self._now())

                try:
                    signal = signals.receive(timeout=wait)
                except KeyboardInterrupt:
                    signal = ControlSignal.QUIT
                now = self._now()

                if signal is not None:
                    state.apply(signal)

                if state.cancelled:
                    self._logger.info(
                        "phase cancelled: %s at %s",
                        label,
                        format_clock(state.remaining_seconds),
                    )
                    return PhaseOutcome.CANCELLED

                if signal is ControlSignal.PAUSE_TOGGLE:
                    if state.paused:
                        paused_since = now
                        self._logger.info("paused: %s", label)
                    else:
                        paused_since = None
                        deadline = now + self.tick_interval
                        self._logger.info("resumed: %s", label)
                elif not state.paused and now >= deadline:
                    # Catch up if the loop woke several intervals late.
                    due = int((now - deadline) // self.tick_interval) + 1
                    state.tick(due)
                    deadline += due * self.tick_interval

                paused_for = int(now - paused_since) if paused_since is not None else 0
                last_body = self._render(label, state, handle, paused_for, last_body)

        self._logger.info("phase completed: %s", label)
        return PhaseOutcome.COMPLETED

    @staticmethod
    def _notification_body(state: TimerState) -> str:
        if state.paused:
            return f"Paused at {format_clock(state.remaining_seconds)}."
        return f"{format_clock(state.remaining_seconds)} remaining."

    def _render(
        self,
        label: str,
        state: TimerState,
        handle: Any,
        paused_for: int,
        last_body: str | None,
    ) -> str:
        self.display.write_line_inplace(
            self.display.render_line(label, state, paused_for)
        )
        body = self._notification_body(state)
        if body != last_body:
            self.notifier.update(handle, label, body)
        return body
