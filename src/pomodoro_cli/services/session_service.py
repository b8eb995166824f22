"""Session driver: runs the work/break sequence and reports the result."""

from __future__ import annotations

import time
from collections.abc import Callable
from datetime import datetime

from pomodoro_cli.config import TimerConfig
from pomodoro_cli.models.focus.cycling import PomodoroPlan
from pomodoro_cli.models.focus.engine import CountdownEngine
from pomodoro_cli.models.focus.keyboard import InputListener
from pomodoro_cli.models.focus.signals import SignalChannel
from pomodoro_cli.models.focus.state import PhaseOutcome, SessionResult
from pomodoro_cli.models.focus.ui import (
    TimerDisplay,
    show_completion_message,
    show_stopped_message,
)
from pomodoro_cli.services.notifier import DEFAULT_TIMEOUT_MS, Notifier
from pomodoro_cli.utils.logger import get_logger

NOTIFY_TITLE = "🍅 Pomodoro"
WORK_MESSAGE = "Time to focus!"
BREAK_MESSAGE = "Take a break!"
FINISHED_TITLE = "😿 Finished!"
FINISHED_MESSAGE = "I'm tired boss. 😿"


class SessionDriver:
    """Sequences the phases of a run through the countdown engine.

    The input listener lives for the whole run so no keystroke is lost
    between phases, and the terminal is restored whichever way it ends.
    """

    def __init__(
        self,
        config: TimerConfig,
        notifier: Notifier,
        display: TimerDisplay,
        engine: CountdownEngine | None = None,
        channel: SignalChannel | None = None,
        listener: InputListener | None = None,
        monotonic: Callable[[], float] | None = None,
        now: Callable[[], datetime] = datetime.now,
    ):
        self.config = config
        self.notifier = notifier
        self.display = display
        self.channel = channel or SignalChannel()
        self.engine = engine or CountdownEngine(
            display, notifier, tick_interval=config.tick_interval
        )
        self.listener = listener or InputListener(self.channel)
        self.monotonic = monotonic or time.monotonic
        self.now = now
        self.plan = PomodoroPlan(
            count=config.count,
            work_seconds=config.work_seconds,
            break_seconds=config.break_seconds,
        )
        self._logger = get_logger("session")

    def run(self) -> SessionResult:
        """Run every phase, stopping early if the user quits."""
        started_at = self.now()
        start = self.monotonic()
        phases_completed = 0
        work_completed = 0
        cancelled = False

        self._logger.info(
            "run started: count=%d work=%ds break=%ds",
            self.plan.count,
            self.plan.work_seconds,
            self.plan.break_seconds,
        )

        with self.listener:
            self.display.show_start(self.plan.count, controls=self.listener.active)

            try:
                for phase in self.plan:
                    if phase.is_work:
                        self.display.show_session_header(
                            phase.session_number, self.plan.count
                        )
                        self.notifier.post(
                            NOTIFY_TITLE, WORK_MESSAGE, DEFAULT_TIMEOUT_MS
                        )
                    else:
                        self.notifier.post(
                            NOTIFY_TITLE, BREAK_MESSAGE, DEFAULT_TIMEOUT_MS
                        )

                    outcome = self.engine.run(phase, self.channel)
                    if outcome is PhaseOutcome.CANCELLED:
                        cancelled = True
                        break

                    phases_completed += 1
                    if phase.is_work:
                        work_completed += 1
            except KeyboardInterrupt:
                # SIGINT outside the countdown wait, e.g. during notify-send.
                self._logger.info("run interrupted outside a countdown")
                cancelled = True

        result = SessionResult(
            started_at=started_at,
            finished_at=self.now(),
            elapsed_seconds=self.monotonic() - start,
            phases_completed=phases_completed,
            work_sessions_completed=work_completed,
            cancelled=cancelled,
        )

        if cancelled:
            self._logger.info(
                "run stopped by user after %d phases", result.phases_completed
            )
            show_stopped_message(result, self.display.console)
        else:
            self._logger.info("run finished in %.1fs", result.elapsed_seconds)
            self.notifier.post(FINISHED_TITLE, FINISHED_MESSAGE, DEFAULT_TIMEOUT_MS)
            show_completion_message(result, self.display.console)

        return result
