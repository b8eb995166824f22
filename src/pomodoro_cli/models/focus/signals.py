"""Single-consumer channel carrying control signals to the countdown engine."""

from __future__ import annotations

import queue

from pomodoro_cli.utils.logger import get_logger

from .state import ControlSignal

DEFAULT_CAPACITY = 8


class SignalChannel:
    """Small bounded queue of ControlSignal values.

    ``send`` never blocks. When the queue is full a PAUSE_TOGGLE is dropped,
    while QUIT discards everything still pending so it is always delivered.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        self._queue: queue.Queue[ControlSignal] = queue.Queue(maxsize=capacity)
        self._logger = get_logger("signals")

    def send(self, signal: ControlSignal) -> bool:
        """Enqueue *signal*. Returns False if it was dropped."""
        try:
            self._queue.put_nowait(signal)
            return True
        except queue.Full:
            if signal is not ControlSignal.QUIT:
                self._logger.debug("signal channel full, dropping %s", signal.name)
                return False

        self.clear()
        self._queue.put_nowait(signal)
        return True

    def receive(self, timeout: float | None = None) -> ControlSignal | None:
        """Wait up to *timeout* seconds for the next signal, or None."""
        try:
            if timeout is not None and timeout <= 0:
                return self._queue.get_nowait()
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None

    def clear(self) -> None:
        """Drop all pending signals."""
        while True:
            try:
                self._queue.get_nowait()
            except queue.Empty:
                return
