"""Unit tests for SignalChannel."""

from __future__ import annotations

import threading
import time

from pomodoro_cli.models.focus.signals import SignalChannel
from pomodoro_cli.models.focus.state import ControlSignal


class TestSignalChannel:
    def test_send_then_receive(self):
        channel = SignalChannel()
        assert channel.send(ControlSignal.PAUSE_TOGGLE)
        assert channel.receive(timeout=0) is ControlSignal.PAUSE_TOGGLE

    def test_receive_times_out_with_none(self):
        channel = SignalChannel()
        start = time.monotonic()
        assert channel.receive(timeout=0.05) is None
        assert time.monotonic() - start >= 0.04

    def test_zero_timeout_does_not_block(self):
        assert SignalChannel().receive(timeout=0) is None

    def test_preserves_order(self):
        channel = SignalChannel()
        channel.send(ControlSignal.PAUSE_TOGGLE)
        channel.send(ControlSignal.QUIT)
        assert channel.receive(0) is ControlSignal.PAUSE_TOGGLE
        assert channel.receive(0) is ControlSignal.QUIT

    def test_full_channel_drops_pause_toggle(self):
        channel = SignalChannel(capacity=2)
        assert channel.send(ControlSignal.PAUSE_TOGGLE)
        assert channel.send(ControlSignal.PAUSE_TOGGLE)
        assert channel.send(ControlSignal.PAUSE_TOGGLE) is False

    def test_full_channel_never_drops_quit(self):
        channel = SignalChannel(capacity=2)
        channel.send(ControlSignal.PAUSE_TOGGLE)
        channel.send(ControlSignal.PAUSE_TOGGLE)

        assert channel.send(ControlSignal.QUIT)
        assert channel.receive(0) is ControlSignal.QUIT
        assert channel.receive(0) is None

    def test_send_never_blocks(self):
        channel = SignalChannel(capacity=1)
        start = time.monotonic()
        for _ in range(100):
            channel.send(ControlSignal.PAUSE_TOGGLE)
        assert time.monotonic() - start < 1

    def test_receive_wakes_on_send_from_other_thread(self):
        channel = SignalChannel()
        timer = threading.Timer(0.05, channel.send, args=(ControlSignal.QUIT,))
        timer.start()
        try:
            assert channel.receive(timeout=5) is ControlSignal.QUIT
        finally:
            timer.cancel()

    def test_clear(self):
        channel = SignalChannel()
        channel.send(ControlSignal.PAUSE_TOGGLE)
        channel.clear()
        assert channel.receive(0) is None
