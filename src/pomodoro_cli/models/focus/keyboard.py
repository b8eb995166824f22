"""Cross-platform raw keyboard input and the background input listener."""

from __future__ import annotations

import os
import select
import sys
import threading
import time

from pomodoro_cli.utils.logger import get_logger

from .exceptions import TerminalError
from .signals import SignalChannel
from .state import ControlSignal

if sys.platform != "win32":
    import termios

CTRL_C = "\x03"
ESCAPE = b"\x1b"
EXTENDED_KEY_PREFIXES = ("\x00", "\xe0")

KEY_BINDINGS = {
    " ": ControlSignal.PAUSE_TOGGLE,
    "p": ControlSignal.PAUSE_TOGGLE,
    "q": ControlSignal.QUIT,
    CTRL_C: ControlSignal.QUIT,
}


def map_key(key: str | None) -> ControlSignal | None:
    """Translate a single keypress into a control signal (or None)."""
    if not key:
        return None
    return KEY_BINDINGS.get(key.lower())


class KeyboardHandler:
    """Raw (unbuffered, no echo) keyboard input on a POSIX terminal."""

    def __init__(self, stream=None):
        self.stream = stream or sys.stdin
        try:
            self.fd = self.stream.fileno()
        except (OSError, ValueError):
            self.fd = None
        self.old_settings = None

    def is_interactive(self) -> bool:
        """Whether the input stream is a terminal at all."""
        if self.fd is None:
            return False
        try:
            return os.isatty(self.fd)
        except OSError:
            return False

    def enable_raw_input(self) -> None:
        """Switch the terminal to cbreak mode with Ctrl-C delivered as a key."""
        if self.old_settings is not None:
            return
        try:
            self.old_settings = termios.tcgetattr(self.fd)
            mode = termios.tcgetattr(self.fd)
            mode[3] &= ~(termios.ECHO | termios.ICANON | termios.ISIG)
            mode[6][termios.VMIN] = 1
            mode[6][termios.VTIME] = 0
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, mode)
        except (termios.error, OSError) as e:
            self.old_settings = None
            raise TerminalError(f"Cannot enable raw keyboard input: {e}") from e

    def disable_raw_input(self) -> None:
        """Restore the terminal settings saved by enable_raw_input."""
        if self.old_settings is None:
            return
        try:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self.old_settings)
        except (termios.error, OSError) as e:
            get_logger("keyboard").warning("failed to restore terminal settings: %s", e)
        finally:
            self.old_settings = None

    def read_key(self, timeout: float | None = None) -> str | None:
        """
        Wait up to *timeout* seconds for a single keypress.

        Returns the key character or None if no key was pressed. Escape
        sequences (function keys, arrows, Alt combinations) are consumed
        whole and also yield None. Raises OSError if the stream can no
        longer be read.
        """
        ready, _, _ = select.select([self.fd], [], [], timeout)
        if not ready:
            return None
        data = os.read(self.fd, 1)
        if not data:
            raise EOFError("keyboard input closed")
        if data == ESCAPE:
            self._drain_pending()
            return None
        return data.decode("utf-8", errors="ignore")

    def _drain_pending(self) -> None:
        while select.select([self.fd], [], [], 0)[0]:
            if not os.read(self.fd, 32):
                return

    def __enter__(self) -> KeyboardHandler:
        self.enable_raw_input()
        return self

    def __exit__(self, *exc) -> None:
        self.disable_raw_input()


class WindowsKeyboardHandler:
    """Keyboard handler for Windows using msvcrt."""

    POLL_INTERVAL = 0.05

    def __init__(self):
        try:
            import msvcrt

            self.msvcrt = msvcrt
        except ImportError:
            self.msvcrt = None

    def is_interactive(self) -> bool:
        return self.msvcrt is not None and sys.stdin.isatty()

    def enable_raw_input(self) -> None:
        """msvcrt reads keys unbuffered already."""

    def disable_raw_input(self) -> None:
        """No cleanup needed on Windows."""

    def read_key(self, timeout: float | None = None) -> str | None:
        """Poll for a key until *timeout* elapses."""
        if not self.msvcrt:
            return None

        deadline = None if timeout is None else time.monotonic() + timeout
        while True:
            if self.msvcrt.kbhit():
                key = self.msvcrt.getwch()
                if isinstance(key, bytes):
                    key = key.decode("utf-8", errors="ignore")
                if key in EXTENDED_KEY_PREFIXES:
                    # Second half of a function or arrow key.
                    self.msvcrt.getwch()
                    return None
                return key
            if deadline is not None and time.monotonic() >= deadline:
                return None
            time.sleep(self.POLL_INTERVAL)

    def __enter__(self) -> WindowsKeyboardHandler:
        return self

    def __exit__(self, *exc) -> None:
        pass


def get_keyboard_handler():
    """Return the keyboard handler for the current platform."""
    if sys.platform == "win32":
        return WindowsKeyboardHandler()
    return KeyboardHandler()


class InputListener:
    """Background thread turning keystrokes into control signals.

    Used as a context manager: entering switches the terminal to raw mode
    and starts the thread, leaving stops it and always restores the
    terminal, whatever the exit path.
    """

    POLL_INTERVAL = 0.1

    def __init__(self, channel: SignalChannel, keyboard=None):
        self.channel = channel
        self.keyboard = keyboard if keyboard is not None else get_keyboard_handler()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self.active = False

    def start(self) -> None:
        if self._thread is not None:
            return
        if not self.keyboard.is_interactive():
            get_logger("keyboard").info(
                "stdin is not a terminal, keyboard controls disabled"
            )
            return

        self.keyboard.enable_raw_input()
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run, name="pomodoro-input", daemon=True
        )
        self.active = True
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        try:
            if self._thread is not None:
                self._thread.join(timeout=self.POLL_INTERVAL * 5)
        finally:
            self._thread = None
            self.active = False
            self.keyboard.disable_raw_input()

    def _run(self) -> None:
        logger = get_logger("keyboard")
        while not self._stop.is_set():
            try:
                key = self.keyboard.read_key(self.POLL_INTERVAL)
            except (OSError, ValueError, EOFError) as e:
                # Keyboard control is lost, the timer keeps running.
                logger.warning("keyboard listener stopped: %s", e)
                break

            signal = map_key(key)
            if signal is not None:
                logger.debug("key %r -> %s", key, signal.name)
                self.channel.send(signal)
        self.active = False

    def __enter__(self) -> InputListener:
        self.start()
        return self

    def __exit__(self, *exc) -> None:
        self.stop()
