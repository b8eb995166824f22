"""Custom exceptions for Pomodoro CLI."""

from pomodoro_cli.utils.exit_codes import (
    ERROR_CLOCK,
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    ERROR_TERMINAL,
)


class PomodoroError(Exception):
    """Base exception for all Pomodoro errors, carrying a process exit code."""

    exit_code = ERROR_GENERAL

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class TerminalError(PomodoroError):
    """Raised when the terminal cannot be switched to raw mode or written to."""

    exit_code = ERROR_TERMINAL


class ClockError(PomodoroError):
    """Raised when the monotonic clock cannot be read."""

    exit_code = ERROR_CLOCK


class InvalidConfigError(PomodoroError):
    """Raised when timer settings fail validation."""

    exit_code = ERROR_INVALID_ARGS


class NotificationError(PomodoroError):
    """Raised by notifier backends when a notification cannot be shown."""
