"""Desktop notification adapters.

The timer only needs two capabilities from a backend: ``post`` a
notification (returning a handle) and ``update`` a visible one in place.
Backends raise NotificationError; BestEffortNotifier turns the first
failure into a logged warning and stops notifying for the rest of the run.
"""

from __future__ import annotations

import shutil
import subprocess
from typing import Any, Protocol

from plyer import notification as plyer_notification

from pomodoro_cli.models.focus.exceptions import NotificationError
from pomodoro_cli.utils.logger import get_logger

APP_NAME = "pomodoro"
DEFAULT_TIMEOUT_MS = 5000
PERSISTENT = 0


class Notifier(Protocol):
    def post(self, summary: str, body: str, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> Any:
        """Show a notification. Returns a handle for update(), or None."""

    def update(self, handle: Any, summary: str, body: str) -> None:
        """Replace summary and body of the notification behind *handle*."""


class NotifySendNotifier:
    """libnotify backend driving the ``notify-send`` executable."""

    def __init__(self, executable: str = "notify-send", app_name: str = APP_NAME):
        self.executable = executable
        self.app_name = app_name
        self._timeouts: dict[int, int] = {}

    def _run(self, args: list[str]) -> str:
        command = [self.executable, f"--app-name={self.app_name}", *args]
        try:
            result = subprocess.run(
                command, capture_output=True, text=True, check=True, timeout=5
            )
        except (OSError, subprocess.SubprocessError) as e:
            raise NotificationError(f"notify-send failed: {e}") from e
        return result.stdout.strip()

    def post(self, summary: str, body: str, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> int | None:
        output = self._run(["--print-id", f"--expire-time={timeout_ms}", summary, body])
        try:
            handle = int(output.splitlines()[0])
        except (IndexError, ValueError):
            return None
        self._timeouts[handle] = timeout_ms
        return handle

    def update(self, handle: int | None, summary: str, body: str) -> None:
        if handle is None:
            return
        timeout_ms = self._timeouts.get(handle, PERSISTENT)
        self._run(
            [
                f"--replace-id={handle}",
                f"--expire-time={timeout_ms}",
                summary,
                body,
            ]
        )


class PlyerNotifier:
    """Cross-platform backend via plyer; cannot update in place."""

    FALLBACK_TIMEOUT_S = 10

    def __init__(self, app_name: str = APP_NAME):
        self.app_name = app_name

    def post(self, summary: str, body: str, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> None:
        timeout = timeout_ms // 1000 if timeout_ms else self.FALLBACK_TIMEOUT_S
        try:
            plyer_notification.notify(
                title=summary,
                message=body,
                app_name=self.app_name,
                timeout=max(1, timeout),
            )
        except Exception as e:
            raise NotificationError(f"plyer notification failed: {e}") from e
        return None

    def update(self, handle: Any, summary: str, body: str) -> None:
        """plyer has no replace-in-place; the live notification stays as posted."""


class NullNotifier:
    """Backend used when notifications are disabled."""

    def post(self, summary: str, body: str, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> None:
        return None

    def update(self, handle: Any, summary: str, body: str) -> None:
        pass


class BestEffortNotifier:
    """Wraps a backend so notification failures never interrupt the timer."""

    def __init__(self, backend: Notifier):
        self.backend = backend
        self.disabled = False
        self._logger = get_logger("notifier")

    def _failed(self, error: NotificationError) -> None:
        self._logger.warning(
            "desktop notifications disabled after failure: %s", error
        )
        self.disabled = True

    def post(self, summary: str, body: str, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> Any:
        if self.disabled:
            return None
        try:
            return self.backend.post(summary, body, timeout_ms)
        except NotificationError as e:
            self._failed(e)
            return None

    def update(self, handle: Any, summary: str, body: str) -> None:
        if self.disabled:
            return
        try:
            self.backend.update(handle, summary, body)
        except NotificationError as e:
            self._failed(e)


def get_notifier(enabled: bool = True) -> BestEffortNotifier:
    """Pick the notification backend available on this machine."""
    if not enabled:
        backend: Notifier = NullNotifier()
    elif executable := shutil.which("notify-send"):
        backend = NotifySendNotifier(executable)
    else:
        backend = PlyerNotifier()

    get_logger("notifier").debug("using %s", type(backend).__name__)
    return BestEffortNotifier(backend)
