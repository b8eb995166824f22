"""Unit tests for the desktop notifier adapters."""

from __future__ import annotations

import subprocess
from unittest.mock import MagicMock

import pytest

from pomodoro_cli.models.focus.exceptions import NotificationError
from pomodoro_cli.services.notifier import (
    BestEffortNotifier,
    NotifySendNotifier,
    NullNotifier,
    PlyerNotifier,
    get_notifier,
)


def _completed(stdout: str = "") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=[], returncode=0, stdout=stdout, stderr="")


@pytest.fixture()
def mock_run(mocker):
    return mocker.patch(
        "pomodoro_cli.services.notifier.subprocess.run", return_value=_completed("17\n")
    )


class TestNotifySendNotifier:
    def test_post_returns_printed_id(self, mock_run):
        handle = NotifySendNotifier().post("Pomodoro", "Time to focus!", 5000)

        assert handle == 17
        command = mock_run.call_args.args[0]
        assert command == [
            "notify-send",
            "--app-name=pomodoro",
            "--print-id",
            "--expire-time=5000",
            "Pomodoro",
            "Time to focus!",
        ]

    def test_post_without_id_returns_none(self, mock_run):
        mock_run.return_value = _completed("")
        assert NotifySendNotifier().post("a", "b") is None

    def test_update_replaces_in_place(self, mock_run):
        notifier = NotifySendNotifier()
        handle = notifier.post("Work", "25:00 remaining.", 0)

        notifier.update(handle, "Work", "24:59 remaining.")

        command = mock_run.call_args.args[0]
        assert "--replace-id=17" in command
        assert "--expire-time=0" in command
        assert command[-2:] == ["Work", "24:59 remaining."]

    def test_update_without_handle_is_noop(self, mock_run):
        NotifySendNotifier().update(None, "Work", "body")
        mock_run.assert_not_called()

    @pytest.mark.parametrize(
        "error",
        [
            FileNotFoundError("notify-send"),
            subprocess.CalledProcessError(1, "notify-send"),
            subprocess.TimeoutExpired("notify-send", 5),
        ],
    )
    def test_failures_raise_notification_error(self, mock_run, error):
        mock_run.side_effect = error
        with pytest.raises(NotificationError):
            NotifySendNotifier().post("a", "b")


class TestPlyerNotifier:
    def test_post_calls_plyer(self, mocker):
        plyer = mocker.patch("pomodoro_cli.services.notifier.plyer_notification")

        assert PlyerNotifier().post("Pomodoro", "Take a break!", 5000) is None

        plyer.notify.assert_called_once_with(
            title="Pomodoro", message="Take a break!", app_name="pomodoro", timeout=5
        )

    def test_persistent_timeout_uses_fallback(self, mocker):
        plyer = mocker.patch("pomodoro_cli.services.notifier.plyer_notification")
        PlyerNotifier().post("Work", "body", 0)
        assert plyer.notify.call_args.kwargs["timeout"] == PlyerNotifier.FALLBACK_TIMEOUT_S

    def test_backend_error_raises_notification_error(self, mocker):
        plyer = mocker.patch("pomodoro_cli.services.notifier.plyer_notification")
        plyer.notify.side_effect = NotImplementedError("no backend")

        with pytest.raises(NotificationError):
            PlyerNotifier().post("a", "b")

    def test_update_is_noop(self, mocker):
        plyer = mocker.patch("pomodoro_cli.services.notifier.plyer_notification")
        PlyerNotifier().update(None, "a", "b")
        plyer.notify.assert_not_called()


class TestBestEffortNotifier:
    def test_passes_through(self):
        backend = MagicMock()
        backend.post.return_value = 3
        notifier = BestEffortNotifier(backend)

        assert notifier.post("a", "b", 0) == 3
        notifier.update(3, "a", "c")
        backend.update.assert_called_once_with(3, "a", "c")

    def test_first_failure_disables(self):
        backend = MagicMock()
        backend.post.side_effect = NotificationError("no daemon")
        notifier = BestEffortNotifier(backend)

        assert notifier.post("a", "b") is None
        assert notifier.disabled

        notifier.post("a", "b")
        notifier.update(1, "a", "b")
        assert backend.post.call_count == 1
        backend.update.assert_not_called()

    def test_failure_is_logged(self, tmp_path):
        backend = MagicMock()
        backend.update.side_effect = NotificationError("no daemon")
        notifier = BestEffortNotifier(backend)

        notifier.update(1, "a", "b")

        for handler in notifier._logger.parent.handlers:
            handler.flush()
        log = (tmp_path / "logs" / "pomodoro.log").read_text()
        assert "desktop notifications disabled" in log


class TestGetNotifier:
    def test_disabled_uses_null_backend(self):
        assert isinstance(get_notifier(False).backend, NullNotifier)

    def test_prefers_notify_send(self, mocker):
        mocker.patch(
            "pomodoro_cli.services.notifier.shutil.which",
            return_value="/usr/bin/notify-send",
        )
        notifier = get_notifier(True)
        assert isinstance(notifier.backend, NotifySendNotifier)
        assert notifier.backend.executable == "/usr/bin/notify-send"

    def test_falls_back_to_plyer(self, mocker):
        mocker.patch("pomodoro_cli.services.notifier.shutil.which", return_value=None)
        assert isinstance(get_notifier(True).backend, PlyerNotifier)

    def test_null_notifier_is_silent(self):
        notifier = NullNotifier()
        assert notifier.post("a", "b") is None
        notifier.update(None, "a", "b")
