"""Tests for the notification center and failure dialog."""

import pytest

from pdfintake.services.notifications import (
    DISMISS_ACTION,
    RETRY_ACTION,
    FailureDialog,
    Notification,
    NotificationCenter,
    NotificationKind,
)


class TestNotificationCenter:
    def test_kinds(self):
        center = NotificationCenter()
        received = []
        center.subscribe(received.append)
        center.success("ok")
        center.error("bad")
        center.info("skipped")
        assert received == [
            Notification("ok", NotificationKind.SUCCESS),
            Notification("bad", NotificationKind.ERROR),
            Notification("skipped", NotificationKind.INFO),
        ]

    def test_unsubscribe(self):
        center = NotificationCenter()
        received = []
        unsubscribe = center.subscribe(received.append)
        unsubscribe()
        center.error("bad")
        assert received == []

    def test_failing_subscriber_is_isolated(self):
        center = NotificationCenter()
        received = []
        center.subscribe(lambda n: 1 / 0)
        center.subscribe(received.append)
        center.success("ok")
        assert len(received) == 1

    def test_dialogs_go_to_dialog_subscribers(self):
        center = NotificationCenter()
        toasts, dialogs = [], []
        center.subscribe(toasts.append)
        center.subscribe_dialogs(dialogs.append)
        dialog = FailureDialog(title="t", message="m", failed_names=("a.pdf",))
        center.show_failure_dialog(dialog)
        assert dialogs == [dialog]
        assert toasts == []


class TestFailureDialog:
    def test_retry_invokes_callback(self):
        calls = []
        dialog = FailureDialog("t", "m", ("a.pdf",), on_retry=lambda: calls.append(1))
        dialog.respond(RETRY_ACTION)
        assert calls == [1]

    def test_dismiss_does_nothing(self):
        calls = []
        dialog = FailureDialog("t", "m", ("a.pdf",), on_retry=lambda: calls.append(1))
        dialog.respond(DISMISS_ACTION)
        assert calls == []

    def test_retry_without_callback(self):
        FailureDialog("t", "m", ()).respond(RETRY_ACTION)

    def test_unknown_action(self):
        with pytest.raises(ValueError):
            FailureDialog("t", "m", ()).respond("later")
