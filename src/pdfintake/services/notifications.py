"""
PdfIntake - Notification Center

Outbound channel for user feedback: short notifications (toasts) and the
aggregate-failure dialog. Display is left to whoever subscribes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

RETRY_ACTION = "retry"
DISMISS_ACTION = "dismiss"


class NotificationKind(str, Enum):
    """Kind of a notification; INFO is the neutral notice used for skipped files."""

    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@dataclass(frozen=True)
class Notification:
    message: str
    kind: NotificationKind


@dataclass(frozen=True)
class FailureDialog:
    """Dialog summarizing the files of a batch that failed to load.

    Attributes:
        title: Dialog heading
        message: Aggregate message
        failed_names: Names of the files that failed, in submission order
        actions: Available responses
        on_retry: Called when the user picks the retry action
    """

    title: str
    message: str
    failed_names: tuple[str, ...]
    actions: tuple[str, ...] = (RETRY_ACTION, DISMISS_ACTION)
    on_retry: Callable[[], None] | None = field(default=None, repr=False, compare=False)

    def respond(self, action: str) -> None:
        """Apply the user's response to the dialog."""
        if action not in self.actions:
            raise ValueError(f"Unknown dialog action: {action}")
        if action == RETRY_ACTION and self.on_retry is not None:
            self.on_retry()


def _dispatch(subscribers: list[Callable[[Any], None]], payload: Any) -> None:
    for callback in list(subscribers):
        try:
            callback(payload)
        except Exception:
            logger.exception("Notification subscriber %r failed", callback)


def _unsubscriber(subscribers: list, callback: Callable) -> Callable[[], None]:
    def unsubscribe() -> None:
        if callback in subscribers:
            subscribers.remove(callback)

    return unsubscribe


class NotificationCenter:
    """Delivers notifications and failure dialogs to the display layer."""

    def __init__(self) -> None:
        self._notification_subscribers: list[Callable[[Notification], None]] = []
        self._dialog_subscribers: list[Callable[[FailureDialog], None]] = []

    def subscribe(self, callback: Callable[[Notification], None]) -> Callable[[], None]:
        self._notification_subscribers.append(callback)
        return _unsubscriber(self._notification_subscribers, callback)

    def subscribe_dialogs(self, callback: Callable[[FailureDialog], None]) -> Callable[[], None]:
        self._dialog_subscribers.append(callback)
        return _unsubscriber(self._dialog_subscribers, callback)

    def notify(self, message: str, kind: NotificationKind) -> Notification:
        notification = Notification(message=message, kind=kind)
        logger.debug("Notification (%s): %s", kind.value, message)
        _dispatch(self._notification_subscribers, notification)
        return notification

    def success(self, message: str) -> Notification:
        return self.notify(message, NotificationKind.SUCCESS)

    def error(self, message: str) -> Notification:
        return self.notify(message, NotificationKind.ERROR)

    def info(self, message: str) -> Notification:
        return self.notify(message, NotificationKind.INFO)

    def show_failure_dialog(self, dialog: FailureDialog) -> None:
        logger.debug("Failure dialog: %s %s", dialog.message, list(dialog.failed_names))
        _dispatch(self._dialog_subscribers, dialog)
