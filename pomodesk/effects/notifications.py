"""Desktop notifications for finished intervals."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable

from ..timer.durations import Mode
from ..timer.engine import CompletionEvent

log = logging.getLogger(__name__)


class NotificationPermission(Enum):
    GRANTED = "granted"
    DENIED = "denied"
    NOT_YET_ASKED = "not-yet-asked"


_NEXT_MODE_NAMES: dict[Mode, str] = {
    Mode.FOCUS: "focus",
    Mode.SHORT_BREAK: "short break",
    Mode.LONG_BREAK: "long break",
}


def completion_message(event: CompletionEvent) -> tuple[str, str]:
    """Title and body for *event*."""
    minutes = max(1, event.next_duration // 60)
    upcoming = _NEXT_MODE_NAMES[event.next_mode]
    if event.finished_mode == Mode.FOCUS:
        title = "Focus session complete"
        body = (
            f"{event.focus_count_today} done today. "
            f"Enjoy a {minutes}-minute {upcoming}."
        )
    else:
        title = "Break is over"
        body = f"Back to work: {minutes} minutes of {upcoming}."
    return title, body


class Notifier:
    """Shows completion notifications once the user has allowed them.

    *show* is the host's ``(title, body) -> None`` display hook, e.g.
    ``QSystemTrayIcon.showMessage``.
    """

    def __init__(
        self,
        show: Callable[[str, str], object],
        permission: NotificationPermission = NotificationPermission.NOT_YET_ASKED,
    ) -> None:
        self._show = show
        self._permission = permission
        self.enabled = True

    @property
    def permission(self) -> NotificationPermission:
        return self._permission

    def request_permission(self, prompt: Callable[[], bool]) -> NotificationPermission:
        """Ask once via *prompt*; later calls return the stored answer."""
        if self._permission is NotificationPermission.NOT_YET_ASKED:
            granted = bool(prompt())
            self._permission = (
                NotificationPermission.GRANTED if granted
                else NotificationPermission.DENIED
            )
            log.info("Notification permission %s", self._permission.value)
        return self._permission

    def notify(self, event: CompletionEvent) -> bool:
        """Display *event*; returns False when suppressed."""
        if not self.enabled or self._permission is not NotificationPermission.GRANTED:
            return False
        title, body = completion_message(event)
        self._show(title, body)
        return True
