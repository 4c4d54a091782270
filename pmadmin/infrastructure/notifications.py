"""User-facing notification hooks.

Engines report every success message and every failure through a
:class:`NotificationSink`. The default sink only writes to the logging
system; the HTTP layer installs a collecting sink per request so that the
front-end can render the notifications as toasts.
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Literal, Protocol

logger = logging.getLogger(__name__)

NOTIFICATION_DURATION_MS = 3000
REQUEST_FAILED_TITLE = "Request failed"
REQUEST_SUCCEEDED_TITLE = "Request succeeded"


@dataclass(frozen=True, slots=True)
class Notification:
    title: str
    description: str
    type: Literal["success", "error"]
    duration: int = NOTIFICATION_DURATION_MS
    error: str | None = None

    def as_dict(self) -> dict[str, object]:
        return asdict(self)


class NotificationSink(Protocol):
    """Contract for toast/notification integrations."""

    def show(self, notification: Notification) -> None:
        """Display ``notification``; the result is never inspected."""


class LoggingNotificationSink:
    """Fallback sink used when no UI is attached."""

    def show(self, notification: Notification) -> None:
        level = logging.ERROR if notification.type == "error" else logging.INFO
        logger.log(level, "%s: %s", notification.title, notification.description)


class CollectingNotificationSink:
    """Keeps notifications in memory until the caller reads them."""

    def __init__(self) -> None:
        self.notifications: list[Notification] = []

    def show(self, notification: Notification) -> None:
        self.notifications.append(notification)

    def as_dicts(self) -> list[dict[str, object]]:
        return [item.as_dict() for item in self.notifications]

    def clear(self) -> None:
        self.notifications.clear()


def failure_notification(message: str) -> Notification:
    return Notification(
        title=REQUEST_FAILED_TITLE,
        description=message,
        type="error",
        error=message,
    )


def success_notification(message: str) -> Notification:
    return Notification(title=REQUEST_SUCCEEDED_TITLE, description=message, type="success")


_sink: NotificationSink = LoggingNotificationSink()


def configure_notification_sink(sink: NotificationSink) -> None:
    """Install the sink used by engines created without an explicit one."""

    global _sink
    _sink = sink


def get_notification_sink() -> NotificationSink:
    return _sink


def reset_notification_sink() -> None:
    configure_notification_sink(LoggingNotificationSink())
