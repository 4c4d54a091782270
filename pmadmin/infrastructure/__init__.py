"""Infrastructure layer exports."""

from .api_client import AdminApiClient, configure_api_client, get_api_client
from .link_probe import build_probe_url, check_url_exists, normalize_url, probe_url
from .notifications import (
    CollectingNotificationSink,
    LoggingNotificationSink,
    Notification,
    NotificationSink,
    configure_notification_sink,
    failure_notification,
    get_notification_sink,
    reset_notification_sink,
    success_notification,
)

__all__ = [
    "AdminApiClient",
    "CollectingNotificationSink",
    "LoggingNotificationSink",
    "Notification",
    "NotificationSink",
    "build_probe_url",
    "check_url_exists",
    "configure_api_client",
    "configure_notification_sink",
    "failure_notification",
    "get_api_client",
    "get_notification_sink",
    "normalize_url",
    "probe_url",
    "reset_notification_sink",
    "success_notification",
]
