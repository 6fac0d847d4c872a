"""
Notification sinks.

The engine reports every user-visible result (success, failure, "nothing to
export") through a NotificationSink. Sinks are fire-and-forget: notify()
never raises back into the engine.
"""

from abc import ABC, abstractmethod

from record_console.lib import logs
from record_console.models.common import Notification, NotificationType

LOG = logs.logger(__file__)


class NotificationSink(ABC):
    """Destination for user-facing notifications."""

    @abstractmethod
    def notify(self, notification: Notification) -> None:
        """Deliver a notification."""

    def success(self, text: str, title: str | None = None) -> None:
        self.notify(Notification(NotificationType.SUCCESS, text, title))

    def error(self, text: str, title: str | None = None) -> None:
        self.notify(Notification(NotificationType.ERROR, text, title))

    def info(self, text: str, title: str | None = None) -> None:
        self.notify(Notification(NotificationType.INFO, text, title))


class CollectingNotificationSink(NotificationSink):
    """
    Logs notifications and buffers them until they are drained.

    The UI drains the buffer after each event and turns the entries into
    toasts; tests inspect it directly.
    """

    def __init__(self) -> None:
        self.notifications: list[Notification] = []

    def notify(self, notification: Notification) -> None:
        level = "warning" if notification.type is NotificationType.ERROR else "info"
        getattr(LOG, level)("%s: %s", notification.type.value, notification.text)
        self.notifications.append(notification)

    def drain(self) -> list[Notification]:
        drained, self.notifications = self.notifications, []
        return drained
