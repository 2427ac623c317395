"""Notification service: records sent notifications and publishes their content."""
from __future__ import annotations

import logging

from notification_system.models import Notification
from notification_system.observable import NotificationObservable

logger = logging.getLogger(__name__)


class NotificationService:
    """Front door for sending notifications.

    Constructed explicitly and passed to whoever needs it; there is no shared
    module-level instance.
    """

    def __init__(self, observable: NotificationObservable | None = None) -> None:
        self.observable = observable if observable is not None else NotificationObservable()
        self.history: list[Notification] = []

    def send(self, notification: Notification | str) -> str:
        """Record the notification, publish its content and return that content."""
        if isinstance(notification, str):
            notification = Notification(notification)
        self.history.append(notification)
        content = notification.content
        logger.info("sending notification #%s", len(self.history))
        self.observable.publish(content)
        return content
