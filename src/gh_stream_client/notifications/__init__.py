"""Notifications service package."""

from .models import Notification, NotificationRepository, NotificationSubject, ThreadSubscription
from .queries import MarkAsReadRequest, NewThreadSubscription, NotificationsRequest

__all__ = [
    "NotificationsRequest",
    "MarkAsReadRequest",
    "NewThreadSubscription",
    "Notification",
    "NotificationRepository",
    "NotificationSubject",
    "ThreadSubscription",
]
