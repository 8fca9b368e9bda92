"""Notification use cases."""

from app.application.use_cases.notifications.notification_sink import NotificationSink

__all__ = ["NotificationSink"]
