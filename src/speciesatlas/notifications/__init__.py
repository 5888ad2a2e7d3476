"""Notification package: user-facing toast messages."""

from speciesatlas.notifications.toast import NotificationSink, Toast, ToastQueue, ToastVariant

__all__ = [
    "NotificationSink",
    "Toast",
    "ToastQueue",
    "ToastVariant",
]
