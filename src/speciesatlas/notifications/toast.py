"""User-facing toast notifications.

A toast is a fire-and-forget message with a title, a description and a
severity. Producers push toasts into a sink; the web layer drains the queue
into the response it is rendering.
"""

import logging
from enum import Enum
from typing import Protocol

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)


class ToastVariant(str, Enum):
    """Severity of a toast."""

    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


class Toast(BaseModel):
    """A single user-facing message."""

    model_config = ConfigDict(frozen=True)

    title: str
    description: str = ""
    variant: ToastVariant = ToastVariant.DEFAULT


class NotificationSink(Protocol):
    """Anything that can deliver a toast to the user."""

    def notify(self, toast: Toast) -> None:
        """Deliver ``toast``; must not raise."""
        ...


class ToastQueue(NotificationSink):
    """Collects toasts for the current request and logs each one."""

    def __init__(self) -> None:
        self._toasts: list[Toast] = []

    def notify(self, toast: Toast) -> None:
        """Queue ``toast`` for display."""
        if toast.variant is ToastVariant.DESTRUCTIVE:
            logger.warning("Toast: %s - %s", toast.title, toast.description)
        else:
            logger.info("Toast: %s - %s", toast.title, toast.description)
        self._toasts.append(toast)

    def drain(self) -> list[Toast]:
        """Return queued toasts and empty the queue."""
        toasts, self._toasts = self._toasts, []
        return toasts

    def __len__(self) -> int:
        return len(self._toasts)
