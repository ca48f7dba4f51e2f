"""Notification sinks for failures the operator has to see."""

from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class NotificationSink(Protocol):
    def notify_fatal(self, message: str) -> None: ...


class LoggingNotifier:
    """Reports fatal messages to the application log only."""

    def notify_fatal(self, message: str) -> None:
        logger.error("[notify_fatal] %s", message)


class CollectingNotifier(LoggingNotifier):
    """Logs fatal messages and keeps them so a caller can return them."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def notify_fatal(self, message: str) -> None:
        super().notify_fatal(message)
        self.messages.append(message)
