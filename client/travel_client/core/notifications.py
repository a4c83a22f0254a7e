"""User-facing notifications (toast messages) raised by hook actions."""

import threading
import time
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Deque, List, Optional

from .observability import get_logger, metrics_collector

logger = get_logger(__name__)


class NotificationLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"
    WARNING = "warning"


@dataclass(frozen=True)
class Notification:
    """An ephemeral message shown to the user."""

    level: NotificationLevel
    message: str
    created_at: float = field(default_factory=time.time)


NotificationListener = Callable[[Notification], None]


class Notifier:
    """
    Collects notifications and fans them out to listeners.

    The most recent ``history_size`` notifications are kept so a consumer
    that attaches late (or a test) can inspect what was shown.
    """

    def __init__(self, history_size: int = 100):
        self._history: Deque[Notification] = deque(maxlen=history_size)
        self._listeners: List[NotificationListener] = []
        self._lock = threading.Lock()

    def notify(self, level: NotificationLevel, message: str) -> Notification:
        notification = Notification(level=NotificationLevel(level), message=message)
        with self._lock:
            self._history.append(notification)
            listeners = list(self._listeners)

        metrics_collector.record_notification(notification.level.value)
        logger.info("Notification emitted", level=notification.level.value, text=message)

        for listener in listeners:
            listener(notification)
        return notification

    def success(self, message: str) -> Notification:
        return self.notify(NotificationLevel.SUCCESS, message)

    def error(self, message: str) -> Notification:
        return self.notify(NotificationLevel.ERROR, message)

    def info(self, message: str) -> Notification:
        return self.notify(NotificationLevel.INFO, message)

    def warning(self, message: str) -> Notification:
        return self.notify(NotificationLevel.WARNING, message)

    def subscribe(self, listener: NotificationListener) -> Callable[[], None]:
        """Register a listener; returns a function that removes it."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    @property
    def history(self) -> List[Notification]:
        with self._lock:
            return list(self._history)

    def last(self, level: Optional[NotificationLevel] = None) -> Optional[Notification]:
        """Return the newest notification, optionally of a given level."""
        for notification in reversed(self.history):
            if level is None or notification.level == level:
                return notification
        return None

    def clear(self) -> None:
        with self._lock:
            self._history.clear()
