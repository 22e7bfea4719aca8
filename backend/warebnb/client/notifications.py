# Overview: Toast notification sinks used by the API client.

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


SUCCESS_DURATION_MS = 5000
ERROR_DURATION_MS = 10000


@dataclass(frozen=True)
class Notification:
    type: str  # success | error | info
    message: str
    duration: int


class Notifier(Protocol):
    def add_notification(self, type: str, message: str, duration: int) -> None:
        ...


class NotificationCenter:
    """Collects notifications in memory, oldest first."""

    def __init__(self):
        self.notifications: list[Notification] = []

    def add_notification(self, type: str, message: str, duration: int) -> None:
        self.notifications.append(Notification(type=type, message=message, duration=duration))

    def clear(self) -> None:
        self.notifications.clear()

    @property
    def last(self) -> Notification | None:
        return self.notifications[-1] if self.notifications else None


class NullNotifier:
    """Drops every notification."""

    def add_notification(self, type: str, message: str, duration: int) -> None:
        return None
