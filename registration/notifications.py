from typing import List, Literal, Optional, Protocol

from pydantic import BaseModel


class Notification(BaseModel):
    title: str
    description: Optional[str] = None
    variant: Literal["default", "destructive"] = "default"


class Notifier(Protocol):
    def notify(self, notification: Notification) -> None: ...


class CollectingNotifier:
    """Keeps every notification; the UI (or a test) drains `notifications`."""

    def __init__(self):
        self.notifications: List[Notification] = []

    def notify(self, notification: Notification) -> None:
        self.notifications.append(notification)
