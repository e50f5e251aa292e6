"""Application-level helper models shared by use cases and the session."""

from .cancellation import CancellationToken
from .events import NotificationHub, SessionEvent
from .system_info import SystemInfo

__all__ = ["CancellationToken", "NotificationHub", "SessionEvent", "SystemInfo"]
