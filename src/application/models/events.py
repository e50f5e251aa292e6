"""
Session notifications.

The session pushes full snapshots to subscribers at well-defined points of
ingestion and training. Delivery is synchronous and in publication order, so
subscribers always observe epoch-ordered progress.
"""

from __future__ import annotations

from collections import defaultdict
from enum import Enum
from typing import Any, Callable, DefaultDict, List

from src.shared import get_logger

logger = get_logger(__name__)

Subscriber = Callable[[Any], None]


class SessionEvent(str, Enum):
    """Kinds of snapshot published by the session."""

    PROGRESS = "progress"
    METRICS = "metrics"
    SCATTER = "scatter"
    TIME_SERIES = "time_series"


class NotificationHub:
    """Registry of subscribers per event kind."""

    def __init__(self) -> None:
        self._subscribers: DefaultDict[SessionEvent, List[Subscriber]] = defaultdict(
            list
        )

    def subscribe(
        self, event: SessionEvent, callback: Subscriber
    ) -> Callable[[], None]:
        """Register ``callback`` and return a function that removes it."""
        event = SessionEvent(event)
        self._subscribers[event].append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers[event]:
                self._subscribers[event].remove(callback)

        return unsubscribe

    def publish(self, event: SessionEvent, payload: Any) -> None:
        event = SessionEvent(event)
        subscribers = list(self._subscribers[event])
        logger.debug(
            "notifications.publish", kind=event.value, subscribers=len(subscribers)
        )
        for callback in subscribers:
            callback(payload)

    def subscriber_count(self, event: SessionEvent) -> int:
        return len(self._subscribers[SessionEvent(event)])
