from __future__ import annotations

import pytest

from src.application.models import CancellationToken, NotificationHub, SessionEvent
from src.shared.logging import configure_logging


def test_publish_reaches_subscribers_in_order() -> None:
    hub = NotificationHub()
    received = []
    hub.subscribe(SessionEvent.METRICS, lambda payload: received.append(("a", payload)))
    hub.subscribe(SessionEvent.METRICS, lambda payload: received.append(("b", payload)))

    hub.publish(SessionEvent.METRICS, 1)
    hub.publish(SessionEvent.SCATTER, 2)

    assert received == [("a", 1), ("b", 1)]


def test_unsubscribe_is_idempotent() -> None:
    hub = NotificationHub()
    unsubscribe = hub.subscribe("progress", lambda payload: None)
    assert hub.subscriber_count(SessionEvent.PROGRESS) == 1

    unsubscribe()
    unsubscribe()

    assert hub.subscriber_count(SessionEvent.PROGRESS) == 0


def test_subscriber_errors_propagate() -> None:
    hub = NotificationHub()

    def _fail(payload):
        raise RuntimeError("subscriber broke")

    hub.subscribe(SessionEvent.PROGRESS, _fail)
    with pytest.raises(RuntimeError):
        hub.publish(SessionEvent.PROGRESS, [])


def test_cancellation_token() -> None:
    token = CancellationToken()
    assert not token.cancelled
    token.cancel()
    assert token.cancelled
    assert token.reason == "Training cancelled"


def test_publish_with_debug_logging_enabled() -> None:
    configure_logging(level="DEBUG")
    hub = NotificationHub()
    received = []
    hub.subscribe(SessionEvent.PROGRESS, received.append)

    try:
        hub.publish(SessionEvent.PROGRESS, {"epoch": 1})
    finally:
        configure_logging(level="INFO")

    assert received == [{"epoch": 1}]
