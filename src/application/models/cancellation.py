"""Cooperative cancellation for long-running training runs."""

from __future__ import annotations

from typing import Optional


class CancellationToken:
    """Flag checked by the training loop at every epoch boundary."""

    def __init__(self) -> None:
        self._cancelled = False
        self._reason: Optional[str] = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    def cancel(self, reason: str = "Training cancelled") -> None:
        self._cancelled = True
        self._reason = reason
