"""Lightweight settings structures consumed by the application layer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SystemInfo:
    """Subset of configuration exposed by the info endpoint."""

    title: str
    description: str
    version: str
    environment: str
    default_epochs: int
    default_batch_size: int
    default_learning_rate: float
    default_validation_ratio: float
