"""DTOs for system health and application info responses."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict

from pydantic import BaseModel, Field


class SystemHealthDTO(BaseModel):
    """DTO representing the /health response payload."""

    status: str = Field(default="up", description="Overall service status")
    has_data: bool = Field(description="Whether a dataset has been ingested")
    is_trained: bool = Field(description="Whether a trained model is available")
    is_training: bool = Field(description="Whether a training run is active")

    model_config = {
        "json_schema_extra": {
            "example": {
                "status": "up",
                "has_data": True,
                "is_trained": False,
                "is_training": True,
            }
        }
    }


class ApplicationInfoDTO(BaseModel):
    """DTO representing metadata returned by /info."""

    name: str = Field(description="Application name")
    description: str = Field(description="Application description")
    version: str = Field(description="Application version")
    environment: str = Field(description="Current deployment environment")
    started_at: datetime = Field(description="Application start timestamp")
    uptime_seconds: float = Field(description="Uptime in seconds")
    training_defaults: Dict[str, Any] = Field(
        default_factory=dict,
        description="Hyperparameters used when a request omits them",
    )
