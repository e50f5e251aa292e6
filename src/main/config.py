"""
Application Settings - Main Layer

Use Pydantic Settings for configuration management.
This module handles configuration settings provided using
environment variables, .env files and default values.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.shared import EnumEnvironment, EnumLogLevel


class ApiSettings(BaseSettings):
    """HTTP API configuration settings."""

    title: str = Field(default="Poker ROI Dashboard", description="API title")
    description: str = Field(
        default="Monthly ROI ingestion, neural network training and "
        "forecasting for poker tournament players",
        description="API description",
    )
    version: str = Field(default="1.0.0", description="API version")
    host: str = Field(default="0.0.0.0", description="Host to bind the server")
    port: int = Field(default=8000, description="Port to bind the server")
    reload: bool = Field(
        default=False, description="Enable auto-reload for development"
    )

    model_config = SettingsConfigDict(
        env_prefix="API_", case_sensitive=False, extra="ignore"
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: EnumLogLevel = Field(default=EnumLogLevel.INFO, description="Logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Logging format",
    )
    file_path: Optional[str] = Field(
        default=None, description="Log file path (if None, logs to console)"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_", case_sensitive=False, extra="ignore"
    )


class TrainingSettings(BaseSettings):
    """Default hyperparameters used when a request omits them."""

    epochs: int = Field(default=150, description="Default number of epochs")
    batch_size: int = Field(default=32, description="Default mini-batch size")
    learning_rate: float = Field(default=0.001, description="Default Adam rate")
    validation_ratio: float = Field(
        default=0.2, description="Default trailing validation fraction"
    )

    model_config = SettingsConfigDict(
        env_prefix="TRAINING_", case_sensitive=False, extra="ignore"
    )


class PredictionSettings(BaseSettings):
    """Prediction and forecasting settings."""

    recent_window_months: int = Field(
        default=6, description="Months averaged for default prediction inputs"
    )
    default_forecast_months: int = Field(
        default=6, description="Forecast horizon when a request omits it"
    )

    model_config = SettingsConfigDict(
        env_prefix="PREDICTION_", case_sensitive=False, extra="ignore"
    )


class AppSettings(BaseSettings):
    """Main application settings, aggregating all sub-settings."""

    environment: EnumEnvironment = Field(
        default=EnumEnvironment.DEVELOPMENT, description="Application environment"
    )

    api: ApiSettings = Field(default_factory=ApiSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    training: TrainingSettings = Field(default_factory=TrainingSettings)
    prediction: PredictionSettings = Field(default_factory=PredictionSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


def get_settings() -> AppSettings:
    """
    Get application settings instance Factory.

    Used to be mocked in tests, allowing different settings based on environment.
    """
    return AppSettings()


settings = get_settings()
