"""Configuration management for the application."""

from pydantic_settings import BaseSettings
from pydantic import Field


DEFAULT_MODEL = "gemini-2.5-flash-image"

MODEL_FALLBACKS = [
    "gemini-2.5-flash-image",
    "gemini-3.1-flash-image-preview",
    "gemini-3-pro-image-preview",
    "gemini-2.0-flash-exp-image-generation",
]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Credentials
    gemini_api_key: str | None = Field(default=None, description="Gemini API key")

    # Model Configuration
    gemini_model: str = Field(
        default=DEFAULT_MODEL, description="Primary model used for generation"
    )
    fallback_models: list[str] = Field(
        default_factory=lambda: list(MODEL_FALLBACKS),
        description="Models tried in order when the primary one is not found",
    )

    # API Configuration
    gemini_base_api: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta/models",
        description="Gemini models base URL",
    )

    # Proxy Configuration
    proxy: str | None = Field(default=None, description="HTTP proxy URL")

    # Timeout Configuration
    timeout: int = Field(default=120, description="Request timeout in seconds")
    connect_timeout: int = Field(
        default=10, description="Connection timeout in seconds"
    )

    # Preview Configuration
    preview_width: int = Field(
        default=60, description="Default preview width in terminal columns"
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Global settings instance
settings = Settings()
