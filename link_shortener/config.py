"""Configuration management for the link shortener."""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Config(BaseSettings):
    """Application configuration."""

    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind to"
    )

    port: int = Field(
        default=5000,
        description="Port to listen on"
    )

    workers: int = Field(
        default=1,
        ge=1,
        description="Number of uvicorn worker processes. Stores are per process, so links are not shared across workers."
    )

    # Short link settings
    base_url: str = Field(
        default="http://localhost:5000",
        description="Base URL for generating short URLs when the request carries no host"
    )

    path_prefix: str = Field(
        default="/s",
        description="Path prefix of the redirect endpoint (e.g., '/s' for /s/abc123)"
    )

    short_code_length: int = Field(
        default=6,
        ge=1,
        description="Length of generated short codes"
    )

    max_collision_retries: int = Field(
        default=10,
        ge=0,
        description="Extra generation attempts after a short code collision"
    )

    default_validity_minutes: float = Field(
        default=30,
        gt=0,
        description="Minutes a link stays active when the request gives no validity"
    )

    max_custom_code_length: int = Field(
        default=32,
        ge=1,
        description="Maximum length of caller-supplied short codes"
    )

    # Expiry sweeper settings
    sweep_interval_seconds: float = Field(
        default=0,
        ge=0,
        description="Seconds between expiry sweeps; 0 disables the sweeper"
    )

    sweep_grace_seconds: float = Field(
        default=3600,
        ge=0,
        description="Seconds an expired link stays queryable before a sweep removes it"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)"
    )

    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",  # Ignore extra environment variables
    }


def load_config() -> Config:
    """Load configuration from environment."""
    return Config()
