"""Configuration management using pydantic-settings."""
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Upstream sports data provider ("mock" or "rest")
    sports_api_provider: str = "mock"
    sports_api_key: Optional[str] = None
    sports_api_base_url: Optional[str] = None
    upstream_timeout_seconds: float = 10.0

    # Match cache
    matches_cache_ttl_seconds: int = 300
    coalesce_timeout_seconds: float = 30.0
    max_parallel_fetches: int = 8

    # Logging
    log_level: str = "INFO"

    # Notification client
    server_base_url: str = "http://localhost:8000"
    client_state_path: Path = Path("./.sportshub_client.json")
    poll_interval_seconds: int = 60
    notification_window_minutes: int = 120
    banner_timeout_seconds: float = 8.0
    notified_retention_days: int = 7  # Drop notified ids this long after kickoff
    native_notifications: bool = True
    notify_command: str = "notify-send"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
