"""Configuration management using pydantic-settings."""
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_SPORTS = ["nfl", "nba", "mlb", "wnba", "nhl"]


class Settings(BaseSettings):
    """Polling defaults, overridable through SCOREBOARD_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SCOREBOARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Scoreboard API
    base_url: str = "https://site.api.espn.com"
    user_agent: str = "scoreboard-poller/0.1"

    # Polling
    poll_interval_seconds: float = 4.0
    request_timeout_seconds: float = 10.0

    # Sports polled by ScoreboardHub when none are given explicitly
    enabled_sports: List[str] = list(DEFAULT_SPORTS)
    # sportPaths accepted in addition to the registry, e.g. ["soccer/eng.1"]
    extra_sport_paths: List[str] = []

    # Applied by scoreboard.configure_logging()
    log_level: str = "INFO"


settings = Settings()
