"""Application configuration."""

import os

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Storage
    db_path: str = os.getenv("DB_PATH", "data/water.db")

    # Tracker
    default_goal: int = int(os.getenv("DEFAULT_GOAL", "8"))
    reminder_delay_minutes: int = int(os.getenv("REMINDER_DELAY_MINUTES", "120"))
    reminder_check_interval: int = int(
        os.getenv("REMINDER_CHECK_INTERVAL", "60")
    )  # seconds between overdue checks

    # Server
    server_host: str = os.getenv("SERVER_HOST", "0.0.0.0")
    server_port: int = int(os.getenv("SERVER_PORT", "8000"))

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    class Config:
        """Pydantic config."""

        env_file = ".env"
        case_sensitive = False


settings = Settings()
