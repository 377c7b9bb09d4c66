"""Application configuration from environment variables."""
import os
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

# Cron schedules used when CRON_SCHEDULE is not set
PRODUCTION_CRON_SCHEDULE = "0 * * * *"
DEVELOPMENT_CRON_SCHEDULE = "*/5 * * * * *"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="",
        case_sensitive=False,
        env_file=".env",
        extra="ignore",
    )

    # 'production' or 'development'
    environment: str = "production"

    # Comma-separated list of URLs to probe
    target_urls: str = ""

    # Per-probe timeout; a single attempt per endpoint per sweep
    probe_timeout_seconds: float = 5.0

    # Crontab expression (5 fields, or 6 with leading seconds)
    cron_schedule: Optional[str] = None

    # Fixed interval used instead of a cron schedule when set
    check_interval_seconds: Optional[int] = None

    # Directory for the status snapshot and the transition log
    data_path: str = "./data"
    status_file_name: str = "health-status.json"
    log_file_name: str = "health-events.log"

    # Web server port for the inspection API
    web_port: int = 3000

    # Email alerts
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_username: str = ""
    smtp_password: str = ""
    smtp_use_tls: bool = True
    alert_email_from: str = ""
    alert_email_to: str = ""  # Comma-separated

    # Optional webhook alerts
    webhook_url: str = ""


settings = Settings()


def get_endpoints(config: Optional[Settings] = None) -> List[str]:
    """Parse the configured endpoint list, keeping configured order.

    Blank entries are dropped and duplicates are probed only once.
    """
    config = config or settings
    endpoints: List[str] = []
    for url in config.target_urls.split(","):
        url = url.strip()
        if url and url not in endpoints:
            endpoints.append(url)
    return endpoints


def get_cron_schedule(config: Optional[Settings] = None) -> str:
    """Get the effective cron schedule.

    Priority:
    1. CRON_SCHEDULE environment variable
    2. Every 5 seconds in development mode
    3. Hourly
    """
    config = config or settings
    if config.cron_schedule:
        return config.cron_schedule.strip()
    if config.environment.lower() == "development":
        return DEVELOPMENT_CRON_SCHEDULE
    return PRODUCTION_CRON_SCHEDULE


def get_status_file_path(config: Optional[Settings] = None) -> str:
    config = config or settings
    return os.path.join(config.data_path, config.status_file_name)


def get_log_file_path(config: Optional[Settings] = None) -> str:
    config = config or settings
    return os.path.join(config.data_path, config.log_file_name)
