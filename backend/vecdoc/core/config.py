"""
Application configuration.
"""
import os
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Application settings."""

    # Database: no default, the service cannot start without it
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")

    # FastAPI
    APP_TITLE: str = "VecDoc Alerts"

    # API security: no default
    API_KEY: str = os.getenv("API_KEY", "")

    # CORS: empty means nothing is allowed
    ALLOWED_ORIGINS: str = os.getenv("ALLOWED_ORIGINS", "")

    # Local context for alert fire times and quiet hours
    TIMEZONE: str = os.getenv("TIMEZONE", "Asia/Kolkata")
    ALERT_HOUR: int = int(os.getenv("ALERT_HOUR", 9))

    # Alert processor
    ALERT_CHECK_INTERVAL_SECONDS: int = int(os.getenv("ALERT_CHECK_INTERVAL_SECONDS", 300))
    ALERT_BATCH_SIZE: int = int(os.getenv("ALERT_BATCH_SIZE", 100))
    ALERT_MAX_RETRIES: int = int(os.getenv("ALERT_MAX_RETRIES", 3))
    ALERT_SCHEDULER_ENABLED: bool = _env_bool("ALERT_SCHEDULER_ENABLED", True)

    # Delivery collaborator; empty URL means the shared notification_queue table
    NOTIFICATION_QUEUE_URL: str = os.getenv("NOTIFICATION_QUEUE_URL", "")
    NOTIFICATION_QUEUE_API_KEY: str = os.getenv("NOTIFICATION_QUEUE_API_KEY", "")
    ENQUEUE_TIMEOUT_SECONDS: float = float(os.getenv("ENQUEUE_TIMEOUT_SECONDS", 5))


settings = Settings()
