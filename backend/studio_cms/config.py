from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Studio CMS API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    cors_origins: list[str] = ["http://localhost:5173"]

    # Realtime store: "sql" persists through database_url, "memory" is process-local
    store_backend: str = "sql"
    database_url: str = "sqlite:///./data/studio.db"
    seed_file: str = "data/seed.yaml"

    # Telegram alerts (left blank → alerts are logged and skipped)
    telegram_bot_token: str = ""
    telegram_chat_id: str = ""
    telegram_api_base: str = "https://api.telegram.org"
    telegram_timeout: float = 10.0
    activity_log_enabled: bool = True

    # Authentication: "static" checks admin_* below, "firebase" calls Identity Toolkit
    auth_backend: str = "static"
    firebase_api_key: str = ""
    identity_toolkit_base_url: str = "https://identitytoolkit.googleapis.com/v1"
    admin_email: str = "admin@example.com"
    admin_password_hash: str = ""
    admin_password_salt: str = ""
    session_cookie_name: str = "studio_session"

    # Public forms
    submission_cooldown_seconds: float = 60.0

    # Logging: per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine SQL queries
    log_level_http: str = "WARNING"          # httpx / httpcore outbound HTTP
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_store: str = "INFO"            # record store adapters + subscriptions
    log_level_notifier: str = "INFO"         # Telegram + activity log sinks

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
