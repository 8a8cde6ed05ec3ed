from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    # App
    app_name: str = "SwiftBank Access"
    debug: bool = False

    # Security
    secret_key: str = "dev-secret-key-change-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 30

    # Sessions
    session_duration_minutes: int = 30
    reauth_window_minutes: int = 15  # recent login required for sensitive operations

    # Redis (login lockout state)
    redis_url: str = "redis://localhost:6379/0"

    # Login lockout
    max_login_attempts: int = 3
    lockout_duration_minutes: int = 15

    # Access tables (YAML); built-in tables when unset
    access_tables_path: Optional[str] = None

    # Logging
    log_level: str = "INFO"
    log_dir: str = "/var/log/swiftbank"
    log_to_file: bool = False

    model_config = SettingsConfigDict(
        env_prefix="SWIFTBANK_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"  # Allow extra env vars without raising validation errors
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
