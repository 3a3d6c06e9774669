"""Application configuration loaded from environment variables."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """All configuration is loaded from environment variables (or .env file)."""

    # --- App ---
    app_name: str = "HormonaFlow"
    app_version: str = "0.1.0"
    log_level: str = "INFO"
    environment: str = "development"  # development | staging | production

    # --- Key-value store ---
    state_file: Path = Path("hormonaflow_state.json")
    storage_key: str = "hormonaflow_pro_final_v4"
    user_key: str = "temp_user"

    # --- New-user defaults ---
    default_language: str = "es"
    default_user_name: str = "User"

    model_config = SettingsConfigDict(
        env_prefix="HORMONAFLOW_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
