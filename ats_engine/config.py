"""Runtime settings, read from ``ATS_*`` environment variables or a ``.env`` file."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="ATS_", env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # HTTP
    timeout_s: float = 20.0
    max_retries: int = 3
    backoff_s: float = 2.0  # doubled on every 429 retry
    user_agent: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/138.0.0.0 Safari/537.36"
    )

    log_level: str = "INFO"


settings = Settings()
