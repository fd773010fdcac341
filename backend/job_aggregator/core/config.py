from __future__ import annotations
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Georgian Job Aggregator"
    env: str = "dev"
    log_level: str = "INFO"

    scrape_timeout_seconds: float = 15.0
    new_job_window_hours: int = 24
    min_title_length: int = 3
    default_location: str = "თბილისი"

    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    )
    accept_language: str = "ka-GE,ka;q=0.9,en-US;q=0.8,en;q=0.7"


settings = Settings()
