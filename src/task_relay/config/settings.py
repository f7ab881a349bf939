"""Application settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[3]


class Settings(BaseSettings):
    """Runtime settings loaded from environment variables."""

    app_name: str = "task-relay"
    signed_url: str = ""
    api_base_url: str = ""
    profile: str = ""
    task_name: str = ""
    poll_interval_ms: int = Field(default=5000, ge=0)
    session_id: str = ""
    default_geo: str = "SFO"
    geo_header: str = "cf-ipcountry"
    http_timeout_s: float = Field(default=30.0, gt=0.0)
    # None keeps polling until the task reaches a terminal state.
    poll_timeout_s: float | None = Field(default=None, gt=0.0)
    cache_enabled: bool = True
    cache_ttl_s: int = Field(default=3600, ge=0)
    cache_max_entries: int = Field(default=1024, ge=1)
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="TASK_RELAY_",
        extra="ignore",
        env_file=(PROJECT_ROOT / ".env", PROJECT_ROOT / ".env.local"),
        env_file_encoding="utf-8",
    )

    def missing_required(self) -> list[str]:
        missing: list[str] = []
        if not self.signed_url.strip():
            missing.append("TASK_RELAY_SIGNED_URL")
        if not self.api_base_url.strip():
            missing.append("TASK_RELAY_API_BASE_URL")
        return missing


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
