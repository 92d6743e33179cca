"""Application settings."""

from functools import lru_cache
import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[3]


class Settings(BaseSettings):
    """Runtime settings loaded from environment variables."""

    app_name: str = "mfc-bridge"
    host: str = "0.0.0.0"
    port: int = Field(default=0, ge=0, le=65535)
    log_level: str = "INFO"
    downstream_base_url: str = ""
    # None keeps remote calls unbounded; set a value to opt into a timeout.
    downstream_timeout_s: float | None = Field(default=None, gt=0)
    llm_model: str = "gpt-4o-mini"
    llm_base_url: str = "https://api.openai.com/v1"
    llm_timeout_s: float | None = Field(default=None, gt=0)
    openai_api_key: str = ""

    model_config = SettingsConfigDict(
        env_prefix="MFC_BRIDGE_",
        extra="ignore",
        env_file=(PROJECT_ROOT / ".env", PROJECT_ROOT / ".env.local"),
        env_file_encoding="utf-8",
    )

    def resolved_downstream_base_url(self) -> str:
        url = self.downstream_base_url or os.getenv("MFC_URL", "") or "http://localhost:3000"
        return url.rstrip("/")

    def resolved_openai_api_key(self) -> str:
        return self.openai_api_key or os.getenv("OPENAI_API_KEY", "")

    def resolved_port(self) -> int:
        if self.port:
            return self.port
        raw_value = os.getenv("PORT")
        if raw_value is None:
            return 4000
        try:
            return int(raw_value)
        except ValueError:
            return 4000


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
