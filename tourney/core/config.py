from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BANNER_DIR = Path(__file__).resolve().parent.parent / "static" / "banners"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_env: str = "dev"
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    log_level: str = "INFO"

    storage_backend: Literal["memory", "database"] = "memory"
    database_url: Optional[str] = None
    seed_sample_data: bool = False

    secret_key: str = "dev_secret_key_change_me"
    access_token_expire_minutes: int = 30

    banner_dir: Path = DEFAULT_BANNER_DIR

    payment_latency_seconds: float = Field(default=2.0, ge=0)
    payment_success_rate: float = Field(default=0.9, ge=0, le=1)

    @model_validator(mode="after")
    def database_url_required_for_database_backend(self):
        if self.storage_backend == "database" and not self.database_url:
            raise ValueError("DATABASE_URL must be set when STORAGE_BACKEND is 'database'")
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
