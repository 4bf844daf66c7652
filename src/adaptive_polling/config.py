from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ADAPTIVE_POLLING_", env_file=".env", extra="ignore"
    )

    # Redis
    redis_url: str = Field(default="redis://localhost:6379/0", validation_alias="REDIS_URL")
    # None keeps redis-py's blocking default
    redis_socket_timeout: float | None = Field(
        default=None, validation_alias="REDIS_SOCKET_TIMEOUT"
    )

    # Observability
    log_level: str = "INFO"
    log_json: bool = False


settings = Settings()
