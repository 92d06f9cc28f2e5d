from __future__ import annotations

from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    HOST: str = "0.0.0.0"
    PORT: int = 3001
    LOG_LEVEL: str = "INFO"

    CORS_ORIGINS: list[str] = ["*"]

    API_PREFIX: str = "/api/message"

    HISTORY_MAX_SIZE: int = 50
    MIN_DURATION_MS: int = 3000
    MAX_DURATION_MS: int = 30000
    DEFAULT_DURATION_MS: int = 8000
    DEFAULT_SOURCE: str = "AI Agent"

    model_config = ConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
