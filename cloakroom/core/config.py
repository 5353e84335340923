# cloakroom/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    DATABASE_URL: str = Field(default="sqlite:///./cloakroom.db")
    APP_NAME: str = "Cloakroom API"
    APP_DESC: str = "Walk-in item storage: check-in, check-out and time-based billing"
    APP_VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"

    # Comma-separated CORS origins; empty means "*"
    CORS_ORIGINS: str | None = None

    # Ticket tokens
    TOKEN_LENGTH: int = Field(default=8, ge=4, le=32)
    TOKEN_MAX_ATTEMPTS: int = Field(default=5, ge=1)

    # Listing
    DEFAULT_LIST_LIMIT: int = 100
    MAX_LIST_LIMIT: int = 500

    # Pydantic v2 style config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def cors_origins(self) -> list[str]:
        if not self.CORS_ORIGINS:
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]
