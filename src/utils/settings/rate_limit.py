"""Rate limit settings configuration."""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class RateLimitSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # "memory" for a single instance, "redis" when running several replicas
    RATE_LIMIT_BACKEND: Literal["memory", "redis"] = "memory"
    RATE_LIMIT_ENABLED: bool = True

    READ_RATE_LIMIT: int = 60
    WRITE_RATE_LIMIT: int = 10
    RATE_LIMIT_WINDOW_SECONDS: int = 60
