"""Engine configuration via environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    # Logging
    DEBUG: bool = False
    LOG_LEVEL: str = "info"

    # Rule set checks
    STRICT_PRECONDITIONS: bool = False
    ENFORCE_DECLARATION_ORDER: bool = False

    # Registry
    DUPLICATE_VALIDATOR_POLICY: Literal["reject", "replace"] = "reject"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
