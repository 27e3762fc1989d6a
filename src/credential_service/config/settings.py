"""Runtime settings loaded from environment variables."""

from functools import lru_cache
from typing import Annotated

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from credential_service.infrastructure.security.password_hasher import (
    BCRYPT_COST_FACTOR,
    BCRYPT_MAX_COST,
    BCRYPT_MIN_COST,
)

NonEmptyStr = Annotated[str, Field(min_length=1)]
BcryptRounds = Annotated[int, Field(ge=BCRYPT_MIN_COST, le=BCRYPT_MAX_COST)]

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./credentials.db"


class Settings(BaseSettings):
    """Environment-driven application settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: NonEmptyStr = Field(
        default=DEFAULT_DATABASE_URL,
        validation_alias="DATABASE_URL",
    )
    bcrypt_rounds: BcryptRounds = Field(
        default=BCRYPT_COST_FACTOR,
        validation_alias="BCRYPT_ROUNDS",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Load and cache application settings."""

    return Settings()
