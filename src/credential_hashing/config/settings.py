"""Runtime settings loaded from environment variables."""

from functools import lru_cache
from typing import Annotated

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from credential_hashing.domain.credentials.parameters import (
    DEFAULT_HASH_BYTES,
    DEFAULT_ITERATIONS,
    DEFAULT_SALT_BYTES,
    MIN_ITERATIONS,
)

Iterations = Annotated[int, Field(ge=MIN_ITERATIONS)]
ByteLength = Annotated[int, Field(ge=16, le=1024)]


class Settings(BaseSettings):
    """Environment-driven hashing settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    password_hash_iterations: Iterations = Field(
        default=DEFAULT_ITERATIONS,
        validation_alias="PASSWORD_HASH_ITERATIONS",
    )
    password_salt_bytes: ByteLength = Field(
        default=DEFAULT_SALT_BYTES,
        validation_alias="PASSWORD_SALT_BYTES",
    )
    password_hash_bytes: ByteLength = Field(
        default=DEFAULT_HASH_BYTES,
        validation_alias="PASSWORD_HASH_BYTES",
    )
    upgrade_legacy_credentials: bool = Field(
        default=False,
        validation_alias="UPGRADE_LEGACY_CREDENTIALS",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Load and cache application settings."""

    return Settings()
