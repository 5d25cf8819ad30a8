"""Application configuration."""

import os

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hashbrowns import __version__

STORE_BACKENDS = ("memory", "redis", "sqlite")


class Settings(BaseSettings):
    """
    Application settings.

    Environment variables will be loaded and validated using Pydantic.
    """

    app_name: str = "Hash Browns"
    version: str = __version__

    # Comma-separated list of hosts allowed to reach the store
    APPROVED_HOSTS: str = "localhost,localhost:8000,127.0.0.1:8000"

    # Storage Settings
    STORE_BACKEND: str = "memory"
    SQLITE_PATH: str = "hashbrowns.db"
    SQLITE_TIMEOUT: float = Field(default=5.0, gt=0)

    # Redis Settings
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_KEY_PREFIX: str = "hashbrowns:"
    REDIS_TTL_SECONDS: int = Field(default=0, ge=0)  # 0 keeps entries forever
    REDIS_SOCKET_TIMEOUT: float = Field(default=5.0, gt=0)
    REDIS_MAX_RETRIES: int = Field(default=3, ge=0)

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    JSON_LOGS: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="allow",  # Allow extra fields in environment
    )

    @field_validator("STORE_BACKEND")
    @classmethod
    def validate_backend(cls, value: str) -> str:
        """Validate the storage backend name."""
        backend = value.strip().lower()
        if backend not in STORE_BACKENDS:
            raise ValueError(
                f"Unsupported store backend: {value}. "
                f"Supported backends: {', '.join(STORE_BACKENDS)}"
            )
        return backend

    @property
    def approved_hosts(self) -> list[str]:
        """Approved hosts as a list, blanks dropped."""
        return [h.strip() for h in self.APPROVED_HOSTS.split(",") if h.strip()]

    @model_validator(mode="after")
    def use_test_configs_for_testing(self) -> "Settings":
        """Use a separate Redis database for tests to ensure isolation."""
        if os.getenv("TESTING") == "true":
            test_redis_url = os.getenv("TEST_REDIS_URL")
            if test_redis_url:
                self.REDIS_URL = test_redis_url
            elif self.REDIS_URL.endswith("/0"):
                # Switch from database 0 to database 1 for tests
                self.REDIS_URL = self.REDIS_URL[:-2] + "/1"
        return self
