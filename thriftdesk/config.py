"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding=ENV_FILE_ENCODING,
        extra="ignore",
    )

    database_url: str = Field(
        default="sqlite:///./thriftdesk.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key for signing JWT tokens", min_length=1
    )
    access_token_expire_minutes: int = Field(
        default=720,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    password_hash_rounds: int = Field(
        default=310_000,
        description="PBKDF2 rounds used when hashing staff passwords",
        gt=0,
    )
    app_timezone: str = Field(
        default="America/Toronto",
        description="Timezone used to decide which calendar day it is in the store",
    )
    upload_dir: str = Field(
        default="uploads",
        description="Directory where uploaded images are written when using local storage",
    )
    upload_max_bytes: int = Field(
        default=5 * 1024 * 1024,
        description="Largest accepted image upload in bytes",
        gt=0,
    )
    azure_storage_connection_string: str | None = Field(
        default=None,
        description="Azure Blob Storage connection string; enables blob storage for images",
    )
    azure_storage_container_name: str | None = Field(
        default=None,
        description="Azure Blob Storage container that receives uploaded images",
    )
    log_level: str = Field(default="INFO", description="Root logging level")
    cors_origins: list[str] = Field(
        default_factory=list,
        description="Origins allowed to call the API from a browser",
    )

    @field_validator("app_timezone")
    @classmethod
    def _validate_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value

    @model_validator(mode="after")
    def _validate_azure_pair(self) -> "Settings":
        if bool(self.azure_storage_connection_string) ^ bool(
            self.azure_storage_container_name
        ):
            raise ValueError(
                "AZURE_STORAGE_CONNECTION_STRING and AZURE_STORAGE_CONTAINER_NAME "
                "must both be provided to enable blob storage"
            )
        return self

    @property
    def uses_blob_storage(self) -> bool:
        return bool(self.azure_storage_connection_string)


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
