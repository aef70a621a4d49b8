from __future__ import annotations

from functools import lru_cache

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

DEFAULT_DATABASE_URL = "sqlite:///data/crowd.db"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000


class Settings(BaseSettings):
    """Process settings read from ``CROWD_API_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CROWD_API_",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    # Store credentials, only used when no URL is given
    db_host: str | None = None
    db_port: int = Field(default=3306)
    db_user: str = Field(default="root")
    db_password: str | None = None
    db_name: str = Field(default="crowd")

    database_url: str | None = Field(default=None, validate_default=True)
    db_pool_size: int = Field(default=5, ge=1)
    db_max_overflow: int = Field(default=10, ge=0)

    host: str = Field(default=DEFAULT_HOST)
    port: int = Field(default=DEFAULT_PORT, validation_alias="PORT")
    log_level: str = Field(default="INFO")

    @field_validator("database_url")
    @classmethod
    def assemble_database_url(cls, value: str | None, info: ValidationInfo) -> str:
        if value:
            return value

        host = info.data.get("db_host")
        if not host:
            return DEFAULT_DATABASE_URL

        # Credentials may contain URL-reserved characters, so let SQLAlchemy quote them.
        return URL.create(
            "mysql+pymysql",
            username=info.data.get("db_user"),
            password=info.data.get("db_password") or None,
            host=host,
            port=info.data.get("db_port"),
            database=info.data.get("db_name"),
        ).render_as_string(hide_password=False)

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.upper()


@lru_cache()
def get_settings() -> Settings:
    return Settings()
