"""Application settings read from the environment.

Priority chain (highest to lowest):
  1. Env vars with the ``CHANGEDESK_`` prefix
  2. ``.env`` file in the working directory
  3. Code defaults

``config/settings.py`` builds the Django settings from a single
:class:`AppSettings` instance.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Runtime configuration for the changedesk API."""

    model_config = SettingsConfigDict(
        env_prefix="CHANGEDESK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Literal["development", "test", "production"] = "development"
    secret_key: str = "changedesk-insecure-development-key"
    debug: bool = False
    allowed_hosts: list[str] = Field(default_factory=lambda: ["localhost", "127.0.0.1"])

    db_engine: str = "django.db.backends.sqlite3"
    db_name: str = "changedesk.sqlite3"
    db_user: str = ""
    db_password: str = ""
    db_host: str = ""
    db_port: str = ""
    db_conn_max_age: int = 0

    base_url: str = "http://localhost:8000"
    currency: str = "usd"
    stripe_secret_key: str = ""
    stripe_webhook_secret: str = ""

    pairing_ttl_seconds: int = Field(default=600, gt=0)
    dashboard_cache_ttl: int = Field(default=60, ge=0)

    log_json: bool = False
    log_level: str = "INFO"

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("currency")
    @classmethod
    def _lowercase_currency(cls, value: str) -> str:
        return value.strip().lower()

    @property
    def is_production(self) -> bool:
        return self.environment == "production"
