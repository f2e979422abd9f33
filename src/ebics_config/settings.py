"""Client settings loaded from environment variables.

Configuration file discovery (in priority order):
1. OS environment variables (always highest priority)
2. EBICS_ENV_FILE environment variable (path to a .env file)
3. <root dir>/ebics.env, root dir taken from EBICS_ROOT_DIR or
   ~/ebics/client

Uses pydantic-settings for automatic type coercion and validation.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ROOT_DIR = Path.home() / "ebics" / "client"
ENV_FILE_NAME = "ebics.env"


def default_root_dir() -> Path:
    """Root directory for keys, letters, traces and serialized records."""
    root = os.environ.get("EBICS_ROOT_DIR")
    return Path(root).expanduser() if root else DEFAULT_ROOT_DIR


def _resolve_env_file_path() -> Path | None:
    """Resolve the .env file path.

    Priority:
    1. EBICS_ENV_FILE env var
    2. <root dir>/ebics.env
    """
    env_file_path = os.environ.get("EBICS_ENV_FILE")
    if env_file_path:
        path = Path(env_file_path).expanduser()
        if path.exists():
            return path

    root_env = default_root_dir() / ENV_FILE_NAME
    if root_env.exists():
        return root_env

    return None


class Settings(BaseSettings):
    """Client configuration loaded from environment variables.

    Values are loaded from:
    1. OS environment variables (highest priority, EBICS_ prefix)
    2. .env file (see module docstring)
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="EBICS_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    root_dir: Path = DEFAULT_ROOT_DIR
    product_name: str = "ebics-client"
    language_code: str = "de"
    country_code: str = "DE"

    # Logging
    log_level: str = "INFO"
    log_file_enabled: bool = True

    # Keys
    key_size: int = 2048

    # Wire transport, as "package.module:factory"
    transport: str | None = None

    # Default user
    user_id: str | None = None
    partner_id: str | None = None
    host_id: str | None = None
    bank_url: str | None = None
    bank_name: str | None = None
    user_name: str | None = None
    user_email: str | None = None
    user_country: str | None = None
    user_org: str | None = None
    password: SecretStr | None = None

    @field_validator("language_code", mode="before")
    @classmethod
    def _lower_language(cls, v: Any) -> str:
        return str(v).strip().lower()

    @field_validator("country_code", mode="before")
    @classmethod
    def _upper_country(cls, v: Any) -> str:
        return str(v).strip().upper()

    @field_validator("root_dir", mode="before")
    @classmethod
    def _expand_root(cls, v: Any) -> Path:
        return Path(str(v)).expanduser()


@lru_cache()
def get_settings() -> Settings:
    """Return cached client settings."""
    return Settings(_env_file=_resolve_env_file_path())  # type: ignore[call-arg]


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for tests)."""
    get_settings.cache_clear()
