"""Client configuration value object and directory layout."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ebics_config.settings import Settings


@dataclass(frozen=True)
class ClientConfiguration:
    """
    Immutable configuration passed into every service.

    Built from Settings once per process; carries the locale, the logging
    switches and the on-disk layout below ``root_dir``::

        <root>/client.log
        <root>/serialized/<key>.json
        <root>/users/<user id>/traces
        <root>/users/<user id>/keystore
        <root>/users/<user id>/letters
    """

    root_dir: Path
    language: str = "de"
    country: str = "DE"
    log_level: str = "INFO"
    log_file_enabled: bool = True
    key_size: int = 2048

    @classmethod
    def from_settings(cls, settings: Settings) -> ClientConfiguration:
        return cls(
            root_dir=settings.root_dir,
            language=settings.language_code,
            country=settings.country_code,
            log_level=settings.log_level.upper(),
            log_file_enabled=settings.log_file_enabled,
            key_size=settings.key_size,
        )

    @property
    def locale(self) -> str:
        return f"{self.language}_{self.country}"

    @property
    def log_file(self) -> Path:
        return self.root_dir / "client.log"

    @property
    def serialization_directory(self) -> Path:
        return self.root_dir / "serialized"

    def user_directory(self, user_id: str) -> Path:
        return self.root_dir / "users" / user_id

    def trace_directory(self, user_id: str) -> Path:
        return self.user_directory(user_id) / "traces"

    def keystore_directory(self, user_id: str) -> Path:
        return self.user_directory(user_id) / "keystore"

    def letters_directory(self, user_id: str) -> Path:
        return self.user_directory(user_id) / "letters"
