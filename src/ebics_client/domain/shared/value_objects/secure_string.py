"""Secure string value object for passwords and other secrets."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable


@dataclass(frozen=True)
class SecureString:
    """
    Value object that wraps sensitive string data.

    Prevents accidental exposure through string representation, logging
    and error messages. The actual value is only accessible via an
    explicit get_value() or as_bytes() call.
    """

    _value: str

    def __post_init__(self):
        if not isinstance(self._value, str):
            msg = "SecureString value must be a string"
            raise TypeError(msg)

        if not self._value:
            msg = "SecureString cannot be empty"
            raise ValueError(msg)

    def get_value(self) -> str:
        """Get the actual sensitive value."""
        return self._value

    def as_bytes(self) -> bytes:
        """UTF-8 encoded value, as needed by key (de)serialization."""
        return self._value.encode("utf-8")

    def __str__(self) -> str:
        return "*****"

    def __repr__(self) -> str:
        return "SecureString(*****)"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SecureString):
            return False
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __len__(self) -> int:
        return len(self._value)

    @classmethod
    def from_env(cls, env_var_name: str) -> SecureString:
        """
        Create SecureString from environment variable.

        Raises ValueError if not found.
        """
        value = os.getenv(env_var_name)
        if value is None:
            msg = f"Environment variable {env_var_name} not found"
            raise ValueError(msg)
        return cls(value)


# Supplies the user's password on demand. Called only inside the single
# encrypt/decrypt operation that needs it; the result is never stored.
PasswordSource = Callable[[], SecureString]


def static_password(value: str) -> PasswordSource:
    """Build a PasswordSource that always returns ``value``."""
    secret = SecureString(value)

    def _source() -> SecureString:
        return secret

    return _source
