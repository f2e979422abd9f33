"""Shared value objects."""

from ebics_client.domain.shared.value_objects.secure_string import (
    PasswordSource,
    SecureString,
    static_password,
)

__all__ = ["PasswordSource", "SecureString", "static_password"]
