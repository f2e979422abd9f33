"""Shared domain components.

This module exports the exception hierarchy and small utilities used
across the identity and protocol parts of the domain.
"""

from ebics_client.domain.shared.exceptions import (
    ConfigurationError,
    EbicsException,
    EbicsIOError,
    EbicsSecurityError,
    EntityNotFoundError,
    ErrorCode,
    NoDataAvailableError,
    ProtocolError,
)
from ebics_client.domain.shared.time import (
    DateLike,
    as_utc_datetime,
    ensure_tz_aware,
    file_timestamp,
    utc_now,
)

__all__ = [
    # Error codes
    "ErrorCode",
    # Base exception
    "EbicsException",
    # Exception categories
    "ConfigurationError",
    "EbicsIOError",
    "EbicsSecurityError",
    "EntityNotFoundError",
    "NoDataAvailableError",
    "ProtocolError",
    # Utilities
    "DateLike",
    "as_utc_datetime",
    "ensure_tz_aware",
    "file_timestamp",
    "utc_now",
]
