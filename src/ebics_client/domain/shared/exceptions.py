"""Shared domain exceptions and error codes.

This module defines the exception hierarchy for the whole client. Every
error raised by an orchestrator is an ``EbicsException`` so callers can
handle protocol, transport and configuration failures uniformly, while
``NoDataAvailableError`` stays distinguishable as a benign outcome.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Stable error codes for programmatic handling.

    These codes are part of the public contract. Should not be changed.
    """

    # Caller errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    INVALID_DATE_RANGE = "INVALID_DATE_RANGE"
    INVALID_ORDER_TYPE = "INVALID_ORDER_TYPE"

    # Not Found
    ENTITY_NOT_FOUND = "ENTITY_NOT_FOUND"
    BANK_NOT_FOUND = "BANK_NOT_FOUND"
    PARTNER_NOT_FOUND = "PARTNER_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"

    # Transport / filesystem
    IO_FAILURE = "IO_FAILURE"

    # Key generation, decryption, password
    SECURITY_FAILURE = "SECURITY_FAILURE"
    DECRYPTION_FAILED = "DECRYPTION_FAILED"

    # Bank side
    PROTOCOL_ERROR = "PROTOCOL_ERROR"
    NO_DATA_AVAILABLE = "NO_DATA_AVAILABLE"

    # General Errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class EbicsException(Exception):  # NOQA: N818
    """Base exception for all client errors.

    Attributes
    ----------
    message
        Human-readable error message
    code
        Stable error code for programmatic handling
    details
        Optional additional context (logged but not shown to users)
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code.value!r}, "
            f"details={self.details!r})"
        )


class ConfigurationError(EbicsException):
    """Raised when the caller supplied invalid or missing parameters."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFIGURATION_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class EntityNotFoundError(EbicsException):
    """Raised when a requested persisted identity does not exist."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.ENTITY_NOT_FOUND,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class EbicsIOError(EbicsException):
    """Raised on filesystem or network transport failure."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.IO_FAILURE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class EbicsSecurityError(EbicsException):
    """Raised when key generation, decryption or password checks fail."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.SECURITY_FAILURE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class ProtocolError(EbicsException):
    """Raised when the bank rejects a request or returns a fault code.

    ``return_code`` carries the bank's business return code when the
    transport could extract one (e.g. ``"091005"``).
    """

    def __init__(
        self,
        message: str,
        return_code: str | None = None,
        code: ErrorCode = ErrorCode.PROTOCOL_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        merged = dict(details or {})
        if return_code is not None:
            merged["return_code"] = return_code
        super().__init__(message, code, merged)
        self.return_code = return_code


class NoDataAvailableError(ProtocolError):
    """Raised when the bank reports that a download query has no data.

    This is an expected outcome for any date-range query and must never be
    logged as an error.
    """

    def __init__(
        self,
        message: str = "No download data available",
        return_code: str | None = "090005",
    ) -> None:
        super().__init__(
            message,
            return_code=return_code,
            code=ErrorCode.NO_DATA_AVAILABLE,
        )
