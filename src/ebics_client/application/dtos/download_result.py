"""DTO for the outcome of a download."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ebics_client.domain.ebics import OrderType
from ebics_client.domain.shared.exceptions import (
    ConfigurationError,
    EbicsException,
    EbicsIOError,
    EbicsSecurityError,
    EntityNotFoundError,
    ProtocolError,
)


class DownloadStatus(str, Enum):
    SUCCESS = "success"
    NO_DATA = "no_data"
    FAILED = "failed"


class ErrorKind(str, Enum):
    IO = "io"
    SECURITY = "security"
    PROTOCOL = "protocol"
    CONFIGURATION = "configuration"
    NOT_FOUND = "not_found"
    INTERNAL = "internal"

    @classmethod
    def of(cls, error: EbicsException) -> ErrorKind:
        if isinstance(error, EbicsIOError):
            return cls.IO
        if isinstance(error, EbicsSecurityError):
            return cls.SECURITY
        if isinstance(error, ProtocolError):
            return cls.PROTOCOL
        if isinstance(error, ConfigurationError):
            return cls.CONFIGURATION
        if isinstance(error, EntityNotFoundError):
            return cls.NOT_FOUND
        return cls.INTERNAL


@dataclass(frozen=True)
class DownloadResult:
    """Tagged result: success with data, no data, or failure with a kind."""

    status: DownloadStatus
    order_type: OrderType
    data: Optional[bytes] = None
    error_kind: Optional[ErrorKind] = None
    error_message: Optional[str] = None

    @classmethod
    def success(cls, order_type: OrderType, data: bytes) -> DownloadResult:
        return cls(status=DownloadStatus.SUCCESS, order_type=order_type, data=data)

    @classmethod
    def no_data(cls, order_type: OrderType) -> DownloadResult:
        return cls(status=DownloadStatus.NO_DATA, order_type=order_type)

    @classmethod
    def failure(cls, order_type: OrderType, error: EbicsException) -> DownloadResult:
        return cls(
            status=DownloadStatus.FAILED,
            order_type=order_type,
            error_kind=ErrorKind.of(error),
            error_message=str(error),
        )

    @property
    def is_success(self) -> bool:
        return self.status is DownloadStatus.SUCCESS

    @property
    def is_no_data(self) -> bool:
        return self.status is DownloadStatus.NO_DATA

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "order_type": self.order_type.value,
            "size": len(self.data) if self.data is not None else 0,
            "error_kind": self.error_kind.value if self.error_kind else None,
            "error_message": self.error_message,
        }
