"""Data transfer objects for orchestration results and inputs."""

from ebics_client.application.dtos.date_range import DateRange
from ebics_client.application.dtos.download_result import (
    DownloadResult,
    DownloadStatus,
    ErrorKind,
)

__all__ = [
    "DateRange",
    "DownloadResult",
    "DownloadStatus",
    "ErrorKind",
]
