"""File-based trace manager."""

import logging
from pathlib import Path
from typing import Optional

from ebics_client.domain.ebics.ports import TracePort
from ebics_client.domain.shared.exceptions import EbicsIOError
from ebics_client.domain.shared.time import file_timestamp

logger = logging.getLogger(__name__)


class FileTraceManager(TracePort):
    """
    Writes request/response artifacts as files.

    With ``keep=False`` the written files are treated as a cache and
    removed by clear(); with ``keep=True`` they stay on disk and clear()
    only forgets them.
    """

    def __init__(self, keep: bool = True):
        self._keep = keep
        self._directory: Optional[Path] = None
        self._written: list[Path] = []

    @property
    def directory(self) -> Optional[Path]:
        return self._directory

    def set_directory(self, directory: Path) -> None:
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            msg = f"Cannot create trace directory {directory}: {e}"
            raise EbicsIOError(msg) from e
        self._directory = directory

    def trace(self, name: str, data: bytes) -> None:
        if self._directory is None:
            logger.debug("No trace directory set, dropping trace %s", name)
            return
        path = self._directory / f"{file_timestamp()}_{name}"
        try:
            path.write_bytes(data)
        except OSError as e:
            msg = f"Cannot write trace {path}: {e}"
            raise EbicsIOError(msg) from e
        self._written.append(path)

    def clear(self) -> None:
        if not self._keep:
            for path in self._written:
                path.unlink(missing_ok=True)
        self._written.clear()
