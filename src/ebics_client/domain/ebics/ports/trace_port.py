"""Trace port interface."""

from abc import ABC, abstractmethod
from pathlib import Path


class TracePort(ABC):
    """Keeps request/response artifacts for post-hoc debugging."""

    @abstractmethod
    def set_directory(self, directory: Path) -> None:
        """Direct subsequent traces into ``directory``."""

    @abstractmethod
    def trace(self, name: str, data: bytes) -> None:
        """Record one artifact in the current directory."""

    @abstractmethod
    def clear(self) -> None:
        """Discard the artifacts cached so far."""
