"""Serialization port interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import BinaryIO


class SerializationPort(ABC):
    """
    Stores and loads serialized entity records by key.

    Keys follow the entity convention: the plain host id for banks,
    ``partner-<id>`` for partners and ``user-<id>`` for users.
    """

    @abstractmethod
    def serialize(self, key: str, payload: bytes) -> None:
        """
        Persist ``payload`` under ``key``, replacing any previous record.

        Raises
        ------
        EbicsIOError
            If the record could not be written
        """

    @abstractmethod
    def deserialize(self, key: str) -> AbstractContextManager[BinaryIO]:
        """
        Open the record stored under ``key`` for reading.

        Raises
        ------
        EntityNotFoundError
            If no record exists for ``key``
        EbicsIOError
            If the record exists but cannot be opened
        """

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Check whether a record is stored under ``key``."""
