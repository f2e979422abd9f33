"""File-based serialization manager."""

from __future__ import annotations

import logging
import os
import re
import tempfile
from contextlib import AbstractContextManager
from pathlib import Path
from typing import BinaryIO

from ebics_client.domain.ebics.ports import SerializationPort
from ebics_client.domain.shared.exceptions import (
    ConfigurationError,
    EbicsIOError,
    EntityNotFoundError,
)

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


class FileSerializationManager(SerializationPort):
    """Stores one ``<key>.json`` file per record in a directory."""

    def __init__(self, directory: Path):
        self._directory = directory

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            msg = f"Invalid record key: {key!r}"
            raise ConfigurationError(msg)
        return self._directory / f"{key}.json"

    def serialize(self, key: str, payload: bytes) -> None:
        path = self.path_for(key)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            # Write to a sibling temp file first so a crash never leaves a
            # truncated record behind.
            fd, tmp_name = tempfile.mkstemp(dir=self._directory, prefix=f".{key}.")
            try:
                with os.fdopen(fd, "wb") as out:
                    out.write(payload)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            msg = f"Failed to write record {key}: {e}"
            raise EbicsIOError(msg) from e
        logger.debug("Serialized %s to %s", key, path)

    def deserialize(self, key: str) -> AbstractContextManager[BinaryIO]:
        path = self.path_for(key)
        try:
            return path.open("rb")
        except FileNotFoundError as e:
            msg = f"No persisted record for {key}"
            raise EntityNotFoundError(msg, details={"key": key}) from e
        except OSError as e:
            msg = f"Failed to open record {key}: {e}"
            raise EbicsIOError(msg) from e

    def exists(self, key: str) -> bool:
        return self.path_for(key).is_file()
