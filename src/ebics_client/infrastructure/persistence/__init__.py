"""On-disk persistence of identity records."""

from ebics_client.infrastructure.persistence import entity_codec
from ebics_client.infrastructure.persistence.file_serialization_manager import (
    FileSerializationManager,
)

__all__ = ["FileSerializationManager", "entity_codec"]
