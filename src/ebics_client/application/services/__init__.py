"""Application services orchestrating the identity and protocol ports."""

from ebics_client.application.services.file_transfer_service import (
    DOWNLOAD_FORMAT,
    UPLOAD_ATTRIBUTE,
    FileTransferService,
)
from ebics_client.application.services.identity_registry import IdentityRegistry
from ebics_client.application.services.key_initialization_service import (
    KeyInitializationService,
)

__all__ = [
    "DOWNLOAD_FORMAT",
    "UPLOAD_ATTRIBUTE",
    "FileTransferService",
    "IdentityRegistry",
    "KeyInitializationService",
]
