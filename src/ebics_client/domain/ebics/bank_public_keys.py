"""Bank public keys value object."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class BankPublicKeys:
    """
    Public keys published by the bank (HPB response).

    Keys are kept as PEM encoded SubjectPublicKeyInfo text. The signature
    key is optional since most banks do not publish one.
    """

    encryption_key: str
    authentication_key: str
    signature_key: Optional[str] = None
    encryption_version: str = "E002"
    authentication_version: str = "X002"

    def __repr__(self) -> str:
        return (
            f"BankPublicKeys(encryption={self.encryption_version}, "
            f"authentication={self.authentication_version}, "
            f"signature={'yes' if self.signature_key else 'no'})"
        )
