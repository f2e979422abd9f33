"""User key material."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.rsa import (
    RSAPrivateKey,
    RSAPublicKey,
)


class KeyUsage(str, Enum):
    """The three user key pairs and their protocol versions."""

    SIGNATURE = "A005"
    ENCRYPTION = "E002"
    AUTHENTICATION = "X002"


@dataclass(frozen=True)
class SealedKeys:
    """Password-encrypted PEM private keys, keyed by KeyUsage value.

    This is the only form in which private keys leave memory.
    """

    pems: Mapping[str, str]

    def __repr__(self) -> str:
        return f"SealedKeys({sorted(self.pems)})"


@dataclass(frozen=True)
class UserKeyMaterial:
    """
    A user's private keys, one per usage.

    ``sealed`` holds the password-encrypted form produced when the keys
    were created or loaded, so the user can be saved again without asking
    for the password.
    """

    signature_key: RSAPrivateKey
    encryption_key: RSAPrivateKey
    authentication_key: RSAPrivateKey
    sealed: SealedKeys | None = None

    def private_key(self, usage: KeyUsage) -> RSAPrivateKey:
        if usage is KeyUsage.SIGNATURE:
            return self.signature_key
        if usage is KeyUsage.ENCRYPTION:
            return self.encryption_key
        return self.authentication_key

    def public_key(self, usage: KeyUsage) -> RSAPublicKey:
        return self.private_key(usage).public_key()

    def public_pem(self, usage: KeyUsage) -> bytes:
        return self.public_key(usage).public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )

    def __repr__(self) -> str:
        return "UserKeyMaterial(A005=*****, E002=*****, X002=*****)"
