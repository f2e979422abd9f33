"""RSA key generator implementation."""

import logging

from cryptography.hazmat.primitives.asymmetric import rsa

from ebics_client.domain.ebics.ports import KeyGeneratorPort
from ebics_client.domain.identity import UserKeyMaterial
from ebics_client.domain.shared.exceptions import EbicsSecurityError

logger = logging.getLogger(__name__)

PUBLIC_EXPONENT = 65537
MIN_KEY_SIZE = 1024


class RsaKeyGenerator(KeyGeneratorPort):
    """Generates the A005, E002 and X002 key pairs as RSA keys."""

    def __init__(self, key_size: int = 2048):
        if key_size < MIN_KEY_SIZE:
            msg = f"RSA key size must be at least {MIN_KEY_SIZE} bits"
            raise ValueError(msg)
        self._key_size = key_size

    def generate(self) -> UserKeyMaterial:
        logger.debug("Generating %d-bit RSA keys", self._key_size)
        try:
            return UserKeyMaterial(
                signature_key=self._new_key(),
                encryption_key=self._new_key(),
                authentication_key=self._new_key(),
            )
        except Exception as e:
            msg = f"Key generation failed: {e}"
            raise EbicsSecurityError(msg) from e

    def _new_key(self) -> rsa.RSAPrivateKey:
        return rsa.generate_private_key(
            public_exponent=PUBLIC_EXPONENT,
            key_size=self._key_size,
        )
