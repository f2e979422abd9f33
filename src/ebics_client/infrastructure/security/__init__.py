"""Key generation and key sealing."""

from ebics_client.infrastructure.security.key_sealer import seal_keys, unseal_keys
from ebics_client.infrastructure.security.rsa_key_generator import RsaKeyGenerator

__all__ = ["RsaKeyGenerator", "seal_keys", "unseal_keys"]
