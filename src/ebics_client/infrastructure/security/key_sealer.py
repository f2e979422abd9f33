"""Password-based sealing of user private keys.

Private keys are stored as PKCS#8 PEM encrypted with the user's password.
The password is pulled from the PasswordSource inside each call and not
kept afterwards.
"""

from dataclasses import replace

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey

from ebics_client.domain.identity import KeyUsage, SealedKeys, UserKeyMaterial
from ebics_client.domain.shared.exceptions import EbicsSecurityError, ErrorCode
from ebics_client.domain.shared.value_objects import PasswordSource


def seal_keys(keys: UserKeyMaterial, password_source: PasswordSource) -> UserKeyMaterial:
    """Encrypt the private keys and return key material carrying them."""
    try:
        algorithm = serialization.BestAvailableEncryption(password_source().as_bytes())
        pems = {
            usage.value: keys.private_key(usage)
            .private_bytes(
                encoding=serialization.Encoding.PEM,
                format=serialization.PrivateFormat.PKCS8,
                encryption_algorithm=algorithm,
            )
            .decode("ascii")
            for usage in KeyUsage
        }
    except Exception as e:
        msg = f"Encryption of private keys failed: {e}"
        raise EbicsSecurityError(msg) from e
    return replace(keys, sealed=SealedKeys(pems=pems))


def unseal_keys(sealed: SealedKeys, password_source: PasswordSource) -> UserKeyMaterial:
    """
    Decrypt sealed private keys.

    Raises
    ------
    EbicsSecurityError
        If the password is wrong or a key is missing or corrupt
    """
    password = password_source().as_bytes()
    loaded: dict[KeyUsage, RSAPrivateKey] = {}
    for usage in KeyUsage:
        pem = sealed.pems.get(usage.value)
        if pem is None:
            msg = f"Missing {usage.value} private key"
            raise EbicsSecurityError(msg, code=ErrorCode.DECRYPTION_FAILED)
        try:
            key = serialization.load_pem_private_key(pem.encode("ascii"), password=password)
        except (ValueError, TypeError) as e:
            msg = "Decryption of private keys failed: wrong password or corrupt key"
            raise EbicsSecurityError(msg, code=ErrorCode.DECRYPTION_FAILED) from e
        if not isinstance(key, RSAPrivateKey):
            msg = f"{usage.value} key is not an RSA key"
            raise EbicsSecurityError(msg, code=ErrorCode.DECRYPTION_FAILED)
        loaded[usage] = key

    return UserKeyMaterial(
        signature_key=loaded[KeyUsage.SIGNATURE],
        encryption_key=loaded[KeyUsage.ENCRYPTION],
        authentication_key=loaded[KeyUsage.AUTHENTICATION],
        sealed=sealed,
    )
