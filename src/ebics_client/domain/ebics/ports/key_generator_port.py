"""Key generator port interface."""

from abc import ABC, abstractmethod

from ebics_client.domain.identity.key_material import UserKeyMaterial


class KeyGeneratorPort(ABC):
    """Creates a fresh set of user key pairs."""

    @abstractmethod
    def generate(self) -> UserKeyMaterial:
        """
        Generate signature, encryption and authentication keys.

        Raises
        ------
        EbicsSecurityError
            If key generation fails
        """
