"""User entity."""

from dataclasses import dataclass, field

from ebics_client.domain.identity.bank import Bank
from ebics_client.domain.identity.key_material import UserKeyMaterial
from ebics_client.domain.identity.partner import Partner
from ebics_client.domain.identity.persistable import Persistable


@dataclass(eq=False)
class User(Persistable):
    """
    EBICS subscriber.

    ``initialized`` tracks whether the bank accepted the signature key
    (INI), ``initialized_hia`` whether it accepted the encryption and
    authentication keys (HIA). Both flags only ever go from False to True.
    """

    partner: Partner
    user_id: str
    name: str
    email: str
    country: str
    organization: str
    keys: UserKeyMaterial = field(repr=False)
    initialized: bool = False
    initialized_hia: bool = False

    @property
    def storage_key(self) -> str:
        return f"user-{self.user_id}"

    @property
    def bank(self) -> Bank:
        return self.partner.bank

    @property
    def dn(self) -> str:
        """Distinguished name used on certificates and letters."""
        return f"CN={self.name}, E={self.email}, O={self.organization}, C={self.country}"

    def mark_initialized(self) -> bool:
        """Record INI acceptance. Returns False when already initialized."""
        if self.initialized:
            return False
        self.initialized = True
        self.mark_dirty()
        return True

    def mark_hia_initialized(self) -> bool:
        """Record HIA acceptance. Returns False when already initialized."""
        if self.initialized_hia:
            return False
        self.initialized_hia = True
        self.mark_dirty()
        return True
