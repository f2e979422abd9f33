"""Bank entity."""

from dataclasses import dataclass, field
from typing import Optional

from ebics_client.domain.ebics.bank_public_keys import BankPublicKeys
from ebics_client.domain.identity.persistable import Persistable


@dataclass(eq=False)
class Bank(Persistable):
    """
    EBICS bank server, identified by its host id.

    Created once per host id. The public keys stay empty until they are
    retrieved with an HPB request; retrieval replaces them in place.
    """

    url: str
    name: str
    host_id: str
    use_certificate: bool = False
    public_keys: Optional[BankPublicKeys] = field(default=None, repr=False)

    @property
    def storage_key(self) -> str:
        return self.host_id

    @property
    def has_public_keys(self) -> bool:
        return self.public_keys is not None

    def set_public_keys(self, keys: BankPublicKeys) -> None:
        self.public_keys = keys
        self.mark_dirty()

    def set_use_certificate(self, use_certificate: bool) -> None:
        if self.use_certificate != use_certificate:
            self.use_certificate = use_certificate
            self.mark_dirty()
