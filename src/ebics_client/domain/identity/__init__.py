"""Identity entities: bank, partner, user and the partner order sequence."""

from ebics_client.domain.identity.bank import Bank
from ebics_client.domain.identity.key_material import (
    KeyUsage,
    SealedKeys,
    UserKeyMaterial,
)
from ebics_client.domain.identity.order_sequencer import OrderSequencer
from ebics_client.domain.identity.partner import Partner
from ebics_client.domain.identity.persistable import Persistable
from ebics_client.domain.identity.user import User

__all__ = [
    "Bank",
    "KeyUsage",
    "OrderSequencer",
    "Partner",
    "Persistable",
    "SealedKeys",
    "User",
    "UserKeyMaterial",
]
