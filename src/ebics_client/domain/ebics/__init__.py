"""Protocol-level value objects: products, order types, bank keys."""

from ebics_client.domain.ebics.bank_public_keys import BankPublicKeys
from ebics_client.domain.ebics.order_type import (
    OrderAttribute,
    OrderDirection,
    OrderType,
)
from ebics_client.domain.ebics.product import Product

__all__ = [
    "BankPublicKeys",
    "OrderAttribute",
    "OrderDirection",
    "OrderType",
    "Product",
]
