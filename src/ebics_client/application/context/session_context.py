"""Session context for a single orchestrated operation."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping

if TYPE_CHECKING:
    from ebics_client.domain.ebics import Product
    from ebics_client.domain.identity import Bank, Partner, User
    from ebics_config import ClientConfiguration


@dataclass(frozen=True)
class SessionContext:
    """
    Immutable bundle of user, product, configuration and session params.

    A new context is created for every operation and handed to the port
    that performs the exchange. It is never persisted and never shared
    between operations.
    """

    user: User
    product: Product
    configuration: ClientConfiguration
    params: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({}),
    )

    @classmethod
    def create(
        cls,
        user: User,
        product: Product,
        configuration: ClientConfiguration,
    ) -> SessionContext:
        return cls(user=user, product=product, configuration=configuration)

    def with_param(self, name: str, value: str) -> SessionContext:
        """Return a copy with one more session parameter."""
        params = dict(self.params)
        params[name] = value
        return replace(self, params=MappingProxyType(params))

    def param(self, name: str) -> str | None:
        return self.params.get(name)

    @property
    def partner(self) -> Partner:
        return self.user.partner

    @property
    def bank(self) -> Bank:
        return self.user.partner.bank

    def __repr__(self) -> str:
        return (
            f"SessionContext(user={self.user.user_id!r}, "
            f"product={self.product.name!r}, params={dict(self.params)!r})"
        )
