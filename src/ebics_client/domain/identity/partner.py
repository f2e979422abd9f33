"""Partner entity."""

from dataclasses import dataclass, field

from ebics_client.domain.identity.bank import Bank
from ebics_client.domain.identity.order_sequencer import OrderSequencer
from ebics_client.domain.identity.persistable import Persistable


@dataclass(eq=False)
class Partner(Persistable):
    """
    Customer (partner) at a bank.

    The partner owns the order-id sequence; the bank is shared and only
    referenced. Every change to the sequence marks the partner dirty.
    """

    bank: Bank
    partner_id: str
    sequencer: OrderSequencer = field(default_factory=OrderSequencer)

    @property
    def storage_key(self) -> str:
        return f"partner-{self.partner_id}"

    @property
    def order_counter(self) -> int:
        return self.sequencer.current

    def next_order_id(self) -> int:
        order_id = self.sequencer.next()
        self.mark_dirty()
        return order_id

    def skip_order_ids(self, count: int) -> None:
        self.sequencer.skip(count)
        if count:
            self.mark_dirty()
