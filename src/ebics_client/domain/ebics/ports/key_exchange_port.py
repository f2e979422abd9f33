"""Key exchange port interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ebics_client.application.context import SessionContext
    from ebics_client.domain.ebics.bank_public_keys import BankPublicKeys


class KeyExchangePort(ABC):
    """
    Interface for the key management orders of the wire protocol.

    Implementations build and send the INI, HIA, HPB and SPR requests for
    the user in the session. They raise EbicsIOError on transport failure
    and ProtocolError when the bank rejects the request.
    """

    @abstractmethod
    def submit_signature_key(self, session: SessionContext) -> None:
        """
        Send the user's A005 signature public key (INI).

        Raises
        ------
        EbicsIOError
            If the request could not be delivered
        ProtocolError
            If the bank rejected the request
        """

    @abstractmethod
    def submit_encryption_keys(self, session: SessionContext) -> None:
        """
        Send the user's E002 and X002 public keys (HIA).

        Raises
        ------
        EbicsIOError
            If the request could not be delivered
        ProtocolError
            If the bank rejected the request
        """

    @abstractmethod
    def retrieve_bank_keys(self, session: SessionContext) -> BankPublicKeys:
        """
        Fetch the bank's current public keys (HPB).

        Returns
        -------
        The bank's encryption and authentication keys

        Raises
        ------
        EbicsIOError
            If the request could not be delivered
        EbicsSecurityError
            If the response could not be decrypted
        ProtocolError
            If the bank rejected the request, e.g. because the user's own
            keys were not activated yet
        """

    @abstractmethod
    def lock_subscriber(self, session: SessionContext) -> None:
        """
        Send a subscriber lock request (SPR).

        Raises
        ------
        EbicsIOError
            If the request could not be delivered
        ProtocolError
            If the bank rejected the request
        """
