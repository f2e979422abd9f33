"""File transfer port interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ebics_client.application.context import SessionContext
    from ebics_client.domain.ebics.order_type import OrderAttribute, OrderType


class TransferPort(ABC):
    """Interface for uploading and downloading order data."""

    @abstractmethod
    def upload(
        self,
        session: SessionContext,
        payload: bytes,
        order_type: OrderType,
        attribute: OrderAttribute,
        order_id: Optional[int] = None,
    ) -> None:
        """
        Send order data to the bank.

        Returns normally only once the bank confirmed the upload.

        Parameters
        ----------
        session
            Session context of the submitting user
        payload
            Raw order data (before compression, encryption and signing)
        order_type
            Upload order type
        attribute
            Order attribute profile
        order_id
            Order identifier to tag the submission with

        Raises
        ------
        EbicsIOError
            If the transfer could not be delivered
        ProtocolError
            If the bank rejected the order
        """

    @abstractmethod
    def download(
        self,
        session: SessionContext,
        order_type: OrderType,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> bytes:
        """
        Fetch order data from the bank.

        Parameters
        ----------
        session
            Session context, including the FORMAT and TEST parameters
        order_type
            Download order type
        start
            Inclusive start of the date range (optional)
        end
            Inclusive end of the date range (optional)

        Returns
        -------
        The decrypted, decompressed order data

        Raises
        ------
        NoDataAvailableError
            If the bank has nothing for the requested range
        EbicsIOError
            If the transfer could not be delivered
        ProtocolError
            If the bank rejected the request
        """
