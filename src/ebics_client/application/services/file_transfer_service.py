"""File transfer: uploads, downloads and order id sequencing."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ebics_client.application.context import SessionContext
from ebics_client.application.dtos import DateRange, DownloadResult
from ebics_client.application.services.identity_registry import IdentityRegistry
from ebics_client.domain.ebics import OrderAttribute, OrderDirection, OrderType, Product
from ebics_client.domain.ebics.ports import TransferPort
from ebics_client.domain.identity import User
from ebics_client.domain.shared.exceptions import (
    ConfigurationError,
    EbicsException,
    EbicsIOError,
    ErrorCode,
    NoDataAvailableError,
)
from ebics_client.domain.shared.time import DateLike

logger = logging.getLogger(__name__)

# Every upload is a new, signed file submission.
UPLOAD_ATTRIBUTE = OrderAttribute.OZHNN

DOWNLOAD_FORMAT = "pain.xxx.cfonb160.dct"


def _check_direction(order_type: OrderType, direction: OrderDirection) -> None:
    if order_type.is_key_management or order_type.direction is not direction:
        msg = f"{order_type.value} is not a {direction.value} order type"
        raise ConfigurationError(msg, code=ErrorCode.INVALID_ORDER_TYPE)


class FileTransferService:
    """Upload and download order data for a user."""

    def __init__(self, registry: IdentityRegistry, transfer: TransferPort):
        self._registry = registry
        self._transfer = transfer
        self._messages = registry.messages

    # ------------------------------------------------------------------
    # Uploads
    # ------------------------------------------------------------------

    def upload(
        self,
        user: User,
        product: Product,
        payload: bytes,
        order_type: OrderType,
        order_id: Optional[int] = None,
    ) -> int:
        """
        Submit ``payload`` as a new order and return the order id used.

        An explicit ``order_id`` is used for this call only and leaves the
        partner's sequence alone. Otherwise the sequence's next value is
        used and the sequence advances once the bank accepted the upload;
        a failed upload consumes nothing.
        """
        _check_direction(order_type, OrderDirection.UPLOAD)
        if order_id is not None and order_id < 0:
            msg = f"Order id must not be negative: {order_id}"
            raise ConfigurationError(msg)

        partner = user.partner
        explicit = order_id is not None
        effective_id = order_id if explicit else partner.sequencer.peek()
        logger.info(
            self._messages.get("upload.file.send", order_type.value, effective_id, user.user_id),
        )

        try:
            session = self._open_session(user, product)
            self._transfer.upload(session, payload, order_type, UPLOAD_ATTRIBUTE, effective_id)
        except EbicsException as e:
            logger.error("%s: %s", self._messages.get("upload.file.error", order_type.value), e)
            raise

        if not explicit:
            partner.next_order_id()
        logger.info(self._messages.get("upload.file.success", order_type.value, effective_id))
        return effective_id

    def upload_file(
        self,
        user: User,
        product: Product,
        path: Path,
        order_type: OrderType,
        order_id: Optional[int] = None,
    ) -> int:
        """Read ``path`` and upload its content."""
        try:
            with path.open("rb") as source:
                payload = source.read()
        except OSError as e:
            msg = f"Cannot read input file {path}: {e}"
            raise EbicsIOError(msg) from e
        return self.upload(user, product, payload, order_type, order_id)

    def skip_order_ids(self, user: User, count: int) -> int:
        """Advance the partner's order sequence; returns the new counter."""
        partner = user.partner
        logger.info(self._messages.get("order.skip", count, partner.partner_id))
        partner.skip_order_ids(count)
        return partner.order_counter

    # ------------------------------------------------------------------
    # Downloads
    # ------------------------------------------------------------------

    def download(
        self,
        user: User,
        product: Product,
        order_type: OrderType,
        *,
        test: bool = False,
        start: Optional[DateLike] = None,
        end: Optional[DateLike] = None,
    ) -> bytes:
        """
        Fetch order data for an optional inclusive date range.

        Raises
        ------
        ConfigurationError
            If ``end`` is given without ``start``; raised before any
            network interaction
        NoDataAvailableError
            If the bank has nothing for the range. Not logged as an error.
        EbicsIOError, EbicsSecurityError, ProtocolError
            On any other failure, after logging it
        """
        _check_direction(order_type, OrderDirection.DOWNLOAD)
        date_range = DateRange.resolve(start, end)
        logger.info(self._messages.get("download.file.fetch", order_type.value, user.user_id))

        try:
            session = self._open_session(user, product).with_param("FORMAT", DOWNLOAD_FORMAT)
            if test:
                session = session.with_param("TEST", "true")
            data = self._transfer.download(
                session,
                order_type,
                date_range.start,
                date_range.end,
            )
        except NoDataAvailableError:
            logger.info(self._messages.get("download.file.nodata", order_type.value))
            raise
        except EbicsException as e:
            logger.error("%s: %s", self._messages.get("download.file.error", order_type.value), e)
            raise

        logger.info(self._messages.get("download.file.success", order_type.value, len(data)))
        return data

    def download_to_file(
        self,
        path: Optional[Path],
        user: User,
        product: Product,
        order_type: OrderType,
        *,
        test: bool = False,
        start: Optional[DateLike] = None,
        end: Optional[DateLike] = None,
    ) -> Path:
        """
        Download into a new file at ``path``.

        The file is removed again on any failure, no-data included, so a
        truncated or empty file is never left behind.

        Raises
        ------
        ConfigurationError
            If ``path`` is missing or already exists
        """
        if path is None or not str(path):
            msg = "Output file not set"
            raise ConfigurationError(msg)
        if path.exists():
            msg = f"File already exists: {path}"
            raise ConfigurationError(msg, details={"path": str(path)})

        try:
            out = path.open("xb")
        except OSError as e:
            msg = f"Cannot create output file {path}: {e}"
            raise EbicsIOError(msg) from e

        try:
            with out:
                data = self.download(
                    user,
                    product,
                    order_type,
                    test=test,
                    start=start,
                    end=end,
                )
                try:
                    out.write(data)
                except OSError as e:
                    msg = f"Cannot write output file {path}: {e}"
                    raise EbicsIOError(msg) from e
        except BaseException:
            path.unlink(missing_ok=True)
            raise
        return path

    def try_download(
        self,
        user: User,
        product: Product,
        order_type: OrderType,
        *,
        test: bool = False,
        start: Optional[DateLike] = None,
        end: Optional[DateLike] = None,
    ) -> DownloadResult:
        """Like download(), but returns a tagged result instead of raising."""
        try:
            data = self.download(user, product, order_type, test=test, start=start, end=end)
        except NoDataAvailableError:
            return DownloadResult.no_data(order_type)
        except EbicsException as e:
            return DownloadResult.failure(order_type, e)
        return DownloadResult.success(order_type, data)

    def _open_session(self, user: User, product: Product) -> SessionContext:
        configuration = self._registry.configuration
        self._registry.trace.set_directory(configuration.trace_directory(user.user_id))
        return SessionContext.create(user, product, configuration)
