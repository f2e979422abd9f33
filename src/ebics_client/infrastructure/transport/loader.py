"""Resolution of the wire transport from its import path."""

from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass

from ebics_client.domain.ebics.ports import KeyExchangePort, TransferPort
from ebics_client.domain.shared.exceptions import ConfigurationError
from ebics_config import ClientConfiguration

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transport:
    """The two protocol ports a transport provides."""

    key_exchange: KeyExchangePort
    transfer: TransferPort


def load_transport(path: str | None, configuration: ClientConfiguration) -> Transport:
    """
    Import and build the transport named by ``path``.

    ``path`` has the form ``package.module:factory``. The factory is called
    with the client configuration and must return either one object
    implementing both KeyExchangePort and TransferPort, or a
    ``(key_exchange, transfer)`` pair.

    Raises
    ------
    ConfigurationError
        If no transport is configured or the factory result is unusable
    """
    if not path:
        msg = "No transport configured (set EBICS_TRANSPORT=package.module:factory)"
        raise ConfigurationError(msg)

    module_name, _, attr = path.partition(":")
    if not module_name or not attr:
        msg = f"Invalid transport path {path!r}, expected 'package.module:factory'"
        raise ConfigurationError(msg)

    try:
        module = importlib.import_module(module_name)
        factory = getattr(module, attr)
    except (ImportError, AttributeError) as e:
        msg = f"Cannot load transport {path!r}: {e}"
        raise ConfigurationError(msg) from e

    built = factory(configuration)
    if isinstance(built, tuple) and len(built) == 2:
        key_exchange, transfer = built
    else:
        key_exchange = transfer = built

    if not isinstance(key_exchange, KeyExchangePort) or not isinstance(
        transfer, TransferPort
    ):
        msg = f"Transport {path!r} does not implement KeyExchangePort and TransferPort"
        raise ConfigurationError(msg)

    logger.info("Using transport %s", path)
    return Transport(key_exchange=key_exchange, transfer=transfer)
