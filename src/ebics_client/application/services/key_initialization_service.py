"""Key initialization: INI, HIA, HPB and subscriber revocation."""

from __future__ import annotations

import logging

from ebics_client.application.context import SessionContext
from ebics_client.application.services.identity_registry import IdentityRegistry
from ebics_client.domain.ebics import BankPublicKeys, Product
from ebics_client.domain.ebics.ports import KeyExchangePort
from ebics_client.domain.identity import User
from ebics_client.domain.shared.exceptions import EbicsException

logger = logging.getLogger(__name__)


class KeyInitializationService:
    """
    Drive the key enrollment state machine of a user.

    INI and HIA are guarded by the user's ``initialized`` and
    ``initialized_hia`` flags: once the bank accepted the keys, repeating
    the call is a logged no-op. HPB and SPR always execute.
    """

    def __init__(self, registry: IdentityRegistry, key_exchange: KeyExchangePort):
        self._registry = registry
        self._key_exchange = key_exchange
        self._messages = registry.messages

    def submit_signature_key(self, user: User, product: Product) -> bool:
        """
        Send the INI request unless the user is already initialized.

        Returns True when a request was sent, False for the no-op case.
        """
        user_id = user.user_id
        logger.info(self._messages.get("ini.request.send", user_id))
        if user.initialized:
            logger.info(self._messages.get("user.already.initialized", user_id))
            return False

        try:
            session = self._open_session(user, product)
            self._key_exchange.submit_signature_key(session)
        except EbicsException as e:
            logger.error("%s: %s", self._messages.get("ini.send.error", user_id), e)
            raise

        user.mark_initialized()
        logger.info(self._messages.get("ini.send.success", user_id))
        return True

    def submit_encryption_keys(self, user: User, product: Product) -> bool:
        """
        Send the HIA request unless the bank already accepted the keys.

        Returns True when a request was sent, False for the no-op case.
        """
        user_id = user.user_id
        logger.info(self._messages.get("hia.request.send", user_id))
        if user.initialized_hia:
            logger.info(self._messages.get("user.already.hia.initialized", user_id))
            return False

        try:
            session = self._open_session(user, product)
            self._key_exchange.submit_encryption_keys(session)
        except EbicsException as e:
            logger.error("%s: %s", self._messages.get("hia.send.error", user_id), e)
            raise

        user.mark_hia_initialized()
        logger.info(self._messages.get("hia.send.success", user_id))
        return True

    def retrieve_bank_keys(self, user: User, product: Product) -> BankPublicKeys:
        """
        Fetch the bank's public keys and store them on the user's bank.

        Not guarded locally: calling it before the bank activated the
        user's own keys fails with the bank's ProtocolError.
        """
        user_id = user.user_id
        logger.info(self._messages.get("hpb.request.send", user_id))

        try:
            session = self._open_session(user, product)
            keys = self._key_exchange.retrieve_bank_keys(session)
        except EbicsException as e:
            logger.error("%s: %s", self._messages.get("hpb.send.error", user_id), e)
            raise

        user.bank.set_public_keys(keys)
        logger.info(self._messages.get("hpb.send.success", user_id))
        return keys

    def revoke_subscriber(self, user: User, product: Product) -> None:
        """
        Send a subscriber lock (SPR).

        Local flags stay untouched; the bank is authoritative and rejects
        the user from now on.
        """
        user_id = user.user_id
        logger.info(self._messages.get("spr.request.send", user_id))

        try:
            session = self._open_session(user, product)
            self._key_exchange.lock_subscriber(session)
        except EbicsException as e:
            logger.error("%s: %s", self._messages.get("spr.send.error", user_id), e)
            raise

        logger.info(self._messages.get("spr.send.success", user_id))

    def _open_session(self, user: User, product: Product) -> SessionContext:
        configuration = self._registry.configuration
        self._registry.trace.set_directory(configuration.trace_directory(user.user_id))
        return SessionContext.create(user, product, configuration)
