"""Identity registry: in-memory banks, partners and users plus their persistence."""

from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional
from urllib.parse import urlparse

from ebics_client.domain.ebics.ports import (
    KeyGeneratorPort,
    LetterRendererPort,
    SerializationPort,
    TracePort,
)
from ebics_client.domain.identity import (
    Bank,
    KeyUsage,
    Partner,
    Persistable,
    User,
)
from ebics_client.domain.shared.exceptions import (
    ConfigurationError,
    EbicsException,
    EbicsIOError,
    EntityNotFoundError,
    ErrorCode,
)
from ebics_client.domain.shared.value_objects import PasswordSource
from ebics_client.infrastructure.letters import TextLetterRenderer
from ebics_client.infrastructure.persistence import (
    FileSerializationManager,
    entity_codec,
)
from ebics_client.infrastructure.security import RsaKeyGenerator, seal_keys
from ebics_client.infrastructure.trace import FileTraceManager
from ebics_client.messages import Messages
from ebics_config import ClientConfiguration

logger = logging.getLogger(__name__)


def _require(value: str, field_name: str) -> str:
    if not value or not value.strip():
        msg = f"{field_name} must not be empty"
        raise ConfigurationError(msg, details={"field": field_name})
    return value.strip()


def _check_url(url: str, host_id: str) -> None:
    parsed = urlparse(url or "")
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        msg = f"Invalid bank URL: {url!r}"
        raise ConfigurationError(msg, details={"host_id": host_id})


def _check_same_url(bank: Bank, url: str) -> None:
    if bank.url != url:
        msg = f"Bank {bank.host_id} is already registered with URL {bank.url}, not {url}"
        raise ConfigurationError(msg, details={"host_id": bank.host_id})


class IdentityRegistry:
    """
    Explicit store for the banks, partners and users of a process.

    The three maps are keyed by host id, partner id and user id. Inserting
    an entity with an existing key replaces the previous entry. Entities
    changed in memory are flagged dirty and written back by save_dirty().

    Not thread-safe: one registry serves one sequence of operations.
    """

    def __init__(
        self,
        configuration: ClientConfiguration,
        serializer: SerializationPort,
        trace: TracePort,
        letters: LetterRendererPort,
        key_generator: KeyGeneratorPort,
        messages: Optional[Messages] = None,
    ):
        self._configuration = configuration
        self._serializer = serializer
        self._trace = trace
        self._letters = letters
        self._key_generator = key_generator
        self._messages = messages or Messages(configuration.language)
        self._banks: dict[str, Bank] = {}
        self._partners: dict[str, Partner] = {}
        self._users: dict[str, User] = {}

    @classmethod
    def from_configuration(
        cls,
        configuration: ClientConfiguration,
        keep_traces: bool = True,
    ) -> IdentityRegistry:
        """Build a registry wired to the default file-based collaborators."""
        return cls(
            configuration=configuration,
            serializer=FileSerializationManager(configuration.serialization_directory),
            trace=FileTraceManager(keep=keep_traces),
            letters=TextLetterRenderer(configuration.language),
            key_generator=RsaKeyGenerator(configuration.key_size),
        )

    @property
    def configuration(self) -> ClientConfiguration:
        return self._configuration

    @property
    def trace(self) -> TracePort:
        return self._trace

    @property
    def messages(self) -> Messages:
        return self._messages

    @property
    def banks(self) -> Mapping[str, Bank]:
        return MappingProxyType(self._banks)

    @property
    def partners(self) -> Mapping[str, Partner]:
        return MappingProxyType(self._partners)

    @property
    def users(self) -> Mapping[str, User]:
        return MappingProxyType(self._users)

    def get_user(self, user_id: str) -> User:
        try:
            return self._users[user_id]
        except KeyError:
            msg = f"User {user_id} is not registered"
            raise EntityNotFoundError(msg, code=ErrorCode.USER_NOT_FOUND) from None

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def create_bank(
        self,
        url: str,
        name: str,
        host_id: str,
        use_certificate: bool = False,
    ) -> Bank:
        """
        Create and register a bank.

        Raises
        ------
        ConfigurationError
            If the host id is blank, the URL is not http(s), or the host id
            is already registered with a different URL
        """
        bank = self._build_bank(url, name, host_id, use_certificate)
        self._banks[bank.host_id] = bank
        return bank

    def create_partner(self, bank: Bank, partner_id: str) -> Partner:
        partner = Partner(bank=bank, partner_id=_require(partner_id, "partner_id"))
        self._partners[partner.partner_id] = partner
        return partner

    def create_user(  # noqa: PLR0913
        self,
        url: str,
        bank_name: str,
        host_id: str,
        partner_id: str,
        user_id: str,
        name: str,
        email: str,
        country: str,
        organization: str,
        password_source: PasswordSource,
        *,
        use_certificates: bool = False,
        save_certificates: bool = True,
    ) -> User:
        """
        Create a user with fresh keys, persist it and render its letters.

        A bank or partner that is already registered, or already stored,
        is reused together with its public keys and order counter; only
        missing ones are created. Bank, partner and user are registered
        only once every step succeeded; on failure the registry is left
        untouched.

        Raises
        ------
        ConfigurationError
            If an identifier is blank, the bank URL is invalid, or an existing
            bank or partner does not match the given host and URL
        EbicsSecurityError
            If key generation or key encryption fails
        EbicsIOError
            If directories, records or letters cannot be written
        """
        logger.info(self._messages.get("user.create.info", user_id))
        try:
            bank = self._bank_for_new_user(url, bank_name, host_id, use_certificates)
            partner = self._partner_for_new_user(bank, _require(partner_id, "partner_id"))
            keys = seal_keys(self._key_generator.generate(), password_source)
            user = User(
                partner=partner,
                user_id=_require(user_id, "user_id"),
                name=name,
                email=email,
                country=country,
                organization=organization,
                keys=keys,
            )
            self.create_user_directories(user)
            if save_certificates:
                self._export_public_keys(user)
            self.save(bank)
            self.save(partner)
            self.save(user)
            self.create_letters(user, use_certificates)
        except EbicsException as e:
            logger.error("%s: %s", self._messages.get("user.create.error", user_id), e)
            raise

        self._register(user)
        logger.info(self._messages.get("user.create.success", user_id))
        return user

    def load_user(
        self,
        host_id: str,
        partner_id: str,
        user_id: str,
        password_source: PasswordSource,
    ) -> User:
        """
        Load a persisted user together with its partner and bank.

        A bank or partner already registered in this process is linked
        rather than read again, so changes made through another user of
        the same partner stay in the saved instance.

        Raises
        ------
        EntityNotFoundError
            If the bank, partner or user record does not exist
        EbicsSecurityError
            If the password does not decrypt the user's keys
        ConfigurationError
            If the partner belongs to another host
        ProtocolError
            If a record cannot be parsed
        """
        logger.info(self._messages.get("user.load.info", user_id))
        try:
            bank = self._lookup_bank(host_id)
            partner = self._lookup_partner(bank, partner_id)
            user_key = f"user-{user_id}"
            with self._serializer.deserialize(user_key) as stream:
                user = entity_codec.decode_user(stream, user_key, partner, password_source)
        except EbicsException as e:
            logger.error("%s: %s", self._messages.get("user.load.error", user_id), e)
            raise

        self._register(user)
        logger.info(self._messages.get("user.load.success", user_id))
        return user

    def create_user_directories(self, user: User) -> None:
        logger.info(self._messages.get("user.create.directories", user.user_id))
        config = self._configuration
        for directory in (
            config.user_directory(user.user_id),
            config.trace_directory(user.user_id),
            config.keystore_directory(user.user_id),
            config.letters_directory(user.user_id),
        ):
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                msg = f"Cannot create directory {directory}: {e}"
                raise EbicsIOError(msg) from e

    def create_letters(self, user: User, use_certificates: bool = False) -> list[Path]:
        """Render the A005, E002 and X002 letters into the letters directory."""
        logger.info(self._messages.get("letters.create", user.user_id))
        user.bank.set_use_certificate(use_certificates)
        letters = [
            self._letters.create_a005_letter(user),
            self._letters.create_e002_letter(user),
            self._letters.create_x002_letter(user),
        ]
        directory = self._configuration.letters_directory(user.user_id)
        written = []
        for letter in letters:
            path = directory / letter.name
            try:
                directory.mkdir(parents=True, exist_ok=True)
                with path.open("wb") as out:
                    out.write(letter.to_bytes())
            except OSError as e:
                msg = f"Cannot write letter {path}: {e}"
                raise EbicsIOError(msg) from e
            written.append(path)
        return written

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def mark_dirty(self, entity: Persistable) -> None:
        entity.mark_dirty()

    def save(self, entity: Persistable) -> None:
        """Persist one entity now and clear its dirty flag."""
        if isinstance(entity, User):
            payload = entity_codec.encode_user(entity)
        elif isinstance(entity, Partner):
            payload = entity_codec.encode_partner(entity)
        elif isinstance(entity, Bank):
            payload = entity_codec.encode_bank(entity)
        else:
            msg = f"Cannot persist {type(entity).__name__}"
            raise TypeError(msg)
        self._serializer.serialize(entity.storage_key, payload)
        entity.mark_saved()

    def save_dirty(self) -> list[tuple[str, EbicsException]]:
        """
        Save every dirty user, then partner, then bank.

        Best effort: a failure is logged and the remaining entities are
        still saved. Returns the (storage key, error) pairs that failed.
        """
        failures: list[tuple[str, EbicsException]] = []
        groups: list[tuple[str, list[Persistable], str]] = [
            ("app.quit.users", list(self._users.values()), "user_id"),
            ("app.quit.partners", list(self._partners.values()), "partner_id"),
            ("app.quit.banks", list(self._banks.values()), "host_id"),
        ]
        for message_key, entities, id_attr in groups:
            for entity in entities:
                if not entity.needs_save:
                    continue
                logger.info(self._messages.get(message_key, getattr(entity, id_attr)))
                try:
                    self.save(entity)
                except EbicsException as e:
                    logger.error(
                        "%s: %s",
                        self._messages.get("app.quit.error", entity.storage_key),
                        e,
                    )
                    failures.append((entity.storage_key, e))
        return failures

    def clear_traces(self) -> None:
        logger.info(self._messages.get("app.cache.clear"))
        self._trace.clear()

    def close(self) -> list[tuple[str, EbicsException]]:
        """Save dirty entities and clear traces before shutting down."""
        failures = self.save_dirty()
        self.clear_traces()
        return failures

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _build_bank(
        self,
        url: str,
        name: str,
        host_id: str,
        use_certificate: bool,
    ) -> Bank:
        host_id = _require(host_id, "host_id")
        _check_url(url, host_id)
        existing = self._banks.get(host_id)
        if existing is not None:
            _check_same_url(existing, url)
        return Bank(url=url, name=name, host_id=host_id, use_certificate=use_certificate)

    def _bank_for_new_user(
        self,
        url: str,
        name: str,
        host_id: str,
        use_certificate: bool,
    ) -> Bank:
        host_id = _require(host_id, "host_id")
        _check_url(url, host_id)
        if host_id not in self._banks and not self._serializer.exists(host_id):
            return Bank(url=url, name=name, host_id=host_id, use_certificate=use_certificate)
        bank = self._lookup_bank(host_id)
        _check_same_url(bank, url)
        return bank

    def _partner_for_new_user(self, bank: Bank, partner_id: str) -> Partner:
        if partner_id not in self._partners and not self._serializer.exists(
            f"partner-{partner_id}",
        ):
            return Partner(bank=bank, partner_id=partner_id)
        return self._lookup_partner(bank, partner_id)

    def _lookup_bank(self, host_id: str) -> Bank:
        """Return the registered bank, or read it from its record."""
        bank = self._banks.get(host_id)
        if bank is None:
            with self._serializer.deserialize(host_id) as stream:
                bank = entity_codec.decode_bank(stream, host_id)
        return bank

    def _lookup_partner(self, bank: Bank, partner_id: str) -> Partner:
        """Return the registered partner, or read it from its record."""
        partner = self._partners.get(partner_id)
        if partner is None:
            key = f"partner-{partner_id}"
            with self._serializer.deserialize(key) as stream:
                return entity_codec.decode_partner(stream, key, bank)
        if partner.bank.host_id != bank.host_id:
            msg = (
                f"Partner {partner_id} belongs to host {partner.bank.host_id}, "
                f"not {bank.host_id}"
            )
            raise ConfigurationError(msg, details={"partner_id": partner_id})
        return partner

    def _register(self, user: User) -> None:
        partner = user.partner
        bank = partner.bank
        self._users[user.user_id] = user
        self._partners[partner.partner_id] = partner
        self._banks[bank.host_id] = bank

    def _export_public_keys(self, user: User) -> None:
        directory = self._configuration.keystore_directory(user.user_id)
        for usage in KeyUsage:
            path = directory / f"{user.user_id}-{usage.value}.pem"
            try:
                path.write_bytes(user.keys.public_pem(usage))
            except OSError as e:
                msg = f"Cannot write public key {path}: {e}"
                raise EbicsIOError(msg) from e
