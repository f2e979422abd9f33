"""Translation between identity entities and persisted records."""

from __future__ import annotations

from typing import BinaryIO, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ebics_client.domain.ebics import BankPublicKeys
from ebics_client.domain.identity import (
    Bank,
    OrderSequencer,
    Partner,
    SealedKeys,
    User,
)
from ebics_client.domain.shared.exceptions import (
    ConfigurationError,
    EbicsIOError,
    EbicsSecurityError,
    ProtocolError,
)
from ebics_client.domain.shared.value_objects import PasswordSource
from ebics_client.infrastructure.persistence.records import (
    BankKeysRecord,
    BankRecord,
    PartnerRecord,
    UserRecord,
)
from ebics_client.infrastructure.security import unseal_keys

RecordT = TypeVar("RecordT", bound=BaseModel)


def _read_record(stream: BinaryIO, model: type[RecordT], key: str) -> RecordT:
    try:
        raw = stream.read()
    except OSError as e:
        msg = f"Failed to read record {key}: {e}"
        raise EbicsIOError(msg) from e
    try:
        return model.model_validate_json(raw)
    except PydanticValidationError as e:
        msg = f"Unreadable record {key}: {e.error_count()} schema error(s)"
        raise ProtocolError(msg, details={"key": key}) from e


def encode_bank(bank: Bank) -> bytes:
    keys = bank.public_keys
    record = BankRecord(
        host_id=bank.host_id,
        url=bank.url,
        name=bank.name,
        use_certificate=bank.use_certificate,
        public_keys=(
            BankKeysRecord(
                encryption_key=keys.encryption_key,
                authentication_key=keys.authentication_key,
                signature_key=keys.signature_key,
                encryption_version=keys.encryption_version,
                authentication_version=keys.authentication_version,
            )
            if keys
            else None
        ),
    )
    return record.model_dump_json(indent=2).encode("utf-8")


def decode_bank(stream: BinaryIO, key: str) -> Bank:
    record = _read_record(stream, BankRecord, key)
    bank = Bank(
        url=record.url,
        name=record.name,
        host_id=record.host_id,
        use_certificate=record.use_certificate,
    )
    if record.public_keys:
        bank.public_keys = BankPublicKeys(**record.public_keys.model_dump())
    return bank


def encode_partner(partner: Partner) -> bytes:
    record = PartnerRecord(
        partner_id=partner.partner_id,
        host_id=partner.bank.host_id,
        order_counter=partner.order_counter,
    )
    return record.model_dump_json(indent=2).encode("utf-8")


def decode_partner(stream: BinaryIO, key: str, bank: Bank) -> Partner:
    record = _read_record(stream, PartnerRecord, key)
    if record.host_id != bank.host_id:
        msg = (
            f"Partner {record.partner_id} belongs to host {record.host_id}, "
            f"not {bank.host_id}"
        )
        raise ConfigurationError(msg)
    return Partner(
        bank=bank,
        partner_id=record.partner_id,
        sequencer=OrderSequencer(record.order_counter),
    )


def encode_user(user: User) -> bytes:
    sealed = user.keys.sealed
    if sealed is None:
        msg = f"Private keys of user {user.user_id} are not sealed"
        raise EbicsSecurityError(msg)
    record = UserRecord(
        user_id=user.user_id,
        partner_id=user.partner.partner_id,
        name=user.name,
        email=user.email,
        country=user.country,
        organization=user.organization,
        initialized=user.initialized,
        initialized_hia=user.initialized_hia,
        private_keys=dict(sealed.pems),
    )
    return record.model_dump_json(indent=2).encode("utf-8")


def decode_user(
    stream: BinaryIO,
    key: str,
    partner: Partner,
    password_source: PasswordSource,
) -> User:
    record = _read_record(stream, UserRecord, key)
    if record.partner_id != partner.partner_id:
        msg = (
            f"User {record.user_id} belongs to partner {record.partner_id}, "
            f"not {partner.partner_id}"
        )
        raise ConfigurationError(msg)
    keys = unseal_keys(SealedKeys(pems=record.private_keys), password_source)
    return User(
        partner=partner,
        user_id=record.user_id,
        name=record.name,
        email=record.email,
        country=record.country,
        organization=record.organization,
        keys=keys,
        initialized=record.initialized,
        initialized_hia=record.initialized_hia,
    )
