"""Unit tests for IdentityRegistry creation, loading and persistence."""

from unittest.mock import Mock

import pytest

from ebics_client.application.services import IdentityRegistry
from ebics_client.domain.ebics import BankPublicKeys
from ebics_client.domain.ebics.ports import SerializationPort
from ebics_client.domain.identity import KeyUsage
from ebics_client.domain.shared.exceptions import (
    ConfigurationError,
    EbicsIOError,
    EbicsSecurityError,
    EntityNotFoundError,
    ErrorCode,
    ProtocolError,
)
from ebics_client.domain.shared.value_objects import static_password
from ebics_client.infrastructure.letters import TextLetterRenderer
from ebics_client.infrastructure.persistence import FileSerializationManager
from ebics_client.infrastructure.trace import FileTraceManager
from tests.shared.fixtures import TestIdentityFactory


def _make_registry(configuration, key_generator, serializer=None) -> IdentityRegistry:
    return IdentityRegistry(
        configuration=configuration,
        serializer=serializer
        or FileSerializationManager(configuration.serialization_directory),
        trace=FileTraceManager(),
        letters=TextLetterRenderer("en"),
        key_generator=key_generator,
    )


def _load_default(registry: IdentityRegistry, password: str = TestIdentityFactory.PASSWORD):
    return registry.load_user(
        TestIdentityFactory.HOST_ID,
        TestIdentityFactory.PARTNER_ID,
        TestIdentityFactory.USER_ID,
        static_password(password),
    )


class TestCreateUser:
    """Tests for IdentityRegistry.create_user()."""

    def test_registers_user_partner_and_bank(self, registry, user):
        assert registry.users[TestIdentityFactory.USER_ID] is user
        assert registry.partners[TestIdentityFactory.PARTNER_ID] is user.partner
        assert registry.banks[TestIdentityFactory.HOST_ID] is user.bank
        assert registry.get_user(TestIdentityFactory.USER_ID) is user

    def test_new_user_is_clean_and_uninitialized(self, user):
        assert user.initialized is False
        assert user.initialized_hia is False
        assert user.needs_save is False
        assert user.partner.needs_save is False
        assert user.bank.needs_save is False
        assert user.partner.order_counter == 0

    def test_persists_three_records(self, serializer, user):
        assert serializer.exists(TestIdentityFactory.HOST_ID)
        assert serializer.exists(f"partner-{TestIdentityFactory.PARTNER_ID}")
        assert serializer.exists(f"user-{TestIdentityFactory.USER_ID}")

    def test_records_hold_no_plaintext_private_keys(self, serializer, user):
        record = serializer.path_for(f"user-{TestIdentityFactory.USER_ID}").read_text()

        assert "ENCRYPTED PRIVATE KEY" in record
        assert "BEGIN PRIVATE KEY" not in record
        assert TestIdentityFactory.PASSWORD not in record

    def test_creates_directories_letters_and_public_keys(self, configuration, user):
        user_id = TestIdentityFactory.USER_ID

        assert configuration.trace_directory(user_id).is_dir()
        letters = sorted(p.name for p in configuration.letters_directory(user_id).iterdir())
        assert letters == [
            f"A005_letter_{user_id}.txt",
            f"E002_letter_{user_id}.txt",
            f"X002_letter_{user_id}.txt",
        ]
        keystore = configuration.keystore_directory(user_id)
        for usage in KeyUsage:
            assert (keystore / f"{user_id}-{usage.value}.pem").is_file()

    def test_failed_key_generation_leaves_registry_untouched(
        self,
        registry,
        key_generator,
        password,
    ):
        key_generator.generate.side_effect = EbicsSecurityError("no entropy")

        with pytest.raises(EbicsSecurityError):
            registry.create_user(
                **TestIdentityFactory.default_user(),
                password_source=password,
            )

        assert len(registry.users) == 0
        assert len(registry.partners) == 0
        assert len(registry.banks) == 0

    def test_invalid_url_raises_before_any_side_effect(
        self,
        registry,
        configuration,
        key_generator,
        password,
    ):
        params = {**TestIdentityFactory.default_user(), "url": "ftp://bank"}

        with pytest.raises(ConfigurationError, match="Invalid bank URL"):
            registry.create_user(**params, password_source=password)

        key_generator.generate.assert_not_called()
        assert not configuration.serialization_directory.exists()
        assert len(registry.users) == 0

    def test_blank_user_id_raises(self, registry, password):
        params = {**TestIdentityFactory.default_user(), "user_id": "  "}

        with pytest.raises(ConfigurationError, match="user_id"):
            registry.create_user(**params, password_source=password)

    def test_get_unknown_user_raises(self, registry):
        with pytest.raises(EntityNotFoundError) as exc:
            registry.get_user("NOBODY")

        assert exc.value.code is ErrorCode.USER_NOT_FOUND


class TestCreateBank:
    """Tests for IdentityRegistry.create_bank()."""

    def test_same_host_same_url_replaces(self, registry):
        first = registry.create_bank("https://a.example.com", "A", "HOST")
        second = registry.create_bank("https://a.example.com", "A", "HOST")

        assert registry.banks["HOST"] is second
        assert first is not second

    def test_same_host_different_url_raises(self, registry):
        registry.create_bank("https://a.example.com", "A", "HOST")

        with pytest.raises(ConfigurationError, match="already registered"):
            registry.create_bank("https://b.example.com", "B", "HOST")

    def test_blank_host_raises(self, registry):
        with pytest.raises(ConfigurationError, match="host_id"):
            registry.create_bank("https://a.example.com", "A", "")

    def test_create_partner_registers(self, registry):
        bank = registry.create_bank("https://a.example.com", "A", "HOST")

        partner = registry.create_partner(bank, "P9")

        assert registry.partners["P9"] is partner
        assert partner.bank is bank


class TestLoadUser:
    """Tests for IdentityRegistry.load_user()."""

    def test_round_trip(self, configuration, key_generator, user):
        fresh = _make_registry(configuration, key_generator)

        loaded = _load_default(fresh)

        assert loaded.user_id == user.user_id
        assert loaded.name == user.name
        assert loaded.partner.partner_id == user.partner.partner_id
        assert loaded.bank.url == user.bank.url
        assert loaded.needs_save is False
        for usage in KeyUsage:
            assert (
                loaded.keys.public_key(usage).public_numbers()
                == user.keys.public_key(usage).public_numbers()
            )
        assert fresh.users[user.user_id] is loaded

    def test_wrong_password_raises_and_registers_nothing(
        self,
        configuration,
        key_generator,
        user,
    ):
        fresh = _make_registry(configuration, key_generator)

        with pytest.raises(EbicsSecurityError) as exc:
            _load_default(fresh, password="wrong password")

        assert exc.value.code is ErrorCode.DECRYPTION_FAILED
        assert len(fresh.users) == 0
        assert len(fresh.partners) == 0
        assert len(fresh.banks) == 0

    def test_missing_user_record_raises(self, registry, user, password):
        with pytest.raises(EntityNotFoundError):
            registry.load_user(
                TestIdentityFactory.HOST_ID,
                TestIdentityFactory.PARTNER_ID,
                "UNKNOWN",
                password,
            )

    def test_missing_bank_record_raises(self, registry, password):
        with pytest.raises(EntityNotFoundError):
            registry.load_user("NOHOST", "P", "U", password)

    def test_corrupt_record_raises_protocol_error(self, registry, serializer, user, password):
        serializer.serialize(f"user-{user.user_id}", b'{"schema_version": 1}')

        with pytest.raises(ProtocolError):
            _load_default(registry)

    def test_state_survives_save_and_reload(self, registry, configuration, key_generator, user):
        """Flags, counter and bank keys written by save_dirty() are read back."""
        user.mark_initialized()
        user.mark_hia_initialized()
        user.partner.skip_order_ids(41)
        user.partner.next_order_id()
        user.bank.set_public_keys(
            BankPublicKeys(encryption_key="E-PEM", authentication_key="X-PEM"),
        )

        assert registry.save_dirty() == []

        loaded = _load_default(_make_registry(configuration, key_generator))
        assert loaded.initialized is True
        assert loaded.initialized_hia is True
        assert loaded.partner.order_counter == 42
        assert loaded.bank.public_keys == BankPublicKeys(
            encryption_key="E-PEM",
            authentication_key="X-PEM",
        )


class TestSharedPartner:
    """Tests for several users under one partner and bank."""

    BANK_KEYS = BankPublicKeys(encryption_key="E-PEM", authentication_key="X-PEM")

    def _persisted_counter(self, configuration, key_generator) -> int:
        return _load_default(_make_registry(configuration, key_generator)).partner.order_counter

    def test_create_reuses_registered_partner(
        self,
        registry,
        configuration,
        key_generator,
        user,
        password,
    ):
        user.partner.skip_order_ids(41)
        registry.save_dirty()

        colleague = registry.create_user(
            **TestIdentityFactory.colleague(),
            password_source=password,
        )

        assert colleague.partner is user.partner
        assert colleague.bank is user.bank
        assert registry.partners[TestIdentityFactory.PARTNER_ID] is user.partner
        assert self._persisted_counter(configuration, key_generator) == 41

    def test_create_reuses_stored_partner_and_bank(
        self,
        registry,
        configuration,
        key_generator,
        user,
        password,
    ):
        user.partner.skip_order_ids(41)
        user.bank.set_public_keys(self.BANK_KEYS)
        registry.save_dirty()

        fresh = _make_registry(configuration, key_generator)
        colleague = fresh.create_user(**TestIdentityFactory.colleague(), password_source=password)

        assert colleague.partner.order_counter == 41
        assert colleague.bank.public_keys == self.BANK_KEYS
        reloaded = _load_default(_make_registry(configuration, key_generator))
        assert reloaded.partner.order_counter == 41
        assert reloaded.bank.public_keys == self.BANK_KEYS

    def test_create_with_other_url_for_stored_bank_raises(
        self,
        configuration,
        key_generator,
        user,
        password,
    ):
        params = {**TestIdentityFactory.colleague(), "url": "https://other.example.com"}
        fresh = _make_registry(configuration, key_generator)

        with pytest.raises(ConfigurationError, match="already registered"):
            fresh.create_user(**params, password_source=password)

        assert len(fresh.users) == 0

    def test_load_links_registered_partner(
        self,
        registry,
        configuration,
        key_generator,
        user,
        password,
    ):
        registry.create_user(**TestIdentityFactory.colleague(), password_source=password)
        fresh = _make_registry(configuration, key_generator)

        first = _load_default(fresh)
        assert first.partner.next_order_id() == 0
        second = fresh.load_user(
            TestIdentityFactory.HOST_ID,
            TestIdentityFactory.PARTNER_ID,
            TestIdentityFactory.SECOND_USER_ID,
            password,
        )

        assert second.partner is first.partner
        assert second.bank is first.bank
        assert fresh.save_dirty() == []
        assert self._persisted_counter(configuration, key_generator) == 1

    def test_load_with_partner_of_other_host_raises(self, registry, user, password):
        registry.create_bank("https://other.example.com", "Other", "OTHERHOST")

        with pytest.raises(ConfigurationError, match="belongs to host"):
            registry.load_user("OTHERHOST", TestIdentityFactory.PARTNER_ID, "ANY", password)


class TestSaveDirty:
    """Tests for best-effort persistence on shutdown."""

    @pytest.fixture
    def mock_serializer(self) -> Mock:
        serializer = Mock(spec=SerializationPort)
        serializer.exists.return_value = False
        return serializer

    @pytest.fixture
    def mock_registry(self, configuration, key_generator, mock_serializer, password):
        registry = _make_registry(configuration, key_generator, serializer=mock_serializer)
        registry.create_user(**TestIdentityFactory.default_user(), password_source=password)
        mock_serializer.reset_mock()
        return registry

    def test_nothing_dirty_saves_nothing(self, mock_registry, mock_serializer):
        assert mock_registry.save_dirty() == []
        mock_serializer.serialize.assert_not_called()

    def test_saves_users_then_partners_then_banks(self, mock_registry, mock_serializer):
        user = mock_registry.get_user(TestIdentityFactory.USER_ID)
        user.bank.mark_dirty()
        user.partner.mark_dirty()
        user.mark_dirty()

        mock_registry.save_dirty()

        keys = [c.args[0] for c in mock_serializer.serialize.call_args_list]
        assert keys == [
            f"user-{TestIdentityFactory.USER_ID}",
            f"partner-{TestIdentityFactory.PARTNER_ID}",
            TestIdentityFactory.HOST_ID,
        ]
        assert not user.needs_save
        assert not user.partner.needs_save
        assert not user.bank.needs_save

    def test_failure_does_not_stop_remaining_saves(self, mock_registry, mock_serializer):
        user = mock_registry.get_user(TestIdentityFactory.USER_ID)
        user.mark_dirty()
        user.partner.mark_dirty()
        user.bank.mark_dirty()
        user_key = f"user-{TestIdentityFactory.USER_ID}"

        def _serialize(key, payload):
            if key == user_key:
                raise EbicsIOError("disk full")

        mock_serializer.serialize.side_effect = _serialize

        failures = mock_registry.save_dirty()

        assert [key for key, _ in failures] == [user_key]
        assert isinstance(failures[0][1], EbicsIOError)
        assert user.needs_save is True
        assert user.partner.needs_save is False
        assert user.bank.needs_save is False

    def test_close_saves_and_clears_traces(self, mock_registry, mock_serializer):
        user = mock_registry.get_user(TestIdentityFactory.USER_ID)
        mock_registry.mark_dirty(user)

        assert mock_registry.close() == []
        mock_serializer.serialize.assert_called_once()
