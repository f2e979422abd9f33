"""Unit tests for the ebics-client CLI."""

from unittest.mock import Mock

import pytest
from typer.testing import CliRunner

from ebics_client.domain.ebics import BankPublicKeys
from ebics_client.domain.ebics.ports import KeyExchangePort, TransferPort
from ebics_client.domain.shared.exceptions import NoDataAvailableError
from ebics_client.presentation.cli.app import app
from ebics_config import clear_settings_cache
from tests.shared.fixtures import TestIdentityFactory

runner = CliRunner()

KEY_EXCHANGE = Mock(spec=KeyExchangePort)
TRANSFER = Mock(spec=TransferPort)


def transport_factory(configuration):
    return KEY_EXCHANGE, TRANSFER


@pytest.fixture(autouse=True)
def cli_environment(monkeypatch, tmp_path):
    """Default-user settings pointing at a temporary root and mock transport."""
    global KEY_EXCHANGE, TRANSFER
    KEY_EXCHANGE = Mock(spec=KeyExchangePort)
    TRANSFER = Mock(spec=TransferPort)
    monkeypatch.setattr("ebics_client.presentation.cli.app._configure_logging", Mock())

    root = tmp_path / "cli-root"
    env = {
        "EBICS_ROOT_DIR": str(root),
        "EBICS_LANGUAGE_CODE": "en",
        "EBICS_KEY_SIZE": "1024",
        "EBICS_TRANSPORT": f"{__name__}:transport_factory",
        "EBICS_BANK_URL": TestIdentityFactory.BANK_URL,
        "EBICS_BANK_NAME": TestIdentityFactory.BANK_NAME,
        "EBICS_HOST_ID": TestIdentityFactory.HOST_ID,
        "EBICS_PARTNER_ID": TestIdentityFactory.PARTNER_ID,
        "EBICS_USER_ID": TestIdentityFactory.USER_ID,
        "EBICS_USER_NAME": "Erika Mustermann",
        "EBICS_USER_EMAIL": "erika@example.com",
        "EBICS_USER_COUNTRY": "DE",
        "EBICS_USER_ORG": "Example GmbH",
        "EBICS_PASSWORD": TestIdentityFactory.PASSWORD,
    }
    for name, value in env.items():
        monkeypatch.setenv(name, value)
    return root


def _user_record(root) -> str:
    return (root / "serialized" / f"user-{TestIdentityFactory.USER_ID}.json").read_text()


def _partner_record(root) -> str:
    return (root / "serialized" / f"partner-{TestIdentityFactory.PARTNER_ID}.json").read_text()


class TestHelp:
    """Tests for usage output."""

    def test_help_exits_zero(self):
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "--download" in result.output
        assert "--skip-order" in result.output


class TestCreateAndInitialize:
    """Tests for user creation and key initialization via the CLI."""

    def test_create_persists_user(self, cli_environment):
        result = runner.invoke(app, ["--create"])

        assert result.exit_code == 0, result.output
        assert '"initialized": false' in _user_record(cli_environment)
        KEY_EXCHANGE.submit_signature_key.assert_not_called()

    def test_create_with_ini_and_hia_saves_flags(self, cli_environment):
        result = runner.invoke(app, ["--create", "--ini", "--hia"])

        assert result.exit_code == 0, result.output
        record = _user_record(cli_environment)
        assert '"initialized": true' in record
        assert '"initialized_hia": true' in record

    def test_load_then_hpb(self, cli_environment):
        runner.invoke(app, ["--create"])
        KEY_EXCHANGE.retrieve_bank_keys.return_value = BankPublicKeys(
            encryption_key="E-PEM",
            authentication_key="X-PEM",
        )

        result = runner.invoke(app, ["--hpb"])

        assert result.exit_code == 0, result.output
        bank_record = (cli_environment / "serialized" / f"{TestIdentityFactory.HOST_ID}.json")
        assert "E-PEM" in bank_record.read_text()

    def test_load_without_records_exits_one(self):
        result = runner.invoke(app, ["--ini"])

        assert result.exit_code == 1
        KEY_EXCHANGE.submit_signature_key.assert_not_called()

    def test_missing_password_exits_one(self, monkeypatch):
        monkeypatch.delenv("EBICS_PASSWORD")

        result = runner.invoke(app, ["--create"])

        assert result.exit_code == 1

    def test_wrong_password_exits_one(self, monkeypatch):
        runner.invoke(app, ["--create"])
        monkeypatch.setenv("EBICS_PASSWORD", "wrong password")
        clear_settings_cache()

        result = runner.invoke(app, ["--letters"])

        assert result.exit_code == 1


class TestTransfers:
    """Tests for downloads, uploads and order-id skipping via the CLI."""

    @pytest.fixture(autouse=True)
    def created_user(self, cli_environment):
        result = runner.invoke(app, ["--create"])
        assert result.exit_code == 0, result.output

    def test_download_writes_output(self, tmp_path):
        TRANSFER.download.return_value = b":20:STARTUMS"
        target = tmp_path / "out.sta"

        result = runner.invoke(app, ["--download", "sta", "-o", str(target), "-s", "2024-01-01"])

        assert result.exit_code == 0, result.output
        assert target.read_bytes() == b":20:STARTUMS"

    def test_no_data_exits_three_without_file(self, tmp_path):
        TRANSFER.download.side_effect = NoDataAvailableError()
        target = tmp_path / "out.sta"

        result = runner.invoke(app, ["--download", "STA", "-o", str(target)])

        assert result.exit_code == 3
        assert not target.exists()

    def test_end_without_start_exits_before_network(self, tmp_path):
        result = runner.invoke(
            app,
            ["--download", "STA", "-o", str(tmp_path / "out.sta"), "-e", "2024-01-31"],
        )

        assert result.exit_code == 1
        TRANSFER.download.assert_not_called()

    def test_download_requires_output(self):
        result = runner.invoke(app, ["--download", "STA"])

        assert result.exit_code == 1
        TRANSFER.download.assert_not_called()

    def test_upload_advances_saved_counter(self, cli_environment, tmp_path):
        source = tmp_path / "payment.xml"
        source.write_bytes(b"<pain/>")

        result = runner.invoke(app, ["--upload", "FUL", "-i", str(source)])

        assert result.exit_code == 0, result.output
        assert '"order_counter": 1' in _partner_record(cli_environment)

    def test_order_id_without_upload_exits_one(self, cli_environment):
        result = runner.invoke(app, ["--order-id", "5"])

        assert result.exit_code == 1
        TRANSFER.upload.assert_not_called()
        assert '"order_counter": 0' in _partner_record(cli_environment)

    def test_skip_order_saves_counter(self, cli_environment):
        result = runner.invoke(app, ["--skip-order", "25"])

        assert result.exit_code == 0, result.output
        assert '"order_counter": 25' in _partner_record(cli_environment)

    def test_rejects_unknown_order_type(self, tmp_path):
        result = runner.invoke(app, ["--download", "XYZ", "-o", str(tmp_path / "x")])

        assert result.exit_code == 2
