"""EBICS client CLI application using Typer.

Creates or loads the configured default user, then runs the requested
actions in a fixed order: letters, INI, HIA, HPB, SPR, download, upload,
order-id skip. Dirty records are saved and traces cleared on exit.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ebics_client.application.dtos import DateRange
from ebics_client.application.services import (
    FileTransferService,
    IdentityRegistry,
    KeyInitializationService,
)
from ebics_client.domain.ebics import OrderType, Product
from ebics_client.domain.identity import User
from ebics_client.domain.shared.exceptions import (
    ConfigurationError,
    EbicsException,
    NoDataAvailableError,
)
from ebics_client.domain.shared.value_objects import static_password
from ebics_client.infrastructure.transport import Transport, load_transport
from ebics_config import ClientConfiguration, Settings, get_settings

logger = logging.getLogger(__name__)

EXIT_ERROR = 1
EXIT_NO_DATA = 3

DownloadOrder = Enum(  # type: ignore[misc]
    "DownloadOrder",
    {t.value: t.value for t in OrderType.downloads()},
    type=str,
)
UploadOrder = Enum(  # type: ignore[misc]
    "UploadOrder",
    {t.value: t.value for t in OrderType.uploads()},
    type=str,
)

app = typer.Typer(
    name="ebics-client",
    help="EBICS client - key initialization and file transfer",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)


def _configure_logging(configuration: ClientConfiguration) -> None:
    """Configure logging for the client.

    Console output goes to stderr so downloaded data and rich output on
    stdout stay clean. A log file below the root dir is added when enabled.
    """
    log_level = getattr(logging, configuration.log_level, logging.INFO)

    log_format = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if configuration.log_file_enabled:
        configuration.root_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(configuration.log_file, encoding="utf-8"))

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt=date_format,
        handlers=handlers,
        force=True,
    )
    logging.getLogger("ebics_client").setLevel(log_level)


def _setting(settings: Settings, name: str) -> str:
    value = getattr(settings, name)
    if value is None or not str(value).strip():
        msg = f"Setting not set or empty: EBICS_{name.upper()}"
        raise ConfigurationError(msg)
    return str(value).strip()


def _password_source(settings: Settings):
    if settings.password is None or not settings.password.get_secret_value():
        msg = "Setting not set or empty: EBICS_PASSWORD"
        raise ConfigurationError(msg)
    return static_password(settings.password.get_secret_value())


def _create_default_user(registry: IdentityRegistry, settings: Settings) -> User:
    return registry.create_user(
        url=_setting(settings, "bank_url"),
        bank_name=_setting(settings, "bank_name"),
        host_id=_setting(settings, "host_id"),
        partner_id=_setting(settings, "partner_id"),
        user_id=_setting(settings, "user_id"),
        name=_setting(settings, "user_name"),
        email=_setting(settings, "user_email"),
        country=_setting(settings, "user_country"),
        organization=_setting(settings, "user_org"),
        password_source=_password_source(settings),
        use_certificates=False,
        save_certificates=True,
    )


def _load_default_user(registry: IdentityRegistry, settings: Settings) -> User:
    return registry.load_user(
        host_id=_setting(settings, "host_id"),
        partner_id=_setting(settings, "partner_id"),
        user_id=_setting(settings, "user_id"),
        password_source=_password_source(settings),
    )


@app.command()
def main(  # noqa: PLR0913
    create: bool = typer.Option(False, "--create", help="Create and initialize EBICS user"),
    letters: bool = typer.Option(False, "--letters", help="Create INI letters"),
    ini: bool = typer.Option(False, "--ini", help=OrderType.INI.description),
    hia: bool = typer.Option(False, "--hia", help=OrderType.HIA.description),
    hpb: bool = typer.Option(False, "--hpb", help=OrderType.HPB.description),
    spr: bool = typer.Option(False, "--spr", help=OrderType.SPR.description),
    download: Optional[DownloadOrder] = typer.Option(
        None,
        "--download",
        "-d",
        case_sensitive=False,
        help="Fetch a file of this order type",
    ),
    upload: Optional[UploadOrder] = typer.Option(
        None,
        "--upload",
        "-u",
        case_sensitive=False,
        help="Send a file of this order type",
    ),
    order_id: Optional[int] = typer.Option(
        None,
        "--order-id",
        min=0,
        help="Explicit order id for the upload (sequence untouched)",
    ),
    skip_order: Optional[int] = typer.Option(
        None,
        "--skip-order",
        min=0,
        help="Skip a number of order ids",
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file"),
    input_file: Optional[Path] = typer.Option(None, "--input", "-i", help="Input file"),
    start: Optional[datetime] = typer.Option(
        None,
        "--start",
        "-s",
        formats=["%Y-%m-%d"],
        help="Start date",
    ),
    end: Optional[datetime] = typer.Option(
        None,
        "--end",
        "-e",
        formats=["%Y-%m-%d"],
        help="End date",
    ),
    test: bool = typer.Option(False, "--test", help="Request test data"),
    root_dir: Optional[Path] = typer.Option(
        None,
        "--root-dir",
        help="Client root directory (overrides EBICS_ROOT_DIR)",
    ),
) -> None:
    """Run EBICS client actions for the configured default user."""
    settings = get_settings()
    if root_dir is not None:
        settings = settings.model_copy(update={"root_dir": root_dir.expanduser()})
    configuration = ClientConfiguration.from_settings(settings)
    _configure_logging(configuration)

    try:
        DateRange.resolve(start, end)
        if download is not None and output is None:
            msg = "Output file not set"
            raise ConfigurationError(msg)
        if upload is not None and input_file is None:
            msg = "Input file not set"
            raise ConfigurationError(msg)
        if order_id is not None and upload is None:
            msg = "Order id given without an upload"
            raise ConfigurationError(msg)
    except ConfigurationError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(EXIT_ERROR) from e

    registry = IdentityRegistry.from_configuration(configuration)
    logger.info(registry.messages.get("init.configuration", configuration.locale))
    product = Product(name=settings.product_name, language=settings.language_code)
    exit_code = 0

    try:
        user = (
            _create_default_user(registry, settings)
            if create
            else _load_default_user(registry, settings)
        )

        if letters:
            paths = registry.create_letters(user, use_certificates=False)
            for path in paths:
                console.print(f"[green]✓[/green] {path}")

        transport: Optional[Transport] = None
        if ini or hia or hpb or spr or download is not None or upload is not None:
            transport = load_transport(settings.transport, configuration)

        if transport is not None:
            initialization = KeyInitializationService(registry, transport.key_exchange)
            if ini:
                initialization.submit_signature_key(user, product)
            if hia:
                initialization.submit_encryption_keys(user, product)
            if hpb:
                initialization.retrieve_bank_keys(user, product)
            if spr:
                initialization.revoke_subscriber(user, product)

            transfers = FileTransferService(registry, transport.transfer)
            if download is not None:
                path = transfers.download_to_file(
                    output,
                    user,
                    product,
                    OrderType(download.value),
                    test=test,
                    start=start,
                    end=end,
                )
                console.print(f"[green]✓[/green] {download.value} written to {path}")
            if upload is not None:
                used_id = transfers.upload_file(
                    user,
                    product,
                    input_file,
                    OrderType(upload.value),
                    order_id,
                )
                console.print(f"[green]✓[/green] {upload.value} sent as order {used_id}")

        if skip_order:
            user.partner.skip_order_ids(skip_order)
            console.print(f"Order counter is now {user.partner.order_counter}")

    except NoDataAvailableError as e:
        err_console.print(f"[yellow]No data available:[/yellow] {e}")
        exit_code = EXIT_NO_DATA
    except EbicsException as e:
        err_console.print(f"[red]Error:[/red] {e}")
        exit_code = EXIT_ERROR
    finally:
        failures = registry.close()
        for key, error in failures:
            err_console.print(f"[red]Could not save {key}:[/red] {error}")

    if exit_code:
        raise typer.Exit(exit_code)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
