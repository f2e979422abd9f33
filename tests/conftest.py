"""Root pytest configuration and shared fixtures.

Test Structure:
    tests/
    ├── unit/
    │   ├── domain/            # Entities, value objects, order catalog
    │   ├── application/       # Registry and orchestration services
    │   ├── infrastructure/    # Files, keys, letters, transport loading
    │   ├── config/            # Settings and client configuration
    │   └── presentation/      # CLI
    └── shared/                # Shared fixtures and factories

Protocol ports are replaced by mocks; everything else runs for real on
a temporary directory. RSA keys are generated once per session at the
smallest supported size.

Environment Variables:
    RUN_SLOW=1    Run @pytest.mark.slow tests (full-size key generation)

Pytest Options:
    --run-slow    Run slow tests
"""

import os
from unittest.mock import Mock

import pytest

from ebics_client.application.services import IdentityRegistry
from ebics_client.domain.ebics import Product
from ebics_client.domain.ebics.ports import (
    KeyExchangePort,
    KeyGeneratorPort,
    TransferPort,
)
from ebics_client.domain.identity import User, UserKeyMaterial
from ebics_client.domain.shared.value_objects import PasswordSource, static_password
from ebics_client.infrastructure.letters import TextLetterRenderer
from ebics_client.infrastructure.persistence import FileSerializationManager
from ebics_client.infrastructure.security import RsaKeyGenerator
from ebics_client.infrastructure.trace import FileTraceManager
from ebics_config import ClientConfiguration, clear_settings_cache
from tests.shared.fixtures import TestIdentityFactory

TEST_KEY_SIZE = 1024


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="Run tests marked with @pytest.mark.slow",
    )


def pytest_collection_modifyitems(config, items):
    """Auto-skip slow tests unless explicitly enabled."""
    run_slow = config.getoption("--run-slow") or os.environ.get(
        "RUN_SLOW",
        "",
    ).lower() in ("1", "true", "yes")
    if run_slow:
        return

    skip_slow = pytest.mark.skip(reason="Slow test - run with --run-slow or RUN_SLOW=1")
    for item in items:
        if "slow" in {mark.name for mark in item.iter_markers()}:
            item.add_marker(skip_slow)


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch, tmp_path):
    """Isolate every test from the developer's environment and settings cache."""
    for name in list(os.environ):
        if name.startswith("EBICS_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("EBICS_ROOT_DIR", str(tmp_path / "default-root"))
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture(scope="session")
def key_material() -> UserKeyMaterial:
    """One set of unsealed user keys shared by the whole session."""
    return RsaKeyGenerator(TEST_KEY_SIZE).generate()


@pytest.fixture
def password() -> PasswordSource:
    return static_password(TestIdentityFactory.PASSWORD)


@pytest.fixture
def configuration(tmp_path) -> ClientConfiguration:
    return ClientConfiguration(
        root_dir=tmp_path / "client",
        language="en",
        country="DE",
        log_file_enabled=False,
        key_size=TEST_KEY_SIZE,
    )


@pytest.fixture
def key_generator(key_material) -> Mock:
    generator = Mock(spec=KeyGeneratorPort)
    generator.generate.return_value = key_material
    return generator


@pytest.fixture
def serializer(configuration) -> FileSerializationManager:
    return FileSerializationManager(configuration.serialization_directory)


@pytest.fixture
def trace() -> FileTraceManager:
    return FileTraceManager()


@pytest.fixture
def registry(configuration, serializer, trace, key_generator) -> IdentityRegistry:
    return IdentityRegistry(
        configuration=configuration,
        serializer=serializer,
        trace=trace,
        letters=TextLetterRenderer("en"),
        key_generator=key_generator,
    )


@pytest.fixture
def user(registry, password) -> User:
    """Default user, created and persisted through the registry."""
    return registry.create_user(
        **TestIdentityFactory.default_user(),
        password_source=password,
    )


@pytest.fixture
def product() -> Product:
    return Product(name="ebics-client tests", language="en")


@pytest.fixture
def key_exchange() -> Mock:
    return Mock(spec=KeyExchangePort)


@pytest.fixture
def transfer() -> Mock:
    return Mock(spec=TransferPort)
