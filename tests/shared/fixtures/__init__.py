"""Shared test fixtures and factories."""

from tests.shared.fixtures.factories import TestIdentityFactory

__all__ = ["TestIdentityFactory"]
