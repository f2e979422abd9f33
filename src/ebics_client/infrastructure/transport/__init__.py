"""Pluggable wire transport."""

from ebics_client.infrastructure.transport.loader import Transport, load_transport

__all__ = ["Transport", "load_transport"]
