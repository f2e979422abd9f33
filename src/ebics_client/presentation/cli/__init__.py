"""Command line interface."""

from ebics_client.presentation.cli.app import cli

__all__ = ["cli"]
