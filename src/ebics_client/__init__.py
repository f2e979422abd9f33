"""EBICS client core: identity, key initialization and file transfer."""

__version__ = "0.1.0"
