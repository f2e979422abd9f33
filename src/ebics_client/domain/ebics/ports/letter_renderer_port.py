"""Initialization letter port interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ebics_client.domain.identity import User


class InitLetter(ABC):
    """A rendered initialization letter."""

    @property
    @abstractmethod
    def name(self) -> str:
        """File name the letter is written under."""

    @abstractmethod
    def to_bytes(self) -> bytes:
        """Serialized letter content."""


class LetterRendererPort(ABC):
    """
    Renders the three letters a user signs and sends to the bank.

    The bank compares the key hashes printed on the letters with the keys
    received through INI and HIA before activating the user.
    """

    @abstractmethod
    def create_a005_letter(self, user: User) -> InitLetter:
        """Letter for the signature key."""

    @abstractmethod
    def create_e002_letter(self, user: User) -> InitLetter:
        """Letter for the encryption key."""

    @abstractmethod
    def create_x002_letter(self, user: User) -> InitLetter:
        """Letter for the authentication key."""
