"""Initialization letter rendering."""

from ebics_client.infrastructure.letters.text_letter_renderer import (
    TextLetter,
    TextLetterRenderer,
    public_key_digest,
)

__all__ = ["TextLetter", "TextLetterRenderer", "public_key_digest"]
