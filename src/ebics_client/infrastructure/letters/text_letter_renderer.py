"""Plain-text initialization letters.

Each letter lists the subscriber's identifiers and the SHA-256 hash of
one public key, computed the way the bank computes it: over the ASCII
string "<exponent hex> <modulus hex>" with leading zeros removed.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ebics_client.domain.ebics.ports import InitLetter, LetterRendererPort
from ebics_client.domain.identity import KeyUsage, User
from ebics_client.domain.shared.time import utc_now

_TITLES: dict[str, dict[KeyUsage, str]] = {
    "en": {
        KeyUsage.SIGNATURE: "INI letter: electronic signature key",
        KeyUsage.ENCRYPTION: "HIA letter: encryption key",
        KeyUsage.AUTHENTICATION: "HIA letter: authentication key",
    },
    "de": {
        KeyUsage.SIGNATURE: "INI-Brief: Schlüssel für die elektronische Unterschrift",
        KeyUsage.ENCRYPTION: "HIA-Brief: Verschlüsselungsschlüssel",
        KeyUsage.AUTHENTICATION: "HIA-Brief: Authentifikationsschlüssel",
    },
}

_LABELS: dict[str, tuple[str, ...]] = {
    "en": ("Date", "Time", "Bank", "Host ID", "User ID", "Name", "Partner ID",
           "Version", "Exponent", "Modulus", "Hash", "Place, date", "Signature"),
    "de": ("Datum", "Uhrzeit", "Bank", "Host-ID", "Teilnehmer-ID", "Name",
           "Kunden-ID", "Version", "Exponent", "Modulus", "Hashwert", "Ort, Datum",
           "Unterschrift"),
}


def public_key_digest(user: User, usage: KeyUsage) -> bytes:
    numbers = user.keys.public_key(usage).public_numbers()
    text = f"{numbers.e:x} {numbers.n:x}"
    return hashlib.sha256(text.encode("ascii")).digest()


def _hex_lines(data: bytes, per_line: int = 16) -> list[str]:
    pairs = [f"{b:02X}" for b in data]
    return [" ".join(pairs[i : i + per_line]) for i in range(0, len(pairs), per_line)]


def _wrap(text: str, width: int = 64) -> list[str]:
    return [text[i : i + width] for i in range(0, len(text), width)]


@dataclass(frozen=True)
class TextLetter(InitLetter):
    """A rendered letter held in memory."""

    file_name: str
    content: str

    @property
    def name(self) -> str:
        return self.file_name

    def to_bytes(self) -> bytes:
        return self.content.encode("utf-8")


class TextLetterRenderer(LetterRendererPort):
    """Renders INI/HIA letters as UTF-8 text files."""

    def __init__(self, language: str = "de", clock: Optional[datetime] = None):
        self._language = language if language in _TITLES else "en"
        self._clock = clock

    def create_a005_letter(self, user: User) -> InitLetter:
        return self._render(user, KeyUsage.SIGNATURE)

    def create_e002_letter(self, user: User) -> InitLetter:
        return self._render(user, KeyUsage.ENCRYPTION)

    def create_x002_letter(self, user: User) -> InitLetter:
        return self._render(user, KeyUsage.AUTHENTICATION)

    def _render(self, user: User, usage: KeyUsage) -> TextLetter:
        (
            l_date, l_time, l_bank, l_host, l_user, l_name, l_partner,
            l_version, l_exp, l_mod, l_hash, l_place, l_sig,
        ) = _LABELS[self._language]
        now = self._clock or utc_now()
        numbers = user.keys.public_key(usage).public_numbers()

        lines = [
            _TITLES[self._language][usage],
            "",
            f"{l_date:<12}: {now:%d.%m.%Y}",
            f"{l_time:<12}: {now:%H:%M:%S}",
            f"{l_bank:<12}: {user.bank.name}",
            f"{l_host:<12}: {user.bank.host_id}",
            f"{l_user:<12}: {user.user_id}",
            f"{l_name:<12}: {user.name}",
            f"{l_partner:<12}: {user.partner.partner_id}",
            f"{l_version:<12}: {usage.value}",
            "",
            f"{l_exp}:",
            *_wrap(f"{numbers.e:x}"),
            "",
            f"{l_mod}:",
            *_wrap(f"{numbers.n:x}"),
            "",
            f"{l_hash} (SHA-256):",
            *_hex_lines(public_key_digest(user, usage)),
            "",
            "",
            f"{l_place}: ______________________   {l_sig}: ______________________",
            "",
        ]
        return TextLetter(
            file_name=f"{usage.value}_letter_{user.user_id}.txt",
            content="\n".join(lines),
        )
