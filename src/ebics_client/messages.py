"""Localized log and console messages.

Messages are looked up by key and formatted with positional arguments.
Unknown languages fall back to English; unknown keys return the key.
"""

from __future__ import annotations

_EN: dict[str, str] = {
    "init.configuration": "Client configuration initialized ({0})",
    "user.create.directories": "Creating directories for user {0}",
    "user.create.info": "Creating user {0}",
    "user.create.success": "User {0} created",
    "user.create.error": "Failed to create user {0}",
    "user.load.info": "Loading user {0}",
    "user.load.success": "User {0} loaded",
    "user.load.error": "Failed to load user {0}",
    "letters.create": "Writing initialization letters for user {0}",
    "ini.request.send": "Sending INI request for user {0}",
    "user.already.initialized": "User {0} is already initialized (INI)",
    "ini.send.success": "INI request for user {0} accepted",
    "ini.send.error": "INI request for user {0} failed",
    "hia.request.send": "Sending HIA request for user {0}",
    "user.already.hia.initialized": "User {0} is already initialized (HIA)",
    "hia.send.success": "HIA request for user {0} accepted",
    "hia.send.error": "HIA request for user {0} failed",
    "hpb.request.send": "Sending HPB request for user {0}",
    "hpb.send.success": "Bank keys retrieved for user {0}",
    "hpb.send.error": "HPB request for user {0} failed",
    "spr.request.send": "Sending SPR request for user {0}",
    "spr.send.success": "Subscriber {0} revoked",
    "spr.send.error": "SPR request for user {0} failed",
    "upload.file.send": "Uploading {0} order {1} for user {2}",
    "upload.file.success": "{0} order {1} accepted",
    "upload.file.error": "Upload of {0} order failed",
    "download.file.fetch": "Downloading {0} for user {1}",
    "download.file.success": "Downloaded {0} ({1} bytes)",
    "download.file.nodata": "No {0} data available for the requested range",
    "download.file.error": "Download of {0} failed",
    "order.skip": "Skipping {0} order ids for partner {1}",
    "app.quit.users": "Saving user {0}",
    "app.quit.partners": "Saving partner {0}",
    "app.quit.banks": "Saving bank {0}",
    "app.quit.error": "Failed to save {0}",
    "app.cache.clear": "Clearing trace cache",
}

_DE: dict[str, str] = {
    "init.configuration": "Client-Konfiguration initialisiert ({0})",
    "user.create.directories": "Lege Verzeichnisse für Teilnehmer {0} an",
    "user.create.info": "Lege Teilnehmer {0} an",
    "user.create.success": "Teilnehmer {0} angelegt",
    "user.create.error": "Teilnehmer {0} konnte nicht angelegt werden",
    "user.load.info": "Lade Teilnehmer {0}",
    "user.load.success": "Teilnehmer {0} geladen",
    "user.load.error": "Teilnehmer {0} konnte nicht geladen werden",
    "letters.create": "Schreibe Initialisierungsbriefe für Teilnehmer {0}",
    "ini.request.send": "Sende INI-Auftrag für Teilnehmer {0}",
    "user.already.initialized": "Teilnehmer {0} ist bereits initialisiert (INI)",
    "ini.send.success": "INI-Auftrag für Teilnehmer {0} angenommen",
    "ini.send.error": "INI-Auftrag für Teilnehmer {0} fehlgeschlagen",
    "hia.request.send": "Sende HIA-Auftrag für Teilnehmer {0}",
    "user.already.hia.initialized": "Teilnehmer {0} ist bereits initialisiert (HIA)",
    "hia.send.success": "HIA-Auftrag für Teilnehmer {0} angenommen",
    "hia.send.error": "HIA-Auftrag für Teilnehmer {0} fehlgeschlagen",
    "hpb.request.send": "Sende HPB-Auftrag für Teilnehmer {0}",
    "hpb.send.success": "Bankschlüssel für Teilnehmer {0} abgeholt",
    "hpb.send.error": "HPB-Auftrag für Teilnehmer {0} fehlgeschlagen",
    "spr.request.send": "Sende SPR-Auftrag für Teilnehmer {0}",
    "spr.send.success": "Teilnehmer {0} gesperrt",
    "spr.send.error": "SPR-Auftrag für Teilnehmer {0} fehlgeschlagen",
    "upload.file.send": "Sende {0}-Auftrag {1} für Teilnehmer {2}",
    "upload.file.success": "{0}-Auftrag {1} angenommen",
    "upload.file.error": "Versand des {0}-Auftrags fehlgeschlagen",
    "download.file.fetch": "Hole {0} für Teilnehmer {1} ab",
    "download.file.success": "{0} abgeholt ({1} Bytes)",
    "download.file.nodata": "Keine {0}-Daten im angefragten Zeitraum",
    "download.file.error": "Abholung von {0} fehlgeschlagen",
    "order.skip": "Überspringe {0} Auftragsnummern für Kunde {1}",
    "app.quit.users": "Speichere Teilnehmer {0}",
    "app.quit.partners": "Speichere Kunde {0}",
    "app.quit.banks": "Speichere Bank {0}",
    "app.quit.error": "{0} konnte nicht gespeichert werden",
    "app.cache.clear": "Leere Trace-Verzeichnis",
}

_CATALOGS: dict[str, dict[str, str]] = {"en": _EN, "de": _DE}


class Messages:
    """Message catalog for one language."""

    def __init__(self, language: str = "en") -> None:
        self.language = language.lower()
        self._catalog = _CATALOGS.get(self.language, _EN)

    def get(self, key: str, *args: object) -> str:
        template = self._catalog.get(key) or _EN.get(key)
        if template is None:
            return key
        return template.format(*args)
