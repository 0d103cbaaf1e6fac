"""
User-facing strings, keyed by message id and locale.

Locales fall back from ``de_DE`` → ``de`` → ``en``. Messages use
``str.format`` placeholders.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en"

COMMAND_ASSEMBLIES_NOT_FOUND = "command_assemblies_not_found"
NO_TOOL_FOUND = "no_tool_found"

_CATALOG: dict[str, dict[str, str]] = {
    "en": {
        COMMAND_ASSEMBLIES_NOT_FOUND: "Could not find command assemblies for package '{package_id}'.",
        NO_TOOL_FOUND: "No executable found matching command '{command}'.",
    },
    "de": {
        COMMAND_ASSEMBLIES_NOT_FOUND: "Die Befehlsassemblys für das Paket '{package_id}' wurden nicht gefunden.",
        NO_TOOL_FOUND: "Es wurde keine ausführbare Datei gefunden, die dem Befehl '{command}' entspricht.",
    },
    "fr": {
        COMMAND_ASSEMBLIES_NOT_FOUND: "Les assemblys de commande du package '{package_id}' sont introuvables.",
        NO_TOOL_FOUND: "Aucun exécutable ne correspond à la commande '{command}'.",
    },
}


def _candidates(locale: str | None) -> list[str]:
    if not locale:
        return [DEFAULT_LOCALE]
    normalized = locale.split(".", 1)[0].replace("-", "_").lower()
    language = normalized.split("_", 1)[0]
    return [normalized, language, DEFAULT_LOCALE]


def get_message(message_id: str, locale: str | None = None, **params: str) -> str:
    """Render a localized message.

    Raises:
        KeyError: If ``message_id`` is unknown.
    """
    for candidate in _candidates(locale):
        template = _CATALOG.get(candidate, {}).get(message_id)
        if template is not None:
            return template.format(**params)
    raise KeyError(message_id)
