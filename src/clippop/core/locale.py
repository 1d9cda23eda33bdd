"""Localized string lookup with built-in fallbacks."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from .ports import ClipboardBackend

logger = logging.getLogger(__name__)


class Messages:
    def __init__(self, table: Mapping[str, str] | None = None):
        self._table = dict(table or {})

    def __len__(self) -> int:
        return len(self._table)

    def text(self, key: str, fallback: str) -> str:
        value = self._table.get(key)
        return value if isinstance(value, str) and value else fallback


async def load_messages(backend: ClipboardBackend, locale: str) -> Messages:
    """Fetch the string table for ``locale``; empty on any failure."""
    try:
        table = await backend.load_locale(locale)
    except Exception as exc:
        logger.warning("Locale fallback for %s: %s", locale, exc)
        return Messages()
    if not isinstance(table, Mapping):
        logger.warning("Locale fallback for %s: unexpected payload %r", locale, type(table))
        return Messages()
    return Messages({str(key): value for key, value in table.items()})
