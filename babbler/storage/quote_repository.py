"""Read-only access to historical quotes used to backfill new speakers."""
from __future__ import annotations

import logging
import os
import re
import sqlite3

logger = logging.getLogger(__name__)


class SqliteQuoteRepository:
    """Reads ``tidbit`` rows filed under ``"<name> quotes"`` in a factoid table.

    The fact is matched with ``LIKE``, so ASCII case is ignored; wildcard
    characters in the name are escaped and match literally.
    """

    def __init__(self, db_path: str, table: str = "factoid", logger_instance=None) -> None:
        self.db_path = str(db_path or "").strip()
        self.table = _normalize_table(table)
        self.logger = logger_instance or logger

    def quotes_for(self, speaker_name: str) -> list[str]:
        if not self.db_path or not os.path.isfile(self.db_path):
            self.logger.debug("Quote DB not found; no backfill for %s", speaker_name)
            return []
        connection = None
        try:
            connection = sqlite3.connect(self.db_path)
            cursor = connection.execute(
                f'SELECT "tidbit" FROM "{self.table}" '
                "WHERE fact LIKE ? ESCAPE '!' ORDER BY ROWID",
                (f"{_escape_like(speaker_name)} quotes",),
            )
            quotes = [str(row[0]) for row in cursor.fetchall() if row[0]]
        except sqlite3.OperationalError as exc:
            self.logger.warning(
                "Quote lookup skipped for %s: %s (table=%s)",
                speaker_name,
                exc,
                self.table,
            )
            return []
        finally:
            if connection is not None:
                connection.close()
        self.logger.debug("Loaded %s quotes for %s", len(quotes), speaker_name)
        return quotes


class NullQuoteSource:
    def quotes_for(self, speaker_name: str) -> list[str]:
        _ = speaker_name
        return []


def _escape_like(value: str) -> str:
    return re.sub(r"([!%_])", r"!\1", str(value))


def _normalize_table(table: str) -> str:
    cleaned = re.sub(r"[^A-Za-z0-9_]", "", table or "factoid")
    return cleaned or "factoid"
