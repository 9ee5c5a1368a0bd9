"""SQLite-backed string key/value store for small client preferences."""

from __future__ import annotations

import sqlite3
import time
from pathlib import Path

DEFAULT_DB_PATH = Path.home() / ".text-refiner" / "storage.db"


class StorageError(Exception):
    """A read or write against the store failed."""


class KeyValueStore:
    """Persistent string-keyed, string-valued store (one row per key)."""

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at REAL NOT NULL
                )
            """)

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(str(self.db_path))

    def get_item(self, key: str) -> str | None:
        """Return the stored value, or None when the key is absent."""
        try:
            with self._connect() as conn:
                row = conn.execute(
                    "SELECT value FROM kv_store WHERE key = ?", (key,)
                ).fetchone()
        except sqlite3.Error as e:
            raise StorageError(f"Could not read {key!r}: {e}") from e
        return row[0] if row is not None else None

    def set_item(self, key: str, value: str) -> None:
        try:
            with self._connect() as conn:
                conn.execute(
                    """INSERT OR REPLACE INTO kv_store (key, value, updated_at)
                       VALUES (?, ?, ?)""",
                    (key, value, time.time()),
                )
        except sqlite3.Error as e:
            raise StorageError(f"Could not write {key!r}: {e}") from e

    def remove_item(self, key: str) -> None:
        try:
            with self._connect() as conn:
                conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
        except sqlite3.Error as e:
            raise StorageError(f"Could not remove {key!r}: {e}") from e

    def keys(self) -> list[str]:
        with self._connect() as conn:
            rows = conn.execute("SELECT key FROM kv_store ORDER BY key").fetchall()
        return [row[0] for row in rows]

    def clear(self) -> int:
        """Remove every entry. Returns count of deleted rows."""
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM kv_store")
            return cursor.rowcount
