"""SQLite-backed key-value table for OAuth tokens and cached identifiers."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Optional

GOOGLE_TOKENS_KEY = "google_tokens"
GOOGLE_SHEET_ID_KEY = "google_sheet_id"


class SQLiteStore:
    """Single-row-per-key configuration table with upsert semantics."""

    def __init__(self, db_path: str) -> None:
        self._db_path = Path(db_path)
        if self._db_path.parent and not self._db_path.parent.exists():
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS config (
                    key TEXT PRIMARY KEY,
                    value TEXT
                )
                """
            )

    def get(self, key: str) -> Optional[str]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT value FROM config WHERE key = ?", (key,)
            ).fetchone()
        if not row:
            return None
        return row["value"]

    def put(self, key: str, value: str) -> None:
        if not key:
            raise ValueError("Configuration entries require a non-empty key")

        # The connection context manager commits before returning.
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO config (key, value)
                VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
                """,
                (key, value),
            )


__all__ = ["GOOGLE_SHEET_ID_KEY", "GOOGLE_TOKENS_KEY", "SQLiteStore"]
