"""SQLite backed key-value storage.

Each operation opens its own connection so the storage can be shared
between threads; a process-wide lock serialises access.
"""

from __future__ import annotations

import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Set

from loguru import logger

from .base import KeyValueStorage


class SQLiteStorage(KeyValueStorage):
    """Key-value storage in a single SQLite table."""

    def __init__(self, db_path: Path, enable_wal_mode: bool = True):
        """Initialize SQLite storage.

        Args:
            db_path: Path to the database file
            enable_wal_mode: Use SQLite WAL journal mode for better concurrency
        """
        self.db_path = Path(db_path)
        self.enable_wal_mode = enable_wal_mode
        self._lock = threading.RLock()

        # Create database directory if needed
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self._init_database()

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        """Open a connection that commits on success and is always closed."""
        conn = sqlite3.connect(self.db_path)
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    def _init_database(self) -> None:
        """Initialize the SQLite database with the required schema."""
        with self._connect() as conn:
            if self.enable_wal_mode:
                conn.execute("PRAGMA journal_mode=WAL")

            conn.execute("""
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)

        logger.info(f"Initialized key-value database at {self.db_path}")

    def get(self, key: str) -> Optional[str]:
        with self._lock, self._connect() as conn:
            row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
            return row[0] if row else None

    def put(self, key: str, value: str) -> None:
        with self._lock, self._connect() as conn:
            conn.execute(
                """
                INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                """,
                (key, value),
            )

    def remove(self, key: str) -> Optional[str]:
        with self._lock, self._connect() as conn:
            row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
            if row is None:
                return None

            conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            return row[0]

    def get_keys(self) -> Set[str]:
        with self._lock, self._connect() as conn:
            return {row[0] for row in conn.execute("SELECT key FROM kv_store")}

    def get_stats(self) -> dict:
        """Get storage statistics."""
        with self._lock, self._connect() as conn:
            total = conn.execute("SELECT COUNT(*) FROM kv_store").fetchone()[0]

        return {
            "db_path": str(self.db_path),
            "total_keys": total,
            "db_size_bytes": self.db_path.stat().st_size if self.db_path.exists() else 0,
        }
