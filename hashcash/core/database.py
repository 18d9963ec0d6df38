"""hashcash.core.database

SQLite ledger of spent stamp fingerprints.

The primary key is the double-spend guard. SQLite serializes the insert.
"""

from __future__ import annotations

import logging
import sqlite3
import threading
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from hashcash.core.exceptions import LedgerError, SpentError
from hashcash.core.time import utc_now

logger = logging.getLogger(__name__)

SCHEMA = """
-- ============================================================
-- Schema Version Tracking
-- ============================================================
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY,
    applied_at TEXT DEFAULT (datetime('now'))
);

-- ============================================================
-- Spent stamps (insert-only, purged past the expiry horizon)
-- ============================================================
CREATE TABLE IF NOT EXISTS spent_stamps (
    fingerprint TEXT PRIMARY KEY,
    spent_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_spent_stamps_spent_at ON spent_stamps(spent_at);
"""

SCHEMA_VERSION = 1


def _dt_to_iso(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC).isoformat(timespec="microseconds")


@dataclass
class SqliteLedger:
    """Ledger adapter backed by a single SQLite file."""

    db_path: Path

    def __post_init__(self) -> None:
        self.db_path = Path(self.db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(self.db_path, check_same_thread=False)
        self._lock = threading.RLock()
        self._init_schema()

    def close(self) -> None:
        self.conn.close()

    def _init_schema(self) -> None:
        with self.conn:
            self.conn.executescript(SCHEMA)
            self.conn.execute("PRAGMA journal_mode=WAL")
            self.conn.execute("PRAGMA synchronous=NORMAL")
            self.conn.execute(
                "INSERT OR IGNORE INTO schema_version (version) VALUES (?)",
                (SCHEMA_VERSION,),
            )

    def add(self, fingerprint: str) -> None:
        try:
            with self._lock, self.conn:
                self.conn.execute(
                    "INSERT INTO spent_stamps (fingerprint, spent_at) VALUES (?, ?)",
                    (fingerprint, _dt_to_iso(utc_now())),
                )
        except sqlite3.IntegrityError as e:
            raise SpentError(f"fingerprint already spent: {fingerprint}") from e
        except sqlite3.Error as e:
            raise LedgerError(f"ledger write failed: {e}") from e

    def spent(self, fingerprint: str) -> bool:
        try:
            with self._lock:
                row = self.conn.execute(
                    "SELECT 1 FROM spent_stamps WHERE fingerprint = ?",
                    (fingerprint,),
                ).fetchone()
        except sqlite3.Error as e:
            raise LedgerError(f"ledger read failed: {e}") from e
        return row is not None

    def purge(self, before: datetime) -> int:
        """Delete fingerprints recorded before ``before``. Returns the count removed."""

        try:
            with self._lock, self.conn:
                cur = self.conn.execute(
                    "DELETE FROM spent_stamps WHERE spent_at < ?",
                    (_dt_to_iso(before),),
                )
        except sqlite3.Error as e:
            raise LedgerError(f"ledger purge failed: {e}") from e
        logger.info("ledger_purged", extra={"removed": cur.rowcount, "before": _dt_to_iso(before)})
        return int(cur.rowcount)

    def count(self) -> int:
        with self._lock:
            row = self.conn.execute("SELECT COUNT(*) FROM spent_stamps").fetchone()
        return int(row[0])
