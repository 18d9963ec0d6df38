"""hashcash.core.ledger

Replay protection. A fingerprint is spent once, forever.

Adapters must make ``add`` a linearizable insert-if-absent: of two racing
verifications of the same stamp, exactly one commit succeeds.
"""

from __future__ import annotations

import threading
from datetime import datetime
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from hashcash.core.exceptions import SpentError
from hashcash.core.time import utc_now

if TYPE_CHECKING:
    from hashcash.core.config import LedgerConfig


@runtime_checkable
class Ledger(Protocol):
    def add(self, fingerprint: str) -> None:
        """Record ``fingerprint`` as spent. Raises SpentError if already present."""
        ...

    def spent(self, fingerprint: str) -> bool:
        """Return True if ``fingerprint`` has been recorded."""
        ...


class MemoryLedger:
    """Process-local ledger. Lost on exit."""

    def __init__(self) -> None:
        self._spent: dict[str, datetime] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._spent)

    def add(self, fingerprint: str) -> None:
        with self._lock:
            if fingerprint in self._spent:
                raise SpentError(f"fingerprint already spent: {fingerprint}")
            self._spent[fingerprint] = utc_now()

    def spent(self, fingerprint: str) -> bool:
        with self._lock:
            return fingerprint in self._spent

    def purge(self, before: datetime) -> int:
        """Forget fingerprints recorded before ``before``. Returns the count removed."""

        with self._lock:
            stale = [fp for fp, at in self._spent.items() if at < before]
            for fp in stale:
                del self._spent[fp]
            return len(stale)


def open_ledger(config: LedgerConfig) -> Ledger:
    """Build the ledger adapter named by process settings."""

    if config.backend == "memory":
        return MemoryLedger()

    from hashcash.core.database import SqliteLedger

    return SqliteLedger(config.path)
