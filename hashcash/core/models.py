"""hashcash.core.models

The configuration a minter and a verifier are built from.

The window is relative. It moves with the clock, so one config serves many calls.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from hashcash.core.difficulty import DIGEST_BITS
from hashcash.core.exceptions import InvalidConfigError
from hashcash.core.time import as_utc, utc_now

if TYPE_CHECKING:
    from hashcash.core.ledger import Ledger

DEFAULT_BITS = 20
DEFAULT_EXPIRY = timedelta(days=30)
DEFAULT_FUTURE = timedelta(days=2)
MIN_EXPIRY = timedelta(seconds=1)


@dataclass(frozen=True, slots=True)
class HashcashConfig:
    """Difficulty, acceptance window and ledger.

    Attributes:
        bits: Required leading zero bits.
        expiry: Oldest accepted stamp, as an offset before ``clock()``.
        future: Newest accepted stamp, as an offset after ``clock()``.
        ledger: Spent-fingerprint store.
        clock: Source of the current time.
    """

    ledger: Ledger | None = None
    bits: int = DEFAULT_BITS
    expiry: timedelta = DEFAULT_EXPIRY
    future: timedelta = DEFAULT_FUTURE
    clock: Callable[[], datetime] = field(default=utc_now, compare=False)

    def __post_init__(self) -> None:
        if self.ledger is None:
            raise InvalidConfigError("ledger is required")
        if isinstance(self.bits, bool) or not isinstance(self.bits, int):
            raise InvalidConfigError(f"bits must be an integer, got {self.bits!r}")
        if not 0 <= self.bits <= DIGEST_BITS:
            raise InvalidConfigError(f"bits must be within [0, {DIGEST_BITS}], got {self.bits}")
        if not isinstance(self.expiry, timedelta) or not isinstance(self.future, timedelta):
            raise InvalidConfigError("expiry and future must be timedelta offsets")
        # A minted timestamp is truncated to at most the second and never lies after now.
        if self.expiry < MIN_EXPIRY:
            raise InvalidConfigError(f"expiry must be at least {MIN_EXPIRY}, got {self.expiry}")
        if self.future < timedelta(0):
            raise InvalidConfigError(f"future must not be negative, got {self.future}")

    def now(self) -> datetime:
        """Read the clock as an aware UTC datetime. A naive reading is taken as UTC."""

        return as_utc(self.clock())

    def window(self, now: datetime | None = None) -> tuple[datetime, datetime]:
        """Return ``(horizon, future_bound)`` around ``now`` (default: the clock)."""

        ref = as_utc(now) if now is not None else self.now()
        return ref - self.expiry, ref + self.future
