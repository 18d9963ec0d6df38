"""hashcash.core.verifier

Five gates, then a commit. The first gate that fails decides the error.

    parse -> collision -> window -> ledger lookup -> resource policy -> ledger commit

The stamp's own ``bits`` field is never trusted. Only the configured
difficulty counts.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from hashcash.core.difficulty import fingerprint, meets_difficulty
from hashcash.core.exceptions import (
    LedgerError,
    NoCollisionError,
    ResourceError,
    SpentError,
    StampError,
    TimestampError,
)
from hashcash.core.models import HashcashConfig
from hashcash.core.policy import ResourcePolicy, as_policy
from hashcash.core.stamp import Stamp, parse
from hashcash.core.time import parse_stamp_time

logger = logging.getLogger(__name__)


class Verifier:
    def __init__(
        self,
        config: HashcashConfig,
        policy: ResourcePolicy | Callable[[str], bool] | None = None,
    ) -> None:
        self.config = config
        self.policy = as_policy(policy)

    def verify(self, text: str) -> bool:
        """Check ``text`` and mark it spent.

        Returns True once the fingerprint is committed to the ledger.

        Raises:
            InvalidHeaderError, NoCollisionError, TimestampError, SpentError,
            ResourceError: the stamp was rejected.
            LedgerError: the ledger failed; the stamp was not accepted.
        """

        fp = fingerprint(text)
        try:
            stamp = self._check(text, fp)
        except StampError as e:
            logger.info("stamp_rejected", extra={"fingerprint": fp, "code": e.code})
            raise

        logger.info("stamp_accepted", extra={"fingerprint": fp, "resource": stamp.resource})
        return True

    def _check(self, text: str, fp: str) -> Stamp:
        stamp = parse(text)

        if not meets_difficulty(text, self.config.bits):
            raise NoCollisionError(f"stamp does not meet {self.config.bits} bits")

        self._check_window(stamp)

        ledger = self.config.ledger
        try:
            spent = ledger.spent(fp)
        except LedgerError:
            raise
        except Exception as e:
            raise LedgerError(f"ledger lookup failed: {e}") from e
        if spent:
            raise SpentError(f"stamp already spent: {fp}")

        if self.policy is not None and not self.policy.accepts(stamp.resource):
            raise ResourceError(f"resource rejected: {stamp.resource!r}")

        try:
            ledger.add(fp)
        except (SpentError, LedgerError):
            raise
        except Exception as e:
            raise LedgerError(f"ledger commit failed: {e}") from e
        return stamp

    def _check_window(self, stamp: Stamp) -> None:
        issued, _ = parse_stamp_time(stamp.date)
        horizon, future_bound = self.config.window()
        if issued < horizon:
            raise TimestampError(f"stamp expired: {stamp.date}")
        if issued > future_bound:
            raise TimestampError(f"stamp is from the future: {stamp.date}")
