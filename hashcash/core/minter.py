"""hashcash.core.minter

The collision search, one hash at a time.

``attempt()`` never loops. The caller owns pacing, cancellation and
parallelism: run several minters with disjoint ``counter_start`` values and
keep the first stamp.
"""

from __future__ import annotations

import base64
import logging
import secrets

from hashcash.core.difficulty import fingerprint, meets_difficulty
from hashcash.core.exceptions import InvalidConfigError, SolutionFail
from hashcash.core.models import HashcashConfig
from hashcash.core.stamp import DELIMITER, Stamp, serialize
from hashcash.core.time import coarsest_granularity, format_stamp_time

logger = logging.getLogger(__name__)

SALT_BYTES = 8


def _b64(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii")


def encode_counter(value: int) -> str:
    """Counter field: base64 of the decimal counter."""

    return _b64(str(value).encode("ascii"))


class Minter:
    """Search for a stamp on ``resource`` meeting ``config.bits``.

    Salt and timestamp are fixed for the life of the instance. A caller that
    outlives the future tolerance window must build a new minter.
    """

    def __init__(self, resource: str, config: HashcashConfig, *, counter_start: int = 0) -> None:
        if DELIMITER in resource:
            raise InvalidConfigError(f"resource must not contain {DELIMITER!r}: {resource!r}")
        if counter_start < 0:
            raise InvalidConfigError(f"counter_start must be >= 0, got {counter_start}")

        self.resource = resource
        self.config = config

        now = config.now()
        horizon, _ = config.window(now)
        self.date = format_stamp_time(now, coarsest_granularity(now, horizon))
        self.rand = _b64(secrets.token_bytes(SALT_BYTES))

        # Everything but the counter is fixed; serialize it once.
        self._prefix = serialize(self._stamp(""))

        self._counter = counter_start
        self._attempts = 0
        self._solution: Stamp | None = None

    @property
    def attempts(self) -> int:
        return self._attempts

    @property
    def solved(self) -> bool:
        return self._solution is not None

    def _stamp(self, counter: str) -> Stamp:
        return Stamp(
            bits=self.config.bits,
            date=self.date,
            resource=self.resource,
            rand=self.rand,
            counter=counter,
        )

    @property
    def candidate(self) -> str:
        """Text of the stamp the next ``attempt()`` will score."""

        if self._solution is not None:
            return serialize(self._solution)
        return self._prefix + encode_counter(self._counter)

    def attempt(self) -> Stamp:
        """Score the current candidate once.

        Returns the frozen stamp on success (and on every call after it).

        Raises:
            SolutionFail: the candidate missed; the counter has advanced.
        """

        if self._solution is not None:
            return self._solution

        counter = encode_counter(self._counter)
        text = self._prefix + counter
        self._attempts += 1
        if meets_difficulty(text, self.config.bits):
            stamp = self._stamp(counter)
            self._solution = stamp
            logger.debug(
                "stamp_minted",
                extra={"fingerprint": fingerprint(text), "bits": self.config.bits, "attempts": self._attempts},
            )
            return stamp

        self._counter += 1
        raise SolutionFail(f"no solution at counter {self._counter - 1}")

    def solve(self, max_attempts: int) -> Stamp:
        """Call ``attempt()`` up to ``max_attempts`` times.

        Raises:
            SolutionFail: the budget ran out first.
        """

        for _ in range(max_attempts):
            try:
                return self.attempt()
            except SolutionFail:
                continue
        if self._solution is not None:
            return self._solution
        raise SolutionFail(f"no solution within {max_attempts} attempts")
