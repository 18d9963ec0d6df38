"""hashcash.core.time

Stamp timestamps: ``YYMMDD[hhmm[ss]]``, UTC, most significant unit first.

This module is the *only* time helper surface in the codebase.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum

from hashcash.core.exceptions import TimestampError


class Granularity(Enum):
    """Encodable timestamp resolutions, coarsest first."""

    DAY = "%y%m%d"
    MINUTE = "%y%m%d%H%M"
    SECOND = "%y%m%d%H%M%S"

    @property
    def fmt(self) -> str:
        return self.value

    @property
    def width(self) -> int:
        # Every directive renders as two digits.
        return len(self.fmt)


_BY_WIDTH = {g.width: g for g in Granularity}


def utc_now() -> datetime:
    """Return an aware UTC datetime."""

    return datetime.now(tz=UTC)


def as_utc(dt: datetime) -> datetime:
    """Normalize to aware UTC. Naive datetimes are assumed to be UTC."""

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def truncate(dt: datetime, granularity: Granularity) -> datetime:
    dt = as_utc(dt)
    if granularity is Granularity.DAY:
        return dt.replace(hour=0, minute=0, second=0, microsecond=0)
    if granularity is Granularity.MINUTE:
        return dt.replace(second=0, microsecond=0)
    return dt.replace(microsecond=0)


def format_stamp_time(dt: datetime, granularity: Granularity = Granularity.SECOND) -> str:
    return as_utc(dt).strftime(granularity.fmt)


def parse_stamp_time(value: str) -> tuple[datetime, Granularity]:
    """Parse a stamp timestamp into the aware UTC start of the interval it encodes.

    Raises:
        TimestampError: not 6, 10 or 12 ASCII digits, or not a calendar date.
    """

    granularity = _BY_WIDTH.get(len(value))
    if granularity is None or not (value.isascii() and value.isdigit()):
        raise TimestampError(f"unreadable stamp timestamp: {value!r}")
    try:
        dt = datetime.strptime(value, granularity.fmt)
    except ValueError as e:
        raise TimestampError(f"unreadable stamp timestamp: {value!r}") from e
    return dt.replace(tzinfo=UTC), granularity


def coarsest_granularity(now: datetime, horizon: datetime) -> Granularity:
    """Pick the coarsest resolution whose truncation of ``now`` is not before ``horizon``."""

    for granularity in Granularity:
        if truncate(now, granularity) >= horizon:
            return granularity
    return Granularity.SECOND
