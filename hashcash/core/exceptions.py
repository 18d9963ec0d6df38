"""hashcash.core.exceptions

Errors are part of the interface.

Every rejection has its own type and a stable ``code``.
"""

from __future__ import annotations


class HashcashError(Exception):
    """Base exception for hashcash."""


class ConfigError(HashcashError):
    """Configuration is missing, invalid, or inconsistent."""


class InvalidConfigError(ConfigError):
    """Construction-time contract violated: bad bounds, missing ledger."""


class StampError(HashcashError):
    """A stamp was rejected by one of the verification gates."""

    code = "stamp"


class InvalidHeaderError(StampError):
    """Stamp text is not seven fields of a supported version."""

    code = "invalid_header"


class NoCollisionError(StampError):
    """Stamp digest does not carry the required leading zero bits."""

    code = "no_collision"


class TimestampError(StampError):
    """Stamp timestamp is unreadable or outside the accepted window."""

    code = "timestamp"


class ResourceError(StampError):
    """Resource policy rejected the stamped resource."""

    code = "resource"


class SpentError(StampError):
    """Stamp fingerprint is already in the ledger."""

    code = "spent"


class SolutionFail(HashcashError):
    """The current minting attempt did not meet the difficulty. Try again."""


class LedgerError(HashcashError):
    """The ledger adapter failed. Not a verdict on the stamp."""
