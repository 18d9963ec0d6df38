"""hashcash.core.difficulty

Work is measured in leading zero bits of SHA-1(stamp).
"""

from __future__ import annotations

import hashlib

DIGEST_BITS = 160


def digest(text: str) -> bytes:
    return hashlib.sha1(text.encode("utf-8")).digest()


def fingerprint(text: str) -> str:
    """Hex SHA-1 of the exact stamp text. The ledger key."""

    return hashlib.sha1(text.encode("utf-8")).hexdigest()


def leading_zero_bits(value: bytes) -> int:
    """Count zero bits from the most significant bit to the first set bit."""

    n = int.from_bytes(value, "big")
    return len(value) * 8 - n.bit_length()


def score(text: str) -> int:
    return leading_zero_bits(digest(text))


def meets_difficulty(text: str, bits: int) -> bool:
    return score(text) >= bits
