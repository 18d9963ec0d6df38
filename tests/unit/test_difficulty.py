from __future__ import annotations

import pytest

from hashcash.core.difficulty import (
    DIGEST_BITS,
    digest,
    fingerprint,
    leading_zero_bits,
    meets_difficulty,
    score,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (b"\x80" + b"\x00" * 19, 0),
        (b"\xff" * 20, 0),
        (b"\x40", 1),
        (b"\x0f", 4),
        (b"\x00\x01", 15),
        (b"\x00\x00\x00\x10", 27),
        (b"\x00" * 20, 160),
    ],
)
def test_leading_zero_bits(value: bytes, expected: int) -> None:
    assert leading_zero_bits(value) == expected


def test_fingerprint_is_hex_sha1_of_exact_text() -> None:
    assert fingerprint("abc") == "a9993e364706816aba3e25717850c26c9cd0d89d"
    assert fingerprint("abc ") != fingerprint("abc")
    assert len(digest("abc")) * 8 == DIGEST_BITS


def test_score_is_deterministic() -> None:
    text = "1:20:180311205026:someone@gmail.com::2M6FmM7eRvw=:MjU5ODg5"
    assert score(text) == score(text)


def test_score_matches_digest_prefix() -> None:
    # SHA-1("abc") starts with 0xa9: the top bit is set.
    assert score("abc") == 0
    assert meets_difficulty("abc", 0)
    assert not meets_difficulty("abc", 1)


def test_difficulty_is_monotonic() -> None:
    for i in range(200):
        text = f"1:0:260101:r::salt:{i}"
        s = score(text)
        assert meets_difficulty(text, s)
        assert all(meets_difficulty(text, b) for b in range(s + 1))
        assert not meets_difficulty(text, s + 1)
