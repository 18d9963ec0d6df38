from __future__ import annotations

import pytest

from hashcash.core.exceptions import InvalidConfigError, ResourceError, SolutionFail, SpentError
from hashcash.core.hashcash import Hashcash
from hashcash.core.models import HashcashConfig


def _compute(hc: Hashcash) -> str:
    while True:
        try:
            return hc.compute()
        except SolutionFail:
            continue


def test_compute_then_verify(ledger) -> None:
    hc = Hashcash("someone@gmail.com", HashcashConfig(ledger=ledger, bits=10), lambda r: True)
    token = _compute(hc)
    assert token.startswith("1:10:")
    assert "someone@gmail.com" in token
    assert hc.verify(token) is True
    with pytest.raises(SpentError):
        hc.verify(token)


def test_minting_only_context_needs_no_policy(ledger) -> None:
    hc = Hashcash("someone@gmail.com", HashcashConfig(ledger=ledger, bits=6))
    assert hc.verifier.policy is None
    assert hc.verify(_compute(hc))


def test_policy_applies_to_verify(ledger) -> None:
    hc = Hashcash("someone@gmail.com", HashcashConfig(ledger=ledger, bits=6), lambda r: False)
    with pytest.raises(ResourceError):
        hc.verify(_compute(hc))


def test_bad_config_fails_fast() -> None:
    with pytest.raises(InvalidConfigError):
        Hashcash("someone@gmail.com", HashcashConfig())
