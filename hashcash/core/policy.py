"""hashcash.core.policy

Resource policy: which resources this verifier will accept stamps for.

The policy belongs to the caller. The verifier only asks.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@runtime_checkable
class ResourcePolicy(Protocol):
    def accepts(self, resource: str) -> bool: ...


@dataclass(frozen=True, slots=True)
class ExactResource:
    """Accept only stamps minted for ``value``."""

    value: str

    def accepts(self, resource: str) -> bool:
        return resource == self.value


@dataclass(frozen=True, slots=True)
class PredicatePolicy:
    """Wrap a plain ``str -> bool`` function."""

    fn: Callable[[str], bool]

    def accepts(self, resource: str) -> bool:
        return bool(self.fn(resource))


def as_policy(obj: ResourcePolicy | Callable[[str], bool] | None) -> ResourcePolicy | None:
    """Normalize ``None``, a policy object, or a callable into a policy (or None)."""

    if obj is None or isinstance(obj, ResourcePolicy):
        return obj
    if callable(obj):
        return PredicatePolicy(obj)
    raise TypeError(f"resource policy must be callable or define accepts(), got {type(obj).__name__}")
