"""hashcash.core.hashcash

One resource, one configuration: mint here, verify there.
"""

from __future__ import annotations

from collections.abc import Callable

from hashcash.core.minter import Minter
from hashcash.core.models import HashcashConfig
from hashcash.core.policy import ResourcePolicy
from hashcash.core.verifier import Verifier


class Hashcash:
    """Minting and verification context bound to ``resource``.

    ``policy`` only matters to :meth:`verify`. Minting-only callers leave it out.
    """

    def __init__(
        self,
        resource: str,
        config: HashcashConfig,
        policy: ResourcePolicy | Callable[[str], bool] | None = None,
    ) -> None:
        self.resource = resource
        self.config = config
        self.minter = Minter(resource, config)
        self.verifier = Verifier(config, policy)

    def compute(self) -> str:
        """One minting attempt. Raises SolutionFail until a stamp is found."""

        return str(self.minter.attempt())

    def verify(self, text: str) -> bool:
        return self.verifier.verify(text)
