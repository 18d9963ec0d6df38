"""hashcash.core

Core primitives: codec, difficulty, minter, verifier, ledgers.
"""

from .exceptions import HashcashError
from .hashcash import Hashcash
from .ledger import Ledger, MemoryLedger
from .minter import Minter
from .models import HashcashConfig
from .stamp import Stamp, parse, serialize
from .verifier import Verifier

__all__ = [
    "HashcashError",
    "Hashcash",
    "HashcashConfig",
    "Ledger",
    "MemoryLedger",
    "Minter",
    "Stamp",
    "Verifier",
    "parse",
    "serialize",
]
