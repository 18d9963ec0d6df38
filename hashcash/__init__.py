"""hashcash — proof-of-work stamps.

Mint a stamp against a resource, verify it exactly once.
"""

from __future__ import annotations

__all__ = [
    "__version__",
    "STAMP_VERSION",
]

__version__ = "1.0.0"

# Wire format version. The only one this package reads or writes.
STAMP_VERSION = 1
