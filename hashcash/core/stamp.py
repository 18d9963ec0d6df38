"""hashcash.core.stamp

The stamp codec.

    version:bits:date:resource:ext:rand:counter

Values are taken verbatim. What you parse is what you serialize.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from hashcash import STAMP_VERSION
from hashcash.core.exceptions import InvalidHeaderError

DELIMITER = ":"
FIELD_COUNT = 7

# Canonical decimal only, so re-serialization is byte-identical.
_BITS_RE = re.compile(r"^(0|[1-9][0-9]*)$")


@dataclass(frozen=True, slots=True)
class Stamp:
    """A hashcash v1 stamp."""

    bits: int
    date: str
    resource: str
    rand: str
    counter: str
    ext: str = ""
    version: int = STAMP_VERSION

    def __str__(self) -> str:
        return serialize(self)


def parse(text: str) -> Stamp:
    """Parse stamp text.

    Raises:
        InvalidHeaderError: wrong field count, unsupported version, or a
            non-canonical bits field.
    """

    fields = text.split(DELIMITER)
    if len(fields) != FIELD_COUNT:
        raise InvalidHeaderError(f"expected {FIELD_COUNT} fields, got {len(fields)}")

    version, bits, date, resource, ext, rand, counter = fields
    if version != str(STAMP_VERSION):
        raise InvalidHeaderError(f"unsupported stamp version: {version!r}")
    if not _BITS_RE.match(bits):
        raise InvalidHeaderError(f"bits field is not a decimal integer: {bits!r}")

    return Stamp(
        version=STAMP_VERSION,
        bits=int(bits),
        date=date,
        resource=resource,
        ext=ext,
        rand=rand,
        counter=counter,
    )


def serialize(stamp: Stamp) -> str:
    if stamp.bits < 0:
        raise InvalidHeaderError(f"bits must be >= 0, got {stamp.bits}")

    fields = [
        str(stamp.version),
        str(stamp.bits),
        stamp.date,
        stamp.resource,
        stamp.ext,
        stamp.rand,
        stamp.counter,
    ]
    for value in fields:
        if DELIMITER in value:
            raise InvalidHeaderError(f"stamp field contains {DELIMITER!r}: {value!r}")
    return DELIMITER.join(fields)
