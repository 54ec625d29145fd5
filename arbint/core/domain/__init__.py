"""
Domain models and value objects.

Contains the BigInteger value type and native integer widths.
"""

from arbint.core.domain.big_integer import (
    HASH_MULTIPLIER,
    ONE,
    TWO,
    ZERO,
    BigInteger,
    DivisionResult,
    maximum,
    minimum,
)
from arbint.core.domain.widths import INT64_MAX, INT64_MIN, UINT64_MAX, IntWidth

__all__ = [
    # Widths
    "IntWidth",
    "INT64_MIN",
    "INT64_MAX",
    "UINT64_MAX",
    # BigInteger
    "BigInteger",
    "DivisionResult",
    "HASH_MULTIPLIER",
    "ZERO",
    "ONE",
    "TWO",
    "minimum",
    "maximum",
]
