"""
arbint — arbitrary-precision signed integers.
"""

from arbint.core.domain import BigInteger, DivisionResult, IntWidth, maximum, minimum
from arbint.core.math import (
    BINARY,
    DECIMAL,
    HEXADECIMAL,
    OCTAL,
    Base,
    DivisionByZero,
    NegativeSquareRootError,
    PreconditionViolation,
    UnsupportedBaseError,
    base_of,
)

__version__ = "0.1.0"

__all__ = [
    "BigInteger",
    "DivisionResult",
    "IntWidth",
    "minimum",
    "maximum",
    "Base",
    "BINARY",
    "OCTAL",
    "DECIMAL",
    "HEXADECIMAL",
    "base_of",
    "PreconditionViolation",
    "UnsupportedBaseError",
    "NegativeSquareRootError",
    "DivisionByZero",
]
