"""
Core math modules для arbint

Примитивы над массивами 32-битных слов, системы счисления и перевод между ними.
"""

# Errors
from arbint.core.math.errors import (
    DivisionByZero,
    NegativeSquareRootError,
    PreconditionViolation,
    UnsupportedBaseError,
)

# Limbs
from arbint.core.math.limbs import (
    LIMB_BASE,
    LIMB_BITS,
    LIMB_MASK,
    add_magnitudes,
    bitwise_combine,
    compare_magnitudes,
    divmod_magnitudes,
    divmod_word,
    mul_magnitudes,
    normalize,
    sub_magnitudes,
)

# Bases
from arbint.core.math.bases import (
    BINARY,
    DECIMAL,
    HEXADECIMAL,
    OCTAL,
    SUPPORTED_RADICES,
    Base,
    base_of,
    resolve_base,
)

# Radix conversion
from arbint.core.math.radix import (
    RadixPlan,
    digits_to_limbs,
    format_magnitude,
    parse_numeral,
    plan_radix,
)

__all__ = [
    # Errors
    "PreconditionViolation",
    "UnsupportedBaseError",
    "NegativeSquareRootError",
    "DivisionByZero",
    # Limbs — Constants
    "LIMB_BITS",
    "LIMB_BASE",
    "LIMB_MASK",
    # Limbs — Functions
    "normalize",
    "compare_magnitudes",
    "add_magnitudes",
    "sub_magnitudes",
    "mul_magnitudes",
    "divmod_magnitudes",
    "divmod_word",
    "bitwise_combine",
    # Bases
    "Base",
    "BINARY",
    "OCTAL",
    "DECIMAL",
    "HEXADECIMAL",
    "SUPPORTED_RADICES",
    "base_of",
    "resolve_base",
    # Radix conversion
    "RadixPlan",
    "plan_radix",
    "digits_to_limbs",
    "format_magnitude",
    "parse_numeral",
]
