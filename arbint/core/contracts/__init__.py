"""
Wire contract for BigInteger.

JSON Schema (draft 2020-12) проверка текстовой записи числа и разбор её в
BigInteger.
"""

from .validators import (
    BIG_INTEGER_SCHEMA,
    BigIntegerValidator,
    ContractValidator,
    SchemaLoader,
    from_contract,
    to_contract,
    validate_big_integer,
)

__all__ = [
    "BIG_INTEGER_SCHEMA",
    # Validators
    "SchemaLoader",
    "ContractValidator",
    "BigIntegerValidator",
    # Conversion
    "validate_big_integer",
    "to_contract",
    "from_contract",
]
