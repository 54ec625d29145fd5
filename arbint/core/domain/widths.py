"""
IntWidth — нативные целочисленные типы фиксированной ширины

Диапазоны знаковых и беззнаковых целых 8/16/32/64 бит. Используются
конструктором BigInteger.from_native и сужающей конверсией to_native.
"""

from enum import Enum
from typing import Final


# =============================================================================
# ДИАПАЗОНЫ
# =============================================================================

INT64_MIN: Final[int] = -(1 << 63)
INT64_MAX: Final[int] = (1 << 63) - 1
UINT64_MAX: Final[int] = (1 << 64) - 1


# =============================================================================
# ENUMS
# =============================================================================


class IntWidth(str, Enum):
    """Нативная ширина целого"""

    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"

    @property
    def is_signed(self) -> bool:
        return not self.value.startswith("u")

    @property
    def bits(self) -> int:
        return int(self.value.lstrip("uint"))

    @property
    def min_value(self) -> int:
        return -(1 << (self.bits - 1)) if self.is_signed else 0

    @property
    def max_value(self) -> int:
        if self.is_signed:
            return (1 << (self.bits - 1)) - 1
        return (1 << self.bits) - 1

    def contains(self, value: int) -> bool:
        """Проверка, что value представимо в этой ширине."""
        return self.min_value <= value <= self.max_value
