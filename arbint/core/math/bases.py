"""
Bases — дескрипторы систем счисления

Фиксированный набор систем счисления для разбора и форматирования:
- BINARY (2)
- OCTAL (8)
- DECIMAL (10)
- HEXADECIMAL (16)

Дескрипторы создаются один раз при импорте модуля и больше не изменяются,
поэтому безопасны для конкурентного чтения без синхронизации.
Произвольные основания не поддерживаются: таблицы цифр проверены вручную.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Final, Mapping, Optional, Union

from arbint.core.math.errors import UnsupportedBaseError

# =============================================================================
# ТАБЛИЦЫ ЦИФР
# =============================================================================

# Символы цифр по значению; hex форматируется в верхнем регистре
_GLYPHS: Final[str] = "0123456789ABCDEF"

# Допустимые основания
SUPPORTED_RADICES: Final[tuple[int, ...]] = (2, 8, 10, 16)


# =============================================================================
# BASE DESCRIPTOR
# =============================================================================


@dataclass(frozen=True)
class Base:
    """
    Система счисления: основание, таблица символов и обратное отображение.

    glyphs[value] → символ цифры; digit_map[символ] → значение.
    digit_map дополнительно принимает строчные hex-символы.
    """

    radix: int
    glyphs: tuple[str, ...]
    digit_map: Mapping[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.radix not in SUPPORTED_RADICES:
            raise UnsupportedBaseError(f"unsupported base {self.radix}")

        if len(self.glyphs) != self.radix:
            raise ValueError(
                f"glyph table has {len(self.glyphs)} symbols, radix is {self.radix}"
            )

        mapping: dict[str, int] = {}
        for value, glyph in enumerate(self.glyphs):
            mapping[glyph] = value
            mapping.setdefault(glyph.lower(), value)

        # frozen dataclass: производное поле задаётся в обход __setattr__
        object.__setattr__(self, "digit_map", MappingProxyType(mapping))

    def digit_value(self, glyph: str) -> Optional[int]:
        """Значение цифры для символа или None, если символ не из этой системы."""
        return self.digit_map.get(glyph)

    def glyph(self, value: int) -> str:
        return self.glyphs[value]


def _make_base(radix: int) -> Base:
    return Base(radix=radix, glyphs=tuple(_GLYPHS[:radix]))


BINARY: Final[Base] = _make_base(2)
OCTAL: Final[Base] = _make_base(8)
DECIMAL: Final[Base] = _make_base(10)
HEXADECIMAL: Final[Base] = _make_base(16)

_BY_RADIX: Final[Mapping[int, Base]] = MappingProxyType(
    {
        2: BINARY,
        8: OCTAL,
        10: DECIMAL,
        16: HEXADECIMAL,
    }
)


# =============================================================================
# LOOKUP
# =============================================================================


def base_of(radix: int) -> Base:
    """
    Дескриптор системы счисления по основанию.

    Args:
        radix: Основание (2, 8, 10 или 16)

    Returns:
        Общий неизменяемый дескриптор Base

    Raises:
        UnsupportedBaseError: Для любого другого основания

    Examples:
        >>> base_of(16).radix
        16
        >>> base_of(3)
        Traceback (most recent call last):
            ...
        arbint.core.math.errors.UnsupportedBaseError: unsupported base 3
    """
    base = _BY_RADIX.get(radix)
    if base is None:
        raise UnsupportedBaseError(f"unsupported base {radix}")
    return base


def resolve_base(base: Union[Base, int]) -> Base:
    """Принимает дескриптор или число-основание."""
    if isinstance(base, Base):
        return base
    return base_of(base)
