"""
Radix Conversion — перевод между цифрами системы счисления и словами

- Разбор: строка → цифры (parse_numeral), цифры → слова (digits_to_limbs)
- Форматирование: слова → строка (format_magnitude)

Перевод цифр в слова — деление последовательности цифр столбиком на
LIMB_BASE: каждый проход выдаёт одно слово (остаток), частное становится
новой последовательностью цифр, пока она не опустеет.

Форматирование делит массив слов на наибольшую степень основания,
помещающуюся в слово (RadixPlan), и выводит остатки кусками фиксированной
ширины.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Sequence

from arbint.core.math.bases import Base
from arbint.core.math.limbs import (
    LIMB_BASE,
    LIMB_BITS,
    LIMB_MASK,
    divmod_word,
    is_zero_magnitude,
    normalize,
    strip_zeros,
)

logger = logging.getLogger(__name__)


# =============================================================================
# RADIX PLAN
# =============================================================================


@dataclass(frozen=True)
class RadixPlan:
    """
    Параметры форматирования для основания.

    chunk_power: наибольшая степень основания < LIMB_BASE
                 (None если уже первая степень не помещается в слово)
    chunk_digits: число цифр в одном куске (ширина дополнения нулями)
    """

    radix: int
    chunk_power: Optional[int]
    chunk_digits: int


@lru_cache(maxsize=None)
def plan_radix(radix: int) -> RadixPlan:
    """
    Наибольшая степень основания, умещающаяся в слово без переполнения.

    Examples:
        >>> plan_radix(10)
        RadixPlan(radix=10, chunk_power=1000000000, chunk_digits=9)
        >>> plan_radix(16).chunk_power == 16 ** 7
        True
    """
    power = 1
    digits = 0
    while power * radix < LIMB_BASE:
        power *= radix
        digits += 1

    if digits == 0:
        return RadixPlan(radix=radix, chunk_power=None, chunk_digits=1)

    return RadixPlan(radix=radix, chunk_power=power, chunk_digits=digits)


# =============================================================================
# ЦИФРЫ → СЛОВА
# =============================================================================


def digits_to_limbs(digits: Sequence[int], radix: int) -> list[int]:
    """
    Перевод последовательности цифр (старшая первой) в слова.

    Args:
        digits: Значения цифр, старшая первой
        radix: Основание системы счисления

    Returns:
        Нормализованный модуль (младшее слово первым); пустой ввод → [0]

    Raises:
        ValueError: Если цифра вне диапазона [0, radix)
    """
    for digit in digits:
        if not 0 <= digit < radix:
            raise ValueError(f"digit {digit} out of range for radix {radix}")

    pending = list(digits)
    limbs: list[int] = []

    while pending:
        quotient: list[int] = []
        acc = 0
        for digit in pending:
            acc = acc * radix + digit
            q = acc >> LIMB_BITS
            # старшие нули частного не сохраняем: последовательность сжимается
            if quotient or q:
                quotient.append(q)
            acc &= LIMB_MASK
        limbs.append(acc)
        pending = quotient

    return normalize(limbs)


# =============================================================================
# СЛОВА → СТРОКА
# =============================================================================


def _format_word(value: int, base: Base, width: int) -> str:
    """Одно слово в строку; width — минимальная ширина с дополнением нулями."""
    glyphs: list[str] = []
    count = 0
    while count < width or value > 0:
        glyphs.append(base.glyph(value % base.radix))
        value //= base.radix
        count += 1
    return "".join(reversed(glyphs))


def format_magnitude(words: Sequence[int], base: Base) -> str:
    """
    Модуль числа в строку заданной системы счисления (без знака).

    Старший кусок выводится без дополнения, остальные дополняются нулями
    до ширины RadixPlan.chunk_digits.

    Examples:
        >>> from arbint.core.math.bases import DECIMAL
        >>> format_magnitude([0, 1], DECIMAL)
        '4294967296'
    """
    if is_zero_magnitude(words):
        return base.glyph(0)

    plan = plan_radix(base.radix)
    chunks: list[str] = []

    if plan.chunk_power is None:
        last = len(words) - 1
        for i, limb in enumerate(words):
            chunks.append(_format_word(limb, base, plan.chunk_digits if i < last else 0))
    else:
        remaining = strip_zeros(words)
        while remaining:
            remaining, chunk = divmod_word(remaining, plan.chunk_power)
            chunks.append(_format_word(chunk, base, plan.chunk_digits if remaining else 0))

    return "".join(reversed(chunks))


# =============================================================================
# СТРОКА → ЦИФРЫ
# =============================================================================


def parse_numeral(text: str, base: Base) -> Optional[tuple[list[int], bool]]:
    """
    Разбор числа со знаком в цифры.

    Правила:
    - пробельные символы по краям игнорируются
    - необязательный знак '+' или '-'
    - ведущие нули схлопываются
    - разбор цифр останавливается на первом символе вне таблицы base;
      после него допустим только конец строки

    Args:
        text: Исходная строка
        base: Система счисления

    Returns:
        (цифры старшей первой, признак отрицательности) или None,
        если строка не является полным числом

    Examples:
        >>> from arbint.core.math.bases import DECIMAL
        >>> parse_numeral("  -0042 ", DECIMAL)
        ([4, 2], True)
        >>> parse_numeral("12x", DECIMAL) is None
        True
    """
    body = text.strip()
    negative = False

    if body[:1] in ("+", "-"):
        negative = body[0] == "-"
        body = body[1:]

    digits: list[int] = []
    for glyph in body:
        value = base.digit_value(glyph)
        if value is None:
            break
        digits.append(value)

    if not digits or len(digits) != len(body):
        logger.debug("Rejected numeral %r for radix %d", text, base.radix)
        return None

    start = 0
    while start < len(digits) - 1 and digits[start] == 0:
        start += 1

    return digits[start:], negative
