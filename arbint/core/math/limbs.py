"""
Limbs — арифметика над массивами 32-битных слов

Модуль содержит примитивы над модулями (magnitude) больших целых чисел.
Модуль числа хранится как список 32-битных беззнаковых слов (limbs),
младшее слово первым. Знак здесь не обрабатывается: правила знаков
применяются уровнем выше, в BigInteger.

Все функции возвращают новые списки и не изменяют аргументы
(кроме явно помеченных внутренних helpers деления).

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Нормализованный модуль непуст и не имеет старших нулевых слов,
   кроме единственного представления нуля [0]
2. Каждое слово лежит в диапазоне [0, LIMB_BASE)
3. Промежуточные суммы и произведения умещаются в 64 бита
"""

from typing import Callable, Final, Sequence

from arbint.core.math.errors import DivisionByZero

# =============================================================================
# ПАРАМЕТРЫ ПРЕДСТАВЛЕНИЯ
# =============================================================================

# Разрядность одного слова
LIMB_BITS: Final[int] = 32

# Основание позиционного представления: 2**32
LIMB_BASE: Final[int] = 1 << LIMB_BITS

# Маска младшего слова
LIMB_MASK: Final[int] = LIMB_BASE - 1

# Маска старшего бита слова (знаковый бит в дополнительном коде)
LIMB_SIGN_BIT: Final[int] = 1 << (LIMB_BITS - 1)


# =============================================================================
# СЛОВА 64 ↔ 32
# =============================================================================


def hiword(num: int) -> int:
    """Старшие 32 бита 64-битного значения."""
    return (num >> LIMB_BITS) & LIMB_MASK


def loword(num: int) -> int:
    """Младшие 32 бита 64-битного значения."""
    return num & LIMB_MASK


def joinwords(lword: int, hword: int) -> int:
    """Склейка двух слов в 64-битное значение."""
    return (hword << LIMB_BITS) + lword


# =============================================================================
# НОРМАЛИЗАЦИЯ
# =============================================================================


def strip_zeros(words: Sequence[int]) -> list[int]:
    """
    Удаление старших нулевых слов.

    В отличие от normalize может вернуть пустой список: используется
    там, где пустой остаток означает "слова закончились".
    """
    result = list(words)
    while result and result[-1] == 0:
        result.pop()
    return result


def normalize(words: Sequence[int]) -> list[int]:
    """
    Нормализация модуля числа.

    Args:
        words: Слова модуля (младшее первым), возможно со старшими нулями

    Returns:
        Список без лишних старших нулей; ноль представлен как [0]

    Examples:
        >>> normalize([5, 0, 0])
        [5]
        >>> normalize([])
        [0]
    """
    result = strip_zeros(words)
    return result if result else [0]


def is_zero_magnitude(words: Sequence[int]) -> bool:
    return len(words) == 1 and words[0] == 0


# =============================================================================
# СРАВНЕНИЕ МОДУЛЕЙ
# =============================================================================


def compare_magnitudes(a: Sequence[int], b: Sequence[int]) -> int:
    """
    Сравнение двух нормализованных модулей.

    Сначала по количеству слов, затем пословно от старшего к младшему.

    Returns:
        -1 если |a| < |b|, 0 если равны, +1 если |a| > |b|
    """
    if len(a) != len(b):
        return -1 if len(a) < len(b) else 1

    for i in range(len(a) - 1, -1, -1):
        if a[i] != b[i]:
            return -1 if a[i] < b[i] else 1

    return 0


# =============================================================================
# СЛОЖЕНИЕ И ВЫЧИТАНИЕ
# =============================================================================


def add_magnitudes(a: Sequence[int], b: Sequence[int]) -> list[int]:
    """
    Сложение модулей с переносом.

    Перенос проходит по короткому операнду, затем по остатку длинного;
    финальный перенос добавляется отдельным словом.
    """
    longer, shorter = (b, a) if len(a) < len(b) else (a, b)

    result: list[int] = []
    carry = 0

    for i in range(len(shorter)):
        carry += longer[i] + shorter[i]
        result.append(loword(carry))
        carry = hiword(carry)

    for i in range(len(shorter), len(longer)):
        carry += longer[i]
        result.append(loword(carry))
        carry = hiword(carry)

    if carry > 0:
        result.append(carry)

    return normalize(result)


def sub_magnitudes(a: Sequence[int], b: Sequence[int]) -> list[int]:
    """
    Вычитание модулей |a| - |b| с заёмом.

    Предусловие: |a| >= |b| (проверяется вызывающим через compare_magnitudes).

    Args:
        a: Уменьшаемое
        b: Вычитаемое

    Returns:
        Нормализованный модуль разности
    """
    result: list[int] = []
    borrow = 0

    for i in range(len(b)):
        if a[i] < b[i] + borrow:
            result.append(LIMB_BASE + a[i] - b[i] - borrow)
            borrow = 1
        else:
            result.append(a[i] - b[i] - borrow)
            borrow = 0

    # Остаточный заём проходит по старшим словам уменьшаемого
    for i in range(len(b), len(a)):
        if a[i] < borrow:
            result.append(LIMB_MASK)
            borrow = 1
        else:
            result.append(a[i] - borrow)
            borrow = 0

    return normalize(result)


# =============================================================================
# УМНОЖЕНИЕ
# =============================================================================


def mul_magnitudes(a: Sequence[int], b: Sequence[int]) -> list[int]:
    """
    Школьное умножение модулей, O(len(a) * len(b)).

    Внешний цикл по короткому операнду, внутренний по длинному; буфер
    результата имеет длину len(a) + len(b).
    """
    longer, shorter = (b, a) if len(a) < len(b) else (a, b)
    result = [0] * (len(longer) + len(shorter))

    for i, factor in enumerate(shorter):
        if factor == 0:
            continue
        carry = 0
        for j, limb in enumerate(longer):
            carry += result[i + j] + limb * factor
            result[i + j] = loword(carry)
            carry = hiword(carry)
        result[i + len(longer)] = carry

    return normalize(result)


# =============================================================================
# ДЕЛЕНИЕ
# =============================================================================


def _mult_sub(approx: int, divisor: Sequence[int], rem: list[int], offset: int) -> None:
    """Вычитает approx * divisor из rem начиная со слова offset (in-place)."""
    product = 0
    borrow = 0
    for j, limb in enumerate(divisor):
        product += limb * approx
        x = loword(product) + borrow
        if rem[offset + j] < x:
            rem[offset + j] = LIMB_BASE + rem[offset + j] - x
            borrow = 1
        else:
            rem[offset + j] -= x
            borrow = 0
        product = hiword(product)


def _sub_if_possible(divisor: Sequence[int], rem: list[int], offset: int) -> bool:
    """
    Однократно вычитает divisor из окна rem, если делитель в нём помещается.

    Returns:
        True если вычитание выполнено
    """
    i = len(divisor)
    while i > 0 and divisor[i - 1] >= rem[offset + i - 1]:
        if divisor[i - 1] > rem[offset + i - 1]:
            return False
        i -= 1

    borrow = 0
    for j, limb in enumerate(divisor):
        x = limb + borrow
        if rem[offset + j] < x:
            rem[offset + j] = LIMB_BASE + rem[offset + j] - x
            borrow = 1
        else:
            rem[offset + j] -= x
            borrow = 0
    return True


def divmod_magnitudes(
    dividend: Sequence[int],
    divisor: Sequence[int],
) -> tuple[list[int], list[int]]:
    """
    Деление модулей столбиком с пробными цифрами частного.

    Алгоритм:
        1. Делитель длиннее делимого → (0, делимое)
        2. Равная длина: сравнение МОДУЛЕЙ; равны → (1, 0), меньше → (0, делимое)
        3. Общий случай: буферы делимого и делителя дополняются нулевым
           сторожевым словом; оценка делителя = старшее слово + 1.
           Для каждой позиции частного (от старшей к младшей) 64-битное окно
           из двух слов остатка делится на оценку, пробная цифра умножается
           на делитель и вычитается; повторяется, пока пробная цифра > 0.
           Затем одно условное вычитание делителя добавляет последнюю единицу.

    Оценка старшее_слово + 1 никогда не превышает истинную цифру частного,
    поэтому цикл коррекции только добирает недостающее.

    Args:
        dividend: Нормализованный модуль делимого
        divisor: Нормализованный ненулевой модуль делителя

    Returns:
        (модуль частного, модуль остатка)

    Raises:
        DivisionByZero: Если делитель равен нулю
    """
    if is_zero_magnitude(divisor):
        raise DivisionByZero("division by zero")

    if len(divisor) > len(dividend):
        return [0], list(dividend)

    if len(divisor) == len(dividend):
        cmp = compare_magnitudes(dividend, divisor)
        if cmp == 0:
            return [1], [0]
        if cmp < 0:
            return [0], list(dividend)

    rem = list(dividend) + [0]
    divis = list(divisor) + [0]

    size_diff = len(dividend) - len(divisor)
    estimate = divisor[-1] + 1
    quotient = [0] * (size_diff + 1)
    top = len(rem) - 2

    while size_diff >= 0:
        window = joinwords(rem[top], rem[top + 1])
        approx = window // estimate
        digit = 0
        while approx > 0:
            digit += approx
            _mult_sub(approx, divis, rem, size_diff)
            window = joinwords(rem[top], rem[top + 1])
            approx = window // estimate
        if _sub_if_possible(divis, rem, size_diff):
            digit += 1
        quotient[size_diff] = digit
        top -= 1
        size_diff -= 1

    return normalize(quotient), normalize(rem)


def divmod_word(words: Sequence[int], divisor: int) -> tuple[list[int], int]:
    """
    Короткое деление модуля на одно слово.

    Args:
        words: Модуль делимого
        divisor: Делитель, 0 < divisor < LIMB_BASE

    Returns:
        (частное без старших нулей, возможно пустое; остаток)
    """
    quotient = [0] * len(words)
    rem = 0
    for i in range(len(words) - 1, -1, -1):
        x = joinwords(words[i], rem)
        quotient[i] = x // divisor
        rem = x % divisor
    return strip_zeros(quotient), rem


# =============================================================================
# ДОПОЛНИТЕЛЬНЫЙ КОД (для побитовых операций)
# =============================================================================


def to_twos_complement(words: Sequence[int], negative: bool, size: int) -> list[int]:
    """
    Модуль со знаком → дополнительный код фиксированной длины size слов.

    size должен превышать длину модуля хотя бы на одно слово, чтобы
    старший бит однозначно кодировал знак.
    """
    padded = list(words) + [0] * (size - len(words))
    if not negative:
        return padded

    result: list[int] = []
    carry = 1
    for limb in padded:
        carry += (~limb) & LIMB_MASK
        result.append(loword(carry))
        carry = hiword(carry)
    return result


def from_twos_complement(words: Sequence[int]) -> tuple[list[int], bool]:
    """
    Дополнительный код → (нормализованный модуль, признак отрицательности).
    """
    negative = bool(words[-1] & LIMB_SIGN_BIT)
    if not negative:
        return normalize(words), False

    result: list[int] = []
    carry = 1
    for limb in words:
        carry += (~limb) & LIMB_MASK
        result.append(loword(carry))
        carry = hiword(carry)
    return normalize(result), True


def bitwise_combine(
    a: Sequence[int],
    a_negative: bool,
    b: Sequence[int],
    b_negative: bool,
    op: Callable[[int, int], int],
) -> tuple[list[int], bool]:
    """
    Побитовая операция над двумя числами в семантике дополнительного кода.

    Оба операнда расширяются до общей длины + 1 слово (бесконечное
    знаковое расширение), комбинируются пословно и декодируются обратно.

    Args:
        a, b: Модули операндов
        a_negative, b_negative: Знаки операндов
        op: Пословная операция (operator.and_, operator.or_, operator.xor)

    Returns:
        (модуль результата, признак отрицательности)
    """
    size = max(len(a), len(b)) + 1
    lhs = to_twos_complement(a, a_negative, size)
    rhs = to_twos_complement(b, b_negative, size)
    combined = [op(x, y) & LIMB_MASK for x, y in zip(lhs, rhs)]
    return from_twos_complement(combined)
