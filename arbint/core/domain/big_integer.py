"""
BigInteger — целое число произвольной точности

Immutable Pydantic модель: знак + модуль в виде 32-битных слов
(младшее слово первым). Все операции возвращают новый экземпляр.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. words непуст
2. Нет лишних старших нулевых слов (кроме единственного представления нуля)
3. Ноль всегда неотрицателен (нет отрицательного нуля)
4. Экземпляр неизменяем после создания (frozen=True)

Все пути создания проходят через один валидатор нормализации
(normalize_representation), включая результаты арифметики.

ДЕЛЕНИЕ (усечение к нулю):
    dividend = quotient * divisor + remainder
    sign(quotient) = sign(dividend) XOR sign(divisor)
    sign(remainder) = sign(dividend), |remainder| < |divisor|

ПОБИТОВЫЕ ОПЕРАЦИИ: семантика дополнительного кода с бесконечным
знаковым расширением, ~x == -x - 1.
"""

import logging
import operator
from typing import Any, Final, Mapping, NamedTuple, Optional, Sequence, Union

from pydantic import BaseModel, Field, StrictInt, field_validator, model_validator

from arbint.core.domain.widths import INT64_MAX, INT64_MIN, UINT64_MAX, IntWidth
from arbint.core.math.bases import DECIMAL, Base, resolve_base
from arbint.core.math.errors import DivisionByZero, NegativeSquareRootError
from arbint.core.math.limbs import (
    LIMB_BASE,
    LIMB_BITS,
    LIMB_MASK,
    add_magnitudes,
    bitwise_combine,
    compare_magnitudes,
    divmod_magnitudes,
    hiword,
    is_zero_magnitude,
    loword,
    mul_magnitudes,
    normalize,
    sub_magnitudes,
)
from arbint.core.math.radix import digits_to_limbs, format_magnitude, parse_numeral

logger = logging.getLogger(__name__)


# =============================================================================
# ПАРАМЕТРЫ ХЭШИРОВАНИЯ
# =============================================================================

# Множитель позиционного смешивания слов: h = 31 * h + word
HASH_MULTIPLIER: Final[int] = 31

# Хэш приводится к знаковому 64-битному значению
_HASH_BITS: Final[int] = 64
_HASH_MASK: Final[int] = (1 << _HASH_BITS) - 1
_HASH_SIGN: Final[int] = 1 << (_HASH_BITS - 1)


# =============================================================================
# RESULT TYPES
# =============================================================================


class DivisionResult(NamedTuple):
    """Результат деления с остатком."""

    quotient: "BigInteger"
    remainder: "BigInteger"


# =============================================================================
# BIG INTEGER MODEL
# =============================================================================


class BigInteger(BaseModel):
    """
    Знаковое целое произвольной точности.

    Immutable модель (frozen=True). Операторы принимают BigInteger или int;
    сравнения определены только между экземплярами BigInteger.

    Операторы //, % и divmod() не определены: в Python они округляют вниз,
    а здесь деление усекает к нулю. Используйте divide().
    """

    # Только int: "0" или 0.0 не приводятся к слову
    words: tuple[StrictInt, ...] = Field(
        ..., min_length=1, description="32-битные слова модуля, младшее первым"
    )
    negative: bool = Field(default=False, description="Признак отрицательного числа")

    model_config = {"frozen": True}  # Immutable

    @model_validator(mode="before")
    @classmethod
    def normalize_representation(cls, data: Any) -> Any:
        """
        Единая точка нормализации: удаление старших нулей и знак нуля.
        """
        if not isinstance(data, dict):
            return data

        words = data.get("words", ())
        if not isinstance(words, (list, tuple)):
            return data

        words = tuple(normalize(words))
        negative = data.get("negative", False)
        if is_zero_magnitude(words):
            negative = False

        return {**data, "words": words, "negative": negative}

    @field_validator("words")
    @classmethod
    def validate_limb_range(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        """Каждое слово — 32-битное беззнаковое."""
        for limb in v:
            if not 0 <= limb <= LIMB_MASK:
                raise ValueError(f"limb {limb} outside [0, {LIMB_MASK}]")
        return v

    def model_copy(
        self, *, update: Optional[Mapping[str, Any]] = None, deep: bool = False
    ) -> "BigInteger":
        """
        Копия с заменой полей через полную валидацию.

        Стандартный model_copy не вызывает валидаторы, поэтому обновлённые
        поля здесь проходят ту же нормализацию, что и конструктор.
        """
        if not update:
            return self
        data = {"words": self.words, "negative": self.negative, **update}
        return type(self)(**data)

    # =========================================================================
    # КОНСТРУКТОРЫ
    # =========================================================================

    @classmethod
    def _make(cls, words: Sequence[int], negative: bool = False) -> "BigInteger":
        return cls(words=tuple(words), negative=negative)

    @classmethod
    def from_uint64(cls, value: int) -> "BigInteger":
        """
        Создание из беззнакового 64-битного значения.

        Raises:
            ValueError: Если value вне [0, 2**64 - 1]
        """
        if not 0 <= value <= UINT64_MAX:
            raise ValueError(f"value {value} outside uint64 range")
        return cls._make([loword(value), hiword(value)])

    @classmethod
    def from_int64(cls, value: int) -> "BigInteger":
        """
        Создание из знакового 64-битного значения.

        Модуль INT64_MIN (2**63) не помещается в int64, но помещается в два
        слова, поэтому обрабатывается без особого случая.

        Raises:
            ValueError: Если value вне [-2**63, 2**63 - 1]
        """
        if not INT64_MIN <= value <= INT64_MAX:
            raise ValueError(f"value {value} outside int64 range")
        magnitude = -value if value < 0 else value
        return cls._make([loword(magnitude), hiword(magnitude)], negative=value < 0)

    @classmethod
    def from_native(cls, value: int, width: Union[IntWidth, str]) -> "BigInteger":
        """
        Создание из нативного целого заданной ширины.

        Args:
            value: Значение
            width: Ширина (IntWidth или её имя, например 'int32')

        Raises:
            ValueError: Если value не представимо в width
        """
        width = IntWidth(width)
        if not width.contains(value):
            raise ValueError(f"value {value} outside {width.value} range")
        if width.is_signed:
            return cls.from_int64(value)
        return cls.from_uint64(value)

    @classmethod
    def from_int(cls, value: int) -> "BigInteger":
        """Создание из произвольного int Python (разбиение на слова)."""
        magnitude = -value if value < 0 else value
        words = [magnitude & LIMB_MASK]
        magnitude >>= LIMB_BITS
        while magnitude:
            words.append(magnitude & LIMB_MASK)
            magnitude >>= LIMB_BITS
        return cls._make(words, negative=value < 0)

    @classmethod
    def from_digits(
        cls,
        digits: Sequence[int],
        negative: bool = False,
        base: Union[Base, int] = DECIMAL,
    ) -> "BigInteger":
        """
        Создание из последовательности цифр, старшая цифра первой.

        Args:
            digits: Значения цифр в системе base
            negative: Признак отрицательного числа
            base: Система счисления (Base или основание)

        Raises:
            ValueError: Если цифра вне диапазона основания
            UnsupportedBaseError: Если основание не поддерживается

        Examples:
            >>> str(BigInteger.from_digits([1, 2, 3]))
            '123'
            >>> str(BigInteger.from_digits([1, 0], negative=True, base=16))
            '-16'
        """
        base = resolve_base(base)
        return cls._make(digits_to_limbs(digits, base.radix), negative=negative)

    @classmethod
    def from_string(
        cls,
        text: str,
        base: Union[Base, int] = DECIMAL,
    ) -> Optional["BigInteger"]:
        """
        Разбор строки в заданной системе счисления.

        Returns:
            BigInteger или None, если строка не является корректным числом

        Examples:
            >>> str(BigInteger.from_string(" -00123 "))
            '-123'
            >>> BigInteger.from_string("12x") is None
            True
        """
        base = resolve_base(base)
        parsed = parse_numeral(text, base)
        if parsed is None:
            return None
        digits, negative = parsed
        return cls.from_digits(digits, negative=negative, base=base)

    # =========================================================================
    # КОНВЕРСИИ
    # =========================================================================

    def _low_value(self) -> int:
        value = self.words[0]
        if len(self.words) == 2:
            value += self.words[1] * LIMB_BASE
        return value

    def to_int64(self) -> Optional[int]:
        """Значение как int64 или None, если вне диапазона."""
        if len(self.words) > 2:
            return None
        value = self._low_value()
        if self.negative and value == -INT64_MIN:
            return INT64_MIN
        if value <= INT64_MAX:
            return -value if self.negative else value
        return None

    def to_uint64(self) -> Optional[int]:
        """Значение как uint64 или None, если отрицательно или вне диапазона."""
        if len(self.words) > 2 or self.negative:
            return None
        return self._low_value()

    def to_native(self, width: Union[IntWidth, str]) -> Optional[int]:
        """
        Сужающая конверсия в нативную ширину.

        Returns:
            Значение или None, если оно не представимо в width
        """
        width = IntWidth(width)
        value = self.to_int64() if width.is_signed else self.to_uint64()
        if value is None or not width.contains(value):
            logger.debug("%s does not fit into %s", self, width.value)
            return None
        return value

    def to_float(self) -> float:
        """
        Приближение числом с плавающей точкой.

        Всегда выполнимо; для больших модулей теряется точность,
        за пределами диапазона float результат равен ±inf.
        """
        result = 0.0
        for limb in reversed(self.words):
            result = result * float(LIMB_BASE) + limb
        return -result if self.negative else result

    def to_string(self, base: Union[Base, int] = DECIMAL) -> str:
        """
        Строковое представление в системе base (по умолчанию десятичной).

        Examples:
            >>> BigInteger.from_int(-255).to_string(16)
            '-FF'
        """
        text = format_magnitude(self.words, resolve_base(base))
        return "-" + text if self.negative else text

    def debug_description(self) -> str:
        """Слова модуля для отладки: '{<число слов>: w0, w1, ...}'."""
        return "{%d: %s}" % (len(self.words), ", ".join(str(w) for w in self.words))

    # =========================================================================
    # ПРЕДИКАТЫ
    # =========================================================================

    @property
    def is_zero(self) -> bool:
        return is_zero_magnitude(self.words)

    @property
    def is_one(self) -> bool:
        return len(self.words) == 1 and self.words[0] == 1 and not self.negative

    @property
    def is_negative(self) -> bool:
        return self.negative

    # =========================================================================
    # СРАВНЕНИЕ И ХЭШ
    # =========================================================================

    def compare(self, other: Union["BigInteger", int]) -> int:
        """
        Трёхзначное сравнение.

        Сначала знак (отрицательное меньше), затем модуль; для
        отрицательных чисел порядок модулей обращён.

        Returns:
            -1 если self < other, 0 если равны, +1 если self > other
        """
        other = _require(other)
        if self.negative != other.negative:
            return -1 if self.negative else 1
        if self.negative:
            return compare_magnitudes(other.words, self.words)
        return compare_magnitudes(self.words, other.words)

    def stable_hash(self) -> int:
        """
        Позиционный хэш слов: h = 31 * h + word (знаковое 64-битное).

        Не зависит от PYTHONHASHSEED; равные значения дают равный хэш.
        """
        h = 0
        for limb in self.words:
            h = (HASH_MULTIPLIER * h + limb) & _HASH_MASK
        return h - (1 << _HASH_BITS) if h & _HASH_SIGN else h

    # =========================================================================
    # АРИФМЕТИКА
    # =========================================================================

    def negate(self) -> "BigInteger":
        return BigInteger._make(self.words, negative=not self.negative)

    def abs_value(self) -> "BigInteger":
        return BigInteger._make(self.words, negative=False)

    def add(self, other: Union["BigInteger", int]) -> "BigInteger":
        """Сумма; разные знаки сводятся к вычитанию."""
        other = _require(other)
        if self.negative != other.negative:
            return self.subtract(other.negate())
        return BigInteger._make(add_magnitudes(self.words, other.words), self.negative)

    def subtract(self, other: Union["BigInteger", int]) -> "BigInteger":
        """
        Разность; разные знаки сводятся к сложению.

        При одинаковых знаках больший модуль определяет уменьшаемое,
        знак результата меняется, если больше оказался правый операнд.
        """
        other = _require(other)
        if self.negative != other.negative:
            return self.add(other.negate())

        cmp = compare_magnitudes(self.words, other.words)
        if cmp == 0:
            return ZERO
        if cmp < 0:
            return BigInteger._make(
                sub_magnitudes(other.words, self.words), not self.negative
            )
        return BigInteger._make(sub_magnitudes(self.words, other.words), self.negative)

    def multiply(self, other: Union["BigInteger", int]) -> "BigInteger":
        other = _require(other)
        return BigInteger._make(
            mul_magnitudes(self.words, other.words), self.negative != other.negative
        )

    def divide(self, divisor: Union["BigInteger", int]) -> DivisionResult:
        """
        Деление с остатком (усечение к нулю).

        Правила знаков применяются после деления модулей, поэтому
        разнознаковые операнды равной длины обрабатываются корректно.

        Args:
            divisor: Ненулевой делитель

        Returns:
            DivisionResult(quotient, remainder)

        Raises:
            DivisionByZero: Если divisor равен нулю

        Examples:
            >>> q, r = BigInteger.from_int(-7).divide(2)
            >>> (str(q), str(r))
            ('-3', '-1')
        """
        divisor = _require(divisor)
        if divisor.is_zero:
            raise DivisionByZero(f"division of {self} by zero")

        quotient, remainder = divmod_magnitudes(self.words, divisor.words)
        return DivisionResult(
            quotient=BigInteger._make(quotient, self.negative != divisor.negative),
            remainder=BigInteger._make(remainder, self.negative),
        )

    def quotient(self, divisor: Union["BigInteger", int]) -> "BigInteger":
        return self.divide(divisor).quotient

    def remainder(self, divisor: Union["BigInteger", int]) -> "BigInteger":
        return self.divide(divisor).remainder

    def sqrt(self) -> "BigInteger":
        """
        Целая часть квадратного корня: наибольшее y, такое что y * y <= self.

        Итерация Герона от self / 2: y ← (x + y) / 2, x = self / y,
        пока оценки убывают.

        Raises:
            NegativeSquareRootError: Если self < 0
        """
        if self.negative:
            raise NegativeSquareRootError(f"cannot compute square root of {self}")
        if self.is_zero or self.is_one:
            return self

        y = self.quotient(TWO)
        x = self.quotient(y)
        while y.compare(x) > 0:
            y = x.add(y).quotient(TWO)
            x = self.quotient(y)
        return y

    def power(self, exponent: Union["BigInteger", int]) -> "BigInteger":
        """
        Возведение в неотрицательную степень (бинарное возведение).

        Raises:
            ValueError: Если exponent < 0
        """
        exponent = _require(exponent)
        if exponent.negative:
            raise ValueError(f"negative exponent {exponent}")

        bits: list[int] = []
        for limb in exponent.words:
            bits.extend((limb >> k) & 1 for k in range(LIMB_BITS))
        while bits and bits[-1] == 0:
            bits.pop()

        result = ONE
        square = self
        for i, bit in enumerate(bits):
            if bit:
                result = result.multiply(square)
            if i < len(bits) - 1:
                square = square.multiply(square)
        return result

    # =========================================================================
    # ПОБИТОВЫЕ ОПЕРАЦИИ
    # =========================================================================

    def _bitwise(self, other: Union["BigInteger", int], op: Any) -> "BigInteger":
        other = _require(other)
        words, negative = bitwise_combine(
            self.words, self.negative, other.words, other.negative, op
        )
        return BigInteger._make(words, negative)

    def and_(self, other: Union["BigInteger", int]) -> "BigInteger":
        return self._bitwise(other, operator.and_)

    def or_(self, other: Union["BigInteger", int]) -> "BigInteger":
        return self._bitwise(other, operator.or_)

    def xor(self, other: Union["BigInteger", int]) -> "BigInteger":
        return self._bitwise(other, operator.xor)

    def invert(self) -> "BigInteger":
        """~x == -(x + 1)"""
        return self.add(ONE).negate()

    # =========================================================================
    # PYTHON PROTOCOLS
    # =========================================================================

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"BigInteger('{self.to_string()}')"

    def __hash__(self) -> int:
        return self.stable_hash()

    def __bool__(self) -> bool:
        return not self.is_zero

    def __int__(self) -> int:
        value = 0
        for limb in reversed(self.words):
            value = (value << LIMB_BITS) | limb
        return -value if self.negative else value

    def __float__(self) -> float:
        return self.to_float()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BigInteger):
            return NotImplemented
        return self.compare(other) == 0

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, BigInteger):
            return NotImplemented
        return self.compare(other) != 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, BigInteger):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, BigInteger):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, BigInteger):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, BigInteger):
            return NotImplemented
        return self.compare(other) >= 0

    def __neg__(self) -> "BigInteger":
        return self.negate()

    def __pos__(self) -> "BigInteger":
        return self

    def __abs__(self) -> "BigInteger":
        return self.abs_value()

    def __invert__(self) -> "BigInteger":
        return self.invert()

    def __add__(self, other: Any) -> "BigInteger":
        other = _coerce(other)
        return NotImplemented if other is None else self.add(other)

    def __radd__(self, other: Any) -> "BigInteger":
        other = _coerce(other)
        return NotImplemented if other is None else other.add(self)

    def __sub__(self, other: Any) -> "BigInteger":
        other = _coerce(other)
        return NotImplemented if other is None else self.subtract(other)

    def __rsub__(self, other: Any) -> "BigInteger":
        other = _coerce(other)
        return NotImplemented if other is None else other.subtract(self)

    def __mul__(self, other: Any) -> "BigInteger":
        other = _coerce(other)
        return NotImplemented if other is None else self.multiply(other)

    def __rmul__(self, other: Any) -> "BigInteger":
        other = _coerce(other)
        return NotImplemented if other is None else other.multiply(self)

    def __pow__(self, exponent: Any, modulo: Any = None) -> "BigInteger":
        exponent = _coerce(exponent)
        if exponent is None or modulo is not None:
            return NotImplemented
        return self.power(exponent)

    def __rpow__(self, base: Any) -> "BigInteger":
        base = _coerce(base)
        return NotImplemented if base is None else base.power(self)

    def __and__(self, other: Any) -> "BigInteger":
        other = _coerce(other)
        return NotImplemented if other is None else self.and_(other)

    __rand__ = __and__

    def __or__(self, other: Any) -> "BigInteger":
        other = _coerce(other)
        return NotImplemented if other is None else self.or_(other)

    __ror__ = __or__

    def __xor__(self, other: Any) -> "BigInteger":
        other = _coerce(other)
        return NotImplemented if other is None else self.xor(other)

    __rxor__ = __xor__


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

ZERO: Final[BigInteger] = BigInteger(words=(0,))
ONE: Final[BigInteger] = BigInteger(words=(1,))
TWO: Final[BigInteger] = BigInteger(words=(2,))


# =============================================================================
# HELPERS
# =============================================================================


def _coerce(value: Any) -> Optional[BigInteger]:
    """BigInteger или int → BigInteger; прочие типы → None."""
    if isinstance(value, BigInteger):
        return value
    if isinstance(value, int):
        return BigInteger.from_int(value)
    return None


def _require(value: Any) -> BigInteger:
    result = _coerce(value)
    if result is None:
        raise TypeError(f"expected BigInteger or int, got {type(value).__name__}")
    return result


def minimum(fst: BigInteger, snd: BigInteger) -> BigInteger:
    """Меньшее из двух; при равенстве возвращается fst."""
    return fst if fst.compare(snd) <= 0 else snd


def maximum(fst: BigInteger, snd: BigInteger) -> BigInteger:
    """Большее из двух; при равенстве возвращается fst."""
    return fst if fst.compare(snd) >= 0 else snd
