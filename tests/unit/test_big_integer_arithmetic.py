"""
Тесты для арифметики BigInteger

Проверяет:
1. Законы группы и кольца (коммутативность, ассоциативность, дистрибутивность)
2. Тождество деления с усечением к нулю, знак остатка = знак делимого
3. DivisionByZero вместо неопределённого результата
4. Целый квадратный корень (Герон) и NegativeSquareRootError
5. Возведение в степень
6. Побитовые операции в дополнительном коде
7. Операторы Python с операндами int
"""

import math
import random
from typing import List

import pytest

from arbint import BigInteger, DivisionResult
from arbint.core.math.errors import (
    DivisionByZero,
    NegativeSquareRootError,
    PreconditionViolation,
)
from arbint.core.math.limbs import LIMB_MASK


def big(value: int) -> BigInteger:
    return BigInteger.from_int(value)


def truncated_divmod(a: int, b: int) -> tuple[int, int]:
    """Деление int с усечением к нулю (оракул)."""
    q = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        q = -q
    return q, a - q * b


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def rng() -> random.Random:
    """Детерминированный генератор для проверки законов."""
    return random.Random(20240101)


@pytest.fixture
def samples(rng: random.Random) -> List[int]:
    """Значения на границах слов и случайные значения разной длины."""
    edges = [
        0,
        1,
        -1,
        LIMB_MASK,
        -LIMB_MASK,
        LIMB_MASK + 1,
        2**63,
        -(2**63),
        2**64 - 1,
        -(2**96) + 1,
    ]
    randoms = [
        rng.getrandbits(rng.randint(1, 320)) * rng.choice([1, -1]) for _ in range(40)
    ]
    return edges + randoms


# =============================================================================
# КОНКРЕТНЫЕ СЦЕНАРИИ
# =============================================================================


class TestScenarios:
    """Контрольные примеры"""

    def test_add_mixed_signs(self) -> None:
        """123 + (-23) == 100"""
        assert big(123) + big(-23) == big(100)

    def test_divide_positive(self) -> None:
        """7 / 2 → (3, 1)"""
        assert big(7).divide(2) == DivisionResult(big(3), big(1))

    def test_divide_negative_dividend(self) -> None:
        """(-7) / 2 → (-3, -1); операнды одной длины и разных знаков"""
        result = big(-7).divide(big(2))
        assert result.quotient == big(-3)
        assert result.remainder == big(-1)
        assert result.quotient * 2 + result.remainder == big(-7)

    def test_divide_negative_divisor(self) -> None:
        result = big(7).divide(-2)
        assert (int(result.quotient), int(result.remainder)) == (-3, 1)

    def test_equal_length_mixed_sign_equal_magnitude(self) -> None:
        """Модули равны, знаки разные → (-1, 0)"""
        result = big(-(2**40)).divide(2**40)
        assert result == DivisionResult(big(-1), big(0))

    def test_equal_length_mixed_sign_smaller_magnitude(self) -> None:
        """|делимое| < |делитель| → (0, делимое)"""
        result = big(-5).divide(-9)
        assert result.quotient.is_zero
        assert result.remainder == big(-5)

    def test_quotient_and_remainder_helpers(self) -> None:
        assert big(100).quotient(7) == big(14)
        assert big(-100).remainder(7) == big(-2)


# =============================================================================
# СЛОЖЕНИЕ, ВЫЧИТАНИЕ, УМНОЖЕНИЕ
# =============================================================================


class TestGroupLaws:
    """Законы сложения и умножения"""

    def test_addition_commutative_and_associative(self, samples: List[int], rng: random.Random) -> None:
        for _ in range(200):
            x, y, z = (big(rng.choice(samples)) for _ in range(3))
            assert x + y == y + x
            assert (x + y) + z == x + (y + z)

    def test_additive_inverse(self, samples: List[int]) -> None:
        for value in samples:
            x = big(value)
            result = x + (-x)
            assert result.is_zero
            assert not result.is_negative

    def test_multiplication_laws(self, samples: List[int], rng: random.Random) -> None:
        for _ in range(200):
            x, y, z = (big(rng.choice(samples)) for _ in range(3))
            assert x * y == y * x
            assert x * (y + z) == x * y + x * z

    def test_against_int(self, samples: List[int]) -> None:
        """Результаты совпадают с арифметикой int"""
        for a in samples:
            for b in samples[::3]:
                assert int(big(a) + big(b)) == a + b
                assert int(big(a) - big(b)) == a - b
                assert int(big(a) * big(b)) == a * b

    def test_subtract_sign_flip(self) -> None:
        """Больший правый операнд меняет знак"""
        assert big(3) - big(10) == big(-7)
        assert big(-3) - big(-10) == big(7)
        assert big(-10) - big(-10) == big(0)

    def test_carry_across_limbs(self) -> None:
        assert int(big(LIMB_MASK) + 1) == 2**32
        assert int(big(-(2**64)) + 1) == -(2**64) + 1

    def test_multiply_sign(self) -> None:
        assert big(-3) * big(4) == big(-12)
        assert big(-3) * big(-4) == big(12)
        assert (big(-3) * 0).negative is False

    def test_unary(self) -> None:
        x = big(-42)
        assert -x == big(42)
        assert +x is x
        assert abs(x) == big(42)
        assert x.abs_value() == abs(x)
        assert x.negate().negate() == x


# =============================================================================
# ДЕЛЕНИЕ
# =============================================================================


class TestDivision:
    """Деление с усечением к нулю"""

    def test_identity(self, samples: List[int]) -> None:
        """x == q * y + r, sign(r) = sign(x), |r| < |y|"""
        for a in samples:
            for b in samples:
                if b == 0:
                    continue
                x, y = big(a), big(b)
                q, r = x.divide(y)
                assert q * y + r == x
                assert r.is_zero or r.is_negative == x.is_negative
                assert abs(r) < abs(y)
                assert (int(q), int(r)) == truncated_divmod(a, b)

    def test_zero_divisor_raises(self) -> None:
        with pytest.raises(DivisionByZero, match="by zero"):
            big(5).divide(big(0))

    def test_zero_divisor_is_zero_division_error(self) -> None:
        """DivisionByZero ловится как ZeroDivisionError и PreconditionViolation"""
        with pytest.raises(ZeroDivisionError):
            big(-5).quotient(0)
        with pytest.raises(PreconditionViolation):
            big(0).remainder(0)

    def test_zero_dividend(self) -> None:
        assert big(0).divide(-7) == DivisionResult(big(0), big(0))

    def test_floor_operators_not_provided(self) -> None:
        """//, % и divmod() не определены"""
        with pytest.raises(TypeError):
            big(7) // big(2)  # noqa: B018
        with pytest.raises(TypeError):
            big(7) % 2  # noqa: B018
        with pytest.raises(TypeError):
            divmod(big(7), big(2))


# =============================================================================
# КВАДРАТНЫЙ КОРЕНЬ
# =============================================================================


class TestSqrt:
    """Целый квадратный корень"""

    @pytest.mark.parametrize("value, expected", [(0, 0), (1, 1), (2, 1), (3, 1), (4, 2), (15, 3), (16, 4)])
    def test_small(self, value: int, expected: int) -> None:
        assert big(value).sqrt() == big(expected)

    def test_floor_property(self, rng: random.Random) -> None:
        """s * s <= x < (s + 1) * (s + 1)"""
        for _ in range(60):
            value = rng.getrandbits(rng.randint(1, 400))
            x = big(value)
            s = x.sqrt()
            assert s * s <= x < (s + 1) * (s + 1)
            assert int(s) == math.isqrt(value)

    def test_perfect_square(self) -> None:
        assert big(10**40).sqrt() == big(10**20)
        assert big(10**40 - 1).sqrt() == big(10**20 - 1)

    def test_negative_raises(self) -> None:
        with pytest.raises(NegativeSquareRootError):
            big(-4).sqrt()
        with pytest.raises(ValueError):
            big(-1).sqrt()


# =============================================================================
# ВОЗВЕДЕНИЕ В СТЕПЕНЬ
# =============================================================================


class TestPower:
    """Бинарное возведение в степень"""

    def test_against_int(self, rng: random.Random) -> None:
        for _ in range(30):
            base = rng.randint(-(2**40), 2**40)
            exponent = rng.randint(0, 20)
            assert int(big(base).power(exponent)) == base**exponent

    def test_zero_exponent(self) -> None:
        assert big(0) ** 0 == big(1)
        assert big(-9) ** 0 == big(1)

    def test_operators(self) -> None:
        assert big(3) ** 4 == big(81)
        assert big(-2) ** big(3) == big(-8)
        assert 2 ** big(100) == big(2**100)

    def test_large_exponent(self) -> None:
        """Показатель, занимающий больше одного слова"""
        assert big(1) ** (2**40) == big(1)
        assert big(-1) ** (2**40 + 1) == big(-1)

    def test_negative_exponent_raises(self) -> None:
        with pytest.raises(ValueError, match="negative exponent"):
            big(2).power(-1)

    def test_modular_pow_not_supported(self) -> None:
        with pytest.raises(TypeError):
            pow(big(2), 3, 5)


# =============================================================================
# ПОБИТОВЫЕ ОПЕРАЦИИ
# =============================================================================


class TestBitwise:
    """Дополнительный код с бесконечным знаковым расширением"""

    def test_against_int(self, samples: List[int]) -> None:
        for a in samples:
            for b in samples[::2]:
                assert int(big(a) & big(b)) == a & b
                assert int(big(a) | big(b)) == a | b
                assert int(big(a) ^ big(b)) == a ^ b

    def test_invert(self, samples: List[int]) -> None:
        for value in samples:
            assert int(~big(value)) == ~value
            assert ~~big(value) == big(value)

    def test_invert_all_ones_limb(self) -> None:
        """Старшее слово 0xFFFFFFFF не ломает инволюцию"""
        x = big(-LIMB_MASK)
        assert ~x == big(LIMB_MASK - 1)
        assert ~~x == x

    def test_idempotence_laws(self, samples: List[int]) -> None:
        for value in samples:
            x = big(value)
            assert x & x == x
            assert x | x == x
            assert (x ^ x).is_zero

    def test_result_sign(self) -> None:
        """AND: оба отрицательны; OR: хотя бы один; XOR: ровно один"""
        assert (big(-6) & big(-3)).is_negative
        assert not (big(-6) & big(3)).is_negative
        assert (big(-6) | big(3)).is_negative
        assert not (big(-6) ^ big(-3)).is_negative
        assert (big(-6) ^ big(3)).is_negative

    def test_non_negative_is_limbwise(self) -> None:
        a, b = 0xF0F0_F0F0_1234_5678, 0x0FF0_0000_FFFF
        assert (big(a) & big(b)).words == ((a & b) & LIMB_MASK, (a & b) >> 32)
        assert big(a).and_(b) == big(a & b)
        assert big(a).or_(b) == big(a | b)
        assert big(a).xor(b) == big(a ^ b)

    def test_reflected_operators(self) -> None:
        assert 12 & big(10) == big(8)
        assert 12 | big(3) == big(15)
        assert 12 ^ big(10) == big(6)


# =============================================================================
# ОПЕРАТОРЫ И ПРИВЕДЕНИЕ ТИПОВ
# =============================================================================


class TestOperatorCoercion:
    """Операнды int приводятся к BigInteger"""

    def test_reflected(self) -> None:
        assert 5 + big(3) == big(8)
        assert 5 - big(3) == big(2)
        assert 5 * big(-3) == big(-15)

    def test_unsupported_operand(self) -> None:
        with pytest.raises(TypeError):
            big(1) + 1.5  # noqa: B018
        with pytest.raises(TypeError):
            "1" * big(2)  # noqa: B018

    def test_method_rejects_foreign_type(self) -> None:
        with pytest.raises(TypeError, match="expected BigInteger or int"):
            big(1).add(2.0)  # type: ignore[arg-type]

    def test_values_unchanged(self) -> None:
        """Операции не изменяют операнды"""
        x, y = big(2**70), big(-3)
        _ = x + y, x * y, x.divide(y), x & y, ~x
        assert int(x) == 2**70
        assert int(y) == -3
