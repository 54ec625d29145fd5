"""
Precondition Violations — фатальные ошибки вызывающего кода

Нарушения контракта вызова, а не ошибки данных. Восстановимые ситуации
(невалидная строка, сужающая конверсия вне диапазона) сигнализируются
через None и сюда не относятся.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Неподдерживаемая система счисления → UnsupportedBaseError
2. Квадратный корень из отрицательного числа → NegativeSquareRootError
3. Деление на ноль → DivisionByZero (до входа в алгоритм деления)
"""


# =============================================================================
# EXCEPTIONS
# =============================================================================


class PreconditionViolation(Exception):
    """
    Базовый класс нарушений предусловий.

    Вызывающий код обязан проверять предусловия сам; перехватывать эти
    исключения для продолжения вычислений не предполагается.
    """
    pass


class UnsupportedBaseError(PreconditionViolation, ValueError):
    """Запрошена система счисления вне набора 2, 8, 10, 16."""
    pass


class NegativeSquareRootError(PreconditionViolation, ValueError):
    """Целочисленный квадратный корень определён только для x >= 0."""
    pass


class DivisionByZero(PreconditionViolation, ZeroDivisionError):
    """Делитель равен нулю."""
    pass
