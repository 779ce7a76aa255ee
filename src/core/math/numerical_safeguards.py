"""
Numerical Safeguards — численные примитивы геометрического ядра

Модуль собирает epsilon-параметры и мелкие float-утилиты, общие для
комплексной арифметики, поиска корней и marching squares:
- IEEE-754 деление без исключений (Python float бросает ZeroDivisionError)
- Проверки NaN/Inf
- Epsilon-сравнения float
- Линейная интерполяция и доля пересечения нуля
- Валидация параметров (итерации, толерантности, разрешение сетки)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Численная деградация (деление на ноль, NaN) НЕ бросает исключений,
   а пропагирует NaN/Inf по правилам IEEE-754
2. Исключения бросаются только для структурно невалидных аргументов
3. Все операции детерминированы и воспроизводимы
"""

import math
from typing import Final

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Толерантность покомпонентного сравнения комплексных чисел
EPS_COMPLEX_EQUALITY: Final[float] = 1e-10

# Порог близости значений в углах ячейки при интерполяции пересечения нуля
# Если |v1 - v0| < ZERO_FRACTION_EPS → доля пересечения = 0.5
ZERO_FRACTION_EPS: Final[float] = 1e-10

# Доля пересечения при почти равных значениях (середина ребра)
ZERO_FRACTION_FALLBACK: Final[float] = 0.5


# =============================================================================
# IEEE-754 ДЕЛЕНИЕ
# =============================================================================


def ieee_divide(numerator: float, denominator: float) -> float:
    """
    Деление float с семантикой IEEE-754 вместо ZeroDivisionError.

    Python бросает ZeroDivisionError для x / 0.0, тогда как ядро обязано
    пропагировать Inf/NaN (вызывающий код сам решает, что делать с
    вырожденным результатом).

    Args:
        numerator: Числитель
        denominator: Знаменатель

    Returns:
        numerator / denominator, либо:
        - ±inf если denominator == 0 и numerator != 0 (знак по IEEE-754,
          с учётом знака нуля в знаменателе)
        - nan если 0/0 или numerator is NaN

    Examples:
        >>> ieee_divide(6.0, 3.0)
        2.0
        >>> ieee_divide(1.0, 0.0)
        inf
        >>> ieee_divide(-1.0, 0.0)
        -inf
        >>> ieee_divide(1.0, -0.0)
        -inf
    """
    if denominator != 0.0:
        return numerator / denominator

    if math.isnan(numerator) or math.isnan(denominator) or numerator == 0.0:
        return math.nan

    sign = math.copysign(1.0, numerator) * math.copysign(1.0, denominator)
    return math.copysign(math.inf, sign)


# =============================================================================
# NaN/Inf ПРОВЕРКИ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение конечное, False если NaN или Inf
    """
    return math.isfinite(value)


# =============================================================================
# EPSILON-СРАВНЕНИЯ FLOAT
# =============================================================================


def is_within(a: float, b: float, epsilon: float) -> bool:
    """
    Абсолютное сравнение |a - b| < epsilon (строгое неравенство).

    NaN никогда не равен ничему, включая NaN.

    Examples:
        >>> is_within(1.0, 1.0 + 1e-12, 1e-10)
        True
        >>> is_within(1.0, 1.1, 1e-10)
        False
    """
    return abs(a - b) < epsilon


# =============================================================================
# ИНТЕРПОЛЯЦИЯ
# =============================================================================


def lerp(a: float, b: float, t: float) -> float:
    """Линейная интерполяция a + (b - a) * t."""
    return a + (b - a) * t


def zero_crossing_fraction(v0: float, v1: float, eps: float = ZERO_FRACTION_EPS) -> float:
    """
    Доля t ∈ [0, 1] на ребре, где линейная интерполяция v0→v1 пересекает ноль.

    Алгоритм:
        t = -v0 / (v1 - v0)
        При |v1 - v0| < eps → 0.5 (защита от деления на почти ноль)

    Результат НЕ клампится в [0, 1]: для рёбер без смены знака (что
    возможно при threshold-классификации) точка может выйти за ребро.

    Args:
        v0: Значение в начале ребра
        v1: Значение в конце ребра
        eps: Порог почти равных значений (default: ZERO_FRACTION_EPS)

    Returns:
        Доля пересечения нуля

    Examples:
        >>> zero_crossing_fraction(-1.0, 1.0)
        0.5
        >>> zero_crossing_fraction(-1.0, 3.0)
        0.25
        >>> zero_crossing_fraction(2.0, 2.0)
        0.5
    """
    delta = v1 - v0
    if abs(delta) < eps:
        return ZERO_FRACTION_FALLBACK
    return -v0 / delta


# =============================================================================
# ВАЛИДАЦИЯ И ПРОВЕРКИ
# =============================================================================


def validate_positive(value: float, name: str) -> None:
    """
    Валидация, что значение конечное и строго положительное.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Raises:
        ValueError: Если value <= 0 или NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")

    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")


def validate_positive_int(value: int, name: str) -> None:
    """
    Валидация, что значение — целое число >= 1.

    bool отклоняется явно (bool является подклассом int).

    Raises:
        ValueError: Если value не int или value < 1
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")

    if value < 1:
        raise ValueError(f"{name} must be >= 1, got {value}")


def validate_non_negative_int(value: int, name: str) -> None:
    """
    Валидация, что значение — целое число >= 0.

    Raises:
        ValueError: Если value не int или value < 0
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")

    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
