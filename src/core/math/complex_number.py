"""
Complex — неизменяемое комплексное число

Модуль реализует комплексную арифметику для ядра геометрии:
- Прямоугольная форма z = a + bi и полярная форма z = r·e^(iθ)
- Арифметика (add/subtract/multiply/divide/power)
- Элементарные функции (exp, sqrt, sin, cos, log) — главная ветвь
- Парсинг текстовой записи ("3+4i", "-2i", "7", "2-i")

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Complex — value type: каждая операция возвращает НОВЫЙ экземпляр
2. Деление на ноль НЕ бросает исключений: компоненты становятся Inf/NaN
   по правилам IEEE-754 (проверка делителя — ответственность вызывающего)
3. angle() ∈ (-π, π] (atan2), power/sqrt/log используют главную ветвь
4. Единственное исключение модуля — ComplexParseError для невалидного текста

ФОРМУЛЫ:
    (a+bi)(c+di) = (ac - bd) + (ad + bc)i
    (a+bi)/(c+di) = ((ac + bd) + (bc - ad)i) / (c² + d²)
    z^n = |z|^n · e^(i·n·arg z)
    exp(a+bi) = e^a (cos b + i sin b)
    sin(a+bi) = sin a cosh b + i cos a sinh b
    cos(a+bi) = cos a cosh b - i sin a sinh b
    log(z) = ln|z| + i·arg z
"""

import math
import re
from dataclasses import dataclass
from typing import Final, NamedTuple, Union

from src.core.math.numerical_safeguards import (
    EPS_COMPLEX_EQUALITY,
    ieee_divide,
    is_within,
)

# =============================================================================
# ТЕКСТОВАЯ ГРАММАТИКА
# =============================================================================

# Число без знака: "3", "3.", "3.25", ".5"
_NUMBER: Final[str] = r"(?:\d+(?:\.\d*)?|\.\d+)"

# "7", "-7", "+2.5"
_PURE_REAL_RE: Final[re.Pattern] = re.compile(rf"([+-]?{_NUMBER})")

# "5i", "-3i", "i", "+i"
_PURE_IMAG_RE: Final[re.Pattern] = re.compile(rf"([+-]?)({_NUMBER})?i")

# "3+4i", "3-4i", "-2+i"
_RECTANGULAR_RE: Final[re.Pattern] = re.compile(rf"([+-]?{_NUMBER})([+-])({_NUMBER})?i")


# =============================================================================
# EXCEPTIONS
# =============================================================================


class ComplexParseError(ValueError):
    """
    Текст не соответствует ни одной из грамматик комплексного числа.

    Принимаются только:
    - [sign]digits                   (чисто вещественное)
    - [sign][digits]i                (чисто мнимое)
    - [sign]digits(+|-)[digits]i     (прямоугольная форма)
    """
    pass


# =============================================================================
# POLAR FORM
# =============================================================================


class PolarForm(NamedTuple):
    """Полярное представление: magnitude >= 0, angle ∈ (-π, π]."""

    magnitude: float
    angle: float


# =============================================================================
# IEEE-754 ЭЛЕМЕНТАРНЫЕ ФУНКЦИИ
# =============================================================================
# math.exp/cosh/sinh бросают OverflowError, math.log(0) и math.sin(inf) — ValueError.
# Ядро обязано пропагировать Inf вместо исключений.


def _exp(x: float) -> float:
    try:
        return math.exp(x)
    except OverflowError:
        return math.inf


def _cosh(x: float) -> float:
    try:
        return math.cosh(x)
    except OverflowError:
        return math.inf


def _sinh(x: float) -> float:
    try:
        return math.sinh(x)
    except OverflowError:
        return math.copysign(math.inf, x)


def _sin(x: float) -> float:
    # math.sin(inf) бросает ValueError
    if math.isinf(x):
        return math.nan
    return math.sin(x)


def _cos(x: float) -> float:
    if math.isinf(x):
        return math.nan
    return math.cos(x)


def _ln(x: float) -> float:
    # x — модуль, поэтому x >= 0 или NaN
    if x == 0.0:
        return -math.inf
    return math.log(x)


def _pow(base: float, exponent: float) -> float:
    # base — модуль (>= 0). 0 ** (-n) в Python бросает ZeroDivisionError
    if base == 0.0 and exponent < 0:
        return math.inf
    try:
        return base**exponent
    except OverflowError:
        return math.inf


def _format_number(value: float) -> str:
    """Компактная запись float: 3.0 → "3", 2.5 → "2.5"."""
    if math.isfinite(value) and value.is_integer():
        return str(int(value))
    return repr(value)


# =============================================================================
# COMPLEX
# =============================================================================


@dataclass(frozen=True)
class Complex:
    """
    Комплексное число в прямоугольной форме.

    Immutable (frozen=True): все операции возвращают новый экземпляр,
    поэтому значения можно безопасно разделять между потоками.

    Точное равенство (==) сравнивает компоненты побитово; для результатов
    вычислений используйте equals() с толерантностью.
    """

    real: float
    imag: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "real", float(self.real))
        object.__setattr__(self, "imag", float(self.imag))

    # ===== Factory Methods =====

    @classmethod
    def from_polar(cls, magnitude: float, angle: float) -> "Complex":
        """
        Построение из полярной формы r·e^(iθ).

        Examples:
            >>> Complex.from_polar(2.0, 0.0)
            Complex(real=2.0, imag=0.0)
        """
        return cls(magnitude * _cos(angle), magnitude * _sin(angle))

    @classmethod
    def from_string(cls, text: str) -> "Complex":
        """
        Парсинг текстовой записи комплексного числа.

        Пробельные символы удаляются до разбора. Коэффициент 1 перед i
        может быть опущен ("i", "-i", "2+i").

        Args:
            text: Текст вида "3+4i", "3-4i", "5i", "-i", "7"

        Returns:
            Распознанное комплексное число

        Raises:
            ComplexParseError: Если текст не соответствует ни одной грамматике

        Examples:
            >>> Complex.from_string("3+4i")
            Complex(real=3.0, imag=4.0)
            >>> Complex.from_string(" - i ")
            Complex(real=0.0, imag=-1.0)
        """
        clean = re.sub(r"\s", "", text)

        match = _PURE_REAL_RE.fullmatch(clean)
        if match:
            return cls(float(match.group(1)), 0.0)

        match = _PURE_IMAG_RE.fullmatch(clean)
        if match:
            sign = -1.0 if match.group(1) == "-" else 1.0
            magnitude = float(match.group(2)) if match.group(2) else 1.0
            return cls(0.0, sign * magnitude)

        match = _RECTANGULAR_RE.fullmatch(clean)
        if match:
            real = float(match.group(1))
            sign = -1.0 if match.group(2) == "-" else 1.0
            magnitude = float(match.group(3)) if match.group(3) else 1.0
            return cls(real, sign * magnitude)

        raise ComplexParseError(f"Invalid complex number format: {text!r}")

    # ===== Conversion Methods =====

    def to_polar(self) -> PolarForm:
        return PolarForm(self.magnitude(), self.angle())

    def to_string(self, format: str = "rectangular") -> str:
        """
        Текстовое представление.

        Args:
            format: "rectangular" ("3+4i") или "polar" ("5.000∠53.1°")

        Raises:
            ValueError: Неизвестный формат
        """
        if format == "polar":
            polar = self.to_polar()
            return f"{polar.magnitude:.3f}∠{math.degrees(polar.angle):.1f}°"

        if format != "rectangular":
            raise ValueError(f"Unknown format: {format!r} (expected 'rectangular' or 'polar')")

        if self.imag == 0:
            return _format_number(self.real)

        if self.real == 0:
            if abs(self.imag) == 1:
                return "i" if self.imag > 0 else "-i"
            return f"{_format_number(self.imag)}i"

        sign = "+" if self.imag >= 0 else "-"
        imag_abs = abs(self.imag)
        imag_part = "i" if imag_abs == 1 else f"{_format_number(imag_abs)}i"
        return f"{_format_number(self.real)}{sign}{imag_part}"

    def __str__(self) -> str:
        return self.to_string()

    def __complex__(self) -> complex:
        return complex(self.real, self.imag)

    @classmethod
    def from_builtin(cls, value: complex) -> "Complex":
        """Конверсия из встроенного complex."""
        return cls(value.real, value.imag)

    # ===== Basic Properties =====

    def magnitude(self) -> float:
        return math.sqrt(self.real * self.real + self.imag * self.imag)

    def angle(self) -> float:
        """Аргумент atan2(imag, real) ∈ (-π, π]."""
        return math.atan2(self.imag, self.real)

    def conjugate(self) -> "Complex":
        return Complex(self.real, -self.imag)

    # ===== Arithmetic Operations =====

    def add(self, other: "Complex") -> "Complex":
        return Complex(self.real + other.real, self.imag + other.imag)

    def subtract(self, other: "Complex") -> "Complex":
        return Complex(self.real - other.real, self.imag - other.imag)

    def multiply(self, other: Union["Complex", float]) -> "Complex":
        """
        Умножение на вещественный скаляр или комплексное число.

        Скаляр масштабирует обе компоненты; комплексное умножение —
        (ac - bd) + (ad + bc)i.
        """
        if not isinstance(other, Complex):
            return Complex(self.real * other, self.imag * other)

        return Complex(
            self.real * other.real - self.imag * other.imag,
            self.real * other.imag + self.imag * other.real,
        )

    def divide(self, other: Union["Complex", float]) -> "Complex":
        """
        Деление на вещественный скаляр или комплексное число.

        Комплексное деление: умножение на сопряжённое и деление на |other|².

        ВАЖНО: Деление на ноль НЕ бросает исключений — компоненты
        результата становятся Inf/NaN по IEEE-754. Проверка делителя
        остаётся за вызывающим кодом.

        Examples:
            >>> Complex(1, 0).divide(Complex(0, 0))
            Complex(real=nan, imag=nan)
        """
        if not isinstance(other, Complex):
            return Complex(ieee_divide(self.real, other), ieee_divide(self.imag, other))

        denominator = other.real * other.real + other.imag * other.imag
        return Complex(
            ieee_divide(self.real * other.real + self.imag * other.imag, denominator),
            ieee_divide(self.imag * other.real - self.real * other.imag, denominator),
        )

    def power(self, n: float) -> "Complex":
        """
        Возведение в вещественную степень через полярную форму.

        (r·e^(iθ))^n = r^n · e^(inθ)

        Главная ветвь: для дробного n и отрицательных вещественных z
        результат — лишь один из алгебраических корней.
        """
        polar = self.to_polar()
        return Complex.from_polar(_pow(polar.magnitude, n), polar.angle * n)

    # ===== Complex Functions =====

    def exp(self) -> "Complex":
        exp_real = _exp(self.real)
        return Complex(exp_real * _cos(self.imag), exp_real * _sin(self.imag))

    def sqrt(self) -> "Complex":
        """Главный квадратный корень (половинный угол)."""
        polar = self.to_polar()
        return Complex.from_polar(math.sqrt(polar.magnitude), polar.angle / 2)

    def sin(self) -> "Complex":
        return Complex(
            _sin(self.real) * _cosh(self.imag),
            _cos(self.real) * _sinh(self.imag),
        )

    def cos(self) -> "Complex":
        return Complex(
            _cos(self.real) * _cosh(self.imag),
            -_sin(self.real) * _sinh(self.imag),
        )

    def log(self) -> "Complex":
        """Главная ветвь: ln|z| + i·arg z. log(0) = -inf + 0i."""
        polar = self.to_polar()
        return Complex(_ln(polar.magnitude), polar.angle)

    # ===== Utility =====

    def equals(self, other: "Complex", epsilon: float = EPS_COMPLEX_EQUALITY) -> bool:
        """
        Покомпонентное сравнение с абсолютной толерантностью.

        Точное равенство бессмысленно для производных float-результатов.
        NaN-компоненты никогда не равны.
        """
        return is_within(self.real, other.real, epsilon) and is_within(
            self.imag, other.imag, epsilon
        )

    def is_finite(self) -> bool:
        """True если обе компоненты конечны."""
        return math.isfinite(self.real) and math.isfinite(self.imag)

    # ===== Operators =====

    def __add__(self, other):
        if isinstance(other, (int, float)):
            other = Complex(other)
        if not isinstance(other, Complex):
            return NotImplemented
        return self.add(other)

    __radd__ = __add__

    def __sub__(self, other):
        if isinstance(other, (int, float)):
            other = Complex(other)
        if not isinstance(other, Complex):
            return NotImplemented
        return self.subtract(other)

    def __rsub__(self, other):
        if not isinstance(other, (int, float)):
            return NotImplemented
        return Complex(other).subtract(self)

    def __mul__(self, other):
        if not isinstance(other, (int, float, Complex)):
            return NotImplemented
        return self.multiply(other)

    __rmul__ = __mul__

    def __truediv__(self, other):
        if not isinstance(other, (int, float, Complex)):
            return NotImplemented
        return self.divide(other)

    def __rtruediv__(self, other):
        if not isinstance(other, (int, float)):
            return NotImplemented
        return Complex(other).divide(self)

    def __neg__(self) -> "Complex":
        return Complex(-self.real, -self.imag)

    def __abs__(self) -> float:
        return self.magnitude()


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

ZERO: Final[Complex] = Complex(0.0, 0.0)
ONE: Final[Complex] = Complex(1.0, 0.0)
I: Final[Complex] = Complex(0.0, 1.0)
NEG_I: Final[Complex] = Complex(0.0, -1.0)
NEG_ONE: Final[Complex] = Complex(-1.0, 0.0)
