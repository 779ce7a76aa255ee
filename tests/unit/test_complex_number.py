"""
Тесты для Complex — неизменяемого комплексного числа

Проверяемые инварианты:
1. Арифметика: (a / b) * b ≈ a, z^n ≈ z·z·…·z
2. Деление на ноль пропагирует NaN/Inf без исключений
3. Главная ветвь для sqrt/log/power, angle ∈ (-π, π]
4. Парсинг текстовой записи и ComplexParseError
5. Immutability value type
"""

import cmath
import dataclasses
import math

import pytest

from src.core.math.complex_number import (
    I,
    NEG_I,
    NEG_ONE,
    ONE,
    ZERO,
    Complex,
    ComplexParseError,
    PolarForm,
)

SAMPLES = [
    Complex(3.0, 4.0),
    Complex(-1.5, 0.25),
    Complex(0.0, -2.0),
    Complex(1.2, -0.7),
    Complex(-0.3, -0.9),
    Complex(10.0, 0.0),
]


def assert_close(actual: Complex, expected: complex, tol: float = 1e-9) -> None:
    assert abs(actual.real - expected.real) < tol, f"{actual} != {expected}"
    assert abs(actual.imag - expected.imag) < tol, f"{actual} != {expected}"


# =============================================================================
# ТЕСТЫ: Базовые свойства
# =============================================================================


class TestProperties:
    """magnitude / angle / conjugate / polar"""

    def test_magnitude_3_4_5(self):
        assert Complex(3, 4).magnitude() == pytest.approx(5.0)

    def test_angle_range(self):
        """atan2: угол отрицательной вещественной оси равен π"""
        assert Complex(-1, 0).angle() == pytest.approx(math.pi)
        assert Complex(0, 1).angle() == pytest.approx(math.pi / 2)
        assert Complex(0, -1).angle() == pytest.approx(-math.pi / 2)
        for z in SAMPLES:
            assert -math.pi <= z.angle() <= math.pi

    def test_conjugate(self):
        assert Complex(1, 2).conjugate() == Complex(1, -2)

    def test_to_polar(self):
        polar = Complex(0, 2).to_polar()
        assert isinstance(polar, PolarForm)
        assert polar.magnitude == pytest.approx(2.0)
        assert polar.angle == pytest.approx(math.pi / 2)

    def test_from_polar_inverse(self):
        for z in SAMPLES:
            polar = z.to_polar()
            assert Complex.from_polar(polar.magnitude, polar.angle).equals(z, 1e-12)

    def test_components_stored_as_float(self):
        z = Complex(3, 4)
        assert isinstance(z.real, float)
        assert isinstance(z.imag, float)

    def test_constants(self):
        assert ZERO == Complex(0, 0)
        assert ONE == Complex(1, 0)
        assert I == Complex(0, 1)
        assert NEG_I == Complex(0, -1)
        assert NEG_ONE == Complex(-1, 0)


# =============================================================================
# ТЕСТЫ: Арифметика
# =============================================================================


class TestArithmetic:
    """add / subtract / multiply / divide / power"""

    def test_add_subtract(self):
        assert Complex(1, 2).add(Complex(3, 4)) == Complex(4, 6)
        assert Complex(1, 2).subtract(Complex(3, 4)) == Complex(-2, -2)

    def test_multiply_scalar(self):
        assert Complex(1, -2).multiply(3) == Complex(3, -6)

    def test_multiply_complex(self):
        """(1+2i)(3+4i) = -5 + 10i"""
        assert Complex(1, 2).multiply(Complex(3, 4)) == Complex(-5, 10)

    def test_i_squared(self):
        assert I.multiply(I) == NEG_ONE

    def test_divide_scalar(self):
        assert Complex(4, -2).divide(2) == Complex(2, -1)

    def test_divide_complex(self):
        """(-5 + 10i) / (3 + 4i) = 1 + 2i"""
        assert Complex(-5, 10).divide(Complex(3, 4)).equals(Complex(1, 2))

    def test_divide_then_multiply_roundtrip(self):
        """(a / b) * b ≈ a для ненулевого b"""
        for a in SAMPLES:
            for b in SAMPLES:
                assert a.divide(b).multiply(b).equals(a, 1e-9)

    def test_power_matches_repeated_multiplication(self):
        """z^n ≈ z·z·…·z для целых n >= 0"""
        for z in SAMPLES + [ZERO, ONE]:
            product = ONE
            for n in range(0, 7):
                expected = product
                actual = z.power(n)
                tol = 1e-9 * max(1.0, expected.magnitude())
                assert actual.equals(expected, tol), f"{z}^{n}: {actual} != {expected}"
                product = product.multiply(z)

    def test_power_negative_exponent(self):
        assert Complex(0, 2).power(-1).equals(Complex(0, -0.5))

    def test_power_fractional_principal_branch(self):
        """(-8)^(1/3) — главная ветвь 1 + √3 i, а не -2"""
        root = Complex(-8, 0).power(1 / 3)
        assert root.equals(Complex(1.0, math.sqrt(3)), 1e-9)

    def test_operators_delegate(self):
        a = Complex(1, 2)
        b = Complex(3, 4)
        assert a + b == a.add(b)
        assert a - b == a.subtract(b)
        assert a * b == a.multiply(b)
        assert a / b == a.divide(b)
        assert 2 * a == Complex(2, 4)
        assert a + 1 == Complex(2, 2)
        assert 1 - a == Complex(0, -2)
        assert -a == Complex(-1, -2)
        assert abs(Complex(3, 4)) == pytest.approx(5.0)

    def test_builtin_interop(self):
        assert complex(Complex(1, 2)) == 1 + 2j
        assert Complex.from_builtin(3 - 1j) == Complex(3, -1)


# =============================================================================
# ТЕСТЫ: Численная деградация (без исключений)
# =============================================================================


class TestDegenerateInputs:
    """Деление на ноль и переполнения → NaN/Inf, не исключения"""

    def test_divide_by_zero_complex(self):
        result = Complex(1, 0).divide(ZERO)
        assert math.isnan(result.real)
        assert math.isnan(result.imag)
        assert not result.is_finite()

    def test_divide_by_zero_scalar(self):
        result = Complex(1, -2).divide(0)
        assert result.real == math.inf
        assert result.imag == -math.inf

    def test_operator_divide_by_zero(self):
        result = Complex(1, 1) / 0.0
        assert not result.is_finite()

    def test_power_of_zero_negative(self):
        result = ZERO.power(-1)
        assert result.real == math.inf

    def test_log_of_zero(self):
        assert ZERO.log().real == -math.inf

    def test_exp_overflow(self):
        assert Complex(1000, 0).exp().real == math.inf

    def test_sin_cos_overflow(self):
        assert not Complex(0.5, 1000).sin().is_finite()
        assert not Complex(0.5, 1000).cos().is_finite()


# =============================================================================
# ТЕСТЫ: Элементарные функции
# =============================================================================


class TestFunctions:
    """exp / sqrt / sin / cos / log против cmath"""

    def test_exp(self):
        for z in SAMPLES:
            assert_close(z.exp(), cmath.exp(complex(z)), 1e-9 * max(1.0, abs(cmath.exp(complex(z)))))

    def test_euler_identity(self):
        assert Complex(0, math.pi).exp().equals(NEG_ONE)

    def test_sqrt_principal(self):
        assert Complex(-4, 0).sqrt().equals(Complex(0, 2))
        for z in SAMPLES:
            root = z.sqrt()
            assert root.multiply(root).equals(z, 1e-9)

    def test_sin_cos(self):
        for z in SAMPLES:
            assert_close(z.sin(), cmath.sin(complex(z)))
            assert_close(z.cos(), cmath.cos(complex(z)))

    def test_log_principal(self):
        assert Complex(-1, 0).log().equals(Complex(0, math.pi))
        for z in SAMPLES:
            assert_close(z.log(), cmath.log(complex(z)))

    def test_log_exp_inverse(self):
        for z in SAMPLES:
            assert z.log().exp().equals(z, 1e-9)


# =============================================================================
# ТЕСТЫ: Парсинг
# =============================================================================


class TestFromString:
    """from_string: три грамматики и ComplexParseError"""

    def test_rectangular(self):
        z = Complex.from_string("3+4i")
        assert z.real == 3
        assert z.imag == 4
        assert z.magnitude() == pytest.approx(5.0)

    def test_rectangular_negative_imag(self):
        assert Complex.from_string("3-4i") == Complex(3, -4)
        assert Complex.from_string("-2.5-0.5i") == Complex(-2.5, -0.5)

    def test_omitted_unit_coefficient(self):
        assert Complex.from_string("2+i") == Complex(2, 1)
        assert Complex.from_string("2-i") == Complex(2, -1)
        assert Complex.from_string("i") == Complex(0, 1)
        assert Complex.from_string("-i") == Complex(0, -1)
        assert Complex.from_string("+i") == Complex(0, 1)

    def test_pure_imaginary(self):
        assert Complex.from_string("5i") == Complex(0, 5)
        assert Complex.from_string("-3i") == Complex(0, -3)

    def test_pure_real(self):
        assert Complex.from_string("7") == Complex(7, 0)
        assert Complex.from_string("-7") == Complex(-7, 0)
        assert Complex.from_string(".5") == Complex(0.5, 0)

    def test_whitespace_stripped(self):
        assert Complex.from_string("  3 + 4 i ") == Complex(3, 4)

    def test_invalid_raises_parse_error(self):
        for text in ["not-a-number", "", "3+4", "i3", "3+4j", "1e5", "3++4i", "--1", "ii"]:
            with pytest.raises(ComplexParseError, match="Invalid complex number format"):
                Complex.from_string(text)

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            Complex.from_string("not-a-number")


# =============================================================================
# ТЕСТЫ: Форматирование и сравнение
# =============================================================================


class TestFormattingAndEquality:
    """to_string / equals / immutability"""

    def test_to_string_rectangular(self):
        assert Complex(3, 4).to_string() == "3+4i"
        assert Complex(3, -4).to_string() == "3-4i"
        assert Complex(7, 0).to_string() == "7"
        assert Complex(0, 5).to_string() == "5i"
        assert Complex(0, 1).to_string() == "i"
        assert Complex(0, -1).to_string() == "-i"
        assert Complex(2, 1).to_string() == "2+i"
        assert Complex(2.5, -1).to_string() == "2.5-i"
        assert str(Complex(1, 2)) == "1+2i"

    def test_to_string_polar(self):
        assert Complex(3, 4).to_string("polar") == "5.000∠53.1°"

    def test_to_string_unknown_format(self):
        with pytest.raises(ValueError, match="Unknown format"):
            Complex(1, 1).to_string("euler")

    def test_string_roundtrip(self):
        for z in [Complex(3, 4), Complex(-2, -1), Complex(0, 5), Complex(7, 0)]:
            assert Complex.from_string(z.to_string()) == z

    def test_equals_default_epsilon(self):
        assert Complex(1, 1).equals(Complex(1 + 1e-11, 1 - 1e-11))
        assert not Complex(1, 1).equals(Complex(1 + 1e-9, 1))

    def test_equals_custom_epsilon(self):
        assert Complex(1, 1).equals(Complex(1.05, 1), epsilon=0.1)

    def test_equals_boundary_is_strict(self):
        """Разница ровно epsilon по компоненте — не равны"""
        assert not ZERO.equals(Complex(0.5, 0), epsilon=0.5)
        assert not ZERO.equals(Complex(0, 0.5), epsilon=0.5)
        assert ZERO.equals(Complex(0.25, -0.25), epsilon=0.5)

    def test_equals_nan_never_equal(self):
        nan = Complex(math.nan, 0)
        assert not nan.equals(nan)

    def test_immutable(self):
        z = Complex(1, 2)
        with pytest.raises(dataclasses.FrozenInstanceError):
            z.real = 5.0

    def test_operations_return_new_instances(self):
        z = Complex(1, 2)
        z.add(ONE)
        z.multiply(3)
        assert z == Complex(1, 2)

    def test_hashable(self):
        assert len({Complex(1, 2), Complex(1, 2), Complex(2, 1)}) == 2
