"""
ComplexPolynomial — многочлены с комплексными коэффициентами

Модуль обеспечивает:
- Вычисление P(z) накоплением степени z (не схема Горнера)
- Производную P'(z)
- Поиск всех корней методом Durand–Kerner (Weierstrass)
- Построение многочлена по корням

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. coefficients[k] — коэффициент при z^k; degree = len(coefficients) - 1 >= 0
2. Пустой список коэффициентов невалиден (ValueError)
3. find_roots() возвращает ровно degree корней; порядок не гарантируется
4. Вырожденные знаменатели (кластеризованные/кратные корни) НЕ бросают
   исключений: NaN/Inf пропагируют в результат

ФОРМУЛЫ:
    P(z) = Σ c_k · z^k
    P'(z) = Σ (k+1) · c_{k+1} · z^k
    Durand–Kerner:
        z_i^(0) = e^(2πik/n)
        z_i ← z_i - P(z_i) / (c_n · Π_{j≠i} (z_i - z_j))
"""

import logging
import math
from typing import Iterable, Sequence, Union

from src.core.math.complex_number import ONE, ZERO, Complex
from src.core.math.numerical_safeguards import (
    validate_positive,
    validate_positive_int,
)

logger = logging.getLogger(__name__)

CoefficientLike = Union[Complex, complex, float, int]


def _as_complex(value: CoefficientLike) -> Complex:
    if isinstance(value, Complex):
        return value
    if isinstance(value, complex):
        return Complex.from_builtin(value)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return Complex(value)
    raise TypeError(f"Cannot interpret {value!r} as a complex coefficient")


# =============================================================================
# COMPLEX POLYNOMIAL
# =============================================================================


class ComplexPolynomial:
    """
    Многочлен c_0 + c_1·z + ... + c_n·z^n.

    Коэффициенты хранятся в неизменяемом tuple от младшей степени к старшей.
    Старший нулевой коэффициент не отбрасывается: degree определяется
    длиной последовательности.
    """

    def __init__(self, coefficients: Iterable[CoefficientLike]):
        """
        Args:
            coefficients: Коэффициенты от младшей степени к старшей.
                Допускаются Complex, complex, int, float.

        Raises:
            ValueError: Если последовательность пуста
        """
        coeffs = tuple(_as_complex(c) for c in coefficients)
        if not coeffs:
            raise ValueError("Polynomial requires at least one coefficient")
        self._coefficients = coeffs

    @property
    def coefficients(self) -> tuple[Complex, ...]:
        return self._coefficients

    @property
    def degree(self) -> int:
        return len(self._coefficients) - 1

    def __repr__(self) -> str:
        terms = ", ".join(str(c) for c in self._coefficients)
        return f"ComplexPolynomial([{terms}])"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ComplexPolynomial):
            return NotImplemented
        return self._coefficients == other._coefficients

    def __hash__(self) -> int:
        return hash(self._coefficients)

    # ===== Evaluation =====

    def evaluate(self, z: CoefficientLike) -> Complex:
        """
        Вычисление P(z) прямым суммированием.

        Текущая степень z накапливается умножением (power ← power·z),
        порядок операций фиксирован и влияет на округление.
        """
        z = _as_complex(z)
        result = ZERO
        power = ONE

        for coef in self._coefficients:
            result = result.add(coef.multiply(power))
            power = power.multiply(z)

        return result

    __call__ = evaluate

    def derivative(self) -> "ComplexPolynomial":
        """
        Производная многочлена.

        Константа (degree 0) даёт нулевой многочлен [0].
        """
        if len(self._coefficients) <= 1:
            return ComplexPolynomial([ZERO])

        return ComplexPolynomial(
            coef.multiply(k + 1) for k, coef in enumerate(self._coefficients[1:])
        )

    # ===== Root Finding =====

    def find_roots(self, max_iterations: int = 100, tolerance: float = 1e-10) -> list[Complex]:
        """
        Поиск всех корней многочлена.

        - degree 0: корней нет ([])
        - degree 1: замкнутая форма -c_0 / c_1
        - degree >= 2: Durand–Kerner от равномерных точек на единичной окружности

        Каждый проход обновляет все кандидаты относительно набора
        предыдущего прохода. Ранняя остановка, когда максимальная
        поправка |Δz_i| за проход < tolerance.

        Знаменатель поправки начинается со старшего коэффициента c_n, а не
        с 1: это эквивалентно приведению к моническому виду. Для монических
        многочленов результат совпадает с ненормированным обновлением, для
        немонических ненормированное обновление может расходиться
        (например, 4z² - 10z + 6).

        ОГРАНИЧЕНИЕ: сходимость не гарантирована для кратных или близких
        корней (произведение в знаменателе ~ 0). Fallback-стратегии нет,
        результат может содержать NaN/Inf.

        Args:
            max_iterations: Максимум проходов (>= 1)
            tolerance: Порог максимальной поправки (> 0)

        Returns:
            Список из degree корней; порядок зависит от инициализации

        Raises:
            ValueError: Если max_iterations < 1 или tolerance <= 0
        """
        validate_positive_int(max_iterations, "max_iterations")
        validate_positive(tolerance, "tolerance")

        degree = self.degree
        if degree == 0:
            return []

        if degree == 1:
            return [self._coefficients[0].divide(self._coefficients[1]).multiply(-1)]

        return self._durand_kerner(max_iterations, tolerance)

    def find_roots_with(self, settings) -> list[Complex]:
        """find_roots() с параметрами из RootFinderSettings."""
        return self.find_roots(settings.max_iterations, settings.tolerance)

    def _durand_kerner(self, max_iterations: int, tolerance: float) -> list[Complex]:
        degree = self.degree
        leading = self._coefficients[-1]

        roots = [Complex.from_polar(1.0, 2.0 * math.pi * k / degree) for k in range(degree)]
        max_change = math.inf

        for iteration in range(1, max_iterations + 1):
            new_roots: list[Complex] = []
            max_change = 0.0

            for i, z in enumerate(roots):
                pz = self.evaluate(z)

                denominator = leading
                for j, other in enumerate(roots):
                    if i != j:
                        denominator = denominator.multiply(z.subtract(other))

                delta = pz.divide(denominator)
                new_roots.append(z.subtract(delta))

                # NaN обязан "залипнуть" в max_change (max() его бы отбросил)
                change = delta.magnitude()
                if change > max_change or math.isnan(change):
                    max_change = change

            roots = new_roots

            if max_change < tolerance:
                logger.debug(
                    "Durand-Kerner converged: degree=%d sweeps=%d max_change=%.3e",
                    degree,
                    iteration,
                    max_change,
                )
                return roots

        logger.warning(
            "Durand-Kerner did not converge: degree=%d sweeps=%d max_change=%.3e tolerance=%.1e",
            degree,
            max_iterations,
            max_change,
            tolerance,
        )
        return roots

    # ===== Construction =====

    @classmethod
    def from_roots(cls, roots: Sequence[CoefficientLike]) -> "ComplexPolynomial":
        """
        Построение монического многочлена Π (z - r_i).

        Аккумулятор начинается с константы 1 и последовательно
        умножается на (z - r_i). Пустой список даёт многочлен [1].

        Examples:
            >>> [str(c) for c in ComplexPolynomial.from_roots([1, -1]).coefficients]
            ['-1', '0', '1']
        """
        coeffs: list[Complex] = [ONE]

        for raw_root in roots:
            neg_root = _as_complex(raw_root).multiply(-1)
            new_coeffs = [ZERO] * (len(coeffs) + 1)

            # (Σ a_j z^j)(z - r) = Σ a_j z^(j+1) - r·a_j z^j
            for j, coef in enumerate(coeffs):
                new_coeffs[j] = new_coeffs[j].add(coef.multiply(neg_root))
                new_coeffs[j + 1] = new_coeffs[j + 1].add(coef)

            coeffs = new_coeffs

        return cls(coeffs)
