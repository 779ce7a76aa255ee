"""
Newton — бассейны притяжения корней многочлена

CPU-референс для Newton-фрактала: каждая точка плоскости итерируется
методом Ньютона и классифицируется по ближайшему корню.

Вход: корни многочлена (многочлен строится через from_roots)
Выход: NewtonBasinResult (converged, root_index, distance, iterations)

ФОРМУЛЫ:
    z_{n+1} = z_n - P(z_n) / P'(z_n)
    converged ⇔ min_k |z_n - r_k| < tolerance

Вырожденный шаг (P'(z) = 0) не бросает исключений: точка становится
NaN/Inf и остаётся несошедшейся до исчерпания итераций.
"""

import math
from dataclasses import dataclass
from typing import Optional, Sequence

from src.core.math.complex_number import Complex
from src.core.math.complex_polynomial import ComplexPolynomial
from src.core.math.numerical_safeguards import validate_non_negative_int, validate_positive


# =============================================================================
# DATA CLASSES
# =============================================================================


@dataclass(frozen=True)
class RootMatch:
    """Ближайший корень к точке."""

    converged: bool
    root_index: Optional[int]  # None если корней нет или точка NaN
    distance: float


@dataclass(frozen=True)
class NewtonBasinResult:
    """Итог Newton-итерации одной точки."""

    converged: bool
    root_index: Optional[int]
    distance: float
    iterations: int
    final_value: Complex


# =============================================================================
# NEWTON STEP
# =============================================================================


def newton_step(
    z: Complex, polynomial: ComplexPolynomial, derivative: ComplexPolynomial
) -> Complex:
    """Один шаг Ньютона: z - P(z) / P'(z)."""
    return z.subtract(polynomial.evaluate(z).divide(derivative.evaluate(z)))


def find_nearest_root(z: Complex, roots: Sequence[Complex], tolerance: float) -> RootMatch:
    """
    Поиск ближайшего корня.

    Args:
        z: Текущая точка
        roots: Корни многочлена
        tolerance: Порог расстояния для сходимости

    Returns:
        RootMatch; при пустом roots или NaN-точке root_index=None, distance=inf
    """
    min_distance = math.inf
    nearest_index: Optional[int] = None

    for index, root in enumerate(roots):
        distance = z.subtract(root).magnitude()
        if distance < min_distance:
            min_distance = distance
            nearest_index = index

    return RootMatch(
        converged=min_distance < tolerance,
        root_index=nearest_index,
        distance=min_distance,
    )


# =============================================================================
# BASIN ITERATION
# =============================================================================


class NewtonBasin:
    """
    Классификатор точек по бассейнам притяжения.

    Многочлен и его производная строятся один раз на конфигурацию,
    classify() вызывается на каждую точку.
    """

    def __init__(self, roots: Sequence[Complex], max_iterations: int = 100, tolerance: float = 1e-6):
        """
        Args:
            roots: Корни многочлена (>= 1)
            max_iterations: Максимум Newton-шагов на точку
            tolerance: Порог сходимости к корню

        Raises:
            ValueError: Пустой список корней или невалидные параметры
        """
        if len(roots) == 0:
            raise ValueError("At least one root is required")
        validate_non_negative_int(max_iterations, "max_iterations")
        validate_positive(tolerance, "tolerance")

        self.roots = tuple(roots)
        self.max_iterations = max_iterations
        self.tolerance = tolerance
        self.polynomial = ComplexPolynomial.from_roots(self.roots)
        self.derivative = self.polynomial.derivative()

    @classmethod
    def from_settings(cls, settings) -> "NewtonBasin":
        """Построение из NewtonFractalSettings."""
        return cls(settings.roots, settings.max_iterations, settings.tolerance)

    def classify(self, z0: Complex) -> NewtonBasinResult:
        """
        Итерация точки до сходимости или исчерпания max_iterations.

        iterations — число выполненных шагов до первой проверки,
        признавшей сходимость (0 если z0 уже у корня).
        """
        z = z0
        iterations = 0
        match = find_nearest_root(z, self.roots, self.tolerance)

        while not match.converged and iterations < self.max_iterations:
            z = newton_step(z, self.polynomial, self.derivative)
            iterations += 1
            match = find_nearest_root(z, self.roots, self.tolerance)

        return NewtonBasinResult(
            converged=match.converged,
            root_index=match.root_index,
            distance=match.distance,
            iterations=iterations,
            final_value=z,
        )
