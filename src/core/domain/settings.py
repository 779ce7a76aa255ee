"""
Settings — конфигурация численных алгоритмов

Immutable Pydantic модели с параметрами, которые внешние компоненты
(fractal-coloring, implicit-plot) передают в ядро:
- RootFinderSettings: Durand–Kerner (max_iterations, tolerance)
- ImplicitPlotSettings: marching squares (constant, resolution, threshold)
- NewtonFractalSettings: корни и параметры Newton-итерации на точку

Все модели frozen=True: изменение настроек создаёт новый экземпляр.
"""

import math
from typing import Final

from pydantic import BaseModel, Field, field_validator

from src.core.math.complex_number import Complex


# =============================================================================
# DEFAULTS
# =============================================================================

# Durand–Kerner
DEFAULT_MAX_ITERATIONS: Final[int] = 100
DEFAULT_ROOT_TOLERANCE: Final[float] = 1e-10

# Marching squares
DEFAULT_CONTOUR_RESOLUTION: Final[int] = 100
DEFAULT_CONTOUR_THRESHOLD: Final[float] = 0.01

# Newton fractal
NEWTON_MAX_ROOTS: Final[int] = 5
NEWTON_DEFAULT_MAX_ITERATIONS: Final[int] = 100
NEWTON_DEFAULT_TOLERANCE: Final[float] = 1e-6


# =============================================================================
# ROOT FINDER
# =============================================================================


class RootFinderSettings(BaseModel):
    """Параметры симультанной итерации Durand–Kerner."""

    max_iterations: int = Field(
        default=DEFAULT_MAX_ITERATIONS, ge=1, description="Максимум полных проходов"
    )
    tolerance: float = Field(
        default=DEFAULT_ROOT_TOLERANCE,
        gt=0,
        description="Порог максимальной поправки для ранней остановки",
    )

    model_config = {"frozen": True}


# =============================================================================
# IMPLICIT PLOT
# =============================================================================


class ImplicitPlotSettings(BaseModel):
    """
    Параметры извлечения контура f(x, y) = constant.

    resolution определяет стоимость: (resolution + 1)² вызовов поля.
    """

    constant: float = Field(default=0.0, description="Значение c в f(x,y) = c")
    resolution: int = Field(
        default=DEFAULT_CONTOUR_RESOLUTION, ge=1, description="Число ячеек по каждой оси"
    )
    threshold: float = Field(
        default=DEFAULT_CONTOUR_THRESHOLD,
        gt=0,
        description="Толерантность классификации угла как 'inside'",
    )

    model_config = {"frozen": True}

    @field_validator("constant")
    @classmethod
    def validate_constant_finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError(f"constant must be a finite number, got {v}")
        return v


# =============================================================================
# NEWTON FRACTAL
# =============================================================================


class NewtonFractalSettings(BaseModel):
    """
    Параметры Newton-фрактала: корни многочлена и критерий сходимости.

    Многочлен строится из корней (ComplexPolynomial.from_roots),
    каждая точка плоскости классифицируется по ближайшему корню.
    """

    roots: tuple[Complex, ...] = Field(
        ..., min_length=1, max_length=NEWTON_MAX_ROOTS, description="Корни многочлена"
    )
    max_iterations: int = Field(
        default=NEWTON_DEFAULT_MAX_ITERATIONS, ge=10, le=1000, description="Максимум Newton-шагов"
    )
    tolerance: float = Field(
        default=NEWTON_DEFAULT_TOLERANCE,
        ge=1e-10,
        le=0.1,
        description="Расстояние до корня, считающееся сходимостью",
    )

    model_config = {"frozen": True}

    @field_validator("roots", mode="before")
    @classmethod
    def coerce_roots(cls, v):
        """Корни можно передать как Complex, complex, число или {'real', 'imag'}."""
        if not isinstance(v, (list, tuple)):
            raise ValueError("roots must be a sequence")
        coerced = []
        for item in v:
            if isinstance(item, Complex):
                coerced.append(item)
            elif isinstance(item, dict):
                if "real" not in item:
                    raise ValueError(f"Root mapping must contain 'real': {item!r}")
                coerced.append(Complex(item["real"], item.get("imag", 0.0)))
            elif isinstance(item, complex):
                coerced.append(Complex.from_builtin(item))
            elif isinstance(item, (int, float)) and not isinstance(item, bool):
                coerced.append(Complex(item))
            else:
                raise ValueError(f"Unsupported root value: {item!r}")
        return tuple(coerced)
