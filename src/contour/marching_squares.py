"""Marching Squares — извлечение контура неявной кривой f(x, y) = c

Алгоритм:
1. Равномерная сетка (resolution+1)×(resolution+1) узлов, в каждом узле
   хранится f(x, y) - c (уровень сдвигается в ноль)
2. Каждая из resolution² ячеек классифицируется 4-битным индексом по углам
   (bottom-left, bottom-right, top-right, top-left)
3. Точки пересечения на рёбрах — линейная интерполяция нуля
4. Таблица из 16 случаев определяет 0, 1 или 2 отрезка на ячейку

Классификация угла как "inside": |v| < threshold ИЛИ v > 0.
Асимметричный тест — политика разрешения ничьих, менять нельзя.

Седловые случаи 5 и 10 дают ДВА независимых диагональных отрезка без
дополнительного сэмплирования центра ячейки.

Отрезки возвращаются несвязанными: сшивка в полилинии не выполняется.

Стоимость: ровно (resolution+1)² вызовов поля на запрос.
"""

import logging
import math
from dataclasses import dataclass
from typing import Callable, Final, Optional

from src.core.domain.geometry import Bounds2D, ContourSegment, MarchingSquaresResult, Point2D
from src.core.domain.settings import DEFAULT_CONTOUR_THRESHOLD, ImplicitPlotSettings
from src.core.math.numerical_safeguards import (
    ZERO_FRACTION_EPS,
    lerp,
    validate_positive,
    validate_positive_int,
    zero_crossing_fraction,
)

logger = logging.getLogger(__name__)

ScalarField = Callable[[float, float], float]


# =============================================================================
# CONSTANTS
# =============================================================================

# Бюджет вызовов поля, выше которого запрос считается дорогим
# (resolution >= 316; resolution 100 укладывается с запасом)
EVALUATION_WARNING_THRESHOLD: Final[int] = 100_000

# Грубая оценка стоимости одного вызова поля
ESTIMATED_MS_PER_EVALUATION: Final[float] = 0.001

# Рёбра ячейки
EDGE_BOTTOM: Final[int] = 0
EDGE_RIGHT: Final[int] = 1
EDGE_TOP: Final[int] = 2
EDGE_LEFT: Final[int] = 3

# Биты углов в индексе случая
CORNER_BOTTOM_LEFT: Final[int] = 1
CORNER_BOTTOM_RIGHT: Final[int] = 2
CORNER_TOP_RIGHT: Final[int] = 4
CORNER_TOP_LEFT: Final[int] = 8

# Таблица случаев: индекс → пары рёбер (start, end) для каждого отрезка
CASE_TABLE: Final[tuple[tuple[tuple[int, int], ...], ...]] = (
    (),                                                # 0
    ((EDGE_BOTTOM, EDGE_LEFT),),                       # 1
    ((EDGE_BOTTOM, EDGE_RIGHT),),                      # 2
    ((EDGE_LEFT, EDGE_RIGHT),),                        # 3
    ((EDGE_TOP, EDGE_RIGHT),),                         # 4
    ((EDGE_BOTTOM, EDGE_LEFT), (EDGE_TOP, EDGE_RIGHT)),  # 5 saddle
    ((EDGE_BOTTOM, EDGE_TOP),),                        # 6
    ((EDGE_LEFT, EDGE_TOP),),                          # 7
    ((EDGE_LEFT, EDGE_TOP),),                          # 8
    ((EDGE_BOTTOM, EDGE_TOP),),                        # 9
    ((EDGE_BOTTOM, EDGE_RIGHT), (EDGE_LEFT, EDGE_TOP)),  # 10 saddle
    ((EDGE_TOP, EDGE_RIGHT),),                         # 11
    ((EDGE_LEFT, EDGE_RIGHT),),                        # 12
    ((EDGE_BOTTOM, EDGE_RIGHT),),                      # 13
    ((EDGE_BOTTOM, EDGE_LEFT),),                       # 14
    (),                                                # 15
)

SADDLE_CASES: Final[frozenset[int]] = frozenset({5, 10})


# =============================================================================
# DATA CLASSES
# =============================================================================


@dataclass(frozen=True)
class MarchingSquaresConfig:
    """Конфигурация экстрактора."""

    # Толерантность "inside" по умолчанию
    threshold: float = DEFAULT_CONTOUR_THRESHOLD

    # Порог почти равных значений при интерполяции (→ доля 0.5)
    zero_fraction_eps: float = ZERO_FRACTION_EPS

    # Порог предупреждения о стоимости запроса
    evaluation_warning_threshold: int = EVALUATION_WARNING_THRESHOLD


@dataclass(frozen=True)
class ComplexityEstimate:
    """Оценка стоимости запроса до сэмплирования."""

    evaluations: int
    estimated_ms: float
    warning: Optional[str] = None

    @property
    def exceeds_budget(self) -> bool:
        return self.warning is not None


@dataclass(frozen=True)
class FieldProbeResult:
    """Результат пробного вычисления поля."""

    valid: bool
    error: Optional[str] = None


# =============================================================================
# CLASSIFICATION
# =============================================================================


def is_inside(value: float, threshold: float) -> bool:
    """|value| < threshold или value > 0. NaN всегда снаружи."""
    return abs(value) < threshold or value > 0


def case_index(v00: float, v10: float, v11: float, v01: float, threshold: float) -> int:
    """
    4-битный индекс случая.

    bit 0 = bottom-left, bit 1 = bottom-right, bit 2 = top-right, bit 3 = top-left
    """
    index = 0
    if is_inside(v00, threshold):
        index |= CORNER_BOTTOM_LEFT
    if is_inside(v10, threshold):
        index |= CORNER_BOTTOM_RIGHT
    if is_inside(v11, threshold):
        index |= CORNER_TOP_RIGHT
    if is_inside(v01, threshold):
        index |= CORNER_TOP_LEFT
    return index


# =============================================================================
# COMPLEXITY
# =============================================================================


def estimate_complexity(
    resolution: int, warning_threshold: int = EVALUATION_WARNING_THRESHOLD
) -> ComplexityEstimate:
    """
    Оценка стоимости find_contours() без вызова поля.

    Позволяет вызывающему коду понизить resolution до сэмплирования.

    Args:
        resolution: Число ячеек по каждой оси (>= 1)
        warning_threshold: Бюджет вызовов поля

    Returns:
        ComplexityEstimate; warning заполнен, если (resolution+1)² > warning_threshold

    Examples:
        >>> estimate_complexity(100).evaluations
        10201
        >>> estimate_complexity(100).exceeds_budget
        False
    """
    validate_positive_int(resolution, "resolution")

    evaluations = (resolution + 1) ** 2
    warning = None
    if evaluations > warning_threshold:
        warning = (
            f"Contour request exceeds evaluation budget: resolution={resolution} "
            f"evaluations={evaluations} (> {warning_threshold})"
        )

    return ComplexityEstimate(
        evaluations=evaluations,
        estimated_ms=evaluations * ESTIMATED_MS_PER_EVALUATION,
        warning=warning,
    )


# =============================================================================
# MARCHING SQUARES
# =============================================================================


class MarchingSquares:
    """
    Экстрактор контуров неявных функций.

    Stateless: один экземпляр можно переиспользовать для любых полей.
    """

    def __init__(self, config: Optional[MarchingSquaresConfig] = None):
        """
        Args:
            config: Конфигурация (default: MarchingSquaresConfig())
        """
        self.config = config or MarchingSquaresConfig()

    def find_contours(
        self,
        evaluator: ScalarField,
        bounds: Bounds2D,
        target_value: float,
        resolution: int,
        threshold: Optional[float] = None,
    ) -> MarchingSquaresResult:
        """
        Поиск отрезков контура f(x, y) = target_value.

        Args:
            evaluator: Чистая функция f(x, y) → float
            bounds: Мировые границы поиска
            target_value: Константа c в f(x, y) = c
            resolution: Число ячеек по каждой оси (>= 1)
            threshold: Толерантность "inside" (default: config.threshold)

        Returns:
            MarchingSquaresResult; evaluation_count всегда (resolution+1)²,
            даже при вырожденных границах (тогда segments пуст)

        Raises:
            ValueError: resolution < 1 или threshold <= 0
        """
        validate_positive_int(resolution, "resolution")
        if threshold is None:
            threshold = self.config.threshold
        validate_positive(threshold, "threshold")

        estimate = self.estimate_complexity(resolution)
        if estimate.exceeds_budget:
            logger.warning("%s", estimate.warning)

        grid, evaluation_count = self._sample_grid(evaluator, bounds, target_value, resolution)

        if bounds.is_degenerate():
            logger.debug("Degenerate bounds %s: no contour extracted", bounds)
            return MarchingSquaresResult(
                segments=(), grid_size=resolution, evaluation_count=evaluation_count
            )

        dx = bounds.width / resolution
        dy = bounds.height / resolution

        segments: list[ContourSegment] = []
        saddle_count = 0

        for i in range(resolution):
            column = grid[i]
            next_column = grid[i + 1]
            x0 = bounds.x_min + i * dx
            x1 = x0 + dx

            for j in range(resolution):
                v00 = column[j]  # bottom-left
                v10 = next_column[j]  # bottom-right
                v11 = next_column[j + 1]  # top-right
                v01 = column[j + 1]  # top-left

                index = case_index(v00, v10, v11, v01, threshold)
                edge_pairs = CASE_TABLE[index]
                if not edge_pairs:
                    continue

                if index in SADDLE_CASES:
                    saddle_count += 1

                y0 = bounds.y_min + j * dy
                y1 = y0 + dy
                edges = self._edge_points(x0, y0, x1, y1, v00, v10, v11, v01)

                for start_edge, end_edge in edge_pairs:
                    segments.append(ContourSegment(edges[start_edge], edges[end_edge]))

        logger.debug(
            "Marching squares: resolution=%d evaluations=%d segments=%d saddles=%d",
            resolution,
            evaluation_count,
            len(segments),
            saddle_count,
        )

        return MarchingSquaresResult(
            segments=tuple(segments),
            grid_size=resolution,
            evaluation_count=evaluation_count,
        )

    def find_contours_with(
        self,
        evaluator: ScalarField,
        bounds: Bounds2D,
        settings: ImplicitPlotSettings,
    ) -> MarchingSquaresResult:
        """find_contours() с параметрами из ImplicitPlotSettings."""
        return self.find_contours(
            evaluator,
            bounds,
            settings.constant,
            settings.resolution,
            settings.threshold,
        )

    def estimate_complexity(self, resolution: int) -> ComplexityEstimate:
        """estimate_complexity() с бюджетом из конфигурации."""
        return estimate_complexity(resolution, self.config.evaluation_warning_threshold)

    # ===== Internals =====

    @staticmethod
    def _sample_grid(
        evaluator: ScalarField,
        bounds: Bounds2D,
        target_value: float,
        resolution: int,
    ) -> tuple[list[list[float]], int]:
        """
        Сэмплирование поля: grid[i][j] = f(x_i, y_j) - target_value.

        i — индекс по x, j — индекс по y.
        """
        dx = bounds.width / resolution
        dy = bounds.height / resolution

        grid: list[list[float]] = []
        evaluation_count = 0

        for i in range(resolution + 1):
            x = bounds.x_min + i * dx
            column: list[float] = []
            for j in range(resolution + 1):
                y = bounds.y_min + j * dy
                column.append(evaluator(x, y) - target_value)
                evaluation_count += 1
            grid.append(column)

        return grid, evaluation_count

    def _edge_points(
        self,
        x0: float,
        y0: float,
        x1: float,
        y1: float,
        v00: float,
        v10: float,
        v11: float,
        v01: float,
    ) -> tuple[Point2D, Point2D, Point2D, Point2D]:
        """Точки пересечения на рёбрах (bottom, right, top, left)."""
        eps = self.config.zero_fraction_eps
        return (
            Point2D(lerp(x0, x1, zero_crossing_fraction(v00, v10, eps)), y0),
            Point2D(x1, lerp(y0, y1, zero_crossing_fraction(v10, v11, eps))),
            Point2D(lerp(x0, x1, zero_crossing_fraction(v01, v11, eps)), y1),
            Point2D(x0, lerp(y0, y1, zero_crossing_fraction(v00, v01, eps))),
        )


# =============================================================================
# FIELD PROBING
# =============================================================================

# Точки пробного вычисления поля
PROBE_POINTS: Final[tuple[tuple[float, float], ...]] = ((0.0, 0.0), (1.0, 1.0), (-1.0, -1.0))


def validate_scalar_field(evaluator: ScalarField, constant: float) -> FieldProbeResult:
    """
    Пробное вычисление поля перед извлечением контура.

    Проверяет, что f конечна в PROBE_POINTS и что константа конечна.
    Арифметические ошибки вычислителя (например ZeroDivisionError)
    превращаются в невалидный результат, а не пробрасываются.

    Examples:
        >>> validate_scalar_field(lambda x, y: x * x + y * y, 1.0).valid
        True
        >>> validate_scalar_field(lambda x, y: 1.0 / x, 1.0).valid
        False
    """
    for x, y in PROBE_POINTS:
        try:
            value = evaluator(x, y)
        except (ArithmeticError, ValueError) as e:
            return FieldProbeResult(valid=False, error=f"Evaluation failed at ({x:g}, {y:g}): {e}")

        if not math.isfinite(value):
            return FieldProbeResult(
                valid=False, error=f"Expression evaluates to {value} at ({x:g}, {y:g})"
            )

    if not math.isfinite(constant):
        return FieldProbeResult(valid=False, error="Constant must be a finite number")

    return FieldProbeResult(valid=True)
