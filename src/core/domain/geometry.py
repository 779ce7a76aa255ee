"""
Geometry — 2D value types для контурного экстрактора

Immutable dataclasses, которыми обмениваются marching squares и внешние
потребители (рендер implicit-кривых, viewport/camera):
- Point2D: точка в мировых координатах
- Bounds2D: прямоугольник (x_min, x_max, y_min, y_max)
- ContourSegment: отрезок (start, end) — без связности и порядка
- MarchingSquaresResult: отрезки + разрешение сетки + число вычислений поля

Bounds2D НЕ валидируется: вырожденный или перевёрнутый прямоугольник
даёт пустой результат у экстрактора, а не ошибку.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Point2D:
    """Точка в мировых координатах."""

    x: float
    y: float

    def distance_to_origin(self) -> float:
        return (self.x * self.x + self.y * self.y) ** 0.5


@dataclass(frozen=True)
class Bounds2D:
    """
    Мировые границы области поиска контура.

    Ожидается x_min < x_max и y_min < y_max, но это не проверяется.
    """

    x_min: float
    x_max: float
    y_min: float
    y_max: float

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    def is_degenerate(self) -> bool:
        """
        True для нулевой площади, перевёрнутых границ или NaN.

        Сравнение записано через отрицание, чтобы NaN-границы тоже
        считались вырожденными.
        """
        return not (self.x_min < self.x_max and self.y_min < self.y_max)


@dataclass(frozen=True)
class ContourSegment:
    """Отрезок контура. Порядок start/end задаётся таблицей случаев."""

    start: Point2D
    end: Point2D


@dataclass(frozen=True)
class MarchingSquaresResult:
    """
    Результат извлечения контура.

    segments: неупорядоченные, несвязанные отрезки
    grid_size: разрешение сетки (число ячеек по каждой оси)
    evaluation_count: число вызовов скалярного поля, всегда (grid_size+1)²
    """

    segments: tuple[ContourSegment, ...]
    grid_size: int
    evaluation_count: int

    @property
    def is_empty(self) -> bool:
        return len(self.segments) == 0

