"""
Domain models and value objects.

Contains 2D geometry values exchanged with the contour extractor and the
immutable settings models for the numerical algorithms.
"""

from src.core.domain.geometry import (
    Bounds2D,
    ContourSegment,
    MarchingSquaresResult,
    Point2D,
)
from src.core.domain.settings import (
    DEFAULT_CONTOUR_RESOLUTION,
    DEFAULT_CONTOUR_THRESHOLD,
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_ROOT_TOLERANCE,
    NEWTON_DEFAULT_MAX_ITERATIONS,
    NEWTON_DEFAULT_TOLERANCE,
    NEWTON_MAX_ROOTS,
    ImplicitPlotSettings,
    NewtonFractalSettings,
    RootFinderSettings,
)

__all__ = [
    # Geometry
    "Point2D",
    "Bounds2D",
    "ContourSegment",
    "MarchingSquaresResult",
    # Settings defaults
    "DEFAULT_MAX_ITERATIONS",
    "DEFAULT_ROOT_TOLERANCE",
    "DEFAULT_CONTOUR_RESOLUTION",
    "DEFAULT_CONTOUR_THRESHOLD",
    "NEWTON_MAX_ROOTS",
    "NEWTON_DEFAULT_MAX_ITERATIONS",
    "NEWTON_DEFAULT_TOLERANCE",
    # Settings models
    "RootFinderSettings",
    "ImplicitPlotSettings",
    "NewtonFractalSettings",
]
