"""
Contour — извлечение контуров неявных кривых f(x, y) = c

Marching squares над равномерной сеткой; результат — несвязанные отрезки.
"""

from src.contour.marching_squares import (
    CASE_TABLE,
    ESTIMATED_MS_PER_EVALUATION,
    EVALUATION_WARNING_THRESHOLD,
    PROBE_POINTS,
    SADDLE_CASES,
    ComplexityEstimate,
    FieldProbeResult,
    MarchingSquares,
    MarchingSquaresConfig,
    case_index,
    estimate_complexity,
    is_inside,
    validate_scalar_field,
)

__all__ = [
    # Constants
    "CASE_TABLE",
    "ESTIMATED_MS_PER_EVALUATION",
    "EVALUATION_WARNING_THRESHOLD",
    "PROBE_POINTS",
    "SADDLE_CASES",
    # Types
    "ComplexityEstimate",
    "FieldProbeResult",
    "MarchingSquaresConfig",
    # Classes
    "MarchingSquares",
    # Functions
    "case_index",
    "estimate_complexity",
    "is_inside",
    "validate_scalar_field",
]
