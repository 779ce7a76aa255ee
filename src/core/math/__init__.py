"""
Core math modules

Комплексная арифметика, многочлены и численные примитивы ядра геометрии.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    # Epsilon constants
    EPS_COMPLEX_EQUALITY,
    ZERO_FRACTION_EPS,
    ZERO_FRACTION_FALLBACK,
    # IEEE-754 division
    ieee_divide,
    # NaN/Inf checks
    is_valid_float,
    # Epsilon comparisons
    is_within,
    # Interpolation
    lerp,
    zero_crossing_fraction,
    # Validation
    validate_non_negative_int,
    validate_positive,
    validate_positive_int,
)

# Complex
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

# Complex Polynomial
from src.core.math.complex_polynomial import ComplexPolynomial

# Newton basins
from src.core.math.newton import (
    NewtonBasin,
    NewtonBasinResult,
    RootMatch,
    find_nearest_root,
    newton_step,
)

__all__ = [
    # Numerical Safeguards — Epsilon constants
    "EPS_COMPLEX_EQUALITY",
    "ZERO_FRACTION_EPS",
    "ZERO_FRACTION_FALLBACK",
    # Numerical Safeguards — Functions
    "ieee_divide",
    "is_valid_float",
    "is_within",
    "lerp",
    "zero_crossing_fraction",
    "validate_non_negative_int",
    "validate_positive",
    "validate_positive_int",
    # Complex — Constants
    "ZERO",
    "ONE",
    "I",
    "NEG_I",
    "NEG_ONE",
    # Complex — Exceptions
    "ComplexParseError",
    # Complex — Types
    "Complex",
    "PolarForm",
    # Complex Polynomial
    "ComplexPolynomial",
    # Newton
    "NewtonBasin",
    "NewtonBasinResult",
    "RootMatch",
    "find_nearest_root",
    "newton_step",
]
