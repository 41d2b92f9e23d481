"""
Core math modules для calcengine

Численные примитивы, тригонометрия через ряды Тейлора и TVM solver.
"""

# Numerical Safeguards
from calcengine.core.math.numerical_safeguards import (
    # Constants
    DEG_TO_RAD,
    PI,
    TWO_PI,
    # Primitives
    checked_power,
    degrees_to_radians,
    factorial,
    reduce_angle,
    # Snap-to-zero
    is_near_zero,
    snap_to_zero,
    # Validation
    is_valid_float,
)

# Trigonometry
from calcengine.core.math.trigonometry import (
    taylor_cos,
    taylor_sin,
    taylor_tan,
)

# Time Value of Money
from calcengine.core.math.tvm import (
    MAX_ITERATIONS,
    calculate_fv,
    calculate_interest,
    calculate_number_of_periods,
    calculate_pmt,
    calculate_pv,
    newton_raphson,
)

__all__ = [
    # Numerical Safeguards — Constants
    "DEG_TO_RAD",
    "PI",
    "TWO_PI",
    # Numerical Safeguards — Primitives
    "checked_power",
    "degrees_to_radians",
    "factorial",
    "reduce_angle",
    # Numerical Safeguards — Snap-to-zero
    "is_near_zero",
    "snap_to_zero",
    # Numerical Safeguards — Validation
    "is_valid_float",
    # Trigonometry
    "taylor_cos",
    "taylor_sin",
    "taylor_tan",
    # TVM — Constants
    "MAX_ITERATIONS",
    # TVM — Functions
    "calculate_fv",
    "calculate_interest",
    "calculate_number_of_periods",
    "calculate_pmt",
    "calculate_pv",
    "newton_raphson",
]
