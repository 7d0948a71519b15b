"""Utility functions."""

from chfsi.util.linalg import hermitian_from_triangle, scaled_error
from chfsi.util.chebyshev import (
    get_filter_scaling_parameters,
    recurrence_coefficients,
    filter_polynomial,
)
from chfsi.util.degrees import (
    as_degrees,
    validate_degrees,
    effective_max_degree,
    count_retired,
    window_widths,
)
