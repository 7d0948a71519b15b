"""Chebyshev filter recurrence utilities."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from numpy.polynomial import chebyshev

if TYPE_CHECKING:
    from typing import Iterator

    from chfsi.typing import Array


def get_filter_scaling_parameters(
    lower: float, upper: float, lambda_: float
) -> tuple[float, float, float]:
    """Get the scaling parameters of the Chebyshev filter.

    The interval `[lower, upper]` is mapped onto `[-1, 1]`, and the filter is normalised at
    `lambda_`.

    Args:
        lower: Lower bound of the damped part of the spectrum.
        upper: Upper bound of the spectrum.
        lambda_: Estimate of the eigenvalue separating the wanted and unwanted subspaces.

    Returns:
        A tuple containing the centre of the interval, its half-width, and the initial value of the
        recurrence scale `sigma`.

    Notes:
        No validation is performed. Bounds with `lower >= upper`, or `lambda_` at the centre of the
        interval, give an ill-conditioned filter.
    """
    center = (upper + lower) / 2.0
    half_width = (upper - lower) / 2.0
    sigma_scale = half_width / (lambda_ - center)
    return center, half_width, sigma_scale


def recurrence_coefficients(
    half_width: float, sigma_scale: float, degree: int
) -> Iterator[tuple[float, float]]:
    """Iterate over the coefficients of the scaled three-term Chebyshev recurrence.

    Degree `i` of the filter is applied as `y_i = alpha * (A - cI) y_{i-1} + beta * y_{i-2}`.

    Args:
        half_width: Half-width of the spectral interval.
        sigma_scale: Initial recurrence scale.
        degree: Maximum degree.

    Yields:
        The pair `(alpha, beta)` for each degree from 1 to :param:`degree`.
    """
    if degree < 1:
        return

    sigma = sigma_scale
    yield sigma_scale / half_width, 0.0

    for _ in range(2, degree + 1):
        sigma_new = 1.0 / (2.0 / sigma_scale - sigma)
        yield 2.0 * sigma_new / half_width, -sigma * sigma_new
        sigma = sigma_new


def filter_polynomial(
    x: Array | float, degree: int, lower: float, upper: float, lambda_: float
) -> Array:
    r"""Evaluate the filter polynomial in closed form.

    The filter of degree `k` is the Chebyshev polynomial of the first kind on the scaled interval,
    normalised to one at `lambda_`,

    .. math::
        p_k(x) = \frac{T_k((x - c) / e)}{T_k((\lambda - c) / e)}.

    Args:
        x: Points at which to evaluate the polynomial, usually eigenvalues.
        degree: Degree of the polynomial.
        lower: Lower bound of the damped part of the spectrum.
        upper: Upper bound of the spectrum.
        lambda_: Estimate of the eigenvalue separating the wanted and unwanted subspaces.

    Returns:
        The value of the polynomial at each point.
    """
    center, half_width, _ = get_filter_scaling_parameters(lower, upper, lambda_)
    basis = chebyshev.Chebyshev.basis(degree)
    numerator = basis((np.asarray(x) - center) / half_width)
    denominator = basis((lambda_ - center) / half_width)
    return numerator / denominator
