"""Tests for :module:`~chfsi.util.chebyshev`."""

from __future__ import annotations

import numpy as np
import pytest

from chfsi import util


def test_scaling_parameters() -> None:
    """Test the scaling parameters of the filter."""
    center, half_width, sigma_scale = util.get_filter_scaling_parameters(0.0, 5.0, 4.5)
    assert center == pytest.approx(2.5)
    assert half_width == pytest.approx(2.5)
    assert sigma_scale == pytest.approx(1.25)


def test_recurrence_coefficients() -> None:
    """Test the first coefficients of the recurrence."""
    coefficients = list(util.recurrence_coefficients(2.5, 1.25, 3))
    assert len(coefficients) == 3
    np.testing.assert_allclose(coefficients[0], (0.5, 0.0))
    np.testing.assert_allclose(coefficients[1], (0.8 / 0.35, -1.25 / 0.35))
    sigma3 = 1.0 / (1.6 - 1.0 / 0.35)
    np.testing.assert_allclose(coefficients[2], (2.0 * sigma3 / 2.5, -sigma3 / 0.35))
    assert list(util.recurrence_coefficients(2.5, 1.25, 0)) == []


@pytest.mark.parametrize("degree", [1, 2, 3, 8])
def test_recurrence_vs_closed_form(degree: int) -> None:
    """Test that the scalar recurrence reproduces the closed form of the polynomial."""
    lower, upper, lambda_ = -0.5, 2.0, -1.0
    x = np.linspace(-1.0, 2.0, 13)
    center, half_width, sigma_scale = util.get_filter_scaling_parameters(lower, upper, lambda_)

    previous, current = np.zeros_like(x), np.ones_like(x)
    for alpha, beta in util.recurrence_coefficients(half_width, sigma_scale, degree):
        previous, current = current, alpha * (x - center) * current + beta * previous

    expected = util.filter_polynomial(x, degree, lower, upper, lambda_)
    np.testing.assert_allclose(current, expected, rtol=1e-10, atol=1e-12)


def test_filter_polynomial() -> None:
    """Test the closed form of the filter polynomial."""
    x = np.array([1.0, 2.0, 3.0, 4.0])
    np.testing.assert_allclose(util.filter_polynomial(x, 1, 0.0, 5.0, 4.5), (x - 2.5) / 2.0)
    np.testing.assert_allclose(
        util.filter_polynomial(x, 3, 0.0, 5.0, 4.5),
        [-2.65909090909, -1.61363636364, 1.61363636364, 2.65909090909],
    )
    assert util.filter_polynomial(4.5, 6, 0.0, 5.0, 4.5) == pytest.approx(1.0)

    # Eigenvalues in the interval are damped relative to those below it
    assert abs(util.filter_polynomial(1.0, 8, 1.0, 3.0, 0.0)) < 1e-3
    assert abs(util.filter_polynomial(-0.5, 8, 1.0, 3.0, 0.0)) > 0.1
