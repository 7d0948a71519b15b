"""Tests for :module:`~chfsi.diagnostics`."""

from __future__ import annotations

import numpy as np
import pytest

from chfsi import DenseMatrix, NonFiniteError
from chfsi.diagnostics import SEARCH_NAN, NonFiniteSearch


def test_find() -> None:
    """Test finding the matrices with non-finite elements."""
    a = np.eye(3)
    v = np.ones((3, 2))
    w = np.zeros((3, 2))
    search = NonFiniteSearch({"A": DenseMatrix(a), "V": DenseMatrix(v), "W": DenseMatrix(w)})
    assert search.find() == []

    v[0, 0] = np.inf
    w[1, 1] = np.nan
    assert search.find() == ["V", "W"]


def test_check() -> None:
    """Test that checks raise only when enabled."""
    a = np.eye(3)
    a[2, 2] = np.nan
    matrices = {"A": DenseMatrix(a)}

    search = NonFiniteSearch(matrices, enabled=False)
    search.check("disabled")
    assert search.ncheck == 0
    assert not search.enabled

    search = NonFiniteSearch(matrices, enabled=True)
    with pytest.raises(NonFiniteError) as excinfo:
        search.check("degree 2")
    assert search.ncheck == 1
    assert excinfo.value.names == ["A"]
    assert excinfo.value.context == "degree 2"
    assert "A" in str(excinfo.value)
    assert isinstance(excinfo.value, FloatingPointError)


def test_check_finite() -> None:
    """Test that checks pass for finite matrices."""
    search = NonFiniteSearch({"V": DenseMatrix(np.ones((4, 4)))}, enabled=True)
    for _ in range(3):
        search.check()
    assert search.ncheck == 3


def test_default_enabled() -> None:
    """Test that checks default to the environment setting."""
    search = NonFiniteSearch({"V": DenseMatrix(np.ones((2, 2)))})
    assert search.enabled is SEARCH_NAN
    assert isinstance(SEARCH_NAN, bool)
