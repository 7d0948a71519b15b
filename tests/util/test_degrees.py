"""Tests for :module:`~chfsi.util.degrees`."""

from __future__ import annotations

import numpy as np
import pytest

from chfsi import util


def test_validate_degrees() -> None:
    """Test the validation of degree lists."""
    util.validate_degrees([])
    util.validate_degrees([0, 1, 1, 4])
    util.validate_degrees(np.array([2, 3, np.inf, np.inf]))
    for degrees in ([2, 1], [-1, 2], [1.5, 2], [1, np.nan], [np.inf, 3]):
        with pytest.raises(ValueError):
            util.validate_degrees(degrees)
    with pytest.raises(ValueError):
        util.validate_degrees(np.ones((2, 2)))


def test_effective_max_degree() -> None:
    """Test the number of iterations of the filter."""
    assert util.effective_max_degree(5) == 5
    assert util.effective_max_degree(5, []) == 5
    assert util.effective_max_degree(5, [1, 2, 3]) == 5
    assert util.effective_max_degree(2, [1, 2, 7]) == 7
    assert util.effective_max_degree(3, [1, np.inf]) == 3
    assert util.effective_max_degree(0, [np.inf]) == 0
    assert util.effective_max_degree(0, [0, 0]) == 0


def test_count_retired() -> None:
    """Test the counting of retired vectors."""
    degrees = util.as_degrees([1, 1, 2, 4, np.inf])
    assert degrees is not None
    assert util.count_retired(degrees, 0, 1) == 2
    assert util.count_retired(degrees, 2, 2) == 1
    assert util.count_retired(degrees, 3, 3) == 0
    assert util.count_retired(degrees, 3, 4) == 1
    assert util.count_retired(degrees, 4, 100) == 0
    assert util.count_retired(degrees, 5, 1) == 0


def test_window_widths() -> None:
    """Test the width of the window at each iteration."""
    assert util.window_widths(4, 3) == [4, 4, 4]
    assert util.window_widths(4, 4, [1, 1, 2, 4]) == [4, 2, 1, 1]
    assert util.window_widths(5, 2, [1, 3]) == [5, 4, 4]
    assert util.window_widths(3, 4, [2, 2, 2]) == [3, 3, 0, 0]
    assert util.window_widths(3, 0) == []
    assert sum(util.window_widths(4, 4, [1, 1, 2, 4])) == 8
