"""Utilities for per-vector filter degrees.

The filter takes an optional list of degrees aligned to the leading columns of the window. The list
must be sorted in ascending order, such that vectors reaching their degree leave the window from the
front. The filter never sorts the list itself.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from typing import Sequence

    from chfsi.typing import Array


def as_degrees(degrees: Sequence[float] | Array | None) -> Array | None:
    """Convert a sequence of degrees to a one-dimensional array.

    Args:
        degrees: Degrees, or `None`.

    Returns:
        The degrees as a float array, so that `inf` can mark vectors without a degree.
    """
    if degrees is None:
        return None
    degrees = np.asarray(degrees, dtype=np.float64)
    if degrees.ndim != 1:
        raise ValueError(f"degrees must be one-dimensional, got shape {degrees.shape}.")
    return degrees


def validate_degrees(degrees: Sequence[float] | Array) -> None:
    """Check that a list of degrees can be passed to the filter.

    Args:
        degrees: Degrees of each vector.

    Raises:
        ValueError: If the degrees are negative, not integers, or not sorted in ascending order.
    """
    degrees = as_degrees(degrees)
    assert degrees is not None
    finite = degrees[np.isfinite(degrees)]
    if np.any(np.isnan(degrees)):
        raise ValueError("degrees must not contain NaN.")
    if np.any(degrees < 0):
        raise ValueError("degrees must be non-negative.")
    if np.any(finite != np.round(finite)):
        raise ValueError("degrees must be integers or infinite.")
    if np.any(np.diff(degrees) < 0):
        raise ValueError("degrees must be sorted in ascending order.")


def effective_max_degree(degree: int, degrees: Sequence[float] | Array | None = None) -> int:
    """Get the number of recurrence steps taken by the filter.

    Args:
        degree: Configured maximum degree.
        degrees: Degrees of each vector, or `None`.

    Returns:
        The larger of :param:`degree` and the largest finite entry of :param:`degrees`.
    """
    degrees = as_degrees(degrees)
    if degrees is None or degrees.size == 0:
        return int(degree)
    finite = degrees[np.isfinite(degrees)]
    if finite.size == 0:
        return int(degree)
    return max(int(degree), int(finite.max()))


def count_retired(degrees: Array, offset: int, iteration: int) -> int:
    """Count the vectors at the front of the window that are filtered after an iteration.

    Args:
        degrees: Degrees of each vector, as returned by :func:`as_degrees`.
        offset: Number of entries of :param:`degrees` already retired.
        iteration: Degree of the iteration just applied.

    Returns:
        The number of leading entries from :param:`offset` with a degree no larger than
        :param:`iteration`.
    """
    count = 0
    while offset + count < degrees.size and degrees[offset + count] <= iteration:
        count += 1
    return count


def window_widths(
    width: int, degree: int, degrees: Sequence[float] | Array | None = None
) -> list[int]:
    """Get the width of the active window at each iteration of the filter.

    The sum of the widths is the number of vector applications returned by the filter.

    Args:
        width: Initial width of the window.
        degree: Configured maximum degree.
        degrees: Degrees of each vector, or `None`.

    Returns:
        The width of the window at each iteration from 1 to the effective maximum degree.
    """
    degmax = effective_max_degree(degree, degrees)
    degrees = as_degrees(degrees)
    widths: list[int] = []
    offset = 0
    for i in range(1, degmax + 1):
        widths.append(width)
        if degrees is not None:
            retired = count_retired(degrees, offset, i)
            offset += retired
            width -= retired
    return widths
