"""Linear algebra."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

import numpy as np

if TYPE_CHECKING:
    from typing import Literal

    from chfsi.typing import Array


def hermitian_from_triangle(matrix: Array, uplo: Literal["L", "U"]) -> Array:
    """Build the full Hermitian matrix from one of its stored triangles.

    Args:
        matrix: The matrix, of which only one triangle is referenced.
        uplo: Which triangle is stored, `"L"` for lower or `"U"` for upper.

    Returns:
        The Hermitian matrix. The diagonal is taken as real.
    """
    if uplo == "L":
        triangle = np.tril(matrix, k=-1)
    elif uplo == "U":
        triangle = np.triu(matrix, k=1)
    else:
        raise ValueError(f"Invalid uplo: {uplo}. Must be 'L' or 'U'.")
    diagonal = np.diag(np.diag(matrix).real)
    return triangle + triangle.T.conj() + diagonal


def scaled_error(matrix1: Array, matrix2: Array, ord: int | float = np.inf) -> float:
    """Return the scaled error between two matrices.

    Args:
        matrix1: The first matrix.
        matrix2: The second matrix.
        ord: The order of the norm to be used for the error.

    Returns:
        The scaled error between the two matrices.
    """
    matrix1 = np.atleast_1d(matrix1 / max(np.max(np.abs(matrix1)), 1))
    matrix2 = np.atleast_1d(matrix2 / max(np.max(np.abs(matrix2)), 1))
    return cast(float, np.linalg.norm((matrix1 - matrix2).ravel(), ord=ord))
