"""Matrix storage used by the filters.

The filters only interact with the operator and the vector blocks through the
:class:`MatrixBackend` interface, which mirrors the small set of operations a distributed dense
matrix library provides: a scaled Hermitian matrix product with accumulation, zero-copy views over
a range of columns, access to the diagonal, an entrywise norm, and a bounds check. Implementations
that distribute the storage over a process group must perform these as collective operations.

:class:`DenseMatrix` is the serial implementation on top of :mod:`numpy` arrays, using the
:mod:`scipy.linalg.blas` routines for the Hermitian product.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import numpy as np
import scipy.linalg.blas

if TYPE_CHECKING:
    from typing import Any, Literal

    from chfsi.typing import Array


class MatrixBackend(ABC):
    """Base class for matrix storage."""

    @abstractmethod
    def hemm(self, alpha: float, b: MatrixBackend, beta: float, c: MatrixBackend) -> None:
        """Compute `c := alpha * self @ b + beta * c` in place.

        Args:
            alpha: Scaling of the product.
            b: Matrix multiplied from the right.
            beta: Scaling of the accumulated matrix. If zero, :param:`c` is not read.
            c: Matrix to accumulate into.
        """
        pass

    @abstractmethod
    def view(self, start: int, width: int) -> MatrixBackend:
        """Get a view of a range of columns, sharing the storage.

        Args:
            start: Index of the first column.
            width: Number of columns.

        Returns:
            The view of columns `[start, start + width)`.
        """
        pass

    @abstractmethod
    def get_diagonal(self) -> Array:
        """Get a copy of the diagonal."""
        pass

    @abstractmethod
    def set_diagonal(self, diagonal: Array) -> None:
        """Set the diagonal in place."""
        pass

    @abstractmethod
    def shift_diagonal(self, shift: float) -> None:
        """Add a constant to the diagonal in place."""
        pass

    @abstractmethod
    def entrywise_norm(self, p: float = 1) -> float:
        """Get the entrywise :param:`p`-norm, treating the matrix as a vector."""
        pass

    @abstractmethod
    def copy_from(self, other: MatrixBackend) -> None:
        """Copy the elements of another matrix of the same shape into this one."""
        pass

    @property
    @abstractmethod
    def shape(self) -> tuple[int, int]:
        """Get the shape of the matrix."""
        pass

    @property
    @abstractmethod
    def dtype(self) -> np.dtype[Any]:
        """Get the data type of the elements."""
        pass

    @property
    def nrows(self) -> int:
        """Get the number of rows."""
        return self.shape[0]

    @property
    def ncols(self) -> int:
        """Get the number of columns."""
        return self.shape[1]

    def assert_valid_submatrix(self, i: int, j: int, height: int, width: int) -> None:
        """Check that a submatrix lies within the matrix.

        Args:
            i: First row of the submatrix.
            j: First column of the submatrix.
            height: Number of rows of the submatrix.
            width: Number of columns of the submatrix.

        Raises:
            ValueError: If the submatrix exceeds the bounds of the matrix.
        """
        if i < 0 or j < 0 or height < 0 or width < 0:
            raise ValueError(
                f"Invalid submatrix ({i}, {j}, {height}, {width}): indices and extents must be "
                "non-negative."
            )
        if i + height > self.nrows or j + width > self.ncols:
            raise ValueError(
                f"Submatrix ({i}, {j}, {height}, {width}) exceeds the bounds of a matrix with "
                f"shape {self.shape}."
            )


class DenseMatrix(MatrixBackend):
    """Dense matrix stored in a :mod:`numpy` array.

    Args:
        array: The array. It is wrapped without a copy, so that operations on the matrix modify the
            array of the caller.
        uplo: For a Hermitian matrix, the triangle that is stored and referenced, `"L"` or `"U"`.
            If `None`, the matrix is treated as general and the full array is used.
    """

    def __init__(self, array: Array, uplo: Literal["L", "U"] | None = None):
        """Initialise the object."""
        array = np.asarray(array)
        if array.ndim != 2:
            raise ValueError(f"array must be two-dimensional, got shape {array.shape}.")
        if uplo not in (None, "L", "U"):
            raise ValueError(f"Invalid uplo: {uplo}. Must be 'L', 'U', or None.")
        if uplo is not None and array.shape[0] != array.shape[1]:
            raise ValueError(f"A Hermitian matrix must be square, got shape {array.shape}.")
        self._array = array
        self._uplo = uplo

    @classmethod
    def zeros(
        cls,
        nrows: int,
        ncols: int,
        dtype: Any = np.float64,
        uplo: Literal["L", "U"] | None = None,
    ) -> DenseMatrix:
        """Create a matrix of zeros in column-major storage.

        Args:
            nrows: Number of rows.
            ncols: Number of columns.
            dtype: Data type of the elements.
            uplo: Stored triangle, for a Hermitian matrix.

        Returns:
            The matrix.
        """
        return cls(np.zeros((nrows, ncols), dtype=dtype, order="F"), uplo=uplo)

    def hemm(self, alpha: float, b: MatrixBackend, beta: float, c: MatrixBackend) -> None:
        """Compute `c := alpha * self @ b + beta * c` in place.

        Args:
            alpha: Scaling of the product.
            b: Matrix multiplied from the right.
            beta: Scaling of the accumulated matrix. If zero, :param:`c` is not read.
            c: Matrix to accumulate into.
        """
        b_array = _as_array(b)
        c_array = _as_array(c)
        if b.nrows != self.ncols or c.nrows != self.nrows or b.ncols != c.ncols:
            raise ValueError(
                f"Incompatible shapes for product: {self.shape}, {b.shape}, {c.shape}."
            )
        if b.ncols == 0:
            return

        if self.uplo is None:
            product = alpha * (self.array @ b_array)
            if beta == 0:
                c_array[...] = product
            else:
                c_array *= beta
                c_array += product
            return

        # Only the stored triangle is referenced by ?symm and ?hemm
        prefix, dtype, _ = scipy.linalg.blas.find_best_blas_type((self.array, b_array, c_array))
        name = "hemm" if prefix in ("c", "z") else "symm"
        func = scipy.linalg.blas.get_blas_funcs(name, dtype=dtype)
        lower = int(self.uplo == "L")
        if beta == 0:
            result = func(alpha, self.array, b_array, lower=lower)
        else:
            result = func(alpha, self.array, b_array, beta=beta, c=c_array, lower=lower)
        c_array[...] = result

    def view(self, start: int, width: int) -> DenseMatrix:
        """Get a view of a range of columns, sharing the storage.

        Args:
            start: Index of the first column.
            width: Number of columns.

        Returns:
            The view of columns `[start, start + width)`.
        """
        self.assert_valid_submatrix(0, start, self.nrows, width)
        return DenseMatrix(self.array[:, start : start + width])

    def get_diagonal(self) -> Array:
        """Get a copy of the diagonal."""
        return self.array.diagonal().copy()

    def set_diagonal(self, diagonal: Array) -> None:
        """Set the diagonal in place."""
        idx = np.arange(min(self.shape))
        self.array[idx, idx] = diagonal

    def shift_diagonal(self, shift: float) -> None:
        """Add a constant to the diagonal in place."""
        idx = np.arange(min(self.shape))
        self.array[idx, idx] += shift

    def entrywise_norm(self, p: float = 1) -> float:
        """Get the entrywise :param:`p`-norm, treating the matrix as a vector."""
        if self.array.size == 0:
            return 0.0
        return float(np.linalg.norm(self.array.ravel(), ord=p))

    def copy_from(self, other: MatrixBackend) -> None:
        """Copy the elements of another matrix of the same shape into this one."""
        if other.shape != self.shape:
            raise ValueError(f"Cannot copy a matrix of shape {other.shape} into {self.shape}.")
        self.array[...] = _as_array(other)

    @property
    def array(self) -> Array:
        """Get the underlying array."""
        return self._array

    @property
    def uplo(self) -> Literal["L", "U"] | None:
        """Get the stored triangle."""
        return self._uplo

    @property
    def shape(self) -> tuple[int, int]:
        """Get the shape of the matrix."""
        return self.array.shape  # type: ignore[return-value]

    @property
    def dtype(self) -> np.dtype[Any]:
        """Get the data type of the elements."""
        return self.array.dtype

    def __repr__(self) -> str:
        """Return a string representation of the matrix."""
        return f"DenseMatrix(shape={self.shape}, dtype={self.dtype}, uplo={self.uplo})"


def _as_array(matrix: MatrixBackend) -> Array:
    """Get the array of a :class:`DenseMatrix`."""
    if not isinstance(matrix, DenseMatrix):
        raise TypeError(f"Expected a DenseMatrix, got {type(matrix).__name__}.")
    return matrix.array


def as_matrix(
    matrix: MatrixBackend | Array, uplo: Literal["L", "U"] | None = None
) -> MatrixBackend:
    """Wrap an array in a :class:`DenseMatrix`, unless it is already a :class:`MatrixBackend`.

    Args:
        matrix: The matrix or array.
        uplo: Stored triangle, for a Hermitian array.

    Returns:
        The matrix.
    """
    if isinstance(matrix, MatrixBackend):
        return matrix
    return DenseMatrix(matrix, uplo=uplo)
