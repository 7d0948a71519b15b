"""Configuration for :mod:`pytest`."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import pytest

from chfsi import quiet, util

if TYPE_CHECKING:
    from typing import Any, Callable

    from chfsi.typing import Array

    HermitianGetter = Callable[[int, Any], Array]


DTYPES = {
    "float64": np.float64,
    "complex128": np.complex128,
}

UPLOS = {
    "lower": "L",
    "upper": "U",
}


def pytest_generate_tests(metafunc):  # type: ignore
    if "dtype" in metafunc.fixturenames:
        metafunc.parametrize("dtype", DTYPES.values(), ids=DTYPES.keys())
    if "uplo" in metafunc.fixturenames:
        metafunc.parametrize("uplo", UPLOS.values(), ids=UPLOS.keys())


@pytest.fixture(autouse=True, scope="session")
def quiet_console() -> None:
    """Fixture to suppress console output during the tests."""
    quiet()


class Helper:
    """Helper class for tests."""

    @staticmethod
    def are_equal_arrays(array1: Array, array2: Array, tol: float = 1e-8) -> bool:
        """Check if two arrays are equal to within a threshold."""
        print(
            f"Error in {object.__repr__(array1)} and {object.__repr__(array2)}: "
            f"{np.max(np.abs(array1 - array2), initial=0.0)}"
        )
        return np.allclose(array1, array2, atol=tol)

    @staticmethod
    def are_parallel_columns(array1: Array, array2: Array, tol: float = 1e-8) -> bool:
        """Check if the columns of two arrays are parallel to within a threshold."""
        checks: list[bool] = []
        for i in range(array1.shape[1]):
            x, y = array1[:, i], array2[:, i]
            overlap = abs(np.vdot(x, y)) / (np.linalg.norm(x) * np.linalg.norm(y))
            checks.append(bool(abs(overlap - 1.0) < tol))
        return all(checks)

    @staticmethod
    def filter_reference(
        matrix: Array, vectors: Array, degree: int, lower: float, upper: float, lambda_: float
    ) -> Array:
        """Apply the filter polynomial to vectors via the eigendecomposition of the matrix."""
        eigvals, eigvecs = np.linalg.eigh(matrix)
        factors = util.filter_polynomial(eigvals, degree, lower, upper, lambda_)
        return eigvecs @ (factors[:, None] * (eigvecs.T.conj() @ vectors))


@pytest.fixture(scope="session")
def helper() -> Helper:
    """Fixture for the :class:`Helper` class."""
    return Helper()


def get_hermitian(size: int, dtype: Any = np.float64, seed: int = 0) -> Array:
    """Get a random Hermitian matrix with eigenvalues in `[-1, 1]`."""
    rng = np.random.default_rng(seed)
    matrix = rng.random((size, size)) - 0.5
    if np.issubdtype(dtype, np.complexfloating):
        matrix = matrix + 1.0j * (rng.random((size, size)) - 0.5)
    matrix = 0.5 * (matrix + matrix.T.conj())
    matrix /= np.max(np.abs(np.linalg.eigvalsh(matrix)))
    return np.asarray(matrix, dtype=dtype)


@pytest.fixture(scope="session")
def hermitian() -> HermitianGetter:
    """Fixture for a getter function for random Hermitian matrices."""
    return get_hermitian
