"""Chebyshev polynomial filter."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from chfsi import console, printing, util
from chfsi.diagnostics import SEARCH_NAN, NonFiniteSearch
from chfsi.filters.filter import BaseFilter
from chfsi.matrix import as_matrix

if TYPE_CHECKING:
    from typing import Any, Literal, Sequence

    from chfsi.matrix import MatrixBackend
    from chfsi.typing import Array


class ChebyshevFilter(BaseFilter):
    r"""Chebyshev polynomial filter for subspace iteration.

    The filter applies the polynomial

    .. math::
        p_k(\mathbf{A}) = \frac{T_k((\mathbf{A} - c) / e)}{T_k((\lambda - c) / e)}

    to a block of vectors, where :math:`T_k` is the Chebyshev polynomial of the first kind,
    :math:`c` and :math:`e` are the centre and half-width of the interval `[lower, upper]`. The
    components of the vectors along eigenvectors with eigenvalues in the interval are damped
    relative to those with eigenvalues below it, which accelerates the convergence of a subspace
    iteration towards the lowest eigenvectors.

    The polynomial is applied with the three-term recurrence, alternating between the block of
    vectors and the output block so that no third block is needed. Vectors may be given
    individual degrees, in which case they leave the recurrence as soon as their degree is reached.

    Args:
        matrix: Hermitian operator. Its diagonal is shifted during :meth:`kernel` and restored
            before returning.
        lower: Lower bound of the damped part of the spectrum.
        upper: Upper bound of the spectrum.
        lambda_: Estimate of the eigenvalue separating the wanted and unwanted subspaces.
        degrees: Degree of each vector, aligned to the leading columns of the filtered window.
    """

    degree: int = 10
    search_nan: bool = SEARCH_NAN
    verbose: bool = False
    _options: set[str] = {"degree", "search_nan", "verbose"}

    def __init__(  # noqa: D417
        self,
        matrix: MatrixBackend,
        lower: float,
        upper: float,
        lambda_: float,
        degrees: Sequence[float] | Array | None = None,
        **kwargs: Any,
    ):
        """Initialise the filter.

        Args:
            matrix: Hermitian operator.
            lower: Lower bound of the damped part of the spectrum.
            upper: Upper bound of the spectrum.
            lambda_: Estimate of the eigenvalue separating the wanted and unwanted subspaces.
            degrees: Degree of each vector, aligned to the leading columns of the filtered window.
                The degrees must be sorted in ascending order, which is not checked; see
                :func:`~chfsi.util.degrees.validate_degrees`. Entries larger than :attr:`degree`
                raise the number of iterations, and infinite entries never leave the recurrence.
                Entries of zero still receive one application of the operator, as vectors leave
                the recurrence after the first degree at the earliest. If `None`, all vectors are
                filtered with :attr:`degree`.
            degree: Maximum degree of the filter.
            search_nan: Whether to check the operator and vectors for non-finite elements after
                each application of the operator.
            verbose: Whether to print the coefficients and window of each degree.
        """
        self._matrix = matrix
        self._bounds = (lower, upper, lambda_)
        self._degrees = util.as_degrees(degrees)
        self.set_options(**kwargs)

    def __post_init__(self) -> None:
        """Hook called after :meth:`__init__`."""
        # Check the input
        if self.matrix.nrows != self.matrix.ncols:
            raise ValueError(f"matrix must be square, got shape {self.matrix.shape}.")
        if self.degree < 0:
            raise ValueError("degree must be non-negative.")

        # Print the input information
        lower, upper, lambda_ = self.bounds
        console.print(f"Matrix shape: [input]{self.matrix.shape}[/input]")
        console.print(
            f"Spectral interval: [input][{printing.format_float(lower, precision=6)}, "
            f"{printing.format_float(upper, precision=6)}][/input]"
        )
        console.print(f"Lambda: [input]{printing.format_float(lambda_, precision=6)}[/input]")
        if self.degrees is not None:
            console.print(f"Number of vector degrees: [input]{self.degrees.size}[/input]")

    def __post_kernel__(self) -> None:
        """Hook called after :meth:`kernel`."""
        assert self.result is not None
        console.print(
            f"Applied the operator [output]{self.result}[/output] times over "
            f"[output]{self.max_degree}[/output] degrees."
        )

    def kernel(  # type: ignore[override]
        self,
        vectors: MatrixBackend,
        output: MatrixBackend,
        start: int = 0,
        width: int | None = None,
    ) -> int:
        """Run the filter.

        Args:
            vectors: Block of vectors to be filtered. It is overwritten, as it is used to store
                alternate terms of the recurrence.
            output: Block in which the filtered vectors are stored.
            start: Index of the first column to filter.
            width: Number of columns to filter. If `None`, filter all columns from
                :param:`start`.

        Returns:
            The number of vector applications of the operator, i.e. the sum of the width of the
            window over the iterations.

        Notes:
            On return, columns `[start, start + width)` of :param:`output` contain the filtered
            vectors, and the operator is restored to its initial state.
        """
        if width is None:
            width = vectors.ncols - start

        # Check the window before touching anything
        for name, block in (("vectors", vectors), ("output", output)):
            if block.nrows != self.nrows:
                raise ValueError(
                    f"{name} must have {self.nrows} rows to match the matrix, got {block.nrows}."
                )
            block.assert_valid_submatrix(0, start, self.nrows, width)
        if self.degrees is not None and self.degrees.size > width:
            raise ValueError(
                f"Got {self.degrees.size} degrees for a window of {width} vectors."
            )

        # The recurrence is stored in both blocks, which must hold its type without truncation
        dtype = np.result_type(self.matrix.dtype, vectors.dtype, output.dtype, np.float64)
        for name, block in (("vectors", vectors), ("output", output)):
            if not np.can_cast(dtype, block.dtype):
                raise ValueError(
                    f"{name} has dtype {block.dtype}, which cannot hold the filtered vectors of "
                    f"dtype {dtype}."
                )

        degmax = self.max_degree
        if degmax == 0:
            self.result = 0
            return self.result

        search = NonFiniteSearch(
            {"A": self.matrix, "V": vectors, "W": output}, enabled=self.search_nan
        )
        table = printing.RecurrencePrinter()
        progress = printing.IterationsPrinter(degmax)
        progress.start()

        # A = A - cI
        diagonal = self.matrix.get_diagonal()
        self.matrix.shift_diagonal(-self.center)

        try:
            search.check("before the first application")
            total = self._apply_recurrence(vectors, output, start, width, search, table, progress)
        finally:
            # A = A + cI
            self.matrix.set_diagonal(diagonal)
            progress.stop()

        if self.verbose:
            table.print()

        self.result = total

        return self.result

    def _apply_recurrence(
        self,
        vectors: MatrixBackend,
        output: MatrixBackend,
        start: int,
        width: int,
        search: NonFiniteSearch,
        table: printing.RecurrencePrinter,
        progress: printing.IterationsPrinter,
    ) -> int:
        """Apply the recurrence to the shifted operator.

        Args:
            vectors: Block of vectors to be filtered.
            output: Block in which the filtered vectors are stored.
            start: Index of the first column to filter.
            width: Number of columns to filter.
            search: Checks for non-finite elements.
            table: Table of coefficients.
            progress: Progress bar.

        Returns:
            The number of vector applications of the operator.
        """
        degmax = self.max_degree
        degrees = self.degrees
        retired = 0
        total = 0

        coefficients = util.recurrence_coefficients(self.half_width, self.sigma_scale, degmax)
        for i, (alpha, beta) in enumerate(coefficients, start=1):
            vectors_view = vectors.view(start, width)
            output_view = output.view(start, width)

            # Odd degrees are written to the output and even degrees to the vectors
            if i % 2 == 0:
                self.matrix.hemm(alpha, output_view, beta, vectors_view)
            else:
                self.matrix.hemm(alpha, vectors_view, beta, output_view)

            search.check(f"degree {i}, alpha {alpha}, start {start}, width {width}")
            table.add_row(i, start, width, alpha, beta)
            progress.update(i)
            total += width

            # Retire the vectors that have reached their degree
            if degrees is not None:
                nretire = util.count_retired(degrees, retired, i)
                if i % 2 == 0 and nretire > 0:
                    output.view(start, nretire).copy_from(vectors.view(start, nretire))
                retired += nretire
                start += nretire
                width -= nretire

            if width == 0:
                break

        # The last even degree was written to the vectors
        if degmax % 2 == 0:
            output.view(start, width).copy_from(vectors.view(start, width))

        return total

    @property
    def matrix(self) -> MatrixBackend:
        """Get the operator."""
        return self._matrix

    @property
    def degrees(self) -> Array | None:
        """Get the degree of each vector."""
        return self._degrees

    @property
    def bounds(self) -> tuple[float, float, float]:
        """Get the spectral bounds `(lower, upper, lambda_)`."""
        return self._bounds

    @property
    def center(self) -> float:
        """Get the centre of the spectral interval."""
        return util.get_filter_scaling_parameters(*self.bounds)[0]

    @property
    def half_width(self) -> float:
        """Get the half-width of the spectral interval."""
        return util.get_filter_scaling_parameters(*self.bounds)[1]

    @property
    def sigma_scale(self) -> float:
        """Get the initial scale of the recurrence."""
        return util.get_filter_scaling_parameters(*self.bounds)[2]

    @property
    def max_degree(self) -> int:
        """Get the number of iterations of the recurrence."""
        return util.effective_max_degree(self.degree, self.degrees)


def chebyshev_filter(
    uplo: Literal["L", "U"] | None,
    matrix: MatrixBackend | Array,
    vectors: MatrixBackend | Array,
    output: MatrixBackend | Array,
    start: int,
    width: int,
    degree: int,
    degrees: Sequence[float] | Array | None = None,
    *,
    lambda_: float,
    lower: float,
    upper: float,
    search_nan: bool | None = None,
) -> int:
    """Apply the Chebyshev filter to a window of vectors.

    Args:
        uplo: Triangle of :param:`matrix` that is stored, `"L"` or `"U"`, or `None` for a general
            matrix. Only used when :param:`matrix` is an array.
        matrix: Hermitian operator.
        vectors: Block of vectors to be filtered, also used as a work space.
        output: Block in which the filtered vectors are stored.
        start: Index of the first column to filter.
        width: Number of columns to filter.
        degree: Maximum degree of the filter.
        degrees: Degree of each vector, sorted in ascending order and aligned to the leading
            columns of the window.
        lambda_: Estimate of the eigenvalue separating the wanted and unwanted subspaces.
        lower: Lower bound of the damped part of the spectrum.
        upper: Upper bound of the spectrum.
        search_nan: Whether to check for non-finite elements. Default is the value of the
            `CHFSI_SEARCH_NAN` environment variable.

    Returns:
        The number of vector applications of the operator.

    Notes:
        Arrays are modified in place. The filtered vectors are stored in columns
        `[start, start + width)` of :param:`output`.
    """
    options: dict[str, Any] = {"degree": degree}
    if search_nan is not None:
        options["search_nan"] = search_nan
    solver = ChebyshevFilter(
        as_matrix(matrix, uplo=uplo), lower, upper, lambda_, degrees=degrees, **options
    )
    return solver.kernel(as_matrix(vectors), as_matrix(output), start, width)
