r"""Polynomial filters for subspace iteration.

A filter applies a polynomial of a Hermitian operator to a block of vectors,

.. math::
    \mathbf{W} = p(\mathbf{A}) \mathbf{V},

such that the components of the vectors in the wanted part of the spectrum of :math:`\mathbf{A}`
are amplified relative to the rest. Filters are constructed from the operator and the bounds of its
spectrum, and applied by calling :meth:`~chfsi.filters.filter.BaseFilter.kernel` with the input and
output blocks

>>> import numpy
>>> from chfsi import quiet, DenseMatrix, ChebyshevFilter
>>> quiet()  # Suppress output
>>> matrix = DenseMatrix(numpy.diag([1.0, 2.0, 3.0, 4.0]), uplo="L")
>>> vectors = DenseMatrix(numpy.eye(4))
>>> output = DenseMatrix.zeros(4, 4)
>>> solver = ChebyshevFilter(matrix, 0.0, 5.0, 4.5, degree=3)
>>> solver.kernel(vectors, output)
12

The return value counts the applications of the operator to single vectors, summed over the degrees
of the polynomial.


Submodules
----------

.. autosummary::
    :toctree:

    filter
    chebyshev

"""

from chfsi.filters.chebyshev import ChebyshevFilter, chebyshev_filter
