"""
*************************************************************
chfsi: Chebyshev filters for subspace iteration eigensolvers
*************************************************************

Chebyshev filtered subspace iteration finds the lowest eigenpairs of a large Hermitian matrix by
repeatedly applying a polynomial filter to a block of trial vectors, followed by a Rayleigh--Ritz
projection. The filter amplifies the components of the vectors in the wanted part of the spectrum
and damps the components above an estimate of the largest wanted eigenvalue. This package provides
the filter, with support for vectors that require different polynomial degrees.

.. list-table::
   :header-rows: 1
   :widths: 20 80

   * - Object
     - Description
   * - :class:`~chfsi.filters.chebyshev.ChebyshevFilter`
     - Chebyshev polynomial filter applied to a window of columns of a block of vectors.
   * - :func:`~chfsi.filters.chebyshev.chebyshev_filter`
     - Functional interface to the Chebyshev filter, accepting arrays.
   * - :class:`~chfsi.matrix.MatrixBackend`
     - Interface of the matrix storage used by the filters.
   * - :class:`~chfsi.matrix.DenseMatrix`
     - Dense matrix stored in a :mod:`numpy` array.

The behaviour of the package can be configured with the following environment variables:

.. list-table::
   :header-rows: 1
   :widths: 20 80

   * - Variable
     - Description
   * - `CHFSI_QUIET`
     - If `1` or `true`, disable all console output.
   * - `CHFSI_SEARCH_NAN`
     - If `1` or `true`, check for non-finite elements after each application of the operator by
       default.


Submodules
----------

.. autosummary::
    :toctree: _autosummary

    chfsi.filters
    chfsi.matrix
    chfsi.diagnostics
    chfsi.util

"""

__version__ = "1.0.0"

import numpy
import scipy

from chfsi.printing import console, quiet
from chfsi.matrix import MatrixBackend, DenseMatrix
from chfsi.diagnostics import NonFiniteError
from chfsi.filters import ChebyshevFilter, chebyshev_filter
