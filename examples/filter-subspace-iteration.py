"""Example of a Chebyshev filtered subspace iteration.

The filter is applied to a block of trial vectors, which are then orthonormalised and rotated onto
the Ritz vectors of the operator within the subspace. The upper bound of the spectrum is estimated
with a few Lanczos steps, and the lower bound of the damped interval is updated to the largest Ritz
value in the block at each iteration.
"""

import numpy
import scipy.linalg
import scipy.sparse.linalg

from chfsi import ChebyshevFilter, DenseMatrix

nroots = 6
nblock = 10
size = 400

# Get a random symmetric matrix with a known spectrum
rng = numpy.random.default_rng(0)
eigvals = numpy.sort(rng.uniform(-1.0, 1.0, size))
q, _ = numpy.linalg.qr(rng.standard_normal((size, size)))
full = (q * eigvals) @ q.T

# Only the lower triangle is used by the filter, in Fortran order for BLAS
matrix = DenseMatrix(numpy.asfortranarray(numpy.tril(full)), uplo="L")

# Estimate the bounds of the spectrum
upper = scipy.sparse.linalg.eigsh(full, k=1, which="LA", tol=1e-2)[0][0] + 1e-2
lower = numpy.median(numpy.diag(full))
lambda_ = numpy.min(numpy.diag(full))

# Run the subspace iteration
vectors = DenseMatrix.zeros(size, nblock)
vectors.array[:] = rng.standard_normal((size, nblock))
output = DenseMatrix.zeros(size, nblock)
for cycle in range(20):
    solver = ChebyshevFilter(matrix, lower, upper, lambda_, degree=12)
    solver.kernel(vectors, output)

    # Rayleigh--Ritz
    basis, _ = numpy.linalg.qr(output.array)
    ritz_values, rotation = scipy.linalg.eigh(basis.T @ full @ basis)
    vectors.array[:] = basis @ rotation

    error = numpy.max(numpy.abs(ritz_values[:nroots] - eigvals[:nroots]))
    print(f"Cycle {cycle:2d}: max error in the lowest {nroots} eigenvalues = {error:.3e}")
    if error < 1e-10:
        break

    lower = ritz_values[-1]
    lambda_ = ritz_values[0]
