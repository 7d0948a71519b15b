"""Example of the Chebyshev filter with a different degree for each vector.

When some vectors in the block are closer to convergence than others, they can be filtered with a
lower degree. The degrees are aligned to the leading columns of the window and must be sorted in
ascending order. Vectors leave the recurrence once they reach their degree, which reduces the
number of applications of the operator.
"""

import numpy

from chfsi import chebyshev_filter, util

size = 200
nvec = 8

# Get a random Hermitian matrix and block of vectors
rng = numpy.random.default_rng(1)
full = rng.standard_normal((size, size)) + 1.0j * rng.standard_normal((size, size))
full = 0.5 * (full + full.T.conj()) / numpy.sqrt(size)
vectors = numpy.asfortranarray(rng.standard_normal((size, nvec)).astype(complex))
output = numpy.zeros_like(vectors)

# The last two vectors have no degree of their own, and are filtered with the maximum degree
degrees = [2, 2, 4, 6, 8, 10]
util.validate_degrees(degrees)

# Filter the vectors, storing only the upper triangle of the matrix
stored = numpy.triu(full)
count = chebyshev_filter(
    "U",
    stored,
    vectors.copy(order="F"),
    output,
    0,
    nvec,
    10,
    degrees,
    lambda_=-1.8,
    lower=0.0,
    upper=2.1,
)
print(f"Applications of the operator: {count}")
print(f"Widths of the window: {util.window_widths(nvec, 10, degrees)}")

# Compare to the closed form of the filter for each vector, using the stored triangle
eigvals, eigvecs = numpy.linalg.eigh(util.hermitian_from_triangle(stored, "U"))
for i in range(nvec):
    degree = degrees[i] if i < len(degrees) else 10
    factor = util.filter_polynomial(eigvals, degree, 0.0, 2.1, -1.8)
    reference = eigvecs @ (factor * (eigvecs.T.conj() @ vectors[:, i]))
    error = util.scaled_error(output[:, i], reference)
    print(f"Vector {i}: degree {degree:2d}, error = {error:.3e}")
