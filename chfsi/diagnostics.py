"""Scanning for non-finite values during filtering.

Scanning is enabled with the `search_nan` option of the filters, which defaults to the value of the
`CHFSI_SEARCH_NAN` environment variable. It computes the entrywise norm of the operator and of both
vector blocks, and so costs an extra pass over each of them before the first and after every
application of the operator. It is intended for debugging only.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import numpy as np

from chfsi import console

if TYPE_CHECKING:
    from chfsi.matrix import MatrixBackend

SEARCH_NAN: bool = os.environ.get("CHFSI_SEARCH_NAN", "").lower() in ("1", "true")
"""Default for the `search_nan` option of the filters."""


class NonFiniteError(FloatingPointError):
    """Raised when a matrix contains NaN or infinite elements during filtering."""

    def __init__(self, names: list[str], context: str = ""):
        """Initialise the object."""
        message = f"Non-finite elements found in {', '.join(names)}"
        if context:
            message += f" ({context})"
        super().__init__(message + ".")
        self.names = names
        self.context = context


class NonFiniteSearch:
    """Check a set of named matrices for non-finite elements.

    Args:
        matrices: The matrices to check, keyed by the name used in reports.
        enabled: Whether to perform the checks. When disabled, :meth:`check` does nothing.
    """

    def __init__(self, matrices: dict[str, MatrixBackend], enabled: bool = SEARCH_NAN):
        """Initialise the object."""
        self._matrices = matrices
        self._enabled = enabled
        self._ncheck = 0

    def find(self) -> list[str]:
        """Get the names of the matrices with non-finite elements."""
        return [
            name
            for name, matrix in self.matrices.items()
            if not np.isfinite(matrix.entrywise_norm(1))
        ]

    def check(self, context: str = "") -> None:
        """Check the matrices, and abort if any contain non-finite elements.

        Args:
            context: Description of the point of the calculation, included in the report.

        Raises:
            NonFiniteError: If any of the matrices contain non-finite elements.
        """
        if not self.enabled:
            return
        self._ncheck += 1
        names = self.find()
        if names:
            for name in names:
                console.print(f"[bad]{name} contains non-finite elements[/bad]")
            if context:
                console.print(f"[bad]{context}[/bad]")
            raise NonFiniteError(names, context)

    @property
    def matrices(self) -> dict[str, MatrixBackend]:
        """Get the matrices to check."""
        return self._matrices

    @property
    def enabled(self) -> bool:
        """Get a flag indicating whether checks are performed."""
        return self._enabled

    @property
    def ncheck(self) -> int:
        """Get the number of checks performed."""
        return self._ncheck
