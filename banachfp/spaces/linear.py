"""
Linear Contractions
===================

Affine maps T(x) = A x + b on ℝⁿ.

T is a contraction under a vector norm ‖·‖ exactly when the induced
operator norm ‖A‖ < 1, with

    ‖T(x) - T(y)‖ = ‖A (x - y)‖ ≤ ‖A‖ · ‖x - y‖

so the factor q = ‖A‖ is computed rather than declared. Norm orders 1, 2
and ∞ are supported (max column sum, spectral norm, max row sum).

The classic application is Jacobi iteration for A x = b: splitting
A = D + R gives x ↦ D⁻¹ (b - R x), a contraction in the sup norm whenever
A is strictly diagonally dominant by rows.
"""

from typing import Optional

import numpy as np

from banachfp.core.solver import ContractionSolver, SolveResult
from banachfp.errors import InvalidFactor
from banachfp.spaces.metrics import vector_metric


class LinearContraction:
    """
    The affine contraction x ↦ A x + b.

    Attributes:
        factor: ‖A‖ in the chosen norm order, guaranteed < 1
        distance: Matching vector distance, usable as the solver's d

    Usage:
        >>> T = LinearContraction([[0.5, 0.1], [0.0, 0.4]], [1.0, 2.0])
        >>> x, n, bound = T.solve(1e-10)
    """

    def __init__(self, matrix, offset, ord: Optional[float] = np.inf):
        self.matrix = np.asarray(matrix, dtype=float)
        self.offset = np.asarray(offset, dtype=float)

        if self.matrix.ndim != 2 or self.matrix.shape[0] != self.matrix.shape[1]:
            raise ValueError(f"matrix must be square, got shape {self.matrix.shape}")
        if self.offset.shape != (self.matrix.shape[0],):
            raise ValueError(
                f"offset must have shape ({self.matrix.shape[0]},), "
                f"got {self.offset.shape}"
            )

        self.ord = np.inf if ord is None else ord
        self.distance = vector_metric(self.ord)
        self.factor = float(np.linalg.norm(self.matrix, ord=self.ord))

        if not self.factor < 1.0:
            raise InvalidFactor(
                self.factor,
                f"operator norm ‖A‖ = {self.factor:.6g} (ord={self.ord}) is not < 1; "
                f"the map is not a contraction in this norm",
            )

    @property
    def dimension(self) -> int:
        return self.matrix.shape[0]

    def __call__(self, x) -> np.ndarray:
        return self.matrix @ np.asarray(x, dtype=float) + self.offset

    def exact_fixed_point(self) -> np.ndarray:
        """Solve (I - A) x = b directly."""
        return np.linalg.solve(np.eye(self.dimension) - self.matrix, self.offset)

    def solve(
        self,
        epsilon: float,
        x0=None,
        solver: Optional[ContractionSolver] = None,
    ) -> SolveResult:
        """Certified solve with this map's own factor and distance; x₀ defaults to 0."""
        if x0 is None:
            x0 = np.zeros(self.dimension)
        solver = solver or ContractionSolver()
        return solver.solve(self, np.asarray(x0, dtype=float), self.distance, self.factor, epsilon)

    def __repr__(self):
        return f"LinearContraction(n={self.dimension}, q={self.factor:.6g}, ord={self.ord})"


def jacobi(system, rhs) -> LinearContraction:
    """
    Jacobi iteration map for the linear system ``system @ x = rhs``.

    Returns the contraction x ↦ D⁻¹ (rhs - R x) under the sup norm, whose
    fixed point is the solution of the system.

    Raises:
        ValueError: zero on the diagonal or mismatched shapes
        InvalidFactor: the system is not strictly diagonally dominant by rows
    """
    A = np.asarray(system, dtype=float)
    b = np.asarray(rhs, dtype=float)
    if A.ndim != 2 or A.shape[0] != A.shape[1]:
        raise ValueError(f"system must be square, got shape {A.shape}")

    diag = np.diag(A)
    if np.any(diag == 0.0):
        raise ValueError("Jacobi iteration needs a non-zero diagonal")

    remainder = A - np.diag(diag)
    return LinearContraction(-remainder / diag[:, None], b / diag, ord=np.inf)
