"""
banachfp: Certified Fixed-Point Iteration for Contraction Mappings
==================================================================

Computes fixed points of contraction maps with an a priori error bound
taken from the Banach fixed-point theorem: the number of iterations is
decided from the contraction factor q and the first step alone, before
iterating, so the result is guaranteed to lie within the requested
tolerance of the true fixed point.

Components:
    - core: error bounds, the solver loop, traces and batch solving
    - spaces: distance functions and linear (affine) contractions
    - analysis: empirical checks of a declared contraction factor

Usage:
    >>> from banachfp import solve, absolute
    >>> x, n, bound = solve(lambda x: 0.5 * x + 1, 0.0, absolute, 0.5, 0.01)
    >>> n
    8
    >>> x
    1.9921875
"""

__version__ = "1.0.0"
__author__ = "banachfp developers"

from banachfp.errors import (
    FixedPointError,
    InvalidFactor,
    InvalidTolerance,
    InvalidDistance,
    ContractionViolation,
    IterationLimitExceeded,
)
from banachfp.core import (
    ContractionSolver,
    SolveResult,
    IterationTrace,
    Problem,
    a_posteriori_bound,
    error_bound,
    iterate,
    iterations_for,
    orbit,
    solve,
    solve_many,
)
from banachfp.spaces import (
    LinearContraction,
    WeightedMetric,
    absolute,
    chebyshev,
    euclidean,
    jacobi,
    manhattan,
)
from banachfp.analysis import (
    ContractionCertificate,
    check_contraction,
    estimate_contraction_factor,
)
