"""
Errors
======

Exception hierarchy for contraction solving.

Precondition failures (bad factor, bad tolerance, bad distance) are raised
once, at entry, before any map evaluation that depends on them. They also
subclass ``ValueError`` so callers validating inputs generically still
catch them.

Runtime failures:
  - ContractionViolation: an observed step breaks the declared factor,
    which invalidates the a priori bound
  - IterationLimitExceeded: the planned iteration count exceeds the
    solver's configured cap
"""

from typing import Optional


class FixedPointError(Exception):
    """Base class for all banachfp errors."""


class InvalidFactor(FixedPointError, ValueError):
    """Contraction factor outside ``[0, 1)``."""

    def __init__(self, factor: float, message: Optional[str] = None):
        self.factor = factor
        super().__init__(
            message or f"contraction factor must satisfy 0 <= q < 1, got {factor!r}"
        )


class InvalidTolerance(FixedPointError, ValueError):
    """Target tolerance that is not strictly positive."""

    def __init__(self, epsilon: float):
        self.epsilon = epsilon
        super().__init__(f"tolerance must be strictly positive, got {epsilon!r}")


class InvalidDistance(FixedPointError, ValueError):
    """A distance function returned a negative, NaN or infinite value."""

    def __init__(self, value: float):
        self.value = value
        super().__init__(
            f"distance must be a finite non-negative number, got {value!r}"
        )


class ContractionViolation(FixedPointError):
    """
    An observed step is longer than the declared factor allows.

    ``observed`` is the measured ratio ``d(x_{k+1}, x_k) / d(x_k, x_{k-1})``
    (or ``d(T(a), T(b)) / d(a, b)`` for sampled pairs) and ``declared`` the
    factor the caller promised.
    """

    def __init__(self, step: int, observed: float, declared: float):
        self.step = step
        self.observed = observed
        self.declared = declared
        super().__init__(
            f"step {step}: observed contraction ratio {observed:.6g} exceeds "
            f"declared factor {declared:.6g}; the error bound is not valid"
        )


class IterationLimitExceeded(FixedPointError):
    """The iteration count needed for the tolerance exceeds the solver cap."""

    def __init__(self, required: int, limit: int):
        self.required = required
        self.limit = limit
        super().__init__(
            f"{required} iterations required for the requested tolerance, "
            f"limit is {limit}"
        )
