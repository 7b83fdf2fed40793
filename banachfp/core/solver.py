"""
Contraction Solver
==================

Fixed-point iteration with a certified a priori error bound.

Given a contraction T with declared factor q, a start point x₀ and a
tolerance ε, the solver measures the first step d₁ = d(T(x₀), x₀), derives
from q and d₁ alone how many iterations n guarantee

    q^n · d₁ / (1 - q) < ε

and then applies T exactly n times. Termination never depends on how small
the last step looked: for slowly contracting maps a small step says little
about the distance to the fixed point, while the a priori bound is a
guarantee (Banach, 1922).

Usage:
    solver = ContractionSolver()
    result = solver.solve(
        transform=lambda x: 0.5 * x + 1,
        x0=0.0,
        distance=lambda a, b: abs(a - b),
        factor=0.5,
        epsilon=0.01,
    )
    x, n, bound = result          # 1.9921875, 8, 0.0078125
    print(result.to_certificate())
"""

import logging
import numbers
import time
from dataclasses import dataclass
from typing import Callable, Generic, Iterator, Optional, Tuple, TypeVar

from banachfp.core.bounds import (
    a_posteriori_bound,
    error_bound,
    iterations_for,
    validate_distance,
    validate_factor,
    validate_tolerance,
)
from banachfp.core.trace import IterationTrace
from banachfp.errors import ContractionViolation, IterationLimitExceeded

P = TypeVar('P')
Transform = Callable[[P], P]
Distance = Callable[[P, P], float]

logger = logging.getLogger(__name__)


@dataclass
class SolveResult(Generic[P]):
    """
    Result of a certified solve.

    Unpacks as ``(fixed_point, iterations, error_bound)``. The true fixed
    point x* satisfies d(x*, fixed_point) ≤ error_bound < epsilon.
    """
    fixed_point: P
    iterations: int
    error_bound: float
    epsilon: float
    factor: float
    first_step_distance: float
    a_posteriori_bound: Optional[float] = None
    wall_time_seconds: float = 0.0
    trace: Optional[IterationTrace] = None

    def __iter__(self) -> Iterator:
        yield self.fixed_point
        yield self.iterations
        yield self.error_bound

    @property
    def convergence_rate(self) -> str:
        """Human-readable convergence rate."""
        if self.factor == 0.0:
            return "Exact after one step"
        elif self.factor < 0.1:
            return "Very fast linear convergence"
        elif self.factor < 0.5:
            return "Fast linear convergence"
        elif self.factor < 0.9:
            return "Moderate linear convergence"
        else:
            return "Slow linear convergence"

    def to_certificate(self) -> str:
        """Generate a human-readable error certificate."""
        point = repr(self.fixed_point)
        if len(point) > 29:
            point = point[:26] + "..."
        post = (
            f"{self.a_posteriori_bound:>29.6e}"
            if self.a_posteriori_bound is not None
            else f"{'n/a':>29s}"
        )
        return "\n".join([
            "╔══════════════════════════════════════════════════╗",
            "║     CONTRACTION FIXED-POINT ERROR CERTIFICATE    ║",
            "╠══════════════════════════════════════════════════╣",
            f"║  Fixed point ≈    {point:>29s}  ║",
            f"║  Contraction q:   {self.factor:>29.6f}  ║",
            f"║  Convergence:     {self.convergence_rate:>29s}  ║",
            f"║  First step d₁:   {self.first_step_distance:>29.6e}  ║",
            f"║  Iterations:      {self.iterations:>29d}  ║",
            f"║  Tolerance ε:     {self.epsilon:>29.6e}  ║",
            f"║  A priori bound:  {self.error_bound:>29.6e}  ║",
            f"║  A posteriori:    {post}  ║",
            "╠══════════════════════════════════════════════════╣",
            "║  d(x*, x_n) ≤ q^n · d₁ / (1 - q) < ε             ║",
            "╚══════════════════════════════════════════════════╝",
        ])


class ContractionSolver:
    """
    Certified fixed-point solver for contraction mappings.

    The solver holds configuration only; every call is independent, so
    one instance can be shared freely.

    Args:
        check_contraction: Verify on every observed step that
            d(x_{k+1}, x_k) ≤ q · d(x_k, x_{k-1}) and raise
            ContractionViolation otherwise. Costs one distance call per step.
        record_trace: Keep every iterate in ``SolveResult.trace``.
        max_iterations: Refuse (IterationLimitExceeded) to run more steps
            than this. None means no cap.
        rtol, atol: Rounding slack for the contraction check.
        enable_logging: Configure root logging at DEBUG level.
    """

    DEFAULT_RTOL = 1e-9
    DEFAULT_ATOL = 1e-12

    def __init__(
        self,
        check_contraction: bool = False,
        record_trace: bool = False,
        max_iterations: Optional[int] = None,
        rtol: float = DEFAULT_RTOL,
        atol: float = DEFAULT_ATOL,
        enable_logging: bool = False,
    ):
        if max_iterations is not None and max_iterations < 0:
            raise ValueError(f"max_iterations must be >= 0, got {max_iterations!r}")
        if rtol < 0 or atol < 0:
            raise ValueError("rtol and atol must be non-negative")
        self.check_contraction = check_contraction
        self.record_trace = record_trace
        self.max_iterations = max_iterations
        self.rtol = rtol
        self.atol = atol

        if enable_logging:
            logging.basicConfig(level=logging.DEBUG)

    def iterate(
        self,
        transform: Transform,
        x0: P,
        distance: Optional[Distance],
        factor: Optional[float],
        iterations: int,
    ) -> P:
        """
        Apply ``transform`` exactly ``iterations`` times starting from x₀.

        No convergence test is made. ``distance`` and ``factor`` are only
        consulted when contraction checking is enabled.
        """
        if isinstance(iterations, bool) or not isinstance(iterations, numbers.Integral) or iterations < 0:
            raise ValueError(f"iterations must be a non-negative integer, got {iterations!r}")
        if self.check_contraction:
            if distance is None or factor is None:
                raise ValueError("contraction checking needs both distance and factor")
            factor = validate_factor(factor)

        final, _, _, _ = self._advance(transform, x0, distance, factor, iterations)
        return final

    def solve(
        self,
        transform: Transform,
        x0: P,
        distance: Distance,
        factor: float,
        epsilon: float,
    ) -> SolveResult:
        """
        Compute an approximate fixed point certified to lie within ε of x*.

        Args:
            transform: The contraction T: X → X
            x0: Starting point
            distance: Metric d(a, b) on X
            factor: Declared contraction factor q, 0 ≤ q < 1
            epsilon: Target tolerance, ε > 0

        Returns:
            SolveResult with ``error_bound < epsilon``

        Raises:
            InvalidFactor, InvalidTolerance: caller preconditions
            InvalidDistance: d(T(x₀), x₀) is negative, NaN or infinite
            IterationLimitExceeded: more steps needed than max_iterations
            ContractionViolation: an observed step breaks q (if checking)
        """
        q = validate_factor(factor)
        epsilon = validate_tolerance(epsilon)

        start_time = time.perf_counter()

        x1 = transform(x0)
        d1 = validate_distance(distance(x1, x0))
        n = iterations_for(q, d1, epsilon)

        if d1 == 0.0:
            logger.debug("x0 is already a fixed point; no iterations needed")
        elif q == 0.0:
            logger.debug("q = 0: T(x0) is the fixed point")
        logger.debug(f"Planned {n} iterations for q={q}, d1={d1:.6g}, epsilon={epsilon:.6g}")

        if self.max_iterations is not None and n > self.max_iterations:
            raise IterationLimitExceeded(n, self.max_iterations)

        final, previous, last_step, trace = self._advance(
            transform, x0, distance, q, n, first=(x1, d1),
        )

        bound = error_bound(q, d1, n)

        if n == 0:
            post = 0.0 if d1 == 0.0 else None
        else:
            if last_step is None:
                last_step = validate_distance(distance(final, previous))
            post = a_posteriori_bound(q, last_step)

        return SolveResult(
            fixed_point=final,
            iterations=n,
            error_bound=bound,
            epsilon=epsilon,
            factor=q,
            first_step_distance=d1,
            a_posteriori_bound=post,
            wall_time_seconds=time.perf_counter() - start_time,
            trace=trace,
        )

    def _advance(
        self,
        transform: Transform,
        x0: P,
        distance: Optional[Distance],
        factor: Optional[float],
        iterations: int,
        first: Optional[Tuple[P, float]] = None,
    ) -> Tuple[P, Optional[P], Optional[float], Optional[IterationTrace]]:
        """
        Run the iteration loop.

        ``first`` carries an already computed (x₁, d₁) so T is not applied
        to x₀ twice. Returns (x_n, x_{n-1}, d(x_n, x_{n-1}), trace); the
        last step is None when no distance was measured.
        """
        trace = IterationTrace(points=[x0]) if self.record_trace else None
        checking = self.check_contraction and distance is not None
        measure = distance is not None and (checking or trace is not None)

        previous = None
        current = x0
        last_step = None

        for k in range(iterations):
            if k == 0 and first is not None:
                nxt, step = first
            else:
                nxt = transform(current)
                step = validate_distance(distance(nxt, current)) if measure else None

            if checking and last_step is not None:
                self._check_step(k + 1, step, last_step, factor)

            if trace is not None:
                trace.points.append(nxt)
                if step is not None:
                    trace.step_distances.append(step)

            previous, current, last_step = current, nxt, step

        return current, previous, last_step, trace

    def _check_step(self, step_index: int, step: float, last_step: float, factor: float):
        allowed = factor * last_step * (1.0 + self.rtol) + self.atol
        if step > allowed:
            observed = step / last_step if last_step > 0 else float('inf')
            logger.warning(
                f"Step {step_index} violates declared factor: "
                f"ratio {observed:.6g} > q={factor}"
            )
            raise ContractionViolation(step_index, observed, factor)


def iterate(
    transform: Transform,
    x0: P,
    distance: Optional[Distance],
    factor: Optional[float],
    iterations: int,
    **options,
) -> P:
    """Apply ``transform`` exactly ``iterations`` times (see ContractionSolver.iterate)."""
    return ContractionSolver(**options).iterate(transform, x0, distance, factor, iterations)


def solve(
    transform: Transform,
    x0: P,
    distance: Distance,
    factor: float,
    epsilon: float,
    **options,
) -> SolveResult:
    """
    One-shot certified solve.

    Keyword options are passed to ContractionSolver.

    Usage:
        x, n, bound = solve(math.cos, 0.0, lambda a, b: abs(a - b), 0.85, 1e-8)
    """
    return ContractionSolver(**options).solve(transform, x0, distance, factor, epsilon)
