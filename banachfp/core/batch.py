"""
Batch Solving
=============

Task-parallel fan-out over independent fixed-point problems.

Each problem is solved in isolation by the same (stateless) solver, so
there is nothing to synchronise. Threads are used rather than processes
because transforms are usually closures or lambdas, which do not pickle;
maps that release the GIL (numpy) still run concurrently.
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional

from banachfp.core.solver import ContractionSolver, SolveResult

logger = logging.getLogger(__name__)


@dataclass
class Problem:
    """One fixed-point problem: T, x₀, d, q and ε."""
    transform: Callable[[Any], Any]
    x0: Any
    distance: Callable[[Any, Any], float]
    factor: float
    epsilon: float


def solve_many(
    problems: Iterable[Problem],
    workers: Optional[int] = None,
    solver: Optional[ContractionSolver] = None,
) -> List[SolveResult]:
    """
    Solve independent problems concurrently.

    Results are returned in input order. The first exception raised by
    any problem propagates to the caller.

    Usage:
        >>> problems = [Problem(lambda x, c=c: 0.5 * x + c, 0.0, dist, 0.5, 1e-6)
        ...             for c in range(10)]
        >>> results = solve_many(problems, workers=4)
    """
    problem_list = list(problems)
    solver = solver or ContractionSolver()
    if not problem_list:
        return []

    workers = workers or min(len(problem_list), os.cpu_count() or 1)
    if workers <= 1 or len(problem_list) == 1:
        return [_solve_one(solver, p) for p in problem_list]

    logger.debug(f"Solving {len(problem_list)} problems on {workers} threads")
    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(lambda p: _solve_one(solver, p), problem_list))


def _solve_one(solver: ContractionSolver, problem: Problem) -> SolveResult:
    return solver.solve(
        problem.transform,
        problem.x0,
        problem.distance,
        problem.factor,
        problem.epsilon,
    )
