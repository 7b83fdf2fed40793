"""
Certified fixed-point iteration: error bounds, the solver loop and batch fan-out.
"""

from banachfp.core.bounds import (
    a_posteriori_bound,
    error_bound,
    iterations_for,
    validate_factor,
    validate_tolerance,
)
from banachfp.core.trace import IterationTrace, orbit
from banachfp.core.solver import ContractionSolver, SolveResult, iterate, solve
from banachfp.core.batch import Problem, solve_many

__all__ = [
    'a_posteriori_bound',
    'error_bound',
    'iterations_for',
    'validate_factor',
    'validate_tolerance',
    'IterationTrace',
    'orbit',
    'ContractionSolver',
    'SolveResult',
    'iterate',
    'solve',
    'Problem',
    'solve_many',
]
