"""
Tests for the contraction solver.

Validates:
  - the certified solve on the half-contraction x ↦ 0.5x + 1
  - raw iteration semantics (zero steps, exact step count, fixed points)
  - degenerate fast paths (q = 0, x₀ already fixed)
  - precondition errors raised before any work is done
  - iteration cap, contraction checking and trace recording
  - result unpacking and certificate rendering
"""

import logging
import math

import pytest

from banachfp.core.solver import ContractionSolver, SolveResult, iterate, solve
from banachfp.errors import (
    ContractionViolation,
    InvalidDistance,
    InvalidFactor,
    InvalidTolerance,
    IterationLimitExceeded,
)
from banachfp.spaces.metrics import absolute


def half_step(x):
    """x ↦ 0.5x + 1, fixed point 2, factor 0.5."""
    return 0.5 * x + 1


class CountingMap:
    """Wraps a map and counts its applications."""

    def __init__(self, func):
        self.func = func
        self.calls = 0

    def __call__(self, x):
        self.calls += 1
        return self.func(x)


# ---------- solve ----------

class TestSolve:
    def setup_method(self):
        self.solver = ContractionSolver()

    def test_half_contraction_scenario(self):
        result = self.solver.solve(half_step, 0.0, absolute, 0.5, 0.01)
        assert result.first_step_distance == 1.0
        assert result.iterations == 8
        assert result.fixed_point == 1.9921875  # 2 - 2 * 0.5**8
        assert result.error_bound == 0.0078125
        assert result.error_bound < 0.01
        assert abs(2.0 - result.fixed_point) <= result.error_bound

    def test_unpacks_as_triple(self):
        x, n, bound = self.solver.solve(half_step, 0.0, absolute, 0.5, 0.01)
        assert (x, n, bound) == (1.9921875, 8, 0.0078125)

    def test_map_applied_exactly_n_times(self):
        counted = CountingMap(half_step)
        result = self.solver.solve(counted, 0.0, absolute, 0.5, 1e-9)
        assert counted.calls == result.iterations

    def test_cosine(self):
        # |cos'| = |sin| <= sin(1) < 0.85 on [0, 1], which the orbit of 0 never leaves
        result = self.solver.solve(math.cos, 0.0, absolute, 0.85, 1e-10)
        dottie = 0.7390851332151607
        assert result.error_bound < 1e-10
        assert abs(result.fixed_point - dottie) <= result.error_bound + 1e-15

    def test_slow_contraction_still_certified(self):
        # Steps get tiny long before the iterate is close to the fixed point 0
        result = self.solver.solve(lambda x: 0.999 * x, 1.0, absolute, 0.999, 1e-3)
        assert result.error_bound < 1e-3
        assert abs(result.fixed_point) <= result.error_bound * (1 + 1e-9)

    def test_zero_factor(self):
        counted = CountingMap(lambda x: 3.0)
        result = self.solver.solve(counted, 10.0, absolute, 0.0, 1e-9)
        assert result.iterations == 1
        assert result.fixed_point == 3.0
        assert result.error_bound == 0.0
        assert result.a_posteriori_bound == 0.0
        assert counted.calls == 1

    def test_start_at_fixed_point(self):
        result = self.solver.solve(half_step, 2.0, absolute, 0.5, 1e-12)
        assert result.iterations == 0
        assert result.fixed_point == 2.0
        assert result.error_bound == 0.0
        assert result.a_posteriori_bound == 0.0

    def test_loose_tolerance_returns_start(self):
        start = 0.0
        result = self.solver.solve(half_step, start, absolute, 0.5, 100.0)
        assert result.iterations == 0
        assert result.fixed_point is start
        assert result.a_posteriori_bound is None

    def test_a_posteriori_bound(self):
        result = self.solver.solve(half_step, 0.0, absolute, 0.5, 0.01)
        # q / (1 - q) * |x_8 - x_7| = 1.0 * 0.0078125
        assert result.a_posteriori_bound == pytest.approx(0.0078125)
        assert abs(2.0 - result.fixed_point) <= result.a_posteriori_bound

    def test_result_metadata(self):
        result = self.solver.solve(half_step, 0.0, absolute, 0.5, 0.01)
        assert isinstance(result, SolveResult)
        assert result.epsilon == 0.01
        assert result.factor == 0.5
        assert result.wall_time_seconds >= 0.0
        assert result.trace is None

    def test_module_level_solve(self):
        x, n, bound = solve(half_step, 0.0, absolute, 0.5, 0.01)
        assert n == 8
        assert x == 1.9921875


# ---------- preconditions ----------

class TestSolvePreconditions:
    def setup_method(self):
        self.solver = ContractionSolver()

    @pytest.mark.parametrize("q", [-0.5, 1.0, 2.0, float('nan')])
    def test_invalid_factor_before_any_call(self, q):
        counted = CountingMap(half_step)
        with pytest.raises(InvalidFactor):
            self.solver.solve(counted, 0.0, absolute, q, 0.01)
        assert counted.calls == 0

    @pytest.mark.parametrize("epsilon", [0.0, -1.0, float('nan')])
    def test_invalid_tolerance_before_any_call(self, epsilon):
        counted = CountingMap(half_step)
        with pytest.raises(InvalidTolerance):
            self.solver.solve(counted, 0.0, absolute, 0.5, epsilon)
        assert counted.calls == 0

    @pytest.mark.parametrize("value", [-1.0, float('nan'), float('inf')])
    def test_invalid_distance(self, value):
        with pytest.raises(InvalidDistance):
            self.solver.solve(half_step, 0.0, lambda a, b: value, 0.5, 0.01)

    def test_transform_errors_propagate(self):
        def broken(x):
            raise ZeroDivisionError("boom")

        with pytest.raises(ZeroDivisionError):
            self.solver.solve(broken, 0.0, absolute, 0.5, 0.01)


# ---------- iterate ----------

class TestIterate:
    def setup_method(self):
        self.solver = ContractionSolver()

    def test_zero_iterations_returns_start(self):
        start = object()
        assert self.solver.iterate(lambda x: None, start, None, None, 0) is start

    def test_exact_step_count(self):
        counted = CountingMap(half_step)
        assert self.solver.iterate(counted, 0.0, absolute, 0.5, 3) == 1.75
        assert counted.calls == 3

    @pytest.mark.parametrize("n", range(6))
    def test_fixed_point_is_idempotent(self, n):
        assert self.solver.iterate(half_step, 2.0, absolute, 0.5, n) == 2.0

    def test_no_convergence_test(self):
        # Runs every requested step even though it has long stopped moving
        counted = CountingMap(lambda x: 0.0)
        self.solver.iterate(counted, 1.0, absolute, 0.0, 50)
        assert counted.calls == 50

    @pytest.mark.parametrize("n", [-1, 2.5, True])
    def test_invalid_count(self, n):
        with pytest.raises(ValueError):
            self.solver.iterate(half_step, 0.0, absolute, 0.5, n)

    def test_module_level_iterate(self):
        assert iterate(half_step, 0.0, absolute, 0.5, 2) == 1.5


# ---------- configuration ----------

class TestSolverConfiguration:
    def test_iteration_cap(self):
        counted = CountingMap(half_step)
        solver = ContractionSolver(max_iterations=5)
        with pytest.raises(IterationLimitExceeded) as exc_info:
            solver.solve(counted, 0.0, absolute, 0.5, 0.01)
        assert exc_info.value.required == 8
        assert exc_info.value.limit == 5
        # only the first step was taken
        assert counted.calls == 1

    def test_iteration_cap_not_hit(self):
        solver = ContractionSolver(max_iterations=8)
        assert solver.solve(half_step, 0.0, absolute, 0.5, 0.01).iterations == 8

    def test_invalid_configuration(self):
        with pytest.raises(ValueError):
            ContractionSolver(max_iterations=-1)
        with pytest.raises(ValueError):
            ContractionSolver(rtol=-1e-3)

    def test_contraction_violation(self):
        # 0.9x is a contraction, but not with the declared factor 0.5
        solver = ContractionSolver(check_contraction=True)
        with pytest.raises(ContractionViolation) as exc_info:
            solver.solve(lambda x: 0.9 * x, 1.0, absolute, 0.5, 1e-3)
        assert exc_info.value.step == 2
        assert exc_info.value.observed == pytest.approx(0.9)
        assert exc_info.value.declared == 0.5

    def test_contraction_violation_is_logged(self, caplog):
        solver = ContractionSolver(check_contraction=True)
        with caplog.at_level(logging.WARNING, logger="banachfp.core.solver"):
            with pytest.raises(ContractionViolation):
                solver.solve(lambda x: 0.9 * x, 1.0, absolute, 0.5, 1e-3)
        assert "violates declared factor" in caplog.text

    def test_contraction_check_passes_for_valid_map(self):
        solver = ContractionSolver(check_contraction=True)
        x, n, bound = solver.solve(half_step, 0.0, absolute, 0.5, 1e-9)
        assert abs(2.0 - x) <= bound

    def test_contraction_check_on_iterate(self):
        solver = ContractionSolver(check_contraction=True)
        with pytest.raises(ContractionViolation):
            solver.iterate(lambda x: 2.0 * x, 1.0, absolute, 0.5, 5)

    def test_contraction_check_needs_metric(self):
        solver = ContractionSolver(check_contraction=True)
        with pytest.raises(ValueError):
            solver.iterate(half_step, 0.0, None, 0.5, 3)

    def test_record_trace(self):
        solver = ContractionSolver(record_trace=True)
        result = solver.solve(half_step, 0.0, absolute, 0.5, 0.01)
        trace = result.trace
        assert len(trace) == 9
        assert trace.steps == 8
        assert trace.points[:4] == [0.0, 1.0, 1.5, 1.75]
        assert trace.last == result.fixed_point
        assert trace.step_distances[0] == 1.0
        assert len(trace.step_distances) == 8
        for ratio in trace.observed_ratios():
            assert ratio == pytest.approx(0.5)


# ---------- certificate ----------

class TestCertificate:
    def test_certificate_text(self):
        result = ContractionSolver().solve(half_step, 0.0, absolute, 0.5, 0.01)
        cert = result.to_certificate()
        assert "CONTRACTION FIXED-POINT ERROR CERTIFICATE" in cert
        assert "1.9921875" in cert
        assert "Iterations:" in cert

    def test_long_point_is_truncated(self):
        result = ContractionSolver().solve(
            lambda v: [0.5 * a for a in v],
            [1.0] * 20,
            lambda a, b: max(abs(x - y) for x, y in zip(a, b)),
            0.5,
            1e-3,
        )
        lines = result.to_certificate().splitlines()
        widths = {len(line) for line in lines}
        assert len(widths) == 1

    def test_convergence_rate_descriptions(self):
        def rate(q):
            return ContractionSolver().solve(lambda x: q * x, 1.0, absolute, q, 1e-3).convergence_rate

        assert "Exact" in rate(0.0)
        assert "Very fast" in rate(0.05)
        assert "Fast" in rate(0.3)
        assert "Moderate" in rate(0.7)
        assert "Slow" in rate(0.95)
