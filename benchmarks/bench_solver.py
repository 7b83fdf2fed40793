"""
╔════════════════════════════════════════════════════════════════════════════╗
║  banachfp Benchmark Suite                                                  ║
║  Certified fixed-point iteration: cost of the a priori guarantee           ║
║                                                                            ║
║  Benchmarks:                                                               ║
║   1. Iteration count vs contraction factor (q → 1 blow-up)                 ║
║   2. Certified vs naive "small step" stopping on slow contractions         ║
║   3. Jacobi iteration on diagonally dominant systems                       ║
║   4. Batch fan-out throughput                                              ║
╚════════════════════════════════════════════════════════════════════════════╝

Usage:
    python -m benchmarks.bench_solver
"""

import math
import os
import statistics
import sys
import time

import numpy as np

# Ensure banachfp is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from banachfp.core.batch import Problem, solve_many
from banachfp.core.bounds import iterations_for
from banachfp.core.solver import ContractionSolver
from banachfp.spaces.linear import jacobi
from banachfp.spaces.metrics import absolute


def time_call(func, repeats=5):
    """Median wall time of ``func()`` in milliseconds."""
    times = []
    for _ in range(repeats):
        start = time.perf_counter()
        func()
        times.append((time.perf_counter() - start) * 1000.0)
    return statistics.median(times)


def naive_solve(transform, x0, threshold, max_iterations=10_000_000):
    """Stop when the last step is below the threshold (no guarantee)."""
    current = x0
    for i in range(max_iterations):
        nxt = transform(current)
        if abs(nxt - current) < threshold:
            return nxt, i + 1
        current = nxt
    return current, max_iterations


def run_benchmarks():
    solver = ContractionSolver()

    print("=" * 80)
    print("  BANACHFP: CERTIFIED FIXED-POINT ITERATION BENCHMARKS")
    print("=" * 80)
    print()

    # ── Benchmark 1 ──────────────────────────────────────────────
    print("┌──────────────────────────────────────────────────────────────┐")
    print("│  BENCHMARK 1: Iterations needed vs contraction factor       │")
    print("└──────────────────────────────────────────────────────────────┘")
    print(f"  {'q':>10} {'n (ε=1e-6)':>12} {'n (ε=1e-12)':>13} {'log(1/ε)/log(1/q)':>20}")
    print(f"  {'─' * 10} {'─' * 12} {'─' * 13} {'─' * 20}")
    for q in [0.1, 0.5, 0.9, 0.99, 0.999, 0.9999, 0.99999]:
        n6 = iterations_for(q, 1.0, 1e-6)
        n12 = iterations_for(q, 1.0, 1e-12)
        estimate = math.log(1e12) / math.log(1 / q)
        print(f"  {q:>10} {n6:>12} {n12:>13} {estimate:>20.1f}")
    print()

    # ── Benchmark 2 ──────────────────────────────────────────────
    print("┌──────────────────────────────────────────────────────────────┐")
    print("│  BENCHMARK 2: Certified vs naive stopping (target 100)      │")
    print("└──────────────────────────────────────────────────────────────┘")
    print(f"  {'q':>8} {'certified err':>14} {'bound':>12} {'naive err':>12} {'naive n':>9}")
    print(f"  {'─' * 8} {'─' * 14} {'─' * 12} {'─' * 12} {'─' * 9}")
    for q in [0.5, 0.9, 0.99, 0.999]:
        T = lambda x, q=q: q * x + (1 - q) * 100.0
        result = solver.solve(T, 0.0, absolute, q, 1e-3)
        naive, naive_n = naive_solve(T, 0.0, 1e-3)
        print(
            f"  {q:>8} {abs(result.fixed_point - 100):>14.3e} {result.error_bound:>12.3e} "
            f"{abs(naive - 100):>12.3e} {naive_n:>9}"
        )
    print()

    # ── Benchmark 3 ──────────────────────────────────────────────
    print("┌──────────────────────────────────────────────────────────────┐")
    print("│  BENCHMARK 3: Jacobi iteration (ε = 1e-10)                   │")
    print("└──────────────────────────────────────────────────────────────┘")
    print(f"  {'size':>6} {'q':>8} {'iterations':>11} {'time (ms)':>10} {'residual':>12}")
    print(f"  {'─' * 6} {'─' * 8} {'─' * 11} {'─' * 10} {'─' * 12}")
    rng = np.random.default_rng(42)
    for size in [10, 100, 500]:
        A = rng.uniform(-1.0, 1.0, size=(size, size))
        np.fill_diagonal(A, np.abs(A).sum(axis=1) * 1.25)
        b = rng.uniform(-1.0, 1.0, size=size)
        T = jacobi(A, b)
        result = T.solve(1e-10)
        elapsed = time_call(lambda: T.solve(1e-10))
        residual = float(np.abs(A @ result.fixed_point - b).max())
        print(f"  {size:>6} {T.factor:>8.4f} {result.iterations:>11} {elapsed:>10.2f} {residual:>12.3e}")
    print()

    # ── Benchmark 4 ──────────────────────────────────────────────
    print("┌──────────────────────────────────────────────────────────────┐")
    print("│  BENCHMARK 4: Batch fan-out (200 scalar problems)           │")
    print("└──────────────────────────────────────────────────────────────┘")
    problems = [
        Problem(lambda x, c=c: 0.9 * x + c, 0.0, absolute, 0.9, 1e-12)
        for c in range(200)
    ]
    print(f"  {'workers':>8} {'time (ms)':>10}")
    print(f"  {'─' * 8} {'─' * 10}")
    for workers in [1, 2, 4, 8]:
        elapsed = time_call(lambda: solve_many(problems, workers=workers))
        print(f"  {workers:>8} {elapsed:>10.2f}")
    print()


if __name__ == "__main__":
    run_benchmarks()
