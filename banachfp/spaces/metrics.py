"""
Metrics
=======

Distance functions d(a, b) for the spaces the solver iterates over.

Any callable satisfying the metric axioms works; these cover the common
cases: scalars, numpy vectors under the usual norms, and dict-valued
states under a weighted Euclidean distance.
"""

import math
from typing import Dict, Optional

import numpy as np


def absolute(a: float, b: float) -> float:
    """|a - b| on the real line (or complex plane)."""
    return abs(a - b)


def euclidean(a, b) -> float:
    """‖a - b‖₂ for array-likes."""
    return float(np.linalg.norm(np.subtract(a, b).ravel(), ord=2))


def chebyshev(a, b) -> float:
    """‖a - b‖∞, the sup norm; the natural metric for Jacobi iteration."""
    diff = np.subtract(a, b).ravel()
    if diff.size == 0:
        return 0.0
    return float(np.linalg.norm(diff, ord=np.inf))


def manhattan(a, b) -> float:
    """‖a - b‖₁ for array-likes."""
    return float(np.linalg.norm(np.subtract(a, b).ravel(), ord=1))


class WeightedMetric:
    """
    Weighted Euclidean metric on dict-valued points.

        d(v₁, v₂) = √( Σₖ wₖ · (v₁[k] - v₂[k])² )

    Keys missing from a point count as 0.0. Weights must be positive for
    d(a, b) = 0 ⟺ a = b to hold on the weighted keys.
    """

    def __init__(self, weights: Dict[str, float]):
        if not weights:
            raise ValueError("WeightedMetric needs at least one weight")
        for key, weight in weights.items():
            if not weight > 0:
                raise ValueError(f"weight for {key!r} must be positive, got {weight!r}")
        self.weights = dict(weights)

    def distance(self, v1: Dict[str, float], v2: Dict[str, float]) -> float:
        total = 0.0
        for key, weight in self.weights.items():
            a = v1.get(key, 0.0)
            b = v2.get(key, 0.0)
            total += weight * (a - b) ** 2
        return math.sqrt(total)

    def norm(self, v: Dict[str, float]) -> float:
        return self.distance(v, {})

    def __call__(self, v1: Dict[str, float], v2: Dict[str, float]) -> float:
        return self.distance(v1, v2)


_NORMS = {
    1: manhattan,
    2: euclidean,
    np.inf: chebyshev,
}


def vector_metric(ord: Optional[float] = 2):
    """Return the vector distance for norm order 1, 2 or inf."""
    if ord is None:
        ord = 2
    try:
        return _NORMS[ord]
    except KeyError:
        raise ValueError(f"unsupported norm order {ord!r}; use 1, 2 or inf") from None
