"""Metric spaces the solver ships distance functions and maps for."""

from banachfp.spaces.metrics import (
    WeightedMetric,
    absolute,
    chebyshev,
    euclidean,
    manhattan,
    vector_metric,
)
from banachfp.spaces.linear import LinearContraction, jacobi

__all__ = [
    'WeightedMetric',
    'absolute',
    'chebyshev',
    'euclidean',
    'manhattan',
    'vector_metric',
    'LinearContraction',
    'jacobi',
]
