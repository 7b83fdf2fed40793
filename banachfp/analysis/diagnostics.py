"""
Contraction Diagnostics
=======================

Empirical checks of a declared contraction factor.

Whether a map is a q-contraction cannot be decided in general, and the
solver's error bound is only as good as the declared q. These helpers
sample the Banach condition

    d(T(a), T(b)) ≤ q · d(a, b)

on caller-supplied points and report the worst pairwise Lipschitz ratio.
A passing sample never proves the map is a contraction; a failing one
proves it is not one with the declared factor.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence

from banachfp.core.bounds import validate_distance, validate_factor
from banachfp.errors import ContractionViolation

logger = logging.getLogger(__name__)


@dataclass
class ContractionCertificate:
    """
    Empirical evidence about a map's contraction factor.

    ``contraction_factor`` is the worst observed pairwise ratio, a lower
    estimate of the true Lipschitz constant.
    """
    contraction_factor: float
    samples_tested: int
    pairs_tested: int
    worst_case_factor: float
    best_case_factor: float
    mean_factor: float
    is_contraction: bool
    declared_factor: Optional[float] = None

    @property
    def consistent_with_declared(self) -> Optional[bool]:
        if self.declared_factor is None:
            return None
        return self.worst_case_factor <= self.declared_factor

    def __str__(self):
        status = "✓ CONTRACTION" if self.is_contraction else "✗ NOT CONTRACTION"
        declared = ""
        if self.declared_factor is not None:
            declared = f", declared q={self.declared_factor:.4f}"
        return (
            f"ContractionCertificate(k={self.contraction_factor:.4f} "
            f"[{status}]{declared}, n={self.samples_tested}, pairs={self.pairs_tested})"
        )


def _pairwise_ratios(
    transform: Callable[[Any], Any],
    samples: Sequence[Any],
    distance: Callable[[Any, Any], float],
):
    images = [transform(s) for s in samples]
    for i in range(len(samples)):
        for j in range(i + 1, len(samples)):
            d_before = validate_distance(distance(samples[i], samples[j]))
            if d_before == 0.0:
                continue
            d_after = validate_distance(distance(images[i], images[j]))
            yield (i, j), d_after / d_before


def estimate_contraction_factor(
    transform: Callable[[Any], Any],
    samples: Sequence[Any],
    distance: Callable[[Any, Any], float],
    declared_factor: Optional[float] = None,
) -> ContractionCertificate:
    """
    Estimate the contraction factor of ``transform`` from sample points.

    Computes d(T(a), T(b)) / d(a, b) for every pair of distinct samples.
    Needs at least two distinct samples to say anything; with fewer the
    certificate reports factor 1.0 and ``is_contraction=False``.
    """
    if declared_factor is not None:
        declared_factor = validate_factor(declared_factor)

    samples = list(samples)
    factors: List[float] = [ratio for _, ratio in _pairwise_ratios(transform, samples, distance)]

    if not factors:
        return ContractionCertificate(
            contraction_factor=1.0,
            samples_tested=len(samples),
            pairs_tested=0,
            worst_case_factor=1.0,
            best_case_factor=1.0,
            mean_factor=1.0,
            is_contraction=False,
            declared_factor=declared_factor,
        )

    worst = max(factors)
    logger.debug(f"Sampled {len(factors)} pairs, worst Lipschitz ratio {worst:.6g}")

    return ContractionCertificate(
        contraction_factor=worst,
        samples_tested=len(samples),
        pairs_tested=len(factors),
        worst_case_factor=worst,
        best_case_factor=min(factors),
        mean_factor=sum(factors) / len(factors),
        is_contraction=worst < 1.0,
        declared_factor=declared_factor,
    )


def check_contraction(
    transform: Callable[[Any], Any],
    samples: Sequence[Any],
    distance: Callable[[Any, Any], float],
    factor: float,
    rtol: float = 1e-9,
) -> ContractionCertificate:
    """
    Sample-check the declared factor and raise on the first violation.

    Raises:
        ContractionViolation: some pair has d(T(a), T(b)) > q · d(a, b);
            ``step`` is the index of the pair in enumeration order
    """
    q = validate_factor(factor)
    samples = list(samples)

    for index, ((i, j), ratio) in enumerate(_pairwise_ratios(transform, samples, distance)):
        if ratio > q * (1.0 + rtol):
            logger.warning(
                f"Samples {i} and {j} violate declared factor: ratio {ratio:.6g} > q={q}"
            )
            raise ContractionViolation(index, ratio, q)

    return estimate_contraction_factor(transform, samples, distance, declared_factor=q)
