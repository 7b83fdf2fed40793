"""
Error Bounds
============

A priori error bounds for Picard iteration of a contraction mapping.

Mathematical Background:
    Let (X, d) be a complete metric space and T: X → X a contraction with
    factor q ∈ [0, 1):

        d(T(x), T(y)) ≤ q · d(x, y)    ∀ x, y ∈ X

    For x_{n+1} = T(x_n) the successive steps shrink geometrically,
    d(x_{k+1}, x_k) ≤ q^k · d₁ with d₁ = d(x₁, x₀), so by the triangle
    inequality and the geometric series, for every m ≥ n:

        d(x_m, x_n) ≤ q^n · d₁ / (1 - q)

    Letting m → ∞ gives the a priori bound on the distance to the unique
    fixed point x*:

        d(x*, x_n) ≤ q^n · d₁ / (1 - q)

    It depends only on q, d₁ and n, so the number of iterations needed for
    a tolerance ε is known before iterating:

        q^n < ε (1 - q) / d₁   ⟺   n > log(ε (1 - q) / d₁) / log(q)

    Both logarithms are negative when the ratio is below one, so the
    division flips the inequality the right way round.

    The a posteriori bound uses the last step instead of the first:

        d(x*, x_n) ≤ q / (1 - q) · d(x_n, x_{n-1})
"""

import math
import numbers
import sys

from banachfp.errors import InvalidDistance, InvalidFactor, InvalidTolerance


def validate_factor(q: float) -> float:
    """Return ``q`` as a float, raising InvalidFactor unless 0 ≤ q < 1."""
    if isinstance(q, bool) or not isinstance(q, numbers.Real):
        raise InvalidFactor(q, f"contraction factor must be a real number, got {q!r}")
    q = float(q)
    # NaN fails both comparisons
    if not (0.0 <= q < 1.0):
        raise InvalidFactor(q)
    return q


def validate_tolerance(epsilon: float) -> float:
    """Return ``epsilon`` as a float, raising InvalidTolerance unless ε > 0."""
    if isinstance(epsilon, bool) or not isinstance(epsilon, numbers.Real):
        raise InvalidTolerance(epsilon)
    epsilon = float(epsilon)
    if not epsilon > 0.0:
        raise InvalidTolerance(epsilon)
    return epsilon


def validate_distance(value: float) -> float:
    """Return a measured distance as a float, raising InvalidDistance if unusable."""
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise InvalidDistance(value) from None
    if not (0.0 <= value < math.inf):
        raise InvalidDistance(value)
    return value


def _validate_count(n: int) -> int:
    if isinstance(n, bool) or not isinstance(n, numbers.Integral) or n < 0:
        raise ValueError(f"iteration count must be a non-negative integer, got {n!r}")
    return int(n)


def _bound(q: float, d1: float, n: int) -> float:
    # Inputs already validated; d1 > 0 and 0 < q < 1.
    qn = q ** n
    if qn < sys.float_info.min:
        # q^n underflowed; work in logs so a huge d₁ still registers
        return math.exp(n * math.log(q) + math.log(d1) - math.log1p(-q))
    return qn * d1 / (1.0 - q)


def error_bound(q: float, d1: float, n: int) -> float:
    """
    A priori bound q^n · d₁ / (1 - q) on the distance from x_n to x*.

    Args:
        q: Contraction factor, 0 ≤ q < 1
        d1: First-step distance d(T(x₀), x₀)
        n: Iteration index

    Returns:
        The bound. 0.0 whenever d₁ = 0, and for q = 0 at every n ≥ 1
        (T(x₀) is then already the fixed point). For q = 0 and n = 0 the
        bound is d₁ itself.
    """
    q = validate_factor(q)
    d1 = validate_distance(d1)
    n = _validate_count(n)

    if d1 == 0.0:
        return 0.0
    if q == 0.0:
        return 0.0 if n >= 1 else d1
    return _bound(q, d1, n)


def iterations_for(q: float, d1: float, epsilon: float) -> int:
    """
    Smallest n with ``error_bound(q, d1, n) < epsilon``.

    Solve: q^n < ε (1 - q) / d₁  ⟹  n = ⌊log(ε (1 - q) / d₁) / log(q)⌋ + 1

    The log of the ratio is taken term by term so that extreme ε or d₁
    cannot overflow or underflow the ratio itself. The closed form is then
    checked against ``error_bound`` so rounding in the logarithms can never
    return a count that is one too small or one too large.

    Raises:
        InvalidTolerance: ε ≤ 0 or NaN
        InvalidFactor: q outside [0, 1)
    """
    q = validate_factor(q)
    epsilon = validate_tolerance(epsilon)
    d1 = validate_distance(d1)

    if d1 == 0.0:
        return 0
    if q == 0.0:
        return 1
    if math.isinf(epsilon):
        return 0

    log_ratio = math.log(epsilon) + math.log1p(-q) - math.log(d1)
    n = max(0, math.floor(log_ratio / math.log(q)) + 1)

    while _bound(q, d1, n) >= epsilon:
        n += 1
    while n > 0 and _bound(q, d1, n - 1) < epsilon:
        n -= 1
    return n


def a_posteriori_bound(q: float, last_step: float) -> float:
    """
    A posteriori bound q / (1 - q) · d(x_n, x_{n-1}).

    Usually tighter than the a priori bound once iteration has run, but it
    is only known afterwards, so it is reported and never used to stop.
    """
    q = validate_factor(q)
    last_step = validate_distance(last_step)
    if q == 0.0 or last_step == 0.0:
        return 0.0
    return q / (1.0 - q) * last_step
