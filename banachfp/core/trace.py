"""Iteration traces: the orbit x₀, T(x₀), T²(x₀), ... of a map."""

from dataclasses import dataclass, field
from typing import Callable, Generic, Iterator, List, TypeVar

P = TypeVar('P')


@dataclass
class IterationTrace(Generic[P]):
    """
    Materialised prefix of the iteration sequence.

    ``points[k]`` is x_k and ``step_distances[k]`` is d(x_{k+1}, x_k), so a
    trace of n steps holds n + 1 points and n distances.
    """
    points: List[P] = field(default_factory=list)
    step_distances: List[float] = field(default_factory=list)

    @property
    def steps(self) -> int:
        return max(0, len(self.points) - 1)

    @property
    def last(self) -> P:
        return self.points[-1]

    def observed_ratios(self) -> List[float]:
        """Successive step ratios d(x_{k+1}, x_k) / d(x_k, x_{k-1})."""
        ratios = []
        for prev, cur in zip(self.step_distances, self.step_distances[1:]):
            if prev > 0:
                ratios.append(cur / prev)
        return ratios

    def __len__(self) -> int:
        return len(self.points)


def orbit(transform: Callable[[P], P], x0: P) -> Iterator[P]:
    """
    Lazily yield x₀, x₁ = T(x₀), x₂ = T(x₁), ...

    The sequence is infinite; take a prefix with ``itertools.islice``.
    """
    current = x0
    while True:
        yield current
        current = transform(current)
