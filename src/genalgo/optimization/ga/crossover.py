"""Crossover operators for real-coded chromosomes.

Both operators are pure: they take parent chromosomes and return one new
chromosome. Assigning it to an :class:`Individual` (and hence clamping it) and
evaluating it is the caller's job.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Sequence

import numpy as np

from genalgo.errors import StrategyError

from .bounds import Bounds

__all__ = [
    "DEFAULT_ALPHA",
    "CrossoverKind",
    "BlxAlphaCrossover",
    "SimplexCrossover",
    "blx_alpha_crossover",
    "simplex_crossover",
    "crossover_factory",
]

DEFAULT_ALPHA = 0.36

Chromosome = Sequence[float] | np.ndarray


class CrossoverKind(str, Enum):
    BLX_ALPHA = "blx_alpha"
    SIMPLEX = "simplex"

    @classmethod
    def parse(cls, value: "CrossoverKind | str") -> "CrossoverKind":
        try:
            return cls(str(value.value if isinstance(value, Enum) else value).lower())
        except ValueError as exc:
            valid = [kind.value for kind in cls]
            raise StrategyError(
                f"Unknown crossover kind '{value}'",
                context={"crossover": value, "valid_types": valid},
            ) from exc


def blx_alpha_crossover(
    parent_a: Chromosome,
    parent_b: Chromosome,
    bounds: Bounds,
    rng: np.random.Generator,
    *,
    alpha: float = DEFAULT_ALPHA,
) -> np.ndarray:
    """Blend crossover sampling each gene inside the alpha-expanded interval.

    For gene ``i`` with ``x = min(a_i, b_i)``, ``y = max(a_i, b_i)`` and
    ``w = y - x`` the child gene is uniform on
    ``[max(x - alpha*w, lower), min(y + alpha*w, upper)]``.
    """

    a = np.asarray(parent_a, dtype=float)
    b = np.asarray(parent_b, dtype=float)
    if a.shape != b.shape:
        raise StrategyError(
            "BLX-alpha parents must have equal length",
            context={"parent_a": a.size, "parent_b": b.size},
        )
    low = np.minimum(a, b)
    high = np.maximum(a, b)
    width = high - low
    r_lower = np.maximum(low - alpha * width, bounds.lower)
    r_upper = np.minimum(high + alpha * width, bounds.upper)
    return rng.random(a.size) * (r_upper - r_lower) + r_lower


def simplex_crossover(parents: Sequence[Chromosome], rng: np.random.Generator) -> np.ndarray:
    """Simplex crossover (SPX) over ``n_dim + 1`` parents.

    Parents are expanded about their centroid by ``sqrt(n_dim + 2)`` and the
    child is built from the recursive drift ``c_i = r_i (x_{i-1} - x_i + c_{i-1})``
    with ``r_i = U(0, 1) ** (1 / i)``. The result is not clipped to any bounds.
    """

    points = np.asarray([np.asarray(parent, dtype=float) for parent in parents], dtype=float)
    if points.ndim != 2 or points.shape[0] != points.shape[1] + 1:
        raise StrategyError(
            "Simplex crossover requires n_dim + 1 parents of length n_dim",
            context={"shape": tuple(points.shape)},
        )
    n_dim = points.shape[1]
    eps = math.sqrt(n_dim + 2)
    mean = points.mean(axis=0)
    expanded = mean + eps * (points - mean)

    drift = np.zeros(n_dim)
    for index in range(1, n_dim + 1):
        factor = rng.random() ** (1.0 / index)
        drift = factor * (expanded[index - 1] - expanded[index] + drift)
    return expanded[n_dim] + drift


@dataclass(frozen=True)
class BlxAlphaCrossover:
    alpha: float = DEFAULT_ALPHA

    kind: ClassVar[CrossoverKind] = CrossoverKind.BLX_ALPHA
    n_parents: ClassVar[int] = 2

    def crossover(
        self, parents: Sequence[Chromosome], bounds: Bounds, rng: np.random.Generator
    ) -> np.ndarray:
        if len(parents) != self.n_parents:
            raise StrategyError(
                "BLX-alpha crossover requires exactly two parents",
                context={"received": len(parents)},
            )
        return blx_alpha_crossover(parents[0], parents[1], bounds, rng, alpha=self.alpha)


@dataclass(frozen=True)
class SimplexCrossover:
    n_dim: int

    kind: ClassVar[CrossoverKind] = CrossoverKind.SIMPLEX

    @property
    def n_parents(self) -> int:
        return self.n_dim + 1

    def crossover(
        self, parents: Sequence[Chromosome], bounds: Bounds, rng: np.random.Generator
    ) -> np.ndarray:
        # SPX output is clamped when assigned to an Individual
        if len(parents) != self.n_parents:
            raise StrategyError(
                "Simplex crossover requires n_dim + 1 parents",
                context={"n_dim": self.n_dim, "received": len(parents)},
            )
        return simplex_crossover(parents, rng)


Crossover = BlxAlphaCrossover | SimplexCrossover


def crossover_factory(
    kind: CrossoverKind | str, *, n_dim: int, alpha: float = DEFAULT_ALPHA
) -> Crossover:
    kind = CrossoverKind.parse(kind)
    if kind is CrossoverKind.BLX_ALPHA:
        return BlxAlphaCrossover(alpha=alpha)
    return SimplexCrossover(n_dim=n_dim)
