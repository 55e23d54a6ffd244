"""Standard test objectives (all minimised, optimum 0)."""

from __future__ import annotations

from typing import Callable, Mapping

import numpy as np

from genalgo.errors import ConfigurationError

__all__ = [
    "abs_sum",
    "sphere",
    "rastrigin",
    "rosenbrock",
    "ackley",
    "OBJECTIVES",
    "get_objective",
]


def abs_sum(x: np.ndarray) -> float:
    return float(np.sum(np.abs(x)))


def sphere(x: np.ndarray) -> float:
    return float(np.dot(x, x))


def rastrigin(x: np.ndarray) -> float:
    x = np.asarray(x, dtype=float)
    return float(10.0 * x.size + np.sum(x**2 - 10.0 * np.cos(2.0 * np.pi * x)))


def rosenbrock(x: np.ndarray) -> float:
    """Rosenbrock valley; optimum at ``(1, ..., 1)``. Needs ``n_dim >= 2``."""

    x = np.asarray(x, dtype=float)
    return float(np.sum(100.0 * (x[1:] - x[:-1] ** 2) ** 2 + (1.0 - x[:-1]) ** 2))


def ackley(x: np.ndarray) -> float:
    x = np.asarray(x, dtype=float)
    n = x.size
    term1 = -20.0 * np.exp(-0.2 * np.sqrt(np.sum(x**2) / n))
    term2 = -np.exp(np.sum(np.cos(2.0 * np.pi * x)) / n)
    return float(term1 + term2 + 20.0 + np.e)


OBJECTIVES: Mapping[str, Callable[[np.ndarray], float]] = {
    "abs_sum": abs_sum,
    "sphere": sphere,
    "rastrigin": rastrigin,
    "rosenbrock": rosenbrock,
    "ackley": ackley,
}


def get_objective(name: str) -> Callable[[np.ndarray], float]:
    try:
        return OBJECTIVES[name.lower()]
    except KeyError as exc:
        raise ConfigurationError(
            f"Unknown objective '{name}'",
            context={"objective": name, "available": sorted(OBJECTIVES)},
        ) from exc
