"""Survivor selection for the MGG generation step."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

import numpy as np

from genalgo.errors import EvaluationError, StrategyError

from .population import Individual

__all__ = [
    "DEFAULT_SCALING_FACTOR",
    "SelectionKind",
    "EliteRouletteSelection",
    "scaled_inverse_fitness",
    "roulette_choice",
    "selection_factory",
]

DEFAULT_SCALING_FACTOR = 0.5


class SelectionKind(str, Enum):
    ELITE_ROULETTE = "elite_roulette"


def scaled_inverse_fitness(fitness: Sequence[float], scaling_factor: float) -> np.ndarray:
    """Scale ascending-sorted fitness so that lower values weigh more.

    ``width = max(worst - best, 1)`` and
    ``scaled_j = width / (f_j - best + scaling_factor * width)``.
    """

    values = np.asarray(fitness, dtype=float)
    best = values.min()
    width = max(float(values.max() - best), 1.0)
    return width / (values - best + scaling_factor * width)


def roulette_choice(
    probabilities: Sequence[float], count: int, rng: np.random.Generator
) -> np.ndarray:
    """Draw ``count`` indices with replacement by inverse CDF."""

    cumulative = np.cumsum(np.asarray(probabilities, dtype=float))
    draws = rng.random(count)
    indices = np.searchsorted(cumulative, draws, side="left")
    # cumulative[-1] can round to just below 1.0
    return np.minimum(indices, cumulative.size - 1)


@dataclass(frozen=True)
class EliteRouletteSelection:
    """Keep the best candidate, fill the rest by scaled roulette sampling."""

    scaling_factor: float = DEFAULT_SCALING_FACTOR

    kind = SelectionKind.ELITE_ROULETTE

    def select(
        self, individuals: Sequence[Individual], size: int, rng: np.random.Generator
    ) -> list[Individual]:
        if not individuals:
            raise StrategyError("Selection requires at least one candidate")
        if size < 1:
            raise StrategyError("Selection size must be at least 1", context={"size": size})
        unevaluated = [ind for ind in individuals if not ind.is_evaluated]
        if unevaluated:
            raise EvaluationError(
                "Selection requires evaluated individuals",
                context={"unevaluated": len(unevaluated)},
            )

        ranked = sorted(individuals, key=lambda individual: individual.fitness)
        elite, remaining = ranked[0], ranked[1:]
        if size == 1 or not remaining:
            return [elite]

        scaled = scaled_inverse_fitness([ind.fitness for ind in remaining], self.scaling_factor)
        probabilities = scaled / scaled.sum()
        chosen = roulette_choice(probabilities, size - 1, rng)
        return [elite, *(remaining[idx] for idx in chosen)]


def selection_factory(
    kind: SelectionKind | str = SelectionKind.ELITE_ROULETTE,
    *,
    scaling_factor: float = DEFAULT_SCALING_FACTOR,
) -> EliteRouletteSelection:
    try:
        kind = SelectionKind(kind)
    except ValueError as exc:
        raise StrategyError(
            f"Unknown selection kind '{kind}'",
            context={"selection": kind, "valid_types": [item.value for item in SelectionKind]},
        ) from exc
    return EliteRouletteSelection(scaling_factor=scaling_factor)
