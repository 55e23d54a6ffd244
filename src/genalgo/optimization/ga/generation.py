"""Minimal Generation Gap (MGG) step."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from genalgo.errors import StrategyError

from .bounds import Bounds
from .crossover import Crossover, CrossoverKind
from .evaluation import EvaluationFunction, evaluate_individuals
from .population import Individual, Population
from .selection import EliteRouletteSelection

__all__ = ["EVALUATIONS_PER_GENERATION", "GenerationManager"]

EVALUATIONS_PER_GENERATION = 2
_CHILDREN_PER_GENERATION = 2
_SURVIVORS = 2


@dataclass(frozen=True)
class GenerationManager:
    """Couples a crossover variant, the selector and the objective.

    :meth:`next_generation` replaces a small family of the population: parents
    are withdrawn, two children are produced and evaluated, and two survivors
    chosen from parents and children go back. The caller's population is never
    modified; a new :class:`Population` is returned.
    """

    crossover: Crossover
    selection: EliteRouletteSelection
    evaluation_function: EvaluationFunction
    bounds: Bounds

    def evaluations_per_generation(self) -> int:
        return EVALUATIONS_PER_GENERATION

    def next_generation(self, population: Population, rng: np.random.Generator) -> Population:
        population = population.copy()
        kind = self.crossover.kind
        if kind is CrossoverKind.BLX_ALPHA:
            self._blx_alpha_generation(population, rng)
        elif kind is CrossoverKind.SIMPLEX:
            self._simplex_generation(population, rng)
        else:
            raise StrategyError("Unknown crossover strategy", context={"crossover": kind})
        return population

    def _make_children(self, parents: list[Individual], rng: np.random.Generator) -> list[Individual]:
        chromosomes = [ind.chromosome for ind in parents]
        children = [
            Individual(self.bounds, self.crossover.crossover(chromosomes, self.bounds, rng))
            for _ in range(_CHILDREN_PER_GENERATION)
        ]
        evaluate_individuals(children, self.evaluation_function)
        return children

    def _blx_alpha_generation(self, population: Population, rng: np.random.Generator) -> None:
        parents = population.pop(2, rng)
        children = self._make_children(parents, rng)
        survivors = self.selection.select([*parents, *children], _SURVIVORS, rng)
        population.add(survivors)

    def _simplex_generation(self, population: Population, rng: np.random.Generator) -> None:
        parents = population.pop(self.crossover.n_parents, rng)
        children = self._make_children(parents, rng)

        picked = set(rng.choice(len(parents), size=2, replace=False).tolist())
        competitors = [parents[idx] for idx in sorted(picked)]
        untouched = [parent for idx, parent in enumerate(parents) if idx not in picked]

        survivors = self.selection.select([*competitors, *children], _SURVIVORS, rng)
        population.add([*untouched, *survivors])
