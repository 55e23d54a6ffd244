"""Fitness evaluation helpers for the GA engine."""

from __future__ import annotations

import math
from numbers import Real
from typing import Callable, Iterable

import numpy as np

from genalgo.errors import EvaluationError

from .population import Individual

__all__ = ["EvaluationFunction", "evaluate_individual", "evaluate_individuals"]

EvaluationFunction = Callable[[np.ndarray], float]


def _coerce_fitness(value: object) -> float:
    if isinstance(value, np.ndarray) and value.size == 1:
        value = value.item()
    if isinstance(value, bool) or not isinstance(value, Real):
        raise EvaluationError(
            "Evaluation function must return a real number",
            context={"returned_type": type(value).__name__},
        )
    fitness = float(value)
    if math.isnan(fitness):
        raise EvaluationError("Evaluation function returned NaN")
    return fitness


def evaluate_individual(individual: Individual, evaluation_function: EvaluationFunction) -> float:
    """Evaluate ``individual`` and store its fitness.

    The function receives a copy of the chromosome. Exceptions raised inside it
    are not caught.
    """

    fitness = _coerce_fitness(evaluation_function(individual.chromosome.copy()))
    individual.fitness = fitness
    return fitness


def evaluate_individuals(
    individuals: Iterable[Individual], evaluation_function: EvaluationFunction
) -> list[float]:
    return [evaluate_individual(individual, evaluation_function) for individual in individuals]
