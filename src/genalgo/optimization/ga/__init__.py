"""Public API for the real-coded MGG genetic-algorithm components."""

from .bounds import Bounds
from .crossover import (
    DEFAULT_ALPHA,
    BlxAlphaCrossover,
    Crossover,
    CrossoverKind,
    SimplexCrossover,
    blx_alpha_crossover,
    crossover_factory,
    simplex_crossover,
)
from .evaluation import EvaluationFunction, evaluate_individual, evaluate_individuals
from .executor import ExecutionSummary, Executor, ExecutorState
from .generation import EVALUATIONS_PER_GENERATION, GenerationManager
from .history import History, HistoryEntry
from .population import Individual, Population
from .selection import (
    DEFAULT_SCALING_FACTOR,
    EliteRouletteSelection,
    SelectionKind,
    roulette_choice,
    scaled_inverse_fitness,
    selection_factory,
)

__all__ = [
    "Bounds",
    "Individual",
    "Population",
    "DEFAULT_ALPHA",
    "CrossoverKind",
    "Crossover",
    "BlxAlphaCrossover",
    "SimplexCrossover",
    "blx_alpha_crossover",
    "simplex_crossover",
    "crossover_factory",
    "DEFAULT_SCALING_FACTOR",
    "SelectionKind",
    "EliteRouletteSelection",
    "scaled_inverse_fitness",
    "roulette_choice",
    "selection_factory",
    "EvaluationFunction",
    "evaluate_individual",
    "evaluate_individuals",
    "EVALUATIONS_PER_GENERATION",
    "GenerationManager",
    "History",
    "HistoryEntry",
    "ExecutorState",
    "ExecutionSummary",
    "Executor",
]
