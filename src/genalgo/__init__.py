"""
genalgo: real-coded genetic algorithm with Minimal Generation Gap.

Minimises a user-supplied objective over a box-constrained vector space using
BLX-alpha or Simplex crossover and elite-roulette survivor selection.

The high-level entry points are re-exported here so library users can write
``from genalgo import Executor``.
"""

__version__ = "0.1.0"

from .errors import (
    ConfigurationError,
    EvaluationError,
    GenalgoError,
    PopulationError,
    StrategyError,
)
from .optimization.ga import Bounds, Executor, ExecutionSummary, Individual, Population

__all__ = [
    "__version__",
    "GenalgoError",
    "ConfigurationError",
    "PopulationError",
    "StrategyError",
    "EvaluationError",
    "Bounds",
    "Individual",
    "Population",
    "Executor",
    "ExecutionSummary",
]
