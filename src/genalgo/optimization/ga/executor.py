"""Run loop driving MGG generations until the evaluation budget is spent."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

import numpy as np

from genalgo.errors import PopulationError
from genalgo.utils.seed import register_seed_logging, rng_factory

from .crossover import crossover_factory
from .evaluation import evaluate_individuals
from .generation import GenerationManager
from .history import History, HistoryEntry
from .population import Individual, Population
from .selection import selection_factory

if TYPE_CHECKING:
    from genalgo.config.schemas import RunConfiguration

__all__ = ["ExecutorState", "ExecutionSummary", "Executor"]

logger = logging.getLogger(__name__)


class ExecutorState(str, Enum):
    SETUP = "setup"
    RUNNING = "running"
    TERMINATED = "terminated"


@dataclass(frozen=True)
class ExecutionSummary:
    best_individual: Individual
    evaluations: int
    generations: int
    history: History

    def to_dict(self) -> dict[str, Any]:
        return {
            "best_fitness": self.best_individual.fitness,
            "best_chromosome": self.best_individual.chromosome.tolist(),
            "evaluations": self.evaluations,
            "generations": self.generations,
        }


class Executor:
    """Owns the population, the generation manager and the run's RNG.

    ``execute()`` goes SETUP -> RUNNING -> TERMINATED: the generator is seeded,
    the initial population is created and evaluated (``n_pop`` evaluations)
    and checkpointed, then generations run while the remaining budget admits
    one more. Each call to ``execute()`` starts over from the same seed.
    """

    def __init__(self, configuration: "RunConfiguration") -> None:
        self._configuration = configuration
        self._state = ExecutorState.SETUP
        self._population: Population | None = None
        self._history = History()
        self._manager: GenerationManager | None = None
        self._rng: np.random.Generator | None = None
        self._evaluations = 0
        self._generations = 0

    @classmethod
    def from_params(cls, **params: Any) -> "Executor":
        from genalgo.config.schemas import ConfigurationBuilder

        return cls(ConfigurationBuilder.from_mapping(params).build())

    @property
    def configuration(self) -> "RunConfiguration":
        return self._configuration

    @property
    def state(self) -> ExecutorState:
        return self._state

    @property
    def population(self) -> Population | None:
        """Copy of the current population; changes to it do not reach the run."""

        if self._population is None:
            return None
        return self._population.copy()

    @property
    def history(self) -> History:
        return self._history

    @property
    def evaluations(self) -> int:
        return self._evaluations

    @property
    def generations(self) -> int:
        return self._generations

    def execute(self) -> None:
        self._setup()
        self._initialize_population()
        self._record()

        self._state = ExecutorState.RUNNING
        per_generation = self._manager.evaluations_per_generation()
        while self._evaluations + per_generation <= self._configuration.n_eval:
            self._population = self._manager.next_generation(self._population, self._rng)
            self._evaluations += per_generation
            self._generations += 1
            entry = self._record()
            logger.debug(
                "generation %d completed",
                self._generations,
                extra={"evaluations": self._evaluations, "best_fitness": entry.best_fitness},
            )

        self._state = ExecutorState.TERMINATED
        logger.info(
            "Run finished after %d generations (%d evaluations), best fitness %.6g",
            self._generations,
            self._evaluations,
            self._history.last.best_fitness,
            extra={"evaluations": self._evaluations, "generations": self._generations},
        )

    def best_individual(self) -> Individual | None:
        if self._population is None:
            return None
        return self._population.best_individual()

    def summary(self) -> ExecutionSummary:
        best = self.best_individual()
        if best is None:
            raise PopulationError("No population yet: call execute() first")
        return ExecutionSummary(
            best_individual=best.copy(),
            evaluations=self._evaluations,
            generations=self._generations,
            history=self._history,
        )

    def _setup(self) -> None:
        config = self._configuration
        self._state = ExecutorState.SETUP
        self._rng = rng_factory(config.seed)
        register_seed_logging(logger, config.seed)

        bounds = config.bounds()
        self._manager = GenerationManager(
            crossover=crossover_factory(config.crossover, n_dim=config.n_dim, alpha=config.alpha),
            selection=selection_factory(scaling_factor=config.scaling_factor),
            evaluation_function=config.evaluation_function,
            bounds=bounds,
        )
        self._history = History()
        self._population = None
        self._evaluations = 0
        self._generations = 0
        logger.info(
            "Starting MGG run",
            extra={
                "n_pop": config.n_pop,
                "n_dim": config.n_dim,
                "n_eval": config.n_eval,
                "crossover": config.crossover.value,
            },
        )

    def _initialize_population(self) -> None:
        config = self._configuration
        population = Population(config.n_pop, self._manager.bounds, rng=self._rng)
        evaluate_individuals(population, config.evaluation_function)
        self._population = population
        self._evaluations = config.n_pop

    def _record(self) -> HistoryEntry:
        return self._history.add(self._population.best_individual(), self._evaluations)
