"""Individuals and populations for the real-coded genetic algorithm."""

from __future__ import annotations

from numbers import Integral
from typing import Any, Iterable, Iterator, Sequence

import numpy as np
import pandas as pd

from genalgo.errors import ConfigurationError, EvaluationError, PopulationError

from .bounds import Bounds

__all__ = ["Individual", "Population"]


def _frozen(array: np.ndarray) -> np.ndarray:
    array.setflags(write=False)
    return array


class Individual:
    """Chromosome plus fitness, bound to a shared :class:`Bounds`.

    Every chromosome assignment is clipped to the bounds (clamp-on-write) and
    the stored array is read-only, so genes change only through the setter.
    ``fitness`` stays ``None`` until the individual is evaluated. Equality is
    identity: two individuals with the same genes are still distinct members
    of a population.
    """

    __slots__ = ("_bounds", "_chromosome", "_fitness")

    def __init__(
        self,
        bounds: Bounds,
        chromosome: Sequence[float] | np.ndarray | None = None,
        *,
        rng: np.random.Generator | None = None,
    ) -> None:
        if not isinstance(bounds, Bounds):
            raise ConfigurationError(
                "Individual requires a Bounds instance",
                context={"bounds": type(bounds).__name__},
            )
        self._bounds = bounds
        self._fitness: float | None = None
        if chromosome is None:
            rng = rng or np.random.default_rng()
            chromosome = bounds.random_vector(rng)
        self.chromosome = chromosome

    @classmethod
    def from_limits(
        cls,
        *,
        n_dim: int,
        lower_limit: float,
        upper_limit: float,
        chromosome: Sequence[float] | np.ndarray | None = None,
        rng: np.random.Generator | None = None,
    ) -> "Individual":
        bounds = Bounds(n_dim=n_dim, lower=lower_limit, upper=upper_limit)
        return cls(bounds, chromosome, rng=rng)

    @property
    def bounds(self) -> Bounds:
        return self._bounds

    @property
    def chromosome(self) -> np.ndarray:
        return self._chromosome

    @chromosome.setter
    def chromosome(self, value: Sequence[float] | np.ndarray) -> None:
        array = np.array(value, dtype=float)
        if array.ndim != 1 or array.size != self._bounds.n_dim:
            raise ConfigurationError(
                "Chromosome length must match the bounds dimension",
                context={"expected": self._bounds.n_dim, "received": array.size},
            )
        self._chromosome = _frozen(self._bounds.clamp_inplace(array))

    @property
    def fitness(self) -> float | None:
        return self._fitness

    @fitness.setter
    def fitness(self, value: float | None) -> None:
        self._fitness = None if value is None else float(value)

    @property
    def is_evaluated(self) -> bool:
        return self._fitness is not None

    @property
    def n_dim(self) -> int:
        return self._bounds.n_dim

    def copy(self) -> "Individual":
        """Independent chromosome, same fitness, shared bounds."""

        clone = Individual.__new__(Individual)
        clone._bounds = self._bounds
        clone._chromosome = _frozen(self._chromosome.copy())
        clone._fitness = self._fitness
        return clone

    def to_dict(self) -> dict[str, Any]:
        return {"chromosome": self._chromosome.tolist(), "fitness": self._fitness}

    def __repr__(self) -> str:
        genes = np.array2string(self._chromosome, precision=4, separator=", ")
        return f"Individual(chromosome={genes}, fitness={self._fitness})"


def _validate_population_size(n_pop: Any) -> None:
    if n_pop is None:
        raise PopulationError("Population size (n_pop) cannot be None", context={"n_pop": n_pop})
    if isinstance(n_pop, bool) or not isinstance(n_pop, Integral):
        raise PopulationError(
            f"Population size (n_pop) must be an integer, got {type(n_pop).__name__}",
            context={"n_pop": n_pop, "expected_type": "int"},
        )
    if n_pop < 1:
        raise PopulationError(
            f"Population size (n_pop) must be at least 1, got {n_pop}",
            context={"n_pop": n_pop, "minimum_value": 1},
        )


def _require_evaluated(individuals: Iterable[Individual]) -> None:
    missing = sum(1 for individual in individuals if not individual.is_evaluated)
    if missing:
        raise EvaluationError(
            "Fitness is required but some individuals are unevaluated",
            context={"unevaluated": missing},
        )


class Population:
    """Mutable bag of :class:`Individual` with a nominal size ``n_pop``.

    The size may shrink while a generation withdraws parents; it is back to
    ``n_pop`` once the generation completes.
    """

    def __init__(
        self,
        n_pop: int,
        bounds: Bounds,
        individuals: Iterable[Individual] | None = None,
        *,
        rng: np.random.Generator | None = None,
    ) -> None:
        _validate_population_size(n_pop)
        if not isinstance(bounds, Bounds):
            raise ConfigurationError(
                "Population requires a Bounds instance",
                context={"bounds": type(bounds).__name__},
            )
        self._n_pop = int(n_pop)
        self._bounds = bounds
        if individuals is None:
            rng = rng or np.random.default_rng()
            self._individuals = [Individual(bounds, rng=rng) for _ in range(self._n_pop)]
        else:
            self._individuals = list(individuals)

    @classmethod
    def from_limits(
        cls,
        *,
        n_pop: int,
        n_dim: int,
        lower_limit: float,
        upper_limit: float,
        rng: np.random.Generator | None = None,
    ) -> "Population":
        _validate_population_size(n_pop)
        bounds = Bounds(n_dim=n_dim, lower=lower_limit, upper=upper_limit)
        return cls(n_pop, bounds, rng=rng)

    @property
    def n_pop(self) -> int:
        return self._n_pop

    @property
    def bounds(self) -> Bounds:
        return self._bounds

    @property
    def individuals(self) -> tuple[Individual, ...]:
        return tuple(self._individuals)

    def size(self) -> int:
        return len(self._individuals)

    def __len__(self) -> int:
        return len(self._individuals)

    def __iter__(self) -> Iterator[Individual]:
        return iter(list(self._individuals))

    def add(self, individuals: Iterable[Individual]) -> None:
        self._individuals.extend(individuals)

    def sample(self, k: int, rng: np.random.Generator) -> list[Individual]:
        """Return ``k`` distinct members without removing them."""

        if k < 0 or k > len(self._individuals):
            raise PopulationError(
                "Cannot sample more individuals than the population holds",
                context={"requested": k, "available": len(self._individuals)},
            )
        indices = rng.choice(len(self._individuals), size=k, replace=False)
        return [self._individuals[idx] for idx in indices]

    def pop(self, k: int, rng: np.random.Generator) -> list[Individual]:
        return self.delete(self.sample(k, rng))

    def delete(self, individuals: Iterable[Individual]) -> list[Individual]:
        """Remove the given members by identity and return them."""

        targets = list(individuals)
        if not targets:
            return targets
        doomed = {id(individual) for individual in targets}
        self._individuals = [ind for ind in self._individuals if id(ind) not in doomed]
        return targets

    def best_individual(self) -> Individual | None:
        """Lowest-fitness member; ``None`` for an empty population."""

        if not self._individuals:
            return None
        _require_evaluated(self._individuals)
        return min(self._individuals, key=lambda individual: individual.fitness)

    def fitness_values(self) -> np.ndarray:
        return np.array(
            [np.nan if ind.fitness is None else ind.fitness for ind in self._individuals],
            dtype=float,
        )

    def copy(self) -> "Population":
        return Population(
            self._n_pop,
            self._bounds,
            [individual.copy() for individual in self._individuals],
        )

    def to_frame(self) -> pd.DataFrame:
        columns = [f"x{idx}" for idx in range(self._bounds.n_dim)]
        if self._individuals:
            genes = np.stack([ind.chromosome for ind in self._individuals])
        else:
            genes = np.empty((0, self._bounds.n_dim))
        frame = pd.DataFrame(genes, columns=columns)
        frame["fitness"] = self.fitness_values()
        return frame

    def __repr__(self) -> str:
        return f"Population(n_pop={self._n_pop}, size={len(self._individuals)}, n_dim={self._bounds.n_dim})"
