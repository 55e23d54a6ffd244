from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from genalgo.errors import ConfigurationError, EvaluationError, PopulationError
from genalgo.optimization.ga.bounds import Bounds
from genalgo.optimization.ga.population import Individual, Population

BOUNDS = Bounds(n_dim=3, lower=-1.0, upper=1.0)


def _evaluated(fitness: list[float]) -> Population:
    individuals = []
    for value in fitness:
        individual = Individual(BOUNDS, [0.0, 0.0, 0.0])
        individual.fitness = value
        individuals.append(individual)
    return Population(len(individuals), BOUNDS, individuals)


def test_individual_random_chromosome_inside_bounds(rng: np.random.Generator) -> None:
    individual = Individual(BOUNDS, rng=rng)
    assert individual.n_dim == 3
    assert BOUNDS.within_bounds(individual.chromosome)
    assert individual.fitness is None
    assert not individual.is_evaluated


def test_individual_clamps_on_assignment() -> None:
    individual = Individual(BOUNDS, [10.0, -10.0, 0.25])
    assert individual.chromosome.tolist() == [1.0, -1.0, 0.25]

    individual.chromosome = [-3.0, 0.5, 3.0]
    assert individual.chromosome.tolist() == [-1.0, 0.5, 1.0]


def test_individual_does_not_alias_input() -> None:
    genes = np.array([0.1, 0.2, 0.3])
    individual = Individual(BOUNDS, genes)
    genes[0] = 0.9
    assert individual.chromosome[0] == pytest.approx(0.1)


def test_individual_length_mismatch() -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        Individual(BOUNDS, [0.0, 0.0])
    assert excinfo.value.context == {"expected": 3, "received": 2}


def test_individual_requires_bounds() -> None:
    with pytest.raises(ConfigurationError):
        Individual({"n_dim": 3}, [0.0, 0.0, 0.0])


def test_individual_from_limits() -> None:
    individual = Individual.from_limits(n_dim=2, lower_limit=0.0, upper_limit=1.0, chromosome=[2.0, 0.5])
    assert individual.chromosome.tolist() == [1.0, 0.5]


def test_individual_copy_is_independent() -> None:
    individual = Individual(BOUNDS, [0.1, 0.2, 0.3])
    individual.fitness = 4.0
    clone = individual.copy()
    clone.chromosome = [0.0, 0.0, 0.0]
    clone.fitness = 1.0
    assert individual.chromosome.tolist() == [0.1, 0.2, 0.3]
    assert individual.fitness == 4.0
    assert clone.bounds is individual.bounds
    assert clone != individual


def test_population_creates_n_pop_members(rng: np.random.Generator) -> None:
    population = Population(8, BOUNDS, rng=rng)
    assert population.size() == len(population) == 8
    assert population.n_pop == 8
    assert all(BOUNDS.within_bounds(ind.chromosome) for ind in population)


def test_population_from_limits() -> None:
    population = Population.from_limits(n_pop=4, n_dim=2, lower_limit=0.0, upper_limit=1.0)
    assert population.size() == 4
    assert population.bounds.n_dim == 2


@pytest.mark.parametrize("n_pop", [0, -1, 2.5, True, None])
def test_population_invalid_size(n_pop) -> None:
    with pytest.raises(PopulationError):
        Population(n_pop, BOUNDS)


def test_population_requires_bounds() -> None:
    with pytest.raises(ConfigurationError):
        Population(3, (3, -1.0, 1.0))


def test_sample_returns_distinct_members_without_removing(rng: np.random.Generator) -> None:
    population = Population(6, BOUNDS, rng=rng)
    sampled = population.sample(4, rng)
    assert len({id(ind) for ind in sampled}) == 4
    assert population.size() == 6


def test_sample_more_than_available(rng: np.random.Generator) -> None:
    population = Population(3, BOUNDS, rng=rng)
    with pytest.raises(PopulationError) as excinfo:
        population.sample(4, rng)
    assert excinfo.value.context == {"requested": 4, "available": 3}


def test_pop_and_add_restore_size(rng: np.random.Generator) -> None:
    population = Population(5, BOUNDS, rng=rng)
    withdrawn = population.pop(2, rng)
    assert population.size() == 3
    assert all(ind not in population.individuals for ind in withdrawn)

    population.add(withdrawn)
    assert population.size() == 5


def test_delete_removes_by_identity() -> None:
    population = _evaluated([1.0, 1.0, 1.0])
    target = population.individuals[1]
    removed = population.delete([target])
    assert removed == [target]
    assert population.size() == 2
    assert target not in population.individuals


def test_best_individual_is_minimum() -> None:
    population = _evaluated([3.0, -2.0, 7.5, 0.0])
    best = population.best_individual()
    assert best is population.individuals[1]
    assert best.fitness == -2.0


def test_best_individual_empty_population() -> None:
    assert Population(3, BOUNDS, []).best_individual() is None


def test_best_individual_requires_evaluation(rng: np.random.Generator) -> None:
    population = Population(3, BOUNDS, rng=rng)
    with pytest.raises(EvaluationError):
        population.best_individual()


def test_copy_is_deep() -> None:
    population = _evaluated([1.0, 2.0])
    clone = population.copy()
    clone.individuals[0].fitness = 99.0
    clone.pop(1, np.random.default_rng(0))
    assert population.size() == 2
    assert population.individuals[0].fitness == 1.0
    assert clone.n_pop == population.n_pop


def test_to_frame_has_genes_and_fitness() -> None:
    population = _evaluated([1.0, 2.0])
    frame = population.to_frame()
    assert isinstance(frame, pd.DataFrame)
    assert list(frame.columns) == ["x0", "x1", "x2", "fitness"]
    assert frame["fitness"].tolist() == [1.0, 2.0]


def test_chromosome_is_read_only() -> None:
    individual = Individual(BOUNDS, [0.5, 0.5, 0.5])
    with pytest.raises(ValueError):
        individual.chromosome[0] = 100.0
    assert BOUNDS.within_bounds(individual.chromosome)

    individual.chromosome = [100.0, 0.5, 0.5]
    assert individual.chromosome.tolist() == [1.0, 0.5, 0.5]
    assert not individual.chromosome.flags.writeable


def test_copied_chromosome_is_read_only() -> None:
    clone = Individual(BOUNDS, [0.5, 0.5, 0.5]).copy()
    with pytest.raises(ValueError):
        clone.chromosome[1] = -7.0
