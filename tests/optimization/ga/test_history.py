from __future__ import annotations

import pytest

from genalgo.optimization.ga.bounds import Bounds
from genalgo.optimization.ga.history import History
from genalgo.optimization.ga.population import Individual

BOUNDS = Bounds(n_dim=2, lower=-1.0, upper=1.0)


def _individual(genes: list[float], fitness: float) -> Individual:
    individual = Individual(BOUNDS, genes)
    individual.fitness = fitness
    return individual


def test_empty_history() -> None:
    history = History()
    assert len(history) == 0
    assert history.first is None
    assert history.last is None
    assert list(history.to_frame().columns) == ["evaluations", "best_fitness"]


def test_add_stores_a_copy() -> None:
    history = History()
    best = _individual([0.5, 0.5], 0.5)
    entry = history.add(best, 10)

    best.chromosome = [0.0, 0.0]
    best.fitness = 0.0

    assert entry.best_individual is not best
    assert entry.best_individual.chromosome.tolist() == [0.5, 0.5]
    assert entry.best_fitness == 0.5


def test_accessors() -> None:
    history = History()
    history.add(_individual([0.5, 0.5], 3.0), 10)
    history.add(_individual([0.1, 0.2], 1.0), 12)

    assert history.evaluations() == [10, 12]
    assert history.best_fitness() == [3.0, 1.0]
    assert history.first.evaluations == 10
    assert history.last.evaluations == 12
    assert history[1].best_fitness == 1.0
    assert [entry.evaluations for entry in history] == [10, 12]
    assert len(history.entries) == 2


def test_to_frame_columns() -> None:
    history = History()
    history.add(_individual([0.5, -0.5], 3.0), 10)
    frame = history.to_frame()
    assert list(frame.columns) == ["evaluations", "best_fitness", "x0", "x1"]
    assert frame.iloc[0].tolist() == [10, 3.0, 0.5, -0.5]


def test_recorded_snapshot_cannot_be_edited_in_place() -> None:
    history = History()
    entry = history.add(_individual([0.5, 0.5], 1.0), 10)
    with pytest.raises(ValueError):
        entry.best_individual.chromosome[0] = 100.0
    assert history.last.best_individual.chromosome.tolist() == [0.5, 0.5]
