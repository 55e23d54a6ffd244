"""Convergence history recorded by the executor."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import pandas as pd

from .population import Individual

__all__ = ["HistoryEntry", "History"]


@dataclass(frozen=True)
class HistoryEntry:
    evaluations: int
    best_individual: Individual

    @property
    def best_fitness(self) -> float | None:
        return self.best_individual.fitness


class History:
    """Append-only sequence of ``(evaluations, best individual)`` checkpoints."""

    def __init__(self) -> None:
        self._entries: list[HistoryEntry] = []

    def add(self, best_individual: Individual, evaluations: int) -> HistoryEntry:
        entry = HistoryEntry(evaluations=int(evaluations), best_individual=best_individual.copy())
        self._entries.append(entry)
        return entry

    @property
    def entries(self) -> tuple[HistoryEntry, ...]:
        return tuple(self._entries)

    @property
    def first(self) -> HistoryEntry | None:
        return self._entries[0] if self._entries else None

    @property
    def last(self) -> HistoryEntry | None:
        return self._entries[-1] if self._entries else None

    def evaluations(self) -> list[int]:
        return [entry.evaluations for entry in self._entries]

    def best_fitness(self) -> list[float | None]:
        return [entry.best_fitness for entry in self._entries]

    def to_frame(self) -> pd.DataFrame:
        records = []
        for entry in self._entries:
            row: dict[str, float | int | None] = {
                "evaluations": entry.evaluations,
                "best_fitness": entry.best_fitness,
            }
            for idx, gene in enumerate(entry.best_individual.chromosome):
                row[f"x{idx}"] = float(gene)
            records.append(row)
        return pd.DataFrame.from_records(records, columns=self._columns())

    def _columns(self) -> list[str]:
        if not self._entries:
            return ["evaluations", "best_fitness"]
        n_dim = self._entries[0].best_individual.n_dim
        return ["evaluations", "best_fitness", *(f"x{idx}" for idx in range(n_dim))]

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(tuple(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> HistoryEntry:
        return self._entries[index]
