"""Exception hierarchy shared by the engine, configuration and CLI."""

from __future__ import annotations

from typing import Any, Mapping

__all__ = [
    "GenalgoError",
    "ConfigurationError",
    "PopulationError",
    "StrategyError",
    "EvaluationError",
]


class GenalgoError(Exception):
    """Base error carrying a ``context`` mapping rendered into the message."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = dict(context or {})

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{key}: {value}" for key, value in self.context.items())
        return f"{self.message} ({details})"


class ConfigurationError(GenalgoError):
    """Dimension, bounds or run configuration fields are missing or malformed."""


class PopulationError(GenalgoError):
    """Population size or population operations are invalid."""


class StrategyError(GenalgoError):
    """Unknown crossover/selection strategy or misuse of an operator."""


class EvaluationError(GenalgoError):
    """The evaluation function broke its contract, or fitness is missing."""
