"""Pydantic schemas for run configuration.

:class:`RunConfiguration` is the immutable, validated value handed to the
executor. :class:`ConfigurationBuilder` is a plain mutable container that is
validated exactly once by :meth:`ConfigurationBuilder.build`.
:class:`RunFileConfig` describes the YAML file format, where the objective is
named instead of passed as a callable.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from numbers import Integral
from typing import Annotated, Any, Callable, Mapping

import numpy as np
from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StrictInt,
    ValidationError,
    field_validator,
    model_validator,
)

from genalgo.errors import ConfigurationError
from genalgo.optimization.ga.bounds import Bounds
from genalgo.optimization.ga.crossover import DEFAULT_ALPHA, CrossoverKind
from genalgo.optimization.ga.generation import EVALUATIONS_PER_GENERATION
from genalgo.optimization.ga.selection import DEFAULT_SCALING_FACTOR
from genalgo.utils.seed import generate_seed

__all__ = [
    "REQUIRED_PARAMETERS",
    "RunConfiguration",
    "ConfigurationBuilder",
    "RunFileConfig",
]

REQUIRED_PARAMETERS = ("n_pop", "n_dim", "n_eval", "lower_limit", "upper_limit", "evaluation_function")


def _integral_to_int(value: Any) -> Any:
    # numpy integers are Integral but not int; bool stays out
    if isinstance(value, Integral) and not isinstance(value, bool):
        return int(value)
    return value


IntegralInt = Annotated[StrictInt, BeforeValidator(_integral_to_int)]


class RunConfiguration(BaseModel):
    """Validated, frozen parameters of one optimisation run.

    Attributes
    ----------
    n_pop : int
        Population size (>= 1).
    n_dim : int
        Chromosome length (>= 1).
    n_eval : int
        Evaluation budget, at least ``n_pop``.
    lower_limit, upper_limit : float
        Box bounds shared by every gene; equal limits are allowed.
    crossover : CrossoverKind
        ``blx_alpha`` or ``simplex``; simplex needs ``n_pop >= n_dim + 1``,
        BLX-alpha needs ``n_pop >= 2`` when the budget admits a generation.
    seed : int
        Seed of the run's random generator.
    evaluation_function : Callable
        Objective to minimise, vector -> real.
    alpha : float
        BLX-alpha expansion factor.
    scaling_factor : float
        Elite-roulette scaling factor.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    n_pop: IntegralInt = Field(gt=0, description="Population size")
    n_dim: IntegralInt = Field(gt=0, description="Number of genes per chromosome")
    n_eval: IntegralInt = Field(gt=0, description="Maximum number of objective evaluations")
    lower_limit: float = Field(strict=True, description="Lower bound of every gene")
    upper_limit: float = Field(strict=True, description="Upper bound of every gene")
    crossover: CrossoverKind = Field(default=CrossoverKind.BLX_ALPHA)
    seed: IntegralInt = Field(description="Seed of the run's random generator")
    evaluation_function: Callable[[np.ndarray], float] = Field(exclude=True)
    alpha: float = Field(default=DEFAULT_ALPHA, gt=0)
    scaling_factor: float = Field(default=DEFAULT_SCALING_FACTOR, gt=0)

    @field_validator("lower_limit", "upper_limit")
    @classmethod
    def validate_finite(cls, v: float) -> float:
        if not np.isfinite(v):
            raise ValueError("limits must be finite")
        return v

    @model_validator(mode="after")
    def validate_dependencies(self) -> "RunConfiguration":
        if self.upper_limit < self.lower_limit:
            raise ValueError(
                f"upper_limit ({self.upper_limit}) must be >= lower_limit ({self.lower_limit})"
            )
        if self.n_eval < self.n_pop:
            raise ValueError(
                f"n_eval ({self.n_eval}) must cover the initial population (n_pop={self.n_pop})"
            )
        if (
            self.crossover is CrossoverKind.BLX_ALPHA
            and self.n_pop < 2
            and self.n_eval >= self.n_pop + EVALUATIONS_PER_GENERATION
        ):
            raise ValueError(
                "BLX-alpha crossover requires population size >= 2 once the budget "
                f"admits a generation (n_eval={self.n_eval}), got {self.n_pop}"
            )
        if self.crossover is CrossoverKind.SIMPLEX and self.n_pop < self.n_dim + 1:
            raise ValueError(
                "Simplex crossover requires population size >= n_dim + 1 "
                f"({self.n_dim + 1} for {self.n_dim}D), got {self.n_pop}"
            )
        return self

    def bounds(self) -> Bounds:
        return Bounds(n_dim=self.n_dim, lower=self.lower_limit, upper=self.upper_limit)

    def to_dict(self) -> dict[str, Any]:
        payload = self.model_dump(mode="json")
        function = self.evaluation_function
        payload["evaluation_function"] = getattr(function, "__qualname__", repr(function))
        return payload


def _format_errors(exc: ValidationError) -> list[str]:
    return [
        f"{'.'.join(str(part) for part in error['loc']) or 'configuration'}: {error['msg']}"
        for error in exc.errors()
    ]


@dataclass
class ConfigurationBuilder:
    """Mutable run parameters; :meth:`build` validates them once."""

    n_pop: int | None = None
    n_dim: int | None = None
    n_eval: int | None = None
    lower_limit: float | None = None
    upper_limit: float | None = None
    crossover: CrossoverKind | str = CrossoverKind.BLX_ALPHA
    seed: int | None = None
    evaluation_function: Callable[[np.ndarray], float] | None = None
    alpha: float = DEFAULT_ALPHA
    scaling_factor: float = DEFAULT_SCALING_FACTOR

    @classmethod
    def from_mapping(cls, params: Mapping[str, Any]) -> "ConfigurationBuilder":
        return cls().update(**params)

    def update(self, **params: Any) -> "ConfigurationBuilder":
        known = {item.name for item in fields(self)}
        unknown = sorted(set(params) - known)
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration parameter(s): {', '.join(unknown)}",
                context={"unknown_parameters": unknown},
            )
        for name, value in params.items():
            setattr(self, name, value)
        return self

    def missing(self) -> list[str]:
        return [name for name in REQUIRED_PARAMETERS if getattr(self, name) is None]

    def complete(self) -> bool:
        return not self.missing()

    def build(self) -> RunConfiguration:
        crossover = CrossoverKind.parse(self.crossover)
        missing = self.missing()
        if missing:
            raise ConfigurationError(
                f"Missing required parameters: {', '.join(missing)}",
                context={"missing_parameters": missing},
            )
        data = {item.name: getattr(self, item.name) for item in fields(self)}
        data["crossover"] = crossover
        if data["seed"] is None:
            data["seed"] = generate_seed()
        try:
            return RunConfiguration.model_validate(data)
        except ValidationError as exc:
            errors = _format_errors(exc)
            raise ConfigurationError(
                "Invalid run configuration: " + "; ".join(errors),
                context={"error_count": len(errors)},
            ) from exc


class RunFileConfig(BaseModel):
    """YAML representation of a run; every field may come from the CLI instead."""

    model_config = ConfigDict(extra="forbid")

    n_pop: int | None = Field(default=None, gt=0)
    n_dim: int | None = Field(default=None, gt=0)
    n_eval: int | None = Field(default=None, gt=0)
    lower_limit: float | None = None
    upper_limit: float | None = None
    crossover: str = Field(default=CrossoverKind.BLX_ALPHA.value)
    seed: int | None = None
    objective: str = Field(default="sphere", description="Name in the benchmark registry")
    alpha: float = Field(default=DEFAULT_ALPHA, gt=0)
    scaling_factor: float = Field(default=DEFAULT_SCALING_FACTOR, gt=0)

    def to_builder(self, evaluation_function: Callable[[np.ndarray], float]) -> ConfigurationBuilder:
        params = self.model_dump(exclude={"objective"})
        return ConfigurationBuilder(evaluation_function=evaluation_function, **params)
