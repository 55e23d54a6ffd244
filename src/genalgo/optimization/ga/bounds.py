"""Box constraints shared by every individual of a run."""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Integral, Real
from typing import Any, Mapping, Sequence

import numpy as np

from genalgo.errors import ConfigurationError

__all__ = ["Bounds"]


def _validate_dimension(n_dim: Any) -> None:
    if n_dim is None:
        raise ConfigurationError("Dimension (n_dim) cannot be None", context={"n_dim": n_dim})
    if isinstance(n_dim, bool) or not isinstance(n_dim, Integral):
        raise ConfigurationError(
            f"Dimension (n_dim) must be an integer, got {type(n_dim).__name__}",
            context={"n_dim": n_dim, "expected_type": "int"},
        )
    if n_dim < 1:
        raise ConfigurationError(
            f"Dimension (n_dim) must be at least 1, got {n_dim}",
            context={"n_dim": n_dim, "minimum_value": 1},
        )


def _validate_limit(value: Any, name: str) -> None:
    if value is None:
        raise ConfigurationError(f"{name} cannot be None", context={name: value})
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ConfigurationError(
            f"{name} must be numeric, got {type(value).__name__}",
            context={name: value, "expected_type": "real"},
        )
    if np.isnan(float(value)):
        raise ConfigurationError(f"{name} cannot be NaN", context={name: value})


@dataclass(frozen=True, slots=True)
class Bounds:
    """Immutable ``[lower, upper]`` box over ``n_dim`` real genes.

    ``upper == lower`` is a legal, degenerate single-point domain.
    """

    n_dim: int
    lower: float
    upper: float

    def __post_init__(self) -> None:
        _validate_dimension(self.n_dim)
        _validate_limit(self.lower, "lower_limit")
        _validate_limit(self.upper, "upper_limit")
        if self.upper < self.lower:
            raise ConfigurationError(
                f"Upper limit ({self.upper}) must be greater than or equal to lower limit ({self.lower})",
                context={"upper_limit": self.upper, "lower_limit": self.lower},
            )
        object.__setattr__(self, "n_dim", int(self.n_dim))
        object.__setattr__(self, "lower", float(self.lower))
        object.__setattr__(self, "upper", float(self.upper))

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "Bounds":
        return cls(
            n_dim=mapping.get("n_dim"),
            lower=mapping.get("lower_limit"),
            upper=mapping.get("upper_limit"),
        )

    @property
    def width(self) -> float:
        return self.upper - self.lower

    def within_bounds(self, vector: Sequence[float] | np.ndarray | None) -> bool:
        if vector is None:
            return False
        array = np.asarray(vector, dtype=float)
        if array.ndim != 1 or array.size != self.n_dim:
            return False
        return bool(np.all((array >= self.lower) & (array <= self.upper)))

    def clamp(self, vector: Sequence[float] | np.ndarray) -> np.ndarray:
        """Return a new float vector with every gene clipped to the box."""

        return np.clip(np.asarray(vector, dtype=float), self.lower, self.upper)

    def clamp_inplace(self, vector: list[float] | np.ndarray) -> list[float] | np.ndarray:
        """Clip ``vector`` in place and return the same object."""

        if isinstance(vector, np.ndarray) and np.issubdtype(vector.dtype, np.floating):
            np.clip(vector, self.lower, self.upper, out=vector)
        else:
            vector[:] = [min(max(gene, self.lower), self.upper) for gene in vector]
        return vector

    def random_vector(self, rng: np.random.Generator) -> np.ndarray:
        # lower + u * width keeps a degenerate box exactly at ``lower``
        return self.lower + rng.random(self.n_dim) * self.width

    def to_dict(self) -> dict[str, Any]:
        return {"n_dim": self.n_dim, "lower_limit": self.lower, "upper_limit": self.upper}
