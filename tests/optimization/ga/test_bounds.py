from __future__ import annotations

import numpy as np
import pytest

from genalgo.errors import ConfigurationError
from genalgo.optimization.ga.bounds import Bounds


def test_degenerate_bounds_produce_single_point() -> None:
    bounds = Bounds(n_dim=2, lower=5.0, upper=5.0)
    vector = bounds.random_vector(np.random.default_rng(0))
    assert vector.tolist() == [5.0, 5.0]
    assert bounds.width == 0.0


def test_random_vector_respects_limits(rng: np.random.Generator) -> None:
    bounds = Bounds(n_dim=50, lower=-2.0, upper=3.0)
    vector = bounds.random_vector(rng)
    assert vector.shape == (50,)
    assert bounds.within_bounds(vector)


def test_limits_are_coerced_to_float() -> None:
    bounds = Bounds(n_dim=3, lower=-1, upper=1)
    assert isinstance(bounds.lower, float)
    assert isinstance(bounds.upper, float)


@pytest.mark.parametrize("n_dim", [0, -3, 2.5, True, None, "3"])
def test_invalid_dimension_rejected(n_dim) -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        Bounds(n_dim=n_dim, lower=0.0, upper=1.0)
    assert "n_dim" in excinfo.value.context


def test_upper_below_lower_rejected() -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        Bounds(n_dim=2, lower=1.0, upper=0.0)
    assert excinfo.value.context == {"upper_limit": 0.0, "lower_limit": 1.0}


@pytest.mark.parametrize("limit", [None, "a", float("nan"), False])
def test_invalid_limit_rejected(limit) -> None:
    with pytest.raises(ConfigurationError):
        Bounds(n_dim=2, lower=limit, upper=1.0)


def test_within_bounds_checks_shape_and_values() -> None:
    bounds = Bounds(n_dim=3, lower=-1.0, upper=1.0)
    assert bounds.within_bounds([0.0, 1.0, -1.0])
    assert not bounds.within_bounds([0.0, 1.5, -1.0])
    assert not bounds.within_bounds([0.0, 0.0])
    assert not bounds.within_bounds(None)


def test_clamp_returns_new_array() -> None:
    bounds = Bounds(n_dim=3, lower=-1.0, upper=1.0)
    original = np.array([-4.0, 0.5, 9.0])
    clipped = bounds.clamp(original)
    assert clipped.tolist() == [-1.0, 0.5, 1.0]
    assert original.tolist() == [-4.0, 0.5, 9.0]


def test_clamp_inplace_mutates_list_and_array() -> None:
    bounds = Bounds(n_dim=3, lower=0.0, upper=2.0)
    values = [-1.0, 1.0, 3.0]
    assert bounds.clamp_inplace(values) is values
    assert values == [0.0, 1.0, 2.0]

    array = np.array([-1.0, 1.0, 3.0])
    assert bounds.clamp_inplace(array) is array
    assert array.tolist() == [0.0, 1.0, 2.0]


def test_from_mapping_uses_limit_keys() -> None:
    bounds = Bounds.from_mapping({"n_dim": 4, "lower_limit": -1.0, "upper_limit": 2.0})
    assert bounds == Bounds(n_dim=4, lower=-1.0, upper=2.0)
    assert bounds.to_dict() == {"n_dim": 4, "lower_limit": -1.0, "upper_limit": 2.0}


def test_from_mapping_missing_key_raises() -> None:
    with pytest.raises(ConfigurationError):
        Bounds.from_mapping({"n_dim": 4, "lower_limit": -1.0})
