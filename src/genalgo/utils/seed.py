"""Seed management for reproducible runs.

The engine never touches the global ``random``/``numpy.random`` state: every
run owns a ``numpy.random.Generator`` built by :func:`rng_factory` and threads
it through the population, crossover and selection calls.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

__all__ = [
    "MAX_SEED_VALUE",
    "normalise_seed",
    "generate_seed",
    "rng_factory",
    "register_seed_logging",
]

MAX_SEED_VALUE = 2**32


def normalise_seed(seed: int) -> int:
    """Map any integer seed onto ``[0, 2**32 - 1]``."""

    return abs(int(seed)) % MAX_SEED_VALUE


def generate_seed() -> int:
    """Draw a fresh seed from operating-system entropy."""

    entropy = np.random.SeedSequence().entropy
    return normalise_seed(int(entropy))


def rng_factory(seed: Optional[int] = None) -> np.random.Generator:
    """Return an isolated PCG64 generator; ``None`` gives a non-deterministic one."""

    if seed is None:
        return np.random.default_rng()
    return np.random.default_rng(normalise_seed(seed))


def register_seed_logging(logger: logging.Logger, seed: int) -> None:
    logger.info("Run seeded with %s", seed, extra={"seed": seed})
