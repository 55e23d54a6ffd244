"""Shared helpers."""

from .seed import MAX_SEED_VALUE, generate_seed, normalise_seed, register_seed_logging, rng_factory

__all__ = [
    "MAX_SEED_VALUE",
    "generate_seed",
    "normalise_seed",
    "register_seed_logging",
    "rng_factory",
]
