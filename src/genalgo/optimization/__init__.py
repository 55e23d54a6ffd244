"""Optimisation engine: the MGG genetic algorithm and benchmark objectives."""
