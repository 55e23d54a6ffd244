"""YAML configuration loading and validation.

Example
-------
>>> from genalgo.config.loader import load_run_configuration
>>> config = load_run_configuration("configs/sphere_blx.yaml")
>>> config.crossover
<CrossoverKind.BLX_ALPHA: 'blx_alpha'>
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Mapping, Optional, Type, TypeVar, Union

import numpy as np
import yaml
from pydantic import BaseModel, ValidationError

from genalgo.errors import ConfigurationError
from genalgo.optimization.benchmarks import get_objective

from .schemas import RunConfiguration, RunFileConfig

__all__ = ["ConfigError", "build_run_configuration", "load_config", "load_run_configuration"]

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class ConfigError(ConfigurationError):
    """Raised when a configuration file cannot be read or validated."""


def _resolve_config_path(file_path: Union[str, Path], project_root: Optional[Path] = None) -> Path:
    """Resolve ``file_path``: absolute, then project-root relative, then cwd relative."""

    path = Path(file_path).expanduser()
    if path.is_absolute():
        if path.exists():
            return path
        raise FileNotFoundError(f"Config file not found: {file_path}")

    if project_root is None:
        project_root = Path(__file__).resolve().parents[3]
    candidate = project_root / path
    if candidate.exists():
        return candidate
    if path.exists():
        return path.resolve()
    raise FileNotFoundError(f"Config file not found: {file_path}")


def load_config(
    file_path: Union[str, Path],
    schema: Type[T],
    *,
    project_root: Optional[Path] = None,
) -> T:
    """Load a YAML file and validate it against ``schema``.

    Raises
    ------
    ConfigError
        Missing or empty file, invalid YAML, or schema violation.
    """

    try:
        resolved = _resolve_config_path(file_path, project_root)
    except FileNotFoundError as exc:
        raise ConfigError(f"Configuration file not found: {file_path}", context={"path": str(file_path)}) from exc

    logger.debug("Loading config from %s", resolved)
    try:
        with open(resolved, "r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML syntax in {file_path}: {exc}") from exc

    if data is None:
        raise ConfigError(f"Empty configuration file: {file_path}")
    if not isinstance(data, Mapping):
        raise ConfigError(f"YAML root must be a mapping: {file_path}")

    try:
        config = schema.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Configuration validation failed for {file_path}:\n{exc}") from exc
    logger.info("Loaded config %s", resolved.name)
    return config


def load_run_configuration(
    file_path: Union[str, Path],
    *,
    evaluation_function: Callable[[np.ndarray], float] | None = None,
    overrides: Mapping[str, Any] | None = None,
    project_root: Optional[Path] = None,
) -> RunConfiguration:
    """Load a :class:`RunFileConfig` YAML file and build the run configuration.

    ``overrides`` (e.g. command-line flags) win over the file; ``None`` values
    are ignored. The objective is looked up in the benchmark registry unless
    ``evaluation_function`` is given.
    """

    file_config = load_config(file_path, RunFileConfig, project_root=project_root)
    return build_run_configuration(file_config, evaluation_function=evaluation_function, overrides=overrides)


def build_run_configuration(
    file_config: RunFileConfig,
    *,
    evaluation_function: Callable[[np.ndarray], float] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> RunConfiguration:
    updates = {key: value for key, value in dict(overrides or {}).items() if value is not None}
    objective = updates.pop("objective", file_config.objective)
    function = evaluation_function or get_objective(objective)
    return file_config.to_builder(function).update(**updates).build()
