"""Global settings resolved from defaults, ``.env`` files and the environment.

Precedence, lowest first: built-in defaults, the ``.env`` file, process
environment variables prefixed with :data:`ENV_PREFIX`, explicit overrides.
Only the standard library is used; the behaviour mimics a small
``BaseSettings``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Mapping, MutableMapping

__all__ = [
    "ENV_PREFIX",
    "Settings",
    "get_settings",
    "load_env_file",
    "reset_settings_cache",
]

ENV_PREFIX = "GENALGO_"
"""Prefix shared by every environment variable read by the project."""

_BOOL_TRUE = {"1", "true", "yes", "on"}
_BOOL_FALSE = {"0", "false", "no", "off"}


def _coerce_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _BOOL_TRUE:
        return True
    if lowered in _BOOL_FALSE:
        return False
    raise ValueError(f"Cannot interpret '{value}' as boolean")


def _coerce(value: Any, target: type, *, base: Path) -> Any:
    if target is Path:
        candidate = Path(str(value)).expanduser()
        return candidate if candidate.is_absolute() else base / candidate
    if not isinstance(value, str):
        return target(value)
    if target is bool:
        return _coerce_bool(value)
    return target(value.strip())


def load_env_file(path: Path) -> Mapping[str, str]:
    """Parse a ``.env`` file; blank lines and ``#`` comments are skipped."""

    entries: MutableMapping[str, str] = {}
    if not path.exists():
        return entries
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        entries[key.strip()] = value.strip().strip("\"'")
    return entries


def _project_root() -> Path:
    return Path(__file__).resolve().parents[3]


# name -> (default, type); Path defaults are relative to project_root
_FIELDS: dict[str, tuple[Any, type]] = {
    "CONFIGS_DIR": ("configs", Path),
    "LOGS_DIR": ("logs", Path),
    "REPORTS_DIR": ("reports", Path),
    "ENVIRONMENT": ("development", str),
    "RANDOM_SEED": (42, int),
    "STRUCTURED_LOGGING": (False, bool),
    "LOG_LEVEL": ("INFO", str),
}


@dataclass(slots=True, frozen=True)
class Settings:
    """Immutable project settings: directories, run defaults and logging flags."""

    project_root: Path
    configs_dir: Path
    logs_dir: Path
    reports_dir: Path
    environment: str
    random_seed: int
    structured_logging: bool
    log_level: str

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def log_level_value(self) -> int:
        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.INFO

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        return {key: str(value) if isinstance(value, Path) else value for key, value in payload.items()}

    @classmethod
    def from_env(
        cls,
        *,
        overrides: Mapping[str, Any] | None = None,
        env_file: str | Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> "Settings":
        # overrides accept both "LOGS_DIR" and "logs_dir"
        pending = {key.upper(): value for key, value in dict(overrides or {}).items()}
        system_environ = dict(os.environ if environ is None else environ)

        env_mapping: dict[str, str] = {}
        if env_file is not None:
            env_mapping.update(load_env_file(Path(env_file).expanduser()))

        root_value = pending.pop("PROJECT_ROOT", None)
        if root_value is None:
            root_value = system_environ.get(f"{ENV_PREFIX}PROJECT_ROOT", env_mapping.get(f"{ENV_PREFIX}PROJECT_ROOT"))
        project_root = _project_root() if root_value is None else Path(str(root_value)).expanduser().resolve()

        if env_file is None:
            env_mapping.update(load_env_file(project_root / ".env"))
        env_mapping.update(system_environ)

        values: dict[str, Any] = {}
        for name, (default, target) in _FIELDS.items():
            if name in pending:
                raw = pending.pop(name)
            else:
                raw = env_mapping.get(f"{ENV_PREFIX}{name}", default)
            values[name.lower()] = _coerce(raw, target, base=project_root)

        if pending:
            raise KeyError(f"Unknown override(s): {', '.join(sorted(pending))}")

        return cls(project_root=project_root, **values)


_SETTINGS_CACHE: Settings | None = None


def get_settings(**kwargs: Any) -> Settings:
    """Return cached settings; keyword arguments bypass the cache."""

    global _SETTINGS_CACHE
    if kwargs:
        return Settings.from_env(**kwargs)
    if _SETTINGS_CACHE is None:
        _SETTINGS_CACHE = Settings.from_env()
    return _SETTINGS_CACHE


def reset_settings_cache() -> None:
    global _SETTINGS_CACHE
    _SETTINGS_CACHE = None
