"""Shared configuration utilities: named YAML files and a lazy global instance."""

import os
from pathlib import Path
from typing import Any, Callable, Generic, TypeVar

import yaml

T = TypeVar('T')


def find_config_path(
    config_name: str | None,
    config_dir: Path,
    default_name: str = "prod",
    env_var: str | None = None,
) -> Path:
    """Resolve ``<config_dir>/<name>.yaml``.

    The name comes from ``config_name``, else ``env_var`` in the environment,
    else ``default_name``. Raises FileNotFoundError if the file is missing.
    """
    name = config_name
    if name is None and env_var:
        name = os.environ.get(env_var)
    path = config_dir / f"{name or default_name}.yaml"
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    return path


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML mapping; an empty file loads as {}."""
    with open(path) as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    return data


def section(data: dict[str, Any], key: str) -> dict[str, Any]:
    """Nested mapping from parsed YAML, treating a missing or null key as empty."""
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{key}' must be a mapping")
    return value


class ConfigSingleton(Generic[T]):
    """Holds one process-wide config, loaded on first ``get()``.

    Tests and entry points can ``set()`` an explicit instance; ``reset()``
    drops it so the next ``get()`` reloads.
    """

    def __init__(self, loader: Callable[[], T] | None = None):
        self._config: T | None = None
        self._loader = loader

    def get(self) -> T:
        """Get the config, loading it lazily if needed."""
        if self._config is None:
            if self._loader is None:
                raise RuntimeError("No config loaded and no loader set")
            self._config = self._loader()
        return self._config

    def set(self, config: T) -> None:
        """Set the config directly."""
        self._config = config

    def reset(self) -> None:
        """Reset the config, forcing reload on next get()."""
        self._config = None
