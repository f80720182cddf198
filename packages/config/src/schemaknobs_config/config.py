"""Core Config class implementation."""

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml  # type: ignore[import-untyped]

from .environment import EnvironmentOverrides
from .exceptions import (
    ConfigFileNotFoundError,
    ConfigNotFoundError,
    ConfigValidationError,
)

logger = logging.getLogger(__name__)


class Config:
    """A modular configuration system for composable settings.

    Internally stores configurations as a dictionary of lists of atomic
    configuration dictionaries, organized by type:

    ```yaml
    loader:
      - name: strict
        strict_formats: true
        formats: [email, date-time]
    ```
    """

    def __init__(self, *sources: Union[str, Path, dict], use_env: bool = True) -> None:
        """Initialize a Config object from one or more sources.

        Args:
            *sources: Variable number of sources (file paths or dictionaries)
            use_env: Apply SCHEMAKNOBS_* environment overrides after loading
        """
        self._data: Dict[str, List[Dict[str, Any]]] = {}
        self._environment_overrides = EnvironmentOverrides()

        for source in sources:
            self.load(source)

        if use_env:
            self._apply_environment_overrides()

    @classmethod
    def from_file(cls, path: Union[str, Path], use_env: bool = True) -> "Config":
        """Create a Config object from a YAML or JSON file."""
        return cls(path, use_env=use_env)

    @classmethod
    def from_dict(cls, data: dict, use_env: bool = True) -> "Config":
        """Create a Config object from a dictionary."""
        return cls(data, use_env=use_env)

    def load(self, source: Union[str, Path, dict]) -> None:
        """Load configuration from a file path or dictionary."""
        if isinstance(source, dict):
            self._load_dict(source)
        elif isinstance(source, (str, Path)):
            self._load_file(source)
        else:
            raise ConfigValidationError(
                f"Invalid source type: {type(source)}",
                context={"source_type": type(source).__name__},
            )

    def _load_file(self, path: Union[str, Path]) -> None:
        path = Path(path).resolve()

        if not path.exists():
            raise ConfigFileNotFoundError(
                f"Configuration file not found: {path}", context={"path": str(path)}
            )

        suffix = path.suffix.lower()
        with open(path) as f:
            if suffix in [".yaml", ".yml"]:
                data = yaml.safe_load(f)
            elif suffix == ".json":
                data = json.load(f)
            else:
                raise ConfigValidationError(
                    f"Unsupported file format: {suffix}", context={"path": str(path)}
                )

        if data:
            self._load_dict(data)

    def _load_dict(self, data: dict) -> None:
        for type_name, configs in data.items():
            if not isinstance(configs, list):
                configs = [configs]

            existing = self._data.setdefault(type_name, [])
            start_count = len(existing)
            for idx, config in enumerate(configs):
                existing.append(
                    self._normalize_atomic_config(config, type_name, start_count + idx)
                )

    def _normalize_atomic_config(self, config: Any, type_name: str, idx: int) -> dict:
        """Copy an atomic configuration, filling in its type and name."""
        if not isinstance(config, dict):
            raise ConfigValidationError(
                f"Configuration for {type_name}[{idx}] must be a mapping",
                context={"type": type_name, "index": idx},
            )
        config = copy.deepcopy(config)

        if "type" not in config:
            config["type"] = type_name
        elif config["type"] != type_name:
            raise ConfigValidationError(
                f"Type mismatch: expected {type_name}, got {config['type']}",
                context={"type": type_name, "index": idx},
            )

        if "name" not in config:
            config["name"] = str(idx)

        return config

    def _apply_environment_overrides(self) -> None:
        overrides = self._environment_overrides.get_overrides()

        for (type_name, name_or_index, attr), value in overrides.items():
            try:
                config = self.get(type_name, name_or_index)
            except ConfigNotFoundError as e:
                logger.warning(
                    "Failed to apply environment override %s: %s",
                    self._environment_overrides.to_env_var(type_name, name_or_index, attr),
                    e,
                )
                continue
            config[attr] = value
            self.set(type_name, name_or_index, config)

    def get_types(self) -> List[str]:
        """Get all configuration types."""
        return list(self._data.keys())

    def get_count(self, type_name: str) -> int:
        """Get the count of configurations for a type."""
        return len(self._data.get(type_name, []))

    def get_names(self, type_name: str) -> List[str]:
        """Get all configuration names for a type."""
        return [config["name"] for config in self._data.get(type_name, [])]

    def get(self, type_name: str, name_or_index: Union[str, int] = 0) -> dict:
        """Get a copy of a configuration by type and name/index.

        Raises:
            ConfigNotFoundError: If the type, name or index does not exist
        """
        if type_name not in self._data:
            raise ConfigNotFoundError(
                f"Type not found: {type_name}",
                context={"type": type_name, "available_types": self.get_types()},
            )

        configs = self._data[type_name]

        if isinstance(name_or_index, int):
            try:
                return copy.deepcopy(configs[name_or_index])
            except IndexError:
                raise ConfigNotFoundError(
                    f"Index out of range: {type_name}[{name_or_index}]",
                    context={"type": type_name, "index": name_or_index},
                ) from None

        for config in configs:
            if config["name"] == name_or_index:
                return copy.deepcopy(config)
        raise ConfigNotFoundError(
            f"Configuration not found: {type_name}[{name_or_index}]",
            context={"type": type_name, "name": name_or_index},
        )

    def set(self, type_name: str, name_or_index: Union[str, int], config: dict) -> None:
        """Set a configuration by type and name/index.

        Setting an unknown name appends a new configuration; an integer
        index may replace an existing entry or append at the end.
        """
        configs = self._data.setdefault(type_name, [])
        config = copy.deepcopy(config)

        if isinstance(name_or_index, int):
            if name_or_index < 0:
                name_or_index += len(configs)
            if not 0 <= name_or_index <= len(configs):
                raise ConfigValidationError(
                    f"Index out of range: {type_name}[{name_or_index}]",
                    context={"type": type_name, "index": name_or_index},
                )
            config = self._normalize_atomic_config(config, type_name, name_or_index)
            if name_or_index < len(configs):
                configs[name_or_index] = config
            else:
                configs.append(config)
            return

        config["name"] = name_or_index
        for i, existing in enumerate(configs):
            if existing["name"] == name_or_index:
                configs[i] = self._normalize_atomic_config(config, type_name, i)
                return
        configs.append(self._normalize_atomic_config(config, type_name, len(configs)))

    def to_dict(self) -> dict:
        """Export configuration as a dictionary."""
        return copy.deepcopy(self._data)

    def to_file(self, path: Union[str, Path], format: str | None = None) -> None:
        """Save configuration to a file.

        Args:
            path: Output file path
            format: Output format ("yaml" or "json"), auto-detected if not specified
        """
        path = Path(path)

        if format is None:
            suffix = path.suffix.lower()
            if suffix in [".yaml", ".yml"]:
                format = "yaml"
            elif suffix == ".json":
                format = "json"
            else:
                raise ConfigValidationError(
                    f"Cannot determine format from extension: {suffix}",
                    context={"path": str(path)},
                )

        data = self.to_dict()

        with open(path, "w") as f:
            if format == "yaml":
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
            elif format == "json":
                json.dump(data, f, indent=2)
            else:
                raise ConfigValidationError(f"Unsupported format: {format}")
