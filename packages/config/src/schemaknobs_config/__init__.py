"""SchemaKnobs Config Package

A modular configuration system for composable settings.
"""

from .config import Config
from .environment import EnvironmentOverrides
from .exceptions import (
    ConfigError,
    ConfigFileNotFoundError,
    ConfigNotFoundError,
    ConfigValidationError,
    InvalidOverrideError,
)

__version__ = "0.1.0"
__all__ = [
    "Config",
    "ConfigError",
    "ConfigFileNotFoundError",
    "ConfigNotFoundError",
    "ConfigValidationError",
    "EnvironmentOverrides",
    "InvalidOverrideError",
]
