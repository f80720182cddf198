"""Custom exceptions for the config package.

Built on the common exception framework from schemaknobs_common.
"""

from schemaknobs_common import (
    ConfigurationError as BaseConfigurationError,
    NotFoundError,
)

ConfigError = BaseConfigurationError


class ConfigNotFoundError(NotFoundError):
    """Raised when a requested configuration is not found."""

    pass


class ConfigFileNotFoundError(ConfigNotFoundError):
    """Raised when a configuration file does not exist."""

    pass


class ConfigValidationError(ConfigError):
    """Raised when a configuration source or value is malformed."""

    pass


class InvalidOverrideError(ConfigValidationError):
    """Raised when an environment variable does not follow the override format."""

    pass
