"""Environment variable override system."""

import os
from typing import Any, Dict, Tuple, Union

from .exceptions import InvalidOverrideError

OverrideTarget = Tuple[str, Union[str, int], str]


class EnvironmentOverrides:
    """Handles environment variable overrides for configurations.

    Environment variable format:
    SCHEMAKNOBS_<TYPE>__<NAME_OR_INDEX>__<ATTRIBUTE>

    Examples:
        - SCHEMAKNOBS_LOADER__0__STRICT_FORMATS=true -> loader[0].strict_formats
        - SCHEMAKNOBS_LOADER__STRICT__FORMATS -> loader[strict].formats
    """

    ENV_PREFIX = "SCHEMAKNOBS_"
    ENV_SEPARATOR = "__"

    def __init__(self, prefix: str | None = None) -> None:
        """Initialize the environment override handler.

        Args:
            prefix: Custom environment variable prefix (default: SCHEMAKNOBS_)
        """
        self.prefix = prefix or self.ENV_PREFIX

    def get_overrides(self) -> Dict[OverrideTarget, Any]:
        """Collect overrides from the current environment.

        Variables that carry the prefix but not the full
        type/selector/attribute structure are skipped.

        Returns:
            Mapping of (type, name_or_index, attribute) to parsed value
        """
        overrides: Dict[OverrideTarget, Any] = {}
        for key, value in os.environ.items():
            if not key.startswith(self.prefix):
                continue
            try:
                target = self.parse_env_var(key)
            except InvalidOverrideError:
                continue
            overrides[target] = self._parse_value(value)
        return overrides

    def parse_env_var(self, env_var: str) -> OverrideTarget:
        """Split an environment variable name into its override target.

        Raises:
            InvalidOverrideError: If the variable does not follow the format
        """
        if not env_var.startswith(self.prefix):
            raise InvalidOverrideError(
                f"Environment variable must start with {self.prefix}",
                context={"variable": env_var},
            )

        parts = env_var[len(self.prefix) :].split(self.ENV_SEPARATOR)
        if len(parts) < 3 or not all(parts):
            raise InvalidOverrideError(
                f"Invalid environment variable format: {env_var}",
                context={"variable": env_var},
            )

        type_name = parts[0].lower()
        selector = parts[1]
        attribute = self.ENV_SEPARATOR.join(parts[2:]).lower()

        name_or_index: Union[str, int]
        if selector.isdigit() or (selector.startswith("-") and selector[1:].isdigit()):
            name_or_index = int(selector)
        else:
            name_or_index = selector.lower()

        return type_name, name_or_index, attribute

    def to_env_var(self, type_name: str, name_or_index: Union[str, int], attribute: str) -> str:
        """Build the environment variable name that overrides an attribute."""
        return self.ENV_SEPARATOR.join(
            [
                f"{self.prefix}{type_name.upper()}",
                str(name_or_index).upper(),
                attribute.upper(),
            ]
        )

    def _parse_value(self, value: str) -> Any:
        """Parse an environment variable value to bool, int, float or str."""
        if value.lower() in ["true", "yes"]:
            return True
        elif value.lower() in ["false", "no"]:
            return False

        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        return value
