"""Common utilities and base classes for schemaknobs packages.

- **Exceptions**: Unified exception hierarchy with context support
- **Registry**: Generic thread-safe registry for named plugins

Example:
    ```python
    from schemaknobs_common import Registry, SchemaknobsError

    registry = Registry[str]("names")
    registry.register("key", "value")
    ```
"""

from schemaknobs_common.exceptions import (
    ConfigurationError,
    NotFoundError,
    OperationError,
    SchemaknobsError,
    SerializationError,
    ValidationError,
)
from schemaknobs_common.registry import Registry

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Exceptions
    "SchemaknobsError",
    "ValidationError",
    "ConfigurationError",
    "NotFoundError",
    "OperationError",
    "SerializationError",
    # Registry
    "Registry",
]
