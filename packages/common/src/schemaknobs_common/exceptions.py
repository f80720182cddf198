"""Common exception hierarchy for all schemaknobs packages.

Every error raised by a schemaknobs package derives from
:class:`SchemaknobsError`, so callers can catch the whole family with a
single ``except`` clause. Exceptions optionally carry a context
dictionary with structured details about the failure.

Example:
    ```python
    from schemaknobs_common.exceptions import NotFoundError

    raise NotFoundError(
        "Unknown format",
        context={"format": "uuid", "available": ["email", "date-time"]}
    )
    ```

Package-Specific Extensions:
    ```python
    from schemaknobs_common.exceptions import ConfigurationError

    class SchemaError(ConfigurationError):
        '''Raised when a schema cannot be constructed.'''
    ```
"""

from typing import Any, Dict


class SchemaknobsError(Exception):
    """Base exception for all schemaknobs packages.

    Attributes:
        context: Dictionary containing contextual information about the error
        details: Alias for context

    Args:
        message: Human-readable error message
        context: Optional dictionary with error context (keywords, values, etc.)
        details: Alternative to context (takes precedence when both are given)

    Example:
        ```python
        error = SchemaknobsError("Build failed", context={"keyword": "pattern"})
        str(error)
        # 'Build failed'
        error.context
        # {'keyword': 'pattern'}
        ```
    """

    def __init__(
        self,
        message: str,
        context: Dict[str, Any] | None = None,
        details: Dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.context = details or context or {}
        self.details = self.context


class ValidationError(SchemaknobsError):
    """Raised when a value fails validation.

    The schema engine raises a subclass carrying the full set of
    violations found, never only the first one.
    """

    pass


class ConfigurationError(SchemaknobsError):
    """Raised when configuration or a schema definition is invalid.

    Covers errors that must be fixed by whoever authored the
    configuration before anything can run, for example an invalid
    regular expression in a schema or a missing configuration file.
    """

    pass


class NotFoundError(SchemaknobsError):
    """Raised when a requested item is not found.

    Example:
        ```python
        raise NotFoundError(
            "Item not found: uuid",
            context={"key": "uuid", "registry": "formats"}
        )
        ```
    """

    pass


class OperationError(SchemaknobsError):
    """Raised when an operation fails, e.g. a duplicate registration."""

    pass


class SerializationError(SchemaknobsError):
    """Raised when converting objects to or from JSON-compatible data fails.

    Example:
        ```python
        raise SerializationError(
            "value() called without a pending key",
            context={"value": 3}
        )
        ```
    """

    pass


__all__ = [
    "SchemaknobsError",
    "ValidationError",
    "ConfigurationError",
    "NotFoundError",
    "OperationError",
    "SerializationError",
]
