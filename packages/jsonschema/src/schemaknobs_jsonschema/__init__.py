"""SchemaKnobs JSON Schema engine.

Immutable schema nodes that validate parsed JSON values and report
every violated constraint at once:

- **Nodes**: StringSchema plus the keyword-free Empty/False/Null/Boolean variants
- **Builders**: fluent, fail-fast construction of nodes
- **Violations**: ValidationException aggregates flattened to (keyword, message) leaves
- **Formats**: pluggable ``format`` validators and their registry
- **Printing and loading**: round-trip between nodes and schema documents

Example:
    ```python
    from schemaknobs_jsonschema import StringSchema, ValidationException, for_format

    schema = (
        StringSchema.builder()
        .min_length(3)
        .format_validator(for_format("email"))
        .build()
    )
    try:
        schema.validate("x")
    except ValidationException as e:
        print(e.all_messages())
    ```
"""

from .exceptions import (
    NullArgumentError,
    PatternSyntaxError,
    SchemaError,
    ValidationException,
    Violation,
    json_type_name,
)
from .formats import (
    FormatRegistry,
    FormatValidator,
    FunctionFormatValidator,
    default_registry,
    for_format,
)
from .loader import LoaderSettings, SchemaLoader
from .printer import JSONPrinter
from .result import ValidationResult
from .schema import Schema, SchemaBuilder
from .simple import BooleanSchema, EmptySchema, FalseSchema, NullSchema
from .string import StringSchema, StringSchemaBuilder

__version__ = "0.1.0"

__all__ = [
    # Nodes
    "Schema",
    "SchemaBuilder",
    "StringSchema",
    "StringSchemaBuilder",
    "EmptySchema",
    "FalseSchema",
    "NullSchema",
    "BooleanSchema",
    # Violations and errors
    "ValidationException",
    "Violation",
    "SchemaError",
    "PatternSyntaxError",
    "NullArgumentError",
    "json_type_name",
    "ValidationResult",
    # Formats
    "FormatValidator",
    "FunctionFormatValidator",
    "FormatRegistry",
    "default_registry",
    "for_format",
    # Printing and loading
    "JSONPrinter",
    "SchemaLoader",
    "LoaderSettings",
]
