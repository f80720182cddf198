"""Load schema nodes from already-parsed schema documents.

The loader understands the keyword vocabulary of the variants in this
package: boolean schemas, ``{}``, ``"type"`` of ``string``, ``null`` or
``boolean``, and the string keywords ``minLength``, ``maxLength``,
``pattern`` and ``format``. Any node's :meth:`~Schema.to_dict` output
loads back into an equal node.

Example:
    ```python
    from schemaknobs_config import Config
    from schemaknobs_jsonschema.loader import LoaderSettings, SchemaLoader

    config = Config({"loader": [{"name": "strict", "strict_formats": True}]})
    loader = SchemaLoader(LoaderSettings.from_config(config, "strict"))
    schema = loader.load({"type": "string", "format": "email"})
    ```
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from schemaknobs_config import Config, ConfigValidationError

from .exceptions import SchemaError
from .formats import FormatRegistry, FormatValidator, default_registry
from .schema import Schema, SchemaBuilder
from .simple import BooleanSchema, EmptySchema, FalseSchema, NullSchema
from .string import StringSchema

logger = logging.getLogger(__name__)

STRING_KEYWORDS = ("minLength", "maxLength", "pattern", "format")

UNSUPPORTED_KEYWORDS = ("$ref",)


def _as_bool(name: str, value: Any) -> bool:
    """Read a boolean setting, accepting the spellings environment overrides use."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("true", "yes"):
        return True
    if isinstance(value, str) and value.lower() in ("false", "no"):
        return False
    raise ConfigValidationError(
        f"{name} must be a boolean, got {value!r}",
        context={"setting": name, "value": value},
    )


@dataclass(frozen=True)
class LoaderSettings:
    """Loader behaviour switches.

    Attributes:
        strict_formats: Fail on an unknown ``format`` instead of ignoring it
        formats: If set, only these format names may be resolved
    """

    strict_formats: bool = False
    formats: tuple[str, ...] | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LoaderSettings:
        """Read settings from an atomic ``loader`` configuration.

        Raises:
            ConfigValidationError: If ``strict_formats`` is not a boolean
        """
        formats = data.get("formats")
        if isinstance(formats, str):
            formats = [name.strip() for name in formats.split(",") if name.strip()]
        return cls(
            strict_formats=_as_bool("strict_formats", data.get("strict_formats", False)),
            formats=tuple(formats) if formats is not None else None,
        )

    @classmethod
    def from_config(cls, config: Config, name_or_index: Union[str, int] = 0) -> LoaderSettings:
        """Read settings from the ``loader`` type of a :class:`Config`.

        Raises:
            ConfigNotFoundError: If the loader configuration does not exist
        """
        return cls.from_dict(config.get("loader", name_or_index))


class SchemaLoader:
    """Turns schema documents into immutable schema nodes."""

    def __init__(
        self,
        settings: LoaderSettings | None = None,
        formats: FormatRegistry | None = None,
    ):
        self._settings = settings or LoaderSettings()
        self._formats = formats if formats is not None else default_registry()

    @property
    def settings(self) -> LoaderSettings:
        return self._settings

    def load(self, document: Mapping[str, Any] | bool) -> Schema:
        """Build the schema node a document describes.

        Raises:
            SchemaError: If the document is malformed or uses unsupported keywords
        """
        if isinstance(document, bool):
            return EmptySchema() if document else FalseSchema()
        if not isinstance(document, Mapping):
            raise SchemaError(
                f"schema document must be an object or a boolean, got {type(document).__name__}",
                context={"document_type": type(document).__name__},
            )

        for keyword in UNSUPPORTED_KEYWORDS:
            if keyword in document:
                raise SchemaError(
                    f"keyword {keyword!r} is not supported by this loader",
                    context={"keyword": keyword},
                )

        schema_type = document.get("type")
        builder: SchemaBuilder[Any]
        if schema_type == "string" or (
            schema_type is None and any(k in document for k in STRING_KEYWORDS)
        ):
            builder = self._string_builder(document, requires_string=schema_type is not None)
        elif schema_type == "null":
            builder = NullSchema.builder()
        elif schema_type == "boolean":
            builder = BooleanSchema.builder()
        elif schema_type is None:
            builder = EmptySchema.builder()
        else:
            raise SchemaError(
                f"unsupported schema type: {schema_type!r}",
                context={"keyword": "type", "value": schema_type},
            )

        return (
            builder.title(self._optional_str(document, "title"))
            .description(self._optional_str(document, "description"))
            .schema_id(self._optional_str(document, "$id"))
            .default_value(document.get("default"))
            .build()
        )

    def _string_builder(
        self, document: Mapping[str, Any], requires_string: bool
    ) -> SchemaBuilder[Any]:
        builder = (
            StringSchema.builder()
            .requires_string(requires_string)
            .min_length(self._length(document, "minLength"))
            .max_length(self._length(document, "maxLength"))
            .pattern(self._optional_str(document, "pattern"))
        )
        format_name = self._optional_str(document, "format")
        if format_name is not None:
            validator = self._resolve_format(format_name)
            if validator is not None:
                builder.format_validator(validator)
        return builder

    def _resolve_format(self, format_name: str) -> FormatValidator | None:
        allowed = self._settings.formats
        validator = None
        if allowed is None or format_name in allowed:
            validator = self._formats.get_optional(format_name)
        if validator is not None:
            return validator
        if self._settings.strict_formats:
            raise SchemaError(
                f"unknown format: {format_name!r}",
                context={"keyword": "format", "value": format_name},
            )
        logger.warning("Ignoring unknown format %r", format_name)
        return None

    @staticmethod
    def _length(document: Mapping[str, Any], keyword: str) -> int | None:
        value = document.get(keyword)
        if value is None:
            return None
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise SchemaError(
                f"{keyword} must be a non-negative integer, got {value!r}",
                context={"keyword": keyword, "value": value},
            )
        return value

    @staticmethod
    def _optional_str(document: Mapping[str, Any], keyword: str) -> str | None:
        value = document.get(keyword)
        if value is not None and not isinstance(value, str):
            raise SchemaError(
                f"{keyword} must be a string, got {type(value).__name__}",
                context={"keyword": keyword, "value": value},
            )
        return value


__all__ = ["LoaderSettings", "SchemaLoader"]
