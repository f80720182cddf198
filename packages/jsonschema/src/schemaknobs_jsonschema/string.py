"""String schema validator.

Checks that a value is a string whose length, content and format meet
the ``minLength``, ``maxLength``, ``pattern`` and ``format`` keywords.
Every applicable check runs on each call, and all failures are reported
together in one :class:`~schemaknobs_jsonschema.exceptions.ValidationException`.

Example:
    ```python
    from schemaknobs_jsonschema import StringSchema

    schema = StringSchema.builder().min_length(3).pattern("^[0-9]+$").build()
    schema.validate("a")
    # ValidationException: #: 2 schema violations found
    ```
"""

from __future__ import annotations

import logging
import re
from typing import Any

from .exceptions import (
    NullArgumentError,
    PatternSyntaxError,
    SchemaError,
    ValidationException,
    Violation,
)
from .formats import FormatValidator
from .printer import JSONPrinter
from .schema import Schema, SchemaBuilder

logger = logging.getLogger(__name__)


def compile_pattern(source: str) -> re.Pattern[str]:
    """Compile a ``pattern`` keyword value.

    Raises:
        PatternSyntaxError: If ``source`` is not a valid regular expression
    """
    try:
        compiled = re.compile(source)
    except re.error as e:
        raise PatternSyntaxError(source, str(e)) from e
    logger.debug("Compiled pattern %r", source)
    return compiled


class StringSchema(Schema):
    """Immutable ``{"type": "string"}`` node.

    Build instances with :meth:`builder`; ``StringSchema()`` gives the
    unconstrained node that accepts any string.

    Attributes:
        min_length: Lower bound on the number of code points, or None
        max_length: Upper bound on the number of code points, or None
        pattern: Compiled ``pattern``, or None
        requires_string: Whether non-string values are a type error
        format_validator: Validator for the ``format`` keyword, or None
    """

    kind = "string"

    def __init__(
        self,
        *,
        min_length: int | None = None,
        max_length: int | None = None,
        pattern: re.Pattern[str] | None = None,
        requires_string: bool = True,
        format_validator: FormatValidator | None = None,
        **base: Any,
    ):
        super().__init__(**base)
        self._min_length = min_length
        self._max_length = max_length
        self._pattern = pattern
        self._requires_string = requires_string
        self._format_validator = format_validator

    @staticmethod
    def builder() -> StringSchemaBuilder:
        return StringSchemaBuilder()

    @property
    def min_length(self) -> int | None:
        return self._min_length

    @property
    def max_length(self) -> int | None:
        return self._max_length

    @property
    def pattern(self) -> re.Pattern[str] | None:
        return self._pattern

    @property
    def requires_string(self) -> bool:
        return self._requires_string

    @property
    def format_validator(self) -> FormatValidator | None:
        return self._format_validator

    def validate(self, value: Any) -> None:
        if not isinstance(value, str):
            if self._requires_string:
                raise ValidationException.type_mismatch(self, "string", value)
            # not a string: left to a sibling schema
            return

        violations: list[Violation] = []
        self._check_length(value, violations)
        self._check_pattern(value, violations)
        self._check_format(value, violations)
        ValidationException.raise_for(self, violations)

    def _check_length(self, subject: str, violations: list[Violation]) -> None:
        # str length counts code points, so astral characters count once
        actual = len(subject)
        if self._min_length is not None and actual < self._min_length:
            violations.append(
                self._violation(
                    "minLength", f"expected minLength: {self._min_length}, actual: {actual}"
                )
            )
        if self._max_length is not None and actual > self._max_length:
            violations.append(
                self._violation(
                    "maxLength", f"expected maxLength: {self._max_length}, actual: {actual}"
                )
            )

    def _check_pattern(self, subject: str, violations: list[Violation]) -> None:
        if self._pattern is not None and self._pattern.search(subject) is None:
            violations.append(
                self._violation(
                    "pattern",
                    f"string [{subject}] does not match pattern {self._pattern.pattern}",
                )
            )

    def _check_format(self, subject: str, violations: list[Violation]) -> None:
        if self._format_validator is None:
            return
        failure = self._format_validator.validate(subject)
        if failure is not None:
            violations.append(self._violation("format", failure))

    def _violation(self, keyword: str, message: str) -> Violation:
        return Violation(keyword=keyword, message=message, schema=self)

    def _equality_fields(self) -> tuple[Any, ...]:
        return (
            self._requires_string,
            self._min_length,
            self._max_length,
            self._pattern.pattern if self._pattern is not None else None,
            self._format_validator,
        )

    def _describe_properties(self, printer: JSONPrinter) -> None:
        if self._requires_string:
            printer.key("type").value("string")
        printer.if_present("minLength", self._min_length)
        printer.if_present("maxLength", self._max_length)
        printer.if_present("pattern", self._pattern)
        if self._format_validator is not None:
            printer.key("format").value(self._format_validator.format_name)


class StringSchemaBuilder(SchemaBuilder[StringSchema]):
    """Fluent builder for :class:`StringSchema`.

    Setters only record configuration; :meth:`build` compiles the
    pattern, so an invalid pattern fails there and never at validation
    time.
    """

    def __init__(self) -> None:
        super().__init__()
        self._min_length: int | None = None
        self._max_length: int | None = None
        self._pattern: str | None = None
        self._requires_string = True
        self._format_validator: FormatValidator | None = None

    def min_length(self, min_length: int | None) -> StringSchemaBuilder:
        self._min_length = _check_bound("minLength", min_length)
        return self

    def max_length(self, max_length: int | None) -> StringSchemaBuilder:
        self._max_length = _check_bound("maxLength", max_length)
        return self

    def pattern(self, pattern: str | None) -> StringSchemaBuilder:
        """Set the ``pattern`` source text; it is compiled by :meth:`build`."""
        self._pattern = pattern
        return self

    def requires_string(self, requires_string: bool) -> StringSchemaBuilder:
        self._requires_string = requires_string
        return self

    def format_validator(self, format_validator: FormatValidator) -> StringSchemaBuilder:
        """Set the validator for the ``format`` keyword.

        Raises:
            NullArgumentError: If ``format_validator`` is None
        """
        if format_validator is None:
            raise NullArgumentError("format_validator")
        self._format_validator = format_validator
        return self

    def build(self) -> StringSchema:
        """Create the node, compiling the pattern if one was set.

        Raises:
            PatternSyntaxError: If the pattern is not a valid regular expression
        """
        compiled = compile_pattern(self._pattern) if self._pattern is not None else None
        if (
            self._min_length is not None
            and self._max_length is not None
            and self._min_length > self._max_length
        ):
            logger.warning(
                "minLength %d is greater than maxLength %d; no string can satisfy this schema",
                self._min_length,
                self._max_length,
            )
        schema = StringSchema(
            min_length=self._min_length,
            max_length=self._max_length,
            pattern=compiled,
            requires_string=self._requires_string,
            format_validator=self._format_validator,
            **self._base_kwargs(),
        )
        logger.debug(
            "Built string schema: minLength=%s maxLength=%s pattern=%r format=%s",
            self._min_length,
            self._max_length,
            self._pattern,
            self._format_validator,
        )
        return schema


def _check_bound(keyword: str, bound: int | None) -> int | None:
    if bound is None:
        return None
    if isinstance(bound, bool) or not isinstance(bound, int):
        raise SchemaError(
            f"{keyword} must be an integer, got {type(bound).__name__}",
            context={"keyword": keyword, "value": bound},
        )
    if bound < 0:
        raise SchemaError(
            f"{keyword} must be non-negative, got {bound}",
            context={"keyword": keyword, "value": bound},
        )
    return bound


__all__ = ["StringSchema", "StringSchemaBuilder", "compile_pattern"]
