"""Keyword-free schema variants: ``{}``, ``false``, null and boolean."""

from __future__ import annotations

from typing import Any

from .exceptions import ValidationException, Violation
from .printer import JSONPrinter
from .schema import Schema, SchemaBuilder


class EmptySchema(Schema):
    """Accepts every value; printed as ``{}`` (or ``true``)."""

    kind = "empty"

    @staticmethod
    def builder() -> EmptySchemaBuilder:
        return EmptySchemaBuilder()

    def validate(self, value: Any) -> None:
        return None

    def _describe_properties(self, printer: JSONPrinter) -> None:
        pass

    def _equality_fields(self) -> tuple[Any, ...]:
        return ()


class FalseSchema(Schema):
    """Rejects every value.

    Printed as ``false``, so title, description, ``$id`` and default do not
    survive printing.
    """

    kind = "false"

    @staticmethod
    def builder() -> FalseSchemaBuilder:
        return FalseSchemaBuilder()

    def validate(self, value: Any) -> None:
        raise ValidationException(
            self, [Violation(keyword="false", message="false schema always fails", schema=self)]
        )

    def describe_to(self, printer: JSONPrinter) -> None:
        printer.value(False)

    def _describe_properties(self, printer: JSONPrinter) -> None:
        pass

    def _equality_fields(self) -> tuple[Any, ...]:
        return ()


class NullSchema(Schema):
    """Accepts only ``None`` (JSON ``null``)."""

    kind = "null"

    @staticmethod
    def builder() -> NullSchemaBuilder:
        return NullSchemaBuilder()

    def validate(self, value: Any) -> None:
        if value is not None:
            raise ValidationException.type_mismatch(self, "null", value)

    def _describe_properties(self, printer: JSONPrinter) -> None:
        printer.key("type").value("null")

    def _equality_fields(self) -> tuple[Any, ...]:
        return ()


class BooleanSchema(Schema):
    """Accepts only ``True`` and ``False``."""

    kind = "boolean"

    @staticmethod
    def builder() -> BooleanSchemaBuilder:
        return BooleanSchemaBuilder()

    def validate(self, value: Any) -> None:
        if not isinstance(value, bool):
            raise ValidationException.type_mismatch(self, "boolean", value)

    def _describe_properties(self, printer: JSONPrinter) -> None:
        printer.key("type").value("boolean")

    def _equality_fields(self) -> tuple[Any, ...]:
        return ()


class EmptySchemaBuilder(SchemaBuilder[EmptySchema]):
    def build(self) -> EmptySchema:
        return EmptySchema(**self._base_kwargs())


class FalseSchemaBuilder(SchemaBuilder[FalseSchema]):
    def build(self) -> FalseSchema:
        return FalseSchema(**self._base_kwargs())


class NullSchemaBuilder(SchemaBuilder[NullSchema]):
    def build(self) -> NullSchema:
        return NullSchema(**self._base_kwargs())


class BooleanSchemaBuilder(SchemaBuilder[BooleanSchema]):
    def build(self) -> BooleanSchema:
        return BooleanSchema(**self._base_kwargs())


__all__ = [
    "BooleanSchema",
    "BooleanSchemaBuilder",
    "EmptySchema",
    "EmptySchemaBuilder",
    "FalseSchema",
    "FalseSchemaBuilder",
    "NullSchema",
    "NullSchemaBuilder",
]
