"""Base class and builder shared by every schema node variant.

A schema node is immutable once built and may be shared across threads.
Each variant carries a ``kind`` tag; two nodes are only ever equal when
their tags match, whatever their other fields hold.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, ClassVar, Generic, TypeVar

from .exceptions import ValidationException, json_type_name
from .printer import JSONPrinter
from .result import ValidationResult

S = TypeVar("S", bound="Schema")
B = TypeVar("B", bound="SchemaBuilder[Any]")


def _freeze(value: Any) -> Any:
    """Turn JSON-like values into hashable equivalents.

    Scalars are tagged with their JSON kind so that ``1``, ``1.0`` and
    ``True`` stay distinct, as they print differently.
    """
    if isinstance(value, Mapping):
        return frozenset((k, _freeze(v)) for k, v in value.items())
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    return (json_type_name(value), value)


class Schema(ABC):
    """A constraint-bearing node of a schema tree.

    Subclasses implement :meth:`validate`, :meth:`_describe_properties`
    and :meth:`_equality_fields`; the base class carries the metadata
    every variant shares (title, description, ``$id`` and default).
    """

    kind: ClassVar[str] = ""

    def __init__(
        self,
        *,
        title: str | None = None,
        description: str | None = None,
        schema_id: str | None = None,
        default_value: Any = None,
    ):
        self._title = title
        self._description = description
        self._schema_id = schema_id
        self._default_value = default_value

    @staticmethod
    def builder() -> SchemaBuilder[Any]:
        """Create a builder for this variant; every variant overrides it."""
        raise NotImplementedError

    @property
    def title(self) -> str | None:
        return self._title

    @property
    def description(self) -> str | None:
        return self._description

    @property
    def schema_id(self) -> str | None:
        return self._schema_id

    @property
    def default_value(self) -> Any:
        return self._default_value

    @abstractmethod
    def validate(self, value: Any) -> None:
        """Check ``value`` against this node.

        Returns normally when the value conforms.

        Raises:
            ValidationException: Carrying every violation found
        """

    def is_valid(self, value: Any) -> bool:
        try:
            self.validate(value)
        except ValidationException:
            return False
        return True

    def check(self, value: Any) -> ValidationResult:
        """Validate without raising, returning the flattened messages."""
        try:
            self.validate(value)
        except ValidationException as e:
            return ValidationResult.failure(value, e.all_messages())
        return ValidationResult.success(value)

    def describe_to(self, printer: JSONPrinter) -> None:
        """Print this node as a schema document object."""
        printer.object()
        printer.if_present("title", self._title)
        printer.if_present("description", self._description)
        printer.if_present("$id", self._schema_id)
        printer.if_present("default", self._default_value)
        self._describe_properties(printer)
        printer.end_object()

    @abstractmethod
    def _describe_properties(self, printer: JSONPrinter) -> None:
        """Print the variant-specific keywords."""

    @abstractmethod
    def _equality_fields(self) -> tuple[Any, ...]:
        """Values that, together with the base fields, define equality."""

    def to_dict(self) -> dict[str, Any] | bool:
        """The schema document for this node; boolean schemas print as a bool."""
        printer = JSONPrinter()
        self.describe_to(printer)
        return printer.result

    def to_json(self, indent: int | None = None) -> str:
        printer = JSONPrinter()
        self.describe_to(printer)
        return printer.to_json(indent=indent)

    @classmethod
    def from_dict(cls, document: Mapping[str, Any] | bool) -> Schema:
        """Load a schema node from its keyword form."""
        from .loader import SchemaLoader

        return SchemaLoader().load(document)

    def _base_fields(self) -> tuple[Any, ...]:
        return (self._title, self._description, self._schema_id, self._default_value)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Schema):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        return hash(self._identity())

    def _identity(self) -> tuple[Any, ...]:
        return (self.kind, _freeze(self._base_fields()), _freeze(self._equality_fields()))

    def __str__(self) -> str:
        return self.to_json()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_json()})"


class SchemaBuilder(ABC, Generic[S]):
    """Mutable, fluent configuration for one schema node.

    :meth:`build` is the single point where configuration turns into an
    immutable node, and where configuration errors surface.
    """

    def __init__(self) -> None:
        self._title: str | None = None
        self._description: str | None = None
        self._schema_id: str | None = None
        self._default_value: Any = None

    def title(self: B, title: str | None) -> B:
        self._title = title
        return self

    def description(self: B, description: str | None) -> B:
        self._description = description
        return self

    def schema_id(self: B, schema_id: str | None) -> B:
        self._schema_id = schema_id
        return self

    def default_value(self: B, default_value: Any) -> B:
        self._default_value = default_value
        return self

    def _base_kwargs(self) -> dict[str, Any]:
        return {
            "title": self._title,
            "description": self._description,
            "schema_id": self._schema_id,
            "default_value": self._default_value,
        }

    @abstractmethod
    def build(self) -> S:
        """Create the immutable schema node."""


__all__ = ["Schema", "SchemaBuilder"]
