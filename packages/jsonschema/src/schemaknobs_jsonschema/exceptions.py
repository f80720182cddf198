"""Violation model and error taxonomy for the schema engine.

Validation never stops at the first problem: every check a schema node
runs appends a :class:`Violation` to a call-local list, and the node
raises a single :class:`ValidationException` carrying all of them.

Construction-time problems (an invalid pattern, a missing format
validator) are :class:`SchemaError` subclasses and are raised when the
schema is built, so an invalid node never exists.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Union

from schemaknobs_common.exceptions import ConfigurationError, ValidationError

if TYPE_CHECKING:
    from .schema import Schema

ROOT_POINTER = "#"

TYPE_KEYWORD = "type"


def json_type_name(value: Any) -> str:
    """Name the JSON kind of a parsed value, e.g. ``"integer"`` for ``3``."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


@dataclass(frozen=True)
class Violation:
    """One concrete reason a value failed a single keyword."""

    keyword: str
    message: str
    pointer: str = ROOT_POINTER
    schema: Schema | None = field(default=None, compare=False, repr=False)

    @property
    def full_message(self) -> str:
        return f"{self.pointer}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "keyword": self.keyword,
            "message": self.message,
            "pointerToViolation": self.pointer,
        }


Cause = Union[Violation, "ValidationException"]


class ValidationException(ValidationError):
    """Aggregate of every violation one ``validate`` call found on one node.

    Causes are kept in the order they were found and may nest: a parent
    node can wrap the aggregates raised by its children. Use
    :attr:`violations` or :meth:`all_messages` to get the flattened leaves.

    Args:
        schema: The node whose validation failed
        causes: Non-empty sequence of violations or nested aggregates
        pointer: JSON pointer of the value that failed

    Raises:
        ValueError: If ``causes`` is empty
    """

    def __init__(
        self,
        schema: Schema | None,
        causes: Sequence[Cause],
        pointer: str = ROOT_POINTER,
    ):
        if not causes:
            raise ValueError("ValidationException requires at least one cause")
        self._schema = schema
        self._causes = tuple(causes)
        self._pointer = pointer
        leaves = list(self._iter_violations())
        if len(leaves) == 1:
            message = leaves[0].full_message
        else:
            message = f"{pointer}: {len(leaves)} schema violations found"
        super().__init__(
            message,
            context={
                "pointer": pointer,
                "keywords": [leaf.keyword for leaf in leaves],
            },
        )

    def __reduce__(self) -> tuple[Any, ...]:
        return (type(self), (self._schema, self._causes, self._pointer))

    @classmethod
    def raise_for(
        cls,
        schema: Schema | None,
        violations: Sequence[Cause],
        pointer: str = ROOT_POINTER,
    ) -> None:
        """Raise one aggregate when ``violations`` is non-empty.

        This is the collect-all-then-raise gate shared by every schema
        variant: checks append to a local list, then call this once.
        """
        if violations:
            raise cls(schema, violations, pointer)

    @classmethod
    def type_mismatch(
        cls,
        schema: Schema | None,
        expected: str,
        value: Any,
        pointer: str = ROOT_POINTER,
    ) -> ValidationException:
        """Build the single-violation aggregate for a value of the wrong kind."""
        violation = Violation(
            keyword=TYPE_KEYWORD,
            message=f"expected {expected}, got {json_type_name(value)}",
            pointer=pointer,
            schema=schema,
        )
        return cls(schema, [violation], pointer)

    @property
    def schema(self) -> Schema | None:
        return self._schema

    @property
    def causes(self) -> tuple[Cause, ...]:
        return self._causes

    @property
    def pointer(self) -> str:
        return self._pointer

    @property
    def violations(self) -> list[Violation]:
        """Leaf violations, depth-first in the order they were found."""
        return list(self._iter_violations())

    @property
    def violation_count(self) -> int:
        return sum(1 for _ in self._iter_violations())

    @property
    def keywords(self) -> list[str]:
        return [violation.keyword for violation in self._iter_violations()]

    def all_messages(self) -> list[str]:
        """Flatten the aggregate into ``"<pointer>: <message>"`` lines."""
        return [violation.full_message for violation in self._iter_violations()]

    def _iter_violations(self) -> Iterator[Violation]:
        for cause in self._causes:
            if isinstance(cause, ValidationException):
                yield from cause._iter_violations()
            else:
                yield cause

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible report of the aggregate and its causes."""
        return {
            "message": str(self),
            "pointerToViolation": self._pointer,
            "violationCount": self.violation_count,
            "causingExceptions": [cause.to_dict() for cause in self._causes],
        }


class SchemaError(ConfigurationError):
    """Raised when a schema cannot be constructed from its definition."""

    pass


class PatternSyntaxError(SchemaError):
    """Raised at build time when a ``pattern`` is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str):
        super().__init__(
            f"invalid pattern {pattern!r}: {reason}",
            context={"keyword": "pattern", "pattern": pattern, "reason": reason},
        )
        self.pattern = pattern
        self.reason = reason

    def __reduce__(self) -> tuple[Any, ...]:
        return (type(self), (self.pattern, self.reason))


class NullArgumentError(SchemaError):
    """Raised when a builder setter that requires a value receives None."""

    def __init__(self, argument: str):
        super().__init__(f"{argument} cannot be None", context={"argument": argument})
        self.argument = argument

    def __reduce__(self) -> tuple[Any, ...]:
        return (type(self), (self.argument,))


__all__ = [
    "ROOT_POINTER",
    "TYPE_KEYWORD",
    "NullArgumentError",
    "PatternSyntaxError",
    "SchemaError",
    "ValidationException",
    "Violation",
    "json_type_name",
]
