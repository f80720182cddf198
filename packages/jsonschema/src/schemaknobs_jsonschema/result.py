"""Non-raising result type for schema validation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ValidationResult:
    """Outcome of checking one value against a schema.

    ``errors`` holds the flattened ``"<pointer>: <message>"`` lines of the
    aggregate exception that ``validate`` would have raised.
    """

    valid: bool
    value: Any
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        """Allow 'if result:' usage to check validity."""
        return self.valid

    def merge(self, other: ValidationResult) -> ValidationResult:
        """Combine results for composite validation.

        Args:
            other: Another ValidationResult to merge with this one

        Returns:
            New ValidationResult with combined state
        """
        return ValidationResult(
            valid=self.valid and other.valid,
            value=self.value,
            errors=self.errors + other.errors,
            warnings=self.warnings + other.warnings,
        )

    @classmethod
    def success(cls, value: Any, warnings: list[str] | None = None) -> ValidationResult:
        return cls(valid=True, value=value, errors=[], warnings=warnings or [])

    @classmethod
    def failure(
        cls, value: Any, errors: list[str], warnings: list[str] | None = None
    ) -> ValidationResult:
        return cls(valid=False, value=value, errors=errors, warnings=warnings or [])


__all__ = ["ValidationResult"]
