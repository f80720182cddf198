"""Incremental JSON writer used to print schemas back to keyword form."""

from __future__ import annotations

import json
import re
from typing import Any

from schemaknobs_common.exceptions import SerializationError

_UNSET = object()


class JSONPrinter:
    """Builds a JSON value from a sequence of ``key``/``value`` calls.

    Containers are opened with :meth:`object` / :meth:`array` and closed
    with the matching ``end_`` call. Inside an object every :meth:`value`
    must be preceded by a :meth:`key`.

    Example:
        ```python
        printer = JSONPrinter()
        printer.object().key("type").value("string")
        printer.if_present("minLength", None)
        printer.end_object()
        printer.to_json()
        # '{"type": "string"}'
        ```
    """

    def __init__(self) -> None:
        self._root: Any = _UNSET
        self._stack: list[dict[str, Any] | list[Any]] = []
        self._pending_key: str | None = None

    def object(self) -> JSONPrinter:
        """Open a JSON object."""
        container: dict[str, Any] = {}
        self._emit(container)
        self._stack.append(container)
        return self

    def end_object(self) -> JSONPrinter:
        self._close(dict)
        return self

    def array(self) -> JSONPrinter:
        """Open a JSON array."""
        container: list[Any] = []
        self._emit(container)
        self._stack.append(container)
        return self

    def end_array(self) -> JSONPrinter:
        self._close(list)
        return self

    def key(self, name: str) -> JSONPrinter:
        """Name the member that the next value is written to."""
        if not self._stack or not isinstance(self._stack[-1], dict):
            raise SerializationError("key() called outside of an object", context={"key": name})
        if self._pending_key is not None:
            raise SerializationError(
                f"key {name!r} follows key {self._pending_key!r} without a value",
                context={"key": name, "pending_key": self._pending_key},
            )
        self._pending_key = name
        return self

    def value(self, value: Any) -> JSONPrinter:
        """Write a value at the current position.

        Compiled patterns are written as their source text, and anything
        with a ``describe_to`` method (a schema node) prints itself as a
        nested object.
        """
        if hasattr(value, "describe_to"):
            value.describe_to(self)
        elif isinstance(value, re.Pattern):
            self._emit(value.pattern)
        else:
            self._emit(value)
        return self

    def if_present(self, key: str, value: Any) -> JSONPrinter:
        """Write ``key: value`` unless ``value`` is None."""
        if value is not None:
            self.key(key).value(value)
        return self

    @property
    def result(self) -> Any:
        """The completed JSON value.

        Raises:
            SerializationError: If nothing was written or a container is still open
        """
        if self._root is _UNSET or self._stack:
            raise SerializationError(
                "JSON document is incomplete",
                context={"open_containers": len(self._stack)},
            )
        return self._root

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.result, indent=indent, ensure_ascii=False)

    def _emit(self, value: Any) -> None:
        if not self._stack:
            if self._root is not _UNSET:
                raise SerializationError("JSON document already has a root value")
            self._root = value
            return

        container = self._stack[-1]
        if isinstance(container, list):
            container.append(value)
            return
        if self._pending_key is None:
            raise SerializationError(
                "value() called inside an object without a pending key",
                context={"value": repr(value)},
            )
        container[self._pending_key] = value
        self._pending_key = None

    def _close(self, expected: type) -> None:
        if not self._stack or not isinstance(self._stack[-1], expected):
            raise SerializationError(
                f"no open {'object' if expected is dict else 'array'} to close"
            )
        if self._pending_key is not None:
            raise SerializationError(
                f"key {self._pending_key!r} has no value",
                context={"pending_key": self._pending_key},
            )
        self._stack.pop()


__all__ = ["JSONPrinter"]
