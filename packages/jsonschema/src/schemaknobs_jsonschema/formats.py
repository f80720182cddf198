"""Pluggable ``format`` keyword validators.

A format validator performs a semantic check on a string beyond what
length and pattern constraints can express. Validators are looked up by
their format name in a :class:`FormatRegistry`.

Example:
    ```python
    from schemaknobs_jsonschema.formats import FunctionFormatValidator, for_format

    email = for_format("email")
    email.validate("not-an-email")
    # '[not-an-email] is not a valid email address'

    even = FunctionFormatValidator(
        "even-length", lambda s: None if len(s) % 2 == 0 else f"[{s}] has odd length"
    )
    ```
"""

from __future__ import annotations

import ipaddress
import logging
import re
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import date
from email.utils import parseaddr
from typing import ClassVar
from urllib.parse import urlsplit

from schemaknobs_common.registry import Registry

logger = logging.getLogger(__name__)


class FormatValidator(ABC):
    """Checks a string against a named format.

    Subclasses set ``name`` and implement :meth:`validate`. Validators
    are stateless, so two instances of the same class with the same name
    compare equal.
    """

    name: ClassVar[str] = ""

    @property
    def format_name(self) -> str:
        return self.name

    @abstractmethod
    def validate(self, subject: str) -> str | None:
        """Return a failure message, or None when ``subject`` conforms."""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FormatValidator):
            return NotImplemented
        return type(self) is type(other) and self.format_name == other.format_name

    def __hash__(self) -> int:
        return hash((type(self), self.format_name))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.format_name!r})"


class FunctionFormatValidator(FormatValidator):
    """Adapts a plain callable returning an optional failure message."""

    def __init__(self, name: str, func: Callable[[str], str | None]):
        if not name:
            raise ValueError("format name must be a non-empty string")
        self._name = name
        self._func = func

    @property
    def format_name(self) -> str:
        return self._name

    def validate(self, subject: str) -> str | None:
        return self._func(subject)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FunctionFormatValidator):
            return NotImplemented
        return self._name == other._name and self._func == other._func

    def __hash__(self) -> int:
        return hash((self._name, self._func))


_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$", re.ASCII)
_TIME_RE = re.compile(
    r"^(\d{2}):(\d{2}):(\d{2})(\.\d+)?(?:[zZ]|[+-](\d{2}):(\d{2}))$", re.ASCII
)
_EMAIL_RE = re.compile(
    r"^[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+)*"
    r"@(?:[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?\.)+[A-Za-z]{2,}$",
    re.ASCII,
)
_HOSTNAME_LABEL_RE = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?$", re.ASCII)
_URI_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*$", re.ASCII)


def _is_valid_time(subject: str) -> bool:
    match = _TIME_RE.match(subject)
    if not match:
        return False
    hour, minute, second = (int(match.group(i)) for i in (1, 2, 3))
    # leap seconds are allowed by RFC 3339
    if hour > 23 or minute > 59 or second > 60:
        return False
    if match.group(5) is not None:
        return int(match.group(5)) <= 23 and int(match.group(6)) <= 59
    return True


def _is_valid_date(subject: str) -> bool:
    if not _DATE_RE.match(subject):
        return False
    try:
        date.fromisoformat(subject)
    except ValueError:
        return False
    return True


class DateTimeFormatValidator(FormatValidator):
    """RFC 3339 ``date-time``, e.g. ``2024-11-08T10:15:30Z``."""

    name = "date-time"

    def validate(self, subject: str) -> str | None:
        date_part, sep, time_part = subject.partition("T")
        if not sep:
            date_part, sep, time_part = subject.partition("t")
        if sep and _is_valid_date(date_part) and _is_valid_time(time_part):
            return None
        return (
            f"[{subject}] is not a valid date-time. "
            "Expected [yyyy-MM-dd'T'HH:mm:ss[.fraction](Z|+HH:mm|-HH:mm)]"
        )


class DateFormatValidator(FormatValidator):
    """RFC 3339 ``full-date``, e.g. ``2024-11-08``."""

    name = "date"

    def validate(self, subject: str) -> str | None:
        if _is_valid_date(subject):
            return None
        return f"[{subject}] is not a valid date. Expected [yyyy-MM-dd]"


class TimeFormatValidator(FormatValidator):
    """RFC 3339 ``full-time``, e.g. ``10:15:30+01:00``."""

    name = "time"

    def validate(self, subject: str) -> str | None:
        if _is_valid_time(subject):
            return None
        return f"[{subject}] is not a valid time. Expected [HH:mm:ss[.fraction](Z|+HH:mm|-HH:mm)]"


class EmailFormatValidator(FormatValidator):
    name = "email"

    def validate(self, subject: str) -> str | None:
        # display names and comments are not part of an address
        _, address = parseaddr(subject)
        local, _, _ = subject.rpartition("@")
        if address == subject and len(local) <= 64 and _EMAIL_RE.match(subject):
            return None
        return f"[{subject}] is not a valid email address"


class HostnameFormatValidator(FormatValidator):
    """RFC 1123 host names: dot-separated labels of at most 63 characters."""

    name = "hostname"

    def validate(self, subject: str) -> str | None:
        labels = subject[:-1].split(".") if subject.endswith(".") else subject.split(".")
        if (
            subject
            and len(subject) <= 253
            and all(_HOSTNAME_LABEL_RE.match(label) for label in labels)
        ):
            return None
        return f"[{subject}] is not a valid hostname"


class IPv4FormatValidator(FormatValidator):
    name = "ipv4"

    def validate(self, subject: str) -> str | None:
        try:
            ipaddress.IPv4Address(subject)
        except ValueError:
            return f"[{subject}] is not a valid ipv4 address"
        return None


class IPv6FormatValidator(FormatValidator):
    name = "ipv6"

    def validate(self, subject: str) -> str | None:
        # scoped addresses (fe80::1%eth0) are not part of the format
        if "%" not in subject:
            try:
                ipaddress.IPv6Address(subject)
                return None
            except ValueError:
                pass
        return f"[{subject}] is not a valid ipv6 address"


class URIFormatValidator(FormatValidator):
    """Absolute URI: a scheme followed by a scheme-specific part."""

    name = "uri"

    def validate(self, subject: str) -> str | None:
        message = f"[{subject}] is not a valid URI"
        if any(ch.isspace() for ch in subject):
            return message
        try:
            parts = urlsplit(subject)
        except ValueError:
            return message
        if not parts.scheme or not _URI_SCHEME_RE.match(parts.scheme):
            return message
        if not (parts.netloc or parts.path or parts.query or parts.fragment):
            return message
        return None


class RegexFormatValidator(FormatValidator):
    name = "regex"

    def validate(self, subject: str) -> str | None:
        try:
            re.compile(subject)
        except re.error as e:
            return f"[{subject}] is not a valid regular expression: {e}"
        return None


BUILTIN_FORMATS: tuple[type[FormatValidator], ...] = (
    DateTimeFormatValidator,
    DateFormatValidator,
    TimeFormatValidator,
    EmailFormatValidator,
    HostnameFormatValidator,
    IPv4FormatValidator,
    IPv6FormatValidator,
    URIFormatValidator,
    RegexFormatValidator,
)


class FormatRegistry(Registry[FormatValidator]):
    """Registry of format validators keyed by format name."""

    def __init__(self, name: str = "formats"):
        super().__init__(name)

    @classmethod
    def with_builtins(cls, name: str = "formats") -> FormatRegistry:
        """Create a registry holding one instance of every built-in format."""
        registry = cls(name)
        for validator_cls in BUILTIN_FORMATS:
            registry.register_format(validator_cls())
        return registry

    def register_format(self, validator: FormatValidator, allow_overwrite: bool = False) -> None:
        self.register(validator.format_name, validator, allow_overwrite=allow_overwrite)
        logger.debug("Registered format validator %r in %s", validator.format_name, self.name)

    def for_format(self, format_name: str) -> FormatValidator:
        """Look up the validator for a ``format`` keyword value.

        Raises:
            NotFoundError: If no validator is registered under the name
        """
        return self.get(format_name)


_default_registry: FormatRegistry | None = None
_default_registry_lock = threading.Lock()


def default_registry() -> FormatRegistry:
    """Get the shared registry of built-in formats, creating it on first use."""
    global _default_registry
    with _default_registry_lock:
        if _default_registry is None:
            _default_registry = FormatRegistry.with_builtins()
        return _default_registry


def for_format(format_name: str) -> FormatValidator:
    """Look up a format validator in the shared registry."""
    return default_registry().for_format(format_name)


__all__ = [
    "BUILTIN_FORMATS",
    "DateFormatValidator",
    "DateTimeFormatValidator",
    "EmailFormatValidator",
    "FormatRegistry",
    "FormatValidator",
    "FunctionFormatValidator",
    "HostnameFormatValidator",
    "IPv4FormatValidator",
    "IPv6FormatValidator",
    "RegexFormatValidator",
    "TimeFormatValidator",
    "URIFormatValidator",
    "default_registry",
    "for_format",
]
