"""
Form Pipeline Building Blocks

Every catalog form goes through the same two steps:

1. Sanitize: trim surrounding whitespace and HTML-escape the value. This
   always happens, valid or not, so a form re-rendered after a failed
   submission never echoes raw input back.
2. Validate: run every rule for every field and collect the failures in
   order. Nothing short-circuits; the user sees all problems at once.

The result is a draft (the sanitized values, as a pydantic model) plus a
possibly-empty list of FieldError.
"""

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

DraftT = TypeVar("DraftT", bound=BaseModel)

# Characters the escape sanitizer replaces, and their entities
_ESCAPES = {
    "&": "&amp;",
    '"': "&quot;",
    "'": "&#x27;",
    "<": "&lt;",
    ">": "&gt;",
    "/": "&#x2F;",
    "\\": "&#x5C;",
    "`": "&#96;",
}

_ALPHANUMERIC = re.compile(r"[A-Za-z0-9]+")
_REDUCED_DATE = re.compile(r"(\d{4})(?:-(\d{2}))?")


@dataclass(frozen=True)
class FieldError:
    """One violated rule: which field, and the message shown next to it."""

    field: str
    message: str


@dataclass
class FormResult(Generic[DraftT]):
    """Sanitized draft plus every error found while validating it."""

    draft: DraftT
    errors: list[FieldError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


class ErrorList(list):
    """FieldError accumulator with the rule checks used by the forms."""

    def add(self, field_name: str, message: str) -> None:
        self.append(FieldError(field=field_name, message=message))

    def require(self, field_name: str, trimmed: str, message: str) -> None:
        """Non-empty after trimming."""
        if len(trimmed) < 1:
            self.add(field_name, message)

    def min_length(self, field_name: str, trimmed: str, minimum: int, message: str) -> None:
        if len(trimmed) < minimum:
            self.add(field_name, message)

    def alphanumeric(self, field_name: str, value: str, message: str) -> None:
        """ASCII letters and digits only. The empty string fails too."""
        if not _ALPHANUMERIC.fullmatch(value):
            self.add(field_name, message)

    def optional_date(self, field_name: str, raw: Any, message: str) -> datetime | None:
        """
        Parse an optional ISO-8601 date or datetime.

        Falsy input (missing, empty string) is simply no date. Anything else
        must parse, otherwise one error is recorded and None comes back.
        """
        if not raw:
            return None
        try:
            return parse_iso_datetime(str(raw))
        except ValueError:
            self.add(field_name, message)
            return None


# =============================================================================
# Sanitizers
# =============================================================================
def scalar(value: Any) -> str:
    """A single form value as a string. Repeated fields keep the first value."""
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return str(value[0]) if value else ""
    return str(value)


def trim(value: Any) -> str:
    return scalar(value).strip()


def escape(value: str) -> str:
    """Replace markup-significant characters with HTML entities."""
    return "".join(_ESCAPES.get(ch, ch) for ch in value)


def clean(value: Any) -> str:
    """trim + escape, the sanitizer applied to every text field."""
    return escape(trim(value))


def normalize_multi(value: Any) -> list[str]:
    """
    Normalize a multi-select field to a list.

    Browsers send nothing when no box is checked, a single value for one
    box, and a repeated field for several; all three become a list here.
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple, set, frozenset)):
        return [str(v) for v in value]
    return [str(value)]


def parse_iso_datetime(value: str) -> datetime:
    """
    Parse an ISO-8601 date or timestamp.

    Reduced-precision dates ('YYYY', 'YYYY-MM') mean the first day of that
    year or month. Everything else goes through the standard library
    parsers.

    Raises:
        ValueError: If the value isn't a valid calendar date/time
    """
    reduced = _REDUCED_DATE.fullmatch(value)
    if reduced:
        year, month = reduced.groups()
        return datetime(int(year), int(month or 1), 1)
    if len(value) <= 10:
        d = date.fromisoformat(value)
        return datetime(d.year, d.month, d.day)
    return datetime.fromisoformat(value)
