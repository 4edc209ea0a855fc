"""
Cell values -- explicit coercions for the untyped scalars of a dataset.

Uploaded rows carry whatever the parser produced: strings from CSV,
strings / numbers / booleans / nulls from JSON.  Every heuristic in the
interpreter reads cells through the helpers below so the "is this a
number / a date" decisions are made in exactly one place.
"""
from __future__ import annotations

import math
import re
from datetime import date, datetime
from typing import Any

from dateutil import parser as dateparser
from dateutil.parser import ParserError


# Missing date fields are filled from this, never from "today"
_DATE_DEFAULT = datetime(1900, 1, 1)
# Second default: a year that differs between the two parses was never in the text
_ALT_DATE_DEFAULT = datetime(2000, 2, 2)

_BARE_NUMBER_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
_YEAR_OR_COMPACT_DATE_RE = re.compile(r"^(\d{4}|\d{8})$")


def is_empty(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def as_number(value: Any) -> float | None:
    """Return *value* as a finite float, or ``None`` when it is not numeric."""
    if is_empty(value):
        return None
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if "_" in text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def as_date(value: Any) -> datetime | None:
    """Parse *value* as a calendar date/time.

    Strings go through ``dateutil`` (month-first for ambiguous forms such
    as ``1/2/2025``).  Bare numbers are rejected, except 4-digit years and
    8-digit ``YYYYMMDD`` strings.  Text without a year ("10:30", "Mon",
    "Jan") is not a calendar date and gives ``None``.
    """
    if is_empty(value) or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str):
        return None

    text = value.strip()
    if _BARE_NUMBER_RE.match(text) and not _YEAR_OR_COMPACT_DATE_RE.match(text):
        return None
    try:
        parsed = dateparser.parse(text, default=_DATE_DEFAULT)
        alt = dateparser.parse(text, default=_ALT_DATE_DEFAULT)
    except (ParserError, ValueError, OverflowError):
        return None
    if parsed.year != alt.year:
        return None
    return parsed


def format_number(value: float | int) -> str:
    """Render a metric the way it is shown to users: ``15.0`` -> ``"15"``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return repr(value) if isinstance(value, float) else str(value)


def as_label(value: Any) -> str:
    """Stringify a cell for use as a group label (missing -> ``""``)."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return format_number(value)
    return str(value)
