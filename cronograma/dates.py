"""Utilities for parsing the start and end dates of a schedule."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterator, Union

DATE_FORMATS = ("%Y-%m-%d", "%d/%m/%Y", "%d.%m.%Y", "%d-%m-%Y")

DateLike = Union[date, datetime, str]


class InvalidDateError(ValueError):
    """Raised when a caller supplied date cannot be parsed."""


def parse_date(value: DateLike) -> date:
    """Parse ``value`` into a :class:`datetime.date`.

    Accepts ``date`` and ``datetime`` instances as well as strings in any of
    :data:`DATE_FORMATS`. Anything else raises :class:`InvalidDateError`.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise InvalidDateError(f"Missing or invalid date: {value!r}")

    text = value.strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise InvalidDateError(
        f"Unrecognised date {text!r}; expected one of: {', '.join(DATE_FORMATS)}"
    )


def date_range(start: date, end: date) -> Iterator[date]:
    """Yield every day from ``start`` up to, but not including, ``end``."""
    current = start
    while current < end:
        yield current
        current += timedelta(days=1)


__all__ = ["DATE_FORMATS", "InvalidDateError", "parse_date", "date_range"]
