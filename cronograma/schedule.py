"""Class schedule generation.

:func:`generate_schedule` walks a date range one day at a time, keeps the
days that fall on the selected weekdays and numbers the class sessions,
leaving holidays unnumbered and annotated with the holiday label.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import FrozenSet, Iterable, List, Optional, Protocol, Union

from .dates import date_range
from .holidays import (
    HolidayLookup,
    HolidayStatus,
    NullResolver,
    RegistryUnavailable,
)
from .locale_es import (
    SPANISH_WEEKDAYS,
    WEEKDAYS,
    month_name,
    translate,
    weekday_name,
)

_LOG = logging.getLogger(__name__)

_ABBREVIATIONS = {
    "mon": "Monday",
    "tue": "Tuesday",
    "tues": "Tuesday",
    "wed": "Wednesday",
    "thu": "Thursday",
    "thur": "Thursday",
    "thurs": "Thursday",
    "fri": "Friday",
    "sat": "Saturday",
    "sun": "Sunday",
}


class Resolver(Protocol):
    def lookup(self, day: date) -> HolidayLookup:
        ...


@dataclass(frozen=True)
class ScheduleRow:
    """One line of the schedule: a numbered class or an unnumbered holiday."""

    session: Optional[int]
    month: str
    day: int
    weekday: str
    note: str
    date: date
    holiday_unknown: bool = False

    @property
    def is_holiday(self) -> bool:
        return self.session is None


def canonical_weekday(token: str) -> str:
    """Return the English weekday name for ``token``.

    Matching is case-insensitive and also understands short English forms
    (``"wed"``) and Spanish names (``"miércoles"``). Anything else comes back
    capitalised so it simply never matches a date.
    """
    cleaned = (token or "").strip()
    lowered = cleaned.lower()
    if lowered in _ABBREVIATIONS:
        return _ABBREVIATIONS[lowered]
    if lowered in SPANISH_WEEKDAYS:
        return SPANISH_WEEKDAYS[lowered]
    return cleaned.capitalize()


def parse_weekdays(value: Union[str, Iterable[str]]) -> FrozenSet[str]:
    """Return the canonical weekday set for ``value``.

    ``value`` is either comma-separated text (``"monday, Wednesday"``) or an
    iterable of tokens. Empty tokens are ignored and duplicates collapse.
    """
    tokens = value.split(",") if isinstance(value, str) else list(value)
    days = set()
    for token in tokens:
        if not str(token).strip():
            continue
        name = canonical_weekday(str(token))
        if name not in WEEKDAYS:
            _LOG.warning("Ignoring unrecognised weekday %r", token)
        days.add(name)
    return frozenset(days)


def generate_schedule(
    weekdays: Union[str, Iterable[str]],
    start: date,
    end: date,
    repeat_month: bool = False,
    resolver: Optional[Resolver] = None,
) -> List[ScheduleRow]:
    """Return the schedule rows for ``[start, end)``.

    Parameters
    ----------
    weekdays:
        Weekday names to keep, as accepted by :func:`parse_weekdays`.
    start, end:
        First day of the range and the exclusive upper bound. ``start >= end``
        gives an empty schedule.
    repeat_month:
        Show the month on every row instead of only when it changes.
    resolver:
        Holiday source; defaults to :class:`~cronograma.holidays.NullResolver`.
        A date the resolver cannot classify is scheduled as a normal class and
        flagged with ``holiday_unknown``, including when ``lookup`` raises.
        Only a strict resolver's ``RegistryUnavailable`` propagates.
    """
    selected = parse_weekdays(weekdays)
    resolver = resolver or NullResolver()

    rows: List[ScheduleRow] = []
    counter = 1
    last_month = ""
    unknown_days = 0

    for day in date_range(start, end):
        if weekday_name(day) not in selected:
            continue

        month = month_name(day)
        month_label = translate(month) if repeat_month or month != last_month else ""
        last_month = month

        try:
            result = resolver.lookup(day)
        except RegistryUnavailable as exc:
            if getattr(resolver, "strict", False):
                raise
            result = HolidayLookup.unknown(exc)
        except Exception as exc:
            _LOG.exception("Holiday lookup failed for %s", day.isoformat())
            result = HolidayLookup.unknown(exc)
        if result.status is HolidayStatus.HOLIDAY:
            rows.append(
                ScheduleRow(
                    session=None,
                    month=month_label,
                    day=day.day,
                    weekday=translate(weekday_name(day)),
                    note=result.label or "",
                    date=day,
                )
            )
            continue

        unknown = result.status is HolidayStatus.UNKNOWN
        if unknown:
            unknown_days += 1
        rows.append(
            ScheduleRow(
                session=counter,
                month=month_label,
                day=day.day,
                weekday=translate(weekday_name(day)),
                note="",
                date=day,
                holiday_unknown=unknown,
            )
        )
        counter += 1

    if unknown_days:
        _LOG.warning(
            "Holiday registry unavailable; %d session(s) scheduled without "
            "holiday data",
            unknown_days,
        )
    return rows


def session_count(rows: Iterable[ScheduleRow]) -> int:
    """Return the number of numbered class sessions in ``rows``."""
    return sum(1 for row in rows if row.session is not None)


def holiday_rows(rows: Iterable[ScheduleRow]) -> List[ScheduleRow]:
    return [row for row in rows if row.is_holiday]


__all__ = [
    "ScheduleRow",
    "canonical_weekday",
    "parse_weekdays",
    "generate_schedule",
    "session_count",
    "holiday_rows",
]
