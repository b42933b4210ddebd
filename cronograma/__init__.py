"""Class schedule tables with holiday annotations."""

from .dates import InvalidDateError, parse_date
from .holidays import HolidayResolver, HolidayStatus, RegistryUnavailable
from .schedule import ScheduleRow, generate_schedule, parse_weekdays
from .table import render_table

__all__ = [
    "InvalidDateError",
    "parse_date",
    "HolidayResolver",
    "HolidayStatus",
    "RegistryUnavailable",
    "ScheduleRow",
    "generate_schedule",
    "parse_weekdays",
    "render_table",
]
