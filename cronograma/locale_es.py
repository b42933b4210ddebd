"""Spanish labels for weekday and month names.

The schedule is computed with English names so it never depends on the
process locale; only the final labels go through this table.
"""

from __future__ import annotations

from datetime import date
from typing import Dict, Tuple

WEEKDAYS: Tuple[str, ...] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

MONTHS: Tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

WEEKDAYS_ES: Dict[str, str] = {
    "Monday": "Lunes",
    "Tuesday": "Martes",
    "Wednesday": "Miércoles",
    "Thursday": "Jueves",
    "Friday": "Viernes",
    "Saturday": "Sábado",
    "Sunday": "Domingo",
}

MONTHS_ES: Dict[str, str] = {
    "January": "Enero",
    "February": "Febrero",
    "March": "Marzo",
    "April": "Abril",
    "May": "Mayo",
    "June": "Junio",
    "July": "Julio",
    "August": "Agosto",
    "September": "Septiembre",
    "October": "Octubre",
    "November": "Noviembre",
    "December": "Diciembre",
}

_TRANSLATIONS: Dict[str, str] = {**WEEKDAYS_ES, **MONTHS_ES}

# Lower-cased Spanish weekday (with and without accents) -> English name.
SPANISH_WEEKDAYS: Dict[str, str] = {}
for _english, _spanish in WEEKDAYS_ES.items():
    SPANISH_WEEKDAYS[_spanish.lower()] = _english
    SPANISH_WEEKDAYS[
        _spanish.lower().replace("é", "e").replace("á", "a")
    ] = _english


def weekday_name(value: date) -> str:
    """Return the English weekday name of ``value``."""
    return WEEKDAYS[value.weekday()]


def month_name(value: date) -> str:
    """Return the English month name of ``value``."""
    return MONTHS[value.month - 1]


def translate(name: str) -> str:
    """Return the Spanish label for ``name``.

    Names missing from the table are returned unchanged.
    """
    return _TRANSLATIONS.get(name, name)


__all__ = [
    "WEEKDAYS",
    "MONTHS",
    "WEEKDAYS_ES",
    "MONTHS_ES",
    "SPANISH_WEEKDAYS",
    "weekday_name",
    "month_name",
    "translate",
]
