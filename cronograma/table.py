"""Rendering of schedule rows as text, DataFrame and CSV."""

from __future__ import annotations

from typing import List, Sequence

import pandas as pd

from .schedule import ScheduleRow

COLUMNS = ("N°", "Mes", "Día", "Día de semana", "Tema")
_RIGHT_ALIGNED = {"N°", "Día"}


def row_cells(row: ScheduleRow) -> List[str]:
    """Return the display cells of ``row`` in :data:`COLUMNS` order."""
    return [
        "" if row.session is None else str(row.session),
        row.month,
        str(row.day),
        row.weekday,
        row.note,
    ]


def _format_line(cells: Sequence[str], widths: Sequence[int]) -> str:
    parts = []
    for header, cell, width in zip(COLUMNS, cells, widths):
        if header in _RIGHT_ALIGNED:
            parts.append(cell.rjust(width))
        else:
            parts.append(cell.ljust(width))
    return "| " + " | ".join(parts) + " |"


def render_table(rows: Sequence[ScheduleRow]) -> str:
    """Return ``rows`` as an aligned pipe table with header and separator.

    Example::

        | N° | Mes   | Día | Día de semana | Tema |
        |----+-------+-----+---------------+------|
        |  1 | Marzo |   4 | Lunes         |      |
    """
    body = [row_cells(row) for row in rows]
    widths = [len(header) for header in COLUMNS]
    for cells in body:
        widths = [max(w, len(c)) for w, c in zip(widths, cells)]

    lines = [
        _format_line(COLUMNS, widths),
        "|" + "+".join("-" * (w + 2) for w in widths) + "|",
    ]
    lines.extend(_format_line(cells, widths) for cells in body)
    return "\n".join(lines)


def rows_to_frame(rows: Sequence[ScheduleRow]) -> pd.DataFrame:
    """Return ``rows`` as a DataFrame with the table columns.

    Holiday rows carry ``<NA>`` in the session column.
    """
    return pd.DataFrame(
        {
            "N°": pd.array([row.session for row in rows], dtype="Int64"),
            "Mes": [row.month for row in rows],
            "Día": pd.array([row.day for row in rows], dtype="int64"),
            "Día de semana": [row.weekday for row in rows],
            "Tema": [row.note for row in rows],
        },
        columns=list(COLUMNS),
    )


def rows_to_csv(rows: Sequence[ScheduleRow]) -> str:
    return rows_to_frame(rows).to_csv(index=False)


__all__ = ["COLUMNS", "row_cells", "render_table", "rows_to_frame", "rows_to_csv"]
