"""Streamlit page for building a class schedule."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, timedelta
from typing import Any, List, Optional

import streamlit as st

from .config import ScheduleSettings, load_settings
from .dates import InvalidDateError, parse_date
from .holidays import NullResolver
from .pdf_export import generate_schedule_pdf
from .schedule import ScheduleRow, generate_schedule, holiday_rows, session_count
from .table import render_table, rows_to_csv, rows_to_frame

_LOG = logging.getLogger(__name__)

_ROWS_KEY = "cronograma_rows"
DEFAULT_DAYS = "Monday, Wednesday"


def _render_results(st_module: Any, rows: List[ScheduleRow]) -> None:
    if not rows:
        st_module.info("No hay clases en el rango seleccionado.")
        return

    if any(row.holiday_unknown for row in rows):
        st_module.warning(
            "⚠️ No se pudo leer el registro de feriados; el cronograma se generó "
            "sin marcar feriados."
        )

    st_module.caption(
        f"{session_count(rows)} clases · {len(holiday_rows(rows))} feriados"
    )
    st_module.dataframe(rows_to_frame(rows), hide_index=True)

    text = render_table(rows)
    st_module.code(text, language=None)
    st_module.download_button(
        "Descargar CSV",
        data=rows_to_csv(rows),
        file_name="cronograma.csv",
        mime="text/csv",
    )
    st_module.download_button(
        "Descargar PDF",
        data=generate_schedule_pdf(rows),
        file_name="cronograma.pdf",
        mime="application/pdf",
    )
    st_module.download_button(
        "Descargar tabla",
        data=text,
        file_name="cronograma.org",
        mime="text/plain",
    )


def render_schedule_page(
    *,
    st_module: Any = st,
    settings: Optional[ScheduleSettings] = None,
) -> Optional[List[ScheduleRow]]:
    """Collect the schedule inputs and show the generated table.

    The rows of the last generated schedule are kept in
    ``st.session_state`` so the download buttons survive Streamlit reruns.
    Returns the rows on display, or ``None`` before the first generation.
    """
    settings = settings or load_settings()

    st_module.header("📅 Cronograma de clases")
    days_text = st_module.text_input(
        "Días de clase (separados por coma)",
        value=DEFAULT_DAYS,
        key="cronograma_days",
    )
    today = date.today()
    start_value = st_module.date_input(
        "Fecha de inicio", value=today, key="cronograma_start"
    )
    end_value = st_module.date_input(
        "Fecha de fin (no incluida)",
        value=today + timedelta(days=90),
        key="cronograma_end",
    )
    repeat_month = st_module.checkbox(
        "Repetir el mes en cada fila",
        value=settings.repeat_month,
        key="cronograma_repeat_month",
    )
    source = st_module.text_input(
        "Registro de feriados (ruta o URL)",
        value=settings.holidays_source or "",
        key="cronograma_holidays",
    )

    if st_module.button("Generar cronograma", type="primary"):
        try:
            start = parse_date(start_value)
            end = parse_date(end_value)
        except InvalidDateError as exc:
            _LOG.info("Rejected schedule dates: %s", exc)
            st_module.error(f"❌ {exc}")
            return None

        # A blank registry field means "no holidays", not a broken registry.
        resolver = (
            replace(settings, holidays_source=source.strip()).make_resolver()
            if source and source.strip()
            else NullResolver()
        )
        st_module.session_state[_ROWS_KEY] = generate_schedule(
            days_text, start, end, repeat_month=bool(repeat_month), resolver=resolver
        )

    rows = st_module.session_state.get(_ROWS_KEY)
    if rows is None:
        return None
    _render_results(st_module, rows)
    return rows


__all__ = ["render_schedule_page", "DEFAULT_DAYS"]
