"""PDF export of a generated schedule."""

from __future__ import annotations

import unicodedata as _ud
from typing import Sequence

from fpdf import FPDF

from .schedule import ScheduleRow
from .table import COLUMNS, row_cells

DEFAULT_TITLE = "Cronograma de clases"

# Millimetres; sums to the printable width of A4 with 10 mm margins.
_COLUMN_WIDTHS = (14, 30, 14, 36, 96)
_RIGHT_ALIGNED = {"N°", "Día"}
_HOLIDAY_FILL = (235, 235, 235)


def clean_for_pdf(text: str) -> str:
    """Return ``text`` normalised for the built-in PDF fonts.

    The core fonts only cover Latin-1, which includes every Spanish label the
    schedule uses. Other characters are replaced with ``?`` so rendering
    never fails on user supplied holiday names.
    """
    if not isinstance(text, str):
        text = str(text)
    text = _ud.normalize("NFKC", text)
    text = text.replace("\n", " ").replace("\r", " ")
    text = "".join(ch for ch in text if ch.isprintable())
    return text.encode("latin-1", "replace").decode("latin-1")


def fit_to_width(pdf: FPDF, text: str, width: float) -> str:
    """Return ``text`` shortened with ``...`` so it fits a cell of ``width`` mm."""
    available = width - 2 * pdf.c_margin
    if pdf.get_string_width(text) <= available:
        return text
    ellipsis = "..."
    while text and pdf.get_string_width(text.rstrip() + ellipsis) > available:
        text = text[:-1]
    return text.rstrip() + ellipsis


def generate_schedule_pdf(
    rows: Sequence[ScheduleRow], title: str = DEFAULT_TITLE
) -> bytes:
    """Return a PDF document with ``rows`` laid out as a table."""
    pdf = FPDF(orientation="P", unit="mm", format="A4")
    pdf.set_margins(10, 10, 10)
    pdf.set_auto_page_break(auto=True, margin=15)
    pdf.add_page()

    pdf.set_font("Helvetica", "B", 14)
    pdf.cell(0, 10, clean_for_pdf(title), align="C", new_x="LMARGIN", new_y="NEXT")
    pdf.ln(2)

    pdf.set_font("Helvetica", "B", 10)
    for header, width in zip(COLUMNS, _COLUMN_WIDTHS):
        pdf.cell(width, 8, clean_for_pdf(header), border=1, align="C")
    pdf.ln(8)

    pdf.set_font("Helvetica", "", 10)
    pdf.set_fill_color(*_HOLIDAY_FILL)
    for row in rows:
        for header, cell, width in zip(COLUMNS, row_cells(row), _COLUMN_WIDTHS):
            pdf.cell(
                width,
                7,
                fit_to_width(pdf, clean_for_pdf(cell), width),
                border=1,
                align="R" if header in _RIGHT_ALIGNED else "L",
                fill=row.is_holiday,
            )
        pdf.ln(7)

    return bytes(pdf.output())


__all__ = ["DEFAULT_TITLE", "clean_for_pdf", "fit_to_width", "generate_schedule_pdf"]
