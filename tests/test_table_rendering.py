from datetime import date

from fpdf import FPDF

from cronograma.holidays import HolidayResolver
from cronograma.pdf_export import clean_for_pdf, fit_to_width, generate_schedule_pdf
from cronograma.schedule import generate_schedule
from cronograma.table import COLUMNS, render_table, rows_to_csv, rows_to_frame


def _rows(registry=None):
    resolver = HolidayResolver.from_text(registry) if registry else None
    return generate_schedule(
        "monday, wednesday", date(2024, 3, 1), date(2024, 3, 15), resolver=resolver
    )


def test_render_table_aligns_columns():
    assert render_table(_rows()) == "\n".join(
        [
            "| N° | Mes   | Día | Día de semana | Tema |",
            "|----+-------+-----+---------------+------|",
            "|  1 | Marzo |   4 | Lunes         |      |",
            "|  2 |       |   6 | Miércoles     |      |",
            "|  3 |       |  11 | Lunes         |      |",
            "|  4 |       |  13 | Miércoles     |      |",
        ]
    )


def test_render_table_widens_for_holiday_labels():
    registry = "* Feriados\n** Día de la Memoria (feriado nacional)\n   <2024-03-11>\n"
    lines = render_table(_rows(registry)).splitlines()

    assert lines[4] == "|    |       |  11 | Lunes         | Día de la Memoria |"
    assert lines[5] == "|  3 |       |  13 | Miércoles     |                   |"
    assert len({len(line) for line in lines}) == 1


def test_render_empty_schedule_keeps_header():
    assert render_table([]).splitlines() == [
        "| N° | Mes | Día | Día de semana | Tema |",
        "|----+-----+-----+---------------+------|",
    ]


def test_rows_to_frame_marks_holiday_sessions_missing():
    registry = "* Feriados\n** Día de la Memoria\n   <2024-03-11>\n"
    frame = rows_to_frame(_rows(registry))

    assert frame.columns.tolist() == list(COLUMNS)
    assert frame["N°"].isna().tolist() == [False, False, True, False]
    assert frame["N°"].dropna().tolist() == [1, 2, 3]
    assert frame["Día"].tolist() == [4, 6, 11, 13]


def test_rows_to_csv_leaves_holiday_number_blank():
    registry = "* Feriados\n** Día de la Memoria\n   <2024-03-11>\n"
    csv_text = rows_to_csv(_rows(registry))

    assert csv_text.splitlines()[0] == "N°,Mes,Día,Día de semana,Tema"
    assert ",,11,Lunes,Día de la Memoria" in csv_text


def test_generate_schedule_pdf_returns_pdf_bytes():
    pdf = generate_schedule_pdf(_rows("* Feriados\n** Memoria\n   <2024-03-11>\n"))
    assert isinstance(pdf, bytes)
    assert pdf.startswith(b"%PDF")


def test_clean_for_pdf_keeps_spanish_and_replaces_the_rest():
    assert clean_for_pdf("Miércoles\n") == "Miércoles "
    assert clean_for_pdf("春节") == "??"
    assert clean_for_pdf(12) == "12"


def test_long_labels_are_truncated_to_the_cell():
    pdf = FPDF()
    pdf.set_font("Helvetica", "", 10)
    label = "Día del Respeto a la Diversidad Cultural y de los Pueblos " * 3

    fitted = fit_to_width(pdf, label, 96)

    assert fitted.endswith("...")
    assert pdf.get_string_width(fitted) <= 96 - 2 * pdf.c_margin
    assert fit_to_width(pdf, "Navidad", 96) == "Navidad"


def test_pdf_with_long_holiday_label_renders():
    registry = "* Feriados\n** " + "Feriado muy largo " * 20 + "\n   <2024-03-11>\n"
    assert generate_schedule_pdf(_rows(registry)).startswith(b"%PDF")
