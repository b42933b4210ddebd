from datetime import date
from unittest.mock import MagicMock

from cronograma.config import ScheduleSettings
from cronograma.ui import render_schedule_page

REGISTRY = "* Feriados\n** Día de la Memoria (feriado nacional)\n   <2024-03-11 Mon>\n"


def _st_mock(*, days, registry, start, end, clicked=True):
    st_mock = MagicMock()
    st_mock.session_state = {}
    st_mock.text_input.side_effect = [days, registry]
    st_mock.date_input.side_effect = [start, end]
    st_mock.checkbox.return_value = False
    st_mock.button.return_value = clicked
    return st_mock


def test_generate_button_renders_table_and_downloads(tmp_path):
    registry = tmp_path / "feriados.org"
    registry.write_text(REGISTRY, encoding="utf-8")
    st_mock = _st_mock(
        days="lunes, miércoles",
        registry=str(registry),
        start=date(2024, 3, 1),
        end=date(2024, 3, 15),
    )

    rows = render_schedule_page(
        st_module=st_mock, settings=ScheduleSettings(holidays_source=None)
    )

    assert [r.session for r in rows] == [1, 2, None, 3]
    assert rows[2].note == "Día de la Memoria"
    assert st_mock.session_state["cronograma_rows"] == rows
    st_mock.dataframe.assert_called_once()
    st_mock.code.assert_called_once()
    assert "Día de la Memoria" in st_mock.code.call_args[0][0]
    assert st_mock.download_button.call_count == 3
    st_mock.warning.assert_not_called()


def test_nothing_rendered_before_first_generation():
    st_mock = _st_mock(
        days="monday",
        registry="",
        start=date(2024, 3, 1),
        end=date(2024, 3, 15),
        clicked=False,
    )

    assert render_schedule_page(
        st_module=st_mock, settings=ScheduleSettings(holidays_source=None)
    ) is None
    st_mock.dataframe.assert_not_called()


def test_previous_rows_survive_rerun():
    st_mock = _st_mock(
        days="monday",
        registry="",
        start=date(2024, 3, 1),
        end=date(2024, 3, 15),
        clicked=False,
    )
    st_mock.session_state["cronograma_rows"] = []

    assert render_schedule_page(
        st_module=st_mock, settings=ScheduleSettings(holidays_source=None)
    ) == []
    st_mock.info.assert_called_once()


def test_invalid_date_shows_error():
    st_mock = _st_mock(
        days="monday",
        registry="",
        start="31/02/2024",
        end=date(2024, 3, 15),
    )

    assert render_schedule_page(
        st_module=st_mock, settings=ScheduleSettings(holidays_source=None)
    ) is None
    st_mock.error.assert_called_once()
    assert "cronograma_rows" not in st_mock.session_state


def test_unreadable_registry_warns(tmp_path):
    st_mock = _st_mock(
        days="monday",
        registry=str(tmp_path / "missing.org"),
        start=date(2024, 3, 1),
        end=date(2024, 3, 15),
    )

    rows = render_schedule_page(
        st_module=st_mock, settings=ScheduleSettings(holidays_source=None)
    )

    assert [r.session for r in rows] == [1, 2]
    st_mock.warning.assert_called_once()


def test_blank_registry_means_no_holidays():
    st_mock = _st_mock(
        days="monday",
        registry="  ",
        start=date(2024, 3, 1),
        end=date(2024, 3, 15),
    )

    rows = render_schedule_page(
        st_module=st_mock, settings=ScheduleSettings(holidays_source=None)
    )

    assert [r.session for r in rows] == [1, 2]
    assert not any(r.holiday_unknown for r in rows)
    st_mock.warning.assert_not_called()
