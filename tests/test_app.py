from pathlib import Path

import pytest
import streamlit as st
from streamlit.testing.v1 import AppTest

import reports.excel as excel
import reports.pdf as pdf

APP_PATH = str(Path(__file__).resolve().parent.parent / "app" / "streamlit_app.py")


@pytest.fixture
def app():
    st.cache_data.clear()
    at = AppTest.from_file(APP_PATH, default_timeout=60)
    at.run()
    assert not at.exception
    return at


def _button(at, label):
    return next(b for b in at.button if b.label == label)


def test_year_stepper_moves_base_year(app):
    year_input = app.number_input(key="field_base_year")
    start = year_input.value

    _button(app, "+ Tahun").click().run()
    assert not app.exception
    assert app.number_input(key="field_base_year").value == start + 1

    _button(app, "− Tahun").click().run()
    _button(app, "− Tahun").click().run()
    assert app.number_input(key="field_base_year").value == start - 1


def test_form_values_live_in_session_state(app):
    assert app.session_state["field_beds_vip"] == 10
    assert app.session_state["field_bor_kelas3"] == 80.0

    app.number_input(key="field_beds_vip").set_value(12).run()
    assert not app.exception
    assert app.session_state["field_beds_vip"] == 12


def test_tab_switch_keeps_context(app):
    assert vars(app.session_state["ctx"]) == {"active_tab": "Dashboard"}

    app.radio[0].set_value("Analisa").run()
    assert not app.exception
    assert app.session_state["ctx"].active_tab == "Analisa"


def test_exports_are_not_rebuilt_on_rerun(monkeypatch):
    calls = {"xlsx": 0, "pdf": 0}
    build_workbook = excel.build_workbook
    build_pdf_report = pdf.build_pdf_report

    def counting_workbook(*args, **kwargs):
        calls["xlsx"] += 1
        return build_workbook(*args, **kwargs)

    def counting_pdf(*args, **kwargs):
        calls["pdf"] += 1
        return build_pdf_report(*args, **kwargs)

    monkeypatch.setattr(excel, "build_workbook", counting_workbook)
    monkeypatch.setattr(pdf, "build_pdf_report", counting_pdf)
    st.cache_data.clear()

    at = AppTest.from_file(APP_PATH, default_timeout=60)
    at.run()
    at.radio[0].set_value("Tabel Detail").run()
    at.radio[0].set_value("Analisa").run()

    assert not at.exception
    assert calls == {"xlsx": 1, "pdf": 1}
