from datetime import date

import pytest
from reportlab.platypus import PageBreak, Paragraph, Table

import reports.pdf as pdf
from core.utils import format_rupiah
from engine.projection import project
from reports.charts import revenue_chart_png
from reports.errors import ExportError


def test_format_date_id():
    assert pdf.format_date_id(date(2025, 10, 19)) == "19 Oktober 2025"
    assert pdf.format_date_id(date(2025, 1, 2)) == "2 Januari 2025"


def test_revenue_chart_is_png(projections):
    data = revenue_chart_png(projections, dpi=50)
    assert data[:8] == b"\x89PNG\r\n\x1a\n"


def test_build_pdf_report(inputs, projections):
    data = pdf.build_pdf_report(projections, inputs, generated_on=date(2025, 1, 15))
    assert data.startswith(b"%PDF")
    assert len(data) > 1000


def test_export_pdf_report_writes_file(inputs, projections, tmp_path):
    path = pdf.export_pdf_report(projections, inputs, tmp_path / pdf.PDF_FILENAME)
    assert path.name == "ABK_Laporan_Lengkap.pdf"
    assert path.read_bytes().startswith(b"%PDF")


def test_failure_raises_export_error(inputs, projections, monkeypatch):
    def boom(*_args):
        raise RuntimeError("layout error")

    monkeypatch.setattr(pdf, "_build_story", boom)
    with pytest.raises(ExportError, match="layout error"):
        pdf.build_pdf_report(projections, inputs)


def test_report_has_one_section_per_year(inputs, projections):
    story = pdf._build_story(projections, inputs, date(2025, 1, 15))

    assert sum(isinstance(f, PageBreak) for f in story) == len(projections)
    # summary grid, then class, ancillary, banner and indicator tables per year
    tables = [f for f in story if isinstance(f, Table)]
    assert len(tables) == 1 + 4 * len(projections)

    headings = [f.getPlainText() for f in story if isinstance(f, Paragraph)]
    assert headings[0] == pdf.REPORT_TITLE
    for year in projections:
        assert f"Tahun {year.year_label}" in headings


def test_total_banner_per_year(inputs, projections):
    story = pdf._build_story(projections, inputs, date(2025, 1, 15))

    banners = [
        f._cellvalues[0][0].getPlainText()
        for f in story
        if isinstance(f, Table) and isinstance(f._cellvalues[0][0], Paragraph)
    ]
    assert len(banners) == len(projections)
    for text, year in zip(banners, projections):
        assert year.year_label in text
        assert format_rupiah(year.total_revenue) in text


def test_sections_follow_projection_horizon(inputs):
    short = project(inputs.replace(projection_years=1))
    story = pdf._build_story(short, inputs, date(2025, 1, 15))
    assert sum(isinstance(f, PageBreak) for f in story) == 2
