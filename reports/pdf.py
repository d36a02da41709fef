"""
PDF report.

Structure:
  header          title + generation date
  summary         one row per year, stacked revenue chart
  per-year        class detail, ancillary breakdown, total revenue banner,
                  indicators against the ideal ranges (one page per year)
"""

from __future__ import annotations

import io
from datetime import date
from pathlib import Path
from typing import Any, List, Optional, Sequence

import pandas as pd
from reportlab.lib.colors import HexColor, white
from reportlab.lib.enums import TA_LEFT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import (
    Image, PageBreak, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle,
)

from core.config import PDF_FILENAME, REPORT_TITLE, ProjectionInputs
from core.logger import get_logger
from core.schema import INDICATOR_LABELS
from core.utils import format_growth, format_number, format_percent, format_rupiah
from engine.projection import YearProjection

from .assessment import STATUS_IDEAL, STATUS_UNRATED
from .charts import revenue_chart_png
from .errors import ExportError
from .tables import ancillary_table, class_detail_table, indicator_table, summary_table

log = get_logger("abk.reports.pdf")

PRIMARY = HexColor("#0f172a")
BORDER = HexColor("#e2e8f0")
HEADER_BG = HexColor("#0f172a")
ROW_ALT_BG = HexColor("#f8fafc")
OK_COLOR = HexColor("#059669")
WARN_COLOR = HexColor("#d97706")

_MONTHS_ID = (
    "Januari", "Februari", "Maret", "April", "Mei", "Juni",
    "Juli", "Agustus", "September", "Oktober", "November", "Desember",
)


def format_date_id(d: date) -> str:
    return f"{d.day} {_MONTHS_ID[d.month - 1]} {d.year}"


def _styles():
    styles = getSampleStyleSheet()

    def add_style(name, **kwargs):
        if name not in styles:
            styles.add(ParagraphStyle(name=name, **kwargs))

    add_style("ReportTitle", fontSize=16, leading=20, fontName="Helvetica-Bold",
              textColor=PRIMARY, alignment=TA_LEFT, spaceAfter=4)
    add_style("ReportMeta", fontSize=9, textColor=HexColor("#64748b"), spaceAfter=14)
    add_style("Section", fontSize=13, fontName="Helvetica-Bold", spaceBefore=10, spaceAfter=8)
    add_style("SubSection", fontSize=10.5, fontName="Helvetica-Bold", spaceBefore=8, spaceAfter=4)
    add_style("Banner", fontSize=12, leading=16, fontName="Helvetica-Bold", textColor=white)
    return styles


def _grid(rows: List[List[Any]], col_widths=None, *, bold_last: bool = False) -> Table:
    table = Table(rows, colWidths=col_widths, hAlign="LEFT", repeatRows=1)
    commands = [
        ("BACKGROUND", (0, 0), (-1, 0), HEADER_BG),
        ("TEXTCOLOR", (0, 0), (-1, 0), white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 8),
        ("GRID", (0, 0), (-1, -1), 0.5, BORDER),
        ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [white, ROW_ALT_BG]),
    ]
    if bold_last and len(rows) > 1:
        commands.append(("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"))
    table.setStyle(TableStyle(commands))
    return table


def _summary_rows(df: pd.DataFrame) -> List[List[str]]:
    rows = [["Tahun", "Rawat Inap", "Penunjang", "Total", "Growth", "BOR"]]
    for i, r in df.iterrows():
        rows.append([
            r["Tahun"],
            format_rupiah(r["Pendapatan Rawat Inap"]),
            format_rupiah(r["Pendapatan Penunjang"]),
            format_rupiah(r["TOTAL PENDAPATAN"]),
            "-" if i == 0 else format_growth(r["Pertumbuhan (%)"]),
            format_percent(r["BOR (%)"]),
        ])
    return rows


def _class_rows(df: pd.DataFrame) -> List[List[str]]:
    rows = [["Kelas", "TT", "BOR", "Hari Rawat", "Pasien", "Pendapatan"]]
    for _, r in df.iterrows():
        rows.append([
            r["Kelas"],
            format_number(r["Tempat Tidur"], 0),
            format_percent(r["Target BOR (%)"]),
            format_number(r["Hari Rawat"], 0),
            format_number(r["Jumlah Pasien"], 0),
            format_rupiah(r["Pendapatan"]),
        ])
    return rows


def _ancillary_rows(df: pd.DataFrame) -> List[List[str]]:
    rows = [["Layanan", "Tarif", "Pendapatan"]]
    for _, r in df.iterrows():
        rows.append([r["Layanan"], format_percent(r["Tarif (%)"]), format_rupiah(r["Pendapatan"])])
    return rows


def _indicator_table(year: YearProjection) -> Table:
    df = indicator_table(year)
    rows = [["Indikator", "Nilai", "Standar Ideal", "Status"]]
    for _, r in df.iterrows():
        if r["Indikator"] == INDICATOR_LABELS["revenue_per_bed"]:
            value = format_rupiah(r["Nilai"])
        else:
            value = format_number(r["Nilai"])
        rows.append([r["Indikator"], value, r["Standar Ideal"], r["Status"]])

    table = _grid(rows, col_widths=[1.9 * inch, 1.5 * inch, 1.3 * inch, 1.4 * inch])
    for row_idx, status in enumerate(df["Status"].tolist(), start=1):
        if status == STATUS_UNRATED:
            continue
        color = OK_COLOR if status == STATUS_IDEAL else WARN_COLOR
        table.setStyle(TableStyle([
            ("TEXTCOLOR", (3, row_idx), (3, row_idx), color),
            ("FONTNAME", (3, row_idx), (3, row_idx), "Helvetica-Bold"),
        ]))
    return table


def _total_banner(year: YearProjection, styles) -> Table:
    text = f"TOTAL PENDAPATAN {year.year_label}: {format_rupiah(year.total_revenue)}"
    banner = Table([[Paragraph(text, styles["Banner"])]], colWidths=[6.1 * inch], hAlign="LEFT")
    banner.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, -1), PRIMARY),
        ("TOPPADDING", (0, 0), (-1, -1), 8),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 8),
        ("LEFTPADDING", (0, 0), (-1, -1), 10),
    ]))
    return banner


def _build_story(
    projections: Sequence[YearProjection],
    inputs: ProjectionInputs,
    generated_on: date,
) -> List[Any]:
    styles = _styles()
    story: List[Any] = []

    # header
    story.append(Paragraph(REPORT_TITLE, styles["ReportTitle"]))
    story.append(Paragraph(
        f"Dibuat pada: {format_date_id(generated_on)} &nbsp;|&nbsp; "
        f"Tahun dasar {inputs.base_year}, proyeksi {inputs.projection_years} tahun, "
        f"pertumbuhan {format_percent(inputs.growth_rate_percent)} per tahun",
        styles["ReportMeta"],
    ))

    # summary
    story.append(Paragraph("Ringkasan Proyeksi", styles["Section"]))
    story.append(_grid(_summary_rows(summary_table(projections))))
    story.append(Spacer(1, 12))
    if projections:
        chart = revenue_chart_png(projections)
        story.append(Image(io.BytesIO(chart), width=6.5 * inch, height=3.0 * inch))

    # per year
    for year in projections:
        story.append(PageBreak())
        story.append(Paragraph(f"Tahun {year.year_label}", styles["Section"]))

        story.append(Paragraph("Rincian Per Kelas", styles["SubSection"]))
        story.append(_grid(_class_rows(class_detail_table(year)), bold_last=True))

        story.append(Paragraph("Pendapatan Penunjang", styles["SubSection"]))
        story.append(_grid(
            _ancillary_rows(ancillary_table(year, inputs.ancillary_rates)),
            col_widths=[1.9 * inch, 1.2 * inch, 1.9 * inch],
            bold_last=True,
        ))
        story.append(Spacer(1, 10))
        story.append(_total_banner(year, styles))

        story.append(Paragraph("Indikator Kinerja", styles["SubSection"]))
        story.append(_indicator_table(year))

    return story


def build_pdf_report(
    projections: Sequence[YearProjection],
    inputs: ProjectionInputs,
    *,
    generated_on: Optional[date] = None,
) -> bytes:
    """Render the projection as a multi-page A4 PDF and return its bytes."""
    generated_on = generated_on or date.today()
    try:
        buf = io.BytesIO()
        doc = SimpleDocTemplate(
            buf,
            pagesize=A4,
            rightMargin=40,
            leftMargin=40,
            topMargin=40,
            bottomMargin=40,
            title=REPORT_TITLE,
            author="ABK Financial Intelligence",
        )
        doc.build(_build_story(projections, inputs, generated_on))
        data = buf.getvalue()
    except Exception as e:
        log.error("PDF generation failed: %s", e)
        raise ExportError(f"PDF generation failed: {e}") from e

    log.info("PDF report built: %d years, %d bytes", len(projections), len(data))
    return data


def export_pdf_report(
    projections: Sequence[YearProjection],
    inputs: ProjectionInputs,
    output_path: Path = Path(PDF_FILENAME),
    *,
    generated_on: Optional[date] = None,
) -> Path:
    data = build_pdf_report(projections, inputs, generated_on=generated_on)
    output_path = Path(output_path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(data)
    except OSError as e:
        log.error("Could not write %s: %s", output_path, e)
        raise ExportError(f"Could not write {output_path}: {e}") from e
    log.info("PDF generated: %s", output_path.name)
    return output_path
