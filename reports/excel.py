"""
Excel workbook export.

Layout:
  "Ringkasan"       one row per year (revenue, growth, BOR, ALOS, patients)
  "Tahun <year>"    per-class breakdown, ancillary breakdown and the year's total
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import Dict, Sequence

import pandas as pd
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from core.config import EXCEL_FILENAME, ProjectionInputs
from core.logger import get_logger
from engine.projection import YearProjection

from .errors import ExportError
from .tables import ancillary_table, class_detail_table, summary_table

log = get_logger("abk.reports.excel")

SUMMARY_SHEET = "Ringkasan"

COLOR_HEADER = "0F172A"
COLOR_TOTAL = "E2E8F0"

FORMAT_RUPIAH = '"Rp" #,##0'
FORMAT_DECIMAL = "#,##0.00"
FORMAT_INTEGER = "#,##0"

# column header -> number format
COLUMN_FORMATS: Dict[str, str] = {
    "Pendapatan Rawat Inap": FORMAT_RUPIAH,
    "Pendapatan Penunjang": FORMAT_RUPIAH,
    "TOTAL PENDAPATAN": FORMAT_RUPIAH,
    "Pendapatan BPJS": FORMAT_RUPIAH,
    "Pendapatan Umum": FORMAT_RUPIAH,
    "Pendapatan": FORMAT_RUPIAH,
    "Pertumbuhan (%)": FORMAT_DECIMAL,
    "BOR (%)": FORMAT_DECIMAL,
    "Target BOR (%)": FORMAT_DECIMAL,
    "Tarif (%)": FORMAT_DECIMAL,
    "ALOS (hari)": FORMAT_DECIMAL,
    "Jumlah Pasien": FORMAT_INTEGER,
    "Hari Rawat": FORMAT_INTEGER,
    "Tempat Tidur": FORMAT_INTEGER,
}


def year_sheet_name(year: YearProjection) -> str:
    return f"Tahun {year.calendar_year}"


def _style_block(ws: Worksheet, df: pd.DataFrame, header_row: int) -> None:
    """Style a DataFrame written with its header on `header_row` (1-based), index off."""
    header_font = Font(bold=True, color="FFFFFF")
    header_fill = PatternFill("solid", fgColor=COLOR_HEADER)
    total_fill = PatternFill("solid", fgColor=COLOR_TOTAL)

    for col_idx, col_name in enumerate(df.columns, start=1):
        cell = ws.cell(row=header_row, column=col_idx)
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = Alignment(horizontal="center", vertical="center", wrap_text=True)

        fmt = COLUMN_FORMATS.get(col_name)
        if fmt is None:
            continue
        for r in range(header_row + 1, header_row + 1 + len(df)):
            ws.cell(row=r, column=col_idx).number_format = fmt

    first_col = df.columns[0]
    for offset, label in enumerate(df[first_col].tolist(), start=1):
        if label == "TOTAL":
            for col_idx in range(1, len(df.columns) + 1):
                cell = ws.cell(row=header_row + offset, column=col_idx)
                cell.font = Font(bold=True)
                cell.fill = total_fill


def _autosize(ws: Worksheet, min_width: float = 10.0, max_width: float = 28.0) -> None:
    widths: Dict[int, float] = {}
    for row in ws.iter_rows():
        for cell in row:
            if cell.value is None:
                continue
            widths[cell.column] = max(widths.get(cell.column, 0.0), len(str(cell.value)) + 2)
    for col_idx, width in widths.items():
        ws.column_dimensions[get_column_letter(col_idx)].width = min(max(width, min_width), max_width)


def _write_summary(writer: pd.ExcelWriter, projections: Sequence[YearProjection]) -> None:
    df = summary_table(projections)
    df.to_excel(writer, sheet_name=SUMMARY_SHEET, index=False)
    ws = writer.sheets[SUMMARY_SHEET]
    _style_block(ws, df, header_row=1)
    ws.freeze_panes = "B2"
    _autosize(ws)


def _write_year(writer: pd.ExcelWriter, year: YearProjection, inputs: ProjectionInputs) -> None:
    sheet = year_sheet_name(year)
    classes = class_detail_table(year)
    ancillary = ancillary_table(year, inputs.ancillary_rates)

    class_start = 2  # 0-based startrow; header lands on row 3
    classes.to_excel(writer, sheet_name=sheet, index=False, startrow=class_start)

    ancillary_start = class_start + len(classes) + 3
    ancillary.to_excel(writer, sheet_name=sheet, index=False, startrow=ancillary_start)

    ws = writer.sheets[sheet]
    ws.cell(row=1, column=1, value=f"Rincian Per Kelas: {year.year_label}").font = Font(bold=True, size=13)
    ws.cell(row=ancillary_start, column=1, value="Pendapatan Penunjang").font = Font(bold=True)
    _style_block(ws, classes, header_row=class_start + 1)
    _style_block(ws, ancillary, header_row=ancillary_start + 1)

    total_row = ancillary_start + len(ancillary) + 3
    ws.cell(row=total_row, column=1, value="TOTAL PENDAPATAN").font = Font(bold=True)
    total_cell = ws.cell(row=total_row, column=2, value=year.total_revenue)
    total_cell.font = Font(bold=True)
    total_cell.number_format = FORMAT_RUPIAH
    _autosize(ws)


def build_workbook(projections: Sequence[YearProjection], inputs: ProjectionInputs) -> bytes:
    """Render the projection as an .xlsx document and return its bytes."""
    try:
        buf = io.BytesIO()
        with pd.ExcelWriter(buf, engine="openpyxl") as writer:
            _write_summary(writer, projections)
            for year in projections:
                _write_year(writer, year, inputs)
        data = buf.getvalue()
    except Exception as e:
        log.error("Excel export failed: %s", e)
        raise ExportError(f"Excel export failed: {e}") from e

    log.info("Excel workbook built: %d sheets, %d bytes", len(projections) + 1, len(data))
    return data


def export_workbook(
    projections: Sequence[YearProjection],
    inputs: ProjectionInputs,
    output_path: Path = Path(EXCEL_FILENAME),
) -> Path:
    data = build_workbook(projections, inputs)
    output_path = Path(output_path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(data)
    except OSError as e:
        log.error("Could not write %s: %s", output_path, e)
        raise ExportError(f"Could not write {output_path}: {e}") from e
    log.info("Excel workbook written: %s", output_path.name)
    return output_path
