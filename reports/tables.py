"""
Tabular views of a projection run.

Raw numeric DataFrames (no string formatting) are shared by the Excel
workbook, the PDF report and the dashboard; each consumer formats for itself.
"""

from __future__ import annotations

from typing import Sequence

import pandas as pd

from core.config import AncillaryRates
from core.schema import ANCILLARY_CATEGORIES, INDICATOR_LABELS
from engine.projection import YearProjection

from .assessment import assess_indicators

SUMMARY_COLUMNS = [
    "Tahun",
    "Pendapatan Rawat Inap",
    "Pendapatan Penunjang",
    "TOTAL PENDAPATAN",
    "Pertumbuhan (%)",
    "BOR (%)",
    "ALOS (hari)",
    "Jumlah Pasien",
]

CLASS_DETAIL_COLUMNS = [
    "Kelas",
    "Tempat Tidur",
    "Target BOR (%)",
    "Hari Rawat",
    "Jumlah Pasien",
    "Pendapatan BPJS",
    "Pendapatan Umum",
    "Pendapatan",
]

ANCILLARY_COLUMNS = ["Layanan", "Tarif (%)", "Pendapatan"]

INDICATOR_COLUMNS = ["Indikator", "Nilai", "Standar Ideal", "Status"]


def summary_table(projections: Sequence[YearProjection]) -> pd.DataFrame:
    """One row per projected year."""
    rows = []
    for p in projections:
        rows.append({
            "Tahun": p.year_label,
            "Pendapatan Rawat Inap": p.inpatient_revenue,
            "Pendapatan Penunjang": p.ancillary_revenue.total,
            "TOTAL PENDAPATAN": p.total_revenue,
            "Pertumbuhan (%)": p.revenue_growth_percent,
            "BOR (%)": p.indicators.occupancy_rate,
            "ALOS (hari)": p.indicators.average_length_of_stay,
            "Jumlah Pasien": p.indicators.total_patients,
        })
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def class_detail_table(year: YearProjection, *, with_total: bool = True) -> pd.DataFrame:
    """Per-bed-class breakdown for one year, optionally with a TOTAL row."""
    rows = [
        {
            "Kelas": d.class_name,
            "Tempat Tidur": d.beds,
            "Target BOR (%)": d.target_occupancy_percent,
            "Hari Rawat": d.patient_days_occupied,
            "Jumlah Pasien": d.patient_count,
            "Pendapatan BPJS": d.bpjs_revenue,
            "Pendapatan Umum": d.private_revenue,
            "Pendapatan": d.revenue,
        }
        for d in year.class_details
    ]
    df = pd.DataFrame(rows, columns=CLASS_DETAIL_COLUMNS)

    if with_total:
        total = {
            "Kelas": "TOTAL",
            "Tempat Tidur": df["Tempat Tidur"].sum(),
            "Target BOR (%)": year.indicators.occupancy_rate,
            "Hari Rawat": df["Hari Rawat"].sum(),
            "Jumlah Pasien": df["Jumlah Pasien"].sum(),
            "Pendapatan BPJS": df["Pendapatan BPJS"].sum(),
            "Pendapatan Umum": df["Pendapatan Umum"].sum(),
            "Pendapatan": year.inpatient_revenue,
        }
        df = pd.concat([df, pd.DataFrame([total])], ignore_index=True)
    return df


def ancillary_table(year: YearProjection, rates: AncillaryRates, *, with_total: bool = True) -> pd.DataFrame:
    """Ancillary (penunjang) revenue by category for one year."""
    pct = rates.as_dict()
    amounts = year.ancillary_revenue.components()
    rows = [
        {"Layanan": label, "Tarif (%)": pct[key], "Pendapatan": amounts[key]}
        for key, label in ANCILLARY_CATEGORIES.items()
    ]
    if with_total:
        rows.append({
            "Layanan": "TOTAL",
            "Tarif (%)": rates.total_percent,
            "Pendapatan": year.ancillary_revenue.total,
        })
    return pd.DataFrame(rows, columns=ANCILLARY_COLUMNS)


def indicator_table(year: YearProjection) -> pd.DataFrame:
    """KPIs with their ideal range and status; revenue per bed has no ideal range."""
    rows = [
        {
            "Indikator": a.label,
            "Nilai": a.value,
            "Standar Ideal": a.ideal_label,
            "Status": a.status,
        }
        for a in assess_indicators(year.indicators)
    ]
    rows.append({
        "Indikator": INDICATOR_LABELS["revenue_per_bed"],
        "Nilai": year.indicators.revenue_per_bed,
        "Standar Ideal": "-",
        "Status": "-",
    })
    return pd.DataFrame(rows, columns=INDICATOR_COLUMNS)
