"""
ABK Financial Intelligence — Hospital Inpatient Revenue Projection Dashboard
============================================================================

Three views:
  1. Dashboard:     base-year hero card + year-on-year growth cards and charts
  2. Tabel Detail:  year-by-year revenue table, per-class and ancillary breakdown
  3. Analisa:       per-year KPI cards (BOR, ALOS, BTO, TOI) against ideal ranges

Run: streamlit run app/streamlit_app.py
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import List

import altair as alt
import pandas as pd
import streamlit as st

# ---------------------------------------------------------------------------
# Make project root importable
# ---------------------------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from core.config import (  # noqa: E402
    EXCEL_FILENAME,
    PDF_FILENAME,
    ProjectionInputs,
    default_inputs,
)
from core.logger import get_logger  # noqa: E402
from core.schema import IDEAL_RANGES  # noqa: E402
from core.utils import (  # noqa: E402
    format_growth,
    format_number,
    format_percent,
    format_rupiah,
)
from engine.projection import YearProjection, project  # noqa: E402
from inputs.builder import (  # noqa: E402
    FIELD_GROUPS,
    GROUP_TIME,
    fields_in_group,
    from_field_values,
    to_field_values,
)
from inputs.validators import validate_inputs  # noqa: E402
from reports.assessment import assess_indicators  # noqa: E402
from reports.errors import ExportError  # noqa: E402
from reports.excel import build_workbook  # noqa: E402
from reports.pdf import build_pdf_report  # noqa: E402
from reports.tables import (  # noqa: E402
    ancillary_table,
    class_detail_table,
    summary_table,
)

log = get_logger("abk.app")

TAB_DASHBOARD = "Dashboard"
TAB_DETAILS = "Tabel Detail"
TAB_ANALYSIS = "Analisa"
TABS = [TAB_DASHBOARD, TAB_DETAILS, TAB_ANALYSIS]

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@dataclass
class DashboardContext:
    """Session-local UI state handed to every view; nothing here outlives the session."""
    active_tab: str = TAB_DASHBOARD


def _context() -> DashboardContext:
    if "ctx" not in st.session_state:
        st.session_state["ctx"] = DashboardContext()
    return st.session_state["ctx"]


def _widget_key(field_key: str) -> str:
    return f"field_{field_key}"


# ---------------------------------------------------------------------------
# Cached engine
# ---------------------------------------------------------------------------
@st.cache_data(show_spinner=False, max_entries=1)
def _run_projection(inputs: ProjectionInputs) -> List[YearProjection]:
    return project(inputs)


@st.cache_data(show_spinner=False, max_entries=1)
def _workbook_bytes(inputs: ProjectionInputs) -> bytes:
    return build_workbook(_run_projection(inputs), inputs)


@st.cache_data(show_spinner=False, max_entries=1)
def _pdf_bytes(inputs: ProjectionInputs, generated_on: date) -> bytes:
    return build_pdf_report(_run_projection(inputs), inputs, generated_on=generated_on)


# ---------------------------------------------------------------------------
# Chart helpers
# ---------------------------------------------------------------------------
def _plot_revenue(projections: List[YearProjection], height=300):
    df = pd.DataFrame([
        {"Tahun": str(p.calendar_year), "Komponen": "Rawat Inap", "Pendapatan": p.inpatient_revenue}
        for p in projections
    ] + [
        {"Tahun": str(p.calendar_year), "Komponen": "Penunjang", "Pendapatan": p.ancillary_revenue.total}
        for p in projections
    ])
    chart = (
        alt.Chart(df).mark_bar()
        .encode(
            x=alt.X("Tahun:N", title="Tahun"),
            y=alt.Y("sum(Pendapatan):Q", title="Pendapatan (Rp)", axis=alt.Axis(format="~s")),
            color=alt.Color(
                "Komponen:N",
                scale=alt.Scale(domain=["Rawat Inap", "Penunjang"], range=["#0f172a", "#3b82f6"]),
            ),
            tooltip=["Tahun", "Komponen", alt.Tooltip("Pendapatan:Q", format=",.0f")],
        )
        .properties(title="Proyeksi Pendapatan", height=height)
    )
    st.altair_chart(chart, use_container_width=True)


def _plot_bor(projections: List[YearProjection], height=300):
    df = pd.DataFrame([
        {"Tahun": str(p.calendar_year), "BOR (%)": p.indicators.occupancy_rate}
        for p in projections
    ])
    line = (
        alt.Chart(df).mark_line(point=True, color="#0f172a")
        .encode(
            x=alt.X("Tahun:N", title="Tahun"),
            y=alt.Y("BOR (%):Q", title="BOR (%)"),
            tooltip=["Tahun", alt.Tooltip("BOR (%):Q", format=".2f")],
        )
    )
    ideal = (
        alt.Chart(pd.DataFrame({"y": [b for b in IDEAL_RANGES["occupancy_rate"] if b is not None]}))
        .mark_rule(strokeDash=[4, 4], color="#059669")
        .encode(y="y:Q")
    )
    st.altair_chart((line + ideal).properties(title="BOR vs Rentang Ideal", height=height),
                    use_container_width=True)


# ---------------------------------------------------------------------------
# Sidebar — configuration
# ---------------------------------------------------------------------------
def _shift_year(delta: int):
    key = _widget_key("base_year")
    st.session_state[key] = int(st.session_state[key]) + delta


def _render_config() -> ProjectionInputs:
    """Render the input groups and return the inputs they describe."""
    defaults = to_field_values(default_inputs())
    values = {}

    st.header("Konfigurasi")
    for group in FIELD_GROUPS:
        with st.expander(group, expanded=group == GROUP_TIME):
            if group == GROUP_TIME:
                c1, c2 = st.columns(2)
                c1.button("− Tahun", on_click=_shift_year, args=(-1,), use_container_width=True)
                c2.button("+ Tahun", on_click=_shift_year, args=(1,), use_container_width=True)

            cols = st.columns(2)
            for i, spec in enumerate(fields_in_group(group)):
                label = f"{spec.label} ({spec.suffix})" if spec.suffix else spec.label
                key = _widget_key(spec.key)
                # seeded once; the widgets then read their value from session state only
                if key not in st.session_state:
                    st.session_state[key] = int(defaults[spec.key]) if spec.integer else float(defaults[spec.key])
                with cols[i % 2]:
                    if spec.integer:
                        values[spec.key] = st.number_input(
                            label, min_value=int(spec.minimum), step=int(spec.step), key=key,
                        )
                    else:
                        values[spec.key] = st.number_input(
                            label, min_value=float(spec.minimum), step=float(spec.step), key=key,
                        )

    return from_field_values(values)


# ---------------------------------------------------------------------------
# Export buttons
# ---------------------------------------------------------------------------
def _render_exports(inputs: ProjectionInputs):
    c1, c2 = st.columns(2)
    try:
        c1.download_button(
            "Excel", data=_workbook_bytes(inputs),
            file_name=EXCEL_FILENAME, mime=XLSX_MIME, use_container_width=True,
        )
    except ExportError as e:
        c1.error(f"Ekspor Excel gagal: {e}")
    try:
        c2.download_button(
            "Laporan PDF", data=_pdf_bytes(inputs, date.today()),
            file_name=PDF_FILENAME, mime="application/pdf", type="primary",
            use_container_width=True,
        )
    except ExportError as e:
        c2.error(f"Ekspor PDF gagal: {e}")


# ---------------------------------------------------------------------------
# Views
# ---------------------------------------------------------------------------
def _render_dashboard(projections: List[YearProjection], ctx: DashboardContext):
    base = projections[0]
    st.markdown(f"**Total Proyeksi Pendapatan, Tahun {base.year_label}**")
    st.markdown(f"## {format_rupiah(base.total_revenue)}")

    k1, k2, k3, k4 = st.columns(4)
    k1.metric("Rawat Inap", format_rupiah(base.inpatient_revenue))
    k2.metric("Penunjang", format_rupiah(base.ancillary_revenue.total))
    k3.metric("Rerata BOR", format_percent(base.indicators.occupancy_rate))
    k4.metric("Pasien/Tahun", format_number(base.indicators.total_patients))

    st.divider()
    st.subheader("Tren Pertumbuhan")
    if len(projections) > 1:
        later = projections[1:]
        for start in range(0, len(later), 3):
            cols = st.columns(3)
            for col, calc in zip(cols, later[start:start + 3]):
                trend = "Naik" if calc.revenue_growth_percent >= 0 else "Turun"
                col.metric(
                    f"TAHUN {calc.calendar_year}",
                    format_rupiah(calc.total_revenue),
                    delta=f"{trend} {format_percent(abs(calc.revenue_growth_percent))} vs Tahun Lalu",
                    delta_color="normal" if calc.revenue_growth_percent >= 0 else "inverse",
                )
        if st.button("Lihat Detail Lengkap"):
            ctx.active_tab = TAB_DETAILS
            st.rerun()
    else:
        st.info("Tambahkan durasi proyeksi (lebih dari 1 tahun) untuk melihat tren pertumbuhan.")

    left, right = st.columns(2)
    with left:
        _plot_revenue(projections)
    with right:
        _plot_bor(projections)


def _render_details(projections: List[YearProjection], inputs: ProjectionInputs):
    st.subheader("Rincian Keuangan")
    st.caption("Proyeksi detail tahun ke tahun")

    summary = summary_table(projections)
    display = pd.DataFrame({
        "Periode": summary["Tahun"],
        "Rawat Inap": summary["Pendapatan Rawat Inap"].map(format_rupiah),
        "Penunjang": summary["Pendapatan Penunjang"].map(format_rupiah),
        "Growth %": ["-"] + [format_growth(v) for v in summary["Pertumbuhan (%)"].iloc[1:]],
        "Total Revenue": summary["TOTAL PENDAPATAN"].map(format_rupiah),
    })
    st.dataframe(display, use_container_width=True, hide_index=True)

    for year in projections:
        with st.expander(f"Rincian {year.year_label}", expanded=False):
            classes = class_detail_table(year)
            for c in ["Pendapatan BPJS", "Pendapatan Umum", "Pendapatan"]:
                classes[c] = classes[c].map(format_rupiah)
            st.dataframe(classes, use_container_width=True, hide_index=True)

            ancillary = ancillary_table(year, inputs.ancillary_rates)
            ancillary["Pendapatan"] = ancillary["Pendapatan"].map(format_rupiah)
            st.dataframe(ancillary, use_container_width=True, hide_index=True)


def _render_analysis(projections: List[YearProjection]):
    for start in range(0, len(projections), 2):
        cols = st.columns(2)
        for col, calc in zip(cols, projections[start:start + 2]):
            with col:
                with st.container(border=True):
                    st.markdown(f"#### KPI {calc.year_label}")
                    k = st.columns(2)
                    for i, a in enumerate(assess_indicators(calc.indicators)):
                        rated = a.ideal_range is not None
                        k[i % 2].metric(
                            a.label, format_number(a.value),
                            delta=f"{a.status} ({a.ideal_label})" if rated else None,
                            delta_color="inverse" if a.is_flagged else "off",
                        )
                    st.metric("Rev/Bed", format_rupiah(calc.indicators.revenue_per_bed))


# ═══════════════════════════════════════════════════════════════════════════
# PAGE
# ═══════════════════════════════════════════════════════════════════════════
def main():
    st.set_page_config(page_title="ABK Financial Intelligence", layout="wide")
    st.title("ABK")
    st.caption("Financial Intelligence — Proyeksi Pendapatan Rawat Inap")

    ctx = _context()

    with st.sidebar:
        inputs = _render_config()

    vr = validate_inputs(inputs)
    if not vr.is_valid:
        log.warning("Invalid configuration: %d error(s)", len(vr.errors))
        st.error("Konfigurasi tidak valid:\n\n" + "\n".join(f"- {e}" for e in vr.errors))
        st.stop()
    for w in vr.warnings:
        st.warning(w)

    projections = _run_projection(inputs)

    nav, exports = st.columns([3, 2])
    with nav:
        ctx.active_tab = st.radio(
            "Tampilan", options=TABS, index=TABS.index(ctx.active_tab),
            horizontal=True, label_visibility="collapsed",
        )
    with exports:
        _render_exports(inputs)

    if ctx.active_tab != TAB_DASHBOARD:
        if st.button("← Kembali ke Dashboard"):
            ctx.active_tab = TAB_DASHBOARD
            st.rerun()

    if ctx.active_tab == TAB_DASHBOARD:
        _render_dashboard(projections, ctx)
    elif ctx.active_tab == TAB_DETAILS:
        _render_details(projections, inputs)
    else:
        _render_analysis(projections)


if __name__ == "__main__":
    main()
