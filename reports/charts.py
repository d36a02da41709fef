"""
Static charts for the PDF report (matplotlib, headless).
"""

from __future__ import annotations

import io
from typing import Sequence

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
from matplotlib.ticker import FuncFormatter  # noqa: E402

from engine.projection import YearProjection  # noqa: E402

INPATIENT_COLOR = "#0f172a"
ANCILLARY_COLOR = "#3b82f6"


def _billions(value, _pos) -> str:
    return f"{value / 1e9:,.1f} M"


def revenue_chart_png(
    projections: Sequence[YearProjection],
    *,
    width_in: float = 7.0,
    height_in: float = 3.2,
    dpi: int = 150,
) -> bytes:
    """Stacked inpatient + ancillary revenue per year, as PNG bytes."""
    labels = [str(p.calendar_year) for p in projections]
    inpatient = [p.inpatient_revenue for p in projections]
    ancillary = [p.ancillary_revenue.total for p in projections]

    fig, ax = plt.subplots(figsize=(width_in, height_in))
    try:
        ax.bar(labels, inpatient, color=INPATIENT_COLOR, label="Rawat Inap")
        ax.bar(labels, ancillary, bottom=inpatient, color=ANCILLARY_COLOR, label="Penunjang")
        ax.set_title("Proyeksi Pendapatan per Tahun")
        ax.set_ylabel("Rupiah (miliar)")
        ax.yaxis.set_major_formatter(FuncFormatter(_billions))
        ax.legend(loc="upper left", frameon=False)
        ax.spines["top"].set_visible(False)
        ax.spines["right"].set_visible(False)
        fig.tight_layout()

        buf = io.BytesIO()
        fig.savefig(buf, format="png", dpi=dpi)
        return buf.getvalue()
    finally:
        plt.close(fig)
