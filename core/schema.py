from __future__ import annotations

from typing import Dict, Optional, Tuple

# Fixed bed-class set, in display order. The engine iterates these four only.
BED_CLASSES: Tuple[str, ...] = (
    "VIP",
    "Kelas 1",
    "Kelas 2",
    "Kelas 3",
)

# Ancillary (penunjang) categories: attribute name -> display label.
ANCILLARY_CATEGORIES: Dict[str, str] = {
    "lab": "Laboratorium",
    "radiology": "Radiologi",
    "pharmacy": "Farmasi",
    "procedure": "Tindakan",
}

DAYS_PER_YEAR = 365

BASE_YEAR_SUFFIX = "(Dasar)"

# Indicator ideal ranges, inclusive bounds; None leaves that side open.
# Indicators absent here (BTO, TOI) are reported without a verdict.
IDEAL_RANGES: Dict[str, Tuple[Optional[float], Optional[float]]] = {
    "occupancy_rate": (60.0, None),
    "average_length_of_stay": (3.0, 6.0),
}

# Indicators shown in the KPI views, in display order.
ASSESSED_INDICATORS: Tuple[str, ...] = (
    "occupancy_rate",
    "average_length_of_stay",
    "bed_turnover",
    "turnover_interval",
)

INDICATOR_LABELS: Dict[str, str] = {
    "occupancy_rate": "BOR (%)",
    "average_length_of_stay": "ALOS (hari)",
    "bed_turnover": "BTO (kali)",
    "turnover_interval": "TOI (hari)",
    "revenue_per_bed": "Pendapatan per TT",
    "total_patients": "Jumlah Pasien",
}
