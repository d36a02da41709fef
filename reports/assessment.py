"""
Indicator assessment — compare each year's BOR / ALOS against their ideal
ranges and flag what falls outside. BTO and TOI are reported without a verdict.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from core.schema import ASSESSED_INDICATORS, IDEAL_RANGES, INDICATOR_LABELS
from core.utils import format_number
from engine.indicators import HospitalIndicators

STATUS_IDEAL = "Ideal"
STATUS_BELOW = "Di bawah ideal"
STATUS_ABOVE = "Di atas ideal"
STATUS_UNDEFINED = "Tidak terdefinisi"
STATUS_UNRATED = "-"

IdealRange = Tuple[Optional[float], Optional[float]]


@dataclass(frozen=True)
class IndicatorAssessment:
    key: str
    label: str
    value: float
    ideal_range: Optional[IdealRange]
    status: str

    @property
    def is_ideal(self) -> bool:
        return self.status == STATUS_IDEAL

    @property
    def is_flagged(self) -> bool:
        return self.status in (STATUS_BELOW, STATUS_ABOVE)

    @property
    def ideal_label(self) -> str:
        if self.ideal_range is None:
            return "-"
        low, high = self.ideal_range
        if high is None:
            return f"≥ {format_number(low)}"
        if low is None:
            return f"≤ {format_number(high)}"
        return f"{format_number(low)} – {format_number(high)}"


def classify(value: float, ideal_range: Optional[IdealRange]) -> str:
    """Status of `value` against an inclusive range; either bound may be None (open)."""
    if ideal_range is None:
        return STATUS_UNRATED
    if value is None or math.isnan(value):
        return STATUS_UNDEFINED
    low, high = ideal_range
    if low is not None and value < low:
        return STATUS_BELOW
    if high is not None and value > high:
        return STATUS_ABOVE
    return STATUS_IDEAL


def assess_indicators(indicators: HospitalIndicators) -> List[IndicatorAssessment]:
    """One assessment per KPI, in ASSESSED_INDICATORS order."""
    values = indicators.as_dict()
    out = []
    for key in ASSESSED_INDICATORS:
        ideal = IDEAL_RANGES.get(key)
        out.append(IndicatorAssessment(
            key=key,
            label=INDICATOR_LABELS[key],
            value=values[key],
            ideal_range=ideal,
            status=classify(values[key], ideal),
        ))
    return out


def assessment_flags(indicators: HospitalIndicators) -> List[str]:
    """Human-readable warnings for every indicator outside its ideal range."""
    flags = []
    for a in assess_indicators(indicators):
        if not a.is_flagged:
            continue
        flags.append(f"{a.label}: {format_number(a.value)} — {a.status} ({a.ideal_label})")
    return flags
