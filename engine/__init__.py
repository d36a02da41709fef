"""
Projection engine — deterministic year-by-year revenue projection and hospital indicators.
"""

from .indicators import HospitalIndicators, compute_indicators
from .projection import (
    AncillaryRevenue,
    ClassDetail,
    YearProjection,
    project,
    project_year,
)

__all__ = [
    "AncillaryRevenue",
    "ClassDetail",
    "HospitalIndicators",
    "YearProjection",
    "compute_indicators",
    "project",
    "project_year",
]
