"""
Core package — input data model, fixed vocabularies, formatting helpers and logging.
No business logic lives here.
"""

from .schema import BED_CLASSES, ANCILLARY_CATEGORIES, IDEAL_RANGES
from .config import (
    AncillaryRates,
    BedClassInputs,
    PayerMix,
    ProjectionInputs,
    default_inputs,
)
from .utils import excel_round, format_number, format_rupiah, safe_divide
from .logger import get_logger

__all__ = [
    "BED_CLASSES",
    "ANCILLARY_CATEGORIES",
    "IDEAL_RANGES",
    "AncillaryRates",
    "BedClassInputs",
    "PayerMix",
    "ProjectionInputs",
    "default_inputs",
    "excel_round",
    "format_number",
    "format_rupiah",
    "safe_divide",
    "get_logger",
]
