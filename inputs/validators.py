"""
Pre-flight validation for projection inputs.

The engine does not guard its divisions: zero total beds or a zero length of
stay silently produce NaN. Run these checks before projecting:
- Horizon shorter than one year
- Negative capacity or tariffs
- Percentages outside [0, 100]
- Non-positive length of stay
- Bed-class set that is not the fixed four
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List

from core.config import ProjectionInputs
from core.schema import BED_CLASSES, IDEAL_RANGES


@dataclass
class ValidationResult:
    """Collects all validation warnings/errors for an input set."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def summary(self) -> str:
        lines = []
        if self.errors:
            lines.append(f"ERRORS ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"  ✗ {e}")
        if self.warnings:
            lines.append(f"WARNINGS ({len(self.warnings)}):")
            for w in self.warnings:
                lines.append(f"  ⚠ {w}")
        if not lines:
            lines.append("✓ All checks passed.")
        return "\n".join(lines)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _check_percent(result: ValidationResult, label: str, value) -> None:
    if not _is_number(value):
        result.errors.append(f"{label} is not a number.")
    elif value < 0 or value > 100:
        result.errors.append(f"{label} must be between 0 and 100 (got {value}).")


def validate_inputs(inputs: ProjectionInputs) -> ValidationResult:
    """
    Run all validation checks on a projection input set.
    Returns a ValidationResult with errors (blocking) and warnings (informational).
    """
    result = ValidationResult()

    # --- Bed-class set ---
    names = tuple(c.name for c in inputs.bed_classes)
    if names != BED_CLASSES:
        result.errors.append(f"Bed classes must be {list(BED_CLASSES)} in order (got {list(names)}).")
        return result  # per-class checks assume the fixed set

    # --- Horizon & growth ---
    if not isinstance(inputs.projection_years, int) or inputs.projection_years < 1:
        result.errors.append(f"Projection years must be an integer >= 1 (got {inputs.projection_years}).")
    if not _is_number(inputs.growth_rate_percent):
        result.errors.append("Growth rate is not a number.")
    elif inputs.growth_rate_percent <= -100:
        result.errors.append("Growth rate must be greater than -100%.")
    elif inputs.growth_rate_percent < 0:
        result.warnings.append(
            f"Negative growth rate ({inputs.growth_rate_percent}%) — revenue declines every year."
        )

    # --- Per-class capacity, occupancy, stay, tariff ---
    bor_low = IDEAL_RANGES["occupancy_rate"][0]
    for cls in inputs.bed_classes:
        if not _is_number(cls.beds) or cls.beds < 0:
            result.errors.append(f"{cls.name}: bed count must be >= 0 (got {cls.beds}).")
        _check_percent(result, f"{cls.name}: target BOR", cls.target_occupancy_percent)
        if _is_number(cls.target_occupancy_percent) and 0 <= cls.target_occupancy_percent < bor_low:
            result.warnings.append(
                f"{cls.name}: target BOR {cls.target_occupancy_percent}% is below the ideal {bor_low:.0f}%."
            )
        if not _is_number(cls.average_length_of_stay_days) or cls.average_length_of_stay_days <= 0:
            result.errors.append(
                f"{cls.name}: length of stay must be > 0 days (got {cls.average_length_of_stay_days})."
            )
        if not _is_number(cls.private_tariff_per_day) or cls.private_tariff_per_day < 0:
            result.errors.append(f"{cls.name}: tariff must be >= 0 (got {cls.private_tariff_per_day}).")

    if inputs.total_beds <= 0:
        result.errors.append("Total bed count is zero — indicators are undefined.")

    # --- Payer mix ---
    _check_percent(result, "BPJS share", inputs.payer_mix.bpjs_share_percent)
    tariff = inputs.payer_mix.bpjs_tariff_per_episode
    if not _is_number(tariff) or tariff < 0:
        result.errors.append(f"BPJS tariff must be >= 0 (got {tariff}).")

    # --- Ancillary ---
    for key, pct in inputs.ancillary_rates.as_dict().items():
        if not _is_number(pct) or pct < 0:
            result.errors.append(f"Ancillary rate '{key}' must be >= 0 (got {pct}).")
    total_pct = inputs.ancillary_rates.total_percent
    if _is_number(total_pct) and total_pct > 100:
        result.warnings.append(
            f"Ancillary rates sum to {total_pct:g}% — ancillary revenue exceeds inpatient revenue."
        )

    return result
