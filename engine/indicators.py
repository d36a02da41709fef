"""
Hospital performance indicators (Barber-Johnson): BOR, ALOS, BTO, TOI, revenue per bed.

The occupancy rate, bed turnover and patient total are scaled by the year's
growth factor; ALOS is computed from the unscaled totals and therefore stays
constant across years.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

from core.schema import DAYS_PER_YEAR
from core.utils import safe_divide


@dataclass(frozen=True)
class HospitalIndicators:
    occupancy_rate: float            # BOR, percent
    average_length_of_stay: float    # ALOS, days
    bed_turnover: float              # BTO, patients per bed per year
    turnover_interval: float         # TOI, idle days per bed between discharges
    revenue_per_bed: float
    total_patients: float

    def as_dict(self) -> dict:
        return asdict(self)


def compute_indicators(
    *,
    total_patient_days: float,
    total_patients: float,
    total_beds: int,
    total_revenue: float,
    growth_factor: float,
) -> HospitalIndicators:
    """
    Parameters
    ----------
    total_patient_days : float
        Occupied bed-days summed over classes, unscaled by growth
    total_patients : float
        Patient episodes summed over classes, unscaled by growth
    total_beds : int
        Bed capacity summed over classes
    total_revenue : float
        The year's total (inpatient + ancillary) revenue
    growth_factor : float
        (1 + g)^year for the year being computed
    """
    occupancy_rate = (
        safe_divide(total_patient_days, total_beds * DAYS_PER_YEAR) * 100.0 * growth_factor
    )
    bed_turnover = safe_divide(total_patients * growth_factor, total_beds)
    turnover_interval = safe_divide(
        DAYS_PER_YEAR - occupancy_rate / 100.0 * DAYS_PER_YEAR, bed_turnover
    )

    return HospitalIndicators(
        occupancy_rate=occupancy_rate,
        average_length_of_stay=safe_divide(total_patient_days, total_patients),
        bed_turnover=bed_turnover,
        turnover_interval=turnover_interval,
        revenue_per_bed=safe_divide(total_revenue, total_beds),
        total_patients=total_patients * growth_factor,
    )
