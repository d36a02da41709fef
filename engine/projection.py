"""
Year-by-year inpatient revenue projection.

For each year 0..N:
  occupancy -> patient days -> patient episodes -> BPJS / private split
  -> class revenue (scaled by the compound growth factor)
  -> ancillary revenue as fixed percentages of inpatient revenue
  -> hospital indicators.

Year 0 is the unescalated base year. The only state carried between years is
the previous year's total revenue, used for the growth percentage.
Zero denominators (no beds, zero length of stay) produce NaN, not exceptions;
run inputs.validators.validate_inputs() first.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from core.config import BedClassInputs, PayerMix, ProjectionInputs
from core.logger import get_logger
from core.schema import BASE_YEAR_SUFFIX, DAYS_PER_YEAR
from core.utils import excel_round, safe_divide

from .indicators import HospitalIndicators, compute_indicators

log = get_logger("abk.engine")


@dataclass(frozen=True)
class ClassDetail:
    """One bed class in one projected year."""
    class_name: str
    beds: int
    target_occupancy_percent: float
    patient_days_occupied: float  # hari rawat, growth-scaled and rounded for display
    patient_count: float          # jumlah pasien, growth-scaled and rounded for display
    revenue: float
    bpjs_revenue: float
    private_revenue: float


@dataclass(frozen=True)
class AncillaryRevenue:
    lab: float
    radiology: float
    pharmacy: float
    procedure: float
    total: float

    @classmethod
    def from_inpatient(cls, inpatient_revenue: float, rates) -> "AncillaryRevenue":
        lab = inpatient_revenue * (rates.lab_percent / 100.0)
        radiology = inpatient_revenue * (rates.radiology_percent / 100.0)
        pharmacy = inpatient_revenue * (rates.pharmacy_percent / 100.0)
        procedure = inpatient_revenue * (rates.procedure_percent / 100.0)
        return cls(
            lab=lab,
            radiology=radiology,
            pharmacy=pharmacy,
            procedure=procedure,
            total=lab + radiology + pharmacy + procedure,
        )

    def components(self) -> dict:
        return {
            "lab": self.lab,
            "radiology": self.radiology,
            "pharmacy": self.pharmacy,
            "procedure": self.procedure,
        }


@dataclass(frozen=True)
class YearProjection:
    year_index: int
    year_label: str
    calendar_year: int
    class_details: Tuple[ClassDetail, ...]
    inpatient_revenue: float
    ancillary_revenue: AncillaryRevenue
    total_revenue: float
    revenue_growth_percent: float
    indicators: HospitalIndicators

    @property
    def is_base_year(self) -> bool:
        return self.year_index == 0


@dataclass(frozen=True)
class _ClassVolume:
    occupied_days: float
    patients: float


def _class_volume(cls: BedClassInputs) -> _ClassVolume:
    occupied_days = cls.beds * (cls.target_occupancy_percent / 100.0) * DAYS_PER_YEAR
    patients = safe_divide(occupied_days, cls.average_length_of_stay_days)
    return _ClassVolume(occupied_days=occupied_days, patients=patients)


def _class_detail(
    cls: BedClassInputs,
    volume: _ClassVolume,
    payer_mix: PayerMix,
    growth_factor: float,
) -> ClassDetail:
    bpjs_patients = volume.patients * payer_mix.bpjs_fraction
    private_patients = volume.patients * payer_mix.private_fraction

    bpjs_revenue = bpjs_patients * payer_mix.bpjs_tariff_per_episode
    private_revenue = (
        private_patients * cls.average_length_of_stay_days * cls.private_tariff_per_day
    )

    return ClassDetail(
        class_name=cls.name,
        beds=cls.beds,
        target_occupancy_percent=cls.target_occupancy_percent,
        patient_days_occupied=float(excel_round(volume.occupied_days * growth_factor, 0)),
        patient_count=float(excel_round(volume.patients * growth_factor, 0)),
        revenue=(bpjs_revenue + private_revenue) * growth_factor,
        bpjs_revenue=bpjs_revenue * growth_factor,
        private_revenue=private_revenue * growth_factor,
    )


def year_label(calendar_year: int, year_index: int) -> str:
    if year_index == 0:
        return f"{calendar_year} {BASE_YEAR_SUFFIX}"
    return str(calendar_year)


def project_year(
    inputs: ProjectionInputs,
    year_index: int,
    *,
    previous_total_revenue: float = 0.0,
) -> YearProjection:
    """Compute a single projected year. `previous_total_revenue` only feeds the growth %."""
    growth_factor = (1.0 + inputs.growth_rate_percent / 100.0) ** year_index
    calendar_year = inputs.base_year + year_index

    volumes = [_class_volume(cls) for cls in inputs.bed_classes]
    details = tuple(
        _class_detail(cls, vol, inputs.payer_mix, growth_factor)
        for cls, vol in zip(inputs.bed_classes, volumes)
    )

    inpatient_revenue = sum(d.revenue for d in details)
    total_patient_days = sum(v.occupied_days for v in volumes)
    total_patients = sum(v.patients for v in volumes)

    ancillary = AncillaryRevenue.from_inpatient(inpatient_revenue, inputs.ancillary_rates)
    total_revenue = inpatient_revenue + ancillary.total

    growth_percent = 0.0
    if year_index > 0 and previous_total_revenue > 0:
        growth_percent = (
            (total_revenue - previous_total_revenue) / previous_total_revenue * 100.0
        )

    indicators = compute_indicators(
        total_patient_days=total_patient_days,
        total_patients=total_patients,
        total_beds=inputs.total_beds,
        total_revenue=total_revenue,
        growth_factor=growth_factor,
    )

    return YearProjection(
        year_index=year_index,
        year_label=year_label(calendar_year, year_index),
        calendar_year=calendar_year,
        class_details=details,
        inpatient_revenue=inpatient_revenue,
        ancillary_revenue=ancillary,
        total_revenue=total_revenue,
        revenue_growth_percent=growth_percent,
        indicators=indicators,
    )


def project(inputs: ProjectionInputs) -> List[YearProjection]:
    """
    Run the full projection: one YearProjection per year, base year included.

    Returns
    -------
    List of length inputs.projection_years + 1, ordered by year.
    """
    results: List[YearProjection] = []
    previous_total = 0.0

    for year_index in range(inputs.projection_years + 1):
        year = project_year(inputs, year_index, previous_total_revenue=previous_total)
        results.append(year)
        previous_total = year.total_revenue

    log.info(
        "Projected %d years from %d (growth %.2f%%, %d beds)",
        len(results), inputs.base_year, inputs.growth_rate_percent, inputs.total_beds,
    )
    return results
