"""
Projection inputs.
All monetary values are in Rupiah; all rates are percentages (0-100), not fractions.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import date
from typing import Tuple

from .schema import BED_CLASSES

EXCEL_FILENAME = "ABK_Proyeksi_Keuangan.xlsx"
PDF_FILENAME = "ABK_Laporan_Lengkap.pdf"
REPORT_TITLE = "Laporan Proyeksi Keuangan RS - ABK Financial"


@dataclass(frozen=True)
class BedClassInputs:
    name: str
    beds: int
    target_occupancy_percent: float
    average_length_of_stay_days: float
    private_tariff_per_day: float


@dataclass(frozen=True)
class PayerMix:
    bpjs_share_percent: float = 65.0
    bpjs_tariff_per_episode: float = 5_000_000.0

    @property
    def bpjs_fraction(self) -> float:
        return self.bpjs_share_percent / 100.0

    @property
    def private_fraction(self) -> float:
        return 1.0 - self.bpjs_share_percent / 100.0


@dataclass(frozen=True)
class AncillaryRates:
    lab_percent: float = 15.0
    radiology_percent: float = 10.0
    pharmacy_percent: float = 25.0
    procedure_percent: float = 20.0

    def as_dict(self) -> dict:
        """Category key (see schema.ANCILLARY_CATEGORIES) -> percent."""
        return {
            "lab": self.lab_percent,
            "radiology": self.radiology_percent,
            "pharmacy": self.pharmacy_percent,
            "procedure": self.procedure_percent,
        }

    @property
    def total_percent(self) -> float:
        return sum(self.as_dict().values())


def default_bed_classes() -> Tuple[BedClassInputs, ...]:
    return (
        BedClassInputs("VIP", 10, 60.0, 4.0, 1_500_000.0),
        BedClassInputs("Kelas 1", 20, 70.0, 4.0, 800_000.0),
        BedClassInputs("Kelas 2", 30, 75.0, 5.0, 500_000.0),
        BedClassInputs("Kelas 3", 40, 80.0, 5.0, 300_000.0),
    )


@dataclass(frozen=True)
class ProjectionInputs:
    base_year: int = field(default_factory=lambda: date.today().year)
    projection_years: int = 3
    growth_rate_percent: float = 8.0

    bed_classes: Tuple[BedClassInputs, ...] = field(default_factory=default_bed_classes)
    payer_mix: PayerMix = field(default_factory=PayerMix)
    ancillary_rates: AncillaryRates = field(default_factory=AncillaryRates)

    @property
    def total_beds(self) -> int:
        return sum(c.beds for c in self.bed_classes)

    def bed_class(self, name: str) -> BedClassInputs:
        for cls in self.bed_classes:
            if cls.name == name:
                return cls
        raise KeyError(f"Unknown bed class: {name!r} (expected one of {BED_CLASSES})")

    def replace(self, **changes) -> "ProjectionInputs":
        return dataclasses.replace(self, **changes)

    def replace_bed_class(self, name: str, **changes) -> "ProjectionInputs":
        target = self.bed_class(name)
        classes = tuple(
            dataclasses.replace(c, **changes) if c is target else c
            for c in self.bed_classes
        )
        return dataclasses.replace(self, bed_classes=classes)


def default_inputs() -> ProjectionInputs:
    return ProjectionInputs()
