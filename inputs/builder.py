"""
Flat form-field surface for ProjectionInputs.

The dashboard edits one numeric field at a time; this module maps flat keys
(e.g. "beds_vip", "bpjs_share") onto the nested, frozen ProjectionInputs and back.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Mapping, Optional, Tuple

from core.config import ProjectionInputs, default_inputs
from core.schema import BED_CLASSES


@dataclass(frozen=True)
class FieldSpec:
    key: str
    label: str
    group: str
    suffix: str = ""
    step: float = 1.0
    minimum: float = 0.0
    integer: bool = False


GROUP_TIME = "Waktu & Pertumbuhan"
GROUP_BEDS = "Kapasitas TT"
GROUP_BOR = "Target BOR"
GROUP_ALOS = "ALOS"
GROUP_FINANCE = "Tarif & BPJS"
GROUP_ANCILLARY = "Penunjang"

FIELD_GROUPS: Tuple[str, ...] = (
    GROUP_TIME, GROUP_BEDS, GROUP_BOR, GROUP_ALOS, GROUP_FINANCE, GROUP_ANCILLARY,
)

_CLASS_SLUGS: Dict[str, str] = {
    "VIP": "vip",
    "Kelas 1": "kelas1",
    "Kelas 2": "kelas2",
    "Kelas 3": "kelas3",
}

_CLASS_ATTRS: Dict[str, str] = {
    "beds": "beds",
    "bor": "target_occupancy_percent",
    "alos": "average_length_of_stay_days",
    "tariff": "private_tariff_per_day",
}

# flat key -> (bed class name, BedClassInputs attribute)
_CLASS_FIELDS: Dict[str, Tuple[str, str]] = {
    f"{prefix}_{_CLASS_SLUGS[name]}": (name, attr)
    for name in BED_CLASSES
    for prefix, attr in _CLASS_ATTRS.items()
}

_TOP_FIELDS: Dict[str, str] = {
    "base_year": "base_year",
    "projection_years": "projection_years",
    "growth_rate": "growth_rate_percent",
}

_PAYER_FIELDS: Dict[str, str] = {
    "bpjs_share": "bpjs_share_percent",
    "bpjs_tariff": "bpjs_tariff_per_episode",
}

_ANCILLARY_FIELDS: Dict[str, str] = {
    "lab_pct": "lab_percent",
    "radiology_pct": "radiology_percent",
    "pharmacy_pct": "pharmacy_percent",
    "procedure_pct": "procedure_percent",
}


def _build_field_specs() -> List[FieldSpec]:
    specs = [
        FieldSpec("base_year", "Tahun Awal (Dasar)", GROUP_TIME, integer=True, minimum=1900),
        FieldSpec("projection_years", "Durasi Proyeksi", GROUP_TIME, "thn", integer=True, minimum=1),
        FieldSpec("growth_rate", "Growth Rate", GROUP_TIME, "%", step=0.5, minimum=-100.0),
    ]
    for name in BED_CLASSES:
        specs.append(FieldSpec(f"beds_{_CLASS_SLUGS[name]}", f"TT {name}", GROUP_BEDS, integer=True))
    for name in BED_CLASSES:
        specs.append(FieldSpec(f"bor_{_CLASS_SLUGS[name]}", f"{name} %", GROUP_BOR, "%"))
    for name in BED_CLASSES:
        specs.append(FieldSpec(f"alos_{_CLASS_SLUGS[name]}", f"ALOS {name}", GROUP_ALOS, "hari", step=0.5))
    for name in BED_CLASSES:
        specs.append(
            FieldSpec(f"tariff_{_CLASS_SLUGS[name]}", f"Tarif {name}", GROUP_FINANCE, "Rp", step=50_000)
        )
    specs += [
        FieldSpec("bpjs_tariff", "INA-CBG", GROUP_FINANCE, "Rp", step=100_000),
        FieldSpec("bpjs_share", "Mix BPJS", GROUP_FINANCE, "%"),
        FieldSpec("lab_pct", "Lab %", GROUP_ANCILLARY, "%"),
        FieldSpec("radiology_pct", "Rad %", GROUP_ANCILLARY, "%"),
        FieldSpec("pharmacy_pct", "Farmasi %", GROUP_ANCILLARY, "%"),
        FieldSpec("procedure_pct", "Tindakan %", GROUP_ANCILLARY, "%"),
    ]
    return specs


FIELD_SPECS: Tuple[FieldSpec, ...] = tuple(_build_field_specs())
FIELD_KEYS: Tuple[str, ...] = tuple(s.key for s in FIELD_SPECS)
_SPECS_BY_KEY: Dict[str, FieldSpec] = {s.key: s for s in FIELD_SPECS}


def fields_in_group(group: str) -> List[FieldSpec]:
    return [s for s in FIELD_SPECS if s.group == group]


def coerce_number(raw: Any) -> float:
    """Parse a raw form value. Blank, unparseable or non-finite values become 0."""
    if raw is None or isinstance(raw, bool):
        return 0.0
    if isinstance(raw, str):
        raw = raw.strip().replace(",", ".")
        if not raw:
            return 0.0
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(value):
        return 0.0
    return value


def to_field_values(inputs: ProjectionInputs) -> Dict[str, float]:
    """Flatten inputs into {field key: value}, in FIELD_SPECS order."""
    flat: Dict[str, Any] = {}
    for key, attr in _TOP_FIELDS.items():
        flat[key] = getattr(inputs, attr)
    for key, (cls_name, attr) in _CLASS_FIELDS.items():
        flat[key] = getattr(inputs.bed_class(cls_name), attr)
    for key, attr in _PAYER_FIELDS.items():
        flat[key] = getattr(inputs.payer_mix, attr)
    for key, attr in _ANCILLARY_FIELDS.items():
        flat[key] = getattr(inputs.ancillary_rates, attr)
    return {key: flat[key] for key in FIELD_KEYS}


def update_field(inputs: ProjectionInputs, key: str, raw: Any) -> ProjectionInputs:
    """Return a copy of `inputs` with one flat field set from a raw form value."""
    if key not in _SPECS_BY_KEY:
        raise KeyError(f"Unknown input field: {key!r}")

    value = coerce_number(raw)
    if _SPECS_BY_KEY[key].integer:
        value = int(value)

    if key in _TOP_FIELDS:
        return inputs.replace(**{_TOP_FIELDS[key]: value})
    if key in _CLASS_FIELDS:
        cls_name, attr = _CLASS_FIELDS[key]
        return inputs.replace_bed_class(cls_name, **{attr: value})
    if key in _PAYER_FIELDS:
        payer = replace(inputs.payer_mix, **{_PAYER_FIELDS[key]: value})
        return inputs.replace(payer_mix=payer)

    rates = replace(inputs.ancillary_rates, **{_ANCILLARY_FIELDS[key]: value})
    return inputs.replace(ancillary_rates=rates)


def from_field_values(
    values: Mapping[str, Any],
    *,
    base: Optional[ProjectionInputs] = None,
) -> ProjectionInputs:
    """Build inputs from a flat mapping. Keys missing from `values` keep `base`'s value."""
    inputs = base if base is not None else default_inputs()
    for key, raw in values.items():
        inputs = update_field(inputs, key, raw)
    return inputs


def shift_base_year(inputs: ProjectionInputs, delta: int) -> ProjectionInputs:
    return inputs.replace(base_year=inputs.base_year + int(delta))
