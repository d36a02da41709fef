import pytest

from core.config import default_inputs
from inputs.builder import (
    FIELD_GROUPS,
    FIELD_KEYS,
    FIELD_SPECS,
    coerce_number,
    fields_in_group,
    from_field_values,
    shift_base_year,
    to_field_values,
    update_field,
)


def test_field_catalogue():
    assert len(FIELD_KEYS) == len(set(FIELD_KEYS)) == 25
    assert {s.group for s in FIELD_SPECS} == set(FIELD_GROUPS)
    assert [s.key for s in fields_in_group("Kapasitas TT")] == [
        "beds_vip", "beds_kelas1", "beds_kelas2", "beds_kelas3",
    ]


@pytest.mark.parametrize("raw, expected", [
    ("12", 12.0),
    ("1,5", 1.5),
    (" 7.25 ", 7.25),
    ("", 0.0),
    ("abc", 0.0),
    (None, 0.0),
    ("nan", 0.0),
    (True, 0.0),
    (3, 3.0),
])
def test_coerce_number(raw, expected):
    assert coerce_number(raw) == expected


def test_to_field_values_defaults(inputs):
    values = to_field_values(inputs)

    assert list(values) == list(FIELD_KEYS)
    assert values["base_year"] == 2025
    assert values["projection_years"] == 3
    assert values["growth_rate"] == 8.0
    assert values["beds_vip"] == 10
    assert values["bor_kelas3"] == 80.0
    assert values["alos_kelas2"] == 5.0
    assert values["tariff_kelas1"] == 800_000.0
    assert values["bpjs_share"] == 65.0
    assert values["bpjs_tariff"] == 5_000_000.0
    assert values["pharmacy_pct"] == 25.0


def test_flat_values_rebuild_same_inputs(inputs):
    assert from_field_values(to_field_values(inputs)) == inputs


def test_update_field_routes_to_nested_models(inputs):
    updated = update_field(inputs, "bor_vip", "90")
    assert updated.bed_class("VIP").target_occupancy_percent == 90.0
    assert inputs.bed_class("VIP").target_occupancy_percent == 60.0

    updated = update_field(inputs, "bpjs_share", "40")
    assert updated.payer_mix.bpjs_share_percent == 40.0

    updated = update_field(inputs, "lab_pct", "")
    assert updated.ancillary_rates.lab_percent == 0.0


def test_update_field_integer_fields(inputs):
    updated = update_field(inputs, "beds_kelas2", "12.7")
    assert updated.bed_class("Kelas 2").beds == 12
    assert isinstance(updated.bed_class("Kelas 2").beds, int)

    updated = update_field(inputs, "projection_years", 5.0)
    assert updated.projection_years == 5
    assert isinstance(updated.projection_years, int)


def test_update_field_unknown_key(inputs):
    with pytest.raises(KeyError):
        update_field(inputs, "beds_icu", 5)


def test_from_field_values_keeps_base_for_missing_keys(inputs):
    built = from_field_values({"growth_rate": "10"}, base=inputs)
    assert built.growth_rate_percent == 10.0
    assert built.base_year == 2025
    assert built.bed_classes == inputs.bed_classes


def test_from_field_values_defaults_base():
    built = from_field_values({"beds_vip": 15})
    assert built.bed_class("VIP").beds == 15
    assert built.payer_mix == default_inputs().payer_mix


def test_shift_base_year(inputs):
    assert shift_base_year(inputs, 1).base_year == 2026
    assert shift_base_year(inputs, -1).base_year == 2024
