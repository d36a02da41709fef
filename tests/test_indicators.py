import math

import pytest

from engine.indicators import compute_indicators


def test_base_year_indicators(projections):
    ind = projections[0].indicators

    assert ind.occupancy_rate == pytest.approx(74.5)
    assert ind.average_length_of_stay == pytest.approx(27192.5 / 5803.5)
    assert ind.bed_turnover == pytest.approx(58.035)
    assert ind.turnover_interval == pytest.approx((365 - 0.745 * 365) / 58.035)
    assert ind.total_patients == pytest.approx(5803.5)
    assert ind.revenue_per_bed == pytest.approx(projections[0].total_revenue / 100)


def test_growth_scales_bor_and_bto_but_not_alos(projections):
    base, y1 = projections[0].indicators, projections[1].indicators

    assert y1.occupancy_rate == pytest.approx(base.occupancy_rate * 1.08)
    assert y1.bed_turnover == pytest.approx(base.bed_turnover * 1.08)
    assert y1.total_patients == pytest.approx(base.total_patients * 1.08)
    assert y1.average_length_of_stay == pytest.approx(base.average_length_of_stay)


def test_zero_beds_is_nan_not_error():
    ind = compute_indicators(
        total_patient_days=0.0,
        total_patients=0.0,
        total_beds=0,
        total_revenue=0.0,
        growth_factor=1.0,
    )
    assert math.isnan(ind.occupancy_rate)
    assert math.isnan(ind.average_length_of_stay)
    assert math.isnan(ind.bed_turnover)
    assert math.isnan(ind.turnover_interval)
    assert math.isnan(ind.revenue_per_bed)
    assert ind.total_patients == 0


def test_as_dict_keys():
    ind = compute_indicators(
        total_patient_days=3650.0,
        total_patients=730.0,
        total_beds=10,
        total_revenue=1_000_000.0,
        growth_factor=1.0,
    )
    d = ind.as_dict()
    assert set(d) == {
        "occupancy_rate",
        "average_length_of_stay",
        "bed_turnover",
        "turnover_interval",
        "revenue_per_bed",
        "total_patients",
    }
    assert d["occupancy_rate"] == pytest.approx(100.0)
    assert d["turnover_interval"] == pytest.approx(0.0)
