import math

from core.utils import (
    excel_round,
    format_growth,
    format_number,
    format_percent,
    format_rupiah,
    safe_divide,
)


def test_excel_round_half_away_from_zero():
    assert excel_round(547.5, 0) == 548
    assert excel_round(-2.5, 0) == -3
    assert excel_round(0.125, 2) == 0.13


def test_safe_divide():
    assert safe_divide(10, 4) == 2.5
    assert math.isnan(safe_divide(1, 0))
    assert math.isnan(safe_divide(1, float("nan")))


def test_format_rupiah():
    assert format_rupiah(2_929_125_000) == "Rp 2.929.125.000"
    assert format_rupiah(1499.6) == "Rp 1.500"
    assert format_rupiah(-1500) == "-Rp 1.500"
    assert format_rupiah(float("nan")) == "-"


def test_format_number_trims_and_uses_indonesian_separators():
    assert format_number(547.5) == "547,5"
    assert format_number(1234.5678) == "1.234,57"
    assert format_number(6.0) == "6"
    assert format_number(float("inf")) == "-"


def test_format_percent_and_growth():
    assert format_percent(74.5) == "74,5%"
    assert format_growth(8.0) == "+8%"
    assert format_growth(-2.5) == "-2,5%"
    assert format_growth(0.0) == "+0%"
