from __future__ import annotations

import math

import numpy as np


def excel_round(x, decimals: int = 2):
    """Excel ROUND: half away from zero (vectorized)."""
    m = 10 ** decimals
    x = np.asarray(x, dtype=float)
    return np.sign(x) * (np.floor(np.abs(x) * m + 0.5) / m)


def safe_divide(numerator: float, denominator: float) -> float:
    """Float division that yields NaN instead of raising on a zero denominator."""
    if denominator == 0 or math.isnan(denominator):
        return float("nan")
    return numerator / denominator


def _id_grouping(text: str) -> str:
    # "1,234,567.89" -> "1.234.567,89"
    return text.replace(",", "_").replace(".", ",").replace("_", ".")


def format_rupiah(value: float) -> str:
    """Indonesian currency display, no decimals: Rp 1.234.567 / -Rp 1.234.567."""
    if value is None or not math.isfinite(value):
        return "-"
    sign = "-" if value < 0 else ""
    return f"{sign}Rp {_id_grouping(f'{abs(value):,.0f}')}"


def format_number(value: float, max_decimals: int = 2) -> str:
    """Indonesian number display with up to `max_decimals` fraction digits, trailing zeros trimmed."""
    if value is None or not math.isfinite(value):
        return "-"
    text = f"{value:,.{max_decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return _id_grouping(text)


def format_percent(value: float, max_decimals: int = 2) -> str:
    return f"{format_number(value, max_decimals)}%"


def format_growth(value: float) -> str:
    """Signed growth label, e.g. +8% or -2,5%."""
    if value is None or not math.isfinite(value):
        return "-"
    sign = "+" if value >= 0 else ""
    return f"{sign}{format_percent(value)}"
