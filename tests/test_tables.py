import pytest

from reports.tables import (
    CLASS_DETAIL_COLUMNS,
    SUMMARY_COLUMNS,
    ancillary_table,
    class_detail_table,
    indicator_table,
    summary_table,
)


def test_summary_table(projections):
    df = summary_table(projections)

    assert list(df.columns) == SUMMARY_COLUMNS
    assert len(df) == 4
    assert df["Tahun"].tolist() == ["2025 (Dasar)", "2026", "2027", "2028"]
    assert df["Pertumbuhan (%)"].iloc[0] == 0
    assert df["TOTAL PENDAPATAN"].iloc[2] == projections[2].total_revenue


def test_class_detail_table_with_total(projections):
    df = class_detail_table(projections[0])

    assert list(df.columns) == CLASS_DETAIL_COLUMNS
    assert df["Kelas"].tolist() == ["VIP", "Kelas 1", "Kelas 2", "Kelas 3", "TOTAL"]
    total = df.iloc[-1]
    assert total["Tempat Tidur"] == 100
    assert total["Pendapatan"] == pytest.approx(projections[0].inpatient_revenue)
    assert total["Target BOR (%)"] == pytest.approx(74.5)


def test_class_detail_table_without_total(projections):
    df = class_detail_table(projections[1], with_total=False)
    assert len(df) == 4
    assert df["Hari Rawat"].iloc[0] == round(2190 * 1.08)


def test_ancillary_table(inputs, projections):
    df = ancillary_table(projections[0], inputs.ancillary_rates)

    assert df["Layanan"].tolist() == ["Laboratorium", "Radiologi", "Farmasi", "Tindakan", "TOTAL"]
    assert df["Tarif (%)"].iloc[-1] == 70
    assert df["Pendapatan"].iloc[-1] == projections[0].ancillary_revenue.total


def test_indicator_table(projections):
    df = indicator_table(projections[0])

    assert len(df) == 5
    assert df["Status"].tolist() == ["Ideal", "Ideal", "-", "-", "-"]
    assert df["Standar Ideal"].iloc[0] == "≥ 60"
    assert df["Indikator"].iloc[-1] == "Pendapatan per TT"
    assert df["Standar Ideal"].iloc[-1] == "-"
