import math

from engine.projection import project
from reports.assessment import (
    STATUS_ABOVE,
    STATUS_BELOW,
    STATUS_IDEAL,
    STATUS_UNDEFINED,
    STATUS_UNRATED,
    assess_indicators,
    assessment_flags,
    classify,
)


def test_classify_inclusive_bounds():
    assert classify(3.0, (3.0, 6.0)) == STATUS_IDEAL
    assert classify(6.0, (3.0, 6.0)) == STATUS_IDEAL
    assert classify(2.9, (3.0, 6.0)) == STATUS_BELOW
    assert classify(6.1, (3.0, 6.0)) == STATUS_ABOVE
    assert classify(math.nan, (3.0, 6.0)) == STATUS_UNDEFINED


def test_classify_open_bounds():
    assert classify(60.0, (60.0, None)) == STATUS_IDEAL
    assert classify(150.0, (60.0, None)) == STATUS_IDEAL
    assert classify(59.9, (60.0, None)) == STATUS_BELOW
    assert classify(-5.0, (None, 10.0)) == STATUS_IDEAL
    assert classify(11.0, (None, 10.0)) == STATUS_ABOVE
    assert classify(42.0, None) == STATUS_UNRATED


def test_base_year_assessment(projections):
    assessed = assess_indicators(projections[0].indicators)

    assert [a.key for a in assessed] == [
        "occupancy_rate",
        "average_length_of_stay",
        "bed_turnover",
        "turnover_interval",
    ]
    assert [a.status for a in assessed] == [
        STATUS_IDEAL, STATUS_IDEAL, STATUS_UNRATED, STATUS_UNRATED,
    ]
    assert assessed[0].label == "BOR (%)"
    assert assessed[0].ideal_label == "≥ 60"
    assert assessed[1].ideal_label == "3 – 6"
    assert assessed[2].ideal_label == "-"
    assert not assessed[2].is_flagged


def test_high_occupancy_in_later_years_is_ideal(projections):
    final = assess_indicators(projections[-1].indicators)

    assert projections[-1].indicators.occupancy_rate > 85
    assert final[0].status == STATUS_IDEAL


def test_low_occupancy_and_long_stay_are_flagged(inputs):
    slow = inputs
    for name in ["VIP", "Kelas 1", "Kelas 2", "Kelas 3"]:
        slow = slow.replace_bed_class(name, target_occupancy_percent=50.0, average_length_of_stay_days=8.0)
    flags = assessment_flags(project(slow)[0].indicators)

    assert len(flags) == 2
    assert flags[0].startswith("BOR (%)")
    assert STATUS_BELOW in flags[0]
    assert flags[1].startswith("ALOS (hari)")
    assert STATUS_ABOVE in flags[1]


def test_no_flags_for_defaults(projections):
    for p in projections:
        assert assessment_flags(p.indicators) == []
