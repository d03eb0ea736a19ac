import pytest

from sugardiff.services.analytics import (
    HIGH_THRESHOLD,
    LOW_THRESHOLD,
    SAME_TIME_TEXT,
    WAITING_TEXT,
    Direction,
    chart_x_bounds,
    format_entry,
    project_crossing,
    projection_text,
    windowed_rates,
)
from sugardiff.services.measurement_log import MeasurementLog
from sugardiff.utils.exceptions import DegenerateRateError


def test_thresholds():
    assert (LOW_THRESHOLD, HIGH_THRESHOLD) == (80, 300)


def test_no_prediction_without_two_entries(make_log):
    assert project_crossing(MeasurementLog()) is None
    assert project_crossing(make_log(("100", "08:00"))) is None


def test_rising_targets_high(make_log):
    projection = project_crossing(make_log(("100", "08:00"), ("120", "08:10")))
    assert projection.direction is Direction.HIGH
    assert projection.target == 300
    assert projection.rate == pytest.approx(2.0)
    assert projection.minutes == pytest.approx(90.0)


def test_falling_targets_low(make_log):
    projection = project_crossing(make_log(("90", "08:00"), ("70", "08:10")))
    assert projection.direction is Direction.LOW
    assert projection.target == 80
    assert projection.rate == pytest.approx(-2.0)
    assert projection.minutes == pytest.approx(-5.0)


def test_uses_latest_pair_after_out_of_order_insert(make_log):
    log = make_log(("150", "10:00"), ("100", "08:00"), ("200", "09:00"))
    # Sorted: 100@08:00, 200@09:00, 150@10:00
    projection = project_crossing(log)
    assert projection.direction is Direction.LOW
    assert projection.rate == pytest.approx(-50 / 60)


def test_flat_trend_has_no_estimate(make_log):
    projection = project_crossing(make_log(("120", "08:00"), ("120", "09:00")))
    assert projection.direction is Direction.LOW
    assert projection.minutes is None


def test_equal_timestamps_raise(make_log):
    with pytest.raises(DegenerateRateError):
        project_crossing(make_log(("120", "08:00"), ("130", "08:00")))


def test_projection_text_waiting(make_log):
    assert projection_text(MeasurementLog()) == WAITING_TEXT
    assert projection_text(make_log(("100", "08:00"))) == WAITING_TEXT


def test_projection_text_high(make_log):
    assert projection_text(make_log(("100", "08:00"), ("120", "08:10"))) == "Time to high: 1h 30m"


def test_projection_text_low(make_log):
    # 80 is reached in 30 minutes at -1/min
    assert projection_text(make_log(("120", "08:00"), ("110", "08:10"))) == "Time to low: 30m"


def test_projection_text_already_past_target(make_log):
    # Falling but already under 80
    assert projection_text(make_log(("90", "08:00"), ("70", "08:10"))) == "Time to low: 0s"


def test_projection_text_flat(make_log):
    assert projection_text(make_log(("120", "08:00"), ("120", "09:00"))) == "Time to low: no estimate"


def test_projection_text_same_time(make_log):
    text = projection_text(make_log(("120", "08:00"), ("130", "08:00")))
    assert text == SAME_TIME_TEXT == "No estimate: last two measurements share a time"


def test_windowed_rates_first_entry_has_no_rate(make_log):
    rows = windowed_rates(make_log(("100", "08:00"), ("120", "08:10")), 6)
    assert [format_entry(r) for r in rows] == ["[08:00] 100", "[08:10] 120 (+2.000 / min)"]


def test_windowed_rates_use_entry_before_window(make_log):
    log = make_log(("100", "08:00"), ("90", "08:10"), ("95", "08:20"))
    rows = windowed_rates(log, 2)
    assert [r.measurement.value for r in rows] == [90, 95]
    assert rows[0].rate == pytest.approx(-1.0)
    assert format_entry(rows[0]) == "[08:10] 90 (-1.000 / min)"
    assert format_entry(rows[1]) == "[08:20] 95 (+0.500 / min)"


def test_windowed_rates_mark_degenerate_pairs(make_log):
    rows = windowed_rates(make_log(("100", "08:00"), ("110", "08:00")), 6)
    assert rows[1].degenerate
    assert rows[1].rate is None
    assert format_entry(rows[1]) == "[08:00] 110 (-- / min)"


def test_windowed_rates_empty(make_log):
    assert windowed_rates(MeasurementLog(), 6) == []
    assert windowed_rates(make_log(("1", "08:00")), 0) == []


def test_chart_x_bounds():
    assert chart_x_bounds([]) == (0.0, 1440)
    lo, hi = chart_x_bounds([(600.0, 100.0), (480.0, 120.0)])
    assert lo == pytest.approx(432.0)
    assert hi == 1440
    assert chart_x_bounds([(500.0, 1.0)], upper=1000, lower_factor=0.5) == (250.0, 1000)
