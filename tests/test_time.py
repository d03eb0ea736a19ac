import dataclasses

import pytest

from sugardiff.models.measurement import Time
from sugardiff.utils.exceptions import MalformedTimeError, MeasurementError


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("9:5", "09:05"),
        ("09:05", "09:05"),
        ("0:0", "00:00"),
        ("23:59", "23:59"),
        ("7:30", "07:30"),
    ],
)
def test_parse_displays_zero_padded(raw, expected):
    assert str(Time.parse(raw)) == expected


def test_parse_fields():
    t = Time.parse("9:5")
    assert t == Time(9, 5)
    assert (t.h, t.m) == (9, 5)


def test_timestamp_is_minutes_since_midnight():
    assert Time.parse("00:00").timestamp == 0
    assert Time.parse("08:10").timestamp == 490
    assert Time.parse("23:59").timestamp == 1439


def test_out_of_day_values_are_not_rejected():
    assert Time.parse("25:70").timestamp == 25 * 60 + 70


def test_extra_fields_are_ignored():
    assert Time.parse("10:30:45") == Time(10, 30)


@pytest.mark.parametrize("raw", ["1230", "", "12", ":", "12:", ":30", "ab:10", "10:xx", "1.5:30", "-1:30", "10: 30", "256:00"])
def test_parse_rejects_malformed(raw):
    with pytest.raises(MalformedTimeError) as exc_info:
        Time.parse(raw)
    assert exc_info.value.error_code == "MALFORMED_TIME"
    assert exc_info.value.details["raw"] == raw


def test_malformed_time_is_a_measurement_error():
    with pytest.raises(MeasurementError):
        Time.parse("noon")


def test_time_is_immutable():
    t = Time(8, 0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        t.h = 9


def test_huge_time_fields_are_malformed():
    with pytest.raises(MalformedTimeError):
        Time.parse("9" * 5000 + ":00")
    assert Time.parse("0" * 5000 + "8:05") == Time(8, 5)
