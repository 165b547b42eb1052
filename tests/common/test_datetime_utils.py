from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone

import pytest

from src.bakery_timekeeping.bakery_timekeeping.common.datetime_utils import (
    BUSINESS_TZ,
    format_instant,
    parse_wall_clock,
    to_local_display,
    to_utc_instant,
    today_local,
)


def test_business_morning_maps_one_hour_earlier_in_utc():
    instant = to_utc_instant(date(2024, 3, 1), time(8, 0))

    assert instant == datetime(2024, 3, 1, 7, 0, tzinfo=timezone.utc)
    assert instant.utcoffset() == timedelta(0)
    assert format_instant(instant) == "2024-03-01T07:00:00Z"


def test_just_after_local_midnight_lands_on_previous_utc_day():
    # 2024 is a leap year
    assert to_utc_instant(date(2024, 3, 1), time(0, 30)) == datetime(2024, 2, 29, 23, 30, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "day, clock",
    [
        (date(2024, 3, 1), time(8, 0)),
        (date(2024, 3, 1), time(0, 0)),
        (date(2024, 12, 31), time(23, 59, 59)),
        (date(2024, 7, 15), time(0, 59)),
    ],
)
def test_local_display_reverses_utc_conversion(day, clock):
    assert to_local_display(to_utc_instant(day, clock)) == (day, clock)


def test_naive_instant_is_read_as_utc():
    assert to_local_display(datetime(2024, 3, 1, 16, 0)) == (date(2024, 3, 1), time(17, 0))


def test_business_timezone_has_no_dst():
    winter = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc).astimezone(BUSINESS_TZ)
    summer = datetime(2024, 7, 15, 12, 0, tzinfo=timezone.utc).astimezone(BUSINESS_TZ)

    assert winter.utcoffset() == summer.utcoffset() == timedelta(hours=1)


def test_today_local_rolls_over_before_utc_midnight():
    assert today_local(datetime(2024, 3, 1, 23, 30, tzinfo=timezone.utc)) == date(2024, 3, 2)


@pytest.mark.parametrize("value, expected", [("8:05", time(8, 5)), ("08:05:30", time(8, 5, 30)), ("23:59", time(23, 59))])
def test_parse_wall_clock_accepts_short_and_long_forms(value, expected):
    assert parse_wall_clock(value) == expected


@pytest.mark.parametrize("value", ["24:00", "8h00", "", "12:60", "12:00:61"])
def test_parse_wall_clock_rejects_garbage(value):
    with pytest.raises(ValueError):
        parse_wall_clock(value)


def test_instant_before_year_one_is_a_value_error():
    with pytest.raises(ValueError, match="out of range"):
        to_utc_instant(date(1, 1, 1), time(0, 30))

    assert to_utc_instant(date(1, 1, 1), time(1, 0)) == datetime(1, 1, 1, 0, 0, tzinfo=timezone.utc)
    assert to_utc_instant(date(9999, 12, 31), time(23, 30)) == datetime(9999, 12, 31, 22, 30, tzinfo=timezone.utc)
