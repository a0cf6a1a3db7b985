"""Tests for src/romslog/parsers/dates.py."""

import math
from datetime import datetime

from romslog.parsers.dates import EPOCH, day_number_to_datetime, parse_banner_date


def _days(*args):
    return (datetime(*args) - EPOCH).total_seconds() / 86400


def test_iso_with_meridian():
    assert parse_banner_date("2016-07-21 10:58:47 AM") == _days(2016, 7, 21, 10, 58, 47)


def test_iso_pm_is_afternoon():
    assert parse_banner_date("2016-07-21 01:03:23 PM") == _days(2016, 7, 21, 13, 3, 23)


def test_iso_24_hour():
    assert parse_banner_date("2016-07-21 13:03:23") == _days(2016, 7, 21, 13, 3, 23)


def test_surrounding_whitespace_ignored():
    assert parse_banner_date("   2016-07-21   10:58:47  AM \n") == _days(2016, 7, 21, 10, 58, 47)


def test_long_banner_form():
    text = "Thursday - July 21, 2016 -  1:03:23 PM"
    assert parse_banner_date(text) == _days(2016, 7, 21, 13, 3, 23)


def test_epoch_is_day_zero():
    assert parse_banner_date("1970-01-01") == 0.0


def test_garbage_is_nan():
    assert math.isnan(parse_banner_date("not a date"))
    assert math.isnan(parse_banner_date(""))


def test_day_number_to_datetime():
    assert day_number_to_datetime(_days(2016, 7, 21, 12)) == datetime(2016, 7, 21, 12)


def test_day_number_to_datetime_nan():
    assert day_number_to_datetime(math.nan) is None
