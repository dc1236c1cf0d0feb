"""
Tests of `covid_summary.dates`
"""

from __future__ import annotations

import datetime as dt

import pytest

from covid_summary.dates import get_day_index, get_today, iter_days


@pytest.mark.parametrize(
    "now, utc_offset_hours, exp",
    (
        pytest.param(
            dt.datetime(2020, 3, 4, 15, 30, tzinfo=dt.timezone.utc),
            9,
            dt.date(2020, 3, 5),
            id="after-jst-midnight",
        ),
        pytest.param(
            dt.datetime(2020, 3, 4, 14, 59, tzinfo=dt.timezone.utc),
            9,
            dt.date(2020, 3, 4),
            id="before-jst-midnight",
        ),
        pytest.param(
            dt.datetime(2020, 3, 4, 15, 30),
            9,
            dt.date(2020, 3, 5),
            id="naive-is-utc",
        ),
        pytest.param(
            dt.datetime(2020, 3, 4, 15, 30, tzinfo=dt.timezone.utc),
            0,
            dt.date(2020, 3, 4),
            id="utc",
        ),
    ),
)
def test_get_today(now, utc_offset_hours, exp):
    assert get_today(utc_offset_hours=utc_offset_hours, now=now) == exp


def test_iter_days_inclusive():
    assert list(iter_days("2020-02-28", dt.date(2020, 3, 1))) == [
        "2020-02-28",
        "2020-02-29",
        "2020-03-01",
    ]


def test_iter_days_end_before_start():
    assert list(iter_days("2020-03-02", "2020-03-01")) == []


def test_get_day_index():
    res = get_day_index("2020-03-01", "2020-03-03")

    assert res.name == "date"
    assert res.tolist() == ["2020-03-01", "2020-03-02", "2020-03-03"]
