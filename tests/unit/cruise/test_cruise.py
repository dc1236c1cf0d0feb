"""
Tests of `covid_summary.cruise`
"""

from __future__ import annotations

import datetime as dt

import pytest

from covid_summary.cruise import (
    DIAMOND_PRINCESS,
    NAGASAKI_CRUISE,
    CruiseShip,
    generate_cruise_ship_region_summary,
    get_daily_increments,
)

START = "2020-02-04"
TODAY = dt.date(2020, 2, 10)


def test_single_row_lands_on_its_day():
    res = generate_cruise_ship_region_summary(
        [{"date": "2020-02-07", "dpConfirmed": "5"}], today=TODAY, start_date=START
    )

    dp = res[DIAMOND_PRINCESS.name]
    assert dp.daily_confirmed_count == [0, 0, 0, 5, 0, 0, 0]
    assert dp.daily_confirmed_count.index(5) == (
        dt.date(2020, 2, 7) - dt.date(2020, 2, 4)
    ).days
    assert dp.daily_confirmed_start_date == START
    assert dp.daily_deceased_start_date == START
    assert dp.confirmed == 5  # noqa: PLR2004


def test_gap_puts_whole_change_on_next_reported_day():
    rows = [
        {"date": "2020-02-05", "dpConfirmed": "10"},
        {"date": "2020-02-06", "dpConfirmed": ""},
        {"date": "2020-02-08", "dpConfirmed": "25", "dpRecovered": "3"},
    ]

    res = generate_cruise_ship_region_summary(rows, today=TODAY, start_date=START)

    dp = res[DIAMOND_PRINCESS.name]
    assert dp.daily_confirmed_count == [0, 10, 0, 0, 15, 0, 0]
    assert dp.confirmed == 25  # noqa: PLR2004
    assert dp.recovered == 3  # noqa: PLR2004


def test_totals_come_from_last_row():
    rows = [
        {
            "date": "2020-02-05",
            "dpConfirmed": "10",
            "dpTested": "100",
            "nagasakiConfirmed": "4",
        },
        {
            "date": "2020-02-06",
            "dpConfirmed": "12",
            "dpCritical": "2",
            "dpDeceased": "1",
            "nagasakiTested": "50",
        },
    ]

    res = generate_cruise_ship_region_summary(rows, today=TODAY, start_date=START)

    dp = res[DIAMOND_PRINCESS.name]
    assert (dp.confirmed, dp.critical, dp.deceased, dp.tested) == (12, 2, 1, 0)
    nagasaki = res[NAGASAKI_CRUISE.name]
    assert (nagasaki.confirmed, nagasaki.tested) == (0, 50)
    assert nagasaki.daily_confirmed_count == [0, 4, 0, 0, 0, 0, 0]


def test_newly_and_yesterday():
    rows = [
        {"date": "2020-02-08", "dpConfirmed": "5"},
        {"date": "2020-02-09", "dpConfirmed": "7", "dpDeceased": "1"},
        {"date": "2020-02-10", "dpConfirmed": "10", "dpDeceased": "3"},
    ]

    dp = generate_cruise_ship_region_summary(rows, today=TODAY, start_date=START)[
        DIAMOND_PRINCESS.name
    ]

    assert dp.daily_deceased_count == [0, 0, 0, 0, 0, 1, 2]
    assert dp.newly_confirmed == 3  # noqa: PLR2004
    assert dp.yesterday_confirmed == 2  # noqa: PLR2004
    # Ships report the day before's deaths as newly deceased
    assert dp.newly_deceased == 1
    assert dp.yesterday_deceased == 0


def test_names_and_order():
    res = generate_cruise_ship_region_summary([], today=TODAY, start_date=START)

    assert list(res) == ["Diamond Princess Cruise Ship", "Nagasaki Cruise Ship"]
    assert res["Nagasaki Cruise Ship"].name_ja == "長崎のクルーズ船"
    for summary in res.values():
        assert summary.daily_confirmed_count == [0] * 7
        assert summary.confirmed == 0


def test_today_before_start():
    res = generate_cruise_ship_region_summary(
        [], today=dt.date(2020, 1, 1), start_date=START
    )

    dp = res[DIAMOND_PRINCESS.name]
    assert dp.daily_confirmed_count == []
    assert dp.daily_confirmed_start_date is None
    assert dp.newly_confirmed == 0


def test_custom_ship():
    ship = CruiseShip(key_prefix="ws", name="Westerdam", name_ja="ウエステルダム")

    res = generate_cruise_ship_region_summary(
        [{"date": "2020-02-04", "wsConfirmed": "1"}],
        today=TODAY,
        start_date=START,
        ships=[ship],
    )

    assert list(res) == ["Westerdam"]
    assert res["Westerdam"].confirmed == 1


@pytest.mark.parametrize(
    "rows_by_date, exp",
    (
        pytest.param({}, [0, 0, 0], id="no-rows"),
        pytest.param({"d1": {"c": "3"}, "d2": {"c": "5"}}, [0, 3, 2], id="rows"),
        pytest.param({"d1": {"c": "3"}, "d2": {"c": "1"}}, [0, 3, -2], id="decrease"),
        pytest.param({"d1": {"c": "3"}, "d2": {"other": "9"}}, [0, 3, 0], id="absent"),
    ),
)
def test_get_daily_increments(rows_by_date, exp):
    assert get_daily_increments(rows_by_date, "c", ["d0", "d1", "d2"]) == exp
