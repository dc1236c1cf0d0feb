"""
Integration tests of `covid_summary.summarise`
"""

from __future__ import annotations

import datetime as dt
import json

import numpy as np
import pandas as pd
import pytest

from covid_summary.exceptions import InputContractError, NotConsistentError
from covid_summary.summarise import Summariser, summarise
from covid_summary.testing import TESTING_NOW, make_patient


@pytest.fixture
def patients():
    return [
        make_patient(date_announced="2020-03-02", region="Osaka", city="Osaka"),
        make_patient(date_announced="2020-03-01", region="Tokyo", city="Shinjuku"),
        make_patient(
            date_announced="2020-03-01",
            region="Tokyo",
            deceased_date="2020-03-03",
            known_cluster="Cruise Disembarked Passenger",
        ),
        make_patient(date_announced="2020-03-03", region="Unspecified"),
        make_patient(date_announced="2020-03-03", region="Tokyo", confirmed=False),
        make_patient(date_announced="2020-03-04", region="Osaka"),
    ]


@pytest.fixture
def manual_daily_rows():
    return [
        {"date": "2020-03-01", "recovered": "0", "critical": "1", "tested": "50"},
        {"date": "2020-03-03", "recovered": "1", "critical": "", "tested": "80"},
    ]


@pytest.fixture
def manual_region_rows():
    return [
        {"prefecture": "Tokyo", "recovered": "1", "prefectureJa": "東京"},
        {"prefecture": "Osaka", "recovered": "", "prefectureJa": "大阪"},
    ]


@pytest.fixture
def cruise_rows():
    return [
        {"date": "2020-03-01", "dpConfirmed": "700", "nagasakiConfirmed": ""},
        {"date": "2020-03-04", "dpConfirmed": "705", "nagasakiConfirmed": "10"},
    ]


def test_summarise(patients, manual_daily_rows, manual_region_rows, cruise_rows):
    res = summarise(
        patients,
        manual_daily_rows,
        manual_region_rows,
        cruise_rows,
        last_updated="2020-03-05T12:00:00+09:00",
        now=TESTING_NOW,
    )

    assert set(res) == {"regions", "daily", "updated"}
    assert res["updated"] == "2020-03-05T12:00:00+09:00"
    # JSON-ready
    json.dumps(res, allow_nan=False)

    regions = {r["name"]: r for r in res["regions"]}
    assert [r["name"] for r in res["regions"]] == [
        "Diamond Princess Cruise Ship",
        "Nagasaki Cruise Ship",
        "Tokyo",
        "Osaka",
        "Unspecified",
    ]
    assert regions["Tokyo"]["confirmed"] == 2  # noqa: PLR2004
    assert regions["Tokyo"]["deceased"] == 1
    assert regions["Tokyo"]["recovered"] == 1
    assert regions["Tokyo"]["cruisePassenger"] == 1
    assert regions["Tokyo"]["name_ja"] == "東京"
    assert regions["Osaka"]["name_ja"] == "大阪"
    assert regions["Osaka"]["recovered"] == 0
    assert regions["Unspecified"]["pseudoPrefecture"] is True
    assert regions["Tokyo"]["pseudoPrefecture"] is False
    # 2020-01-08 to 2020-03-05
    assert len(regions["Tokyo"]["dailyConfirmedCount"]) == 58  # noqa: PLR2004
    # 2020-02-04 to 2020-03-05
    dp_counts = regions["Diamond Princess Cruise Ship"]["dailyConfirmedCount"]
    assert len(dp_counts) == 31  # noqa: PLR2004
    assert dp_counts[-5] == 700  # noqa: PLR2004
    assert dp_counts[-2] == 5  # noqa: PLR2004

    daily = {d["date"]: d for d in res["daily"]}
    assert list(daily) == ["2020-03-01", "2020-03-02", "2020-03-03", "2020-03-04"]
    assert [d["confirmedCumulative"] for d in daily.values()] == [2, 3, 4, 5]
    assert [d["testedCumulative"] for d in daily.values()] == [50, 50, 80, 80]
    assert [d["criticalCumulative"] for d in daily.values()] == [1, 1, 1, 1]
    assert [d["recoveredCumulative"] for d in daily.values()] == [0, 0, 1, 1]
    assert [d["deceasedCumulative"] for d in daily.values()] == [0, 0, 1, 1]
    assert [d["activeCumulative"] for d in daily.values()] == [2, 3, 2, 3]
    assert [d["cruiseConfirmedCumulative"] for d in daily.values()] == [
        700,
        700,
        700,
        715,
    ]


def test_data_frame_inputs(
    patients, manual_daily_rows, manual_region_rows, cruise_rows
):
    exp = Summariser()(
        patients,
        manual_daily_rows,
        manual_region_rows,
        cruise_rows,
        last_updated="",
        now=TESTING_NOW,
    )

    res = Summariser()(
        pd.DataFrame(patients),
        pd.DataFrame(manual_daily_rows),
        pd.DataFrame(manual_region_rows),
        pd.DataFrame(cruise_rows),
        last_updated="",
        now=TESTING_NOW,
    )

    assert res == exp


def test_data_frame_with_blank_cells_is_json_ready(patients):
    manual_region_rows = pd.DataFrame(
        [
            {"prefecture": "Tokyo", "recovered": np.nan, "prefectureJa": np.nan},
            {"prefecture": "Osaka", "recovered": "2", "prefectureJa": "大阪"},
        ]
    )
    cruise_rows = pd.DataFrame(
        [
            {"date": "2020-03-01", "dpConfirmed": "5", "nagasakiConfirmed": np.nan},
            {"date": "2020-03-02", "dpConfirmed": np.nan, "nagasakiConfirmed": "1"},
        ]
    )

    res = Summariser()(
        patients, [], manual_region_rows, cruise_rows, "", now=TESTING_NOW
    ).to_dict()

    json.dumps(res, allow_nan=False)
    regions = {r["name"]: r for r in res["regions"]}
    assert "name_ja" not in regions["Tokyo"]
    assert regions["Tokyo"]["recovered"] == 0
    assert regions["Osaka"]["name_ja"] == "大阪"
    assert regions["Diamond Princess Cruise Ship"]["confirmed"] == 0
    assert regions["Nagasaki Cruise Ship"]["confirmed"] == 1


def test_without_cruise_rows(patients):
    res = Summariser()(patients, [], [], None, last_updated="", now=TESTING_NOW)

    assert "Diamond Princess Cruise Ship" not in {r["name"] for r in res.regions}
    assert all(d["cruiseConfirmedCumulative"] == 0 for d in res.daily)


def test_empty_inputs():
    res = Summariser()([], [], [], None, last_updated="never", now=TESTING_NOW)

    assert res.to_dict() == {"regions": [], "daily": [], "updated": "never"}


def test_empty_cruise_rows_still_synthesise_ships():
    res = Summariser()([], [], [], [], last_updated="", now=TESTING_NOW)

    assert [r["name"] for r in res.regions] == [
        "Diamond Princess Cruise Ship",
        "Nagasaki Cruise Ship",
    ]
    assert res.daily == []


def test_now_is_in_configured_offset(patients):
    now = dt.datetime(2020, 3, 4, 20, 0, tzinfo=dt.timezone.utc)

    jst = Summariser()(patients, [], [], None, last_updated="", now=now)
    utc = Summariser(utc_offset_hours=0)(
        patients, [], [], None, last_updated="", now=now
    )

    jst_tokyo = next(r for r in jst.regions if r["name"] == "Tokyo")
    utc_tokyo = next(r for r in utc.regions if r["name"] == "Tokyo")
    assert len(jst_tokyo["dailyConfirmedCount"]) == (
        len(utc_tokyo["dailyConfirmedCount"]) + 1
    )


def test_custom_configuration(patients):
    summariser = Summariser(
        region_names=["Tokyo", "Osaka", "Unspecified"],
        region_start_date="2020-03-01",
        verify=None,
    )

    res = summariser(patients, [], [], None, last_updated="", now=TESTING_NOW)

    assert not any(r["pseudoPrefecture"] for r in res.regions)
    assert all(len(r["dailyConfirmedCount"]) == 5 for r in res.regions)  # noqa: PLR2004


def test_run_checks_catches_bad_verify(patients):
    def reverse(entries):
        return entries[::-1]

    with pytest.raises(NotConsistentError):
        Summariser(verify=reverse)(patients, [], [], None, "", now=TESTING_NOW)

    res = Summariser(verify=reverse, run_checks=False)(
        patients, [], [], None, "", now=TESTING_NOW
    )
    assert res.daily[0]["date"] == "2020-03-04"


@pytest.mark.parametrize(
    "kwargs, error",
    (
        pytest.param({"region_start_date": "08/01/2020"}, ValueError, id="bad-date"),
        pytest.param({"cruise_start_date": "yesterday"}, ValueError, id="bad-cruise"),
        pytest.param({"utc_offset_hours": 24}, ValueError, id="bad-offset"),
    ),
)
def test_invalid_configuration(kwargs, error):
    with pytest.raises(error):
        Summariser(**kwargs)


@pytest.mark.parametrize("patients", (None, 12, [1, 2]))
def test_invalid_patients(patients):
    with pytest.raises(InputContractError):
        Summariser()(patients, [], [], None, last_updated="", now=TESTING_NOW)


def test_invalid_manual_rows(patients):
    with pytest.raises(InputContractError):
        Summariser()(patients, "not rows", [], None, last_updated="", now=TESTING_NOW)
