"""
Tests of `covid_summary.policies`
"""

from __future__ import annotations

import pandas as pd
import pytest

from covid_summary.policies import forward_fill_cumulative, zero_means_missing


@pytest.fixture
def cumulative():
    return pd.DataFrame(
        {
            "recoveredCumulative": [0, 3, 0, 0, 5, 0],
            "testedCumulative": [10, 0, 20, 0, 0, 30],
            "untouched": [0, 1, 0, 2, 0, 3],
        },
        index=pd.Index(
            [f"2020-03-0{i}" for i in range(1, 7)], name="date", dtype=object
        ),
    )


def test_forward_fill_cumulative(cumulative):
    res = forward_fill_cumulative(
        cumulative, ["recoveredCumulative", "testedCumulative"]
    )

    assert res["recoveredCumulative"].tolist() == [0, 3, 3, 3, 5, 5]
    assert res["testedCumulative"].tolist() == [10, 10, 20, 20, 20, 30]
    assert res["untouched"].tolist() == [0, 1, 0, 2, 0, 3]
    assert res["recoveredCumulative"].dtype == cumulative["recoveredCumulative"].dtype
    # Input is not modified
    assert cumulative["recoveredCumulative"].tolist() == [0, 3, 0, 0, 5, 0]


def test_forward_fill_cumulative_is_idempotent(cumulative):
    columns = ["recoveredCumulative", "testedCumulative"]
    once = forward_fill_cumulative(cumulative, columns)
    twice = forward_fill_cumulative(once, columns)

    pd.testing.assert_frame_equal(once, twice)


def test_forward_fill_cumulative_first_row_never_missing():
    df = pd.DataFrame({"testedCumulative": [0, 0, 4]})

    res = forward_fill_cumulative(df, ["testedCumulative"])

    assert res["testedCumulative"].tolist() == [0, 0, 4]


def test_forward_fill_cumulative_custom_policy(cumulative):
    res = forward_fill_cumulative(
        cumulative,
        ["testedCumulative"],
        is_missing=lambda s: s == 20,  # noqa: PLR2004
    )

    assert res["testedCumulative"].tolist() == [10, 0, 0, 0, 0, 30]


def test_forward_fill_cumulative_empty():
    df = pd.DataFrame({"testedCumulative": pd.Series([], dtype=int)})

    res = forward_fill_cumulative(df, ["testedCumulative"])

    assert res.empty


def test_zero_means_missing():
    assert zero_means_missing(pd.Series([0, 1, 0])).tolist() == [True, False, True]
