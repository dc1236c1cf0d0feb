"""
Useful assertions
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from covid_summary.exceptions import NotConsistentError


def assert_daily_summary_is_consistent(entries: Sequence[dict[str, Any]]) -> None:
    """
    Assert that the daily summary is internally consistent

    Checks that the dates are strictly increasing
    and that `activeCumulative` equals
    `confirmedCumulative - deceasedCumulative - recoveredCumulative`.

    Parameters
    ----------
    entries
        Daily summary entries

    Raises
    ------
    NotConsistentError
        One of the checks fails
    """
    dates = [e["date"] for e in entries]
    out_of_order = [
        (previous, current)
        for previous, current in zip(dates, dates[1:])
        if current <= previous
    ]
    if out_of_order:
        raise NotConsistentError("Dates are not strictly increasing", out_of_order)

    wrong_active = [
        e["date"]
        for e in entries
        if e["activeCumulative"]
        != e["confirmedCumulative"] - e["deceasedCumulative"] - e["recoveredCumulative"]
    ]
    if wrong_active:
        raise NotConsistentError(
            "activeCumulative does not equal "
            "confirmedCumulative - deceasedCumulative - recoveredCumulative",
            wrong_active,
        )


def assert_region_summary_is_sorted(entries: Sequence[dict[str, Any]]) -> None:
    """
    Assert that the region summary is sorted by confirmed count, descending

    Parameters
    ----------
    entries
        Region summary entries

    Raises
    ------
    NotConsistentError
        The entries are not sorted
    """
    out_of_order = [
        (previous["name"], current["name"])
        for previous, current in zip(entries, entries[1:])
        if current["confirmed"] > previous["confirmed"]
    ]
    if out_of_order:
        raise NotConsistentError(
            "Regions are not sorted by confirmed count", out_of_order
        )
