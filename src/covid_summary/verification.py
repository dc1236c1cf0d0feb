"""
Verification of the finished daily summary

This is the default post-processing step of the daily summary.
It flags suspicious days (via logging) and returns the entries unchanged.
Callers can swap in their own step,
which may also correct entries.
"""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)

NON_DECREASING_COLUMNS: tuple[str, ...] = (
    "confirmedCumulative",
    "deceasedCumulative",
    "recoveredCumulative",
    "testedCumulative",
)
"""
Cumulative columns which should never go down under correct input
"""


def find_decreasing_cumulatives(
    entries: list[dict[str, Any]],
    columns: tuple[str, ...] = NON_DECREASING_COLUMNS,
) -> list[tuple[str, str, int, int]]:
    """
    Find the days on which a cumulative column went down

    Parameters
    ----------
    entries
        Daily summary entries, in date order

    columns
        Columns to check

    Returns
    -------
    :
        `(date, column, previous value, value)` for each decrease
    """
    res = []
    for previous, current in zip(entries, entries[1:]):
        for column in columns:
            if current[column] < previous[column]:
                res.append(
                    (current["date"], column, previous[column], current[column])
                )

    return res


def verify_daily_summary(entries: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """
    Flag suspicious days in the daily summary

    Parameters
    ----------
    entries
        Daily summary entries, in date order

    Returns
    -------
    :
        `entries`, unchanged
    """
    for date, column, previous, value in find_decreasing_cumulatives(entries):
        logger.warning(
            "%s went down on %s (%d -> %d), check the manual data",
            column,
            date,
            previous,
            value,
        )

    return entries
