"""
Day-range helpers

"Now" is always passed in explicitly.
Capture it once per aggregation run (see [get_today][(m).])
so that every day range in that run ends on the same day.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterator

import pandas as pd

DATE_FORMAT = "%Y-%m-%d"
"""
Format of the date keys used in every input and output
"""

JST_UTC_OFFSET_HOURS = 9
"""
Offset of Japan Standard Time from UTC
"""


def get_today(
    utc_offset_hours: float = JST_UTC_OFFSET_HOURS,
    now: dt.datetime | None = None,
) -> dt.date:
    """
    Get today's date in a fixed UTC offset

    Parameters
    ----------
    utc_offset_hours
        Offset from UTC in which "today" is evaluated

    now
        Current time.
        If not supplied, the wall clock is used.
        Naive datetimes are assumed to be in UTC.

    Returns
    -------
    :
        Today's date in the given offset
    """
    tz = dt.timezone(dt.timedelta(hours=utc_offset_hours))
    if now is None:
        now = dt.datetime.now(tz=dt.timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=dt.timezone.utc)

    return now.astimezone(tz).date()


def to_date(value: str | dt.date) -> dt.date:
    """
    Convert an ISO date string (or date) to a date
    """
    if isinstance(value, dt.datetime):
        return value.date()

    if isinstance(value, dt.date):
        return value

    return dt.datetime.strptime(value, DATE_FORMAT).date()


def iter_days(start: str | dt.date, end: str | dt.date) -> Iterator[str]:
    """
    Iterate over every day from `start` to `end` inclusive

    Parameters
    ----------
    start
        First day

    end
        Last day.
        If this is before `start`, nothing is yielded.

    Yields
    ------
    :
        Each day as an ISO date string
    """
    day = to_date(start)
    last_day = to_date(end)
    while day <= last_day:
        yield day.strftime(DATE_FORMAT)
        day += dt.timedelta(days=1)


def get_day_index(start: str | dt.date, end: str | dt.date) -> pd.Index:
    """
    Get an index of every day from `start` to `end` inclusive

    Parameters
    ----------
    start
        First day

    end
        Last day

    Returns
    -------
    :
        Index of ISO date strings, named `date`
    """
    return pd.Index(list(iter_days(start, end)), name="date", dtype=object)
