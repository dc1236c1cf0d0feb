"""
Nationwide daily summary

The patient ledger is authoritative for which days exist
and for the confirmed and deceased counts.
The manual spreadsheet supplies cumulative recovered, critical and tested totals,
the cruise-ship sheet supplies cumulative cruise totals.
Everything else (cumulatives, increments, active, rolling averages)
is derived from those, in date order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Callable

import numpy as np
import pandas as pd

from covid_summary.cruise import CRUISE_METRICS, DEFAULT_CRUISE_SHIPS, CruiseShip
from covid_summary.parsing import (
    as_patient_frame,
    ensure_records,
    is_deceased,
    is_present,
    safe_parse_int,
)
from covid_summary.policies import (
    MissingPolicy,
    forward_fill_cumulative,
    zero_means_missing,
)
from covid_summary.typing import (
    CruiseCountRow,
    DailySummaryFrame,
    ManualDailyRow,
    PatientRecord,
)
from covid_summary.verification import verify_daily_summary

logger = logging.getLogger(__name__)

DAILY_SUMMARY_COLUMNS: tuple[str, ...] = (
    "confirmed",
    "confirmedCumulative",
    "deceased",
    "deceasedCumulative",
    "recovered",
    "recoveredCumulative",
    "critical",
    "criticalCumulative",
    "tested",
    "testedCumulative",
    "active",
    "activeCumulative",
    "cruiseConfirmedCumulative",
    "cruiseDeceasedCumulative",
    "cruiseRecoveredCumulative",
    "cruiseTestedCumulative",
    "cruiseCriticalCumulative",
)
"""
Columns of a freshly created daily summary, all starting at zero
"""

MANUAL_DAILY_COLUMNS: dict[str, str] = {
    "recovered": "recoveredCumulative",
    "critical": "criticalCumulative",
    "tested": "testedCumulative",
}
"""
Map from manual spreadsheet keys to the cumulative columns they override
"""

CRUISE_DAILY_COLUMNS: dict[str, str] = {
    metric: f"cruise{metric}Cumulative" for metric in CRUISE_METRICS
}
"""
Map from cruise metric to the cumulative column holding the sum over all ships
"""

FORWARD_FILLED_COLUMNS: tuple[str, ...] = (
    "recoveredCumulative",
    "deceasedCumulative",
    "criticalCumulative",
    "testedCumulative",
    "cruiseConfirmedCumulative",
    "cruiseDeceasedCumulative",
    "cruiseCriticalCumulative",
    "cruiseTestedCumulative",
    "cruiseRecoveredCumulative",
)
"""
Cumulative columns which are carried forward over days with no value
"""

INCREMENTAL_COLUMNS: dict[str, str] = {
    "tested": "testedCumulative",
    "recovered": "recoveredCumulative",
    "critical": "criticalCumulative",
    "active": "activeCumulative",
}
"""
Map from incremental column to the cumulative column it is derived from
"""

ROLLING_AVERAGE_WINDOWS: dict[str, int] = {"3d": 3, "7d": 7}
"""
Rolling average windows over `confirmed`, keyed by column suffix
"""

DailySummaryVerifier = Callable[[list[dict[str, Any]]], list[dict[str, Any]]]
"""
Post-processing step which may adjust or flag the finished daily summary
"""


def count_daily_events(patients: pd.DataFrame) -> DailySummaryFrame:
    """
    Count confirmed and deceased patients per day

    Patients without an announcement date are skipped entirely.
    Deceased patients without a deceased date are not counted.
    A day only appears in the output if at least one patient was counted on it.

    Parameters
    ----------
    patients
        Normalised patient frame

    Returns
    -------
    :
        Daily summary skeleton, sorted by date,
        with every column of [DAILY_SUMMARY_COLUMNS][(m).]
        (zero except `confirmed` and `deceased`)
    """
    announced = patients.loc[patients["date_announced"].notna()]

    confirmed = announced.loc[announced["confirmed"], "date_announced"].value_counts()
    deceased = announced.loc[
        is_deceased(announced) & announced["deceased_date"].notna(), "deceased_date"
    ].value_counts()

    dates = pd.Index(
        sorted(set(confirmed.index).union(deceased.index)), name="date", dtype=object
    )
    res = pd.DataFrame(0, index=dates, columns=list(DAILY_SUMMARY_COLUMNS), dtype=int)
    res["confirmed"] = confirmed.reindex(dates, fill_value=0).astype(int)
    res["deceased"] = deceased.reindex(dates, fill_value=0).astype(int)

    return res


def merge_manual_daily_data(
    daily: DailySummaryFrame, manual_rows: Iterable[ManualDailyRow]
) -> DailySummaryFrame:
    """
    Overwrite cumulative totals with the manually curated values

    Rows for days which are not already in `daily` are dropped.
    When several rows share a day, the last one wins.

    Parameters
    ----------
    daily
        Daily summary

    manual_rows
        Rows of the manual daily spreadsheet

    Returns
    -------
    :
        Copy of `daily` with the overrides applied
    """
    res = daily.copy()
    n_dropped = 0
    for row in manual_rows:
        date = row.get("date")
        if not is_present(date) or str(date) not in res.index:
            n_dropped += 1
            continue

        for key, column in MANUAL_DAILY_COLUMNS.items():
            res.loc[str(date), column] = safe_parse_int(row.get(key))

    if n_dropped:
        logger.debug("Dropped %d manual daily rows with no matching day", n_dropped)

    return res


def merge_cruise_daily_data(
    daily: DailySummaryFrame,
    cruise_rows: Iterable[CruiseCountRow],
    ships: Iterable[CruiseShip] = DEFAULT_CRUISE_SHIPS,
) -> DailySummaryFrame:
    """
    Overwrite the cruise cumulative totals with the sum over all ships

    Rows for days which are not already in `daily` are dropped.

    Parameters
    ----------
    daily
        Daily summary

    cruise_rows
        Cruise-ship cumulative counts

    ships
        Ships whose counts are summed

    Returns
    -------
    :
        Copy of `daily` with the cruise totals applied
    """
    res = daily.copy()
    ships = tuple(ships)
    for row in cruise_rows:
        date = row.get("date")
        if not is_present(date) or str(date) not in res.index:
            continue

        for metric, column in CRUISE_DAILY_COLUMNS.items():
            res.loc[str(date), column] = sum(
                safe_parse_int(row.get(ship.column(metric))) for ship in ships
            )

    return res


def add_running_totals(daily: DailySummaryFrame) -> DailySummaryFrame:
    """
    Accumulate `confirmed` and `deceased` into their cumulative columns

    Parameters
    ----------
    daily
        Daily summary, sorted by date

    Returns
    -------
    :
        Copy of `daily` with `confirmedCumulative` and `deceasedCumulative` set
    """
    res = daily.copy()
    res["confirmedCumulative"] = res["confirmed"].cumsum()
    res["deceasedCumulative"] = res["deceased"].cumsum()

    return res


def add_active(daily: DailySummaryFrame) -> DailySummaryFrame:
    """
    Calculate the cumulative active count

    This must happen after forward-filling,
    so that carried-forward recovered and deceased totals are used.

    Parameters
    ----------
    daily
        Daily summary

    Returns
    -------
    :
        Copy of `daily` with `activeCumulative` set
    """
    res = daily.copy()
    res["activeCumulative"] = (
        res["confirmedCumulative"]
        - res["deceasedCumulative"]
        - res["recoveredCumulative"]
    )

    return res


def add_incrementals(daily: DailySummaryFrame) -> DailySummaryFrame:
    """
    Derive daily increments from cumulative totals

    The day before the first day is treated as zero.

    Parameters
    ----------
    daily
        Daily summary, sorted by date

    Returns
    -------
    :
        Copy of `daily` with the columns in [INCREMENTAL_COLUMNS][(m).] set
    """
    res = daily.copy()
    for column, cumulative_column in INCREMENTAL_COLUMNS.items():
        cumulative = res[cumulative_column]
        res[column] = cumulative.diff().fillna(cumulative).astype(int)

    return res


def add_rolling_averages(
    daily: DailySummaryFrame, windows: Mapping[str, int] = ROLLING_AVERAGE_WINDOWS
) -> DailySummaryFrame:
    """
    Add rolling averages of `confirmed` and their running totals

    The average is the floor of the window sum divided by the window size.
    At the start of the series the window is not yet full,
    but we still divide by the full window size.

    Parameters
    ----------
    daily
        Daily summary, sorted by date

    windows
        Window sizes, keyed by column suffix

    Returns
    -------
    :
        Copy of `daily` with `confirmedAvg{suffix}`
        and `confirmedCumulativeAvg{suffix}` columns added
    """
    res = daily.copy()
    for suffix, window in windows.items():
        window_sum = res["confirmed"].rolling(window, min_periods=1).sum()
        average = (window_sum // window).astype(int)
        res[f"confirmedAvg{suffix}"] = average
        res[f"confirmedCumulativeAvg{suffix}"] = average.cumsum()

    return res


def _to_native(value: Any) -> Any:
    if isinstance(value, np.integer):
        return int(value)

    return value


def daily_summary_to_records(daily: DailySummaryFrame) -> list[dict[str, Any]]:
    """
    Convert the daily summary into JSON-ready records

    Each record carries its `date`.
    Every record except the first also carries `deaths`,
    a legacy alias of `deceased` kept for older consumers.

    Parameters
    ----------
    daily
        Daily summary, sorted by date

    Returns
    -------
    :
        One record per day, in date order
    """
    records = [
        {"date": date, **{k: _to_native(v) for k, v in row.items()}}
        for date, row in zip(daily.index, daily.to_dict(orient="records"))
    ]
    # Legacy alias, slated for removal once consumers move to `deceased`
    for record in records[1:]:
        record["deaths"] = record["deceased"]

    return records


def generate_daily_summary(  # noqa: PLR0913
    patients: Iterable[PatientRecord] | pd.DataFrame,
    manual_daily_rows: Iterable[ManualDailyRow] | None,
    cruise_rows: Iterable[CruiseCountRow] | None,
    ships: Iterable[CruiseShip] = DEFAULT_CRUISE_SHIPS,
    is_missing: MissingPolicy = zero_means_missing,
    verify: DailySummaryVerifier | None = verify_daily_summary,
) -> list[dict[str, Any]]:
    """
    Generate the nationwide daily summary

    Parameters
    ----------
    patients
        Patient ledger (or the normalised frame of it)

    manual_daily_rows
        Rows of the manual daily spreadsheet

    cruise_rows
        Cruise-ship cumulative counts.
        If `None`, no cruise totals are merged.

    ships
        Ships whose counts are summed into the cruise totals

    is_missing
        Policy deciding which cumulative values are carried forward over

    verify
        Post-processing step applied to the finished records.
        If `None`, the records are returned as is.

    Returns
    -------
    :
        One record per day with any contributing data, in date order
    """
    patients_df = as_patient_frame(patients)
    manual_daily_rows = ensure_records(
        manual_daily_rows, name="manual_daily_rows", allow_none=True
    )
    cruise_rows = ensure_records(cruise_rows, name="cruise_rows", allow_none=True)

    daily = count_daily_events(patients_df)
    daily = merge_manual_daily_data(daily, manual_daily_rows)
    daily = merge_cruise_daily_data(daily, cruise_rows, ships=ships)
    daily = daily.sort_index()

    daily = add_running_totals(daily)
    daily = forward_fill_cumulative(
        daily, FORWARD_FILLED_COLUMNS, is_missing=is_missing
    )
    daily = add_active(daily)
    daily = add_incrementals(daily)
    daily = add_rolling_averages(daily)

    records = daily_summary_to_records(daily)
    logger.debug("Generated daily summary with %d days", len(records))

    if verify is not None:
        records = verify(records)

    return records
