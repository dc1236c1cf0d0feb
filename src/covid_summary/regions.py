"""
Per-region summary

Totals per region come from the patient ledger,
the recovered totals and localized names from the manual spreadsheet.
The cruise ships are added as pseudo-regions
(see [covid_summary.cruise][]).

While aggregating, each region's patients are kept in a working frame
(the groups of the ledger).
Only the [RegionSummary][covid_summary.region_summary.RegionSummary]
records leave this module.
"""

from __future__ import annotations

import datetime as dt
import logging
import re
from collections.abc import Collection, Iterable
from typing import Any

import pandas as pd

from covid_summary.cruise import (
    CRUISE_START_DATE,
    DEFAULT_CRUISE_SHIPS,
    CruiseShip,
    generate_cruise_ship_region_summary,
)
from covid_summary.dates import DATE_FORMAT, get_day_index, to_date
from covid_summary.parsing import (
    as_patient_frame,
    ensure_records,
    is_deceased,
    is_present,
    safe_parse_int,
)
from covid_summary.region_names import PREFECTURES
from covid_summary.region_summary import RegionSummary
from covid_summary.typing import CruiseCountRow, ManualRegionRow, PatientRecord

logger = logging.getLogger(__name__)

REGION_START_DATE = "2020-01-08"
"""
First day of every region's daily vectors
"""

CRUISE_PASSENGER_DISEMBARKED = re.compile(r"^Cruise Disembarked Passenger")
"""
Pattern of the cluster tag given to passengers who disembarked from a cruise ship
"""


def is_cruise_passenger(known_cluster: str | None) -> bool:
    """
    Check whether a cluster tag marks a disembarked cruise passenger
    """
    if not isinstance(known_cluster, str):
        return False

    return CRUISE_PASSENGER_DISEMBARKED.match(known_cluster) is not None


def daily_stats_for_region(
    patients: pd.DataFrame | Iterable[PatientRecord],
    start_date: str | dt.date,
    today: dt.date,
) -> dict[str, list[int]]:
    """
    Count a region's confirmed and deceased patients for every day

    Parameters
    ----------
    patients
        The region's patients

    start_date
        First day

    today
        Last day (inclusive)

    Returns
    -------
    :
        `confirmed` and `deaths` vectors of equal length,
        index 0 being `start_date`
    """
    patients_df = as_patient_frame(patients)
    days = get_day_index(start_date, today)

    confirmed = (
        patients_df.loc[patients_df["confirmed"], "date_announced"]
        .value_counts()
        .reindex(days, fill_value=0)
    )
    deaths = (
        patients_df.loc[is_deceased(patients_df), "deceased_date"]
        .value_counts()
        .reindex(days, fill_value=0)
    )

    return {
        "confirmed": [int(v) for v in confirmed],
        "deaths": [int(v) for v in deaths],
    }


def summarise_region_patients(name: str, patients: pd.DataFrame) -> RegionSummary:
    """
    Total up a single region's patients

    Parameters
    ----------
    name
        Region key, used verbatim

    patients
        The region's patients (normalised)

    Returns
    -------
    :
        Summary with the totals and per-city counts filled
    """
    confirmed = patients.loc[patients["confirmed"]]
    confirmed_by_city = confirmed.groupby("city", sort=False).size()

    return RegionSummary(
        name=name,
        confirmed=len(confirmed),
        deceased=int(is_deceased(patients).sum()),
        cruise_passenger=int(confirmed["known_cluster"].map(is_cruise_passenger).sum()),
        confirmed_by_city={str(k): int(v) for k, v in confirmed_by_city.items()},
    )


def add_daily_stats(
    summary: RegionSummary,
    patients: pd.DataFrame,
    start_date: str | dt.date,
    today: dt.date,
) -> None:
    """
    Fill a region's daily vectors and the newly/yesterday scalars

    Parameters
    ----------
    summary
        Summary to update in place

    patients
        The region's patients (normalised)

    start_date
        First day of the vectors

    today
        Last day of the vectors
    """
    daily = daily_stats_for_region(patients, start_date=start_date, today=today)
    start = to_date(start_date).strftime(DATE_FORMAT)

    if daily["confirmed"]:
        summary.daily_confirmed_count = daily["confirmed"]
        summary.daily_confirmed_start_date = start
        summary.newly_confirmed = daily["confirmed"][-1]
        if len(daily["confirmed"]) > 2:  # noqa: PLR2004
            summary.yesterday_confirmed = daily["confirmed"][-2]

    if daily["deaths"]:
        summary.daily_deceased_count = daily["deaths"]
        summary.daily_deceased_start_date = start
        summary.newly_deceased = daily["deaths"][-1]
        if len(daily["deaths"]) > 2:  # noqa: PLR2004
            summary.yesterday_deceased = daily["deaths"][-2]


def merge_manual_region_data(
    summaries: dict[str, RegionSummary], manual_rows: Iterable[ManualRegionRow]
) -> None:
    """
    Apply the manually curated recovered totals and localized names

    Rows for regions which are not in `summaries` are dropped.

    Parameters
    ----------
    summaries
        Summaries to update in place, keyed by region

    manual_rows
        Rows of the manual per-region spreadsheet
    """
    for row in manual_rows:
        summary = summaries.get(row.get("prefecture"))  # type: ignore[arg-type]
        if summary is None:
            continue

        summary.recovered = safe_parse_int(row.get("recovered"))
        name_ja = row.get("prefectureJa")
        summary.name_ja = str(name_ja) if is_present(name_ja) else None


def sort_region_summaries(
    summaries: Iterable[RegionSummary],
) -> list[RegionSummary]:
    """
    Sort by confirmed count, descending

    Regions with equal counts keep their insertion order.

    Parameters
    ----------
    summaries
        Summaries, in insertion order

    Returns
    -------
    :
        Sorted summaries
    """
    # sorted is stable with reverse=True too, so ties keep insertion order
    return sorted(summaries, key=lambda s: s.confirmed, reverse=True)


def generate_region_summary(  # noqa: PLR0913
    patients: Iterable[PatientRecord] | pd.DataFrame,
    manual_region_rows: Iterable[ManualRegionRow] | None,
    cruise_rows: Iterable[CruiseCountRow] | None,
    today: dt.date,
    region_names: Collection[str] = PREFECTURES,
    start_date: str | dt.date = REGION_START_DATE,
    cruise_start_date: str | dt.date = CRUISE_START_DATE,
    ships: Iterable[CruiseShip] = DEFAULT_CRUISE_SHIPS,
) -> list[dict[str, Any]]:
    """
    Generate the per-region summary

    Parameters
    ----------
    patients
        Patient ledger (or the normalised frame of it)

    manual_region_rows
        Rows of the manual per-region spreadsheet

    cruise_rows
        Cruise-ship cumulative counts.
        If `None`, no cruise ship regions are added.

    today
        Last day of the daily vectors

    region_names
        Canonical names of the real regions.
        Every other region is flagged as a pseudo-region.

    start_date
        First day of the regions' daily vectors

    cruise_start_date
        First day of the cruise ships' daily vectors

    ships
        Cruise ships to add as pseudo-regions

    Returns
    -------
    :
        One record per region, sorted by confirmed count (descending)
    """
    patients_df = as_patient_frame(patients)
    manual_region_rows = ensure_records(
        manual_region_rows, name="manual_region_rows", allow_none=True
    )

    summaries: dict[str, RegionSummary] = {}
    for name, region_patients in patients_df.groupby("region", sort=False):
        summary = summarise_region_patients(str(name), region_patients)
        add_daily_stats(summary, region_patients, start_date=start_date, today=today)
        summaries[summary.name] = summary

    merge_manual_region_data(summaries, manual_region_rows)

    if cruise_rows is not None:
        # Overwrites any region of the same name, keeping its position
        summaries.update(
            generate_cruise_ship_region_summary(
                cruise_rows, today=today, start_date=cruise_start_date, ships=ships
            )
        )

    known_regions = set(region_names)
    for summary in summaries.values():
        summary.pseudo_prefecture = summary.name not in known_regions

    logger.debug("Generated region summary with %d regions", len(summaries))

    return [s.to_record() for s in sort_region_summaries(summaries.values())]
